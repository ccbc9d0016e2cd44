# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Backend Utilities

Detection and conversion helpers between NumPy and the optional PyTorch
and JAX backends. All numerical work in this package happens in NumPy and
SciPy; these helpers move data in and out at the API boundary.
"""

from typing import Any

import numpy as np

from ltifreq.types.backends import VALID_BACKENDS, Backend


def detect_backend(arr: Any) -> str:
    """
    Auto-detect backend from array type.

    Args:
        arr: Array-like object

    Returns:
        Backend name: 'torch', 'numpy', 'jax', or 'unknown'
    """
    # Check PyTorch
    try:
        import torch

        if isinstance(arr, torch.Tensor):
            return "torch"
    except ImportError:
        pass

    # Check JAX
    try:
        import jax.numpy as jnp

        # JAX arrays can be various types depending on version
        if isinstance(arr, jnp.ndarray) or type(arr).__module__.startswith("jax"):
            return "jax"
    except ImportError:
        pass

    if isinstance(arr, np.ndarray):
        return "numpy"

    return "unknown"


def validate_backend(backend: str) -> None:
    """Raise ValueError for an unknown backend name."""
    if backend not in VALID_BACKENDS:
        raise ValueError(
            f"backend must be one of {VALID_BACKENDS}, got '{backend}'",
        )


def to_numpy(arr: Any) -> np.ndarray:
    """
    Convert array to NumPy for scipy operations.

    Args:
        arr: Array in any backend, nested sequence or scalar

    Returns:
        NumPy array
    """
    if isinstance(arr, np.ndarray):
        return arr

    if detect_backend(arr) == "torch":
        return arr.detach().cpu().numpy()
    # JAX arrays, sequences and scalars
    return np.asarray(arr)


def from_numpy(arr: np.ndarray, backend: Backend = "numpy") -> Any:
    """
    Convert NumPy array to the target backend.

    Args:
        arr: NumPy array
        backend: Target backend

    Returns:
        Array in target backend
    """
    validate_backend(backend)
    if backend == "numpy":
        return arr
    if backend == "torch":
        import torch

        return torch.from_numpy(np.ascontiguousarray(arr))
    import jax.numpy as jnp

    return jnp.asarray(arr)
