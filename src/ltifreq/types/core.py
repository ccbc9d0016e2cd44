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
Core Types - Fundamental Building Blocks

Defines the basic array types used throughout the frequency-domain layer:
- Multi-backend array types (NumPy, PyTorch, JAX)
- State-space matrix types (A, B, C, D)
- Frequency-domain arrays (frequency vectors, response tensors)

Design Philosophy
----------------
- **Backend Agnostic**: Inputs may come from NumPy, PyTorch or JAX
- **Semantic Clarity**: Names convey mathematical meaning
- **Type Safety**: Enable static type checking

Usage
-----
>>> from ltifreq.types.core import StateMatrix, FrequencyVector, ResponseTensor
>>>
>>> def response(A: StateMatrix, w: FrequencyVector) -> ResponseTensor:
...     ...
"""

from typing import TYPE_CHECKING, Sequence, Union

import numpy as np

if TYPE_CHECKING:
    import jax.numpy as jnp
    import torch


# ============================================================================
# Basic Array Types - Multi-Backend Support
# ============================================================================

ArrayLike = Union[np.ndarray, "torch.Tensor", "jnp.ndarray"]
"""
Array-like type supporting multiple backends.

Can be NumPy array, PyTorch tensor, or JAX array.
"""

NumpyArray = np.ndarray
"""Pure NumPy array."""

ScalarLike = Union[float, int, complex, np.number]
"""Scalar value, real or complex."""

MatrixLike = Union[ArrayLike, Sequence[Sequence[ScalarLike]], ScalarLike]
"""
Anything accepted as a system matrix.

Scalars are promoted to 1x1 matrices, nested sequences to 2-D arrays.
"""

# ============================================================================
# State-Space Matrices
# ============================================================================

StateMatrix = ArrayLike
"""
State matrix A (nx, nx).

Continuous: dx/dt = Ax + Bu
Discrete:   x[k+1] = Ax[k] + Bu[k]
"""

InputMatrix = ArrayLike
"""Input matrix B (nx, nu)."""

OutputMatrix = ArrayLike
"""Output matrix C (ny, nx)."""

FeedthroughMatrix = ArrayLike
"""Direct feedthrough matrix D (ny, nu)."""

# ============================================================================
# Frequency-Domain Arrays
# ============================================================================

FrequencyVector = NumpyArray
"""
Real frequency axis in rad/s, shape (nw,).

Ordered and non-negative. Caller-supplied or produced by the grid selector.
"""

EvaluationPoints = NumpyArray
"""
Complex evaluation points, shape (nw,).

Continuous: s = iw
Discrete:   z = exp(iwTs)
"""

TransferMatrix = NumpyArray
"""Transfer matrix G(s) at a single point, shape (ny, nu), complex."""

ResponseTensor = ArrayLike
"""
Frequency response tensor, shape (nw, ny, nu), complex.

response[k, i, j] = G_ij(s_k)
"""

MagnitudeTensor = ArrayLike
"""Magnitudes |G(iw)|, shape (nw, ny, nu)."""

PhaseTensor = ArrayLike
"""Unwrapped phase in degrees, shape (nw, ny, nu)."""

SingularValueArray = ArrayLike
"""Singular values per frequency, shape (nw, min(ny, nu)), descending."""

FeatureVector = NumpyArray
"""Complex pole/zero features of a system, shape (nf,)."""

PolynomialCoefficients = NumpyArray
"""Polynomial coefficients in descending powers, shape (deg + 1,)."""
