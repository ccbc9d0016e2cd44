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
Backend and Selection Types

Defines types related to:
- Computational backends (NumPy, PyTorch, JAX)
- Sampling conventions for LTI systems
- Frequency-analysis kinds (Bode, Nyquist, Sigma)

Usage
-----
>>> from ltifreq.types.backends import Backend, PlotType
>>>
>>> def bode(sys, w=None, backend: Backend = 'numpy'):
...     ...
"""

from typing import Literal, Tuple

# ============================================================================
# Backend Types
# ============================================================================

Backend = Literal["numpy", "torch", "jax"]
"""
Backend identifier for returned arrays.

Valid values:
- 'numpy': NumPy arrays (default, all computation happens here)
- 'torch': PyTorch tensors
- 'jax': JAX arrays

Computation is always carried out with NumPy/SciPy; the backend only
selects the array type handed back to the caller.
"""

VALID_BACKENDS: Tuple[str, ...] = ("numpy", "torch", "jax")

# ============================================================================
# Sampling
# ============================================================================

SamplingPeriod = float
"""
Sampling period Ts of an LTI system.

- 0: continuous time
- -1: discrete time, sampling period unspecified
- > 0: discrete time with that period (seconds)
"""

CONTINUOUS: SamplingPeriod = 0.0
UNSPECIFIED_SAMPLING: SamplingPeriod = -1.0

# ============================================================================
# Frequency Analysis Kinds
# ============================================================================

PlotType = Literal["bode", "nyquist", "sigma"]
"""
Analysis kind used to pick a default frequency grid.

- 'bode': channel poles/zeros, upper half-plane only
- 'nyquist': as bode, with one extra decade on each side
- 'sigma': multivariable transmission zeros and poles
"""

VALID_PLOT_TYPES: Tuple[str, ...] = ("bode", "nyquist", "sigma")
