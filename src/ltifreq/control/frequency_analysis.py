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
Frequency Analysis Functions

Bode, Nyquist and singular-value (sigma) views of the frequency response.
Each function accepts an optional frequency vector; when omitted, a grid is
chosen from the system's poles and zeros for that kind of analysis.

    bode(sys[, w])    -> (magnitude, phase_degrees, w)
    nyquist(sys[, w]) -> (real, imag, w)
    sigma(sys[, w])   -> (singular_values, w)

Tensors have shape (nw, ny, nu); singular values have shape
(nw, min(ny, nu)) and are sorted in descending order at each frequency.

The *_response variants return the same data as TypedDicts.
"""

from typing import Optional, Tuple

import numpy as np

from ltifreq.control.frequency_grid import default_freq_vector
from ltifreq.control.frequency_response import freqresp
from ltifreq.systems.lti import LTISystem
from ltifreq.types.backends import Backend
from ltifreq.types.core import (
    FrequencyVector,
    MagnitudeTensor,
    PhaseTensor,
    ResponseTensor,
    SingularValueArray,
)
from ltifreq.types.frequency_domain import BodeResult, NyquistResult, SigmaResult
from ltifreq.utils.backend_utils import from_numpy, validate_backend


def unwrap_phase(phase: np.ndarray, axis: int = 0) -> np.ndarray:
    """
    Remove artificial 2π jumps from a phase array (radians).

    Consecutive samples along axis differing by more than π are shifted by
    the multiple of 2π that brings the difference back into [-π, π].
    """
    return np.unwrap(phase, axis=axis)


def bode(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> Tuple[MagnitudeTensor, PhaseTensor, FrequencyVector]:
    """
    Magnitude and phase of the frequency response.

    Args:
        sys: LTI system
        w: Frequencies in rad/s; chosen automatically if None
        backend: Array type of the magnitude and phase

    Returns:
        (magnitude, phase, w): |G(iw)| and the phase in degrees unwrapped
        along the frequency axis, both (nw, ny, nu)

    Examples
    --------
    >>> mag, phase, w = bode(tf([1], [1, 1]))
    >>> mag_db = 20 * np.log10(mag[:, 0, 0])
    """
    validate_backend(backend)
    if w is None:
        w = default_freq_vector(sys, "bode")
    resp = freqresp(sys, w)
    magnitude = np.abs(resp)
    phase = np.rad2deg(unwrap_phase(np.angle(resp), axis=0))
    return from_numpy(magnitude, backend), from_numpy(phase, backend), w


def nyquist(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> Tuple[ResponseTensor, ResponseTensor, FrequencyVector]:
    """
    Real and imaginary parts of the frequency response.

    Args:
        sys: LTI system
        w: Frequencies in rad/s; chosen automatically if None (the Nyquist
           grid extends one decade further on each side than Bode's)
        backend: Array type of the real and imaginary parts

    Returns:
        (real, imag, w), both tensors (nw, ny, nu)
    """
    validate_backend(backend)
    if w is None:
        w = default_freq_vector(sys, "nyquist")
    resp = freqresp(sys, w)
    return from_numpy(resp.real.copy(), backend), from_numpy(resp.imag.copy(), backend), w


def sigma(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> Tuple[SingularValueArray, FrequencyVector]:
    """
    Singular values of the frequency response.

    Args:
        sys: LTI system
        w: Frequencies in rad/s; chosen automatically from the transmission
           zeros and poles if None
        backend: Array type of the singular values

    Returns:
        (sv, w): sv has shape (nw, min(ny, nu)), descending at each
        frequency. Frequencies where the response is infinite (poles on
        the grid) have all singular values set to +inf.
    """
    validate_backend(backend)
    if w is None:
        w = default_freq_vector(sys, "sigma")
    resp = freqresp(sys, w)
    nw, ny, nu = resp.shape

    sv = np.full((nw, min(ny, nu)), np.inf)
    finite = np.all(np.isfinite(resp), axis=(1, 2))
    if np.any(finite):
        sv[finite] = np.linalg.svd(resp[finite], compute_uv=False)
    return from_numpy(sv, backend), w


# ============================================================================
# TypedDict Variants
# ============================================================================


def bode_response(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> BodeResult:
    """bode() as a BodeResult dictionary."""
    magnitude, phase, w = bode(sys, w, backend)
    return {"magnitude": magnitude, "phase": phase, "frequencies": w}


def nyquist_response(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> NyquistResult:
    """nyquist() as a NyquistResult dictionary."""
    real, imag, w = nyquist(sys, w, backend)
    return {"real": real, "imag": imag, "frequencies": w}


def sigma_response(
    sys: LTISystem,
    w: Optional[FrequencyVector] = None,
    backend: Backend = "numpy",
) -> SigmaResult:
    """sigma() as a SigmaResult dictionary."""
    sv, w = sigma(sys, w, backend)
    return {"singular_values": sv, "frequencies": w}
