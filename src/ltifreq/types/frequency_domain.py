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
Frequency-Domain Types

Result and configuration types for frequency response analysis:
- Bode (magnitude and unwrapped phase)
- Nyquist (real and imaginary parts)
- Sigma (singular values)
- Automatic frequency-grid configuration

These types provide structured return values from the analysis functions,
as an alternative to the plain tuples returned by bode/nyquist/sigma.

Mathematical Background
----------------------
For an LTI system with transfer matrix G:

    Continuous: G(iw) = C (iwI - A)⁻¹ B + D
    Discrete:   G(e^{iwTs}) = C (e^{iwTs}I - A)⁻¹ B + D

Bode:    |G_ij(iw)| and arg G_ij(iw) in degrees
Nyquist: Re G_ij(iw) and Im G_ij(iw)
Sigma:   σ₁(G(iw)) ≥ σ₂(G(iw)) ≥ ... ≥ σ_min(ny,nu)(G(iw))

Usage
-----
>>> from ltifreq.types.frequency_domain import BodeResult
>>>
>>> result: BodeResult = bode_response(sys)
>>> peak = result['magnitude'].max()
"""

from typing import Optional, Tuple

import numpy as np
from typing_extensions import TypedDict

from .core import (
    FrequencyVector,
    MagnitudeTensor,
    PhaseTensor,
    ResponseTensor,
    SingularValueArray,
)

# ============================================================================
# Analysis Results
# ============================================================================


class BodeResult(TypedDict):
    """
    Bode analysis result.

    Fields
    ------
    magnitude : MagnitudeTensor
        |G(iw)|, shape (nw, ny, nu)
    phase : PhaseTensor
        Unwrapped phase in degrees, shape (nw, ny, nu)
    frequencies : FrequencyVector
        Frequencies in rad/s, shape (nw,)
    """

    magnitude: MagnitudeTensor
    phase: PhaseTensor
    frequencies: FrequencyVector


class NyquistResult(TypedDict):
    """
    Nyquist analysis result.

    Fields
    ------
    real : ResponseTensor
        Re G(iw), shape (nw, ny, nu)
    imag : ResponseTensor
        Im G(iw), shape (nw, ny, nu)
    frequencies : FrequencyVector
        Frequencies in rad/s, shape (nw,)
    """

    real: ResponseTensor
    imag: ResponseTensor
    frequencies: FrequencyVector


class SigmaResult(TypedDict):
    """
    Singular value analysis result.

    Fields
    ------
    singular_values : SingularValueArray
        Singular values, shape (nw, min(ny, nu)), descending along axis 1
    frequencies : FrequencyVector
        Frequencies in rad/s, shape (nw,)
    """

    singular_values: SingularValueArray
    frequencies: FrequencyVector


# ============================================================================
# Grid Selection
# ============================================================================


class FrequencyGridConfig(TypedDict, total=False):
    """
    Settings for the automatic frequency grid.

    All fields are optional; missing fields take their value from
    DEFAULT_GRID_CONFIG.

    Fields
    ------
    min_points_total : int
        Lower bound on the total number of grid points
    min_points_per_decade : int
        Lower bound on the number of points per decade
    feature_floor : float
        Features with log10|f| at or below this value are ignored
    bound_margin : float
        Margin (in decades) added around the extreme features before rounding
    nyquist_expansion : float
        Extra decades added on each side for Nyquist analysis
    default_bounds : Tuple[float, float]
        log10 bounds used when a system has no significant features
    """

    min_points_total: int
    min_points_per_decade: int
    feature_floor: float
    bound_margin: float
    nyquist_expansion: float
    default_bounds: Tuple[float, float]


DEFAULT_GRID_CONFIG: FrequencyGridConfig = {
    "min_points_total": 200,
    "min_points_per_decade": 60,
    "feature_floor": -4.0,
    "bound_margin": 0.2,
    "nyquist_expansion": 1.0,
    "default_bounds": (0.0, 2.0),
}


class FrequencyBounds(TypedDict):
    """
    Per-system grid bounds and the features they were derived from.

    Fields
    ------
    lower : float
        log10 of the lowest frequency
    upper : float
        log10 of the highest frequency
    features : np.ndarray
        Complex poles/zeros considered, before the magnitude filter
    """

    lower: float
    upper: float
    features: np.ndarray


# ============================================================================
# Linear Solves
# ============================================================================


class ResolventSolve(TypedDict):
    """
    Checked result of the resolvent solve (sI - A) X = B.

    Fields
    ------
    success : bool
        False if the shifted matrix was singular or the solution non-finite
    solution : Optional[np.ndarray]
        X (nx, nu) when success is True, otherwise None
    """

    success: bool
    solution: Optional[np.ndarray]
