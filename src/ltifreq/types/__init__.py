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
Types Module - Type Definitions for ltifreq

Central import point for all type definitions.

Module Organization
------------------
- core: Basic arrays, state-space matrices, frequency-domain arrays
- backends: Backend, sampling and analysis-kind literals
- frequency_domain: Bode/Nyquist/Sigma results, grid configuration
"""

from .backends import (
    CONTINUOUS,
    UNSPECIFIED_SAMPLING,
    VALID_BACKENDS,
    VALID_PLOT_TYPES,
    Backend,
    PlotType,
    SamplingPeriod,
)
from .core import (
    ArrayLike,
    EvaluationPoints,
    FeatureVector,
    FeedthroughMatrix,
    FrequencyVector,
    InputMatrix,
    MagnitudeTensor,
    MatrixLike,
    NumpyArray,
    OutputMatrix,
    PhaseTensor,
    PolynomialCoefficients,
    ResponseTensor,
    ScalarLike,
    SingularValueArray,
    StateMatrix,
    TransferMatrix,
)
from .frequency_domain import (
    DEFAULT_GRID_CONFIG,
    BodeResult,
    FrequencyBounds,
    FrequencyGridConfig,
    NyquistResult,
    ResolventSolve,
    SigmaResult,
)

__all__ = [
    # Backends
    "Backend",
    "PlotType",
    "SamplingPeriod",
    "CONTINUOUS",
    "UNSPECIFIED_SAMPLING",
    "VALID_BACKENDS",
    "VALID_PLOT_TYPES",
    # Core
    "ArrayLike",
    "NumpyArray",
    "ScalarLike",
    "MatrixLike",
    "StateMatrix",
    "InputMatrix",
    "OutputMatrix",
    "FeedthroughMatrix",
    "FrequencyVector",
    "EvaluationPoints",
    "TransferMatrix",
    "ResponseTensor",
    "MagnitudeTensor",
    "PhaseTensor",
    "SingularValueArray",
    "FeatureVector",
    "PolynomialCoefficients",
    # Frequency domain
    "BodeResult",
    "NyquistResult",
    "SigmaResult",
    "FrequencyGridConfig",
    "DEFAULT_GRID_CONFIG",
    "FrequencyBounds",
    "ResolventSolve",
]
