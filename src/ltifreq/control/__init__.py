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
Frequency-domain analysis of LTI systems.

- frequency_response: evalfr, freqresp, evaluate, Hessenberg preconditioning
- frequency_grid: automatic frequency vectors
- frequency_analysis: bode, nyquist, sigma
- system_analysis: FrequencyAnalysis wrapper
"""

from .frequency_analysis import (
    bode,
    bode_response,
    nyquist,
    nyquist_response,
    sigma,
    sigma_response,
    unwrap_phase,
)
from .frequency_grid import bounds_and_features, default_freq_vector
from .frequency_response import (
    evalfr,
    evaluate,
    evaluation_points,
    freqresp,
    preprocess_for_freqresp,
    sampling_period,
    solve_resolvent,
)
from .system_analysis import FrequencyAnalysis

__all__ = [
    "evalfr",
    "evaluate",
    "evaluation_points",
    "freqresp",
    "preprocess_for_freqresp",
    "sampling_period",
    "solve_resolvent",
    "bounds_and_features",
    "default_freq_vector",
    "bode",
    "nyquist",
    "sigma",
    "bode_response",
    "nyquist_response",
    "sigma_response",
    "unwrap_phase",
    "FrequencyAnalysis",
]
