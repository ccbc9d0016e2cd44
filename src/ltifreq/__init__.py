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
ltifreq - Frequency Response of Linear Time-Invariant Systems

Evaluates state-space and transfer-function systems at complex frequencies
and derives Bode, Nyquist and singular-value data, with automatic frequency
grids chosen from the poles and zeros of the systems.

Usage
-----
>>> import numpy as np
>>> import ltifreq as lf
>>>
>>> G = lf.ss([[0, 1], [-10, -11]], [[0], [1]], [[10, 0]], [[0]])
>>> resp = lf.freqresp(G, np.logspace(-1, 2, 50))
>>> mag, phase, w = lf.bode(G)
"""

__version__ = "0.1.0"

from ltifreq.control import (
    FrequencyAnalysis,
    bode,
    bode_response,
    default_freq_vector,
    evalfr,
    evaluate,
    freqresp,
    nyquist,
    nyquist_response,
    sigma,
    sigma_response,
)
from ltifreq.systems import (
    LTISystem,
    SisoRational,
    StateSpace,
    TransferFunction,
    check_consistent_sampling_time,
    iscontinuous,
    isdiscrete,
    issiso,
    isstable,
    ninputs,
    noutputs,
    numeric_type,
    pole,
    ss,
    tf,
    tzero,
    zpkdata,
)

__all__ = [
    "__version__",
    # Systems
    "LTISystem",
    "StateSpace",
    "SisoRational",
    "TransferFunction",
    "ss",
    "tf",
    "ninputs",
    "noutputs",
    "numeric_type",
    "iscontinuous",
    "isdiscrete",
    "issiso",
    "isstable",
    "check_consistent_sampling_time",
    "pole",
    "tzero",
    "zpkdata",
    # Frequency domain
    "evalfr",
    "evaluate",
    "freqresp",
    "bode",
    "nyquist",
    "sigma",
    "bode_response",
    "nyquist_response",
    "sigma_response",
    "default_freq_vector",
    "FrequencyAnalysis",
]
