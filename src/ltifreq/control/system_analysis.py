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
Frequency Analysis Wrapper

Thin wrapper around the frequency-domain functions for composition.

Holds the backend setting of its owner and routes every call to the pure
functions in frequency_response, frequency_grid and frequency_analysis.
It keeps no other state and caches nothing.

Usage
-----
>>> from ltifreq.control.system_analysis import FrequencyAnalysis
>>> from ltifreq.systems import tf
>>>
>>> analyzer = FrequencyAnalysis(backend='numpy')
>>> G = tf([1], [1, 11, 10])
>>> mag, phase, w = analyzer.bode(G)
>>> sv, w = analyzer.sigma(G)
"""

from typing import Optional, Sequence, Tuple, Union

from ltifreq.systems.lti import LTISystem
from ltifreq.types.backends import Backend, PlotType
from ltifreq.types.core import (
    FrequencyVector,
    MagnitudeTensor,
    PhaseTensor,
    ResponseTensor,
    ScalarLike,
    SingularValueArray,
    TransferMatrix,
)
from ltifreq.types.frequency_domain import FrequencyGridConfig
from ltifreq.utils.backend_utils import validate_backend


class FrequencyAnalysis:
    """
    Frequency analysis wrapper for composition.

    Attributes
    ----------
    backend : Backend
        Array type of returned tensors ('numpy', 'torch', 'jax')

    Examples
    --------
    >>> analyzer = FrequencyAnalysis(backend='torch')
    >>> resp = analyzer.freqresp(G, w)       # torch.Tensor
    >>> w = analyzer.default_frequencies([G, H], 'nyquist')
    """

    def __init__(self, backend: Backend = "numpy"):
        """
        Initialize the wrapper.

        Args:
            backend: Array type of returned tensors

        Raises:
            ValueError: If backend is unknown
        """
        validate_backend(backend)
        self.backend = backend

    def evalfr(self, sys: LTISystem, s: ScalarLike) -> TransferMatrix:
        """
        Transfer matrix at one complex point.

        Routes to frequency_response.evalfr(). The (ny, nu) result is always
        a NumPy array.
        """
        from ltifreq.control.frequency_response import evalfr

        return evalfr(sys, s)

    def freqresp(self, sys: LTISystem, w: FrequencyVector) -> ResponseTensor:
        """Frequency response tensor (nw, ny, nu). Routes to freqresp()."""
        from ltifreq.control.frequency_response import freqresp

        return freqresp(sys, w, backend=self.backend)

    def bode(
        self, sys: LTISystem, w: Optional[FrequencyVector] = None
    ) -> Tuple[MagnitudeTensor, PhaseTensor, FrequencyVector]:
        from ltifreq.control.frequency_analysis import bode

        return bode(sys, w, backend=self.backend)

    def nyquist(
        self, sys: LTISystem, w: Optional[FrequencyVector] = None
    ) -> Tuple[ResponseTensor, ResponseTensor, FrequencyVector]:
        from ltifreq.control.frequency_analysis import nyquist

        return nyquist(sys, w, backend=self.backend)

    def sigma(
        self, sys: LTISystem, w: Optional[FrequencyVector] = None
    ) -> Tuple[SingularValueArray, FrequencyVector]:
        from ltifreq.control.frequency_analysis import sigma

        return sigma(sys, w, backend=self.backend)

    def default_frequencies(
        self,
        systems: Union[LTISystem, Sequence[LTISystem]],
        plot: PlotType = "bode",
        config: Optional[FrequencyGridConfig] = None,
    ) -> FrequencyVector:
        """
        Automatic frequency grid, see frequency_grid.default_freq_vector().

        The grid is an axis, not a result, and stays a NumPy array whatever
        the backend.
        """
        from ltifreq.control.frequency_grid import default_freq_vector

        return default_freq_vector(systems, plot, config)

    def __repr__(self) -> str:
        return f"FrequencyAnalysis(backend='{self.backend}')"
