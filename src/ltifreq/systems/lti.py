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
Linear Time-Invariant System Representations

Minimal LTI layer consumed by the frequency-domain functions:

- StateSpace: (A, B, C, D) quadruple with sampling period Ts
- SisoRational: scalar rational function num(s)/den(s)
- TransferFunction: ny x nu matrix of SisoRational entries
- Interface queries: ninputs, noutputs, numeric_type, iscontinuous, ...

Sampling Convention
-------------------
    Ts == 0   continuous time
    Ts == -1  discrete time, sampling period unspecified
    Ts > 0    discrete time with sampling period Ts

System data is copied on construction and stored in read-only arrays, so a
system can be shared freely between calls without defensive copies.

Usage
-----
>>> from ltifreq.systems.lti import ss, tf
>>>
>>> # First-order lag, continuous
>>> G = ss([[-1.0]], [[1.0]], [[1.0]], [[0.0]])
>>> G.shape
(1, 1)
>>>
>>> # Same system as a transfer function, sampled
>>> H = tf([1.0], [1.0, 1.0], Ts=0.1)
>>> H.Ts
0.1
"""

from abc import ABC, abstractmethod
from numbers import Number
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ltifreq.types.backends import CONTINUOUS, UNSPECIFIED_SAMPLING, SamplingPeriod
from ltifreq.types.core import (
    FeedthroughMatrix,
    InputMatrix,
    MatrixLike,
    OutputMatrix,
    PolynomialCoefficients,
    ScalarLike,
    StateMatrix,
)
from ltifreq.utils.backend_utils import to_numpy

IndexKey = Union[int, slice]


# ============================================================================
# Helpers (Internal)
# ============================================================================


def _validate_sampling_period(Ts: Any) -> SamplingPeriod:
    """Return Ts as float, rejecting values other than 0, -1 or positive."""
    Ts = float(Ts)
    if Ts != CONTINUOUS and Ts != UNSPECIFIED_SAMPLING and not Ts > 0:
        raise ValueError(
            f"Ts must be 0 (continuous), -1 (unspecified discrete) or positive, got {Ts}",
        )
    return Ts


def _as_matrix(value: MatrixLike, name: str) -> np.ndarray:
    """Copy value into a read-only 2-D NumPy array."""
    arr = np.array(to_numpy(value), copy=True)
    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2-D matrix, got {arr.ndim}-D array")
    if not np.issubdtype(arr.dtype, np.number):
        raise ValueError(f"{name} must be numeric, got dtype {arr.dtype}")
    arr.setflags(write=False)
    return arr


def _as_index(key: IndexKey) -> slice:
    """Integer indices keep the dimension: i -> i:i+1."""
    if isinstance(key, slice):
        return key
    index = int(key)
    if index == -1:
        return slice(index, None)
    return slice(index, index + 1)


def _split_key(key: Any) -> Tuple[slice, slice]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise ValueError("LTI systems are indexed as sys[output, input]")
    return _as_index(key[0]), _as_index(key[1])


def _as_polynomial(coefficients: Any, name: str) -> np.ndarray:
    """Coefficient vector in descending powers with leading zeros removed."""
    arr = np.atleast_1d(np.array(to_numpy(coefficients), copy=True))
    if arr.ndim != 1:
        raise ValueError(f"{name} must be a 1-D coefficient vector, got shape {arr.shape}")
    if not np.issubdtype(arr.dtype, np.number):
        raise ValueError(f"{name} must be numeric, got dtype {arr.dtype}")
    nonzero = np.flatnonzero(arr)
    arr = arr[nonzero[0]:] if nonzero.size else arr[-1:] * 0
    arr.setflags(write=False)
    return arr


def _is_polynomial(value: Any) -> bool:
    """True for a flat coefficient sequence (or scalar), False for nested ones."""
    if isinstance(value, Number):
        return True
    if isinstance(value, np.ndarray):
        return value.ndim <= 1
    return all(isinstance(c, Number) for c in value)


# ============================================================================
# Abstract LTI System
# ============================================================================


class LTISystem(ABC):
    """
    Abstract linear time-invariant system.

    Subclasses provide the input/output dimensions, the numeric type of
    their data and sub-system indexing. The sampling period is common to
    all representations.

    Attributes
    ----------
    Ts : float
        Sampling period (0 continuous, -1 unspecified discrete, >0 discrete)
    """

    def __init__(self, Ts: SamplingPeriod = CONTINUOUS):
        self._Ts = _validate_sampling_period(Ts)

    @property
    def Ts(self) -> SamplingPeriod:
        """Sampling period."""
        return self._Ts

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, int]:
        """(noutputs, ninputs)."""

    @property
    def ninputs(self) -> int:
        return self.shape[1]

    @property
    def noutputs(self) -> int:
        return self.shape[0]

    @property
    @abstractmethod
    def numeric_type(self) -> np.dtype:
        """NumPy dtype of the data defining the system."""

    @abstractmethod
    def __getitem__(self, key) -> "LTISystem":
        """Sub-system sys[outputs, inputs]."""

    def evaluate(self, z_or_omega: Any, map_to_unit_circle: Optional[bool] = None):
        """
        Evaluate the transfer matrix directly.

        - sys.evaluate(s): transfer matrix at the complex point s
        - sys.evaluate(w, True): discrete system at exp(i*Ts*w), w real
        - sys.evaluate(z, False): discrete system at the raw point z

        See ltifreq.control.frequency_response.evaluate.
        """
        from ltifreq.control.frequency_response import evaluate

        return evaluate(self, z_or_omega, map_to_unit_circle)


# ============================================================================
# State Space
# ============================================================================


class StateSpace(LTISystem):
    """
    State-space system (A, B, C, D, Ts).

        Continuous: dx/dt = Ax + Bu,   y = Cx + Du
        Discrete:   x[k+1] = Ax[k] + Bu[k],   y[k] = Cx[k] + Du[k]

    A system without states (nx = 0) is a static gain D.

    Parameters
    ----------
    A : StateMatrix
        State matrix (nx, nx)
    B : InputMatrix
        Input matrix (nx, nu)
    C : OutputMatrix
        Output matrix (ny, nx)
    D : FeedthroughMatrix
        Feedthrough matrix (ny, nu)
    Ts : float
        Sampling period, default 0 (continuous)

    Raises
    ------
    ValueError
        If the matrix shapes are inconsistent or Ts is invalid

    Examples
    --------
    >>> sys = StateSpace([[0, 1], [-2, -3]], [[0], [1]], [[1, 0]], [[0]])
    >>> sys.nstates, sys.ninputs, sys.noutputs
    (2, 1, 1)
    """

    def __init__(
        self,
        A: StateMatrix,
        B: InputMatrix,
        C: OutputMatrix,
        D: FeedthroughMatrix,
        Ts: SamplingPeriod = CONTINUOUS,
    ):
        super().__init__(Ts)
        A_np = _as_matrix(A, "A")
        B_np = _as_matrix(B, "B")
        C_np = _as_matrix(C, "C")
        D_np = _as_matrix(D, "D")

        nx = A_np.shape[0]
        ny, nu = D_np.shape

        if A_np.shape != (nx, nx):
            raise ValueError(f"A must be square, got shape {A_np.shape}")
        if B_np.shape != (nx, nu):
            raise ValueError(f"B must be ({nx}, {nu}), got {B_np.shape}")
        if C_np.shape != (ny, nx):
            raise ValueError(f"C must be ({ny}, {nx}), got {C_np.shape}")

        self._A, self._B, self._C, self._D = A_np, B_np, C_np, D_np

    @property
    def A(self) -> np.ndarray:
        return self._A

    @property
    def B(self) -> np.ndarray:
        return self._B

    @property
    def C(self) -> np.ndarray:
        return self._C

    @property
    def D(self) -> np.ndarray:
        return self._D

    @property
    def nstates(self) -> int:
        return self._A.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._D.shape

    @property
    def numeric_type(self) -> np.dtype:
        return np.result_type(self._A, self._B, self._C, self._D)

    def __getitem__(self, key) -> "StateSpace":
        rows, cols = _split_key(key)
        return StateSpace(self._A, self._B[:, cols], self._C[rows, :], self._D[rows, cols], self._Ts)

    def __repr__(self) -> str:
        return (
            f"StateSpace(nstates={self.nstates}, ninputs={self.ninputs}, "
            f"noutputs={self.noutputs}, Ts={self._Ts})"
        )


# ============================================================================
# Transfer Functions
# ============================================================================


class SisoRational:
    """
    Scalar rational transfer function num(s) / den(s).

    Coefficients are stored in descending powers of the frequency variable
    (s in continuous time, z in discrete time), as in numpy.polyval.

    Examples
    --------
    >>> G = SisoRational([1.0], [1.0, 1.0])     # 1 / (s + 1)
    >>> G.evalfr(0.0)
    1.0
    """

    def __init__(self, num: PolynomialCoefficients, den: PolynomialCoefficients):
        self._num = _as_polynomial(num, "num")
        self._den = _as_polynomial(den, "den")
        if not np.any(self._den):
            raise ValueError("Denominator polynomial cannot be zero")

    @property
    def num(self) -> np.ndarray:
        return self._num

    @property
    def den(self) -> np.ndarray:
        return self._den

    @property
    def numeric_type(self) -> np.dtype:
        return np.result_type(self._num, self._den)

    def zeros(self) -> np.ndarray:
        return np.roots(self._num).astype(complex)

    def poles(self) -> np.ndarray:
        return np.roots(self._den).astype(complex)

    def evalfr(self, s: ScalarLike):
        """
        Evaluate at the point s.

        Returns +inf (of the promoted type) where the denominator vanishes.
        """
        dtype = np.result_type(self.numeric_type, np.asarray(s).dtype, np.float16)
        den = np.polyval(self._den, s)
        if den == 0:
            return dtype.type(np.inf)
        return dtype.type(np.polyval(self._num, s) / den)

    def __repr__(self) -> str:
        return f"SisoRational(num={self._num.tolist()}, den={self._den.tolist()})"


class TransferFunction(LTISystem):
    """
    Transfer-function system: an ny x nu matrix of SisoRational entries.

    Parameters
    ----------
    matrix : SisoRational or nested sequence of SisoRational
        Entry [i][j] maps input j to output i
    Ts : float
        Sampling period, default 0 (continuous)

    Examples
    --------
    >>> G = TransferFunction([[SisoRational([1], [1, 1]), SisoRational([2], [1, 3])]])
    >>> G.shape
    (1, 2)
    """

    def __init__(self, matrix: Any, Ts: SamplingPeriod = CONTINUOUS):
        super().__init__(Ts)
        if isinstance(matrix, SisoRational):
            matrix = [[matrix]]
        rows = [list(row) for row in matrix]
        if not rows or not rows[0]:
            raise ValueError("Transfer function matrix cannot be empty")
        nu = len(rows[0])
        if any(len(row) != nu for row in rows):
            raise ValueError("Transfer function matrix rows must have equal length")
        if not all(isinstance(entry, SisoRational) for row in rows for entry in row):
            raise ValueError("Transfer function entries must be SisoRational")

        grid = np.empty((len(rows), nu), dtype=object)
        for i, row in enumerate(rows):
            for j, entry in enumerate(row):
                grid[i, j] = entry
        grid.setflags(write=False)
        self._matrix = grid

    @property
    def matrix(self) -> np.ndarray:
        """Object array (ny, nu) of SisoRational."""
        return self._matrix

    @property
    def shape(self) -> Tuple[int, int]:
        return self._matrix.shape

    @property
    def numeric_type(self) -> np.dtype:
        return np.result_type(*(entry.numeric_type for entry in self._matrix.flat))

    def __getitem__(self, key) -> "TransferFunction":
        rows, cols = _split_key(key)
        return TransferFunction(self._matrix[rows, cols].tolist(), self._Ts)

    def __repr__(self) -> str:
        return f"TransferFunction(ninputs={self.ninputs}, noutputs={self.noutputs}, Ts={self._Ts})"


# ============================================================================
# Constructors
# ============================================================================


def ss(*args, Ts: SamplingPeriod = CONTINUOUS) -> StateSpace:
    """
    Create a StateSpace system.

    - ss(A, B, C, D, Ts=0.0): full state-space model
    - ss(D, Ts=0.0): static gain without states
    """
    if len(args) == 4:
        return StateSpace(*args, Ts=Ts)
    if len(args) == 1:
        D = _as_matrix(args[0], "D")
        ny, nu = D.shape
        return StateSpace(np.zeros((0, 0)), np.zeros((0, nu)), np.zeros((ny, 0)), D, Ts=Ts)
    raise ValueError(f"ss expects (A, B, C, D) or (D,), got {len(args)} arguments")


def tf(num: Sequence, den: Sequence, Ts: SamplingPeriod = CONTINUOUS) -> TransferFunction:
    """
    Create a TransferFunction from polynomial coefficients.

    - SISO: num and den are coefficient vectors (descending powers)
    - MIMO: num is a nested list num[i][j] of coefficient vectors; den is
      either nested the same way or a single common denominator

    Examples
    --------
    >>> G = tf([1], [1, 2, 1])                      # 1 / (s + 1)^2
    >>> H = tf([[[1], [1, 0]]], [1, 3, 2])          # 1x2, common denominator
    >>> Gz = tf([0.1], [1, -0.9], Ts=0.1)           # discrete lag
    """
    if _is_polynomial(num):
        if not _is_polynomial(den):
            raise ValueError("SISO numerator requires a SISO denominator")
        return TransferFunction([[SisoRational(num, den)]], Ts)

    num_rows = [list(row) for row in num]
    if _is_polynomial(den):
        den_rows = [[den] * len(row) for row in num_rows]
    else:
        den_rows = [list(row) for row in den]
        if [len(row) for row in den_rows] != [len(row) for row in num_rows]:
            raise ValueError("num and den must have matching nesting")

    matrix = [
        [SisoRational(n, d) for n, d in zip(num_row, den_row)]
        for num_row, den_row in zip(num_rows, den_rows)
    ]
    return TransferFunction(matrix, Ts)


# ============================================================================
# Interface Queries
# ============================================================================


def ninputs(sys: LTISystem) -> int:
    return sys.ninputs


def noutputs(sys: LTISystem) -> int:
    return sys.noutputs


def numeric_type(sys: LTISystem) -> np.dtype:
    return sys.numeric_type


def iscontinuous(sys: LTISystem) -> bool:
    """True if sys is a continuous-time system (Ts == 0)."""
    return sys.Ts == CONTINUOUS


def isdiscrete(sys: LTISystem) -> bool:
    return not iscontinuous(sys)


def issiso(sys: LTISystem) -> bool:
    """True if sys has exactly one input and one output."""
    return sys.ninputs == 1 and sys.noutputs == 1


def isstable(sys: LTISystem) -> bool:
    """
    Asymptotic stability from the system poles.

        Continuous: all Re(p) < 0
        Discrete:   all |p| < 1
    """
    from ltifreq.systems.zeros_poles import pole

    poles = pole(sys)
    if iscontinuous(sys):
        return bool(np.all(np.real(poles) < 0))
    return bool(np.all(np.abs(poles) < 1))


def check_consistent_sampling_time(*systems: LTISystem) -> None:
    """Raise ValueError unless all systems share the same sampling period."""
    periods = {sys.Ts for sys in systems}
    if len(periods) > 1:
        raise ValueError(f"Sampling time mismatch: {sorted(periods)}")
