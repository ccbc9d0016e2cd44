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
Frequency Response Functions

Pure stateless functions evaluating LTI systems in the frequency domain:

**Point Evaluation:**
- evalfr: transfer matrix at one complex point
- evaluate: direct evaluation, optionally mapping a real frequency to the
  unit circle for discrete-time systems

**Frequency Response:**
- freqresp: transfer matrix over a frequency vector, as a
  (nw, ny, nu) tensor
- preprocess_for_freqresp: Hessenberg reduction applied once per call

Mathematical Background
-----------------------
State space:

    G(s) = C (sI - A)⁻¹ B + D

Evaluation points for a frequency w (rad/s):

    Continuous: s = iw
    Discrete:   z = exp(iwTs)   (Ts = 1 if unspecified)

Repeated solves of (sI - A) X = B are cheaper when A is upper Hessenberg.
The reduction A = Q H Qᵀ (Q unitary) leaves G unchanged:

    G(s) = (CQ) (sI - H)⁻¹ (QᵀB) + D

Reference: Laub, A.J., "Efficient Multivariable Frequency Response
Computations", IEEE Transactions on Automatic Control, AC-26 (1981),
pp. 407-408.

Numerical Degeneracy
--------------------
If sI - A is singular at a point (s is a pole) the transfer matrix at that
point is reported as +inf in every entry. The rest of the response is
unaffected.

Usage
-----
>>> import numpy as np
>>> from ltifreq.systems import ss
>>> from ltifreq.control.frequency_response import evalfr, freqresp
>>>
>>> sys = ss([[-1.0]], [[1.0]], [[1.0]], [[0.0]])
>>> evalfr(sys, 0.0)
array([[1.]])
>>> resp = freqresp(sys, np.array([0.0, 1.0, 10.0]))
>>> resp.shape
(3, 1, 1)
"""

from typing import Any, Optional

import numpy as np
from scipy import linalg
from scipy.linalg import get_lapack_funcs

from ltifreq.systems.lti import (
    LTISystem,
    StateSpace,
    TransferFunction,
    iscontinuous,
)
from ltifreq.types.backends import UNSPECIFIED_SAMPLING, Backend
from ltifreq.types.core import (
    EvaluationPoints,
    FrequencyVector,
    InputMatrix,
    ResponseTensor,
    ScalarLike,
    StateMatrix,
    TransferMatrix,
)
from ltifreq.types.frequency_domain import ResolventSolve
from ltifreq.utils.backend_utils import from_numpy, to_numpy, validate_backend

# ============================================================================
# Type Promotion and Sampling (Internal)
# ============================================================================


def _division_type(*types) -> np.dtype:
    """
    Result dtype of dividing values of the given types.

    Integers promote to floating point; float16 is raised to float32 since
    LAPACK has no half-precision routines.
    """
    return np.promote_types(np.result_type(*types, np.float16), np.float32)


def sampling_period(sys: LTISystem) -> float:
    """
    Sampling period used to map frequencies to the unit circle.

    Unspecified discrete systems (Ts = -1) use Ts = 1.
    """
    return 1.0 if sys.Ts == UNSPECIFIED_SAMPLING else sys.Ts


def _as_frequency_vector(w: Any) -> FrequencyVector:
    """Validate a frequency vector: 1-D and real."""
    w_np = np.asarray(to_numpy(w))
    if w_np.ndim != 1:
        raise ValueError(f"Frequency vector must be 1-D, got shape {w_np.shape}")
    if np.iscomplexobj(w_np):
        if np.any(w_np.imag != 0):
            raise ValueError("Frequency vector must be real")
        w_np = w_np.real
    if not np.issubdtype(w_np.dtype, np.number):
        raise ValueError(f"Frequency vector must be numeric, got dtype {w_np.dtype}")
    return w_np.astype(np.result_type(w_np, np.float64), copy=False)


def evaluation_points(sys: LTISystem, w: FrequencyVector) -> EvaluationPoints:
    """
    Map real frequencies to the complex points where sys is evaluated.

    Args:
        sys: LTI system (its sampling period selects the mapping)
        w: Frequencies in rad/s, shape (nw,)

    Returns:
        iw for continuous systems, exp(iwTs) for discrete systems
    """
    w_np = _as_frequency_vector(w)
    if iscontinuous(sys):
        return 1j * w_np
    return np.exp(1j * w_np * sampling_period(sys))


# ============================================================================
# Complex Evaluator
# ============================================================================


def solve_resolvent(A: StateMatrix, B: InputMatrix, s: ScalarLike) -> ResolventSolve:
    """
    Solve (sI - A) X = B with an explicit success flag.

    Uses LAPACK gesv directly so that a singular shifted matrix is reported
    through the returned info code instead of an exception.

    Args:
        A: State matrix (nx, nx)
        B: Input matrix (nx, nu)
        s: Complex evaluation point

    Returns:
        ResolventSolve with success flag and solution X (nx, nu)
    """
    n, nu = B.shape
    dtype = _division_type(A.dtype, B.dtype, np.asarray(s).dtype)
    if n == 0:
        return {"success": True, "solution": np.zeros((0, nu), dtype=dtype)}

    shifted = dtype.type(s) * np.eye(n, dtype=dtype) - A
    rhs = np.array(B, dtype=dtype)
    (gesv,) = get_lapack_funcs(("gesv",), (shifted, rhs))
    _, _, X, info = gesv(shifted, rhs, overwrite_a=True, overwrite_b=True)

    if info != 0 or not np.all(np.isfinite(X)):
        return {"success": False, "solution": None}
    return {"success": True, "solution": X}


def evalfr(sys: LTISystem, s: ScalarLike) -> TransferMatrix:
    """
    Evaluate the transfer matrix of sys at the complex point s.

    s is a Laplace variable for continuous systems and a z-domain point for
    discrete systems. For many points use freqresp instead.

    Args:
        sys: StateSpace or TransferFunction
        s: Scalar evaluation point

    Returns:
        (ny, nu) matrix, dtype promoted from the system data and s.
        For a state-space system where sI - A is singular, every entry
        is +inf.

    Raises:
        ValueError: If s is not a scalar

    Examples
    --------
    >>> sys = ss([[-1.0]], [[1.0]], [[1.0]], [[0.0]])
    >>> evalfr(sys, 1j)
    array([[0.5-0.5j]])
    >>> evalfr(sys, -1.0)            # pole
    array([[inf]])
    """
    if np.ndim(s) != 0:
        raise ValueError(f"evalfr expects a scalar point, got shape {np.shape(s)}; use freqresp")
    dtype = _division_type(sys.numeric_type, np.asarray(s).dtype)

    if isinstance(sys, StateSpace):
        result = solve_resolvent(sys.A, sys.B, s)
        if not result["success"]:
            return np.full(sys.shape, np.inf, dtype=dtype)
        return (sys.D + sys.C @ result["solution"]).astype(dtype, copy=False)

    if isinstance(sys, TransferFunction):
        ny, nu = sys.shape
        values = np.empty((ny, nu), dtype=dtype)
        for i in range(ny):
            for j in range(nu):
                values[i, j] = sys.matrix[i, j].evalfr(s)
        return values

    raise NotImplementedError(f"evalfr is not implemented for {type(sys).__name__}")


# ============================================================================
# Hessenberg Preconditioner
# ============================================================================


def preprocess_for_freqresp(sys: StateSpace) -> StateSpace:
    """
    Reduce A to upper Hessenberg form by a unitary similarity.

    Returns a new StateSpace (H, QᵀB, CQ, D, Ts) with A = Q H Qᵀ. The
    transfer matrix is unchanged; sys itself is not modified. Systems
    without states are returned as they are.

    Args:
        sys: State-space system

    Returns:
        Equivalent state-space system with Hessenberg A
    """
    if sys.nstates == 0:
        return sys

    dtype = _division_type(sys.numeric_type)
    H, Q = linalg.hessenberg(sys.A.astype(dtype), calc_q=True)
    B = Q.conj().T @ sys.B
    C = sys.C @ Q
    return StateSpace(H, B, C, sys.D, Ts=sys.Ts)


# ============================================================================
# Frequency Response Engine
# ============================================================================


def freqresp(sys: LTISystem, w: FrequencyVector, backend: Backend = "numpy") -> ResponseTensor:
    """
    Frequency response of sys over the frequency vector w.

        w -> C (iwI - A)⁻¹ B + D          (continuous)
        w -> C (e^{iwTs}I - A)⁻¹ B + D    (discrete)

    State-space systems are reduced to Hessenberg form once and evaluated a
    whole transfer matrix at a time. Transfer-function systems are evaluated
    channel by channel.

    Args:
        sys: StateSpace or TransferFunction
        w: Real frequencies in rad/s, shape (nw,)
        backend: Array type of the result ('numpy', 'torch', 'jax')

    Returns:
        Complex tensor of shape (nw, ny, nu) with resp[k, i, j] = G_ij(s_k)

    Raises:
        ValueError: If w is not a real 1-D vector or backend is unknown

    Examples
    --------
    >>> w = np.logspace(-2, 2, 100)
    >>> resp = freqresp(sys, w)
    >>> gain_db = 20 * np.log10(np.abs(resp[:, 0, 0]))
    """
    validate_backend(backend)
    points = evaluation_points(sys, w)
    ny, nu = sys.shape
    dtype = _division_type(sys.numeric_type, points.dtype)
    resp = np.empty((len(points), ny, nu), dtype=dtype)

    if isinstance(sys, StateSpace):
        reduced = preprocess_for_freqresp(sys)
        for k, s in enumerate(points):
            resp[k] = evalfr(reduced, s)
    else:
        channels = [(i, j, sys[i, j]) for i in range(ny) for j in range(nu)]
        for k, s in enumerate(points):
            for i, j, channel in channels:
                resp[k, i, j] = evalfr(channel, s)[0, 0]

    return from_numpy(resp, backend)


# ============================================================================
# Direct Evaluation
# ============================================================================


def evaluate(
    sys: LTISystem,
    z_or_omega: Any,
    map_to_unit_circle: Optional[bool] = None,
):
    """
    Evaluate sys directly at a point or a real frequency.

    - evaluate(sys, s): transfer matrix at s (same as evalfr)
    - evaluate(sys, w, True): discrete sys at exp(iTsw); w must be real
    - evaluate(sys, z, False): discrete sys at the raw point z

    With a flag, z_or_omega may also be a 1-D array, giving a tensor of
    shape (len(z_or_omega), ny, nu).

    Args:
        sys: LTI system
        z_or_omega: Complex point, real frequency, or 1-D array of either
        map_to_unit_circle: None, True or False (see above)

    Returns:
        (ny, nu) transfer matrix, or (n, ny, nu) tensor for array input

    Raises:
        ValueError: If a flag is given for a continuous-time system, or if
            a non-real frequency is mapped to the unit circle
    """
    if map_to_unit_circle is None:
        return evalfr(sys, z_or_omega)

    if iscontinuous(sys):
        raise ValueError(
            "Unit-circle and raw z evaluation are only defined for discrete-time systems",
        )

    values = np.asarray(to_numpy(z_or_omega))
    if values.ndim == 0:
        return _evaluate_discrete(sys, values.item(), map_to_unit_circle)
    if values.ndim != 1:
        raise ValueError(f"Expected a scalar or 1-D array, got shape {values.shape}")

    matrices = [_evaluate_discrete(sys, value, map_to_unit_circle) for value in values]
    if not matrices:
        return np.empty((0,) + sys.shape, dtype=complex)
    return np.stack(matrices)


def _evaluate_discrete(sys: LTISystem, value: ScalarLike, map_to_unit_circle: bool) -> TransferMatrix:
    if not map_to_unit_circle:
        return evalfr(sys, value)
    if np.iscomplexobj(value) and np.imag(value) != 0:
        raise ValueError(f"To map to the unit circle, omega must be real, got {value}")
    return evalfr(sys, np.exp(1j * np.real(value) * sampling_period(sys)))
