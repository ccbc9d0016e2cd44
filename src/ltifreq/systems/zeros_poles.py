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
Poles and Zeros of LTI Systems

Pure functions extracting the pole/zero structure used to select frequency
grids:

- pole: system poles (eigenvalues of A, or denominator roots)
- tzero: multivariable transmission zeros
- zpkdata: per-channel zeros, poles and gains
- transmission_zeros: zeros of an (A, B, C, D) quadruple

Mathematical Background
-----------------------
The transmission zeros are the finite values z where the Rosenbrock system
matrix loses rank:

    P(z) = [ zI - A   -B ]
           [   C       D ]

For a square system with invertible D they are eig(A - B D⁻¹ C). In general
the quadruple is first deflated (Emami-Naeini & Van Dooren, 1982) until D
has full row rank, the same is done on the dual system, and the zeros are
the finite generalized eigenvalues of the reduced pencil.
"""

from typing import List, Tuple

import numpy as np
from scipy import linalg

from ltifreq.systems.lti import LTISystem, StateSpace, TransferFunction, issiso
from ltifreq.types.core import (
    FeatureVector,
    FeedthroughMatrix,
    InputMatrix,
    OutputMatrix,
    StateMatrix,
)

# Generalized eigenvalues above this magnitude are treated as infinite zeros
_INFINITE_ZERO_MAGNITUDE = 1e10


# ============================================================================
# Poles
# ============================================================================


def pole(sys: LTISystem) -> FeatureVector:
    """
    Poles of an LTI system.

    Args:
        sys: StateSpace or TransferFunction

    Returns:
        Complex array of poles. For a transfer function the poles of every
        channel are concatenated (no cancellation between channels).
    """
    if isinstance(sys, StateSpace):
        if sys.nstates == 0:
            return np.zeros(0, dtype=complex)
        return linalg.eigvals(sys.A).astype(complex)
    if isinstance(sys, TransferFunction):
        return np.concatenate(
            [np.zeros(0, dtype=complex)] + [entry.poles() for entry in sys.matrix.flat]
        )
    raise NotImplementedError(f"pole is not implemented for {type(sys).__name__}")


# ============================================================================
# Transmission Zeros
# ============================================================================


def tzero(sys: LTISystem) -> FeatureVector:
    """
    Transmission zeros of an LTI system.

    Args:
        sys: StateSpace (any shape) or SISO TransferFunction

    Returns:
        Complex array of finite transmission zeros

    Raises:
        NotImplementedError: For MIMO transfer functions, whose transmission
            zeros require a state-space realization
    """
    if isinstance(sys, StateSpace):
        return transmission_zeros(sys.A, sys.B, sys.C, sys.D)
    if isinstance(sys, TransferFunction):
        if issiso(sys):
            return sys.matrix[0, 0].zeros()
        raise NotImplementedError(
            "Transmission zeros of MIMO transfer functions require a state-space realization",
        )
    raise NotImplementedError(f"tzero is not implemented for {type(sys).__name__}")


def transmission_zeros(
    A: StateMatrix,
    B: InputMatrix,
    C: OutputMatrix,
    D: FeedthroughMatrix,
) -> FeatureVector:
    """
    Compute the finite transmission zeros of (A, B, C, D).

    Args:
        A: State matrix (nx, nx)
        B: Input matrix (nx, nu)
        C: Output matrix (ny, nx)
        D: Feedthrough matrix (ny, nu)

    Returns:
        Complex array of finite zeros, empty if there are none

    Examples
    --------
    >>> # (s + 2) / ((s + 1)(s + 3))
    >>> A = np.array([[0.0, 1.0], [-3.0, -4.0]])
    >>> B = np.array([[0.0], [1.0]])
    >>> C = np.array([[2.0, 1.0]])
    >>> D = np.array([[0.0]])
    >>> transmission_zeros(A, B, C, D)
    array([-2.+0.j])
    """
    A, B, C, D = (np.asarray(M) for M in (A, B, C, D))
    dtype = np.result_type(A, B, C, D, np.float64)
    A, B, C, D = (M.astype(dtype) for M in (A, B, C, D))
    n = A.shape[0]
    if n == 0:
        return np.zeros(0, dtype=complex)

    p, m = D.shape
    r = np.linalg.matrix_rank(D) if D.size else 0

    if p == m and r == p:
        return _pencil_zeros(A, B, C, D)

    # Deflate until D has full row rank, then repeat on the dual system
    Ar, Br, Cr, Dr = (A, B, C, D) if r == p else _reduce(A, B, C, D)
    if Dr.shape[0] != Dr.shape[1] or not np.any(np.hstack((Cr, Dr))):
        At, Ct, Bt, Dt = _reduce(Ar.T, Cr.T, Br.T, Dr.T)
        Ar, Br, Cr, Dr = At.T, Bt.T, Ct.T, Dt.T

    # More outputs than inputs left: normal rank deficient, no isolated zeros
    if Ar.shape[0] == 0 or Dr.shape[0] > Dr.shape[1]:
        return np.zeros(0, dtype=complex)
    return _pencil_zeros(Ar, Br, Cr, Dr)


def _rank(M: np.ndarray, scale: float) -> int:
    """Numerical rank with a tolerance relative to the whole system matrix."""
    if M.size == 0:
        return 0
    return int(np.linalg.matrix_rank(M, tol=max(M.shape) * np.finfo(float).eps * scale))


def _reduce(A, B, C, D) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Deflate (A, B, C, D) until D has full row rank.

    Each pass removes the outputs that D cannot reach together with the
    states they observe; the removed state equations become new outputs.
    """
    for _ in range(A.shape[0]):
        n = A.shape[0]
        p, m = D.shape
        scale = np.abs(np.block([[A, B], [C, D]])).max()
        U, _, _ = linalg.svd(D) if D.size else (np.eye(p), None, None)
        r = _rank(D, scale)
        if r == p:
            break

        # With mm == 0 the outputs outside the range of D are dropped and no
        # states are removed
        Ct = (U.conj().T @ C)[r:, :]
        mm = _rank(Ct, scale)
        _, _, Vh = linalg.svd(Ct)
        # Row space of Ct moved to the last mm coordinates
        T = np.roll(Vh.conj().T, -mm, axis=1)

        left = linalg.block_diag(T, U).conj().T
        right = linalg.block_diag(T, np.eye(m))
        system = left @ np.block([[A, B], [C, D]]) @ right
        system = np.delete(system, np.s_[n + r:], axis=0)
        system = np.delete(system, np.s_[n - mm:n], axis=1)

        k = n - mm
        A, B, C, D = system[:k, :k], system[:k, k:], system[k:, :k], system[k:, k:]
        if A.size == 0 or not np.any(np.hstack((C, D))):
            break
    return A, B, C, D


def _pencil_zeros(A, B, C, D) -> np.ndarray:
    """
    Finite generalized eigenvalues of the compressed Rosenbrock pencil.

    [C D] has full row rank p. An orthogonal column transformation moves its
    row space to the last p columns, leaving an n x n pencil in the first n
    columns whose eigenvalues are the zeros. This also covers p < m.
    """
    n = A.shape[0]
    p = D.shape[0]
    _, _, Vh = linalg.svd(np.hstack((C, D)))
    W = np.roll(Vh.conj().T, -p, axis=1)[:, :n]
    M = np.hstack((A, B)) @ W
    N = np.hstack((np.eye(n), np.zeros(B.shape))) @ W
    with np.errstate(divide="ignore", invalid="ignore"):
        z = linalg.eigvals(M, N)
    z = z[np.isfinite(z)]
    return z[np.abs(z) < _INFINITE_ZERO_MAGNITUDE].astype(complex)


# ============================================================================
# Channel Zeros, Poles and Gains
# ============================================================================


def zpkdata(sys: LTISystem) -> Tuple[List[List[np.ndarray]], List[List[np.ndarray]], np.ndarray]:
    """
    Zeros, poles and gain of every input/output channel.

    Args:
        sys: StateSpace or TransferFunction

    Returns:
        (zeros, poles, gains): zeros[i][j] and poles[i][j] are complex arrays
        for the channel from input j to output i; gains is a (ny, nu) array.

    Notes
    -----
    State-space channels are not reduced to a minimal realization: every
    channel reports all eigenvalues of A as poles.
    """
    ny, nu = sys.shape
    zeros = [[None] * nu for _ in range(ny)]
    poles = [[None] * nu for _ in range(ny)]
    gains = np.zeros((ny, nu), dtype=np.result_type(sys.numeric_type, float))

    if isinstance(sys, TransferFunction):
        for i in range(ny):
            for j in range(nu):
                entry = sys.matrix[i, j]
                zeros[i][j] = entry.zeros()
                poles[i][j] = entry.poles()
                gains[i, j] = entry.num[0] / entry.den[0]
        return zeros, poles, gains

    if isinstance(sys, StateSpace):
        p = pole(sys)
        for i in range(ny):
            for j in range(nu):
                channel = sys[i, j]
                z = transmission_zeros(channel.A, channel.B, channel.C, channel.D)
                zeros[i][j] = z
                poles[i][j] = p.copy()
                gains[i, j] = _channel_gain(channel, len(p) - len(z))
        return zeros, poles, gains

    raise NotImplementedError(f"zpkdata is not implemented for {type(sys).__name__}")


def _channel_gain(channel: StateSpace, relative_degree: int):
    """Leading Markov parameter: D, or C A^(d-1) B for relative degree d."""
    if relative_degree <= 0:
        return channel.D[0, 0]
    x = channel.B
    for _ in range(relative_degree - 1):
        x = channel.A @ x
    return (channel.C @ x)[0, 0]
