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
Unit Tests for Bode, Nyquist and Sigma Analysis

Tests cover:
- Bode magnitude and unwrapped phase against freqresp
- Nyquist real/imaginary parts
- Singular values: ordering, shape, known matrices, induced-norm bound
- Default frequency grids per analysis kind
- TypedDict result variants
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ltifreq.control.frequency_analysis import (
    bode,
    bode_response,
    nyquist,
    nyquist_response,
    sigma,
    sigma_response,
    unwrap_phase,
)
from ltifreq.control.frequency_grid import default_freq_vector
from ltifreq.control.frequency_response import freqresp
from ltifreq.systems.lti import ss, tf


@pytest.fixture
def third_order():
    """1 / (s + 1)^3, phase runs from 0 to -270 degrees."""
    return tf([1.0], [1.0, 3.0, 3.0, 1.0])


@pytest.fixture
def mimo():
    A = np.array([[-1.0, 0.5, 0.0], [0.0, -2.0, 1.0], [0.3, 0.0, -5.0]])
    B = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, -1.0]])
    C = np.array([[1.0, 0.0, 2.0], [0.0, 1.0, 0.0]])
    D = np.array([[0.0, 0.1], [0.0, 0.0]])
    return ss(A, B, C, D)


@pytest.fixture
def diagonal():
    """Decoupled lags with poles at -1 and -10."""
    return ss(np.diag([-1.0, -10.0]), np.eye(2), np.eye(2), np.zeros((2, 2)))


@pytest.fixture
def w():
    return np.logspace(-2, 2, 400)


class TestUnwrapPhase:
    """Test unwrap_phase()."""

    def test_removes_jumps(self):
        phase = np.array([0.0, 3.0, -3.0, -0.5])
        unwrapped = unwrap_phase(phase)
        assert np.all(np.abs(np.diff(unwrapped)) <= np.pi)
        assert_allclose(unwrapped[2], -3.0 + 2 * np.pi)

    def test_along_first_axis_only(self):
        phase = np.zeros((3, 2, 1))
        phase[:, 0, 0] = [0.0, 3.0, -3.0]
        phase[:, 1, 0] = [3.0, 3.0, 3.0]
        unwrapped = unwrap_phase(phase, axis=0)
        assert_allclose(unwrapped[:, 1, 0], [3.0, 3.0, 3.0])
        assert unwrapped[2, 0, 0] > np.pi


class TestBode:
    """Test bode()."""

    def test_magnitude_is_abs_of_response(self, mimo, w):
        mag, _, w_out = bode(mimo, w)
        np.testing.assert_array_equal(mag, np.abs(freqresp(mimo, w)))
        assert w_out is w

    def test_phase_is_unwrapped_angle(self, third_order, w):
        _, phase, _ = bode(third_order, w)
        expected = np.rad2deg(np.unwrap(np.angle(freqresp(third_order, w)), axis=0))
        np.testing.assert_array_equal(phase, expected)

    def test_phase_is_continuous(self, third_order, w):
        _, phase, _ = bode(third_order, w)
        assert np.all(np.abs(np.diff(phase[:, 0, 0])) < 180.0)
        assert phase[0, 0, 0] == pytest.approx(0.0, abs=2.0)
        assert phase[-1, 0, 0] < -180.0
        assert phase[-1, 0, 0] == pytest.approx(-3 * np.rad2deg(np.arctan(100.0)), abs=1e-6)

    def test_shapes(self, mimo, w):
        mag, phase, _ = bode(mimo, w)
        assert mag.shape == (len(w), 2, 2)
        assert phase.shape == (len(w), 2, 2)

    def test_default_frequencies(self, third_order):
        _, _, w = bode(third_order)
        assert_allclose(w, default_freq_vector(third_order, "bode"))

    def test_first_order_corner(self):
        mag, phase, _ = bode(tf([1.0], [1.0, 1.0]), np.array([1.0]))
        assert mag[0, 0, 0] == pytest.approx(1 / np.sqrt(2))
        assert phase[0, 0, 0] == pytest.approx(-45.0)


class TestNyquist:
    """Test nyquist()."""

    def test_parts_of_response(self, mimo, w):
        re, im, w_out = nyquist(mimo, w)
        resp = freqresp(mimo, w)
        np.testing.assert_array_equal(re, resp.real)
        np.testing.assert_array_equal(im, resp.imag)
        assert w_out is w

    def test_first_order_circle(self, w):
        """1 / (s + 1) traces the circle |G - 1/2| = 1/2."""
        re, im, _ = nyquist(tf([1.0], [1.0, 1.0]), w)
        assert_allclose(np.hypot(re - 0.5, im), 0.5, rtol=1e-10)

    def test_default_frequencies(self, third_order):
        _, _, w = nyquist(third_order)
        assert_allclose(w, default_freq_vector(third_order, "nyquist"))


class TestSigma:
    """Test sigma()."""

    def test_static_gain_known_values(self):
        sys = ss(np.array([[3.0, 0.0], [0.0, 1.0]]))
        sv, _ = sigma(sys, np.array([0.1, 1.0, 10.0]))
        assert_allclose(sv, np.tile([3.0, 1.0], (3, 1)))

    def test_sorted_descending(self, mimo, w):
        sv, _ = sigma(mimo, w)
        assert sv.shape == (len(w), 2)
        assert np.all(np.diff(sv, axis=1) <= 0)

    def test_matches_svd(self, mimo, w):
        sv, _ = sigma(mimo, w)
        resp = freqresp(mimo, w)
        for k in range(0, len(w), 50):
            assert_allclose(sv[k], np.linalg.svd(resp[k], compute_uv=False), rtol=1e-12)

    def test_largest_bounds_induced_norm(self, mimo, w):
        """σ_max(G) ≥ |G v| for any unit vector v, and ≥ every |G_ij|."""
        sv, _ = sigma(mimo, w)
        resp = freqresp(mimo, w)
        v = np.array([1.0, 1.0]) / np.sqrt(2.0)
        assert np.all(sv[:, 0] >= np.linalg.norm(resp @ v, axis=1) - 1e-12)
        assert np.all(sv[:, 0] >= np.max(np.abs(resp), axis=(1, 2)) - 1e-12)

    def test_non_square(self):
        D = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
        sv, _ = sigma(ss(D), np.array([1.0, 2.0]))
        assert sv.shape == (2, 2)
        assert_allclose(sv[0], [2.0, 1.0])

    def test_pole_on_grid(self):
        integrator = ss([[0.0]], [[1.0]], [[1.0]], [[0.0]])
        sv, _ = sigma(integrator, np.array([0.0, 2.0]))
        assert np.isinf(sv[0, 0])
        assert sv[1, 0] == pytest.approx(0.5)

    def test_default_frequencies(self, diagonal):
        sv, w = sigma(diagonal)
        assert_allclose(w, default_freq_vector(diagonal, "sigma"))
        assert sv.shape == (len(w), 2)


class TestTypedResults:
    """Test the TypedDict variants."""

    def test_bode_response(self, mimo, w):
        result = bode_response(mimo, w)
        mag, phase, _ = bode(mimo, w)
        assert set(result) == {"magnitude", "phase", "frequencies"}
        np.testing.assert_array_equal(result["magnitude"], mag)
        np.testing.assert_array_equal(result["phase"], phase)

    def test_nyquist_response(self, mimo, w):
        result = nyquist_response(mimo, w)
        assert set(result) == {"real", "imag", "frequencies"}
        assert result["real"].shape == (len(w), 2, 2)

    def test_sigma_response(self, mimo, w):
        result = sigma_response(mimo, w)
        assert set(result) == {"singular_values", "frequencies"}
        assert result["singular_values"].shape == (len(w), 2)


class TestValidation:
    """Errors from the analysis functions."""

    def test_unknown_backend(self, mimo, w):
        with pytest.raises(ValueError, match="backend"):
            bode(mimo, w, backend="cupy")
        with pytest.raises(ValueError, match="backend"):
            sigma(mimo, w, backend="cupy")
