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
Unit Tests for LTI System Representations

Tests cover:
- StateSpace construction and shape validation
- Static gains without states
- SisoRational and TransferFunction construction
- tf() with SISO, nested and common-denominator inputs
- Sampling period validation
- Read-only system data
- Sub-system indexing
- Interface queries
"""

import unittest

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from ltifreq.systems.lti import (
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
    ss,
    tf,
)


class LTITestCase(unittest.TestCase):
    """Base class with common matrices."""

    def setUp(self):
        self.A = np.array([[0.0, 1.0], [-2.0, -3.0]])
        self.B = np.array([[0.0, 1.0], [1.0, 0.0]])
        self.C = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
        self.D = np.zeros((3, 2))
        self.sys = ss(self.A, self.B, self.C, self.D)


# ============================================================================
# State Space
# ============================================================================


class TestStateSpace(LTITestCase):
    """Test StateSpace construction."""

    def test_dimensions(self):
        self.assertEqual(self.sys.nstates, 2)
        self.assertEqual(self.sys.shape, (3, 2))
        self.assertEqual(self.sys.ninputs, 2)
        self.assertEqual(self.sys.noutputs, 3)

    def test_default_continuous(self):
        self.assertEqual(self.sys.Ts, 0.0)
        self.assertTrue(iscontinuous(self.sys))

    def test_lists_accepted(self):
        sys = StateSpace([[-1]], [[1]], [[1]], [[0]])
        self.assertEqual(sys.shape, (1, 1))
        self.assertEqual(sys.A.ndim, 2)

    def test_scalar_matrices_promoted(self):
        sys = StateSpace(-1.0, 1.0, 2.0, 0.5)
        assert_array_equal(sys.C, [[2.0]])

    def test_non_square_A(self):
        with self.assertRaises(ValueError):
            StateSpace(np.ones((2, 3)), self.B, self.C, self.D)

    def test_mismatched_B(self):
        with self.assertRaises(ValueError):
            StateSpace(self.A, np.ones((3, 2)), self.C, self.D)

    def test_mismatched_C(self):
        with self.assertRaises(ValueError):
            StateSpace(self.A, self.B, np.ones((3, 3)), self.D)

    def test_three_dimensional_rejected(self):
        with self.assertRaises(ValueError):
            StateSpace(np.ones((2, 2, 2)), self.B, self.C, self.D)

    def test_non_numeric_rejected(self):
        with self.assertRaises(ValueError):
            StateSpace([["a"]], [[1.0]], [[1.0]], [[0.0]])

    def test_data_copied(self):
        A = self.A.copy()
        sys = ss(A, self.B, self.C, self.D)
        A[0, 0] = 100.0
        self.assertEqual(sys.A[0, 0], 0.0)

    def test_data_read_only(self):
        with self.assertRaises(ValueError):
            self.sys.A[0, 0] = 1.0

    def test_repr(self):
        self.assertIn("nstates=2", repr(self.sys))


class TestStaticGain(unittest.TestCase):
    """Test ss(D)."""

    def test_no_states(self):
        sys = ss([[1.0, 2.0]])
        self.assertEqual(sys.nstates, 0)
        self.assertEqual(sys.shape, (1, 2))
        self.assertEqual(sys.B.shape, (0, 2))
        self.assertEqual(sys.C.shape, (1, 0))

    def test_scalar_gain(self):
        sys = ss(3.0, Ts=0.5)
        self.assertEqual(sys.shape, (1, 1))
        self.assertEqual(sys.Ts, 0.5)

    def test_wrong_argument_count(self):
        with self.assertRaises(ValueError):
            ss(1.0, 2.0)


# ============================================================================
# Transfer Functions
# ============================================================================


class TestSisoRational(unittest.TestCase):
    """Test scalar rational functions."""

    def test_leading_zeros_stripped(self):
        G = SisoRational([0.0, 0.0, 1.0, 2.0], [1.0, 3.0])
        assert_array_equal(G.num, [1.0, 2.0])

    def test_zero_numerator_kept(self):
        G = SisoRational([0.0, 0.0], [1.0, 1.0])
        assert_array_equal(G.num, [0.0])

    def test_zero_denominator_rejected(self):
        with self.assertRaises(ValueError):
            SisoRational([1.0], [0.0, 0.0])

    def test_zeros_and_poles(self):
        G = SisoRational([1.0, 2.0], [1.0, 4.0, 3.0])
        assert_allclose(G.zeros(), [-2.0])
        assert_allclose(np.sort_complex(G.poles()), [-3.0, -1.0])
        self.assertEqual(G.poles().dtype, complex)

    def test_evalfr(self):
        G = SisoRational([1.0], [1.0, 1.0])
        self.assertAlmostEqual(G.evalfr(0.0), 1.0)
        assert_allclose(G.evalfr(1j), 1.0 / (1.0 + 1j))

    def test_evalfr_at_pole(self):
        G = SisoRational([1.0], [1.0, 1.0])
        self.assertTrue(np.isinf(G.evalfr(-1.0)))

    def test_numeric_type(self):
        G = SisoRational(np.array([1], dtype=int), np.array([1, 2], dtype=int))
        self.assertEqual(G.numeric_type, np.dtype(int))


class TestTransferFunction(unittest.TestCase):
    """Test TransferFunction and tf()."""

    def test_siso(self):
        G = tf([1.0], [1.0, 2.0, 1.0])
        self.assertEqual(G.shape, (1, 1))
        self.assertIsInstance(G.matrix[0, 0], SisoRational)

    def test_nested_denominators(self):
        G = tf([[[1.0], [2.0]]], [[[1.0, 1.0], [1.0, 3.0]]])
        self.assertEqual(G.shape, (1, 2))
        assert_array_equal(G.matrix[0, 1].den, [1.0, 3.0])

    def test_common_denominator(self):
        G = tf([[[1.0]], [[1.0, 0.0]]], [1.0, 3.0, 2.0])
        self.assertEqual(G.shape, (2, 1))
        for entry in G.matrix.flat:
            assert_array_equal(entry.den, [1.0, 3.0, 2.0])

    def test_mismatched_nesting(self):
        with self.assertRaises(ValueError):
            tf([[[1.0], [2.0]]], [[[1.0, 1.0]]])

    def test_siso_numerator_with_nested_denominator(self):
        with self.assertRaises(ValueError):
            tf([1.0], [[[1.0, 1.0]]])

    def test_ragged_matrix_rejected(self):
        G = SisoRational([1.0], [1.0, 1.0])
        with self.assertRaises(ValueError):
            TransferFunction([[G, G], [G]])

    def test_empty_matrix_rejected(self):
        with self.assertRaises(ValueError):
            TransferFunction([])

    def test_non_rational_entry_rejected(self):
        with self.assertRaises(ValueError):
            TransferFunction([[1.0]])

    def test_single_entry(self):
        G = TransferFunction(SisoRational([1.0], [1.0, 1.0]), Ts=0.1)
        self.assertEqual(G.shape, (1, 1))
        self.assertEqual(G.Ts, 0.1)

    def test_numeric_type_promotes_entries(self):
        G = tf([[[1], [1.0 + 1j]]], [1, 1])
        self.assertEqual(G.numeric_type, np.dtype(complex))


# ============================================================================
# Sampling Period
# ============================================================================


class TestSamplingPeriod(unittest.TestCase):
    """Test Ts validation."""

    def test_valid_periods(self):
        for Ts in (0.0, -1, 0.01, 2):
            self.assertEqual(tf([1.0], [1.0, 1.0], Ts=Ts).Ts, float(Ts))

    def test_invalid_periods(self):
        for Ts in (-0.5, -2.0, np.nan):
            with self.assertRaises(ValueError):
                ss([[1.0]], Ts=Ts)

    def test_discrete_queries(self):
        G = tf([1.0], [1.0, -0.5], Ts=-1)
        self.assertTrue(isdiscrete(G))
        self.assertFalse(iscontinuous(G))


# ============================================================================
# Indexing
# ============================================================================


class TestIndexing(LTITestCase):
    """Test sys[outputs, inputs]."""

    def test_integer_index_keeps_dimensions(self):
        sub = self.sys[2, 0]
        self.assertEqual(sub.shape, (1, 1))
        self.assertEqual(sub.nstates, 2)
        assert_array_equal(sub.C, [[1.0, 1.0]])
        assert_array_equal(sub.B, [[0.0], [1.0]])

    def test_negative_index(self):
        sub = self.sys[-1, -1]
        assert_array_equal(sub.C, [[1.0, 1.0]])
        assert_array_equal(sub.B, [[1.0], [0.0]])

    def test_slices(self):
        sub = self.sys[0:2, :]
        self.assertEqual(sub.shape, (2, 2))

    def test_sampling_period_kept(self):
        G = tf([[[1.0], [2.0]]], [1.0, 0.5], Ts=0.2)
        sub = G[0, 1]
        self.assertEqual(sub.Ts, 0.2)
        assert_array_equal(sub.matrix[0, 0].num, [2.0])

    def test_single_key_rejected(self):
        with self.assertRaises(ValueError):
            self.sys[0]


# ============================================================================
# Interface Queries
# ============================================================================


class TestQueries(LTITestCase):
    """Test the query functions."""

    def test_dimensions(self):
        self.assertEqual(ninputs(self.sys), 2)
        self.assertEqual(noutputs(self.sys), 3)

    def test_numeric_type(self):
        self.assertEqual(numeric_type(self.sys), np.dtype(np.float64))
        complex_sys = ss([[1j]], [[1.0]], [[1.0]], [[0.0]])
        self.assertEqual(numeric_type(complex_sys), np.dtype(np.complex128))

    def test_issiso(self):
        self.assertFalse(issiso(self.sys))
        self.assertTrue(issiso(self.sys[0, 0]))

    def test_isstable_continuous(self):
        self.assertTrue(isstable(self.sys))
        self.assertFalse(isstable(tf([1.0], [1.0, -1.0])))
        self.assertFalse(isstable(tf([1.0], [1.0, 0.0])))

    def test_isstable_discrete(self):
        self.assertTrue(isstable(tf([1.0], [1.0, -0.5], Ts=0.1)))
        self.assertFalse(isstable(tf([1.0], [1.0, -1.5], Ts=0.1)))

    def test_consistent_sampling_time(self):
        check_consistent_sampling_time(self.sys, tf([1.0], [1.0, 1.0]))

    def test_inconsistent_sampling_time(self):
        with self.assertRaises(ValueError):
            check_consistent_sampling_time(self.sys, tf([1.0], [1.0, 1.0], Ts=0.1))


if __name__ == "__main__":
    unittest.main()
