"""
Unit tests for lognormal.special
"""

import sys
import unittest
from pathlib import Path

import numpy as np
from scipy.special import erf, erfc

sys.path.insert(0, str(Path(__file__).parent.parent))
from lognormal.special import X_CRIT, erf_diff


class TestErfDiff(unittest.TestCase):
    """Test cases for the cancellation-free error function difference."""

    def test_critical_point(self):
        self.assertAlmostEqual(erf(X_CRIT), 0.5, places=15)

    def test_central_region(self):
        for x1, x2 in ((-0.3, 0.2), (0, 1), (-2, 2), (0.1, 0.4)):
            self.assertAlmostEqual(erf_diff(x1, x2), erf(x2) - erf(x1), places=15)

    def test_antisymmetric(self):
        for x1, x2 in ((-3, 1), (4, 5), (-6, -5.5)):
            self.assertEqual(erf_diff(x2, x1), -erf_diff(x1, x2))

    def test_equal_arguments(self):
        for x in (-10, -1, 0, 0.3, 7):
            self.assertEqual(erf_diff(x, x), 0)

    def test_upper_tail(self):
        # erf(6) and erf(6.5) are both 1.0 in double precision
        self.assertEqual(erf(6.5) - erf(6), 0)
        expected = erfc(6) - erfc(6.5)
        self.assertGreater(erf_diff(6, 6.5), 0)
        self.assertAlmostEqual(erf_diff(6, 6.5) / expected, 1, places=14)

    def test_lower_tail(self):
        expected = erfc(6) - erfc(6.5)
        self.assertAlmostEqual(erf_diff(-6.5, -6) / expected, 1, places=14)

    def test_close_arguments_in_tail(self):
        x1, x2 = 3, 3 + 1e-6
        # d/dx erf(x) = 2/sqrt(pi) * exp(-x^2)
        expected = 2 / np.sqrt(np.pi) * np.exp(-(x1 + 0.5e-6) ** 2) * 1e-6
        self.assertAlmostEqual(erf_diff(x1, x2) / expected, 1, places=8)

    def test_vectorized(self):
        x1 = np.array([-7, -0.5, 2, 5])
        x2 = np.array([-6, 0.5, 3, 6])
        out = erf_diff(x1, x2)
        self.assertEqual(out.shape, (4,))
        self.assertTrue(np.all(out > 0))
        np.testing.assert_allclose(out[1:3], erf(x2[1:3]) - erf(x1[1:3]), rtol=1e-12)

    def test_scalar_output(self):
        self.assertIsInstance(erf_diff(0.0, 1.0), float)

    def test_nan(self):
        self.assertTrue(np.isnan(erf_diff(np.nan, 1)))
        self.assertTrue(np.isnan(erf_diff(0, np.nan)))


if __name__ == '__main__':
    unittest.main()
