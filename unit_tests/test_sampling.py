"""
Unit tests for lognormal.sampling and the sampler factory of LogNormalModel
"""

import sys
import unittest
from pathlib import Path

import numpy as np
from scipy.stats import kstest

sys.path.insert(0, str(Path(__file__).parent.parent))
from lognormal import LogNormalModel, LogNormalSampler, MarsagliaNormalizedGaussianSampler


class TestMarsagliaNormalizedGaussianSampler(unittest.TestCase):
    """Test cases for the polar method."""

    def test_pairs_from_uniform_draws(self):
        sampler = MarsagliaNormalizedGaussianSampler(np.random.default_rng(5))
        rng = np.random.default_rng(5)
        while True:
            x = 2 * rng.random() - 1
            y = 2 * rng.random() - 1
            r2 = x * x + y * y
            if 0 < r2 < 1:
                break
        alpha = np.sqrt(-2 * np.log(r2) / r2)
        self.assertEqual(sampler.sample(), alpha * y)
        self.assertEqual(sampler.sample(), alpha * x)

    def test_second_value_consumes_no_randomness(self):
        rng = np.random.default_rng(11)
        sampler = MarsagliaNormalizedGaussianSampler(rng)
        sampler.sample()
        state = rng.bit_generator.state
        sampler.sample()
        self.assertEqual(rng.bit_generator.state, state)

    def test_standard_normal(self):
        sampler = MarsagliaNormalizedGaussianSampler(3)
        z = np.array([sampler.sample() for _ in range(20000)])
        self.assertAlmostEqual(np.mean(z), 0, delta=0.03)
        self.assertAlmostEqual(np.std(z), 1, delta=0.03)
        self.assertGreater(kstest(z, 'norm').pvalue, 1e-4)

    def test_samples_follow_sequential_order(self):
        block = MarsagliaNormalizedGaussianSampler(21).samples(1001)
        sequential = MarsagliaNormalizedGaussianSampler(21)
        expected = np.array([sequential.sample() for _ in range(1001)])
        self.assertEqual(block.shape, (1001,))
        np.testing.assert_allclose(block, expected, rtol=1e-12, atol=1e-14)

    def test_samples_start_with_cached_value(self):
        sampler = MarsagliaNormalizedGaussianSampler(4)
        reference = MarsagliaNormalizedGaussianSampler(4)
        sampler.sample()
        reference.sample()
        cached = reference.sample()
        z = sampler.samples(3)
        self.assertEqual(z[0], cached)
        self.assertTrue(np.isnan(sampler._next_gaussian))

    def test_samples_empty(self):
        rng = np.random.default_rng(8)
        sampler = MarsagliaNormalizedGaussianSampler(rng)
        state = rng.bit_generator.state
        for n in (0, -1):
            z = sampler.samples(n)
            self.assertEqual(z.shape, (0,))
        self.assertEqual(rng.bit_generator.state, state)

    def test_samples_standard_normal(self):
        z = MarsagliaNormalizedGaussianSampler(13).samples(200000)
        self.assertEqual(z.shape, (200000,))
        self.assertAlmostEqual(np.mean(z), 0, delta=0.01)
        self.assertAlmostEqual(np.std(z), 1, delta=0.01)
        self.assertGreater(kstest(z, 'norm').pvalue, 1e-4)


class TestLogNormalSampler(unittest.TestCase):
    """Test cases for log-normal sampling."""

    def test_create_sampler(self):
        model = LogNormalModel(0.5, 0.2)
        sampler = model.create_sampler(1)
        self.assertIsInstance(sampler, LogNormalSampler)
        self.assertEqual(sampler.scale, 0.5)
        self.assertEqual(sampler.shape, 0.2)

    def test_generator_is_shared(self):
        rng = np.random.default_rng(0)
        sampler = LogNormalModel().create_sampler(rng)
        self.assertIs(sampler.rng, rng)

    def test_sample_is_positive_float(self):
        sampler = LogNormalModel(-1, 2).create_sampler(0)
        for _ in range(100):
            value = sampler.sample()
            self.assertIsInstance(value, float)
            self.assertGreater(value, 0)

    def test_reproducible(self):
        a = LogNormalModel(0, 1).create_sampler(42).samples(50)
        b = LogNormalModel(0, 1).create_sampler(42).samples(50)
        np.testing.assert_array_equal(a, b)

    def test_transform_of_normal_variates(self):
        model = LogNormalModel(1.5, 0.25)
        samples = model.create_sampler(7).samples(10)
        gaussian = MarsagliaNormalizedGaussianSampler(7)
        expected = np.array([np.exp(1.5 + 0.25 * gaussian.sample()) for _ in range(10)])
        np.testing.assert_allclose(samples, expected, rtol=1e-12)

    def test_distribution(self):
        model = LogNormalModel(0, 1)
        samples = model.create_sampler(2).samples(100000)
        self.assertEqual(samples.shape, (100000,))
        self.assertAlmostEqual(np.mean(samples) / model.mean(), 1, delta=0.03)
        log_samples = np.log(samples)
        self.assertAlmostEqual(np.mean(log_samples), 0, delta=0.02)
        self.assertAlmostEqual(np.std(log_samples), 1, delta=0.02)

    def test_matches_cdf(self):
        model = LogNormalModel(0.4, 0.6)
        samples = model.sample(20000, random_source=9)
        self.assertGreater(kstest(samples, model.cdf).pvalue, 1e-4)

    def test_rvs(self):
        model = LogNormalModel()
        self.assertIsInstance(model.rvs(random_state=1), float)
        self.assertEqual(model.rvs(size=(3, 4), random_state=1).shape, (3, 4))
        self.assertEqual(model.rvs(size=5, random_state=1).shape, (5,))


if __name__ == '__main__':
    unittest.main()
