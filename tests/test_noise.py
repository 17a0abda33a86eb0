"""
Tests for the AWGN noise generator.
"""

import numpy as np
import pytest

from linecode import gaussian_random, add_awgn, encode
from linecode.noise import make_rng


class TestGaussianRandom:
    """Single Box-Muller draws."""

    def test_zero_std_returns_mean(self):
        assert gaussian_random(3.0, 0.0, rng=1) == 3.0

    def test_seeded_draws_repeat(self):
        assert gaussian_random(rng=7) == gaussian_random(rng=7)

    def test_distribution(self):
        rng = np.random.default_rng(2024)
        draws = np.array([gaussian_random(2.0, 0.5, rng) for _ in range(20000)])
        assert abs(draws.mean() - 2.0) < 0.02
        assert abs(draws.std() - 0.5) < 0.02

    def test_finite(self):
        rng = np.random.default_rng(0)
        assert all(np.isfinite(gaussian_random(rng=rng)) for _ in range(1000))


class TestAddAwgn:
    """Additive noise on sample arrays."""

    def test_zero_noise_is_identity(self):
        samples = encode("1011001", "AMI", 10)
        result = add_awgn(samples, 0)
        assert result is samples
        np.testing.assert_array_equal(result, samples)

    def test_negative_noise_is_identity(self):
        samples = [1.0, -1.0, 0.0]
        assert add_awgn(samples, -0.5) is samples

    def test_does_not_modify_input(self):
        samples = encode("1010", "NRZ", 8)
        original = samples.copy()
        add_awgn(samples, 0.3, rng=5)
        np.testing.assert_array_equal(samples, original)

    def test_shape_and_type(self):
        samples = encode("1010", "NRZ", 8)
        noisy = add_awgn(samples, 0.3, rng=5)
        assert noisy.shape == samples.shape
        assert noisy.dtype == np.float64
        assert not np.array_equal(noisy, samples)

    def test_seeded_noise_repeats(self):
        samples = np.zeros(100)
        np.testing.assert_array_equal(
            add_awgn(samples, 0.2, rng=11),
            add_awgn(samples, 0.2, rng=11),
        )

    def test_noise_statistics(self):
        noise = add_awgn(np.zeros(200000), 0.5, rng=3)
        assert abs(noise.mean()) < 0.01
        assert abs(noise.std() - 0.5) < 0.01

    def test_empty(self):
        assert len(add_awgn(np.zeros(0), 0.5, rng=1)) == 0

    def test_list_input(self):
        noisy = add_awgn([1.0, -1.0], 0.1, rng=1)
        assert isinstance(noisy, np.ndarray)
        assert len(noisy) == 2


class TestMakeRng:
    """RNG normalization."""

    def test_generator_passthrough(self):
        gen = np.random.default_rng(1)
        assert make_rng(gen) is gen

    @pytest.mark.parametrize("seed", [None, 0, 12345])
    def test_seed(self, seed):
        assert isinstance(make_rng(seed), np.random.Generator)
