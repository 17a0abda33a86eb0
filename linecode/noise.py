"""
Additive white Gaussian noise for line waveforms.

Gaussian draws use the Box-Muller transform on two independent uniform
variates in (0, 1].
"""

import math
from typing import Optional, Union

import numpy as np

RandomSource = Optional[Union[np.random.Generator, int]]


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Return a Generator, seeding a new one from an int or fresh entropy."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _uniform_open_low(rng: np.random.Generator, size=None):
    # Generator.random() is [0, 1); flip it to (0, 1] so log() stays finite
    return 1.0 - rng.random(size)


def gaussian_random(mean: float = 0.0, std: float = 1.0, rng: RandomSource = None) -> float:
    """
    Draw one Gaussian sample.

    Args:
        mean: Distribution mean
        std: Standard deviation
        rng: Generator or seed (None = fresh entropy)

    Returns:
        mean + std * z, z ~ N(0, 1)
    """
    gen = make_rng(rng)
    u1 = _uniform_open_low(gen)
    u2 = _uniform_open_low(gen)

    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return z0 * std + mean


def add_awgn(samples, noise_std: float, rng: RandomSource = None) -> np.ndarray:
    """
    Add white Gaussian noise to every sample.

    Args:
        samples: Clean line samples
        noise_std: Noise standard deviation (volts). Values <= 0 disable noise.
        rng: Generator or seed (None = fresh entropy)

    Returns:
        Noisy samples. With noise disabled the input is returned as-is.
    """
    if noise_std <= 0:
        return samples

    clean = np.asarray(samples, dtype=np.float64)
    if clean.size == 0:
        return clean.copy()

    gen = make_rng(rng)
    u1 = _uniform_open_low(gen, clean.shape)
    u2 = _uniform_open_low(gen, clean.shape)
    noise = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)

    return clean + noise * noise_std
