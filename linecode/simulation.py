"""
Simulation pipeline: encode -> noise -> decode -> compare.

Also estimates bit-error rate (BER) over repeated randomized trials. Trials
share no state: each gets its own child seed spawned from one SeedSequence,
so a given seed produces the same result whether trials run serially or on a
thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.special import erfc

from . import (
    SAMPLES_PER_BIT,
    AMPLITUDE,
    NOISE_STD,
    PULSE_THRESHOLD,
    BER_TRIALS,
    BER_BITS,
)
from .schemes import (
    InvalidParameter,
    Scheme,
    normalize_bits,
    check_samples_per_bit,
    check_amplitude,
)
from .noise import add_awgn, make_rng
from .encoder import encode
from .decoder import decode
from .compare import find_errors, ErrorStats

_logger = logging.getLogger(__name__)


class SimulationResult:
    """Everything produced by one pass through the pipeline."""

    def __init__(
        self,
        bits: str,
        scheme: Scheme,
        samples: np.ndarray,
        received: np.ndarray,
        decoded: str,
        errors: List[int],
    ):
        self.bits = bits
        self.scheme = scheme
        self.samples = samples
        self.received = received
        self.decoded = decoded
        self.errors = errors

    @property
    def stats(self) -> ErrorStats:
        return ErrorStats(
            errors=len(self.errors),
            compared=min(len(self.bits), len(self.decoded)),
        )

    @property
    def ok(self) -> bool:
        return not self.errors and self.decoded == self.bits

    def __repr__(self) -> str:
        return (
            f"SimulationResult(scheme={self.scheme}, bits={len(self.bits)}, "
            f"errors={len(self.errors)})"
        )


class Simulation:
    """
    One configured line: scheme, sampling, amplitude and channel noise.

    Noise draws come from a single Generator, so successive run() calls on the
    same Simulation see different noise but the sequence is reproducible for a
    given seed.
    """

    def __init__(
        self,
        scheme,
        samples_per_bit: int = SAMPLES_PER_BIT,
        amplitude: float = AMPLITUDE,
        noise_std: float = NOISE_STD,
        seed: Optional[int] = None,
    ):
        """
        Initialize simulation.

        Args:
            scheme: Scheme member or name
            samples_per_bit: Samples per bit duration
            amplitude: Pulse amplitude (volts)
            noise_std: AWGN standard deviation (volts), 0 disables noise
            seed: RNG seed for the noise (None = fresh entropy)
        """
        self.scheme = Scheme.parse(scheme)
        self.samples_per_bit = check_samples_per_bit(samples_per_bit)
        self.amplitude = check_amplitude(amplitude)
        self.noise_std = float(noise_std)
        self.rng = make_rng(seed)

    def run(self, bits) -> SimulationResult:
        """Pass bits through the full pipeline."""
        bits = normalize_bits(bits)

        samples = encode(bits, self.scheme, self.samples_per_bit, self.amplitude)
        received = add_awgn(samples, self.noise_std, self.rng)
        decoded = decode(received, self.scheme, self.samples_per_bit, self.amplitude)
        errors = find_errors(bits, decoded)

        _logger.debug(
            f"{self.scheme}: {len(bits)} bits, noise_std={self.noise_std}, "
            f"{len(errors)} errors"
        )
        return SimulationResult(bits, self.scheme, samples, received, decoded, errors)


class BERResult:
    """Aggregated error count over a batch of trials."""

    def __init__(self, scheme: Scheme, noise_std: float, errors: int, bits: int, trials: int):
        self.scheme = scheme
        self.noise_std = noise_std
        self.errors = errors
        self.bits = bits
        self.trials = trials

    @property
    def ber(self) -> float:
        if self.bits == 0:
            return 0.0
        return self.errors / self.bits

    def __repr__(self) -> str:
        return (
            f"BERResult(scheme={self.scheme}, noise_std={self.noise_std}, "
            f"errors={self.errors}, bits={self.bits}, ber={self.ber:.3e})"
        )


def _run_trial(
    seed: np.random.SeedSequence,
    scheme: Scheme,
    bits_per_trial: int,
    samples_per_bit: int,
    amplitude: float,
    noise_std: float,
) -> Tuple[int, int]:
    rng = np.random.default_rng(seed)
    bits = "".join(rng.choice(["0", "1"], size=bits_per_trial))

    samples = encode(bits, scheme, samples_per_bit, amplitude)
    received = add_awgn(samples, noise_std, rng)
    decoded = decode(received, scheme, samples_per_bit, amplitude)

    return len(find_errors(bits, decoded)), len(bits)


def estimate_ber(
    scheme,
    noise_std: float,
    trials: int = BER_TRIALS,
    bits_per_trial: int = BER_BITS,
    samples_per_bit: int = SAMPLES_PER_BIT,
    amplitude: float = AMPLITUDE,
    seed: Optional[int] = None,
    workers: int = 1,
) -> BERResult:
    """
    Estimate BER from independent random trials.

    Args:
        scheme: Scheme member or name
        noise_std: AWGN standard deviation (volts)
        trials: Number of trials
        bits_per_trial: Random bits sent per trial
        samples_per_bit: Samples per bit duration
        amplitude: Pulse amplitude (volts)
        seed: Master seed; trial seeds are spawned from it
        workers: Thread pool size (1 = run serially)

    Returns:
        BERResult with errors and bits summed over all trials
    """
    scheme = Scheme.parse(scheme)
    samples_per_bit = check_samples_per_bit(samples_per_bit)
    amplitude = check_amplitude(amplitude)
    if trials < 0:
        raise InvalidParameter(f"trials must be >= 0, got {trials}")
    if bits_per_trial < 0:
        raise InvalidParameter(f"bits_per_trial must be >= 0, got {bits_per_trial}")
    if workers < 1:
        raise InvalidParameter(f"workers must be >= 1, got {workers}")

    seeds = np.random.SeedSequence(seed).spawn(trials)
    args = (scheme, bits_per_trial, samples_per_bit, amplitude, noise_std)

    if workers == 1 or trials <= 1:
        outcomes = [_run_trial(s, *args) for s in seeds]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda s: _run_trial(s, *args), seeds))

    errors = sum(e for e, _ in outcomes)
    bits = sum(n for _, n in outcomes)

    result = BERResult(scheme, noise_std, errors, bits, trials)
    _logger.debug(f"BER estimate: {result}")
    return result


def ber_sweep(
    scheme,
    noise_levels: Sequence[float],
    trials: int = BER_TRIALS,
    bits_per_trial: int = BER_BITS,
    samples_per_bit: int = SAMPLES_PER_BIT,
    amplitude: float = AMPLITUDE,
    seed: Optional[int] = None,
    workers: int = 1,
) -> List[BERResult]:
    """
    BER at each noise level.

    Every level reuses the same seed, so all levels see the same bits and the
    same underlying Gaussian draws, only scaled. BER then grows with noise
    without Monte Carlo jitter between levels.
    """
    if seed is None:
        seed = np.random.SeedSequence().entropy

    return [
        estimate_ber(
            scheme,
            noise_std,
            trials=trials,
            bits_per_trial=bits_per_trial,
            samples_per_bit=samples_per_bit,
            amplitude=amplitude,
            seed=seed,
            workers=workers,
        )
        for noise_std in noise_levels
    ]


def _q(x: float) -> float:
    # Gaussian tail probability
    return 0.5 * float(erfc(x / np.sqrt(2)))


def theoretical_ber(scheme, noise_std: float, amplitude: float = AMPLITUDE) -> Optional[float]:
    """
    Closed-form BER for the sample-slicing decoders, equiprobable bits.

    - NRZ, RZ: one sample of +/-A against 0 V -> Q(A/sigma)
    - Manchester: a 1 needs both half samples on the right side of 0 V,
      a 0 fails only when both flip -> (1 - (1 - p)^2 + p^2) / 2, p = Q(A/sigma)
    - NRZI, DiffManchester: the bit is wrong when exactly one of the two
      compared samples flips -> 2p(1 - p), p = Q(A/sigma)
    - AMI: zeros fail above A/2 on either side, marks below A/2 on one
      -> 1.5 Q(A / (2 sigma))

    B8ZS and HDB3 decisions depend on decoder state, so they return None.
    """
    scheme = Scheme.parse(scheme)
    amplitude = check_amplitude(amplitude)
    if noise_std <= 0:
        return 0.0

    snr = amplitude / noise_std
    if scheme in (Scheme.NRZ, Scheme.RZ):
        return _q(snr)
    if scheme == Scheme.MANCHESTER:
        p = _q(snr)
        return ((1 - (1 - p) ** 2) + p ** 2) / 2
    if scheme in (Scheme.NRZI, Scheme.DIFF_MANCHESTER):
        p = _q(snr)
        return 2 * p * (1 - p)
    if scheme == Scheme.AMI:
        return 1.5 * _q(snr * PULSE_THRESHOLD)
    return None
