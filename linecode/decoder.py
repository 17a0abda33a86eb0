"""
Line decoders - recover a bit string from (possibly noisy) line samples.

Each bit window of samples_per_bit samples is reduced to one or two decision
samples:
- midpoint (i + spb // 2) for full-bit level schemes
- quarter point (i + spb // 4) for RZ
- quarter and three-quarter points (i + 3 * spb // 4) for the Manchester codes

Level schemes compare against 0 V, pulse schemes compare the magnitude
against amplitude * PULSE_THRESHOLD. Indices outside the sample array read
as 0 V.
"""

import logging
from typing import Callable, Dict, List

import numpy as np

from . import SAMPLES_PER_BIT, AMPLITUDE, PULSE_THRESHOLD, B8ZS_RUN, HDB3_RUN
from .schemes import (
    InvalidParameter,
    Scheme,
    check_samples_per_bit,
    check_amplitude,
)

_logger = logging.getLogger(__name__)


class _Windows:
    """Indexed access to the decision points of each bit window."""

    def __init__(self, samples: np.ndarray, samples_per_bit: int, amplitude: float):
        self.samples = samples
        self.samples_per_bit = samples_per_bit
        self.amplitude = amplitude
        self.threshold = amplitude * PULSE_THRESHOLD
        # A trailing partial window still yields a bit
        self.count = -(-len(samples) // samples_per_bit)

    def sample(self, index: int) -> float:
        if index < 0 or index >= len(self.samples):
            return 0.0
        return float(self.samples[index])

    def mid(self, k: int) -> float:
        return self.sample(k * self.samples_per_bit + self.samples_per_bit // 2)

    def quarter(self, k: int) -> float:
        return self.sample(k * self.samples_per_bit + self.samples_per_bit // 4)

    def three_quarter(self, k: int) -> float:
        return self.sample(k * self.samples_per_bit + (3 * self.samples_per_bit) // 4)

    def ternary(self, value: float) -> int:
        """Map a sample to +1, -1 or 0 (no pulse)."""
        if abs(value) <= self.threshold:
            return 0
        return 1 if value > 0 else -1

    def pulses(self) -> List[int]:
        """Ternary symbol of every window, taken at the midpoint."""
        return [self.ternary(self.mid(k)) for k in range(self.count)]


def _nrz(w: _Windows) -> str:
    return "".join("1" if w.mid(k) > 0 else "0" for k in range(w.count))


def _rz(w: _Windows) -> str:
    return "".join("1" if w.quarter(k) > 0 else "0" for k in range(w.count))


def _nrzi(w: _Windows) -> str:
    # Level before the first bit is +amplitude
    bits = []
    previous = w.amplitude
    for k in range(w.count):
        level = w.mid(k)
        bits.append("1" if (level > 0) != (previous > 0) else "0")
        previous = level
    return "".join(bits)


def _manchester(w: _Windows) -> str:
    # Low-to-high = 1: first half below 0 V and second half above it
    return "".join(
        "1" if w.quarter(k) < 0 and w.three_quarter(k) > 0 else "0"
        for k in range(w.count)
    )


def _diff_manchester(w: _Windows) -> str:
    """
    Compare the first half of each bit with the second half of the previous.

    A level change at the bit boundary is a 0, no change is a 1. The level
    before the first bit is +amplitude.
    """
    bits = []
    previous = w.amplitude
    for k in range(w.count):
        start = w.quarter(k)
        bits.append("1" if (start > 0) == (previous > 0) else "0")
        previous = w.three_quarter(k)
    return "".join(bits)


def _ami(w: _Windows) -> str:
    return "".join("1" if p else "0" for p in w.pulses())


def _b8zs(w: _Windows) -> str:
    """
    AMI decoding with look-ahead for the 000VB0VB substitution.

    The pattern only matches when both V slots repeat the polarity of the last
    pulse, so an ordinary 00011011 is never mistaken for eight zeros.
    """
    pulses = w.pulses()
    bits = []
    last_pulse = -1

    i = 0
    while i < len(pulses):
        v = last_pulse
        b = -last_pulse
        if pulses[i:i + B8ZS_RUN] == [0, 0, 0, v, b, 0, v, b]:
            _logger.debug(f"B8ZS substitution detected at bit {i}")
            bits.append("0" * B8ZS_RUN)
            last_pulse = b
            i += B8ZS_RUN
            continue

        if pulses[i]:
            bits.append("1")
            last_pulse = pulses[i]
        else:
            bits.append("0")
        i += 1

    return "".join(bits)


def _hdb3(w: _Windows) -> str:
    """
    AMI decoding with look-ahead for the 000V / B00V substitutions.

    Tracks the same state as the encoder. expected_polarity is the polarity
    the next ordinary mark must have; a V slot carries the opposite polarity,
    so 000V is told apart from an ordinary 0001. The parity of the marks
    since the last substitution selects which pattern to look for.
    """
    pulses = w.pulses()
    bits = []
    expected_polarity = 1
    last_nonzero = -1
    pulse_count = 0

    i = 0
    while i < len(pulses):
        v = last_nonzero
        if pulse_count % 2 == 0:
            pattern = [0, 0, 0, v]
        else:
            pattern = [expected_polarity, 0, 0, v]

        if pulses[i:i + HDB3_RUN] == pattern:
            _logger.debug(f"HDB3 substitution detected at bit {i}")
            bits.append("0" * HDB3_RUN)
            pulse_count = 0
            last_nonzero = v
            expected_polarity = -v
            i += HDB3_RUN
            continue

        if pulses[i]:
            bits.append("1")
            pulse_count += 1
            last_nonzero = pulses[i]
            expected_polarity = -pulses[i]
        else:
            bits.append("0")
        i += 1

    return "".join(bits)


_DECODERS: Dict[Scheme, Callable[[_Windows], str]] = {
    Scheme.NRZ: _nrz,
    Scheme.RZ: _rz,
    Scheme.NRZI: _nrzi,
    Scheme.MANCHESTER: _manchester,
    Scheme.DIFF_MANCHESTER: _diff_manchester,
    Scheme.AMI: _ami,
    Scheme.B8ZS: _b8zs,
    Scheme.HDB3: _hdb3,
}


def _as_samples(samples) -> np.ndarray:
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidParameter(f"Samples must be one-dimensional, got shape {arr.shape}")
    return arr


def decode(
    samples,
    scheme,
    samples_per_bit: int = SAMPLES_PER_BIT,
    amplitude: float = AMPLITUDE,
) -> str:
    """
    Decode line samples back to a bit string.

    Args:
        samples: Received samples
        scheme: Scheme member or name
        samples_per_bit: Samples per bit duration (>= 1)
        amplitude: Nominal pulse amplitude, sets the pulse threshold

    Returns:
        Bit string with one bit per (possibly partial) window

    Raises:
        InvalidParameter: on bad scheme, samples_per_bit, amplitude or samples
    """
    scheme = Scheme.parse(scheme)
    samples_per_bit = check_samples_per_bit(samples_per_bit)
    amplitude = check_amplitude(amplitude)
    samples = _as_samples(samples)

    if len(samples) == 0:
        return ""

    bits = _DECODERS[scheme](_Windows(samples, samples_per_bit, amplitude))
    _logger.debug(f"Decoded {len(samples)} samples with {scheme}: {len(bits)} bits")
    return bits


def to_symbols(
    samples,
    samples_per_bit: int = SAMPLES_PER_BIT,
    amplitude: float = AMPLITUDE,
) -> str:
    """
    Describe each bit window as '+', '-' or '0'.

    Reads the quarter point, falling back to the three-quarter point when the
    first half carries no pulse. Matches encode_symbols() on clean samples.
    """
    samples_per_bit = check_samples_per_bit(samples_per_bit)
    amplitude = check_amplitude(amplitude)
    w = _Windows(_as_samples(samples), samples_per_bit, amplitude)

    symbols = []
    for k in range(w.count):
        p = w.ternary(w.quarter(k)) or w.ternary(w.three_quarter(k))
        symbols.append({1: "+", -1: "-", 0: "0"}[p])
    return "".join(symbols)
