"""
Line encoders - map a bit string to a sampled line waveform.

Every scheme is a small state machine folded over the bits. It emits one
cell per bit: the line level for the first half of the bit and the level for
the second half. Cells are then rendered to samples, so a bit occupies
exactly samples_per_bit samples whatever the scheme.

Half-bit split: the first half gets samples_per_bit // 2 samples, the second
half gets the rest (odd values put the extra sample in the second half).
"""

import logging
from typing import Callable, Dict, List, Tuple

import numpy as np

from . import SAMPLES_PER_BIT, AMPLITUDE, B8ZS_RUN, HDB3_RUN
from .schemes import (
    Scheme,
    normalize_bits,
    check_samples_per_bit,
    check_amplitude,
)

_logger = logging.getLogger(__name__)

Cell = Tuple[float, float]


def _nrz(bits: str, amplitude: float) -> List[Cell]:
    cells = []
    for bit in bits:
        level = amplitude if bit == "1" else -amplitude
        cells.append((level, level))
    return cells


def _rz(bits: str, amplitude: float) -> List[Cell]:
    cells = []
    for bit in bits:
        level = amplitude if bit == "1" else -amplitude
        cells.append((level, 0.0))
    return cells


def _nrzi(bits: str, amplitude: float) -> List[Cell]:
    cells = []
    current_level = amplitude
    for bit in bits:
        if bit == "1":
            current_level = -current_level
        cells.append((current_level, current_level))
    return cells


def _manchester(bits: str, amplitude: float) -> List[Cell]:
    # 1 = low-to-high, 0 = high-to-low
    cells = []
    for bit in bits:
        if bit == "1":
            cells.append((-amplitude, amplitude))
        else:
            cells.append((amplitude, -amplitude))
    return cells


def _diff_manchester(bits: str, amplitude: float) -> List[Cell]:
    cells = []
    current_level = amplitude
    for bit in bits:
        if bit == "0":
            # Transition at bit start
            current_level = -current_level
        first = current_level
        # Mid-bit transition is always present
        current_level = -current_level
        cells.append((first, current_level))
    return cells


def _ami(bits: str, amplitude: float) -> List[Cell]:
    cells = []
    last_pulse = -amplitude  # first mark goes positive
    for bit in bits:
        if bit == "1":
            last_pulse = -last_pulse
            cells.append((last_pulse, last_pulse))
        else:
            cells.append((0.0, 0.0))
    return cells


def _b8zs(bits: str, amplitude: float) -> List[Cell]:
    """
    AMI with every run of eight zeros replaced by 000VB0VB.

    V repeats the polarity of the last pulse (a bipolar violation), B is the
    opposite polarity. Two violations of opposite sign keep the line DC free.
    """
    cells = []
    last_pulse = -amplitude
    run = "0" * B8ZS_RUN

    i = 0
    while i < len(bits):
        if bits.startswith(run, i):
            v = last_pulse
            b = -last_pulse
            for level in (0.0, 0.0, 0.0, v, b, 0.0, v, b):
                cells.append((level, level))
            last_pulse = b
            _logger.debug(f"B8ZS substitution at bit {i}")
            i += B8ZS_RUN
        elif bits[i] == "1":
            last_pulse = -last_pulse
            cells.append((last_pulse, last_pulse))
            i += 1
        else:
            cells.append((0.0, 0.0))
            i += 1
    return cells


def _hdb3(bits: str, amplitude: float) -> List[Cell]:
    """
    AMI with every run of four zeros replaced by 000V or B00V.

    State carried across the bit stream:
    - next_polarity: polarity of the next ordinary mark
    - last_nonzero: polarity of the most recent non-zero symbol
    - pulse_count: ordinary marks since the last substitution

    An even pulse_count selects 000V, an odd one B00V. V takes the sign of
    last_nonzero and B the sign of next_polarity.
    """
    cells = []
    next_polarity = amplitude
    last_nonzero = -amplitude
    pulse_count = 0
    run = "0" * HDB3_RUN

    i = 0
    while i < len(bits):
        if bits.startswith(run, i):
            v = last_nonzero
            if pulse_count % 2 == 0:
                pattern = (0.0, 0.0, 0.0, v)
            else:
                pattern = (next_polarity, 0.0, 0.0, v)
            for level in pattern:
                cells.append((level, level))
            _logger.debug(f"HDB3 substitution at bit {i}: {'000V' if pulse_count % 2 == 0 else 'B00V'}")

            pulse_count = 0
            last_nonzero = v
            next_polarity = -v
            i += HDB3_RUN
        elif bits[i] == "1":
            cells.append((next_polarity, next_polarity))
            pulse_count += 1
            last_nonzero = next_polarity
            next_polarity = -next_polarity
            i += 1
        else:
            cells.append((0.0, 0.0))
            i += 1
    return cells


_CELL_ENCODERS: Dict[Scheme, Callable[[str, float], List[Cell]]] = {
    Scheme.NRZ: _nrz,
    Scheme.RZ: _rz,
    Scheme.NRZI: _nrzi,
    Scheme.MANCHESTER: _manchester,
    Scheme.DIFF_MANCHESTER: _diff_manchester,
    Scheme.AMI: _ami,
    Scheme.B8ZS: _b8zs,
    Scheme.HDB3: _hdb3,
}


def encode_cells(bits, scheme, amplitude: float = AMPLITUDE) -> List[Cell]:
    """
    Encode bits to (first_half, second_half) line levels, one pair per bit.
    """
    scheme = Scheme.parse(scheme)
    bits = normalize_bits(bits)
    amplitude = check_amplitude(amplitude)
    return _CELL_ENCODERS[scheme](bits, amplitude)


def _render(cells: List[Cell], samples_per_bit: int) -> np.ndarray:
    """Expand cells to samples, half = samples_per_bit // 2."""
    if not cells:
        return np.zeros(0, dtype=np.float64)

    half = samples_per_bit // 2
    levels = np.asarray(cells, dtype=np.float64).ravel()
    counts = np.tile([half, samples_per_bit - half], len(cells))
    return np.repeat(levels, counts)


def encode(
    bits,
    scheme,
    samples_per_bit: int = SAMPLES_PER_BIT,
    amplitude: float = AMPLITUDE,
) -> np.ndarray:
    """
    Encode a bit string to line samples.

    Args:
        bits: Bit string ("0101") or iterable of 0/1
        scheme: Scheme member or name
        samples_per_bit: Samples per bit duration (>= 1)
        amplitude: Pulse amplitude (> 0)

    Returns:
        float64 array of len(bits) * samples_per_bit samples

    Raises:
        InvalidParameter: on bad bits, scheme, samples_per_bit or amplitude
    """
    scheme = Scheme.parse(scheme)
    samples_per_bit = check_samples_per_bit(samples_per_bit)
    cells = encode_cells(bits, scheme, amplitude)
    samples = _render(cells, samples_per_bit)

    _logger.debug(f"Encoded {len(cells)} bits with {scheme}: {len(samples)} samples")
    return samples


def encode_symbols(bits, scheme) -> str:
    """
    Encode bits and describe each bit cell as '+', '-' or '0'.

    The symbol is the polarity of the first half, or of the second half when
    the first half is at 0 V.
    """
    symbols = []
    for first, second in encode_cells(bits, scheme):
        level = first if first != 0 else second
        if level > 0:
            symbols.append("+")
        elif level < 0:
            symbols.append("-")
        else:
            symbols.append("0")
    return "".join(symbols)
