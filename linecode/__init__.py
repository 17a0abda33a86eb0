"""
linecode - Digital line-coding simulator.
Encodes bit strings into sampled line waveforms, adds noise, decodes them
back and reports bit errors.
"""

__version__ = "0.1.0"

# Signal defaults
SAMPLES_PER_BIT = 40
AMPLITUDE = 1.0  # volts
NOISE_STD = 0.0  # volts

# Decision threshold for pulse/no-pulse, relative to amplitude
PULSE_THRESHOLD = 0.5

# Zero-run lengths replaced by the substitution codes
B8ZS_RUN = 8
HDB3_RUN = 4

# Bit-error-rate estimation defaults
BER_TRIALS = 100
BER_BITS = 256

from .schemes import Scheme, InvalidParameter, SCHEME_INFO
from .noise import gaussian_random, add_awgn
from .encoder import encode, encode_symbols
from .decoder import decode, to_symbols
from .compare import find_errors, error_stats, ErrorStats
from .simulation import (
    Simulation,
    SimulationResult,
    BERResult,
    estimate_ber,
    ber_sweep,
    theoretical_ber,
)

__all__ = [
    "Scheme",
    "InvalidParameter",
    "SCHEME_INFO",
    "gaussian_random",
    "add_awgn",
    "encode",
    "encode_symbols",
    "decode",
    "to_symbols",
    "find_errors",
    "error_stats",
    "ErrorStats",
    "Simulation",
    "SimulationResult",
    "BERResult",
    "estimate_ber",
    "ber_sweep",
    "theoretical_ber",
]
