"""
Bit-error comparison between transmitted and recovered bit strings.
"""

from dataclasses import dataclass
from typing import List

from .schemes import normalize_bits


def find_errors(original, decoded) -> List[int]:
    """
    Positions where the two bit strings differ.

    Only the common prefix is compared. Extra or missing trailing bits are
    not reported as errors.
    """
    original = normalize_bits(original)
    decoded = normalize_bits(decoded)

    return [
        i for i, (sent, received) in enumerate(zip(original, decoded))
        if sent != received
    ]


@dataclass(frozen=True)
class ErrorStats:
    """Summary of one original/decoded comparison."""

    errors: int
    compared: int

    @property
    def bit_error_rate(self) -> float:
        if self.compared == 0:
            return 0.0
        return self.errors / self.compared

    @property
    def accuracy(self) -> float:
        """Percentage of compared bits that were recovered correctly."""
        if self.compared == 0:
            return 100.0
        return (self.compared - self.errors) / self.compared * 100.0


def error_stats(original, decoded) -> ErrorStats:
    original = normalize_bits(original)
    decoded = normalize_bits(decoded)
    return ErrorStats(
        errors=len(find_errors(original, decoded)),
        compared=min(len(original), len(decoded)),
    )
