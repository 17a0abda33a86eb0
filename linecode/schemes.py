"""
Line-coding scheme identifiers and parameter validation.
"""

import numbers
from enum import Enum
from typing import Iterable, Union


class InvalidParameter(ValueError):
    """Raised when a codec call receives parameters it cannot work with."""


class Scheme(str, Enum):
    """
    Supported line codes.

    Members compare equal to their string value, so ``Scheme.AMI == "AMI"``.
    """

    NRZ = "NRZ"
    RZ = "RZ"
    NRZI = "NRZI"
    MANCHESTER = "Manchester"
    DIFF_MANCHESTER = "DiffManchester"
    AMI = "AMI"
    B8ZS = "B8ZS"
    HDB3 = "HDB3"

    @classmethod
    def parse(cls, value: Union["Scheme", str]) -> "Scheme":
        """
        Resolve a scheme from an enum member or a name.

        Matching is case-insensitive against both the value ("DiffManchester")
        and the member name ("DIFF_MANCHESTER").
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidParameter(f"Encoding scheme must be a string, got {type(value).__name__}")

        key = value.strip().lower()
        for scheme in cls:
            if key in (scheme.value.lower(), scheme.name.lower()):
                return scheme

        names = ", ".join(s.value for s in cls)
        raise InvalidParameter(f"Unknown encoding scheme: {value!r} (expected one of {names})")

    @property
    def full_name(self) -> str:
        return SCHEME_INFO[self][0]

    @property
    def description(self) -> str:
        return SCHEME_INFO[self][1]

    def __str__(self) -> str:
        return self.value


# (title, description) shown by front ends
SCHEME_INFO = {
    Scheme.NRZ: (
        "Non-Return to Zero (NRZ)",
        "The level stays constant for the whole bit: +V for 1, -V for 0. "
        "Simple, but long runs of equal bits carry no timing information.",
    ),
    Scheme.RZ: (
        "Return to Zero (RZ)",
        "The pulse (+V for 1, -V for 0) occupies the first half of the bit and "
        "the line returns to 0 V for the second half. Easier to clock, but "
        "needs twice the bandwidth of NRZ.",
    ),
    Scheme.NRZI: (
        "Non-Return to Zero Inverted (NRZI)",
        "A 1 inverts the line level, a 0 leaves it unchanged. Used by USB "
        "together with bit stuffing.",
    ),
    Scheme.MANCHESTER: (
        "Manchester",
        "Every bit has a mid-bit transition: low-to-high for 1, high-to-low "
        "for 0. Self-clocking; used by 10BASE-T Ethernet (IEEE 802.3).",
    ),
    Scheme.DIFF_MANCHESTER: (
        "Differential Manchester",
        "A transition at the start of the bit means 0, no transition means 1. "
        "The mid-bit transition is always present for clocking. Used by "
        "Token Ring.",
    ),
    Scheme.AMI: (
        "Alternate Mark Inversion (AMI)",
        "0 is sent as 0 V; each 1 is a pulse of the opposite polarity to the "
        "previous one. DC balanced, and a repeated polarity reveals an error. "
        "Used on T1/E1 lines.",
    ),
    Scheme.B8ZS: (
        "Bipolar with 8-Zero Substitution (B8ZS)",
        "AMI in which every run of eight zeros is replaced by 000VB0VB, where "
        "V repeats the polarity of the previous pulse. Keeps T1 receivers "
        "synchronized through long zero runs.",
    ),
    Scheme.HDB3: (
        "High-Density Bipolar of order 3 (HDB3)",
        "AMI in which every run of four zeros is replaced by 000V or B00V "
        "depending on the number of pulses since the last substitution. "
        "Used on E1 lines.",
    ),
}


def normalize_bits(bits: Union[str, Iterable]) -> str:
    """
    Return bits as a string of '0'/'1' characters.

    Accepts a string or any iterable of 0/1 ints or '0'/'1' characters.
    """
    if isinstance(bits, str):
        text = bits
    else:
        chars = []
        for bit in bits:
            if isinstance(bit, str):
                chars.append(bit)
            elif isinstance(bit, numbers.Integral) and int(bit) in (0, 1):
                chars.append(str(int(bit)))
            else:
                raise InvalidParameter(f"Bits must be 0 or 1, got {bit!r}")
        text = "".join(chars)

    bad = set(text) - {"0", "1"}
    if bad:
        raise InvalidParameter(f"Bit string contains invalid symbols: {''.join(sorted(bad))!r}")
    return text


def check_samples_per_bit(samples_per_bit) -> int:
    if isinstance(samples_per_bit, bool) or not isinstance(samples_per_bit, numbers.Integral):
        raise InvalidParameter(f"samples_per_bit must be an integer, got {samples_per_bit!r}")
    if samples_per_bit < 1:
        raise InvalidParameter(f"samples_per_bit must be >= 1, got {samples_per_bit}")
    return int(samples_per_bit)


def check_amplitude(amplitude) -> float:
    if isinstance(amplitude, bool) or not isinstance(amplitude, numbers.Real):
        raise InvalidParameter(f"amplitude must be a number, got {amplitude!r}")
    if not amplitude > 0:
        raise InvalidParameter(f"amplitude must be positive, got {amplitude}")
    return float(amplitude)
