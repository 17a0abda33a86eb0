"""
Tests for scheme identifiers and parameter checks.
"""

import pytest

from linecode import Scheme, InvalidParameter, SCHEME_INFO
from linecode.schemes import normalize_bits, check_samples_per_bit, check_amplitude


class TestScheme:

    def test_string_equality(self):
        assert Scheme.AMI == "AMI"
        assert Scheme.DIFF_MANCHESTER == "DiffManchester"
        assert str(Scheme.HDB3) == "HDB3"

    @pytest.mark.parametrize("name, expected", [
        ("NRZ", Scheme.NRZ),
        ("nrzi", Scheme.NRZI),
        ("manchester", Scheme.MANCHESTER),
        ("DiffManchester", Scheme.DIFF_MANCHESTER),
        ("diff_manchester", Scheme.DIFF_MANCHESTER),
        (" b8zs ", Scheme.B8ZS),
        (Scheme.HDB3, Scheme.HDB3),
    ])
    def test_parse(self, name, expected):
        assert Scheme.parse(name) is expected

    @pytest.mark.parametrize("name", ["", "NRZ-L", "Bipolar", 3])
    def test_parse_unknown(self, name):
        with pytest.raises(InvalidParameter):
            Scheme.parse(name)

    def test_every_scheme_described(self):
        assert set(SCHEME_INFO) == set(Scheme)
        for scheme in Scheme:
            assert scheme.full_name
            assert scheme.description


class TestValidation:

    def test_normalize_bits(self):
        assert normalize_bits("0110") == "0110"
        assert normalize_bits([0, 1, 1]) == "011"
        assert normalize_bits(("1", "0")) == "10"
        assert normalize_bits([]) == ""

    @pytest.mark.parametrize("bits", ["01a", [True, 2], [0.5]])
    def test_normalize_bits_rejects(self, bits):
        with pytest.raises(InvalidParameter):
            normalize_bits(bits)

    def test_samples_per_bit(self):
        assert check_samples_per_bit(8) == 8
        with pytest.raises(InvalidParameter):
            check_samples_per_bit(True)
        with pytest.raises(InvalidParameter):
            check_samples_per_bit(0)

    def test_amplitude(self):
        assert check_amplitude(2) == 2.0
        with pytest.raises(InvalidParameter):
            check_amplitude(-0.1)
        with pytest.raises(InvalidParameter):
            check_amplitude("1.0")
