"""
Tests for the bit error comparator.
"""

import pytest

from linecode import InvalidParameter, find_errors, error_stats


class TestFindErrors:
    """Position-by-position comparison."""

    def test_single_error(self):
        assert find_errors("1010", "1110") == [1]

    def test_no_errors(self):
        assert find_errors("11", "11") == []

    def test_multiple_errors(self):
        assert find_errors("00000000", "01000011") == [1, 6, 7]

    def test_empty(self):
        assert find_errors("", "") == []

    def test_sequences(self):
        assert find_errors([1, 0, 1], "111") == [1]

    def test_length_mismatch_not_flagged(self):
        # Known limitation: only the common prefix is compared
        assert find_errors("1010", "10") == []
        assert find_errors("10", "1011") == []
        assert find_errors("1010", "0") == [0]

    def test_invalid_bits(self):
        with pytest.raises(InvalidParameter):
            find_errors("10x", "101")


class TestErrorStats:
    """Error counts, rate and accuracy."""

    def test_stats(self):
        stats = error_stats("1010", "1110")
        assert stats.errors == 1
        assert stats.compared == 4
        assert stats.bit_error_rate == 0.25
        assert stats.accuracy == 75.0

    def test_perfect(self):
        stats = error_stats("1101", "1101")
        assert stats.bit_error_rate == 0.0
        assert stats.accuracy == 100.0

    def test_compares_common_prefix(self):
        stats = error_stats("101010", "100")
        assert stats.compared == 3
        assert stats.errors == 1

    def test_empty(self):
        stats = error_stats("", "")
        assert stats.bit_error_rate == 0.0
        assert stats.accuracy == 100.0
