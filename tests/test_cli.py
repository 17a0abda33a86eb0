"""
Tests for the linecode command line.
"""

from click.testing import CliRunner

from linecode.cli import main, format_bits


def run(*args, **kwargs):
    return CliRunner().invoke(main, list(args), **kwargs)


class TestEncodeCommand:

    def test_symbols(self):
        result = run("encode", "10110", "-e", "Manchester", "-n", "4")
        assert result.exit_code == 0
        assert "Symbols: -+--+" in result.output
        assert "Samples: 20" in result.output

    def test_samples_flag(self):
        result = run("encode", "10", "-e", "NRZ", "-n", "2", "--samples")
        assert result.exit_code == 0
        assert "1 1 -1 -1" in result.output

    def test_case_insensitive_scheme(self):
        result = run("encode", "110000", "-e", "hdb3")
        assert result.exit_code == 0
        assert "Symbols: +-000-" in result.output

    def test_invalid_bits(self):
        result = run("encode", "10a", "-e", "NRZ")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_samples_per_bit(self):
        result = run("encode", "101", "-e", "NRZ", "-n", "0")
        assert result.exit_code == 1


class TestDecodeCommand:

    def test_stdin(self):
        result = run("decode", "-e", "NRZ", "-n", "2", input="1 1 -1 -1\n0.9 0.8\n")
        assert result.exit_code == 0
        assert result.output.strip() == "101"

    def test_arguments(self):
        result = run("decode", "-e", "AMI", "-n", "2", "1", "1", "0", "0")
        assert result.exit_code == 0
        assert result.output.strip() == "10"

    def test_bad_number(self):
        result = run("decode", "-e", "NRZ", "-n", "2", input="1 x\n")
        assert result.exit_code == 1


class TestSimulateCommand:

    def test_clean(self):
        result = run("simulate", "110000", "-e", "HDB3", "-n", "10")
        assert result.exit_code == 0
        assert "Symbols:  +-000-" in result.output
        assert "Errors:   none" in result.output
        assert "Accuracy: 100.0%" in result.output

    def test_noisy(self):
        result = run("simulate", "10" * 50, "-e", "AMI", "--noise", "2.0", "--seed", "1")
        assert result.exit_code == 0
        assert "Errors:   none" not in result.output


class TestBerCommand:

    def test_table(self):
        result = run("ber", "-e", "NRZ", "--noise", "0.4", "--noise", "0.2",
                     "-t", "5", "-b", "50", "-n", "4", "--seed", "1")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert "noise_std" in lines[0]
        assert len(lines) == 3
        assert lines[1].split()[0] == "0.200"

    def test_no_theory_for_hdb3(self):
        result = run("ber", "-e", "HDB3", "--noise", "0.3", "-t", "2", "-b", "32", "--seed", "1")
        assert result.exit_code == 0
        assert result.output.strip().splitlines()[1].split()[-1] == "-"

    def test_hdb3_ambiguity_note(self):
        result = run("ber", "-e", "hdb3", "--noise", "0", "-t", "4", "-b", "256", "-n", "4", "--seed", "1")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert lines[-1].startswith("Note: HDB3 B00V")

    def test_no_note_for_other_schemes(self):
        result = run("ber", "-e", "AMI", "--noise", "0", "-t", "2", "-b", "32", "--seed", "1")
        assert result.exit_code == 0
        assert "Note:" not in result.output


class TestSchemesCommand:

    def test_lists_all(self):
        result = run("schemes")
        assert result.exit_code == 0
        for name in ("NRZ", "RZ", "NRZI", "Manchester", "DiffManchester", "AMI", "B8ZS", "HDB3"):
            assert name in result.output


class TestFormatBits:

    def test_marks_errors(self):
        assert format_bits("1010", [1, 3]) == "1[0]1[0]"

    def test_wraps(self):
        assert format_bits("1" * 6, width=4) == "1111\n11"
