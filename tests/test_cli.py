"""Tests for the alnentropy command line."""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from alnentropy.cli import build_parser, main

ALIGNMENT = ">seq1\nATGC\n>seq2\nATGA\n>seq3\nATGC\n"


@pytest.fixture
def alignment_file(tmp_path):
    path = tmp_path / "aln.fasta"
    path.write_text(ALIGNMENT)
    return path


class TestParser:
    """Tests for argument parsing."""

    def test_required_arguments(self):
        """Test infile and mode are required."""
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["-m", "standard"])
        assert excinfo.value.code == 2

    def test_repeatable_infile(self, tmp_path):
        """Test several alignments can be given."""
        args = build_parser().parse_args(["-i", "a.fasta", "-i", "b.fasta", "-m", "Standard"])
        assert [str(p) for p in args.input_alignment] == ["a.fasta", "b.fasta"]
        assert args.mode == "standard"

    @pytest.mark.parametrize("value", ["1.5", "-0.2", "abc"])
    def test_threshold_out_of_range(self, value):
        """Test thresholds outside 0 - 1 are rejected."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-i", "a.fasta", "-m", "all", "-t", value])

    def test_tab_delimiter_escape(self):
        """Test a literal backslash-t is read as a tab."""
        args = build_parser().parse_args(["-i", "a.fasta", "-m", "all", "-d", "\\t"])
        assert args.delimiter == "\t"

    def test_zero_threads_rejected(self):
        """Test the worker pool must have at least one thread."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-i", "a.fasta", "-m", "all", "-n", "0"])


class TestMain:
    """Tests for the main entry point."""

    @patch.dict(os.environ, {"ALNENTROPY_SUFFIX": ""})
    def test_main_writes_report(self, alignment_file):
        """Test a successful run writes the default report and exits 0."""
        code = main(["-i", str(alignment_file), "-m", "standard", "-n", "2"])

        assert code == 0
        out = alignment_file.parent / "aln.fasta_output.csv"
        df = pd.read_csv(out)
        assert len(df) == 4
        assert df.loc[0, "Count_A"] == 3

    def test_main_custom_options(self, alignment_file):
        """Test suffix and delimiter options are honoured."""
        code = main([
            "-i", str(alignment_file), "-m", "all", "-t", "0.5",
            "-s", ".tsv", "-d", "\\t", "-n", "1",
        ])

        assert code == 0
        df = pd.read_csv(f"{alignment_file}.tsv", sep="\t")
        assert "Count_N" in df.columns
        assert df.loc[0, "Validity"] == "Valid. Threshold = 0.5"

    def test_main_reports_failure(self, alignment_file, tmp_path):
        """Test a failing input gives exit code 1 but others are processed."""
        bad = tmp_path / "bad.fasta"
        bad.write_text(">seq1\nATGC\n>seq2\nA\n")

        code = main(["-i", str(bad), "-i", str(alignment_file), "-m", "standard", "-s", "_out.csv"])

        assert code == 1
        assert (tmp_path / "aln.fasta_out.csv").exists()
        assert not (tmp_path / "bad.fasta_out.csv").exists()
