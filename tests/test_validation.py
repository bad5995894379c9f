"""Tests for the validation module."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from alnentropy.validation import (
    AlignmentFormatError,
    open_alignment,
    validate_alignment,
)


class TestValidateAlignment:
    """Tests for validate_alignment function."""

    def test_valid_alignment(self, tmp_path):
        """Test a well-formed alignment passes."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\nTT\n>seq2\nAT-C\nTA\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is True
        assert result.errors == []
        assert result.stats == {"num_sequences": 2, "alignment_length": 6}

    def test_blank_lines_between_records(self, tmp_path):
        """Test blank lines separating records are accepted."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text("\n>seq1\nATGC\n\n>seq2\natgc\n\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is True
        assert result.stats["num_sequences"] == 2

    def test_whitespace_inside_sequence_lines_is_not_counted(self, tmp_path):
        """Test interior spaces and leading tabs do not add to the length."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nAT GC\n>seq2\n\tATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is True
        assert result.stats["alignment_length"] == 4

    def test_indented_header_is_sequence_content(self, tmp_path):
        """Test only a line starting with ">" opens a record."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n >seq2\n")

        result = validate_alignment(fasta_file)

        assert result.stats["num_sequences"] == 1
        assert result.stats["alignment_length"] == 9
        assert len(result.warnings) == 1

    def test_unequal_lengths(self, tmp_path):
        """Test unequal sequence lengths are rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n>seq2\nATG\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("does not match alignment length" in e for e in result.errors)

    def test_unequal_lengths_without_length_check(self, tmp_path):
        """Test the length check can be disabled."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n>seq2\nATG\n")

        result = validate_alignment(fasta_file, length_check=False)

        assert result.is_valid is True

    def test_sequence_before_header(self, tmp_path):
        """Test sequence content before the first header is rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text("ATGC\n>seq1\nATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("before header" in e for e in result.errors)

    def test_consecutive_headers(self, tmp_path):
        """Test a header without sequence is rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\n>seq2\nATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("No sequence encountered" in e for e in result.errors)

    def test_trailing_header(self, tmp_path):
        """Test a final header without sequence is rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n>seq2\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("No sequence found for >seq2" in e for e in result.errors)

    def test_header_interrupted_by_newline(self, tmp_path):
        """Test a blank line between header and sequence is rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\n\nATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("interrupted by newline" in e for e in result.errors)

    def test_sequence_interrupted_by_newline(self, tmp_path):
        """Test a blank line inside a sequence is rejected."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nAT\n\nGC\n>seq2\nATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("Sequence of >seq1 interrupted" in e for e in result.errors)

    def test_unexpected_line_start_is_warning(self, tmp_path):
        """Test lines starting with non-IUPAC characters only warn."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nXTGC\n>seq2\nATGC\n")

        result = validate_alignment(fasta_file)

        assert result.is_valid is True
        assert len(result.warnings) == 1

    def test_empty_file(self, tmp_path):
        """Test an empty file has no sequences."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text("")

        result = validate_alignment(fasta_file)

        assert result.is_valid is False
        assert any("No sequences found" in e for e in result.errors)

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported as an error."""
        result = validate_alignment(tmp_path / "missing.fasta")

        assert result.is_valid is False
        assert "not found" in result.errors[0]


class TestOpenAlignment:
    """Tests for open_alignment function."""

    def test_returns_handle_at_start(self, tmp_path):
        """Test a valid alignment is returned open at offset 0."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n>seq2\nATGA\n")

        handle, result = open_alignment(fasta_file)
        with handle:
            assert handle.tell() == 0
            assert handle.readline() == ">seq1\n"
        assert result.stats["alignment_length"] == 4

    def test_invalid_alignment_raises(self, tmp_path):
        """Test an invalid alignment raises with the validation result."""
        fasta_file = tmp_path / "aln.fasta"
        fasta_file.write_text(">seq1\nATGC\n>seq2\nAT\n")

        with pytest.raises(AlignmentFormatError) as excinfo:
            open_alignment(fasta_file)

        assert excinfo.value.result.is_valid is False
        assert isinstance(excinfo.value, ValueError)

    def test_missing_file_raises(self, tmp_path):
        """Test a missing alignment raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            open_alignment(tmp_path / "missing.fasta")
