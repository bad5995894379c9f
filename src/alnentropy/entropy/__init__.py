"""
alnentropy entropy module: column-wise Shannon entropy of nucleotide alignments.

Key Features:
- Standard (ATGC) or full IUPAC alphabets, with gap/other buckets
- Concurrent per-sequence tally into a shared column accumulator
- Shannon entropy, coverage fraction and validity per column
- Delimited report output

Example Usage:
    >>> from alnentropy.config import Config
    >>> from alnentropy.entropy import report_entropy
    >>> report = report_entropy("alignment.fasta", Config(mode="standard", threads=8))
    >>> report.output_path
    PosixPath('alignment.fasta_output.csv')

    # Or directly on an open, validated stream:
    >>> from alnentropy.entropy import calculate_column_entropy
    >>> with open("alignment.fasta") as handle:
    ...     report = calculate_column_entropy(handle, mode="all", threads=4)
"""

# Data models
from .models import (
    Alphabet,
    AlphabetMode,
    EntropyReport,
    EntropyRow,
)

# Alphabet policy
from .alphabet import get_alphabet

# Accumulation
from .accumulator import ColumnAccumulator, initialise_accumulator
from .dispatcher import tally_sequences

# Reduction
from .scores import (
    coverage_fraction,
    get_entropy_summary,
    reduce_columns,
    shannon_entropy,
    validity_label,
)

# Output
from .report import (
    output_path_for,
    report_columns,
    rows_to_dataframe,
    write_report,
)

# High-level interface
from .engine import (
    batch_report_entropy,
    calculate_column_entropy,
    report_entropy,
)


__all__ = [
    # Models
    "Alphabet",
    "AlphabetMode",
    "EntropyReport",
    "EntropyRow",
    # Alphabet
    "get_alphabet",
    # Accumulation
    "ColumnAccumulator",
    "initialise_accumulator",
    "tally_sequences",
    # Reduction
    "coverage_fraction",
    "get_entropy_summary",
    "reduce_columns",
    "shannon_entropy",
    "validity_label",
    # Output
    "output_path_for",
    "report_columns",
    "rows_to_dataframe",
    "write_report",
    # High-level
    "batch_report_entropy",
    "calculate_column_entropy",
    "report_entropy",
]
