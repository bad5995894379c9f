"""
alnentropy: column-wise Shannon entropy for nucleotide alignments

Tallies the nucleotide symbols at every column of a FASTA alignment with a
pool of worker threads, and reports per-column entropy, coverage and
validity to flag poorly conserved or poorly covered positions.
"""

__version__ = "0.3.0"

from alnentropy.config import Config, get_config
from alnentropy.validation import AlignmentFormatError, open_alignment, validate_alignment
from alnentropy.logging import setup_logging
from alnentropy.entropy import batch_report_entropy, calculate_column_entropy, report_entropy

__all__ = [
    "Config",
    "get_config",
    "AlignmentFormatError",
    "open_alignment",
    "validate_alignment",
    "setup_logging",
    "batch_report_entropy",
    "calculate_column_entropy",
    "report_entropy",
    "__version__",
]
