"""
Data models for column-wise entropy reporting.

This module defines the alphabet description shared by the accumulator,
reducer and report emitter, and the per-column report rows.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class AlphabetMode(Enum):
    """Which nucleotide notations are counted explicitly."""
    STANDARD = "standard"
    ALL = "all"


@dataclass(frozen=True)
class Alphabet:
    """Symbols counted for one alphabet mode.

    Attributes:
        mode: The mode this alphabet was built for
        explicit: Upper-case symbols that contribute to coverage and entropy
        gaps: Gap notations, counted but excluded from entropy
        other: Bucket symbol absorbing every character outside explicit + gaps
    """
    mode: AlphabetMode
    explicit: Tuple[str, ...]
    gaps: Tuple[str, ...] = ("-", ".")
    other: str = "."

    @property
    def symbols(self) -> Tuple[str, ...]:
        """All counted symbols, explicit first, in counter-column order."""
        return self.explicit + self.gaps


@dataclass(frozen=True)
class EntropyRow:
    """Entropy statistics for one alignment column.

    Attributes:
        position: 1-based column position
        counts: Count of each explicit symbol, in alphabet order
        sequence_count: Number of sequences in the alignment
        notation_share: Sum of the explicit symbol counts
        coverage_fraction: notation_share / sequence_count
        shannon_entropy: Entropy in bits over the explicit symbols
        validity: "Valid. Threshold = t" or "Invalid. Threshold = t"
    """
    position: int
    counts: Dict[str, int]
    sequence_count: int
    notation_share: int
    coverage_fraction: float
    shannon_entropy: float
    validity: str

    @property
    def is_valid(self) -> bool:
        return self.validity.startswith("Valid")

    def to_dict(self) -> Dict:
        """Convert to an ordered dict matching the report header."""
        row = {"Position": self.position}
        for symbol, count in self.counts.items():
            row[f"Count_{symbol}"] = count
        row["Genome_count"] = self.sequence_count
        row["Notation_share"] = self.notation_share
        row["Fraction_notations"] = self.coverage_fraction
        row["Shannon_entropy"] = self.shannon_entropy
        row["Validity"] = self.validity
        return row


@dataclass
class EntropyReport:
    """Result of one entropy run over an alignment.

    Attributes:
        alphabet: Alphabet used for counting
        threshold: Coverage threshold used for validity
        sequence_count: Number of sequence records processed
        alignment_length: Number of columns
        rows: One EntropyRow per column, in position order
        input_path: Alignment file, if the run was file based
        output_path: Report file, if one was written
        summary: Summary statistics over the rows
    """
    alphabet: Alphabet
    threshold: float
    sequence_count: int
    alignment_length: int
    rows: List[EntropyRow] = field(default_factory=list)
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    summary: Dict = field(default_factory=dict)
