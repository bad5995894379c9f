"""
Per-column symbol counters shared by the tally workers.

The accumulator is a (columns x symbols) integer matrix. Each worker
translates a whole sequence into counter indices through a lookup table
built once from the alphabet, then increments one counter per column while
holding a single lock, so concurrent sequences never lose an update.
"""

import logging
import threading
from typing import Dict, Optional, TextIO

import numpy as np

from ..validation import sequence_characters
from .models import Alphabet


class ColumnAccumulator:
    """Symbol counts for every column of an alignment.

    Args:
        length: Alignment length (number of columns)
        alphabet: Alphabet whose counted symbols form the counter columns
        logger: Optional diagnostics sink for unexpected characters
    """

    def __init__(self, length: int, alphabet: Alphabet, logger: Optional[logging.Logger] = None):
        if length < 0:
            raise ValueError(f"Alignment length must not be negative: {length}")
        self.alphabet = alphabet
        self.logger = logger or logging.getLogger(__name__)
        self._counts = np.zeros((length, len(alphabet.symbols)), dtype=np.int64)
        self._lock = threading.Lock()

        self._other_index = alphabet.symbols.index(alphabet.other)
        # Byte value -> counter column; both cases map to the same column
        self._lookup = np.full(256, self._other_index, dtype=np.intp)
        self._known = np.zeros(256, dtype=bool)
        for idx, symbol in enumerate(alphabet.symbols):
            for variant in {symbol.upper(), symbol.lower()}:
                self._lookup[ord(variant)] = idx
                self._known[ord(variant)] = True

    def __len__(self) -> int:
        return self._counts.shape[0]

    @property
    def symbols(self):
        return self.alphabet.symbols

    @property
    def counts(self) -> np.ndarray:
        """Copy of the counter matrix (columns x symbols)."""
        with self._lock:
            return self._counts.copy()

    def column(self, index: int) -> Dict[str, int]:
        """Counts at one 0-based column, keyed by symbol."""
        with self._lock:
            row = self._counts[index]
            return {symbol: int(row[i]) for i, symbol in enumerate(self.symbols)}

    def add_sequence(self, header: str, sequence: str) -> None:
        """Count every character of one aligned sequence.

        Characters outside the alphabet are counted in the other bucket
        and reported as a warning; they never abort the tally.

        Raises:
            ValueError: If the sequence is longer than the alignment
        """
        if len(sequence) > len(self):
            raise ValueError(
                f"{header} has {len(sequence)} characters; alignment length is {len(self)}"
            )

        # Non-ASCII characters become "?" one-for-one, keeping positions intact
        codes = np.frombuffer(sequence.encode("ascii", errors="replace"), dtype=np.uint8)
        indices = self._lookup[codes]

        for position in np.flatnonzero(~self._known[codes]):
            self.logger.warning(
                f"Position: {position} in {header} contains non-permissible character: "
                f"{sequence[position]}"
            )

        columns = np.arange(len(indices))
        with self._lock:
            # One (column, symbol) pair per column, so fancy-index increment is exact
            self._counts[columns, indices] += 1


def initialise_accumulator(
    handle: TextIO,
    alphabet: Alphabet,
    expected_length: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> ColumnAccumulator:
    """Size a ColumnAccumulator from the first record of an alignment stream.

    Reads the first record (its header is skipped), summing the length of
    its sequence lines with all whitespace removed. The estimate is cross-checked against the
    concatenated sequence and, when given, the length certified by the
    validator; a disagreement is logged but does not abort. The stream is
    rewound to its start before returning.

    Args:
        handle: Open, seekable alignment stream
        alphabet: Alphabet whose symbols are counted
        expected_length: Alignment length reported by the validator, if known
        logger: Optional diagnostics sink

    Returns:
        Zero-initialised ColumnAccumulator
    """
    log = logger or logging.getLogger(__name__)
    log.debug("Preparing the columns for analysis")

    handle.seek(0)
    parts = []
    length = 0
    in_record = False
    for line in iter(handle.readline, ""):
        if line.startswith(">"):
            if in_record and length:
                break
            log.debug(f"Assessing alignment length from {line.strip()}")
            in_record = True
            continue
        residues = sequence_characters(line)
        if not residues or not in_record:
            continue
        length += len(residues)
        parts.append(residues)

    sequence = "".join(parts)
    if len(sequence) != length:
        log.warning(
            f"Check the discrepancy in the length estimated from genome and "
            f"character count {len(sequence)} {length} respectively"
        )
    elif expected_length is not None and expected_length != length:
        log.warning(
            f"First sequence has {length} characters but the validated alignment "
            f"length is {expected_length}"
        )
    else:
        log.info(f"Length of every genome in this alignment is {length}, and the values agree")

    log.info(f"Initialising counts for {''.join(alphabet.symbols)} at each of {length} positions")
    accumulator = ColumnAccumulator(length, alphabet, logger=logger)

    handle.seek(0)
    log.debug("Reset file buffer position to start")
    return accumulator
