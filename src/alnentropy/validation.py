"""
FASTA alignment validation.

The entropy engine trusts its input: every record is a header line followed
by one or more sequence lines, and all records have the same length. This
module checks those properties and hands back an open stream for the engine.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple, Union

logger = logging.getLogger(__name__)

IUPAC_DNA_ALIGNMENT = set("ATGCUWSMKRYBDHVN-.")
IUPAC_DNA_ALIGNMENT_LOWER = set("atgcuwsmkrybdhvn")


def sequence_characters(line: str) -> str:
    """Alignment columns carried by a sequence line; whitespace is never a column."""
    return "".join(line.split())


@dataclass
class AlignmentValidationResult:
    """Result of alignment validation.

    Attributes:
        is_valid: Whether the alignment passed validation
        errors: List of critical errors
        warnings: List of non-critical warnings
        stats: Summary statistics about the alignment
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


class AlignmentFormatError(ValueError):
    """Raised when an alignment file fails validation."""

    def __init__(self, path: Union[str, Path], result: AlignmentValidationResult):
        self.path = path
        self.result = result
        super().__init__(f"Alignment {path} failed validation: {'; '.join(result.errors)}")


def validate_alignment(
    alignment_path: Union[str, Path],
    length_check: bool = True,
) -> AlignmentValidationResult:
    """
    Validate a FASTA alignment for entropy calculation.

    Args:
        alignment_path: Path to the alignment file
        length_check: If True, require every sequence to have the same length

    Returns:
        AlignmentValidationResult; stats holds num_sequences and alignment_length
    """
    errors: List[str] = []
    warnings: List[str] = []

    path = Path(alignment_path)
    if not path.exists():
        errors.append(f"Alignment file not found: {alignment_path}")
        return AlignmentValidationResult(is_valid=False, errors=errors)

    num_sequences = 0
    alignment_length: Optional[int] = None
    header: Optional[str] = None
    current_length = 0
    in_sequence = False
    interrupted = False

    def _close_record(line_number: int) -> None:
        nonlocal alignment_length
        if header is None or not length_check:
            return
        if alignment_length is None:
            logger.debug(f"Alignment length set as {current_length}")
            alignment_length = current_length
        elif current_length != alignment_length:
            errors.append(
                f"Line {line_number}: {header} has length {current_length}, "
                f"does not match alignment length {alignment_length}"
            )

    line_number = 0
    with open(path, "r") as f:
        for line in f:
            line_number += 1
            stripped = line.strip()
            residues = sequence_characters(line)

            if line.startswith(">"):
                if header is not None and not in_sequence:
                    errors.append(
                        f"Line {line_number}: No sequence encountered in between headers for {header}"
                    )
                else:
                    _close_record(line_number)
                header = stripped
                num_sequences += 1
                in_sequence = False
                interrupted = False
                current_length = 0

            elif not residues:
                if header is not None and not in_sequence:
                    errors.append(
                        f"Line {line_number}: Header {header} interrupted by newline before sequence"
                    )
                elif in_sequence:
                    interrupted = True

            elif residues[0] in IUPAC_DNA_ALIGNMENT or residues[0] in IUPAC_DNA_ALIGNMENT_LOWER:
                if header is None:
                    errors.append(f"Line {line_number}: Encountered sequence before header")
                elif interrupted:
                    errors.append(
                        f"Line {line_number}: Sequence of {header} interrupted by newline"
                    )
                in_sequence = True
                current_length += len(residues)

            else:
                warnings.append(f"Line {line_number}: Unexpected line start {stripped[:20]!r}")
                if header is None:
                    errors.append(f"Line {line_number}: Encountered sequence before header")
                in_sequence = True
                current_length += len(residues)

            if len(errors) >= 10:
                errors.append("Too many errors; stopping validation")
                break
        else:
            if header is not None and not in_sequence:
                errors.append(f"Line {line_number}: No sequence found for {header}")
            else:
                _close_record(line_number)

    if num_sequences == 0 and not errors:
        errors.append(f"No sequences found in alignment: {alignment_path}")

    stats = {
        "num_sequences": num_sequences,
        "alignment_length": alignment_length or 0,
    }

    return AlignmentValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        stats=stats,
    )


def open_alignment(
    alignment_path: Union[str, Path],
    length_check: bool = True,
) -> Tuple[TextIO, AlignmentValidationResult]:
    """
    Validate an alignment and open it for the entropy engine.

    Args:
        alignment_path: Path to the alignment file
        length_check: If True, require every sequence to have the same length

    Returns:
        Tuple of (open text handle at offset 0, validation result).
        The caller owns the handle.

    Raises:
        FileNotFoundError: If the file does not exist
        AlignmentFormatError: If validation fails
    """
    path = Path(alignment_path)
    if not path.exists():
        raise FileNotFoundError(f"Alignment file not found: {alignment_path}")

    result = validate_alignment(path, length_check=length_check)
    for warning in result.warnings:
        logger.warning(f"{path.name}: {warning}")

    if not result.is_valid:
        for error in result.errors:
            logger.error(f"{path.name}: {error}")
        raise AlignmentFormatError(path, result)

    logger.info(
        f"Alignment complies requirements {path}: {result.stats['num_sequences']} sequences, "
        f"length {result.stats['alignment_length']}"
    )
    return open(path, "r"), result
