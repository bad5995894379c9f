"""
Column entropy reporting for whole alignments.

This module provides the high-level interface: it ties together alignment
validation, accumulator initialisation, the concurrent tally, the entropy
reduction and the report output.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Union

from alnentropy.config import Config, get_config
from alnentropy.validation import open_alignment

from .accumulator import initialise_accumulator
from .alphabet import get_alphabet
from .dispatcher import tally_sequences
from .models import AlphabetMode, EntropyReport
from .report import output_path_for, write_report
from .scores import get_entropy_summary, reduce_columns


def calculate_column_entropy(
    handle: TextIO,
    mode: Union[AlphabetMode, str] = AlphabetMode.STANDARD,
    threshold: float = 0.8,
    threads: int = 1,
    expected_length: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> EntropyReport:
    """Compute per-column entropy for an already validated alignment stream.

    Args:
        handle: Open, seekable FASTA alignment stream
        mode: Alphabet mode ("standard" or "all")
        threshold: Minimum coverage fraction for a valid column
        threads: Worker pool size for the tally
        expected_length: Alignment length certified by the validator, if known
        logger: Optional diagnostics sink passed to every stage

    Returns:
        EntropyReport with one row per column (no file is written)

    Raises:
        ValueError: For an invalid mode, threshold or thread count
        OSError: If reading the stream fails
    """
    log = logger or logging.getLogger(__name__)
    alphabet = get_alphabet(mode)

    accumulator = initialise_accumulator(
        handle, alphabet, expected_length=expected_length, logger=logger
    )
    log.info("Positions initialised")

    sequence_count = tally_sequences(handle, accumulator, threads, logger=logger)

    log.info(f"Notations considered to calculate Shannon entropy: {''.join(alphabet.explicit)}")
    rows = reduce_columns(accumulator, sequence_count, threshold)

    return EntropyReport(
        alphabet=alphabet,
        threshold=threshold,
        sequence_count=sequence_count,
        alignment_length=len(accumulator),
        rows=rows,
        summary=get_entropy_summary(rows),
    )


def report_entropy(
    alignment_path: Union[str, Path],
    config: Optional[Config] = None,
    logger: Optional[logging.Logger] = None,
) -> EntropyReport:
    """Validate an alignment file, compute column entropy and write the report.

    The report is written to the alignment path with config.output_suffix
    appended. Nothing is written if any earlier stage fails.

    Args:
        alignment_path: Path to the FASTA alignment
        config: Run configuration (defaults to the global configuration)
        logger: Optional diagnostics sink

    Returns:
        EntropyReport with input_path and output_path set

    Raises:
        FileNotFoundError: If the alignment does not exist
        AlignmentFormatError: If the alignment fails validation
        ValueError: If the configuration is invalid
        OSError: If reading the alignment or writing the report fails
    """
    log = logger or logging.getLogger(__name__)
    config = config or get_config()

    is_valid, errors = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    alignment_path = Path(alignment_path)
    handle, validation = open_alignment(alignment_path)
    with handle:
        report = calculate_column_entropy(
            handle,
            mode=config.mode,
            threshold=config.threshold,
            threads=config.threads,
            expected_length=validation.stats.get("alignment_length"),
            logger=logger,
        )

    output_path = output_path_for(alignment_path, config.output_suffix)
    log.info(f"Output file: {output_path}")
    write_report(report.rows, report.alphabet, output_path, delimiter=config.delimiter)

    report.input_path = alignment_path
    report.output_path = output_path
    return report


def batch_report_entropy(
    alignment_paths: List[Union[str, Path]],
    config: Optional[Config] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Optional[EntropyReport]]:
    """Report entropy for several alignments, isolating failures per file.

    Args:
        alignment_paths: Alignment files to process
        config: Run configuration shared by every file
        logger: Optional diagnostics sink

    Returns:
        Dictionary mapping input paths to their EntropyReport, or None if
        that file failed
    """
    log = logger or logging.getLogger(__name__)
    results: Dict[str, Optional[EntropyReport]] = {}

    for alignment_path in alignment_paths:
        log.debug(f"Processing file: {alignment_path}")
        try:
            results[str(alignment_path)] = report_entropy(alignment_path, config=config, logger=logger)
        except (OSError, ValueError) as e:
            log.error(f"Error processing {alignment_path}: {e}")
            results[str(alignment_path)] = None

    return results
