"""
alnentropy Command-Line Interface

Entry point for the alnentropy command.

Usage:
    # Standard ATGC entropy, default threshold 0.8
    alnentropy -i alignment.fasta -m standard

    # Several alignments, all IUPAC notations, tab-separated output
    alnentropy -i a.fasta -i b.fasta -m all -t 0.9 -d $'\\t' -n 8
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from alnentropy import __version__
from alnentropy.config import Config, VALID_MODES
from alnentropy.entropy import batch_report_entropy
from alnentropy.logging import setup_logging


def _percent(value: str) -> float:
    try:
        threshold = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Threshold must be a number: {value!r}")
    if not 0.0 <= threshold <= 1.0:
        raise argparse.ArgumentTypeError(f"Threshold not in the range 0 - 1: {value}")
    return threshold


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer: {value}")
    return number


def _single_char(value: str) -> str:
    if value == "\\t":
        return "\t"
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"Delimiter must be a single character: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alnentropy",
        description="Calculate Shannon entropy at each position of a nucleotide alignment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-i", "--infile",
        dest="input_alignment",
        action="append",
        required=True,
        type=Path,
        help="Path to alignment file stored in FASTA format (repeatable)",
    )
    parser.add_argument(
        "-m", "--mode",
        required=True,
        type=str.lower,
        choices=VALID_MODES,
        help="Count 'all' IUPAC DNA notations or only the 'standard' ATGC (recommended: standard)",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=_percent,
        default=None,
        help="Minimum fraction of counted notations for a valid column (default: 0.8)",
    )
    parser.add_argument(
        "-s", "--output-suffix",
        default=None,
        help="Suffix appended to the input path for the report (default: _output.csv)",
    )
    parser.add_argument(
        "-d", "--delimiter",
        type=_single_char,
        default=None,
        help="Field delimiter of the report (default: ',')",
    )
    parser.add_argument(
        "-n", "--threads",
        type=_positive_int,
        default=None,
        help="Number of worker threads (default: 16)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug messages",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log messages to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the alnentropy command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging("alnentropy", log_file=args.log_file, verbose=args.verbose)

    config = Config(
        mode=args.mode,
        threshold=args.threshold,
        threads=args.threads,
        output_suffix=args.output_suffix,
        delimiter=args.delimiter,
    )
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            logger.error(error)
        return 1

    logger.debug(f"Configuration: {config.to_dict()}")
    results = batch_report_entropy(args.input_alignment, config=config, logger=logger)

    failed = [path for path, report in results.items() if report is None]
    for path, report in results.items():
        if report is None:
            continue
        summary = report.summary
        logger.info(
            f"{path}: {report.sequence_count} sequences, {report.alignment_length} positions, "
            f"{summary.get('valid_positions', 0)} valid, "
            f"mean entropy {summary.get('mean_entropy', 0):.3f} -> {report.output_path}"
        )

    if failed:
        logger.error(f"{len(failed)} of {len(results)} alignment(s) failed: {', '.join(failed)}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
