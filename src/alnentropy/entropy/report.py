"""
Delimited report output for per-column entropy rows.
"""

from pathlib import Path
from typing import List, Union

import pandas as pd

from .models import Alphabet, EntropyRow

TRAILING_COLUMNS = [
    "Genome_count",
    "Notation_share",
    "Fraction_notations",
    "Shannon_entropy",
    "Validity",
]


def report_columns(alphabet: Alphabet) -> List[str]:
    """Header of the report for an alphabet, in output order."""
    return ["Position"] + [f"Count_{s}" for s in alphabet.explicit] + TRAILING_COLUMNS


def output_path_for(input_path: Union[str, Path], suffix: str) -> Path:
    """Report path: the input path with the suffix appended."""
    return Path(f"{input_path}{suffix}")


def rows_to_dataframe(rows: List[EntropyRow], alphabet: Alphabet) -> pd.DataFrame:
    """Build the report table, one row per alignment column."""
    return pd.DataFrame([row.to_dict() for row in rows], columns=report_columns(alphabet))


def write_report(
    rows: List[EntropyRow],
    alphabet: Alphabet,
    output_path: Union[str, Path],
    delimiter: str = ",",
) -> Path:
    """Write entropy rows as a delimited table.

    Args:
        rows: EntropyRow list in position order
        alphabet: Alphabet the rows were computed with
        output_path: Destination file
        delimiter: Single field separator character

    Returns:
        Path of the written report

    Raises:
        ValueError: If delimiter is not a single character
        OSError: If the file cannot be created
    """
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character: {delimiter!r}")

    output_path = Path(output_path)
    df = rows_to_dataframe(rows, alphabet)
    df.to_csv(output_path, sep=delimiter, index=False, lineterminator="\n")

    return output_path
