"""
Nucleotide alphabets for each counting mode.
"""

from typing import Union

from .models import Alphabet, AlphabetMode

STANDARD_DNA_NOTATIONS = "ATGC"
ALL_DNA_NOTATIONS = "ATGCUWSMKRYBDHVN"
DNA_ALIGNMENT_NOTATIONS = "-."
OTHER_BUCKET = "."


def get_alphabet(mode: Union[AlphabetMode, str]) -> Alphabet:
    """Return the counted alphabet for a mode.

    Args:
        mode: AlphabetMode or its value ("standard" / "all", any case)

    Returns:
        Alphabet with explicit symbols, gap notations and the other bucket

    Raises:
        ValueError: If the mode string is not recognised
    """
    if not isinstance(mode, AlphabetMode):
        try:
            mode = AlphabetMode(str(mode).strip().lower())
        except ValueError:
            valid = [m.value for m in AlphabetMode]
            raise ValueError(f"Unknown alphabet mode {mode!r}; expected one of {valid}")

    explicit = ALL_DNA_NOTATIONS if mode == AlphabetMode.ALL else STANDARD_DNA_NOTATIONS

    return Alphabet(
        mode=mode,
        explicit=tuple(explicit),
        gaps=tuple(DNA_ALIGNMENT_NOTATIONS),
        other=OTHER_BUCKET,
    )
