"""
Entropy and coverage calculations over tallied alignment columns.

Only the explicit symbols of the alphabet contribute to coverage and
entropy; gap and other counts are excluded. Probabilities are taken over
the total number of sequences, so a partly gapped column has a coverage
fraction below 1 and a correspondingly reduced entropy sum.
"""

import math
from typing import Dict, List, Sequence

from .accumulator import ColumnAccumulator
from .models import EntropyRow


def shannon_entropy(counts: Sequence[float], total: float) -> float:
    """Calculate Shannon entropy for one column.

    H = -sum(p_i * log2(p_i)) with p_i = count_i / total. A zero count
    contributes 0 (the limit of p*log2(p) as p -> 0), so the result is
    never NaN.

    Args:
        counts: Counts of the symbols taking part in the entropy
        total: Denominator for the probabilities (number of sequences)

    Returns:
        Shannon entropy in bits; 0.0 if total is 0
    """
    if total <= 0:
        return 0.0

    entropy = 0.0
    for count in counts:
        if count > 0:
            p = count / total
            entropy -= p * math.log2(p)

    return entropy


def coverage_fraction(notation_share: float, sequence_count: int) -> float:
    """Fraction of sequences carrying an explicit symbol at a column."""
    if sequence_count <= 0:
        return 0.0
    return notation_share / sequence_count


def validity_label(fraction: float, threshold: float) -> str:
    """Validity verdict for a column, noting the threshold used."""
    if fraction >= threshold:
        return f"Valid. Threshold = {threshold}"
    return f"Invalid. Threshold = {threshold}"


def reduce_columns(
    accumulator: ColumnAccumulator,
    sequence_count: int,
    threshold: float,
) -> List[EntropyRow]:
    """Reduce tallied counts to one EntropyRow per column.

    Must only be called once every tally worker has finished.

    Args:
        accumulator: Fully tallied column counts
        sequence_count: Number of sequences counted into the accumulator
        threshold: Minimum coverage fraction for a valid column, in [0, 1]

    Returns:
        EntropyRow list in position order (positions are 1-based)

    Raises:
        ValueError: If threshold is outside [0, 1]
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Threshold not in the range 0 - 1: {threshold}")

    explicit = accumulator.alphabet.explicit
    symbols = accumulator.symbols
    explicit_idx = [symbols.index(s) for s in explicit]
    counts = accumulator.counts

    rows: List[EntropyRow] = []
    for col_idx in range(len(accumulator)):
        column_counts = [int(counts[col_idx, i]) for i in explicit_idx]
        notation_share = sum(column_counts)
        fraction = coverage_fraction(notation_share, sequence_count)

        rows.append(
            EntropyRow(
                position=col_idx + 1,
                counts=dict(zip(explicit, column_counts)),
                sequence_count=sequence_count,
                notation_share=notation_share,
                coverage_fraction=fraction,
                shannon_entropy=shannon_entropy(column_counts, sequence_count),
                validity=validity_label(fraction, threshold),
            )
        )

    return rows


def get_entropy_summary(rows: List[EntropyRow]) -> Dict:
    """Get summary statistics over the reported columns.

    Args:
        rows: EntropyRow list from reduce_columns

    Returns:
        Dictionary with summary statistics
    """
    if not rows:
        return {}

    entropies = [r.shannon_entropy for r in rows]
    fractions = [r.coverage_fraction for r in rows]
    valid = sum(1 for r in rows if r.is_valid)

    return {
        "num_positions": len(rows),
        "num_sequences": rows[0].sequence_count,
        "valid_positions": valid,
        "invalid_positions": len(rows) - valid,
        "mean_entropy": sum(entropies) / len(entropies),
        "mean_coverage": sum(fractions) / len(fractions),
        "max_entropy": max(entropies),
    }
