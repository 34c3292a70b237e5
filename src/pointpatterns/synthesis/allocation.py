from collections.abc import Callable

import numpy as np

from .core import check_count


def round_half_away(x: np.ndarray) -> np.ndarray:
    """Round to nearest integer, ties away from zero (np.round ties to even)."""
    x = np.asarray(x, dtype=float)
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def shift_to_positive(weights: np.ndarray) -> np.ndarray:
    """Shift the whole vector so its minimum is 1 when any entry is <= 0."""
    w_min = weights.min()
    if w_min <= 0:
        return weights + (1.0 - w_min)
    return weights


def increment_zeros(weights: np.ndarray) -> np.ndarray:
    """Bump zero entries to 1, leaving positive entries untouched."""
    return np.where(weights == 0, weights + 1.0, weights)


def allocate_counts(
    raw_weights,
    total: int,
    make_positive: Callable[[np.ndarray], np.ndarray] = shift_to_positive,
) -> np.ndarray:
    """
    Split ``total`` points across clusters proportionally to ``raw_weights``.

    Each cluster's share is rounded independently, then the rounding error is
    spread back over the clusters in index order: every cluster absorbs
    ``|error| // k`` units and the first ``|error| % k`` clusters absorb one
    more. The result always sums to ``total`` exactly.

    Counts are not clamped. With ``total`` smaller than the number of clusters
    the correction can leave zero or negative entries, e.g.
    ``allocate_counts([1, 3, 3, 3], 2) -> [-1, 1, 1, 1]``.
    """
    weights = np.asarray(raw_weights, dtype=float)
    if weights.ndim != 1 or weights.size == 0:
        raise ValueError("raw_weights must be a non-empty 1-D vector")
    if not np.isfinite(weights).all():
        raise ValueError("raw_weights must be finite")
    total = check_count(total, "total")

    weights = make_positive(weights)
    if (weights <= 0).any():
        raise ValueError(f"{make_positive.__name__} left non-positive weights")
    weights = weights / weights.sum()
    counts = round_half_away(weights * total).astype(np.int64)

    error = int(counts.sum()) - total
    if error != 0:
        k = counts.size
        abs_error = abs(error)
        bulk = abs_error // k
        left = abs_error - bulk * k
        fix = np.full(k, bulk, dtype=np.int64)
        fix[:left] += 1
        counts = counts - np.sign(error) * fix

    return counts
