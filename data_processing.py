"""
Weighted moving-average smoothing for derived dyno series
"""

import numpy as np
from typing import Sequence, Tuple

from constants import DynoConstants

Taps = Sequence[Tuple[int, float]]


def weighted_average(values: Sequence[float], index: int, taps: Taps = DynoConstants.DEFAULT_TAPS) -> float:
    """
    Weighted mean of ``values`` centered on ``index``

    Each tap is an (offset, weight) pair. Taps that fall outside the series
    are dropped from both the weighted sum and the weight total, so the first
    and last samples still get a finite mean of their in-range neighbours.

    Args:
        values: Value series
        index: Center index, must lie inside the series
        taps: (offset, weight) pairs, defaults to the 5-tap table

    Returns:
        Renormalized weighted mean, 0.0 when no in-range tap carries weight
    """
    length = len(values)
    if not 0 <= index < length:
        raise IndexError(f"Index {index} outside series of length {length}")

    total = 0.0
    weight_sum = 0.0
    for offset, weight in taps:
        position = index + offset
        if 0 <= position < length:
            total += weight * values[position]
            weight_sum += weight

    return total / weight_sum if weight_sum else 0.0


class DataProcessor:
    """Handles smoothing of whole derived-value series"""

    def __init__(self, taps: Taps = DynoConstants.DEFAULT_TAPS):
        self.taps = tuple(taps)

    def smooth(self, values: Sequence[float], taps: Taps = None) -> np.ndarray:
        """
        Apply the weighted average at every index of a series

        Vectorized equivalent of calling weighted_average for each index.
        """
        taps = self.taps if taps is None else taps
        values = np.asarray(values, dtype=float)
        length = len(values)

        totals = np.zeros(length)
        weights = np.zeros(length)
        positions = np.arange(length)

        for offset, weight in taps:
            source = positions + offset
            in_range = (source >= 0) & (source < length)
            totals[in_range] += weight * values[source[in_range]]
            weights[in_range] += weight

        return np.divide(totals, weights, out=np.zeros(length), where=weights != 0)

    def smooth_two_pass(self, values: Sequence[float], first_taps: Taps = DynoConstants.FIRST_PASS_TAPS) -> Tuple[np.ndarray, np.ndarray]:
        """Smooth with the wide table, then smooth that result with the default table"""
        first = self.smooth(values, first_taps)
        second = self.smooth(first)
        return first, second
