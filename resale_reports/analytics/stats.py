"""
Small numeric helpers shared by the report aggregations.

Money values are integers; anything that has to come back as money
(averages, medians) is rounded half up, the way the dashboard displays it.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def rounded_ratio(numerator: int, denominator: int) -> int:
    if denominator == 0:
        return 0
    return round_half_up(numerator / denominator)


def percentage_of_total(part: float, total: float) -> float:
    """Share of `part` in `total` on a 0-100 scale; 0.0 when total is not positive."""
    if total <= 0:
        return 0.0
    return part / total * 100


def average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def median(values: Sequence[int]) -> int:
    """
    Median of integer values.

    Odd counts take the middle element; even counts take the mean of the two
    middle elements, rounded half up. An empty sequence yields 0.
    """
    ordered = sorted(values)
    if not ordered:
        return 0
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return int(ordered[mid])
    return round_half_up((ordered[mid - 1] + ordered[mid]) / 2)


def bucket_index(value: int, width: int, count: int) -> int:
    """
    Fixed-width bucket for a non-negative value.

    The last bucket (index count - 1) is open ended and absorbs everything
    beyond the regular range. Negative values land in the first bucket.
    """
    if width <= 0:
        raise ValueError("width must be > 0")
    if count <= 0:
        raise ValueError("count must be > 0")
    return min(max(int(value), 0) // width, count - 1)
