# ABOUTME: Zero-guarded percentage, mean and hour helpers shared by every rollup.
# ABOUTME: An empty denominator yields 0.0 so dashboards never see NaN or a ZeroDivisionError.

from __future__ import annotations

from typing import Iterable


def percentage(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator * 100``, or 0.0 when the denominator is 0."""

    if not denominator:
        return 0.0
    return float(numerator) / float(denominator) * 100


def fraction(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return float(numerator) / float(denominator)


def safe_mean(values: Iterable[float]) -> float:
    """Arithmetic mean of ``values``; 0.0 for an empty iterable."""

    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return 0.0
    return total / count


def minutes_to_hours(total_minutes: int) -> int:
    """
    Convert whole minutes to whole hours with floor division.

    Partial hours are dropped (119 minutes -> 1 hour). Reported totals depend on
    this truncation, so it is kept rather than rounded.
    """

    return int(total_minutes) // 60
