"""Summary statistics over flat record lists.

Every function here is a pure fold. Percentages are computed unrounded and
only rounded for display through ``round1``, so rounding never compounds.
Rates over an empty denominator follow one policy for the whole system:
``EMPTY_RATE`` (0.0).
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Hashable, Iterable, Sequence, TypeVar

from ..core.constants import EMPTY_RATE

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def rate(part: float, whole: float) -> float:
    if not whole:
        return EMPTY_RATE
    return round1(part / whole * 100)


def pass_rate(values: Sequence[float], threshold: float) -> float:
    passed = sum(1 for v in values if v >= threshold)
    return rate(passed, len(values))


def average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return round1(sum(values) / len(values))


def percentage(value: float, max_possible: float) -> float:
    if max_possible <= 0:
        raise ValueError("max_possible must be greater than 0")
    return value / max_possible * 100


def highest(values: Sequence[T]) -> T:
    if not values:
        raise ValueError("highest() of an empty sequence")
    return max(values)


def lowest(values: Sequence[T]) -> T:
    if not values:
        raise ValueError("lowest() of an empty sequence")
    return min(values)


def group_totals(records: Iterable[T], key: Callable[[T], K], value: Callable[[T], float]) -> Dict[K, float]:
    """Sum ``value`` per ``key``; groups keep first-occurrence order."""
    totals: Dict[K, float] = {}
    for r in records:
        k = key(r)
        totals[k] = totals.get(k, 0) + value(r)
    return totals


def count_by(records: Iterable[T], key: Callable[[T], K]) -> Dict[K, int]:
    counts: Dict[K, int] = {}
    for r in records:
        k = key(r)
        counts[k] = counts.get(k, 0) + 1
    return counts


def sum_by_status(records: Iterable[T], statuses: Iterable[str], status: Callable[[T], str], amount: Callable[[T], float]) -> Dict[str, float]:
    totals = {s: 0.0 for s in statuses}
    for r in records:
        s = status(r)
        totals[s] = totals.get(s, 0.0) + amount(r)
    return totals


def age_group(date_of_birth: date, today: date) -> str:
    age = today.year - date_of_birth.year
    if age < 6:
        return "Under 6"
    if age < 12:
        return "6-11"
    if age < 18:
        return "12-17"
    return "18+"
