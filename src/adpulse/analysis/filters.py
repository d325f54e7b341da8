"""Period and product filtering.

Dates are canonical ``YYYY-MM-DD`` strings, so range checks are plain string
comparisons. Bounds are inclusive and an absent bound does not constrain.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from adpulse.records import DerivedRecord

DATE_FMT = "%Y-%m-%d"


@dataclass(frozen=True)
class DateRange:
    start: Optional[str] = None
    end: Optional[str] = None

    def contains(self, day: str) -> bool:
        if self.start and day < self.start:
            return False
        if self.end and day > self.end:
            return False
        return True

    def with_start(self, start: Optional[str]) -> "DateRange":
        """Move the start; drags the end along when it would fall before it."""
        if start and self.end and start > self.end:
            return DateRange(start=start, end=start)
        return replace(self, start=start)

    def with_end(self, end: Optional[str]) -> "DateRange":
        """Move the end; drags the start along when it would fall after it."""
        if end and self.start and end < self.start:
            return DateRange(start=end, end=end)
        return replace(self, end=end)

    @property
    def is_bounded(self) -> bool:
        return bool(self.start and self.end)


def filter_records(
    records: Iterable[DerivedRecord],
    start: Optional[str] = None,
    end: Optional[str] = None,
    products: Optional[AbstractSet[str]] = None,
) -> List[DerivedRecord]:
    """Return the records inside ``[start, end]`` whose product is selected.

    An empty or missing *products* set lets every product through. Input
    order is preserved.
    """
    period = DateRange(start, end)
    return [
        r for r in records
        if period.contains(r.date) and (not products or r.product in products)
    ]


def filter_period(
    records: Iterable[DerivedRecord],
    period: Optional[DateRange],
    products: Optional[AbstractSet[str]] = None,
) -> List[DerivedRecord]:
    period = period or DateRange()
    return filter_records(records, period.start, period.end, products)


def comparison_window(primary: DateRange) -> Optional[DateRange]:
    """Derive the comparison period that ends the day before *primary* starts.

    ``days = |end - start| + 1``; the window runs from ``start - 1 - days`` to
    ``start - 1``. For 2024-03-01..2024-03-10 this gives 2024-02-19..2024-02-29.
    Returns ``None`` unless both primary bounds are set and parseable.
    """
    if not primary.is_bounded:
        return None
    try:
        start = datetime.strptime(primary.start, DATE_FMT).date()
        end = datetime.strptime(primary.end, DATE_FMT).date()
    except ValueError:
        return None
    days = abs((end - start).days) + 1
    prev_end = start - timedelta(days=1)
    prev_start = prev_end - timedelta(days=days)
    return DateRange(prev_start.isoformat(), prev_end.isoformat())


def date_bounds(records: Sequence[DerivedRecord]) -> Optional[Tuple[str, str]]:
    """Earliest and latest date across *records*, or ``None`` when empty."""
    if not records:
        return None
    dates = [r.date for r in records]
    return min(dates), max(dates)


def product_names(records: Iterable[DerivedRecord]) -> List[str]:
    """Sorted distinct product identifiers."""
    return sorted({r.product for r in records})


__all__ = [
    "DateRange",
    "filter_records",
    "filter_period",
    "comparison_window",
    "date_bounds",
    "product_names",
]
