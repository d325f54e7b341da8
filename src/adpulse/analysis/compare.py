"""Period-over-period percentage changes.

``percent_change`` returns a tagged :class:`PercentChange` instead of a bare
float so that "no baseline" (shown as *new*) can never be confused with an
ordinary 0% move or leak an infinity into downstream arithmetic.

The comparator is polarity-agnostic: whether a rise is good news is looked up
in :data:`METRICS` and only used by :func:`assess`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from adpulse.analysis.aggregate import PeriodTotals, ProductSummary


class ChangeKind(str, Enum):
    PERCENT = "percent"   # finite signed percentage
    NEW = "new"           # no baseline, or zero baseline with a positive current value
    FLAT = "flat"         # zero baseline and nothing (or less) now: reported as 0


@dataclass(frozen=True)
class PercentChange:
    kind: ChangeKind
    value: Optional[float]  # None only for NEW

    @classmethod
    def new(cls) -> "PercentChange":
        return cls(ChangeKind.NEW, None)

    @classmethod
    def flat(cls) -> "PercentChange":
        return cls(ChangeKind.FLAT, 0.0)

    @classmethod
    def of(cls, value: float) -> "PercentChange":
        return cls(ChangeKind.PERCENT, value)

    @property
    def is_new(self) -> bool:
        return self.kind is ChangeKind.NEW

    @property
    def is_zero(self) -> bool:
        return not self.is_new and self.value == 0

    def __float__(self) -> float:
        return float("inf") if self.value is None else self.value

    def __str__(self) -> str:
        if self.is_new:
            return "new"
        return f"{self.value:+.1f}%"


def percent_change(current: float, previous: Optional[float]) -> PercentChange:
    """``(current - previous) / previous * 100`` with the zero/absent policy.

    * ``previous is None`` (no prior row at all) → NEW
    * ``previous == 0`` → NEW when ``current > 0``, otherwise FLAT (0)
    """
    if previous is None:
        return PercentChange.new()
    if previous == 0:
        return PercentChange.new() if current > 0 else PercentChange.flat()
    return PercentChange.of((current - previous) / previous * 100)


# -------------------------------------------------------------
# Metric registry
# -------------------------------------------------------------

@dataclass(frozen=True)
class MetricSpec:
    key: str
    label: str
    is_positive_good: bool


METRICS: Dict[str, MetricSpec] = {
    spec.key: spec
    for spec in (
        MetricSpec("revenue", "Revenue", True),
        MetricSpec("ad_cost", "Ad cost", False),
        MetricSpec("operating_cost", "Operating cost", False),
        MetricSpec("profit", "Profit", True),
        MetricSpec("orders", "Orders", True),
        MetricSpec("profit_per_order", "Profit / order", True),
        MetricSpec("ad_cost_per_order", "Ad cost / order", False),
    )
}

# Headline cards, in display order
KPI_METRICS = ("revenue", "ad_cost", "operating_cost", "profit", "orders")

# Columns of the product table that carry a comparison value
SUMMARY_METRICS = (
    "profit",
    "profit_per_order",
    "revenue",
    "orders",
    "ad_cost",
    "ad_cost_per_order",
    "operating_cost",
)


def assess(change: PercentChange, metric: str) -> str:
    """Classify *change* for *metric*: ``new``, ``neutral``, ``favorable`` or ``unfavorable``."""
    if change.is_new:
        return "new"
    if change.is_zero:
        return "neutral"
    good_when_up = METRICS[metric].is_positive_good
    went_up = change.value > 0
    return "favorable" if went_up == good_when_up else "unfavorable"


# -------------------------------------------------------------
# Totals & per-product joins
# -------------------------------------------------------------

@dataclass(frozen=True)
class MetricDelta:
    metric: str
    current: float
    previous: Optional[float]
    change: Optional[PercentChange]  # None when no comparison period is active

    @property
    def label(self) -> str:
        return METRICS[self.metric].label


def compare_totals(
    primary: PeriodTotals,
    comparison: Optional[PeriodTotals] = None,
) -> List[MetricDelta]:
    """One :class:`MetricDelta` per headline metric (``KPI_METRICS`` order)."""
    out: List[MetricDelta] = []
    for metric in KPI_METRICS:
        current = getattr(primary, metric)
        if comparison is None:
            out.append(MetricDelta(metric, current, None, None))
            continue
        previous = getattr(comparison, metric)
        out.append(MetricDelta(metric, current, previous, percent_change(current, previous)))
    return out


@dataclass(frozen=True)
class ProductComparison:
    primary: ProductSummary
    comparison: Optional[ProductSummary]  # None: product absent from the comparison period

    @property
    def product(self) -> str:
        return self.primary.product

    def previous(self, metric: str) -> Optional[float]:
        if self.comparison is None:
            return None
        return getattr(self.comparison, metric)

    def change(self, metric: str) -> PercentChange:
        return percent_change(getattr(self.primary, metric), self.previous(metric))


def compare_summaries(
    primary: Sequence[ProductSummary],
    comparison: Sequence[ProductSummary] = (),
) -> List[ProductComparison]:
    """Left-join *comparison* onto *primary* by product, keeping primary order."""
    by_product = {s.product: s for s in comparison}
    return [ProductComparison(p, by_product.get(p.product)) for p in primary]


__all__ = [
    "ChangeKind",
    "PercentChange",
    "percent_change",
    "MetricSpec",
    "METRICS",
    "KPI_METRICS",
    "SUMMARY_METRICS",
    "assess",
    "MetricDelta",
    "compare_totals",
    "ProductComparison",
    "compare_summaries",
]
