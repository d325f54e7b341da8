"""One analysis pass: filter → aggregate → compare → sort.

All selections (period, products, comparison, sort order, visible columns)
travel in an immutable :class:`AnalysisConfig`; :func:`run_analysis` is a pure
function of ``(records, config)`` and is simply called again whenever a
selection changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from adpulse.analysis.aggregate import (
    PeriodTotals,
    ProductShare,
    ProductSummary,
    ad_cost_share,
    aggregate,
)
from adpulse.analysis.compare import (
    MetricDelta,
    ProductComparison,
    compare_summaries,
    compare_totals,
)
from adpulse.analysis.filters import (
    DateRange,
    comparison_window,
    date_bounds,
    filter_period,
    product_names,
)
from adpulse.analysis.sorting import (
    DETAIL_SORT_FIELDS,
    SUMMARY_SORT_FIELDS,
    Direction,
    SortField,
    SortSpec,
    sort_items,
)
from adpulse.records import DERIVED_FIELDS, DerivedRecord
from adpulse.utils.logs import report

logger = report.settings(__file__)

SUMMARY_FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(ProductSummary))

# Detail table column order as first shown
DETAIL_COLUMNS: Tuple[str, ...] = (
    "date",
    "product",
    "ad_cost",
    "operating_cost",
    "revenue",
    "orders",
    "ad_cost_per_order",
    "profit",
    "profit_per_order",
    "profit_margin",
)

SUMMARY_COLUMNS: Tuple[str, ...] = (
    "product",
    "profit",
    "profit_per_order",
    "revenue",
    "orders",
    "ad_cost",
    "ad_cost_per_order",
    "operating_cost",
)


@dataclass(frozen=True)
class AnalysisConfig:
    period: DateRange = DateRange()
    products: FrozenSet[str] = frozenset()
    compare: bool = False
    comparison_period: Optional[DateRange] = None  # explicit window; derived when None
    detail_sort: SortSpec = SortSpec(SortField.DATE, Direction.DESC)
    summary_sort: SortSpec = SortSpec(SortField.PROFIT, Direction.DESC)
    detail_columns: Tuple[str, ...] = DETAIL_COLUMNS
    summary_columns: Tuple[str, ...] = SUMMARY_COLUMNS

    def __post_init__(self) -> None:
        # Product summaries carry neither a date nor a margin
        SortField.from_key(self.detail_sort.field, DETAIL_SORT_FIELDS)
        SortField.from_key(self.summary_sort.field, SUMMARY_SORT_FIELDS)

    @classmethod
    def initial(cls, records: Sequence[DerivedRecord]) -> "AnalysisConfig":
        """Selections right after the first load: everything in view, no comparison."""
        bounds = date_bounds(records)
        period = DateRange(*bounds) if bounds else DateRange()
        return cls(period=period, products=frozenset(product_names(records)))

    def resolved_comparison_period(self) -> Optional[DateRange]:
        """The comparison window in effect, or ``None`` when comparison is off.

        An explicit window wins; otherwise the window right before the primary
        period is derived. Without a bounded primary period the comparison
        filter is unconstrained.
        """
        if not self.compare:
            return None
        if self.comparison_period is not None:
            return self.comparison_period
        return comparison_window(self.period) or DateRange()


@dataclass(frozen=True)
class AnalysisResult:
    config: AnalysisConfig
    records: Tuple[DerivedRecord, ...]
    products: Tuple[ProductComparison, ...]
    totals: PeriodTotals
    comparison_totals: Optional[PeriodTotals]
    kpis: Tuple[MetricDelta, ...]
    ad_cost_share: Tuple[ProductShare, ...]
    comparison_period: Optional[DateRange]
    available_dates: Optional[Tuple[str, str]]
    available_products: Tuple[str, ...] = field(default_factory=tuple)

    def detail_frame(self) -> pd.DataFrame:
        return project(self.records, self.config.detail_columns)

    def summary_frame(self) -> pd.DataFrame:
        return project(
            self.products,
            self.config.summary_columns,
            include_comparison=self.config.compare,
            summary=True,
        )


def run_analysis(records: Sequence[DerivedRecord], config: AnalysisConfig) -> AnalysisResult:
    """Compute every dashboard output for *records* under *config*."""
    primary_rows = filter_period(records, config.period, config.products)
    primary = aggregate(primary_rows)

    comparison_period = config.resolved_comparison_period()
    if comparison_period is not None:
        comparison_rows = filter_period(records, comparison_period, config.products)
        comparison = aggregate(comparison_rows)
        joined = compare_summaries(primary.by_product, comparison.by_product)
        comparison_totals: Optional[PeriodTotals] = comparison.totals
    else:
        comparison_rows = []
        joined = compare_summaries(primary.by_product)
        comparison_totals = None

    logger.debug(
        "Analysis: %d primary row(s), %d comparison row(s), %d product(s)",
        len(primary_rows), len(comparison_rows), len(joined),
    )

    return AnalysisResult(
        config=config,
        records=tuple(sort_items(primary_rows, config.detail_sort)),
        products=tuple(sort_items(joined, config.summary_sort, through=lambda c: c.primary)),
        totals=primary.totals,
        comparison_totals=comparison_totals,
        kpis=tuple(compare_totals(primary.totals, comparison_totals)),
        ad_cost_share=tuple(ad_cost_share(primary_rows)),
        comparison_period=comparison_period,
        available_dates=date_bounds(records),
        available_products=tuple(product_names(records)),
    )


# -------------------------------------------------------------
# Row projection
# -------------------------------------------------------------

def _check_columns(columns: Sequence[str], allowed: Sequence[str]) -> None:
    unknown = [c for c in columns if c not in allowed]
    if unknown:
        raise ValueError(f"Unknown column(s): {', '.join(unknown)}")


def project(
    items: Iterable[Any],
    columns: Sequence[str],
    include_comparison: bool = False,
    summary: bool = False,
) -> pd.DataFrame:
    """Tabulate *items* with exactly *columns*, in the given order.

    *summary* selects the product table: items are product summaries or
    comparisons (read through their primary summary) and *columns* are checked
    against summary fields; otherwise items are derived records. With
    *include_comparison*, every numeric column gets ``<col> prev`` and
    ``<col> Δ%`` companions (``Δ%`` holds :class:`PercentChange` values).
    """
    items = list(items)
    _check_columns(columns, SUMMARY_FIELD_NAMES if summary else DERIVED_FIELDS)
    kinds = (ProductComparison, ProductSummary) if summary else (DerivedRecord,)
    stray = next((item for item in items if not isinstance(item, kinds)), None)
    if stray is not None:
        table = "summary" if summary else "detail"
        raise TypeError(f"Cannot tabulate {type(stray).__name__} as a {table} row")
    headers: List[str] = []
    for col in columns:
        headers.append(col)
        if include_comparison and col not in ("date", "product"):
            headers.extend([f"{col} prev", f"{col} Δ%"])

    rows: List[dict] = []
    for item in items:
        source = item.primary if isinstance(item, ProductComparison) else item
        row = {}
        for col in columns:
            row[col] = getattr(source, col)
            if include_comparison and col not in ("date", "product"):
                if isinstance(item, ProductComparison):
                    row[f"{col} prev"] = item.previous(col)
                    row[f"{col} Δ%"] = item.change(col)
                else:
                    row[f"{col} prev"] = None
                    row[f"{col} Δ%"] = None
        rows.append(row)
    return pd.DataFrame(rows, columns=headers)


__all__ = [
    "DETAIL_COLUMNS",
    "SUMMARY_COLUMNS",
    "AnalysisConfig",
    "AnalysisResult",
    "run_analysis",
    "project",
]
