"""Filtering, aggregation, period comparison and sorting of ad records."""

from .aggregate import Aggregate, PeriodTotals, ProductShare, ProductSummary, ad_cost_share, aggregate
from .compare import (
    METRICS,
    ChangeKind,
    MetricDelta,
    PercentChange,
    ProductComparison,
    assess,
    compare_summaries,
    compare_totals,
    percent_change,
)
from .filters import DateRange, comparison_window, date_bounds, filter_records, product_names
from .pipeline import AnalysisConfig, AnalysisResult, project, run_analysis
from .sorting import Direction, SortField, SortSpec, sort_items

__all__ = [
    "Aggregate",
    "AnalysisConfig",
    "AnalysisResult",
    "ChangeKind",
    "DateRange",
    "Direction",
    "METRICS",
    "MetricDelta",
    "PercentChange",
    "PeriodTotals",
    "ProductComparison",
    "ProductShare",
    "ProductSummary",
    "SortField",
    "SortSpec",
    "ad_cost_share",
    "aggregate",
    "assess",
    "compare_summaries",
    "compare_totals",
    "comparison_window",
    "date_bounds",
    "filter_records",
    "percent_change",
    "product_names",
    "project",
    "run_analysis",
    "sort_items",
]
