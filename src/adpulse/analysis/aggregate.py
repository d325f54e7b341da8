"""Per-product summaries and period totals.

Absolute metrics are summed first; per-order ratios are then recomputed from
the summed values (never averaged from row-level ratios).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from adpulse.records import DERIVED_FIELDS, DerivedRecord

ABSOLUTE_METRICS: Tuple[str, ...] = (
    "ad_cost",
    "revenue",
    "profit",
    "orders",
    "operating_cost",
)


@dataclass(frozen=True)
class ProductSummary:
    product: str
    ad_cost: float
    revenue: float
    profit: float
    orders: float
    operating_cost: float
    ad_cost_per_order: float
    profit_per_order: float


@dataclass(frozen=True)
class PeriodTotals:
    ad_cost: float = 0.0
    revenue: float = 0.0
    profit: float = 0.0
    orders: float = 0.0
    operating_cost: float = 0.0

    @property
    def ad_cost_per_order(self) -> float:
        return self.ad_cost / self.orders if self.orders > 0 else 0.0

    @property
    def profit_per_order(self) -> float:
        return self.profit / self.orders if self.orders > 0 else 0.0


@dataclass(frozen=True)
class Aggregate:
    totals: PeriodTotals
    by_product: Tuple[ProductSummary, ...]


@dataclass(frozen=True)
class ProductShare:
    product: str
    ad_cost: float
    percent: float


# -------------------------------------------------------------
# Σ  DataFrame helpers
# -------------------------------------------------------------

def records_frame(records: Iterable[DerivedRecord]) -> pd.DataFrame:
    """One row per record, columns in record field order."""
    return pd.DataFrame([r.as_dict() for r in records], columns=list(DERIVED_FIELDS))


def _per_order(numerator: pd.Series, orders: pd.Series) -> pd.Series:
    ratio = numerator / orders.where(orders > 0)
    return ratio.replace([np.inf, -np.inf], np.nan).fillna(0.0)


def build_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Group *df* by product (first-appearance order) and add per-order ratios."""
    summary = (
        df.groupby("product", sort=False)[list(ABSOLUTE_METRICS)]
        .sum()
        .astype(float)
    )
    summary["ad_cost_per_order"] = _per_order(summary["ad_cost"], summary["orders"])
    summary["profit_per_order"] = _per_order(summary["profit"], summary["orders"])
    return summary


def totals_row(df: pd.DataFrame) -> PeriodTotals:
    """Sum the absolute metrics over the whole frame."""
    agg = df[list(ABSOLUTE_METRICS)].astype(float).sum()
    return PeriodTotals(**{m: float(agg[m]) for m in ABSOLUTE_METRICS})


# -------------------------------------------------------------
# Public API
# -------------------------------------------------------------

def aggregate(records: Sequence[DerivedRecord]) -> Aggregate:
    """Summarise *records* per product and overall.

    Empty input gives all-zero totals and no product summaries.
    """
    if not records:
        return Aggregate(totals=PeriodTotals(), by_product=())

    df = records_frame(records)
    summary = build_summary(df)
    by_product = tuple(
        ProductSummary(
            product=str(product),
            ad_cost=float(row["ad_cost"]),
            revenue=float(row["revenue"]),
            profit=float(row["profit"]),
            orders=float(row["orders"]),
            operating_cost=float(row["operating_cost"]),
            ad_cost_per_order=float(row["ad_cost_per_order"]),
            profit_per_order=float(row["profit_per_order"]),
        )
        for product, row in summary.iterrows()
    )
    return Aggregate(totals=totals_row(df), by_product=by_product)


def ad_cost_share(records: Sequence[DerivedRecord]) -> List[ProductShare]:
    """Ad cost per product and its share of the total (percent, 2 decimals)."""
    if not records:
        return []
    costs = records_frame(records).groupby("product", sort=False)["ad_cost"].sum().astype(float)
    total = float(costs.sum())
    return [
        ProductShare(
            product=str(product),
            ad_cost=float(cost),
            percent=round(float(cost) / total * 100, 2) if total > 0 else 0.0,
        )
        for product, cost in costs.items()
    ]


__all__ = [
    "ABSOLUTE_METRICS",
    "ProductSummary",
    "PeriodTotals",
    "Aggregate",
    "ProductShare",
    "records_frame",
    "build_summary",
    "totals_row",
    "aggregate",
    "ad_cost_share",
]
