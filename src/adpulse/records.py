"""Typed ad-performance records.

A :class:`RawRecord` is one parsed sheet row (date/product plus four numeric
columns). :func:`derive` turns it into a :class:`DerivedRecord` carrying the
financial ratios used by every table and chart. Both are frozen: records are
never mutated after parsing.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class RawRecord:
    date: str              # canonical YYYY-MM-DD (or the raw text when unparseable)
    product: str
    ad_cost: float
    revenue: float
    orders: float
    operating_cost: float


@dataclass(frozen=True)
class DerivedRecord(RawRecord):
    profit: float
    profit_margin: float       # percent of revenue
    ad_cost_per_order: float
    profit_per_order: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def derive(raw: RawRecord) -> DerivedRecord:
    """Compute profit, margin and per-order ratios for *raw*.

    Division guards: margin is 0 without revenue, per-order ratios are 0
    without orders.
    """
    profit = raw.revenue - raw.ad_cost - raw.operating_cost
    profit_margin = profit / raw.revenue * 100 if raw.revenue > 0 else 0.0
    ad_cost_per_order = raw.ad_cost / raw.orders if raw.orders > 0 else 0.0
    profit_per_order = profit / raw.orders if raw.orders > 0 else 0.0
    return DerivedRecord(
        date=raw.date,
        product=raw.product,
        ad_cost=raw.ad_cost,
        revenue=raw.revenue,
        orders=raw.orders,
        operating_cost=raw.operating_cost,
        profit=profit,
        profit_margin=profit_margin,
        ad_cost_per_order=ad_cost_per_order,
        profit_per_order=profit_per_order,
    )


RAW_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(RawRecord))
DERIVED_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(DerivedRecord))

__all__ = [
    "RawRecord",
    "DerivedRecord",
    "derive",
    "RAW_FIELDS",
    "DERIVED_FIELDS",
]
