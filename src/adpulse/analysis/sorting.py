"""Stable, non-mutating sorting over records and product summaries.

Sort keys are a fixed enumeration (:class:`SortField`), each resolving to one
typed attribute. Text fields use :func:`collation_key`: accents and case are
folded first and only break ties, so ``Ánh`` sorts next to ``anh`` instead of
after ``Z``. Every other field compares numerically. Ties keep their input
order in both directions.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

# Letters that carry a stroke rather than a combining mark, so NFKD keeps them
_STROKED = str.maketrans({"đ": "d", "Đ": "d", "ł": "l", "Ł": "l", "ø": "o", "Ø": "o"})


def collation_key(text: str) -> Tuple[str, str, str]:
    """Sort key for display text: base letters, then accents, then case."""
    decomposed = unicodedata.normalize("NFKD", text.translate(_STROKED))
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.casefold(), text


class SortField(str, Enum):
    DATE = "date"
    PRODUCT = "product"
    AD_COST = "ad_cost"
    OPERATING_COST = "operating_cost"
    REVENUE = "revenue"
    ORDERS = "orders"
    AD_COST_PER_ORDER = "ad_cost_per_order"
    PROFIT = "profit"
    PROFIT_PER_ORDER = "profit_per_order"
    PROFIT_MARGIN = "profit_margin"

    @property
    def is_text(self) -> bool:
        return self in (SortField.DATE, SortField.PRODUCT)

    def extract(self, item: Any) -> Any:
        return getattr(item, self.value)

    @classmethod
    def from_key(
        cls,
        key: "str | SortField",
        allowed: Optional[Sequence["SortField"]] = None,
    ) -> "SortField":
        """Resolve *key*, optionally restricted to the fields of one table."""
        choices = tuple(allowed) if allowed is not None else tuple(cls)
        try:
            field = cls(key)
        except ValueError:
            field = None
        if field not in choices:
            shown = key.value if isinstance(key, SortField) else key
            valid = ", ".join(f.value for f in choices)
            raise ValueError(f"Unknown sort key {shown!r} (expected one of: {valid})")
        return field


# Sortable columns of the detail table / the product table
DETAIL_SORT_FIELDS: Tuple[SortField, ...] = tuple(SortField)
SUMMARY_SORT_FIELDS: Tuple[SortField, ...] = tuple(
    f for f in SortField if f not in (SortField.DATE, SortField.PROFIT_MARGIN)
)


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    field: SortField
    direction: Direction = Direction.ASC

    def request(
        self,
        key: "str | SortField",
        allowed: Optional[Sequence[SortField]] = None,
    ) -> "SortSpec":
        """Next sort after a header click on *key*.

        Same key while ascending flips to descending; anything else sorts
        ascending on *key*. Keys outside *allowed* raise ``ValueError``.
        """
        field = SortField.from_key(key, allowed)
        if field is self.field and self.direction is Direction.ASC:
            return SortSpec(field, Direction.DESC)
        return SortSpec(field, Direction.ASC)


def _sort_key(field: SortField, through: Optional[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    def key(item: Any) -> Any:
        value = field.extract(through(item) if through else item)
        if field.is_text and isinstance(value, str):
            return collation_key(value)
        return value
    return key


def sort_items(
    items: Iterable[T],
    spec: SortSpec,
    through: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """Return a new list of *items* ordered by *spec*.

    *through* maps an item to the object carrying the sort field (e.g. the
    primary summary of a product comparison).
    """
    return sorted(
        items,
        key=_sort_key(spec.field, through),
        reverse=spec.direction is Direction.DESC,
    )


__all__ = [
    "SortField",
    "collation_key",
    "DETAIL_SORT_FIELDS",
    "SUMMARY_SORT_FIELDS",
    "Direction",
    "SortSpec",
    "sort_items",
]
