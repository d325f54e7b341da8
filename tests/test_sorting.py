from dataclasses import dataclass

import pytest

from adpulse.analysis.compare import compare_summaries
from adpulse.analysis.aggregate import aggregate
from adpulse.analysis.sorting import (
    DETAIL_SORT_FIELDS,
    SUMMARY_SORT_FIELDS,
    Direction,
    SortField,
    SortSpec,
    collation_key,
    sort_items,
)


@dataclass(frozen=True)
class Row:
    product: str
    profit: float


def test_descending_sort_is_stable():
    rows = [Row("A", 10), Row("B", 10), Row("C", 5)]
    out = sort_items(rows, SortSpec(SortField.PROFIT, Direction.DESC))
    assert [r.product for r in out] == ["A", "B", "C"]


def test_ascending_sort_is_stable():
    rows = [Row("A", 10), Row("C", 5), Row("B", 10), Row("D", 5)]
    out = sort_items(rows, SortSpec(SortField.PROFIT))
    assert [r.product for r in out] == ["C", "D", "A", "B"]


def test_text_sort():
    rows = [Row("Serum", 1), Row("Cream", 2), Row("Mask", 3)]
    assert [r.product for r in sort_items(rows, SortSpec(SortField.PRODUCT))] == ["Cream", "Mask", "Serum"]
    assert [r.product for r in sort_items(rows, SortSpec(SortField.PRODUCT, Direction.DESC))] == [
        "Serum", "Mask", "Cream",
    ]


def test_sort_returns_new_list():
    rows = [Row("B", 1), Row("A", 2)]
    out = sort_items(rows, SortSpec(SortField.PRODUCT))
    assert out is not rows
    assert [r.product for r in rows] == ["B", "A"]


def test_records_sort_by_date_descending(records):
    out = sort_items(records, SortSpec(SortField.DATE, Direction.DESC))
    assert [(r.date, r.product) for r in out] == [
        ("2024-03-02", "Serum"),
        ("2024-03-01", "Serum"),
        ("2024-03-01", "Mask"),
        ("2024-02-29", "Cream"),
        ("2024-02-28", "Serum"),
    ]


def test_summaries_sort_through_primary(records):
    joined = compare_summaries(aggregate(records).by_product)
    out = sort_items(joined, SortSpec(SortField.PROFIT, Direction.DESC), through=lambda c: c.primary)
    assert [c.product for c in out] == ["Serum", "Cream", "Mask"]


def test_request_toggles_direction():
    spec = SortSpec(SortField.PROFIT, Direction.DESC)
    spec = spec.request("revenue")
    assert spec == SortSpec(SortField.REVENUE, Direction.ASC)
    spec = spec.request("revenue")
    assert spec == SortSpec(SortField.REVENUE, Direction.DESC)
    spec = spec.request(SortField.REVENUE)
    assert spec == SortSpec(SortField.REVENUE, Direction.ASC)
    assert spec.request("date") == SortSpec(SortField.DATE, Direction.ASC)


def test_unknown_sort_key():
    with pytest.raises(ValueError, match="Unknown sort key"):
        SortField.from_key("roas")


def test_text_sort_folds_case_and_accents():
    rows = [Row("Zeta", 1), Row("beta", 2), Row("Ánh", 3), Row("Alpha", 4)]
    out = sort_items(rows, SortSpec(SortField.PRODUCT))
    assert [r.product for r in out] == ["Alpha", "Ánh", "beta", "Zeta"]


def test_vietnamese_letters_sort_with_their_base_letter():
    rows = [Row("Đèn", 1), Row("Ếch", 2), Row("dầu", 3), Row("Cam", 4)]
    out = sort_items(rows, SortSpec(SortField.PRODUCT))
    assert [r.product for r in out] == ["Cam", "dầu", "Đèn", "Ếch"]


def test_accent_only_difference_is_a_tiebreak():
    assert collation_key("anh") < collation_key("Ánh") < collation_key("ba")


def test_summary_sort_rejects_record_only_fields():
    spec = SortSpec(SortField.PROFIT)
    assert spec.request("revenue", SUMMARY_SORT_FIELDS) == SortSpec(SortField.REVENUE)
    with pytest.raises(ValueError, match="Unknown sort key"):
        spec.request("profit_margin", SUMMARY_SORT_FIELDS)
    with pytest.raises(ValueError, match="Unknown sort key"):
        SortField.from_key(SortField.DATE, SUMMARY_SORT_FIELDS)


def test_detail_fields_cover_every_record_column():
    assert set(DETAIL_SORT_FIELDS) == set(SortField)
