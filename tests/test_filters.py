from adpulse.analysis.filters import (
    DateRange,
    comparison_window,
    date_bounds,
    filter_period,
    filter_records,
    product_names,
)


def test_date_bounds_are_inclusive(records):
    out = filter_records(records, "2024-03-01", "2024-03-01")
    assert [(r.date, r.product) for r in out] == [("2024-03-01", "Serum"), ("2024-03-01", "Mask")]


def test_missing_bounds_do_not_constrain(records):
    assert filter_records(records) == records
    assert [r.date for r in filter_records(records, start="2024-03-01")] == [
        "2024-03-01", "2024-03-01", "2024-03-02",
    ]
    assert [r.date for r in filter_records(records, end="2024-02-29")] == ["2024-02-28", "2024-02-29"]


def test_product_selection(records):
    out = filter_records(records, products={"Serum"})
    assert {r.product for r in out} == {"Serum"}
    assert len(out) == 3
    assert filter_records(records, products=set()) == records
    assert filter_records(records, products=frozenset({"Nope"})) == []


def test_filter_preserves_input_order(records):
    out = filter_records(records, products={"Serum", "Cream"})
    assert [r.date for r in out] == ["2024-03-01", "2024-03-02", "2024-02-28", "2024-02-29"]


def test_filter_idempotent_with_same_or_wider_bounds(records):
    narrow = filter_records(records, "2024-03-01", "2024-03-02", {"Serum"})
    assert filter_records(narrow, "2024-03-01", "2024-03-02", {"Serum"}) == narrow
    assert filter_records(narrow, "2024-01-01", "2024-12-31") == narrow


def test_filter_period_accepts_none(records):
    assert filter_period(records, None) == records
    assert len(filter_period(records, DateRange("2024-02-28", "2024-02-29"))) == 2


def test_comparison_window_precedes_primary():
    window = comparison_window(DateRange("2024-03-01", "2024-03-10"))
    assert window == DateRange("2024-02-19", "2024-02-29")


def test_comparison_window_single_day():
    assert comparison_window(DateRange("2024-01-01", "2024-01-01")) == DateRange("2023-12-30", "2023-12-31")


def test_comparison_window_needs_both_bounds():
    assert comparison_window(DateRange("2024-03-01", None)) is None
    assert comparison_window(DateRange()) is None
    assert comparison_window(DateRange("March", "April")) is None


def test_date_range_clamping():
    period = DateRange("2024-03-01", "2024-03-10")
    assert period.with_start("2024-03-15") == DateRange("2024-03-15", "2024-03-15")
    assert period.with_start("2024-03-05") == DateRange("2024-03-05", "2024-03-10")
    assert period.with_end("2024-02-20") == DateRange("2024-02-20", "2024-02-20")
    assert period.with_end("2024-03-20") == DateRange("2024-03-01", "2024-03-20")
    assert DateRange().with_end("2024-03-20") == DateRange(None, "2024-03-20")


def test_date_bounds_and_products(records):
    assert date_bounds(records) == ("2024-02-28", "2024-03-02")
    assert date_bounds([]) is None
    assert product_names(records) == ["Cream", "Mask", "Serum"]
