"""Sheet CSV → typed records.

The sheet is exported as CSV with a header line, Vietnamese number formatting
(``.`` thousands separator, ``,`` decimal separator) and ``D/M/YYYY`` dates.

Column layout (0-based):

    0 date | 1 product | 2 ad cost | 3 revenue | 4-5 unused | 6 orders | 7 operating cost

Parsing is tolerant: bad rows are skipped and logged, unparseable numbers
become ``0`` and unrecognised dates pass through untouched. Nothing in here
raises to the caller.
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import List, Optional

from adpulse.records import DerivedRecord, RawRecord, derive
from adpulse.utils.logs import report

logger = report.settings(__file__)

# ------------------------------------------------------------------
# Column mapping
# ------------------------------------------------------------------

COL_DATE = 0
COL_PRODUCT = 1
COL_AD_COST = 2
COL_REVENUE = 3
COL_ORDERS = 6
COL_OPERATING_COST = 7
MIN_FIELDS = 8

# Leading numeric prefix; trailing text such as a currency suffix is ignored
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


# ------------------------------------------------------------------
# Field helpers
# ------------------------------------------------------------------

def parse_number(text: Optional[str]) -> float:
    """Parse a locale-formatted number; anything unparseable is ``0``.

    Examples:
        "1.500.000" -> 1500000.0
        "12,5"      -> 12.5
        "abc"       -> 0.0
    """
    if not text:
        return 0.0
    cleaned = text.strip().replace(".", "").replace(",", ".", 1)
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def parse_date(text: str) -> str:
    """Convert ``D/M/YYYY`` to ``YYYY-MM-DD``; other shapes pass through."""
    parts = text.split("/")
    if len(parts) == 3:
        day, month, year = parts
        return f"{year}-{month.rjust(2, '0')}-{day.rjust(2, '0')}"
    return text


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def split_line(line: str) -> List[str]:
    """Split one CSV line into cleaned fields (quotes removed)."""
    row = next(csv.reader([line]), [])
    return [_clean_field(v) for v in row]


def _row_to_record(values: List[str]) -> DerivedRecord:
    raw = RawRecord(
        date=parse_date(values[COL_DATE]),
        product=values[COL_PRODUCT],
        ad_cost=parse_number(values[COL_AD_COST]),
        revenue=parse_number(values[COL_REVENUE]),
        orders=parse_number(values[COL_ORDERS]),
        operating_cost=parse_number(values[COL_OPERATING_COST]),
    )
    return derive(raw)


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def parse_csv(csv_text: str) -> List[DerivedRecord]:
    """Parse the raw sheet export into derived records, in source order.

    A line is skipped (with a warning naming its 1-based line number) when it
    has fewer than ``MIN_FIELDS`` fields or a blank date/product. An input
    that cannot be read at all gives an empty list.
    """
    try:
        lines = csv_text.strip().splitlines()
        header = lines.pop(0) if lines else ""
        if not header.strip():
            return []

        records: List[DerivedRecord] = []
        for lineno, line in enumerate(lines, start=2):
            try:
                values = split_line(line)
            except csv.Error:
                values = []
            if len(values) < MIN_FIELDS or not values[COL_DATE] or not values[COL_PRODUCT]:
                logger.warning("Skipping malformed line %d: %s", lineno, line)
                continue
            records.append(_row_to_record(values))
        logger.debug("Parsed %d record(s) from %d data line(s)", len(records), len(lines))
        return records
    except Exception as exc:
        logger.error("Failed to parse CSV: %s", exc)
        return []


def read_records(path: str | Path) -> List[DerivedRecord]:
    """Parse a sheet export saved on disk (UTF-8, BOM tolerated)."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_csv(text)


__all__ = [
    "parse_number",
    "parse_date",
    "split_line",
    "parse_csv",
    "read_records",
    "MIN_FIELDS",
]
