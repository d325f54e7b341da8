"""Remote CSV source: a Google Sheet tab exported as CSV."""

from .client import FetchError, SheetClient, afetch_records, fetch_records
from .config import SheetSource, load_source

__all__ = [
    "FetchError",
    "SheetClient",
    "SheetSource",
    "afetch_records",
    "fetch_records",
    "load_source",
]
