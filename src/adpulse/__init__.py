"""adpulse: ad cost / revenue / profit analytics over a sheet export."""

from adpulse.parsing import parse_csv, read_records
from adpulse.records import DerivedRecord, RawRecord, derive

__version__ = "0.1.0"

__all__ = [
    "DerivedRecord",
    "RawRecord",
    "derive",
    "parse_csv",
    "read_records",
    "__version__",
]
