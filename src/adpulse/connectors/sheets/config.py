import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from adpulse.utils.logs import report
from adpulse.utils.paths import config_dir

logger = report.settings(__file__)

DEFAULT_ENV_PATH = config_dir("adpulse") / ".env"
EXPORT_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"


def _maybe_load_dotenv(path: Path = DEFAULT_ENV_PATH) -> None:
	# load_dotenv never overrides variables already set in the process
	if path.exists():
		load_dotenv(path)


@dataclass(frozen=True)
class SheetSource:
	url: str
	timeout: Optional[float] = None  # seconds; None waits indefinitely

	@classmethod
	def from_sheet(cls, sheet_id: str, gid: str = "0", timeout: Optional[float] = None) -> "SheetSource":
		"""Build the CSV export endpoint of one Google Sheet tab."""
		return cls(url=EXPORT_URL_TEMPLATE.format(sheet_id=sheet_id, gid=gid), timeout=timeout)


def _parse_timeout(raw: str) -> Optional[float]:
	if not raw:
		return None
	try:
		value = float(raw)
	except ValueError:
		logger.warning("Ignoring invalid ADPULSE_TIMEOUT_SEC=%r", raw)
		return None
	return value if value > 0 else None


def load_source(env_path: Path = DEFAULT_ENV_PATH) -> SheetSource:
	"""Load the data source from env or optional .env file.
	Order of precedence: process env > .env file > defaults.
	ADPULSE_SOURCE_URL wins over ADPULSE_SHEET_ID/ADPULSE_SHEET_GID.
	"""
	_maybe_load_dotenv(env_path)
	timeout = _parse_timeout(os.getenv("ADPULSE_TIMEOUT_SEC", ""))
	url = os.getenv("ADPULSE_SOURCE_URL", "").strip()
	if url:
		return SheetSource(url=url, timeout=timeout)
	sheet_id = os.getenv("ADPULSE_SHEET_ID", "").strip()
	if not sheet_id:
		raise ValueError(
			f"Neither ADPULSE_SOURCE_URL nor ADPULSE_SHEET_ID is set (set in {env_path} or environment)"
		)
	gid = os.getenv("ADPULSE_SHEET_GID", "0").strip() or "0"
	return SheetSource.from_sheet(sheet_id, gid, timeout=timeout)
