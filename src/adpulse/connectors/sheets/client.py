import asyncio
from typing import Optional, Tuple

import requests

from adpulse.parsing import parse_csv
from adpulse.records import DerivedRecord
from adpulse.utils.logs import report

from .config import SheetSource, load_source

logger = report.settings(__file__)


class FetchError(RuntimeError):
	"""The sheet could not be downloaded (network failure or non-2xx status)."""

	def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
		super().__init__(message)
		self.url = url
		self.status_code = status_code


class SheetClient:
	def __init__(self, source: Optional[SheetSource] = None) -> None:
		self.source = source or load_source()

	def fetch_text(self) -> str:
		"""Download the CSV export once. No retries."""
		url = self.source.url
		logger.info("Fetching sheet data from %s", url)
		try:
			resp = requests.get(url, timeout=self.source.timeout)
		except requests.RequestException as e:
			logger.error("Request to %s failed: %s", url, e)
			raise FetchError(f"Request failed: {e}", url) from e
		if not resp.ok:
			logger.error("HTTP %s fetching %s", resp.status_code, url)
			raise FetchError(f"HTTP error! status: {resp.status_code}", url, resp.status_code)
		# The export is UTF-8 whatever the response headers claim
		return resp.content.decode("utf-8-sig", errors="replace")

	def fetch_records(self) -> Tuple[DerivedRecord, ...]:
		"""Fetch and parse; every call returns a fresh, complete dataset."""
		records = tuple(parse_csv(self.fetch_text()))
		logger.info("Loaded %d record(s)", len(records))
		return records


def fetch_records(source: Optional[SheetSource] = None) -> Tuple[DerivedRecord, ...]:
	return SheetClient(source).fetch_records()


async def afetch_records(source: Optional[SheetSource] = None) -> Tuple[DerivedRecord, ...]:
	"""Awaitable :func:`fetch_records`; the blocking download runs in a worker thread."""
	return await asyncio.to_thread(fetch_records, source)
