"""NAV source: current and recent prices per fund.

Ships with a built-in table. A JSON table can be loaded from a local file
(``NAV_DATA_FILE``) or an HTTP feed (``NAV_FEED_URL``) with the same shape:

    {"<fund_code>": {"fund_name": str, "fund_category": str,
                     "current": float, "historical": [float, ...]}}

``historical`` is ordered oldest to newest.
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_NAV_DATA: dict[str, dict[str, Any]] = {
    "HDFC-TOP100": {
        "fund_name": "HDFC Top 100 Fund",
        "fund_category": "Large Cap",
        "current": 580.45,
        "historical": [565.20, 572.10, 578.30, 580.45],
    },
    "SBI-BLUECHIP": {
        "fund_name": "SBI Blue Chip Fund",
        "fund_category": "Large Cap",
        "current": 45.67,
        "historical": [44.20, 44.85, 45.30, 45.67],
    },
    "ICICI-VALUE": {
        "fund_name": "ICICI Prudential Value Discovery Fund",
        "fund_category": "Value",
        "current": 156.89,
        "historical": [152.30, 154.20, 155.80, 156.89],
    },
    "AXIS-BLUECHIP": {
        "fund_name": "Axis Bluechip Fund",
        "fund_category": "Large Cap",
        "current": 42.34,
        "historical": [41.20, 41.80, 42.10, 42.34],
    },
    "MIRAE-LARGECAP": {
        "fund_name": "Mirae Asset Large Cap Fund",
        "fund_category": "Large Cap",
        "current": 85.23,
        "historical": [83.10, 84.20, 84.90, 85.23],
    },
    "FRANKLIN-EQUITY": {
        "fund_name": "Franklin India Equity Fund",
        "fund_category": "Flexi Cap",
        "current": 128.56,
        "historical": [125.30, 126.80, 127.90, 128.56],
    },
}


@dataclass(frozen=True)
class NavRecord:
    fund_code: str
    fund_name: str
    fund_category: str
    current: float
    historical: tuple[float, ...]


def parse_nav_table(raw: dict[str, Any]) -> dict[str, NavRecord]:
    """Validate a raw NAV table and convert it to records.

    Raises ValueError on a malformed entry.
    """
    if not isinstance(raw, dict):
        raise ValueError("NAV table must be a JSON object keyed by fund code")

    records = {}
    for fund_code, entry in raw.items():
        try:
            current = float(entry["current"])
            historical = tuple(float(v) for v in entry.get("historical", []))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Bad NAV entry for {fund_code}: {e}") from e
        if not all(math.isfinite(v) for v in (current, *historical)):
            raise ValueError(f"Non-finite NAV for {fund_code}")
        if current < 0 or any(v < 0 for v in historical):
            raise ValueError(f"Negative NAV for {fund_code}")
        records[fund_code] = NavRecord(
            fund_code=fund_code,
            fund_name=str(entry.get("fund_name") or fund_code),
            fund_category=str(entry.get("fund_category") or "Equity"),
            current=current,
            historical=historical,
        )
    return records


class NavSource:
    """Serves NAV lookups from an in-memory table that can be reloaded."""

    def __init__(self, records: dict[str, NavRecord] | None = None):
        if records is None:
            records = parse_nav_table(DEFAULT_NAV_DATA)
        self._records = dict(records)

    def get_current_nav(self, fund_code: str) -> float:
        """Latest NAV, or 0.0 when the fund is unknown (no valid price)."""
        record = self._records.get(fund_code)
        return record.current if record else 0.0

    def get_historical_nav(self, fund_code: str) -> list[float]:
        record = self._records.get(fund_code)
        return list(record.historical) if record else []

    def get_record(self, fund_code: str) -> NavRecord | None:
        return self._records.get(fund_code)

    def list_funds(self) -> list[NavRecord]:
        return list(self._records.values())

    def fetch_nav_table(
        self, data_file: str | None = None, feed_url: str | None = None
    ) -> dict[str, NavRecord] | None:
        """Load a NAV table from the feed URL, else the data file.

        Returns None if neither is configured or the load fails.
        """
        try:
            if feed_url:
                resp = httpx.get(feed_url, timeout=10)
                resp.raise_for_status()
                return parse_nav_table(resp.json())
            if data_file:
                raw = json.loads(Path(data_file).read_text(encoding="utf-8"))
                return parse_nav_table(raw)
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.error(f"Failed to load NAV table from {feed_url or data_file}: {e}")
        return None

    def reload(self, data_file: str | None = None, feed_url: str | None = None) -> bool:
        """Replace the table from the configured source; keep the old one on failure."""
        records = self.fetch_nav_table(data_file, feed_url)
        if records is None:
            return False
        self._records = records
        logger.info(f"Loaded NAV data for {len(records)} funds")
        return True


# Global instance
nav_source = NavSource()
