"""Single-slot forecast cache stores.

A store holds at most one ForecastRecord under a fixed key. Expiry is
decided by the caller (see ForecastFetcher); stores only persist.
"""

import json
import logging
import sqlite3
from dataclasses import asdict
from typing import Protocol

from wmmview.ingest.forecast_parser import build_forecast_record
from wmmview.models.forecast import ForecastRecord

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "noaa_geomag_forecast"


class ForecastCache(Protocol):
    def get(self) -> ForecastRecord | None: ...

    def set(self, record: ForecastRecord) -> None: ...

    def clear(self) -> None: ...


class InMemoryForecastCache:
    def __init__(self) -> None:
        self._record: ForecastRecord | None = None

    def get(self) -> ForecastRecord | None:
        return self._record

    def set(self, record: ForecastRecord) -> None:
        self._record = record

    def clear(self) -> None:
        self._record = None


class SqliteForecastCache:
    """Forecast slot in the cache_entries table, stored as JSON."""

    def __init__(self, conn: sqlite3.Connection, key: str = DEFAULT_CACHE_KEY):
        self.conn = conn
        self.key = key

    def get(self) -> ForecastRecord | None:
        row = self.conn.execute(
            "SELECT value FROM cache_entries WHERE key = ?", (self.key,)
        ).fetchone()
        if row is None:
            return None
        record = record_from_json(row[0])
        if record is None:
            logger.warning("Discarding unreadable cache entry %s", self.key)
        return record

    def set(self, record: ForecastRecord) -> None:
        self.conn.execute(
            "INSERT INTO cache_entries (key, value, updated_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "updated_at = CURRENT_TIMESTAMP",
            (self.key, record_to_json(record)),
        )
        self.conn.commit()

    def clear(self) -> None:
        self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (self.key,))
        self.conn.commit()


def record_to_json(record: ForecastRecord) -> str:
    return json.dumps(asdict(record))


def record_from_json(raw: str) -> ForecastRecord | None:
    """Rehydrate a cached record, re-deriving the G-scale fields from kp."""
    try:
        data = json.loads(raw)
        return build_forecast_record(
            kp=float(data["kp"]),
            issued_timestamp=str(data.get("issued_timestamp", "Unknown")),
            fetched_at=str(data["fetched_at"]),
            is_stale=bool(data.get("is_stale", False)),
        )
    except (ValueError, KeyError, TypeError):
        return None
