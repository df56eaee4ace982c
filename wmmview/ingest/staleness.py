"""Age and expiry checks for cached forecasts."""

from datetime import UTC, datetime


def cache_age_hours(fetched_at_iso: str, now: datetime | None = None) -> float:
    """Age of a cached record in hours. Unparseable timestamps are infinitely old."""
    if now is None:
        now = datetime.now(UTC)
    fetched = _parse_timestamp(fetched_at_iso)
    if fetched is None:
        return float("inf")
    return (now - fetched).total_seconds() / 3600


def is_cache_fresh(
    fetched_at_iso: str, max_age_hours: float, now: datetime | None = None
) -> bool:
    """True while the record is younger than max_age_hours (strictly)."""
    return cache_age_hours(fetched_at_iso, now) < max_age_hours


def _parse_timestamp(iso_str: str) -> datetime | None:
    """Parse an ISO timestamp, handling various formats."""
    try:
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt
    except (ValueError, TypeError):
        return None
