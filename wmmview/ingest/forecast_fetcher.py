"""Forecast fetcher: current G-scale from NOAA SWPC with a single-slot cache."""

import dataclasses
import logging
import threading
from datetime import datetime

import httpx

from wmmview.config.schema import ForecastConfig
from wmmview.ingest.forecast_parser import parse_forecast_text
from wmmview.ingest.staleness import cache_age_hours, is_cache_fresh
from wmmview.ingest.swpc_client import SwpcClient
from wmmview.models.common import as_utc, utc_now
from wmmview.models.forecast import (
    ActivityLevel,
    ForecastRecord,
    ParseFailure,
    ParseResult,
)
from wmmview.storage.forecast_cache import ForecastCache, InMemoryForecastCache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_HOURS = 3.0
UNAVAILABLE_DESCRIPTION = "Live forecast unavailable"


class ForecastUnavailableError(Exception):
    """No fresh forecast could be fetched and nothing is cached."""


class ForecastFetcher:
    def __init__(
        self,
        client: SwpcClient,
        cache: ForecastCache | None = None,
        cache_duration_hours: float = DEFAULT_CACHE_HOURS,
        lock: "threading.Lock | None" = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else InMemoryForecastCache()
        self.cache_duration_hours = cache_duration_hours
        # Share one lock between fetchers that share a cache store
        self._lock = lock if lock is not None else threading.Lock()

    def fetch_current_g_scale(self, now: datetime | None = None) -> ForecastRecord:
        """Current G-scale forecast.

        Returns the cached record while it is younger than the cache
        duration. Otherwise fetches and parses the bulletin once; on
        success the cache slot is overwritten. On any fetch or parse
        failure the cached record is returned with is_stale=True, however
        old it is. With nothing cached, raises ForecastUnavailableError.
        """
        now = utc_now() if now is None else as_utc(now)

        with self._lock:
            cached = self.cache.get()
            if cached is not None and is_cache_fresh(
                cached.fetched_at, self.cache_duration_hours, now
            ):
                logger.info("Using cached geomagnetic forecast")
                return cached

            result = self._fetch_and_parse(now)
            if isinstance(result, ParseFailure):
                if cached is None:
                    raise ForecastUnavailableError(result.reason)
                logger.warning(
                    "Using stale cached forecast (%.1fh old) due to fetch error: %s",
                    cache_age_hours(cached.fetched_at, now), result.reason,
                )
                return dataclasses.replace(cached, is_stale=True)

            self.cache.set(result)
            logger.info(
                "Current geomagnetic conditions: G%d (%s), Kp=%.2f",
                result.g_scale, result.g_scale_name, result.kp,
            )
            return result

    def clear_cache(self) -> None:
        with self._lock:
            self.cache.clear()

    def _fetch_and_parse(self, now: datetime) -> ParseResult:
        """One fetch attempt; transport errors come back as a ParseFailure."""
        try:
            text = self.client.get_geomag_forecast()
        except httpx.HTTPError as e:
            logger.exception("Error fetching geomagnetic forecast")
            return ParseFailure(f"fetch failed: {e}")
        return parse_forecast_text(text, now)


def current_activity_level(
    fetcher: ForecastFetcher, now: datetime | None = None
) -> ActivityLevel:
    """Activity level for the live indicator, defaulting to G0 when unavailable."""
    try:
        record = fetcher.fetch_current_g_scale(now)
    except ForecastUnavailableError as e:
        logger.error("Failed to load geomagnetic forecast: %s", e)
        return ActivityLevel(
            g_scale=0,
            kp=None,
            g_scale_name="Quiet",
            description=UNAVAILABLE_DESCRIPTION,
            error=str(e),
        )
    return ActivityLevel(
        g_scale=record.g_scale,
        kp=record.kp,
        g_scale_name=record.g_scale_name,
        description=record.description,
        last_updated=record.fetched_at,
        is_stale=record.is_stale,
    )


def build_forecast_fetcher(
    config: ForecastConfig,
    cache: ForecastCache | None = None,
    lock: "threading.Lock | None" = None,
) -> ForecastFetcher:
    client = SwpcClient(
        url=config.url,
        user_agent=config.user_agent,
        timeout=config.timeout_seconds,
    )
    return ForecastFetcher(
        client,
        cache=cache,
        cache_duration_hours=config.cache_duration_hours,
        lock=lock,
    )
