"""NOAA SWPC text product client."""

import logging

import httpx

from wmmview.config.schema import NOAA_GEOMAG_FORECAST_URL

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "wmmview/0.1.0"


class SwpcClient:
    def __init__(
        self,
        url: str = NOAA_GEOMAG_FORECAST_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ):
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout

    def get_geomag_forecast(self) -> str:
        """Fetch the 3-day geomagnetic forecast bulletin as text.

        Single attempt, no retry. Raises httpx.HTTPStatusError on a
        non-2xx response and httpx.RequestError on transport failure.
        """
        headers = {"User-Agent": self.user_agent, "Accept": "text/plain"}
        logger.info("Fetching geomagnetic forecast from %s", self.url)
        resp = httpx.get(self.url, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text
