"""Parser for the NOAA SWPC 3-day geomagnetic forecast bulletin.

The bulletin is plain text. The parts we read look like::

    :Issued: 2025 Dec 22 2205 UTC
    ...
    NOAA Kp index forecast 23 Dec - 25 Dec
                 Dec 23       Dec 24       Dec 25
    00-03UT        4.67         3.67         2.67
    03-06UT        4.33         3.33         2.33
    ...

Only the first numeric column (the first forecast day) is used.
"""

import logging
import re
from datetime import datetime

from wmmview.models.common import as_utc
from wmmview.models.forecast import (
    NO_KP_VALUE,
    SECTION_NOT_FOUND,
    ForecastRecord,
    GScaleInfo,
    ParseFailure,
    ParseResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_ISSUED = "Unknown"
FALLBACK_WINDOW = "00-03UT"

_ISSUED_RE = re.compile(r"Issued:\s*(\d{4}\s+\w+\s+\d{2}\s+\d{4})\s+UTC")
_KP_SECTION_RE = re.compile(r"NOAA Kp index forecast[\s\S]*?(\d{2}-\d{2}UT\s+[\d.]+)")

G_SCALE_TABLE: dict[int, GScaleInfo] = {
    0: GScaleInfo("Quiet", "Quiet conditions"),
    1: GScaleInfo("Minor", "Minor geomagnetic storm"),
    2: GScaleInfo("Moderate", "Moderate geomagnetic storm"),
    3: GScaleInfo("Strong", "Strong geomagnetic storm"),
    4: GScaleInfo("Severe", "Severe geomagnetic storm"),
    5: GScaleInfo("Extreme", "Extreme geomagnetic storm"),
}


def kp_to_g_scale(kp: float) -> int:
    """Convert a Kp index to the NOAA G-scale.

    G1..G5 start at Kp 5..9. Below Kp 5 is reported as G0 (quiet).
    """
    if kp >= 9:
        return 5
    if kp >= 8:
        return 4
    if kp >= 7:
        return 3
    if kp >= 6:
        return 2
    if kp >= 5:
        return 1
    return 0


def classify_g_scale(g_scale: int) -> GScaleInfo:
    """Name and description for a G-scale level; unknown levels read as Quiet."""
    return G_SCALE_TABLE.get(g_scale, G_SCALE_TABLE[0])


def window_label(now: datetime) -> str:
    """3-hour UTC window containing `now`, e.g. '06-09UT' or '21-00UT'."""
    start = (as_utc(now).hour // 3) * 3
    end = (start + 3) % 24
    return f"{start:02d}-{end:02d}UT"


def build_forecast_record(
    kp: float, issued_timestamp: str, fetched_at: str, is_stale: bool = False
) -> ForecastRecord:
    """Build a record whose G-scale and display strings are derived from kp."""
    g_scale = kp_to_g_scale(kp)
    info = classify_g_scale(g_scale)
    return ForecastRecord(
        g_scale=g_scale,
        kp=kp,
        g_scale_name=info.name,
        description=info.description,
        issued_timestamp=issued_timestamp,
        fetched_at=fetched_at,
        is_stale=is_stale,
    )


def parse_forecast_text(text: str, now: datetime) -> ParseResult:
    """Parse the bulletin into a ForecastRecord for the window containing `now`.

    The UTC hour of `now` selects the Kp row; naive datetimes are read
    as UTC. Returns a ParseFailure instead of raising when the text does not
    have the expected shape.
    """
    now = as_utc(now)
    issued_match = _ISSUED_RE.search(text)
    issued = issued_match.group(1) if issued_match else UNKNOWN_ISSUED

    if _KP_SECTION_RE.search(text) is None:
        logger.warning("Kp forecast section not found in bulletin")
        return ParseFailure(SECTION_NOT_FOUND)

    window = window_label(now)
    kp_match = _kp_row(text, window)
    if kp_match is None and window != FALLBACK_WINDOW:
        logger.info("No Kp row for %s, falling back to %s", window, FALLBACK_WINDOW)
        kp_match = _kp_row(text, FALLBACK_WINDOW)
    if kp_match is None:
        logger.warning("Could not extract Kp value from bulletin")
        return ParseFailure(NO_KP_VALUE)

    try:
        kp = float(kp_match)
    except ValueError:
        # The row pattern admits strings like "4.6.7"
        logger.warning("Malformed Kp value %r in bulletin", kp_match)
        return ParseFailure(NO_KP_VALUE)

    return build_forecast_record(kp, issued, now.isoformat())


def _kp_row(text: str, window: str) -> str | None:
    match = re.search(rf"{re.escape(window)}\s+([\d.]+)", text)
    return match.group(1) if match else None
