"""Geomagnetic forecast data models."""

from dataclasses import dataclass
from typing import TypeAlias

SECTION_NOT_FOUND = "section not found"
NO_KP_VALUE = "no Kp value"


@dataclass(frozen=True)
class GScaleInfo:
    name: str
    description: str


@dataclass(frozen=True)
class ForecastRecord:
    g_scale: int  # 0-5, always kp_to_g_scale(kp)
    kp: float
    g_scale_name: str
    description: str
    issued_timestamp: str  # as printed in the bulletin, or "Unknown"
    fetched_at: str  # ISO-8601 UTC
    is_stale: bool = False


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult: TypeAlias = ForecastRecord | ParseFailure


@dataclass(frozen=True)
class ActivityLevel:
    """Current activity level as shown by the live indicator."""

    g_scale: int
    kp: float | None
    g_scale_name: str
    description: str
    last_updated: str | None = None
    is_stale: bool = False
    error: str | None = None
