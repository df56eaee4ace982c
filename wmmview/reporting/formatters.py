"""Output formatters for forecast and altitude-limit results."""

import json
import math
from dataclasses import asdict

from wmmview.models.altitude import (
    AltitudeLimit,
    ComponentLimitResult,
    Exceeds,
    LimitGridSummary,
    LimitKm,
    NoLimit,
)
from wmmview.models.forecast import ActivityLevel


def limit_label(limit: AltitudeLimit) -> str:
    match limit:
        case LimitKm(altitude_km=km):
            return f"Limit: {km} km"
        case Exceeds():
            return "Exceeds at all altitudes"
        case NoLimit():
            return "No limit"
    raise TypeError(f"Unknown altitude limit: {limit!r}")


def limit_to_dict(limit: AltitudeLimit) -> dict:
    match limit:
        case LimitKm(altitude_km=km):
            return {"kind": "limit", "altitude_km": km}
        case Exceeds():
            return {"kind": "exceeds", "altitude_km": None}
        case NoLimit():
            return {"kind": "none", "altitude_km": None}
    raise TypeError(f"Unknown altitude limit: {limit!r}")


def format_activity_text(level: ActivityLevel) -> str:
    """One-line live indicator, e.g. 'G2 (Moderate) Kp=6.33'."""
    line = f"G{level.g_scale} ({level.g_scale_name})"
    if level.kp is not None:
        line += f" Kp={level.kp:.2f}"
    line += f" - {level.description}"
    if level.is_stale:
        line += " [stale]"
    if level.last_updated:
        line += f" | updated {level.last_updated}"
    if level.error:
        line += f" | error: {level.error}"
    return line


def format_activity_json(level: ActivityLevel) -> str:
    return json.dumps(asdict(level), indent=2)


def format_limit_text(result: ComponentLimitResult) -> str:
    unit = "%" if result.is_normalized else ""
    return "\n".join([
        f"{result.component} ({result.error_model}): {limit_label(result.limit)}",
        f"Threshold: {result.threshold:.2f}{unit}"
        + (" of ground field" if result.is_normalized else ""),
        f"Samples analyzed: {len(result.profile)}",
    ])


def limit_result_to_dict(result: ComponentLimitResult) -> dict:
    return {
        "component": result.component,
        "error_model": result.error_model,
        "threshold": result.threshold if math.isfinite(result.threshold) else None,
        "is_normalized": result.is_normalized,
        "limit": limit_to_dict(result.limit),
        "label": limit_label(result.limit),
        "profile": [
            {"altitude_km": s.altitude_km, "value": s.value} for s in result.profile
        ],
    }


def format_grid_summary_text(s: LimitGridSummary) -> str:
    if s.data_min is None:
        data_range = "no data"
    else:
        data_range = f"{s.data_min:.0f}-{s.data_max:.0f} km"
    return (
        f"{s.component} ({s.error_model}) altitude limits: {data_range} | "
        f"scale {s.scale_min:.0f}-{s.scale_max:.0f} km | "
        f"{s.valid_cells} cells, {s.missing_cells} missing"
    )
