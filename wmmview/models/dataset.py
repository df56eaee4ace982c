"""Per-activity-level WMM error dataset models."""

from dataclasses import dataclass, field

# Grids are indexed [lat][lon] for altitude limits and
# [lat][lon][alt] for component errors. None marks missing cells.
Grid2D = list[list[float | None]]


@dataclass(frozen=True)
class ActivityDataset:
    g_scale: int
    lats: list[float]
    lons: list[float]
    altitudes: list[float]
    profiles: dict[str, list[float | None]] = field(default_factory=dict)
    field_averages: dict[str, list[float | None]] = field(default_factory=dict)
    limit_grids: dict[tuple[str, str], Grid2D] = field(default_factory=dict)
