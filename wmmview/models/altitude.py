"""Altitude profile and altitude-limit result models."""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class ProfileSample:
    altitude_km: float
    value: float  # NaN = no data


AltitudeProfile: TypeAlias = list[ProfileSample]


@dataclass(frozen=True)
class NoLimit:
    """Within threshold at every sampled altitude."""


@dataclass(frozen=True)
class Exceeds:
    """No reliable ceiling: threshold violated everywhere or crossed ambiguously."""


@dataclass(frozen=True)
class LimitKm:
    altitude_km: int


AltitudeLimit: TypeAlias = NoLimit | Exceeds | LimitKm


@dataclass(frozen=True)
class CrossingAnalysis:
    starts_above: bool
    always_above: bool
    crossing_count: int
    first_crossing_km: float | None  # interpolated, before flooring


@dataclass(frozen=True)
class LimitGridSummary:
    component: str
    error_model: str
    scale_min: float
    scale_max: float
    data_min: float | None
    data_max: float | None
    valid_cells: int
    missing_cells: int


@dataclass(frozen=True)
class ComponentLimitResult:
    component: str
    error_model: str
    threshold: float  # percent of ground field when is_normalized
    is_normalized: bool
    profile: AltitudeProfile
    limit: AltitudeLimit
