"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class Component(StrEnum):
    F = "F"
    H = "H"
    D = "D"
    I = "I"  # noqa: E741
    X = "X"
    Y = "Y"
    Z = "Z"


# Field-intensity components are in nT and weaken with altitude;
# D and I are angles in degrees.
INTENSITY_COMPONENTS: frozenset[Component] = frozenset(
    {Component.F, Component.H, Component.X, Component.Y, Component.Z}
)


def is_intensity_component(component: Component) -> bool:
    return component in INTENSITY_COMPONENTS


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(dt: datetime) -> datetime:
    """The same instant in UTC; naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
