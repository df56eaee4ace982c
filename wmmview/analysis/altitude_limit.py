"""Altitude limit: highest altitude at which an error profile stays within threshold.

A single limit only makes sense for a profile that crosses the threshold
at most once, going up. Any other crossing pattern is reported as Exceeds.

Every current caller drops samples below 10 km (and non-positive or
missing values) before calling in, to match the log-scale altitude axis.
The analyzer itself accepts any profile.
"""

import math

from wmmview.models.altitude import (
    AltitudeLimit,
    AltitudeProfile,
    CrossingAnalysis,
    Exceeds,
    LimitKm,
    NoLimit,
)

DEFAULT_STEP_KM = 100


def analyze_crossings(profile: AltitudeProfile, threshold: float) -> CrossingAnalysis:
    """Count upward threshold crossings and interpolate the first one.

    An upward crossing between consecutive samples i, i+1 is
    value[i] <= threshold < value[i+1]. NaN samples never satisfy either
    side of a comparison.
    """
    if not profile:
        return CrossingAnalysis(
            starts_above=False,
            always_above=False,
            crossing_count=0,
            first_crossing_km=None,
        )

    starts_above = profile[0].value > threshold
    always_above = all(s.value > threshold for s in profile)

    crossing_count = 0
    first_crossing_km: float | None = None
    for curr, nxt in zip(profile, profile[1:]):
        if curr.value <= threshold and nxt.value > threshold:
            crossing_count += 1
            if crossing_count == 1:
                fraction = (threshold - curr.value) / (nxt.value - curr.value)
                first_crossing_km = curr.altitude_km + fraction * (
                    nxt.altitude_km - curr.altitude_km
                )

    return CrossingAnalysis(
        starts_above=starts_above,
        always_above=always_above,
        crossing_count=crossing_count,
        first_crossing_km=first_crossing_km,
    )


def resolve_limit(
    crossings: CrossingAnalysis, step_km: int = DEFAULT_STEP_KM
) -> AltitudeLimit:
    """Apply the ordered Exceeds / LimitKm / NoLimit rules."""
    if crossings.always_above:
        return Exceeds()
    if crossings.starts_above and crossings.crossing_count > 0:
        return Exceeds()
    if crossings.crossing_count > 1:
        return Exceeds()
    if crossings.crossing_count == 1:
        if crossings.first_crossing_km is None or not math.isfinite(
            crossings.first_crossing_km
        ):
            # Interpolating against an infinite sample gives no usable altitude
            return Exceeds()
        floored = math.floor(crossings.first_crossing_km / step_km) * step_km
        return LimitKm(altitude_km=int(floored))
    # Starting above with no upward crossing also lands here.
    return NoLimit()


def compute_altitude_limit(
    profile: AltitudeProfile, threshold: float, step_km: int = DEFAULT_STEP_KM
) -> AltitudeLimit:
    """Altitude limit for a profile, floored to a step_km boundary."""
    return resolve_limit(analyze_crossings(profile, threshold), step_km)
