"""Express intensity-component errors as a percentage of local field strength.

Absolute nT error means less as the field weakens with altitude, so F, H,
X, Y and Z profiles are divided by the ambient field at each altitude.
D and I are angles and pass through unchanged.
"""

import math

from wmmview.models.altitude import AltitudeProfile, ProfileSample
from wmmview.models.common import Component, is_intensity_component


def normalize_intensity_error(
    profile: AltitudeProfile, field_profile: AltitudeProfile
) -> AltitudeProfile:
    """Error as percent of field strength, sample by sample.

    Both profiles must share the same altitude axis. A zero or missing
    field sample yields NaN.
    """
    if len(profile) != len(field_profile):
        raise ValueError(
            f"profile has {len(profile)} samples, field profile has {len(field_profile)}"
        )
    normalized: AltitudeProfile = []
    for sample, field in zip(profile, field_profile):
        if sample.altitude_km != field.altitude_km:
            raise ValueError(
                f"altitude mismatch: {sample.altitude_km} km vs {field.altitude_km} km"
            )
        if field.value == 0 or math.isnan(field.value):
            value = math.nan
        else:
            value = sample.value / field.value * 100
        normalized.append(ProfileSample(sample.altitude_km, value))
    return normalized


def normalize_threshold(threshold: float, ground_field: float) -> float:
    """Threshold as percent of the ground-level field strength."""
    if ground_field == 0 or math.isnan(ground_field):
        return math.nan
    return 100 * threshold / ground_field


def normalize_component(
    component: Component,
    profile: AltitudeProfile,
    threshold: float,
    field_profile: AltitudeProfile | None,
) -> tuple[AltitudeProfile, float, bool]:
    """Profile and threshold on a common scale for the given component.

    Returns (profile, threshold, is_normalized). Intensity components
    need field_profile; angular components ignore it.
    """
    if not is_intensity_component(component):
        return profile, threshold, False
    if field_profile is None or not field_profile:
        raise ValueError(f"field strength profile required for component {component}")
    return (
        normalize_intensity_error(profile, field_profile),
        normalize_threshold(threshold, field_profile[0].value),
        True,
    )
