"""Altitude limits and limit-grid summaries for dataset components."""

import logging
import math

from wmmview.analysis.altitude_limit import compute_altitude_limit
from wmmview.analysis.normalization import normalize_component
from wmmview.config.loader import get_threshold
from wmmview.config.schema import EngineConfig, ErrorModel
from wmmview.ingest.dataset_loader import (
    DatasetFormatError,
    component_profile,
    field_profile,
)
from wmmview.models.altitude import (
    AltitudeProfile,
    ComponentLimitResult,
    LimitGridSummary,
)
from wmmview.models.common import Component, is_intensity_component
from wmmview.models.dataset import ActivityDataset

logger = logging.getLogger(__name__)

# Fixed color scale for altitude-limit maps
LIMIT_SCALE_MIN_KM = 0.0
LIMIT_SCALE_MAX_KM = 10000.0


def chartable_samples(profile: AltitudeProfile, min_altitude_km: float) -> AltitudeProfile:
    """Samples usable on log-log axes: altitude >= min_altitude_km, value > 0."""
    return [
        s for s in profile
        if s.altitude_km >= min_altitude_km and s.value > 0
    ]


def component_altitude_limit(
    dataset: ActivityDataset,
    component: Component,
    error_model: ErrorModel,
    config: EngineConfig,
) -> ComponentLimitResult:
    """Altitude limit for one component of a dataset under an error model."""
    threshold = get_threshold(config, error_model, component)
    profile = component_profile(dataset, component)

    field = field_profile(dataset, component) if is_intensity_component(component) else None
    if is_intensity_component(component) and field is None:
        raise DatasetFormatError(
            f"dataset G{dataset.g_scale} has no wmm_{component}_average"
        )
    profile, threshold, is_normalized = normalize_component(
        component, profile, threshold, field
    )

    samples = chartable_samples(profile, config.analysis.min_altitude_km)
    limit = compute_altitude_limit(samples, threshold, config.analysis.limit_step_km)
    logger.debug(
        "G%d %s/%s: threshold=%.4f over %d samples -> %s",
        dataset.g_scale, component, error_model, threshold, len(samples), limit,
    )
    return ComponentLimitResult(
        component=component.value,
        error_model=error_model.value,
        threshold=threshold,
        is_normalized=is_normalized,
        profile=samples,
        limit=limit,
    )


def limit_grid_summary(
    dataset: ActivityDataset, component: Component, error_model: ErrorModel
) -> LimitGridSummary:
    """Data range of a precomputed altitude-limit grid, ignoring missing cells."""
    grid = dataset.limit_grids.get((component.value, error_model.value))
    if grid is None:
        raise DatasetFormatError(
            f"dataset G{dataset.g_scale} has no {component}_alt_limit_{error_model}"
        )

    values: list[float] = []
    missing = 0
    for row in grid:
        for cell in row:
            if cell is None or math.isnan(cell):
                missing += 1
            else:
                values.append(float(cell))

    return LimitGridSummary(
        component=component.value,
        error_model=error_model.value,
        scale_min=LIMIT_SCALE_MIN_KM,
        scale_max=LIMIT_SCALE_MAX_KM,
        data_min=min(values) if values else None,
        data_max=max(values) if values else None,
        valid_cells=len(values),
        missing_cells=missing,
    )
