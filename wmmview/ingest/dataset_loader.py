"""Loader for the per-activity-level dataset files G<n>.json."""

import json
import logging
import math
from pathlib import Path

from wmmview.config.schema import ErrorModel
from wmmview.models.altitude import AltitudeProfile, ProfileSample
from wmmview.models.common import Component
from wmmview.models.dataset import ActivityDataset

logger = logging.getLogger(__name__)


class DatasetNotFoundError(FileNotFoundError):
    """No dataset file for the requested activity level."""


class DatasetFormatError(ValueError):
    """Dataset file is missing required keys or has mismatched arrays."""


def dataset_path(data_dir: str | Path, g_scale: int) -> Path:
    return Path(data_dir) / f"G{g_scale}.json"


def load_activity_dataset(data_dir: str | Path, g_scale: int) -> ActivityDataset:
    """Load G<g_scale>.json from data_dir.

    Only the altitude axis is required. Profiles, field averages and
    altitude-limit grids are picked up for whichever components are present.
    """
    path = dataset_path(data_dir, g_scale)
    if not path.exists():
        raise DatasetNotFoundError(f"Failed to load {path.name} from {data_dir}")

    with open(path) as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetFormatError(f"{path.name} is not valid JSON: {e}") from e

    if "altitudes" not in raw:
        raise DatasetFormatError(f"{path.name} has no 'altitudes' array")
    altitudes = [float(a) for a in raw["altitudes"]]

    profiles: dict[str, list[float | None]] = {}
    field_averages: dict[str, list[float | None]] = {}
    limit_grids = {}
    for component in Component:
        c = component.value
        if f"profile_{c}" in raw:
            profiles[c] = _checked_series(raw[f"profile_{c}"], altitudes, f"profile_{c}")
        if f"wmm_{c}_average" in raw:
            field_averages[c] = _checked_series(
                raw[f"wmm_{c}_average"], altitudes, f"wmm_{c}_average"
            )
        for model in ErrorModel:
            key = f"{c}_alt_limit_{model.value}"
            if key in raw:
                limit_grids[(c, model.value)] = raw[key]

    dataset = ActivityDataset(
        g_scale=int(raw.get("gScale", g_scale)),
        lats=[float(v) for v in raw.get("lats", [])],
        lons=[float(v) for v in raw.get("lons", [])],
        altitudes=altitudes,
        profiles=profiles,
        field_averages=field_averages,
        limit_grids=limit_grids,
    )
    logger.info(
        "Loaded %s: %d profiles, %d field averages, %d limit grids",
        path.name, len(profiles), len(field_averages), len(limit_grids),
    )
    return dataset


def component_profile(dataset: ActivityDataset, component: Component) -> AltitudeProfile:
    """Error profile for a component; missing values become NaN."""
    if component.value not in dataset.profiles:
        raise DatasetFormatError(f"dataset G{dataset.g_scale} has no profile_{component}")
    return _to_profile(dataset.altitudes, dataset.profiles[component.value])


def field_profile(dataset: ActivityDataset, component: Component) -> AltitudeProfile | None:
    """Average field strength profile for a component, if the dataset has one."""
    values = dataset.field_averages.get(component.value)
    if values is None:
        return None
    return _to_profile(dataset.altitudes, values)


def _to_profile(altitudes: list[float], values: list[float | None]) -> AltitudeProfile:
    return [
        ProfileSample(alt, math.nan if v is None else float(v))
        for alt, v in zip(altitudes, values)
    ]


def _checked_series(values: list, altitudes: list[float], key: str) -> list[float | None]:
    if len(values) != len(altitudes):
        raise DatasetFormatError(
            f"{key} has {len(values)} values for {len(altitudes)} altitudes"
        )
    return values
