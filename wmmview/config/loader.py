"""YAML config loader with runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from wmmview.config.defaults import DEFAULT_THRESHOLDS
from wmmview.config.schema import EngineConfig, ErrorModel
from wmmview.models.common import Component


def load_config(path: str | Path) -> EngineConfig:
    """Load and validate config from a YAML file.

    A missing file is treated as an empty one. Error models absent from
    the YAML get their DEFAULT_THRESHOLDS table.
    """
    path = Path(path)
    raw: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    thresholds = dict(raw.get("thresholds") or {})
    for model, table in DEFAULT_THRESHOLDS.items():
        if model.value not in thresholds:
            thresholds[model.value] = table.model_dump()
    raw["thresholds"] = thresholds

    return EngineConfig(**raw)


def config_hash(config: EngineConfig) -> str:
    """Short deterministic SHA256 of the effective config, thresholds included."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_threshold(
    config: EngineConfig, error_model: ErrorModel, component: Component
) -> float:
    """Threshold for one component under the given error model."""
    table = config.thresholds.get(error_model)
    if table is None:
        raise KeyError(f"No thresholds configured for {error_model}")
    return getattr(table, component.value)


def get_config_value(config: EngineConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'forecast.cache_duration_hours'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            if part not in obj:
                raise KeyError(f"Config key not found: {dotted_key}")
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: EngineConfig, dotted_key: str, value: Any) -> EngineConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new EngineConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return EngineConfig(**data)
