"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from wmmview.config.defaults import DEFAULT_THRESHOLDS
from wmmview.config.schema import DataConfig, EngineConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def bulletin_text(fixtures_dir: Path) -> str:
    """Raw 3-day geomagnetic forecast bulletin."""
    return (fixtures_dir / "3-day-geomag-forecast.txt").read_text()


@pytest.fixture
def default_config(fixtures_dir: Path) -> EngineConfig:
    """Default EngineConfig reading datasets from the fixtures directory."""
    return EngineConfig(
        thresholds=DEFAULT_THRESHOLDS,
        data=DataConfig(data_dir=str(fixtures_dir)),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, fixtures_dir: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "forecast": {"url": "https://test-swpc.example.com/forecast.txt"},
        "analysis": {"default_error_model": "milspec"},
        "data": {"data_dir": str(fixtures_dir)},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
