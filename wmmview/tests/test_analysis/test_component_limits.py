"""Tests for per-component altitude limits and limit-grid summaries."""

from pathlib import Path

import pytest

from wmmview.analysis.component_limits import (
    chartable_samples,
    component_altitude_limit,
    limit_grid_summary,
)
from wmmview.config.schema import EngineConfig, ErrorModel
from wmmview.ingest.dataset_loader import DatasetFormatError, load_activity_dataset
from wmmview.models.altitude import Exceeds, LimitKm, NoLimit, ProfileSample
from wmmview.models.common import Component
from wmmview.models.dataset import ActivityDataset


@pytest.fixture
def dataset(fixtures_dir: Path) -> ActivityDataset:
    return load_activity_dataset(fixtures_dir, 1)


class TestChartableSamples:
    def test_drops_low_altitudes_and_non_positive(self):
        profile = [
            ProfileSample(0, 5.0),
            ProfileSample(10, 0.0),
            ProfileSample(20, float("nan")),
            ProfileSample(30, 1.5),
        ]
        assert chartable_samples(profile, 10.0) == [ProfileSample(30, 1.5)]


class TestComponentAltitudeLimit:
    def test_intensity_component_milspec(
        self, dataset: ActivityDataset, default_config: EngineConfig
    ):
        result = component_altitude_limit(
            dataset, Component.F, ErrorModel.MILSPEC, default_config
        )
        assert result.is_normalized is True
        assert result.threshold == pytest.approx(0.56)
        assert result.limit == LimitKm(200)
        # Ground sample filtered out
        assert result.profile[0].altitude_km == 10.0

    def test_intensity_component_wmm(
        self, dataset: ActivityDataset, default_config: EngineConfig
    ):
        result = component_altitude_limit(
            dataset, Component.F, ErrorModel.WMM, default_config
        )
        assert result.threshold == pytest.approx(0.296)
        assert result.limit == LimitKm(200)

    def test_angular_component(self, dataset: ActivityDataset, default_config: EngineConfig):
        milspec = component_altitude_limit(
            dataset, Component.D, ErrorModel.MILSPEC, default_config
        )
        wmm = component_altitude_limit(dataset, Component.D, ErrorModel.WMM, default_config)
        assert milspec.is_normalized is False
        assert milspec.threshold == 1.0
        assert milspec.limit == LimitKm(200)
        assert wmm.limit == LimitKm(100)

    def test_missing_values_skipped(self, dataset: ActivityDataset, default_config: EngineConfig):
        milspec = component_altitude_limit(
            dataset, Component.I, ErrorModel.MILSPEC, default_config
        )
        wmm = component_altitude_limit(dataset, Component.I, ErrorModel.WMM, default_config)
        assert milspec.limit == NoLimit()
        assert wmm.limit == Exceeds()

    def test_intensity_without_field_average(
        self, dataset: ActivityDataset, default_config: EngineConfig
    ):
        with pytest.raises(DatasetFormatError, match="wmm_H_average"):
            component_altitude_limit(dataset, Component.H, ErrorModel.MILSPEC, default_config)

    def test_min_altitude_from_config(
        self, dataset: ActivityDataset, default_config: EngineConfig
    ):
        config = default_config.model_copy(
            update={"analysis": default_config.analysis.model_copy(
                update={"min_altitude_km": 150.0}
            )}
        )
        result = component_altitude_limit(dataset, Component.D, ErrorModel.MILSPEC, config)
        assert [s.altitude_km for s in result.profile] == [200.0, 300.0, 1000.0]


class TestLimitGridSummary:
    def test_summary(self, dataset: ActivityDataset):
        s = limit_grid_summary(dataset, Component.F, ErrorModel.MILSPEC)
        assert s.data_min == 300.0
        assert s.data_max == 1200.0
        assert s.valid_cells == 5
        assert s.missing_cells == 1
        assert (s.scale_min, s.scale_max) == (0.0, 10000.0)

    def test_all_missing(self, dataset: ActivityDataset):
        s = limit_grid_summary(dataset, Component.F, ErrorModel.WMM)
        assert s.data_min is None
        assert s.data_max is None
        assert s.valid_cells == 0
        assert s.missing_cells == 6

    def test_missing_grid(self, dataset: ActivityDataset):
        with pytest.raises(DatasetFormatError, match="D_alt_limit_wmm"):
            limit_grid_summary(dataset, Component.D, ErrorModel.WMM)
