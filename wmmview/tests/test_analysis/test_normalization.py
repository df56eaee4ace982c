"""Tests for field-strength normalization of intensity errors."""

import math

import pytest

from wmmview.analysis.normalization import (
    normalize_component,
    normalize_intensity_error,
    normalize_threshold,
)
from wmmview.models.altitude import ProfileSample
from wmmview.models.common import Component


def _profile(*pairs: tuple[float, float]) -> list[ProfileSample]:
    return [ProfileSample(alt, value) for alt, value in pairs]


class TestNormalizeIntensityError:
    def test_percent_of_field(self):
        errors = _profile((0, 100), (100, 200))
        field = _profile((0, 50000), (100, 40000))
        result = normalize_intensity_error(errors, field)
        assert result[0].value == pytest.approx(0.2)
        assert result[1].value == pytest.approx(0.5)
        assert [s.altitude_km for s in result] == [0, 100]

    def test_zero_field_is_nan(self):
        result = normalize_intensity_error(_profile((0, 10)), _profile((0, 0)))
        assert math.isnan(result[0].value)

    def test_missing_field_is_nan(self):
        result = normalize_intensity_error(_profile((0, 10)), _profile((0, math.nan)))
        assert math.isnan(result[0].value)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            normalize_intensity_error(_profile((0, 1), (10, 2)), _profile((0, 1)))

    def test_altitude_mismatch(self):
        with pytest.raises(ValueError, match="altitude mismatch"):
            normalize_intensity_error(_profile((0, 1)), _profile((10, 1)))


class TestNormalizeThreshold:
    def test_ground_field(self):
        assert normalize_threshold(280, 50000) == pytest.approx(0.56)

    def test_zero_ground_field(self):
        assert math.isnan(normalize_threshold(280, 0))


class TestNormalizeComponent:
    def test_angular_passthrough(self):
        profile = _profile((0, 0.2), (100, 0.3))
        out, threshold, normalized = normalize_component(Component.D, profile, 1.0, None)
        assert out is profile
        assert threshold == 1.0
        assert normalized is False

    def test_intensity_normalized_against_ground(self):
        profile = _profile((0, 100), (100, 100))
        field = _profile((0, 50000), (100, 25000))
        out, threshold, normalized = normalize_component(Component.F, profile, 280, field)
        assert normalized is True
        assert threshold == pytest.approx(0.56)
        assert out[1].value == pytest.approx(0.4)

    def test_intensity_requires_field(self):
        with pytest.raises(ValueError):
            normalize_component(Component.Z, _profile((0, 1)), 200, None)
