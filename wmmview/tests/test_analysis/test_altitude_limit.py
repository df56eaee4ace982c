"""Tests for threshold crossing analysis and altitude-limit resolution."""

import math

import pytest

from wmmview.analysis.altitude_limit import (
    analyze_crossings,
    compute_altitude_limit,
    resolve_limit,
)
from wmmview.models.altitude import (
    CrossingAnalysis,
    Exceeds,
    LimitKm,
    NoLimit,
    ProfileSample,
)


def _profile(*pairs: tuple[float, float]) -> list[ProfileSample]:
    return [ProfileSample(alt, value) for alt, value in pairs]


class TestAnalyzeCrossings:
    def test_single_crossing_interpolated(self):
        c = analyze_crossings(_profile((0, 10), (100, 10), (200, 310)), 300)
        assert c.crossing_count == 1
        assert c.starts_above is False
        assert c.always_above is False
        assert c.first_crossing_km == pytest.approx(196.667, abs=0.001)

    def test_counts_every_upward_crossing(self):
        profile = _profile((0, 100), (100, 400), (200, 100), (300, 400))
        c = analyze_crossings(profile, 300)
        assert c.crossing_count == 2
        # Only the first crossing is interpolated
        assert c.first_crossing_km == pytest.approx(66.667, abs=0.001)

    def test_value_equal_to_threshold_is_within(self):
        c = analyze_crossings(_profile((0, 300), (100, 300)), 300)
        assert c.crossing_count == 0
        assert c.starts_above is False

    def test_empty_profile(self):
        c = analyze_crossings([], 300)
        assert c == CrossingAnalysis(False, False, 0, None)

    def test_nan_breaks_crossing(self):
        profile = _profile((0, 100), (100, math.nan), (200, 400))
        c = analyze_crossings(profile, 300)
        assert c.crossing_count == 0
        assert c.always_above is False


class TestComputeAltitudeLimit:
    def test_single_crossing_floored(self):
        limit = compute_altitude_limit(_profile((0, 10), (100, 10), (200, 310)), 300)
        assert limit == LimitKm(100)

    def test_floor_to_100km_boundary(self):
        # Crossing at 450 km
        limit = compute_altitude_limit(_profile((400, 200), (500, 400)), 300)
        assert limit == LimitKm(400)

    def test_floor_across_wide_interval(self):
        limit = compute_altitude_limit(_profile((0, 100), (1000, 400), (2000, 500)), 200)
        assert limit == LimitKm(300)

    def test_custom_step(self):
        limit = compute_altitude_limit(_profile((400, 200), (500, 400)), 300, step_km=50)
        assert limit == LimitKm(450)

    def test_starts_above_then_recovers_is_no_limit(self):
        # Exceeds at the first sample but never crosses upward: reported as no limit
        limit = compute_altitude_limit(_profile((0, 400), (100, 50)), 300)
        assert limit == NoLimit()

    def test_always_above(self):
        limit = compute_altitude_limit(_profile((0, 500), (100, 600)), 300)
        assert limit == Exceeds()

    def test_starts_above_with_crossing(self):
        limit = compute_altitude_limit(_profile((0, 500), (100, 100), (200, 500)), 300)
        assert limit == Exceeds()

    def test_multiple_crossings(self):
        profile = _profile((0, 100), (100, 400), (200, 100), (300, 400))
        assert compute_altitude_limit(profile, 300) == Exceeds()

    def test_never_exceeds(self):
        profile = _profile((10, 1), (100, 2), (1000, 3))
        assert compute_altitude_limit(profile, 300) == NoLimit()

    def test_empty_profile(self):
        assert compute_altitude_limit([], 300) == NoLimit()

    def test_single_sample_above(self):
        assert compute_altitude_limit(_profile((10, 500)), 300) == Exceeds()

    def test_nan_threshold(self):
        profile = _profile((0, 100), (100, 400))
        assert compute_altitude_limit(profile, math.nan) == NoLimit()

    def test_infinite_thresholds(self):
        profile = _profile((0, 100), (100, 400))
        assert compute_altitude_limit(profile, math.inf) == NoLimit()
        assert compute_altitude_limit(profile, -math.inf) == Exceeds()

    def test_all_nan_profile(self):
        profile = _profile((0, math.nan), (100, math.nan))
        assert compute_altitude_limit(profile, 300) == NoLimit()


class TestResolveLimit:
    def test_rule_order(self):
        # always_above wins even with a recorded crossing
        c = CrossingAnalysis(True, True, 1, 150.0)
        assert resolve_limit(c) == Exceeds()

    def test_non_finite_crossing(self):
        c = CrossingAnalysis(False, False, 1, math.nan)
        assert resolve_limit(c) == Exceeds()
