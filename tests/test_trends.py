"""
Tests for the trend and comparison functions.

Tests cover:
- AQI change: direction thresholds, factor selection, synthetic previous value
- NCAP comparison: reference figures, status thresholds, degenerate baseline
- Clean air suggestions: filtering, ordering, limits and distances
"""

import pytest

from conftest import make_city
from vayuwatch.aqi_category import AQICategory
from vayuwatch.config import IntelligenceConfig
from vayuwatch.intelligence import get_aqi_change, get_clean_air_suggestions, get_ncap_comparison
from vayuwatch.intelligence.trends import NearbyLocation


class TestAQIChange:
    """Test suite for get_aqi_change()."""

    def test_worsened(self):
        change = get_aqi_change(120, 100)
        assert change.change == 20
        assert change.direction == "worsened"
        # 20 % 7 == 6
        assert change.factor == "Stubble burning"
        assert change.percent_change == 20
        assert change.explanation == (
            "AQI increased by 20 points due to stubble burning and atmospheric conditions."
        )

    def test_improved(self):
        change = get_aqi_change(80, 100)
        assert change.change == 20
        assert change.direction == "improved"
        assert change.explanation.startswith("AQI improved by 20 points")

    # ==================== Boundary Value Analysis ====================

    @pytest.mark.parametrize("current,direction", [
        (110, "stable"),
        (111, "worsened"),
        (90, "stable"),
        (89, "improved"),
    ])
    def test_threshold_is_exclusive(self, current, direction):
        assert get_aqi_change(current, 100).direction == direction

    def test_no_change(self):
        change = get_aqi_change(100, 100)
        assert change.change == 0
        assert change.factor == "Traffic congestion"
        assert change.percent_change == 0

    # ==================== Edge Cases ====================

    def test_previous_zero(self):
        """Edge case: a zero previous reading reports 0 percent."""
        change = get_aqi_change(50, 0)
        assert change.percent_change == 0
        assert change.direction == "worsened"

    def test_synthetic_previous_is_reproducible(self):
        assert get_aqi_change(200, rng=42) == get_aqi_change(200, rng=42)

    def test_synthetic_previous_range(self):
        """The synthetic previous value is within 85%-115% of current."""
        for seed in range(50):
            change = get_aqi_change(200, rng=seed)
            assert change.change <= 30


class TestNCAPComparison:
    """Test suite for get_ncap_comparison()."""

    def test_reference_figures(self):
        """125 * 0.7 is exactly 87.5, which rounds half up to a target of 88."""
        ncap = get_ncap_comparison(100)
        assert ncap.baseline_aqi == 125
        assert ncap.target_aqi == 88
        assert ncap.gap == 12
        # 25 / 37 = 67.6%
        assert ncap.progress == 68
        assert ncap.status == "On Track"
        assert ncap.year_to_achieve == 2026

    # ==================== Boundary Value Analysis ====================

    def test_progress_of_exactly_sixty_is_on_track(self):
        """Boundary: baseline 16, target 11, current 13 gives 3 / 5 = 60%."""
        ncap = get_ncap_comparison(13)
        assert ncap.baseline_aqi == 16
        assert ncap.target_aqi == 11
        assert ncap.gap == 2
        assert ncap.progress == 60
        assert ncap.status == "On Track"

    def test_progress_below_sixty_is_behind(self):
        """Baseline 6, target 4, current 5 gives 1 / 2 = 50%."""
        ncap = get_ncap_comparison(5)
        assert ncap.progress == 50
        assert ncap.status == "Behind"

    def test_sixty_is_behind_when_threshold_raised(self):
        ncap = get_ncap_comparison(13, IntelligenceConfig(ncap_behind_below=61))
        assert ncap.status == "Behind"

    def test_zero_aqi(self):
        """Edge case: baseline equals target, nothing left to reduce."""
        ncap = get_ncap_comparison(0)
        assert ncap.baseline_aqi == 0
        assert ncap.target_aqi == 0
        assert ncap.progress == 100
        assert ncap.gap == 0

    def test_gap_never_negative(self):
        for aqi in (1, 10, 55, 300, 500):
            assert get_ncap_comparison(aqi).gap >= 0

    def test_status_thresholds(self):
        behind = get_ncap_comparison(100, IntelligenceConfig(ncap_behind_below=70))
        assert behind.status == "Behind"
        critical = get_ncap_comparison(100, IntelligenceConfig(ncap_critical_below=70))
        assert critical.status == "Critical"


class TestCleanAirSuggestions:
    """Test suite for get_clean_air_suggestions()."""

    @pytest.fixture
    def nearby(self):
        return [
            NearbyLocation("Dirty", 300),
            NearbyLocation("Clean", 60),
            NearbyLocation("Cleaner", 40),
            NearbyLocation("Same", 200),
            NearbyLocation("Okay", 150),
        ]

    def test_filters_and_sorts(self, nearby):
        suggestions = get_clean_air_suggestions(200, nearby, rng=1)
        assert [s.name for s in suggestions] == ["Cleaner", "Clean", "Okay"]
        assert suggestions[0].improvement == 160
        assert suggestions[0].category == AQICategory.GOOD

    def test_synthetic_distance_range(self, nearby):
        for seed in range(20):
            for suggestion in get_clean_air_suggestions(200, nearby, rng=seed):
                km = int(suggestion.distance.split()[0])
                assert 5 <= km <= 24
                assert suggestion.distance.endswith(" km")

    def test_at_most_five(self):
        locations = [NearbyLocation(f"L{i}", i * 10) for i in range(10)]
        assert len(get_clean_air_suggestions(500, locations, rng=0)) == 5

    def test_nothing_cleaner(self):
        assert get_clean_air_suggestions(10, [NearbyLocation("A", 10)]) == []

    def test_haversine_distance_for_cities(self):
        """Cities carry coordinates, so the real distance is reported."""
        delhi = make_city("delhi", 300, coordinates=(77.2090, 28.6139))
        jaipur = make_city("jaipur", 148, coordinates=(75.7873, 26.9124))
        suggestions = get_clean_air_suggestions(300, [delhi, jaipur], origin=delhi.coordinates)
        assert len(suggestions) == 1
        km = int(suggestions[0].distance.split()[0])
        assert 230 <= km <= 245
