"""
Tests for the risk scoring functions.

Tests cover:
- Pollution risk index: component caps, level thresholds, explanation text
- Ward risk ranking: ordering, ties and limits
- Vulnerable population impact per category
- Exposure projection per category
"""

import pytest

from conftest import make_ward
from vayuwatch.aqi_category import AQICategory
from vayuwatch.config import IntelligenceConfig
from vayuwatch.intelligence import (
    calculate_risk_index,
    get_exposure_projection,
    get_vulnerable_impact,
    rank_wards_by_risk,
)
from vayuwatch.intelligence.risk import EXPOSURE_DISCLAIMER, format_compact


class TestCalculateRiskIndex:
    """Test suite for calculate_risk_index()."""

    # ==================== Boundary Value Analysis ====================

    def test_zero_inputs(self):
        """Boundary: only the constant vulnerable component remains."""
        risk = calculate_risk_index(0, 0, AQICategory.GOOD)
        assert risk.score == 9
        assert risk.level == "Low"
        assert [f.contribution for f in risk.factors] == [0, 0, 9]

    def test_components_are_capped(self):
        """Boundary: AQI caps at 40 and density at 25."""
        risk = calculate_risk_index(1000, 50_000_000, AQICategory.SEVERE)
        # 40 + 25 + 8.75 = 73.75
        assert risk.score == 74
        assert risk.level == "High"

    def test_mid_values(self):
        # 250/500*40 = 20, 1M -> 20, + 8.75 = 48.75
        risk = calculate_risk_index(250, 1_000_000, AQICategory.POOR)
        assert risk.score == 49
        assert risk.level == "Medium"

    # ==================== Decision Path Coverage ====================

    @pytest.mark.parametrize("aqi,population,level", [
        (0, 0, "Low"),
        (150, 1_000_000, "Medium"),
        (400, 1_000_000, "High"),
    ])
    def test_levels(self, aqi, population, level):
        assert calculate_risk_index(aqi, population, AQICategory.MODERATE).level == level

    def test_critical_with_custom_weights(self):
        config = IntelligenceConfig(vulnerable_weight=60.0)
        # 40 + 25 + 15 = 80
        risk = calculate_risk_index(500, 5_000_000, AQICategory.SEVERE, config)
        assert risk.score == 80
        assert risk.level == "Critical"

    # ==================== Edge Cases ====================

    def test_negative_inputs_clamped(self):
        assert calculate_risk_index(-100, -5, AQICategory.GOOD).score == 9

    def test_score_never_exceeds_100(self):
        config = IntelligenceConfig(vulnerable_weight=1000.0)
        assert calculate_risk_index(500, 10_000_000, AQICategory.SEVERE, config).score == 100

    def test_explanation(self):
        risk = calculate_risk_index(312, 2_000_000, "very-poor")
        assert risk.explanation == (
            "Risk level is high based on Very Poor air quality affecting 2.0M residents, "
            "with ~500K vulnerable individuals."
        )


class TestRankWardsByRisk:
    """Test suite for rank_wards_by_risk()."""

    def test_descending_score(self):
        wards = [make_ward("low", 50), make_ward("high", 400), make_ward("mid", 200)]
        ranked = rank_wards_by_risk(wards)
        assert [item.ward.id for item in ranked] == ["high", "mid", "low"]
        assert ranked[0].risk.score >= ranked[1].risk.score >= ranked[2].risk.score

    def test_ties_keep_input_order(self):
        wards = [make_ward("first", 100), make_ward("second", 100)]
        assert [item.ward.id for item in rank_wards_by_risk(wards)] == ["first", "second"]

    def test_max_items(self):
        wards = [make_ward(f"w{i}", 100 + i * 50) for i in range(8)]
        assert len(rank_wards_by_risk(wards)) == 5
        assert len(rank_wards_by_risk(wards, max_items=2)) == 2

    def test_empty(self):
        assert rank_wards_by_risk([]) == []


class TestVulnerableImpact:
    """Test suite for get_vulnerable_impact()."""

    def test_severe_one_million(self):
        impact = get_vulnerable_impact(1_000_000, AQICategory.SEVERE)
        assert impact.children_affected == 260000
        assert impact.elderly_affected == 90000
        assert impact.respiratory_patients == 80000
        assert impact.at_risk_population == 408500
        assert impact.impact_statement == (
            "~409K residents at significant health risk. Medical preparedness advised."
        )

    def test_good_statement(self):
        impact = get_vulnerable_impact(1_000_000, "good")
        assert impact.at_risk_population == 21500
        assert impact.impact_statement == (
            "Air quality is safe for most residents. Standard precautions for "
            "80K respiratory patients."
        )

    def test_moderate_and_poor_statements(self):
        assert "mild discomfort" in get_vulnerable_impact(1_000_000, "moderate").impact_statement
        assert "respiratory symptoms" in get_vulnerable_impact(1_000_000, "poor").impact_statement

    def test_zero_population(self):
        impact = get_vulnerable_impact(0, AQICategory.POOR)
        assert impact.at_risk_population == 0
        assert impact.impact_statement.startswith("~0 residents")

    @pytest.mark.parametrize("number,text", [
        (999, "999"),
        (1000, "1K"),
        (408500, "409K"),
        (2_450_000, "2.5M"),
    ])
    def test_format_compact(self, number, text):
        assert format_compact(number) == text


class TestExposureProjection:
    """Test suite for get_exposure_projection()."""

    @pytest.mark.parametrize("category,level", [
        (AQICategory.GOOD, "Minimal"),
        (AQICategory.SATISFACTORY, "Minimal"),
        (AQICategory.MODERATE, "Low"),
        (AQICategory.POOR, "Moderate"),
        (AQICategory.VERY_POOR, "Elevated"),
        (AQICategory.SEVERE, "High"),
    ])
    def test_levels(self, category, level):
        projection = get_exposure_projection(100, category)
        assert projection.risk_level == level
        assert projection.days == 7
        assert projection.disclaimer == EXPOSURE_DISCLAIMER

    def test_statement_mentions_days(self):
        projection = get_exposure_projection(250, AQICategory.POOR, IntelligenceConfig(exposure_days=3))
        assert "3 days" in projection.statement
