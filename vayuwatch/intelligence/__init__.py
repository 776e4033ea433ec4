"""
Intelligence module for VayuWatch.

This module contains the pure functions that turn an AQI reading, category
or population into advisories, risk scores, comparisons and projections.
"""

from .advisory import (
    explain_aqi,
    get_alert_reason,
    get_authority_recommendations,
    get_city_personality,
    get_confidence_level,
    get_daily_life_impact,
    get_safety_checklist,
)
from .risk import (
    calculate_risk_index,
    get_exposure_projection,
    get_vulnerable_impact,
    rank_wards_by_risk,
)
from .trends import get_aqi_change, get_clean_air_suggestions, get_ncap_comparison

__all__ = [
    'calculate_risk_index',
    'explain_aqi',
    'get_alert_reason',
    'get_aqi_change',
    'get_authority_recommendations',
    'get_city_personality',
    'get_clean_air_suggestions',
    'get_confidence_level',
    'get_daily_life_impact',
    'get_exposure_projection',
    'get_ncap_comparison',
    'get_safety_checklist',
    'get_vulnerable_impact',
    'rank_wards_by_risk',
]
