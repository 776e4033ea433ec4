"""
Trend and comparison module for VayuWatch intelligence.

Compares a current AQI reading against a reference point:
- AQI change since yesterday, with a contributing-factor label
- Progress towards the National Clean Air Programme (NCAP) target
- Cleaner nearby locations to escape to
"""

import math
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence

import numpy as np

from ..aqi_category import AQICategory, classify
from ..config import DEFAULT_INTELLIGENCE_CONFIG, IntelligenceConfig
from ..geolocation import calculate_distance_km
from ..rounding import clamp, round_half_up
from ..variation_simulator import RandomSource

ChangeDirection = Literal["improved", "worsened", "stable"]


@dataclass(frozen=True)
class AQIChange:
    """
    Change in AQI since the previous reading.

    Attributes:
        change: Absolute size of the change in AQI points
        direction: improved, worsened or stable
        factor: Contributing factor label
        explanation: Human-readable summary
        percent_change: Absolute change as a rounded percentage of the
                        previous reading
    """

    change: int
    direction: ChangeDirection
    factor: str
    explanation: str
    percent_change: int


def get_aqi_change(
    current_aqi: int,
    previous_aqi: Optional[int] = None,
    rng: RandomSource = None,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> AQIChange:
    """
    Describes how AQI moved since yesterday.

    When previous_aqi is not given, a synthetic "yesterday" is drawn as
    round(current * (0.85 + U[0, 1) * 0.3)).

    The delta is classified as worsened above +10, improved below -10 and
    stable otherwise. The contributing factor is picked as
    factors[abs(delta) % len(factors)]; the factor weights are not used for
    the pick.

    Args:
        current_aqi: Today's AQI
        previous_aqi: Yesterday's AQI, or None to synthesize one
        rng: numpy Generator or seed used for the synthetic value
        config: Policy coefficients

    Returns:
        The AQIChange
    """
    if previous_aqi is None:
        generator = np.random.default_rng(rng)
        factor_draw = config.previous_aqi_floor + generator.random() * config.previous_aqi_spread
        previous_aqi = round_half_up(current_aqi * factor_draw)

    change = current_aqi - previous_aqi
    percent_change = round_half_up(abs(change / previous_aqi) * 100) if previous_aqi else 0

    direction: ChangeDirection = "stable"
    if change > config.change_threshold:
        direction = "worsened"
    elif change < -config.change_threshold:
        direction = "improved"

    factors = config.change_factors
    primary_factor = factors[int(math.floor(abs(change) % len(factors)))][0]

    if direction == "improved":
        explanation = (
            f"AQI improved by {abs(change)} points due to favorable wind conditions "
            "and reduced emissions."
        )
    elif direction == "worsened":
        explanation = (
            f"AQI increased by {change} points due to {primary_factor.lower()} "
            "and atmospheric conditions."
        )
    else:
        explanation = "AQI levels remained relatively stable compared to yesterday."

    return AQIChange(
        change=abs(change),
        direction=direction,
        factor=primary_factor,
        explanation=explanation,
        percent_change=percent_change,
    )


NCAPStatus = Literal["On Track", "Behind", "Critical"]


@dataclass(frozen=True)
class NCAPComparison:
    """
    Progress towards the NCAP reduction target.

    Attributes:
        current_aqi: Today's AQI
        baseline_aqi: Synthetic historical baseline
        target_aqi: Target AQI (30% below the baseline)
        gap: Points still above the target, never negative
        progress: Percentage of the required reduction achieved, 0-100
        status: On Track, Behind or Critical
        year_to_achieve: Target year
    """

    current_aqi: int
    baseline_aqi: int
    target_aqi: int
    gap: int
    progress: int
    status: NCAPStatus
    year_to_achieve: int


def get_ncap_comparison(
    current_aqi: int,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> NCAPComparison:
    """
    Compares current AQI against the NCAP reduction target.

    There is no historical dataset behind this: the baseline is synthesized
    as round(current * 1.25) and the target as round(baseline * 0.7), so the
    comparison is self-referential by construction.

    progress = clamp(round((baseline - current) / (baseline - target) * 100), 0, 100)
    When baseline equals target there is nothing left to reduce and progress
    is 100. Status: below 30 Critical, below 60 Behind, otherwise On Track.
    """
    current_aqi = max(0, current_aqi)
    baseline_aqi = round_half_up(current_aqi * config.ncap_baseline_factor)
    target_aqi = round_half_up(baseline_aqi * config.ncap_target_factor)

    gap = current_aqi - target_aqi
    total_reduction_needed = baseline_aqi - target_aqi
    reduction_achieved = baseline_aqi - current_aqi

    if total_reduction_needed > 0:
        progress = clamp(round_half_up(reduction_achieved / total_reduction_needed * 100), 0, 100)
    else:
        progress = 100

    status: NCAPStatus = "On Track"
    if progress < config.ncap_critical_below:
        status = "Critical"
    elif progress < config.ncap_behind_below:
        status = "Behind"

    return NCAPComparison(
        current_aqi=current_aqi,
        baseline_aqi=baseline_aqi,
        target_aqi=target_aqi,
        gap=max(0, gap),
        progress=progress,
        status=status,
        year_to_achieve=config.ncap_target_year,
    )


@dataclass(frozen=True)
class NearbyLocation:
    """
    A candidate location for clean air suggestions.

    Attributes:
        name: Display name
        aqi: Current AQI
        coordinates: Optional (longitude, latitude)
    """

    name: str
    aqi: int
    coordinates: Optional[Sequence[float]] = None

    @property
    def category(self) -> AQICategory:
        return classify(self.aqi)


@dataclass(frozen=True)
class CleanAirSuggestion:
    name: str
    distance: str
    current_aqi: int
    improvement: int
    category: AQICategory


def get_clean_air_suggestions(
    current_aqi: int,
    nearby_locations: Iterable[NearbyLocation],
    origin: Optional[Sequence[float]] = None,
    rng: RandomSource = None,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> list[CleanAirSuggestion]:
    """
    Suggests nearby locations with cleaner air.

    Keeps only locations with a lower AQI, sorts them cleanest first and
    returns at most five. When the origin and a location both have
    (longitude, latitude) coordinates the haversine distance is reported;
    otherwise the distance is a synthetic 5-24 km.

    Args:
        current_aqi: AQI at the user's location
        nearby_locations: Candidates; any object with name, aqi, category and
                          an optional coordinates attribute works (cities do)
        origin: Optional (longitude, latitude) of the user
        rng: numpy Generator or seed for synthetic distances
        config: Policy coefficients
    """
    generator = np.random.default_rng(rng)
    suggestions = []
    for location in nearby_locations:
        if location.aqi >= current_aqi:
            continue
        coordinates = getattr(location, "coordinates", None)
        if origin is not None and coordinates is not None:
            km = calculate_distance_km(origin[1], origin[0], coordinates[1], coordinates[0])
            distance = f"{round_half_up(km)} km"
        else:
            km = int(math.floor(
                generator.random() * config.clean_air_distance_spread_km
                + config.clean_air_min_distance_km
            ))
            distance = f"{km} km"
        suggestions.append(
            CleanAirSuggestion(
                name=location.name,
                distance=distance,
                current_aqi=location.aqi,
                improvement=current_aqi - location.aqi,
                category=location.category,
            )
        )

    suggestions.sort(key=lambda suggestion: suggestion.current_aqi)
    return suggestions[:config.clean_air_max_results]
