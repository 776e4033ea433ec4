"""
Risk scoring module for VayuWatch intelligence.

Derives population-level risk figures from an AQI reading:
- Pollution risk index: a fixed linear score from AQI, population density and
  an assumed vulnerable share of residents
- Ward risk ranking: wards ordered by that score
- Vulnerable population impact: demographic estimates scaled by a
  category-dependent risk multiplier
- Exposure projection: indicative seven-day outlook per category
"""

from dataclasses import dataclass
from typing import Iterable, Literal

from ..aqi_category import AQICategory, CategoryLike, as_category, get_aqi_label
from ..config import DEFAULT_INTELLIGENCE_CONFIG, IntelligenceConfig
from ..geography import Ward
from ..rounding import clamp, round_half_up, round_to

RiskLevel = Literal["Low", "Medium", "High", "Critical"]


@dataclass(frozen=True)
class RiskFactor:
    name: str
    contribution: int


@dataclass(frozen=True)
class RiskIndex:
    """
    Pollution risk index for a location.

    Attributes:
        level: Low, Medium, High or Critical
        score: 0-100
        factors: Rounded contribution of each scoring component
        explanation: Human-readable summary
    """

    level: RiskLevel
    score: int
    factors: tuple[RiskFactor, ...]
    explanation: str


def calculate_risk_index(
    aqi: float,
    population: int,
    category: CategoryLike,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> RiskIndex:
    """
    Scores the pollution risk of a location from 0 to 100.

    score = aqi_component + density_component + vulnerable_component, where
    - aqi_component = min(aqi / 500 * 40, 40)
    - density_component = min(population / 1,000,000 * 20, 25)
    - vulnerable_component = 0.25 * 35, a constant because the vulnerable
      share is a fixed assumption rather than a per-location figure

    The sum is rounded and clamped to [0, 100]. Level thresholds: above 75
    Critical, above 50 High, above 30 Medium, otherwise Low.

    Args:
        aqi: Air Quality Index (negative values count as 0)
        population: Resident population (negative values count as 0)
        category: AQI category, used for the explanation text
        config: Policy coefficients

    Returns:
        The RiskIndex
    """
    aqi = max(0, aqi)
    population = max(0, population)

    aqi_risk = min((aqi / 500) * config.risk_aqi_weight, config.risk_aqi_cap)
    density_risk = min(
        (population / config.risk_density_unit) * config.risk_density_weight,
        config.risk_density_cap,
    )
    vulnerable_risk = config.vulnerable_fraction * config.vulnerable_weight

    score = clamp(round_half_up(aqi_risk + density_risk + vulnerable_risk), 0, 100)

    level: RiskLevel = "Low"
    if score > config.risk_critical_above:
        level = "Critical"
    elif score > config.risk_high_above:
        level = "High"
    elif score > config.risk_medium_above:
        level = "Medium"

    factors = (
        RiskFactor("Air Quality Index", round_half_up(aqi_risk)),
        RiskFactor("Population Density", round_half_up(density_risk)),
        RiskFactor("Vulnerable Groups", round_half_up(vulnerable_risk)),
    )

    residents_m = round_to(population / 1_000_000, 1)
    vulnerable_k = round_half_up(population * config.vulnerable_fraction / 1000)
    explanation = (
        f"Risk level is {level.lower()} based on {get_aqi_label(category)} air quality "
        f"affecting {residents_m:.1f}M residents, with ~{vulnerable_k}K vulnerable individuals."
    )

    return RiskIndex(level=level, score=score, factors=factors, explanation=explanation)


@dataclass(frozen=True)
class RankedWard:
    ward: Ward
    risk: RiskIndex


def rank_wards_by_risk(
    wards: Iterable[Ward],
    max_items: int = 5,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> list[RankedWard]:
    """
    Ranks wards by risk score, most at-risk first.

    Wards with equal scores keep their input order.

    Args:
        wards: Wards to rank
        max_items: Maximum number of wards returned
        config: Policy coefficients
    """
    ranked = [
        RankedWard(ward, calculate_risk_index(ward.aqi, ward.population, ward.category, config))
        for ward in wards
    ]
    ranked.sort(key=lambda item: item.risk.score, reverse=True)
    return ranked[:max(0, max_items)]


@dataclass(frozen=True)
class VulnerableImpact:
    total_population: int
    at_risk_population: int
    children_affected: int
    elderly_affected: int
    respiratory_patients: int
    impact_statement: str


def format_compact(number: int) -> str:
    """Formats a count as 1.2M, 340K or the plain number."""
    if number >= 1_000_000:
        return f"{round_to(number / 1_000_000, 1):.1f}M"
    if number >= 1000:
        return f"{round_half_up(number / 1000)}K"
    return str(number)


def get_vulnerable_impact(
    population: int,
    category: CategoryLike,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> VulnerableImpact:
    """
    Estimates how many vulnerable residents are affected.

    Applies fixed demographic shares to the population (26% children, 9%
    elderly, 8% with respiratory conditions), then scales their sum by a
    category risk multiplier running from 0.05 (good) to 0.95 (severe).

    Args:
        population: Resident population (negative values count as 0)
        category: AQI category
        config: Policy coefficients

    Returns:
        The VulnerableImpact
    """
    category = as_category(category)
    population = max(0, population)

    children = round_half_up(population * config.children_fraction)
    elderly = round_half_up(population * config.elderly_fraction)
    respiratory = round_half_up(population * config.respiratory_fraction)

    multiplier = config.category_risk_multipliers[category]
    at_risk = round_half_up((children + elderly + respiratory) * multiplier)

    if category in (AQICategory.GOOD, AQICategory.SATISFACTORY):
        statement = (
            "Air quality is safe for most residents. Standard precautions for "
            f"{format_compact(respiratory)} respiratory patients."
        )
    elif category == AQICategory.MODERATE:
        statement = f"~{format_compact(at_risk)} sensitive individuals may experience mild discomfort."
    elif category == AQICategory.POOR:
        statement = f"~{format_compact(at_risk)} residents may experience respiratory symptoms today."
    else:
        statement = (
            f"~{format_compact(at_risk)} residents at significant health risk. "
            "Medical preparedness advised."
        )

    return VulnerableImpact(
        total_population=population,
        at_risk_population=at_risk,
        children_affected=children,
        elderly_affected=elderly,
        respiratory_patients=respiratory,
        impact_statement=statement,
    )


ExposureRiskLevel = Literal["Minimal", "Low", "Moderate", "Elevated", "High"]

EXPOSURE_DISCLAIMER = (
    "Indicative projection based on current conditions. "
    "Actual health impact depends on individual factors."
)

_EXPOSURE_TABLE: dict[AQICategory, tuple[ExposureRiskLevel, str]] = {
    AQICategory.GOOD: (
        "Minimal",
        "Current air quality poses minimal long-term risk with {days}-day exposure.",
    ),
    AQICategory.SATISFACTORY: (
        "Minimal",
        "Current air quality poses minimal long-term risk with {days}-day exposure.",
    ),
    AQICategory.MODERATE: (
        "Low",
        "If conditions persist for {days} days, sensitive individuals may experience "
        "mild respiratory symptoms.",
    ),
    AQICategory.POOR: (
        "Moderate",
        "Continued exposure over {days} days may lead to respiratory discomfort in "
        "general population.",
    ),
    AQICategory.VERY_POOR: (
        "Elevated",
        "If current conditions continue for {days} days, significant increase in "
        "respiratory issues expected. Medical resources should be on standby.",
    ),
    AQICategory.SEVERE: (
        "High",
        "CRITICAL: Prolonged exposure at this level poses serious health risk. "
        "Hospitalization rates may increase significantly.",
    ),
}


@dataclass(frozen=True)
class ExposureProjection:
    days: int
    risk_level: ExposureRiskLevel
    statement: str
    disclaimer: str


def get_exposure_projection(
    aqi: float,
    category: CategoryLike,
    config: IntelligenceConfig = DEFAULT_INTELLIGENCE_CONFIG,
) -> ExposureProjection:
    """Projects the health outlook if current conditions persist for a week."""
    risk_level, statement = _EXPOSURE_TABLE[as_category(category)]
    return ExposureProjection(
        days=config.exposure_days,
        risk_level=risk_level,
        statement=statement.format(days=config.exposure_days),
        disclaimer=EXPOSURE_DISCLAIMER,
    )
