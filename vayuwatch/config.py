"""
Configuration module for VayuWatch.

This module holds every tunable constant of the data layer:
- IntelligenceConfig: the policy coefficients behind the intelligence
  functions (risk weights, demographic fractions, NCAP factors, ...)
- SimulationConfig: perturbation ranges for the live-data simulator
- Settings: runtime settings read from environment variables, with a .env
  file loaded via python-dotenv when present

The coefficients are fixed assumptions, not values calibrated against
epidemiological data. Keeping them in one table lets them be tuned without
touching the logic.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

from .aqi_category import AQICategory

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS = 180_000


@dataclass(frozen=True)
class IntelligenceConfig:
    """
    Policy coefficients for the intelligence functions.

    Attributes are grouped by the function that reads them. The defaults
    reproduce the dashboard's published figures exactly.
    """

    # Pollution risk index
    risk_aqi_weight: float = 40.0
    risk_aqi_cap: float = 40.0
    risk_density_weight: float = 20.0
    risk_density_cap: float = 25.0
    risk_density_unit: int = 1_000_000
    vulnerable_fraction: float = 0.25
    vulnerable_weight: float = 35.0
    risk_critical_above: int = 75
    risk_high_above: int = 50
    risk_medium_above: int = 30

    # Vulnerable population impact
    children_fraction: float = 0.26
    elderly_fraction: float = 0.09
    respiratory_fraction: float = 0.08
    category_risk_multipliers: Mapping[AQICategory, float] = field(
        default_factory=lambda: MappingProxyType({
            AQICategory.GOOD: 0.05,
            AQICategory.SATISFACTORY: 0.1,
            AQICategory.MODERATE: 0.25,
            AQICategory.POOR: 0.5,
            AQICategory.VERY_POOR: 0.75,
            AQICategory.SEVERE: 0.95,
        })
    )

    # NCAP comparison: synthetic 2017 baseline and 30% reduction target
    ncap_baseline_factor: float = 1.25
    ncap_target_factor: float = 0.7
    ncap_target_year: int = 2026
    ncap_critical_below: int = 30
    ncap_behind_below: int = 60

    # AQI change since yesterday
    change_threshold: int = 10
    previous_aqi_floor: float = 0.85
    previous_aqi_spread: float = 0.3
    # (factor, weight) pairs. Selection indexes by abs(change) modulo the list
    # length; the weights are carried but not used for selection.
    change_factors: tuple[tuple[str, float], ...] = (
        ("Traffic congestion", 0.3),
        ("Industrial activity", 0.2),
        ("Weather stagnation", 0.15),
        ("Low wind speed", 0.12),
        ("Construction dust", 0.1),
        ("Temperature inversion", 0.08),
        ("Stubble burning", 0.05),
    )

    # Exposure projection
    exposure_days: int = 7

    # Clean air escape suggestions
    clean_air_max_results: int = 5
    clean_air_min_distance_km: int = 5
    clean_air_distance_spread_km: int = 20


@dataclass(frozen=True)
class SimulationConfig:
    """
    Perturbation settings for the live-data simulator.

    Pollutant spreads are the half-width of the multiplicative jitter: a
    spread of 0.1 multiplies the baseline by a factor in [0.9, 1.1).
    """

    city_max_delta: int = 20
    ward_max_delta: int = 15
    aqi_min: int = 0
    aqi_max: int = 500
    pollutant_spreads: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({
            "pm25": 0.1,
            "pm10": 0.1,
            "no2": 0.15,
            "so2": 0.15,
            "co": 0.1,
            "o3": 0.15,
            "nh3": 0.15,
        })
    )
    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS


DEFAULT_INTELLIGENCE_CONFIG = IntelligenceConfig()
DEFAULT_SIMULATION_CONFIG = SimulationConfig()


def _read_int(name: str, default: Optional[int], minimum: int = 0) -> Optional[int]:
    """
    Reads an integer environment variable.

    Invalid or out-of-range values are logged and replaced by the default.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using default %r", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s=%d is below %d, using default %r", name, value, minimum, default)
        return default
    return value


def _read_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name, "").strip()
    return Path(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the live service and notification store.

    Attributes:
        refresh_interval_ms: Timer interval between simulated refreshes
        seed: Optional seed for the simulator's random generator
        log_dir: Directory for the persistent refresh log
        notifications_path: Optional JSON file backing the notification center
        baseline_path: Optional baseline dataset overriding the packaged one
    """

    refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS
    seed: Optional[int] = None
    log_dir: Path = Path("logs")
    notifications_path: Optional[Path] = None
    baseline_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Builds settings from environment variables.

        Reads VAYUWATCH_REFRESH_INTERVAL_MS, VAYUWATCH_SEED,
        VAYUWATCH_LOG_DIR, VAYUWATCH_NOTIFICATIONS_PATH and
        VAYUWATCH_BASELINE_PATH. Unset variables fall back to the defaults.
        """
        return cls(
            refresh_interval_ms=_read_int(
                "VAYUWATCH_REFRESH_INTERVAL_MS", DEFAULT_REFRESH_INTERVAL_MS, minimum=1
            ),
            seed=_read_int("VAYUWATCH_SEED", None),
            log_dir=_read_path("VAYUWATCH_LOG_DIR", Path("logs")),
            notifications_path=_read_path("VAYUWATCH_NOTIFICATIONS_PATH", None),
            baseline_path=_read_path("VAYUWATCH_BASELINE_PATH", None),
        )
