"""
Variation simulator module for VayuWatch.

This module contains the VariationSimulator class which emulates live sensor
feeds by applying bounded random perturbation to baseline readings:
- AQI values get an additive, uniformly distributed offset, rounded and
  clamped to the valid AQI range
- Pollutant values get a multiplicative jitter, clamped to non-negative and
  rounded to each pollutant's natural precision

The random source is a numpy Generator that can be seeded or injected, so a
simulation run is reproducible.
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Union

import numpy as np

from .config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from .geography import City, State, Ward
from .pollutant_data import PollutantData
from .rounding import clamp, round_half_up, round_to

RandomSource = Union[np.random.Generator, int, None]


class VariationSimulator:
    """
    Produces perturbed copies of baseline readings.

    City AQI values move by up to +/-20 points and ward values by up to
    +/-15 points per refresh. Pollutants move by +/-10% (PM2.5, PM10, CO) or
    +/-15% (NO2, SO2, O3, NH3). Lead readings pass through unchanged.
    """

    def __init__(
        self,
        rng: RandomSource = None,
        config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
    ) -> None:
        """
        Initializes the simulator.

        Args:
            rng: A numpy Generator, an integer seed, or None for fresh entropy
            config: Perturbation settings
        """
        self.rng = np.random.default_rng(rng)
        self.config = config

    def perturb(self, baseline: float, max_delta: float) -> int:
        """
        Applies a uniform random offset in [-max_delta, +max_delta].

        The result is rounded to the nearest integer and clamped to the AQI
        range [0, 500], whatever the sign or magnitude of the inputs.

        Args:
            baseline: Starting AQI value
            max_delta: Maximum absolute offset

        Returns:
            The perturbed AQI value
        """
        variation = (self.rng.random() - 0.5) * 2 * max_delta
        # Clamp before rounding so infinite offsets still land in range
        new_aqi = clamp(baseline + variation, self.config.aqi_min, self.config.aqi_max)
        return round_half_up(new_aqi)

    def _jitter(self, value: float, spread: float) -> float:
        """Multiplies value by a random factor in [1 - spread, 1 + spread)."""
        factor = (1 - spread) + self.rng.random() * 2 * spread
        return value * factor

    def perturb_pollutants(self, pollutants: PollutantData) -> PollutantData:
        """
        Applies multiplicative jitter to every pollutant in a reading.

        CO keeps one decimal place; every other pollutant is rounded to an
        integer. Missing NH3 stays missing and lead is copied as-is.

        Args:
            pollutants: Baseline reading

        Returns:
            A new perturbed reading
        """
        spreads = self.config.pollutant_spreads

        def jitter_int(name: str) -> int:
            return max(0, round_half_up(self._jitter(getattr(pollutants, name), spreads[name])))

        pm25 = jitter_int("pm25")
        pm10 = jitter_int("pm10")
        no2 = jitter_int("no2")
        so2 = jitter_int("so2")
        co = max(0.0, round_to(self._jitter(pollutants.co, spreads["co"]), 1))
        o3 = jitter_int("o3")
        nh3 = jitter_int("nh3") if pollutants.nh3 is not None else None

        return PollutantData(
            pm25=pm25,
            pm10=pm10,
            no2=no2,
            so2=so2,
            co=co,
            o3=o3,
            nh3=nh3,
            pb=pollutants.pb,
        )

    def simulate_ward(self, ward: Ward) -> Ward:
        """Returns a perturbed copy of a ward."""
        aqi = self.perturb(ward.aqi, self.config.ward_max_delta)
        return replace(ward, aqi=aqi, pollutants=self.perturb_pollutants(ward.pollutants))

    def simulate_city(self, city: City, now: datetime) -> City:
        """
        Returns a perturbed copy of a city and all of its wards.

        The city AQI is perturbed independently of its wards; wards do not
        feed into the city value.
        """
        aqi = self.perturb(city.aqi, self.config.city_max_delta)
        wards = tuple(self.simulate_ward(ward) for ward in city.wards)
        return replace(
            city,
            aqi=aqi,
            pollutants=self.perturb_pollutants(city.pollutants),
            wards=wards,
            last_updated=now,
        )

    def simulate_states(
        self,
        states: Iterable[State],
        now: Optional[datetime] = None,
    ) -> tuple[State, ...]:
        """
        Perturbs every city and ward of a forest.

        State AQI values are left untouched here; the aggregator recomputes
        them from the new city values.

        Args:
            states: Baseline forest
            now: Timestamp stamped on every city, defaults to datetime.now()

        Returns:
            A new forest with perturbed cities and wards
        """
        if now is None:
            now = datetime.now()
        return tuple(
            replace(state, cities=tuple(self.simulate_city(city, now) for city in state.cities))
            for state in states
        )
