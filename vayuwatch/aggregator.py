"""
Aggregator module for VayuWatch.

This module recomputes the upper levels of the geographic tree after a
simulation tick and answers the lookup queries the dashboard makes against a
forest of states:
- State AQI is the rounded mean of its cities' AQI values
- City and ward categories follow their AQI automatically
- National statistics, top polluted cities and id lookups are computed from
  a tabular (pandas) view of all cities

Aggregation is bottom-up and wholesale: every call recomputes from scratch
and nothing is cached between ticks.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

import pandas as pd

from .aqi_category import AQICategory, classify
from .geography import City, State, Ward
from .rounding import round_half_up

CITY_COLUMNS = ["id", "name", "state", "aqi", "category", "population"]


def mean_aqi(values: Sequence[float]) -> int:
    """
    Returns the mean of AQI values rounded half-up.

    Raises:
        ValueError: If values is empty
    """
    if len(values) == 0:
        raise ValueError("Cannot average an empty set of AQI values")
    return round_half_up(sum(values) / len(values))


def aggregate_state(state: State) -> State:
    """
    Recomputes a state's AQI from its cities.

    The state AQI becomes round(mean(city AQIs)). A state with no cities keeps
    its current AQI. The category follows from the new AQI.

    Args:
        state: State whose cities carry fresh AQI values

    Returns:
        A new State with the recomputed AQI
    """
    if not state.cities:
        return state
    return replace(state, aqi=mean_aqi([city.aqi for city in state.cities]))


def aggregate_states(states: Iterable[State]) -> tuple[State, ...]:
    """Recomputes every state of a forest. See aggregate_state."""
    return tuple(aggregate_state(state) for state in states)


def get_all_cities(states: Iterable[State]) -> list[City]:
    """Flattens a forest into its cities, in tree order."""
    return [city for state in states for city in state.cities]


def get_city_by_id(states: Iterable[State], city_id: str) -> Optional[City]:
    """Returns the first city with the given id, or None."""
    return next((city for city in get_all_cities(states) if city.id == city_id), None)


def get_state_by_id(states: Iterable[State], state_id: str) -> Optional[State]:
    """Returns the state with the given id, or None."""
    return next((state for state in states if state.id == state_id), None)


def get_ward_by_id(states: Iterable[State], ward_id: str) -> Optional[tuple[City, Ward]]:
    """Returns the (parent city, ward) pair for a ward id, or None."""
    for city in get_all_cities(states):
        for ward in city.wards:
            if ward.id == ward_id:
                return (city, ward)
    return None


def cities_frame(states: Iterable[State]) -> pd.DataFrame:
    """
    Builds a tabular view of all cities.

    One row per city in tree order, with the columns id, name, state, aqi,
    category (string value) and population. The frame index is the city's
    position in tree order.
    """
    rows = [
        {
            "id": city.id,
            "name": city.name,
            "state": city.state,
            "aqi": city.aqi,
            "category": city.category.value,
            "population": city.population,
        }
        for city in get_all_cities(states)
    ]
    return pd.DataFrame(rows, columns=CITY_COLUMNS)


def get_top_polluted_cities(states: Iterable[State], limit: int = 10) -> list[City]:
    """
    Returns the most polluted cities, highest AQI first.

    Ties keep tree order.

    Args:
        states: Forest to search
        limit: Maximum number of cities to return
    """
    states = tuple(states)
    cities = get_all_cities(states)
    frame = cities_frame(states)
    if frame.empty or limit <= 0:
        return []
    ranked = frame.sort_values("aqi", ascending=False, kind="mergesort").head(limit)
    return [cities[position] for position in ranked.index]


@dataclass(frozen=True)
class NationalStats:
    """
    Country-wide summary of a forest.

    Attributes:
        average_aqi: Rounded mean AQI across all cities
        category: Category of the average AQI
        total_cities: Number of cities
        total_states: Number of states
        category_counts: Number of cities per category (categories with no
                         cities are omitted)
        worst_city: First city with the highest AQI, or None
        best_city: First city with the lowest AQI, or None
    """

    average_aqi: int
    category: AQICategory
    total_cities: int
    total_states: int
    category_counts: dict[AQICategory, int]
    worst_city: Optional[City]
    best_city: Optional[City]


def get_national_stats(states: Iterable[State]) -> NationalStats:
    """
    Computes national statistics across all cities of a forest.

    With no cities the average is 0 (good) and there is no worst or best
    city.
    """
    states = tuple(states)
    cities = get_all_cities(states)
    frame = cities_frame(states)

    if frame.empty:
        return NationalStats(
            average_aqi=0,
            category=classify(0),
            total_cities=0,
            total_states=len(states),
            category_counts={},
            worst_city=None,
            best_city=None,
        )

    average_aqi = mean_aqi(frame["aqi"].tolist())
    counts = frame["category"].value_counts(sort=False)
    category_counts = {AQICategory(name): int(count) for name, count in counts.items()}

    return NationalStats(
        average_aqi=average_aqi,
        category=classify(average_aqi),
        total_cities=len(cities),
        total_states=len(states),
        category_counts=category_counts,
        worst_city=cities[int(frame["aqi"].idxmax())],
        best_city=cities[int(frame["aqi"].idxmin())],
    )
