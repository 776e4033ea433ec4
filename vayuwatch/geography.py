"""
Geographic tree module for VayuWatch.

This module defines the State -> City -> Ward tree that carries AQI readings,
and the loader for the static baseline dataset the tree is seeded from.

Nodes are frozen dataclasses with tuple children, so a refresh always builds a
new tree rather than mutating the current one. A node's category is a derived
property of its AQI and can never be set independently.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .aqi_category import AQICategory, classify
from .pollutant_data import PollutantData

logger = logging.getLogger(__name__)

DEFAULT_BASELINE_PATH = Path(__file__).parent / "data" / "baseline.json"


@dataclass(frozen=True)
class Ward:
    """
    Smallest administrative unit in the tree, child of a City.

    Attributes:
        id: Unique ward identifier (e.g. "rohini")
        name: Display name
        aqi: Current Air Quality Index
        population: Resident population
        pollutants: Current pollutant reading
        dominant_source: Main pollution source label (e.g. "Vehicular")
        area: Area in square kilometres
    """

    id: str
    name: str
    aqi: int
    population: int
    pollutants: PollutantData
    dominant_source: str = "Mixed"
    area: float = 0.0

    @property
    def category(self) -> AQICategory:
        return classify(self.aqi)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "aqi": self.aqi,
            "category": self.category.value,
            "population": self.population,
            "pollutants": self.pollutants.to_dict(),
            "dominantSource": self.dominant_source,
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Ward":
        return cls(
            id=data["id"],
            name=data["name"],
            aqi=int(data["aqi"]),
            population=int(data.get("population", 0)),
            pollutants=PollutantData.from_dict(data["pollutants"]),
            dominant_source=data.get("dominantSource", "Mixed"),
            area=float(data.get("area", 0.0)),
        )


@dataclass(frozen=True)
class City:
    """
    A monitored city, child of a State and parent of its Wards.

    Attributes:
        id: Unique city identifier (e.g. "new-delhi")
        name: Display name
        state: Name of the parent state
        aqi: Current Air Quality Index
        population: Resident population
        pollutants: Current pollutant reading
        coordinates: (longitude, latitude) of the city centre
        station_count: Number of monitoring stations
        wards: Child wards
        last_updated: When the reading was produced, or None for baseline data
    """

    id: str
    name: str
    state: str
    aqi: int
    population: int
    pollutants: PollutantData
    coordinates: tuple[float, float]
    station_count: int = 0
    wards: tuple[Ward, ...] = field(default_factory=tuple)
    last_updated: Optional[datetime] = None

    @property
    def category(self) -> AQICategory:
        return classify(self.aqi)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state,
            "aqi": self.aqi,
            "category": self.category.value,
            "population": self.population,
            "pollutants": self.pollutants.to_dict(),
            "coordinates": list(self.coordinates),
            "stationCount": self.station_count,
            "wards": [ward.to_dict() for ward in self.wards],
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }

    @classmethod
    def from_dict(cls, data: dict, state_name: str) -> "City":
        last_updated = data.get("lastUpdated")
        return cls(
            id=data["id"],
            name=data["name"],
            state=data.get("state", state_name),
            aqi=int(data["aqi"]),
            population=int(data.get("population", 0)),
            pollutants=PollutantData.from_dict(data["pollutants"]),
            coordinates=(float(data["coordinates"][0]), float(data["coordinates"][1])),
            station_count=int(data.get("stationCount", 0)),
            wards=tuple(Ward.from_dict(ward) for ward in data.get("wards", [])),
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
        )


@dataclass(frozen=True)
class State:
    """
    Root of a geographic subtree.

    The state AQI is the rounded mean of its cities' AQI values and is
    recomputed wholesale by the aggregator on every refresh.

    Attributes:
        id: Unique state identifier (e.g. "delhi")
        name: Display name
        code: Two-letter state code
        aqi: Current Air Quality Index
        cities: Child cities
    """

    id: str
    name: str
    code: str
    aqi: int
    cities: tuple[City, ...] = field(default_factory=tuple)

    @property
    def category(self) -> AQICategory:
        return classify(self.aqi)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "aqi": self.aqi,
            "category": self.category.value,
            "cities": [city.to_dict() for city in self.cities],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "State":
        return cls(
            id=data["id"],
            name=data["name"],
            code=data["code"],
            aqi=int(data["aqi"]),
            cities=tuple(City.from_dict(city, data["name"]) for city in data.get("cities", [])),
        )


@dataclass(frozen=True)
class PincodeEntry:
    """Maps a six-digit pincode onto a city and, optionally, one of its wards."""

    city_id: str
    name: str
    ward_id: Optional[str] = None


@dataclass(frozen=True)
class Baseline:
    """The static dataset the live tree is seeded from."""

    states: tuple[State, ...]
    pincodes: dict[str, PincodeEntry]


def _validate_states(states: tuple[State, ...]) -> None:
    """
    Validates every pollutant reading in the tree.

    Raises:
        ValueError: Naming the first node whose reading is invalid
    """
    for state in states:
        for city in state.cities:
            valid, reason = city.pollutants.validate()
            if not valid:
                raise ValueError(f"Invalid pollutants for city '{city.id}': {reason}")
            for ward in city.wards:
                valid, reason = ward.pollutants.validate()
                if not valid:
                    raise ValueError(f"Invalid pollutants for ward '{ward.id}': {reason}")


def load_baseline(path: Optional[Union[str, Path]] = None) -> Baseline:
    """
    Loads the baseline dataset from a JSON file.

    The file holds a "states" list (with nested cities and wards) and a
    "pincodes" mapping. Stored category fields are ignored; categories are
    always derived from AQI.

    Args:
        path: Optional path to the JSON file. If None, uses the dataset
              shipped with the package.

    Returns:
        The parsed Baseline

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds malformed or invalid data
    """
    baseline_path = Path(path) if path is not None else DEFAULT_BASELINE_PATH
    if not baseline_path.exists():
        raise FileNotFoundError(f"Baseline data file not found: {baseline_path}")

    with open(baseline_path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Baseline data file is not valid JSON: {baseline_path}") from e

    try:
        states = tuple(State.from_dict(state) for state in raw["states"])
        pincodes = {
            code: PincodeEntry(
                city_id=entry["cityId"],
                name=entry["name"],
                ward_id=entry.get("wardId"),
            )
            for code, entry in raw.get("pincodes", {}).items()
        }
    except (KeyError, TypeError, IndexError) as e:
        raise ValueError(f"Malformed baseline data in {baseline_path}: {e!r}") from e

    _validate_states(states)

    logger.info(
        "Loaded baseline with %d states and %d cities from %s",
        len(states),
        sum(len(state.cities) for state in states),
        baseline_path,
    )
    return Baseline(states=states, pincodes=pincodes)
