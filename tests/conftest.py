"""
Pytest configuration for VayuWatch tests.

Registers custom markers and provides shared fixtures.
"""

from datetime import datetime

import pytest

from vayuwatch.geography import City, State, Ward, load_baseline
from vayuwatch.pollutant_data import PollutantData


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def make_pollutants(**overrides):
    """Builds a valid pollutant reading, overriding selected values."""
    values = dict(pm25=80, pm10=150, no2=40, so2=12, co=1.2, o3=35, nh3=20)
    values.update(overrides)
    return PollutantData(**values)


def make_ward(ward_id, aqi, population=100_000, **kwargs):
    return Ward(
        id=ward_id,
        name=kwargs.pop("name", ward_id.replace("-", " ").title()),
        aqi=aqi,
        population=population,
        pollutants=kwargs.pop("pollutants", make_pollutants()),
        **kwargs,
    )


def make_city(city_id, aqi, state="Test State", wards=(), population=1_000_000,
              coordinates=(77.0, 28.0), **kwargs):
    return City(
        id=city_id,
        name=kwargs.pop("name", city_id.replace("-", " ").title()),
        state=state,
        aqi=aqi,
        population=population,
        pollutants=kwargs.pop("pollutants", make_pollutants()),
        coordinates=coordinates,
        wards=tuple(wards),
        **kwargs,
    )


@pytest.fixture
def baseline():
    """Fixture providing the packaged baseline dataset."""
    return load_baseline()


@pytest.fixture
def small_forest():
    """
    Fixture providing a two-state forest.

    alpha (AL): city-a (120, wards a1=130, a2=90) and city-b (181)
    beta (BT): city-c (40, no wards)
    """
    city_a = make_city(
        "city-a", 120, state="Alpha",
        wards=[make_ward("a1", 130), make_ward("a2", 90)],
        coordinates=(77.2, 28.6),
    )
    city_b = make_city("city-b", 181, state="Alpha", coordinates=(72.8, 19.0))
    city_c = make_city("city-c", 40, state="Beta", coordinates=(76.3, 10.0))
    return (
        State(id="alpha", name="Alpha", code="AL", aqi=0, cities=(city_a, city_b)),
        State(id="beta", name="Beta", code="BT", aqi=0, cities=(city_c,)),
    )


@pytest.fixture
def fixed_now():
    """Fixture providing a fixed timestamp."""
    return datetime(2025, 11, 3, 8, 30, 0)
