"""
City alerts module for VayuWatch.

Builds the alert feed from the current city readings: severe and very poor
cities raise "severe" alerts, poor cities raise "warning" alerts.
"""

from dataclasses import dataclass
from typing import Iterable, Literal

from .aqi_category import AQICategory
from .geography import City

CityAlertType = Literal["severe", "warning"]

SEVERE_ALERT_CATEGORIES = (AQICategory.SEVERE, AQICategory.VERY_POOR)


@dataclass(frozen=True)
class CityAlert:
    """
    One entry in the alert feed.

    Attributes:
        id: Id of the city the alert is about
        type: severe or warning
        title: Alert heading including the city name
        description: What happened and what to do
        location: "City, State"
        aqi: City AQI at the time the alert was built
        category: City AQI category
    """

    id: str
    type: CityAlertType
    title: str
    description: str
    location: str
    aqi: int
    category: AQICategory


def build_city_alerts(cities: Iterable[City]) -> list[CityAlert]:
    """
    Builds alerts for every city with poor or worse air.

    Args:
        cities: Cities to inspect

    Returns:
        Alerts sorted by AQI, highest first. Cities with equal AQI keep
        severe alerts ahead of warnings, then input order.
    """
    cities = list(cities)
    severe = [
        CityAlert(
            id=city.id,
            type="severe",
            title=f"Severe Air Quality Alert - {city.name}",
            description=f"AQI has reached {city.aqi}. Emergency measures recommended.",
            location=f"{city.name}, {city.state}",
            aqi=city.aqi,
            category=city.category,
        )
        for city in cities
        if city.category in SEVERE_ALERT_CATEGORIES
    ]
    warnings = [
        CityAlert(
            id=city.id,
            type="warning",
            title=f"Poor Air Quality Warning - {city.name}",
            description=f"AQI is {city.aqi}. Sensitive groups should limit outdoor exposure.",
            location=f"{city.name}, {city.state}",
            aqi=city.aqi,
            category=city.category,
        )
        for city in cities
        if city.category == AQICategory.POOR
    ]
    return sorted(severe + warnings, key=lambda alert: alert.aqi, reverse=True)
