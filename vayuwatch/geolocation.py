"""
Geolocation module for VayuWatch.

Finds the monitoring station (city) nearest to a user's position. When the
user denies location access, the dashboard falls back to New Delhi.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from .geography import City
from .rounding import round_to

EARTH_RADIUS_KM = 6371

# Used when location permission is denied
DEFAULT_LATITUDE = 28.6139
DEFAULT_LONGITUDE = 77.2090


def calculate_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the distance between two coordinates using the Haversine formula.
    Returns distance in kilometers.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class NearestStation:
    city: City
    distance: float  # km, one decimal


def find_nearest_station(
    cities: Iterable[City],
    latitude: float,
    longitude: float,
) -> Optional[NearestStation]:
    """
    Finds the city closest to a position.

    Args:
        cities: Candidate cities
        latitude: User latitude
        longitude: User longitude

    Returns:
        The nearest city with its distance rounded to 0.1 km, or None when
        there are no cities. The first city wins a tie.
    """
    nearest = None
    min_distance = math.inf
    for city in cities:
        distance = calculate_distance_km(latitude, longitude, city.latitude, city.longitude)
        if distance < min_distance:
            min_distance = distance
            nearest = city

    if nearest is None:
        return None
    return NearestStation(city=nearest, distance=round_to(min_distance, 1))


def default_station(cities: Iterable[City]) -> Optional[NearestStation]:
    """Returns the station nearest to New Delhi, the permission-denied fallback."""
    return find_nearest_station(cities, DEFAULT_LATITUDE, DEFAULT_LONGITUDE)


def station_for_city(cities: Iterable[City], city_id: str) -> Optional[NearestStation]:
    """Returns a manually chosen city as the station, at distance 0."""
    for city in cities:
        if city.id == city_id:
            return NearestStation(city=city, distance=0.0)
    return None
