"""
Location search module for VayuWatch.

Searches the geographic tree for states, cities and wards by name, and
resolves six-digit pincodes to the city or ward they belong to. A smaller
city-only search feeds the manual station picker.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Literal, Mapping, Optional

from .aggregator import get_city_by_id
from .aqi_category import AQICategory
from .geography import City, PincodeEntry, State

SearchResultType = Literal["state", "city", "ward", "pincode"]

MIN_QUERY_LENGTH = 2
DEFAULT_SEARCH_LIMIT = 10
CITY_PICKER_LIMIT = 5

_PINCODE_PATTERN = re.compile(r"^\d{6}$")


@dataclass(frozen=True)
class SearchResult:
    """
    A single search hit.

    Attributes:
        type: state, city, ward or pincode
        id: Id of the matched node (the ward for a ward-level pincode)
        name: Display name
        subtitle: Secondary line (parent location, counts)
        category: AQI category of the matched node
        path: Dashboard route of the matched node
    """

    type: SearchResultType
    id: str
    name: str
    subtitle: str
    category: AQICategory
    path: str


def _pincode_result(
    states: tuple[State, ...],
    query: str,
    pincodes: Mapping[str, PincodeEntry],
) -> Optional[SearchResult]:
    entry = pincodes.get(query)
    if entry is None:
        return None
    city = get_city_by_id(states, entry.city_id)
    if city is None:
        return None

    if entry.ward_id:
        node_id, path = entry.ward_id, f"/ward/{entry.ward_id}"
    else:
        node_id, path = entry.city_id, f"/city/{entry.city_id}"

    return SearchResult(
        type="pincode",
        id=node_id,
        name=f"📍 {query}",
        subtitle=entry.name,
        category=city.category,
        path=path,
    )


def search_locations(
    states: Iterable[State],
    query: str,
    pincodes: Optional[Mapping[str, PincodeEntry]] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[SearchResult]:
    """
    Searches the tree for locations matching a query.

    A six-digit query that is a known pincode yields a pincode result first.
    States match on name or code, cities and wards on name; matching is a
    case-insensitive substring test. Results follow tree order: each state,
    then its cities, each followed by its wards.

    Args:
        states: Forest to search
        query: Search text; fewer than 2 characters returns nothing
        pincodes: Optional pincode mapping (see Baseline.pincodes)
        limit: Maximum number of results

    Returns:
        Up to limit SearchResult objects
    """
    if len(query) < MIN_QUERY_LENGTH:
        return []

    states = tuple(states)
    needle = query.lower()
    results = []

    if pincodes and _PINCODE_PATTERN.match(query):
        pincode_result = _pincode_result(states, query, pincodes)
        if pincode_result is not None:
            results.append(pincode_result)

    for state in states:
        if needle in state.name.lower() or needle in state.code.lower():
            results.append(SearchResult(
                type="state",
                id=state.id,
                name=state.name,
                subtitle=f"{len(state.cities)} cities • {state.code}",
                category=state.category,
                path=f"/map?state={state.id}",
            ))

        for city in state.cities:
            if needle in city.name.lower():
                results.append(SearchResult(
                    type="city",
                    id=city.id,
                    name=city.name,
                    subtitle=f"{state.name} • {len(city.wards)} wards",
                    category=city.category,
                    path=f"/city/{city.id}",
                ))

            for ward in city.wards:
                if needle in ward.name.lower():
                    results.append(SearchResult(
                        type="ward",
                        id=ward.id,
                        name=ward.name,
                        subtitle=f"{city.name}, {state.name}",
                        category=ward.category,
                        path=f"/ward/{ward.id}",
                    ))

    return results[:limit]


def search_cities(
    cities: Iterable[City],
    query: str,
    limit: int = CITY_PICKER_LIMIT,
) -> list[City]:
    """
    Finds cities whose own name or state name contains the query.

    Used by the manual station picker; pass a chosen city's id to
    geolocation.station_for_city. Matching is case-insensitive and results
    keep input order. A blank query returns nothing.

    Args:
        cities: Candidate cities
        query: Search text
        limit: Maximum number of cities

    Returns:
        Up to limit matching cities
    """
    if not query.strip():
        return []

    needle = query.lower()
    matches = [
        city for city in cities
        if needle in city.name.lower() or needle in city.state.lower()
    ]
    return matches[:limit]
