"""
AQI category module for VayuWatch.

This module contains the AQICategory enum and the classifier that maps a
numeric Air Quality Index (AQI) onto the six CPCB categories. It is a pure
classification component: it never recommends actions itself, those are
handled by the intelligence functions that consume a category.
"""

from enum import Enum
from typing import Union


class AQICategory(str, Enum):
    """
    The six ordered CPCB air quality categories.

    Values are the lowercase, hyphenated identifiers used throughout the
    dashboard data, so a category compares equal to its string value
    (AQICategory.VERY_POOR == "very-poor").
    """

    GOOD = "good"
    SATISFACTORY = "satisfactory"
    MODERATE = "moderate"
    POOR = "poor"
    VERY_POOR = "very-poor"
    SEVERE = "severe"

    def __str__(self) -> str:
        return self.value


# Inclusive upper bound of each category, in ascending order.
# Anything above the last bound is SEVERE.
AQI_BREAKPOINTS: tuple[tuple[int, AQICategory], ...] = (
    (50, AQICategory.GOOD),
    (100, AQICategory.SATISFACTORY),
    (200, AQICategory.MODERATE),
    (300, AQICategory.POOR),
    (400, AQICategory.VERY_POOR),
)

AQI_MIN = 0
AQI_MAX = 500

_LABELS = {
    AQICategory.GOOD: "Good",
    AQICategory.SATISFACTORY: "Satisfactory",
    AQICategory.MODERATE: "Moderate",
    AQICategory.POOR: "Poor",
    AQICategory.VERY_POOR: "Very Poor",
    AQICategory.SEVERE: "Severe",
}

_COLORS = {
    AQICategory.GOOD: "#00B050",
    AQICategory.SATISFACTORY: "#92D050",
    AQICategory.MODERATE: "#FFCC00",
    AQICategory.POOR: "#FF9900",
    AQICategory.VERY_POOR: "#FF0000",
    AQICategory.SEVERE: "#C00000",
}

_ORDER = list(AQICategory)

CategoryLike = Union[AQICategory, str]


def classify(aqi: float) -> AQICategory:
    """
    Maps a numeric AQI value onto its CPCB category.

    Breakpoints are inclusive upper bounds: <=50 good, <=100 satisfactory,
    <=200 moderate, <=300 poor, <=400 very-poor, anything higher is severe.
    Negative values are treated as 0. The function is total and never raises
    for numeric input.

    Args:
        aqi: Air Quality Index value

    Returns:
        The matching AQICategory
    """
    value = max(AQI_MIN, aqi)
    for upper_bound, category in AQI_BREAKPOINTS:
        if value <= upper_bound:
            return category
    return AQICategory.SEVERE


def as_category(value: CategoryLike) -> AQICategory:
    """
    Normalizes an AQICategory or its string value to the enum.

    Raises:
        ValueError: If the string is not one of the six category values
    """
    if isinstance(value, AQICategory):
        return value
    return AQICategory(value)


def get_aqi_label(category: CategoryLike) -> str:
    """Returns the display label for a category, e.g. "Very Poor"."""
    return _LABELS[as_category(category)]


def get_aqi_color(category: CategoryLike) -> str:
    """Returns the hex display color for a category."""
    return _COLORS[as_category(category)]


def category_rank(category: CategoryLike) -> int:
    """Returns the ordinal position of a category, 0 (good) to 5 (severe)."""
    return _ORDER.index(as_category(category))


def is_alert_category(category: CategoryLike) -> bool:
    """
    Determines if a category is bad enough to raise an alert.

    Poor, very poor and severe air quality trigger alerts and notifications;
    the three cleaner categories do not.
    """
    return category_rank(category) >= category_rank(AQICategory.POOR)
