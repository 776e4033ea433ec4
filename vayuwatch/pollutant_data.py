"""
Pollutant data module for VayuWatch.

This module defines the PollutantData dataclass which represents a single
pollutant reading for a city or ward: particulate matter (PM2.5, PM10), gases
(NO2, SO2, CO, O3) and the optional NH3 and lead readings. It provides
validation to ensure data integrity before the reading enters the
geographic tree.
"""

from dataclasses import dataclass, fields
from typing import Optional

# Display units. CO is reported in mg/m3, everything else in ug/m3.
POLLUTANT_UNITS = {
    "pm25": "µg/m³",
    "pm10": "µg/m³",
    "no2": "µg/m³",
    "so2": "µg/m³",
    "co": "mg/m³",
    "o3": "µg/m³",
    "nh3": "µg/m³",
    "pb": "µg/m³",
}


@dataclass(frozen=True)
class PollutantData:
    """
    Represents a pollutant reading for one location.

    Attributes:
        pm25: Fine particulate matter PM2.5 (must be >= 0)
        pm10: Coarse particulate matter PM10 (must be >= 0)
        no2: Nitrogen dioxide (must be >= 0)
        so2: Sulphur dioxide (must be >= 0)
        co: Carbon monoxide in mg/m3, one decimal (must be >= 0)
        o3: Ozone (must be >= 0)
        nh3: Optional ammonia reading (must be >= 0 when present)
        pb: Optional lead reading (must be >= 0 when present)
    """

    pm25: float
    pm10: float
    no2: float
    so2: float
    co: float
    o3: float
    nh3: Optional[float] = None
    pb: Optional[float] = None

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates every pollutant value.

        Checks that each required value is present and non-negative, and
        that optional values are non-negative when present.

        Returns:
            A tuple containing:
            - bool: True if all validations pass, False otherwise
            - Optional[str]: None if valid, or a descriptive error message if invalid
        """
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                if field.name in ("nh3", "pb"):
                    continue
                return (False, f"{field.name} is required")
            if value < 0:
                return (False, f"{field.name} must be >= 0")
        return (True, None)

    def to_dict(self) -> dict[str, Optional[float]]:
        """
        Converts the reading to a serializable dictionary.

        Optional pollutants that are missing are left out.
        """
        data = {field.name: getattr(self, field.name) for field in fields(self)}
        return {name: value for name, value in data.items() if value is not None}

    @classmethod
    def from_dict(cls, data: dict) -> "PollutantData":
        """Builds a reading from a dictionary such as the baseline JSON."""
        return cls(
            pm25=data.get("pm25"),
            pm10=data.get("pm10"),
            no2=data.get("no2"),
            so2=data.get("so2"),
            co=data.get("co"),
            o3=data.get("o3"),
            nh3=data.get("nh3"),
            pb=data.get("pb"),
        )
