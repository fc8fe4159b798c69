from dataclasses import dataclass
from enum import Enum
from typing import Optional

NOT_APPLICABLE = "N/A"


class PeriodKind(str, Enum):
    """Named reporting windows"""
    DAY = "DAILY"
    WEEK = "WEEKLY"
    MONTH = "MONTHLY"

    @classmethod
    def parse(cls, value) -> Optional['PeriodKind']:
        """Resolve a period from an enum member, value or member name; None if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            candidate = value.strip().upper()
            for member in cls:
                if candidate in (member.value, member.name):
                    return member
        return None


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregate statistics over a filtered set of report records."""
    record_count: int
    total_oil: float
    total_gas: float
    total_water: float
    total_employees_affected: int
    active_well_count: int
    dominant_weather: str
    incident_report_count: int

    def to_dict(self) -> dict:
        return {
            "record_count": self.record_count,
            "total_oil": self.total_oil,
            "total_gas": self.total_gas,
            "total_water": self.total_water,
            "total_employees_affected": self.total_employees_affected,
            "active_well_count": self.active_well_count,
            "dominant_weather": self.dominant_weather,
            "incident_report_count": self.incident_report_count,
        }
