from datetime import date as Date
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WeatherCondition(str, Enum):
    """Closed set of weather conditions an operator can report"""
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"
    STORMY = "Stormy"
    SNOWY = "Snowy"
    WINDY = "Windy"
    CLEAR = "Clear"


IdentityKey = Tuple[str, str, Date]


def build_record_id(field_name: str, well_id: str, report_date: Date) -> str:
    """Deterministic record id composed from the identity triple"""
    return f"{field_name}-{well_id}-{report_date.isoformat()}"


class ReportRecord(BaseModel):
    """One daily observation for one well: production, safety and weather"""
    id: str = Field(description="Deterministic key: <fieldName>-<wellId>-<date>")
    date: Date = Field(description="Calendar date of the observation")
    field_name: str = Field(min_length=1, description="Site label of the field")
    well_id: str = Field(min_length=1, description="Well identifier, unique per field per day")
    oil_produced_bbl: float = Field(0.0, ge=0, allow_inf_nan=False, description="Oil produced in barrels")
    gas_produced_mcf: float = Field(0.0, ge=0, allow_inf_nan=False, description="Gas produced in thousand cubic feet")
    water_produced_bbl: float = Field(0.0, ge=0, allow_inf_nan=False, description="Water produced in barrels")
    employees_affected: int = Field(0, ge=0, description="Employees affected by accidents")
    weather_condition: WeatherCondition = Field(WeatherCondition.SUNNY, description="Weather on site")
    notes: str = Field("", description="Free text notes")
    timestamp: int = Field(0, ge=0, description="Creation/modification instant in epoch millis")

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "East Mesa-W-1001-2024-03-01",
                "date": "2024-03-01",
                "fieldName": "East Mesa",
                "wellId": "W-1001",
                "oilProducedBbl": 1250,
                "gasProducedMcf": 1310,
                "waterProducedBbl": 720,
                "employeesAffected": 0,
                "weatherCondition": "Sunny",
                "notes": "Routine operations.",
                "timestamp": 1709251200000
            }
        }
    )

    @field_validator("notes", mode="before")
    @classmethod
    def _none_notes_to_empty(cls, value):
        return "" if value is None else value

    def get_identity_key(self) -> IdentityKey:
        """Get the (field name, well id, date) identity triple"""
        return (self.field_name, self.well_id, self.date)

    def to_dict(self) -> dict:
        """Convert entity to its persisted JSON shape"""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> 'ReportRecord':
        """Create entity from dictionary"""
        return cls.model_validate(data)
