"""
API schemas for report endpoints.
These are DTOs (Data Transfer Objects) for the API layer, separate from domain entities.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.entities.report_record import WeatherCondition


class ReportSubmissionSchema(BaseModel):
    """Form data for a daily report. Identity fields are checked by the service."""
    date: Optional[str] = Field(None, description="Observation date (YYYY-MM-DD)")
    field_name: Optional[str] = Field(None, description="Name of the field")
    well_id: Optional[str] = Field(None, description="Well identifier")
    oil_produced_bbl: float = Field(0.0, ge=0, allow_inf_nan=False, description="Oil produced in barrels")
    gas_produced_mcf: float = Field(0.0, ge=0, allow_inf_nan=False, description="Gas produced in MCF")
    water_produced_bbl: float = Field(0.0, ge=0, allow_inf_nan=False, description="Water produced in barrels")
    employees_affected: int = Field(0, ge=0, description="Employees affected by accidents")
    weather_condition: WeatherCondition = Field(WeatherCondition.SUNNY, description="Weather on site")
    notes: Optional[str] = Field(None, description="Free text notes")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "date": "2024-03-01",
                "fieldName": "East Mesa",
                "wellId": "W-1001",
                "oilProducedBbl": 1250,
                "gasProducedMcf": 1310,
                "waterProducedBbl": 720,
                "employeesAffected": 0,
                "weatherCondition": "Sunny",
                "notes": "Routine operations."
            }
        }
    )
