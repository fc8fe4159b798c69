"""
Unit tests for the report record entity.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from petrodata.domain.entities.report_record import ReportRecord, WeatherCondition, build_record_id
from tests.utils.test_helpers import make_record


class TestReportRecord:
    """Unit tests for ReportRecord."""

    def test_build_record_id_joins_identity_triple(self):
        assert build_record_id("East Mesa", "W-1001", date(2024, 3, 1)) == "East Mesa-W-1001-2024-03-01"

    def test_identity_key(self):
        record = make_record()
        assert record.get_identity_key() == ("East Mesa", "W-1001", date(2024, 3, 1))

    def test_to_dict_uses_camel_case_keys(self):
        data = make_record(oil=1250, weather=WeatherCondition.STORMY).to_dict()

        assert data["fieldName"] == "East Mesa"
        assert data["wellId"] == "W-1001"
        assert data["oilProducedBbl"] == 1250
        assert data["weatherCondition"] == "Stormy"
        assert data["date"] == "2024-03-01"
        assert "field_name" not in data

    def test_from_dict_accepts_persisted_shape(self):
        original = make_record(employees_affected=2, notes="Leak at manifold")
        restored = ReportRecord.from_dict(original.to_dict())
        assert restored == original

    def test_defaults_for_optional_quantities(self):
        record = ReportRecord(
            id="F-W-2024-01-01",
            date=date(2024, 1, 1),
            field_name="F",
            well_id="W",
            notes=None
        )
        assert record.oil_produced_bbl == 0
        assert record.employees_affected == 0
        assert record.weather_condition is WeatherCondition.SUNNY
        assert record.notes == ""

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            make_record(oil=-1)

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_quantity_rejected(self, value):
        with pytest.raises(ValidationError):
            make_record(gas=value)

    def test_unknown_weather_rejected(self):
        with pytest.raises(ValidationError):
            ReportRecord.from_dict({**make_record().to_dict(), "weatherCondition": "Foggy"})

    def test_blank_well_id_rejected(self):
        with pytest.raises(ValidationError):
            make_record(well_id="")

    def test_record_is_immutable(self):
        record = make_record()
        with pytest.raises(ValidationError):
            record.notes = "changed"
