"""
Unit tests for the sample report generator.
"""

import random
from datetime import date, timedelta

from petrodata.domain.entities.report_record import WeatherCondition, build_record_id
from petrodata.infrastructure.adapters.sample_report_generator import (
    INCIDENT_NOTE,
    ROUTINE_NOTE,
    SAMPLE_FIELDS,
    SAMPLE_WELLS,
    draw_weather,
    generate_sample_reports,
)


TODAY = date(2024, 3, 10)


class _FixedRoll(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class TestDrawWeather:
    """Weather roll thresholds."""

    def test_thresholds(self):
        assert draw_weather(_FixedRoll(0.10)) is WeatherCondition.SUNNY
        assert draw_weather(_FixedRoll(0.70)) is WeatherCondition.CLOUDY
        assert draw_weather(_FixedRoll(0.90)) is WeatherCondition.RAINY
        assert draw_weather(_FixedRoll(0.95)) is WeatherCondition.STORMY


class TestGenerateSampleReports:
    """Unit tests for generate_sample_reports."""

    def test_shape(self):
        reports = generate_sample_reports(today=TODAY, days=60, wells_per_day=3, rng=random.Random(7))

        assert len(reports) == 180
        assert reports[0].date == TODAY - timedelta(days=59)
        assert reports[-1].date == TODAY
        assert all(r.well_id in SAMPLE_WELLS for r in reports)
        assert all(r.field_name in SAMPLE_FIELDS for r in reports)

    def test_distinct_wells_per_day(self):
        reports = generate_sample_reports(today=TODAY, days=10, wells_per_day=3, rng=random.Random(1))
        for offset in range(10):
            day = TODAY - timedelta(days=offset)
            wells = [r.well_id for r in reports if r.date == day]
            assert len(wells) == len(set(wells)) == 3

    def test_ids_match_identity(self):
        for r in generate_sample_reports(today=TODAY, days=5, rng=random.Random(3)):
            assert r.id == build_record_id(r.field_name, r.well_id, r.date)

    def test_one_weather_per_day(self):
        reports = generate_sample_reports(today=TODAY, days=20, rng=random.Random(11))
        for day in {r.date for r in reports}:
            assert len({r.weather_condition for r in reports if r.date == day}) == 1

    def test_incidents_only_on_stormy_days(self):
        reports = generate_sample_reports(today=TODAY, days=60, rng=random.Random(5))
        for r in reports:
            if r.employees_affected:
                assert r.weather_condition is WeatherCondition.STORMY
                assert r.employees_affected == 1
                assert r.notes == INCIDENT_NOTE
            else:
                assert r.notes == ROUTINE_NOTE

    def test_value_ranges(self):
        for r in generate_sample_reports(today=TODAY, days=30, rng=random.Random(9)):
            assert 280 <= r.oil_produced_bbl < 1600
            assert 1000 <= r.gas_produced_mcf < 1500
            assert 600 <= r.water_produced_bbl < 1000
            assert r.oil_produced_bbl == int(r.oil_produced_bbl)

    def test_timestamp_is_midnight_of_report_day(self):
        report = generate_sample_reports(today=TODAY, days=1, rng=random.Random(2))[0]
        assert report.timestamp == 1710028800000

    def test_stormy_production_is_reduced(self):
        rng = _FixedRoll(0.99)
        reports = generate_sample_reports(today=TODAY, days=1, wells_per_day=1, rng=rng)
        # stormy day, incident roll misses
        assert reports[0].employees_affected == 0
        assert reports[0].oil_produced_bbl == int((800 + 0.99 * 800) * 0.7)
