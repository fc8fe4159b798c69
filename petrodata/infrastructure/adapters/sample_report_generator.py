"""
Synthetic report history for populating an empty store.

Production is randomized within a base range and reduced on stormy days and
on wells with a safety incident, so the sample data shows a
weather -> incident -> production-loss correlation.
"""
import random
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from ...domain.entities.report_record import ReportRecord, WeatherCondition, build_record_id

SAMPLE_FIELDS = ["East Mesa", "North Unit", "South Ridge", "West Field"]
SAMPLE_WELLS = ["W-1001", "W-1002", "W-1003", "W-1004", "W-1005"]

# upper bounds of the daily weather roll
WEATHER_THRESHOLDS = [
    (0.70, WeatherCondition.SUNNY),
    (0.85, WeatherCondition.CLOUDY),
    (0.95, WeatherCondition.RAINY),
]
STORM_INCIDENT_PROBABILITY = 0.4
STORM_PRODUCTION_FACTOR = 0.7
INCIDENT_PRODUCTION_FACTOR = 0.5

INCIDENT_NOTE = "Safety incident reported. Pump check required."
ROUTINE_NOTE = "Routine operations."


def draw_weather(rng: random.Random) -> WeatherCondition:
    roll = rng.random()
    for upper_bound, condition in WEATHER_THRESHOLDS:
        if roll < upper_bound:
            return condition
    return WeatherCondition.STORMY


def _midnight_epoch_millis(day: date) -> int:
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp() * 1000)


def generate_sample_reports(
    today: Optional[date] = None,
    days: int = 60,
    wells_per_day: int = 3,
    rng: Optional[random.Random] = None
) -> List[ReportRecord]:
    """Build `days` days of reports ending today, `wells_per_day` wells per day."""
    today = today or date.today()
    rng = rng or random.Random()
    wells_per_day = min(wells_per_day, len(SAMPLE_WELLS))

    reports: List[ReportRecord] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        weather = draw_weather(rng)

        for well_id in rng.sample(SAMPLE_WELLS, wells_per_day):
            field_name = rng.choice(SAMPLE_FIELDS)

            employees_affected = 0
            if weather is WeatherCondition.STORMY and rng.random() < STORM_INCIDENT_PROBABILITY:
                employees_affected = 1

            oil = 800 + rng.random() * 800
            if weather is WeatherCondition.STORMY:
                oil *= STORM_PRODUCTION_FACTOR
            if employees_affected > 0:
                oil *= INCIDENT_PRODUCTION_FACTOR

            reports.append(ReportRecord(
                id=build_record_id(field_name, well_id, day),
                date=day,
                field_name=field_name,
                well_id=well_id,
                oil_produced_bbl=float(int(oil)),
                gas_produced_mcf=float(int(1000 + rng.random() * 500)),
                water_produced_bbl=float(int(600 + rng.random() * 400)),
                employees_affected=employees_affected,
                weather_condition=weather,
                notes=INCIDENT_NOTE if employees_affected else ROUTINE_NOTE,
                timestamp=_midnight_epoch_millis(day),
            ))
    return reports
