"""
Period filtering and aggregate statistics over report records.

Every function here is pure: results are recomputed from the record list on
each call and nothing is cached or persisted.
"""
import calendar
import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import polars as pl

from ...domain.entities.report_record import ReportRecord
from ...domain.value_objects.period import NOT_APPLICABLE, PeriodKind, PeriodSummary

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

WEEK_LOOKBACK_DAYS = 6
BREAKDOWN_KEYS = ("well_id", "field_name")


def normalize_date(value: DateLike) -> date:
    """Strip the time of day from a date, datetime or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip()).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def period_window(period_kind: Union[PeriodKind, str], anchor_date: DateLike) -> Optional[Tuple[date, date]]:
    """Inclusive (start, end) window of a period, or None for an unknown period kind."""
    period = PeriodKind.parse(period_kind)
    anchor = normalize_date(anchor_date)
    if period is PeriodKind.DAY:
        return anchor, anchor
    if period is PeriodKind.WEEK:
        return anchor - timedelta(days=WEEK_LOOKBACK_DAYS), anchor
    if period is PeriodKind.MONTH:
        last_day = calendar.monthrange(anchor.year, anchor.month)[1]
        return anchor.replace(day=1), anchor.replace(day=last_day)
    return None


def filter_records(
    records: Iterable[ReportRecord],
    period_kind: Union[PeriodKind, str],
    anchor_date: DateLike
) -> List[ReportRecord]:
    """
    Select the records falling in the period anchored at anchor_date.

    DAY keeps the anchor date only, WEEK the trailing seven days ending at the
    anchor (inclusive), MONTH the anchor's calendar month. An unrecognized
    period kind passes every record through. Input order is preserved.
    """
    records = list(records)
    period = PeriodKind.parse(period_kind)
    if period is None:
        logger.debug(f"Unrecognized period kind {period_kind!r}, returning all {len(records)} records")
        return records

    anchor = normalize_date(anchor_date)

    if period is PeriodKind.MONTH:
        return [
            r for r in records
            if normalize_date(r.date).year == anchor.year and normalize_date(r.date).month == anchor.month
        ]

    start, end = period_window(period, anchor)
    return [r for r in records if start <= normalize_date(r.date) <= end]


def total_oil(records: Sequence[ReportRecord]) -> float:
    return sum(r.oil_produced_bbl for r in records)


def total_gas(records: Sequence[ReportRecord]) -> float:
    return sum(r.gas_produced_mcf for r in records)


def total_water(records: Sequence[ReportRecord]) -> float:
    return sum(r.water_produced_bbl for r in records)


def total_employees_affected(records: Sequence[ReportRecord]) -> int:
    return sum(r.employees_affected for r in records)


def active_well_count(records: Sequence[ReportRecord]) -> int:
    """Number of distinct well ids present."""
    return len({r.well_id for r in records})


def dominant_weather(records: Sequence[ReportRecord]) -> str:
    """
    Most frequent weather condition in the records, or "N/A" when empty.

    Ties go to the condition that appears first in the records.
    """
    if not records:
        return NOT_APPLICABLE
    # most_common keeps first-encountered order among equal counts
    tally = Counter(r.weather_condition.value for r in records)
    return tally.most_common(1)[0][0]


def summarize(records: Sequence[ReportRecord]) -> PeriodSummary:
    """Aggregate statistics for a (usually filtered) set of records."""
    return PeriodSummary(
        record_count=len(records),
        total_oil=total_oil(records),
        total_gas=total_gas(records),
        total_water=total_water(records),
        total_employees_affected=total_employees_affected(records),
        active_well_count=active_well_count(records),
        dominant_weather=dominant_weather(records),
        incident_report_count=sum(1 for r in records if r.employees_affected > 0),
    )


def production_breakdown(records: Sequence[ReportRecord], group_by: str = "well_id") -> List[dict]:
    """
    Production totals per well or per field.

    Rows are sorted by total oil descending, then by group key.
    """
    if group_by not in BREAKDOWN_KEYS:
        raise ValueError(f"group_by must be one of {BREAKDOWN_KEYS}, got {group_by!r}")
    if not records:
        return []

    df = pl.DataFrame(
        {
            group_by: [getattr(r, group_by) for r in records],
            "oil_produced_bbl": [float(r.oil_produced_bbl) for r in records],
            "gas_produced_mcf": [float(r.gas_produced_mcf) for r in records],
            "water_produced_bbl": [float(r.water_produced_bbl) for r in records],
            "employees_affected": [int(r.employees_affected) for r in records],
        }
    )

    grouped = (
        df.group_by(group_by)
        .agg(
            pl.col("oil_produced_bbl").sum().alias("total_oil"),
            pl.col("gas_produced_mcf").sum().alias("total_gas"),
            pl.col("water_produced_bbl").sum().alias("total_water"),
            pl.col("employees_affected").sum().alias("total_employees_affected"),
            pl.len().alias("report_count"),
        )
        .sort(["total_oil", group_by], descending=[True, False])
    )
    return grouped.to_dicts()
