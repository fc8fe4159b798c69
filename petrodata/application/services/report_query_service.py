import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from . import period_aggregator as aggregator
from ...domain.entities.report_record import ReportRecord
from ...domain.ports.record_store import RecordStorePort
from ...domain.value_objects.period import NOT_APPLICABLE, PeriodKind
from ...infrastructure.external.csv_report_codec import encode, export_filename

logger = logging.getLogger(__name__)

SAFETY_ATTENTION = "Requires Attention"
SAFETY_GOAL_MET = "Safety Goal Met"


def _most_recent_first(records: List[ReportRecord]) -> List[ReportRecord]:
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


class ReportQueryService:
    """
    Read-side service: dashboard, period reports and exports.
    Everything is recomputed from the store on each call.
    """

    def __init__(self, store: RecordStorePort, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    async def list_reports(self, recent_first: bool = False, limit: Optional[int] = None) -> List[ReportRecord]:
        """All records in storage order, or newest first when recent_first is set."""
        records = await self.store.list_records()
        if recent_first:
            records = _most_recent_first(records)
        if limit is not None and limit > 0:
            records = records[:limit]
        return records

    async def get_period_records(
        self,
        period: Union[PeriodKind, str],
        anchor: Optional[date] = None
    ) -> List[ReportRecord]:
        records = await self.store.list_records()
        return aggregator.filter_records(records, period, anchor or self.today())

    async def get_period_report(
        self,
        period: Union[PeriodKind, str],
        anchor: Optional[date] = None
    ) -> Dict[str, Any]:
        """Filtered records of a period with summary statistics and breakdowns."""
        anchor = anchor or self.today()
        subset = await self.get_period_records(period, anchor)
        window = aggregator.period_window(period, anchor)
        resolved = PeriodKind.parse(period)

        return {
            "period": resolved.value if resolved else str(period),
            "anchor_date": anchor.isoformat(),
            "window": {
                "start": window[0].isoformat(),
                "end": window[1].isoformat(),
            } if window else None,
            "summary": aggregator.summarize(subset).to_dict(),
            "breakdown_by_well": aggregator.production_breakdown(subset, "well_id"),
            "breakdown_by_field": aggregator.production_breakdown(subset, "field_name"),
            "records": [r.to_dict() for r in subset],
        }

    async def get_dashboard_overview(self, recent_limit: int = 5) -> Dict[str, Any]:
        """All-time figures plus the most recent field activity."""
        records = await self.store.list_records()
        summary = aggregator.summarize(records)
        recent = _most_recent_first(records)

        return {
            "summary": summary.to_dict(),
            "safety_status": SAFETY_ATTENTION if summary.total_employees_affected > 0 else SAFETY_GOAL_MET,
            "current_weather": recent[0].weather_condition.value if recent else NOT_APPLICABLE,
            "recent_activity": [r.to_dict() for r in recent[:recent_limit]],
        }

    async def export_csv(
        self,
        period: Optional[Union[PeriodKind, str]] = None,
        anchor: Optional[date] = None
    ) -> Tuple[str, str]:
        """
        CSV export of all records, or of one period when given.

        Returns:
            Tuple of (file name, CSV text)
        """
        if period:
            records = await self.get_period_records(period, anchor)
        else:
            records = await self.store.list_records()
        logger.info(f"Exporting {len(records)} reports to CSV")
        return export_filename(self.today()), encode(records)
