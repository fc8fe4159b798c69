import logging
import time
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from ...domain.entities.report_record import ReportRecord, build_record_id
from ...domain.ports.record_store import RecordStorePort
from ...shared.exceptions import ApplicationException, ValidationException

logger = logging.getLogger(__name__)

REQUIRED_IDENTITY_MESSAGE = "Date, Field Name, and Well ID are required."


class ReportRecordService:
    """
    Service for submitting, deleting and seeding report records.
    """

    def __init__(
        self,
        store: RecordStorePort,
        sample_factory: Optional[Callable[[], List[ReportRecord]]] = None,
        clock: Callable[[], float] = time.time
    ):
        self.store = store
        self.sample_factory = sample_factory
        self.clock = clock

    async def submit_report(self, data: Dict[str, Any]) -> ReportRecord:
        """
        Build a record from submitted form data and upsert it.

        The id is derived from (field name, well id, date) and the timestamp
        is the submission instant, whatever the caller sent for either.

        Raises:
            ValidationException: When identity fields are missing or values are invalid
        """
        report_date = data.get("date")
        field_name = (data.get("field_name") or "").strip()
        well_id = (data.get("well_id") or "").strip()

        if not report_date or not field_name or not well_id:
            raise ValidationException(message=REQUIRED_IDENTITY_MESSAGE, field="identity")

        if isinstance(report_date, datetime):
            report_date = report_date.date()
        elif isinstance(report_date, str):
            try:
                report_date = date.fromisoformat(report_date)
            except ValueError:
                raise ValidationException(
                    message="Invalid date format. Use ISO format (YYYY-MM-DD)",
                    field="date",
                    value=report_date
                )

        fields = {k: v for k, v in data.items() if v is not None and k not in ("id", "timestamp")}
        fields.update(
            id=build_record_id(field_name, well_id, report_date),
            date=report_date,
            field_name=field_name,
            well_id=well_id,
            timestamp=int(self.clock() * 1000),
        )

        try:
            record = ReportRecord.model_validate(fields)
        except ValidationError as e:
            first_error = e.errors()[0]
            field = ".".join(str(part) for part in first_error.get("loc", ()))
            raise ValidationException(
                message=f"Invalid report: {first_error.get('msg')}",
                field=field or None,
                value=first_error.get("input")
            )

        saved = await self.store.upsert(record)
        logger.info(f"Report {saved.id} submitted")
        return saved

    async def delete_report(self, record_id: str) -> bool:
        return await self.store.delete(record_id)

    async def seed_if_empty(self) -> int:
        """Populate an empty store with sample history. Returns records written."""
        if self.sample_factory is None:
            logger.info("No sample data factory configured; seeding skipped")
            return 0
        try:
            return await self.store.seed_if_empty(self.sample_factory)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"Unexpected error while seeding: {str(e)}")
            raise ApplicationException(
                message=f"Seeding failed due to unexpected error: {str(e)}",
                cause=e
            )
