"""
Report API routes with standardized error handling and dependency injection.
Every JSON answer is wrapped in the success or error envelope.
"""
import logging
import time
import uuid
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import Response
from pydantic import ValidationError

from ...application.services.audit_service import AuditService
from ...application.services.report_query_service import ReportQueryService
from ...application.services.report_record_service import ReportRecordService
from ...domain.value_objects.period import PeriodKind
from ...shared.dependencies import (
    provide_audit_service,
    provide_report_query_service,
    provide_report_record_service,
)
from ...shared.exceptions import (
    ApplicationException,
    NotFoundException,
    ValidationException,
)
from ...shared.responses import ErrorResponse, ResponseBuilder, SuccessResponse
from ...shared.utils.timing_decorator import async_timed
from .schemas import ReportSubmissionSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


async def get_request_id(request: Request) -> str:
    """Generate or extract request ID for tracing"""
    return request.headers.get("X-Request-ID", str(uuid.uuid4()))


def _parse_anchor(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationException(
            message="Invalid date format. Use ISO format (YYYY-MM-DD)",
            field="date",
            value=value
        )


def _parse_period(value: str) -> PeriodKind:
    period = PeriodKind.parse(value)
    if period is None:
        raise ValidationException(
            message="Invalid period. Use DAILY, WEEKLY or MONTHLY",
            field="period",
            value=value
        )
    return period


def _unexpected(action: str, request_id: str, e: Exception) -> ApplicationException:
    logger.error(f"Unexpected error {action} {request_id}: {str(e)}", exc_info=True)
    return ApplicationException(
        message=f"Unexpected error {action}: {str(e)}",
        cause=e
    )


@router.get("/", response_model=SuccessResponse)
async def list_reports(
    recent_first: bool = False,
    limit: Optional[int] = None,
    service: ReportQueryService = Depends(provide_report_query_service),
    request_id: str = Depends(get_request_id)
):
    """List stored reports in storage order, or newest first."""
    start_time = time.time()

    try:
        records = await service.list_reports(recent_first=recent_first, limit=limit)
        return ResponseBuilder.success(
            data=[r.to_dict() for r in records],
            message=f"Retrieved {len(records)} reports",
            request_id=request_id,
            execution_time_ms=(time.time() - start_time) * 1000
        )

    except ApplicationException as e:
        logger.error(f"Error listing reports {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("listing reports", request_id, e), request_id=request_id)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing identity fields or invalid values."}}
)
async def submit_report(
    payload: Dict[str, Any] = Body(..., examples=[ReportSubmissionSchema.model_config["json_schema_extra"]["example"]]),
    service: ReportRecordService = Depends(provide_report_record_service),
    request_id: str = Depends(get_request_id)
):
    """
    Submit a daily report.

    A report for the same field, well and date replaces the stored one.
    """
    start_time = time.time()

    try:
        try:
            submission = ReportSubmissionSchema.model_validate(payload)
        except ValidationError as e:
            first_error = e.errors()[0]
            raise ValidationException(
                message=f"Invalid report: {first_error.get('msg')}",
                field=".".join(str(part) for part in first_error.get("loc", ())) or None,
                value=first_error.get("input")
            )

        record = await service.submit_report(submission.model_dump(exclude_none=True))
        return ResponseBuilder.success(
            data=record.to_dict(),
            message=f"Report {record.id} saved",
            request_id=request_id,
            execution_time_ms=(time.time() - start_time) * 1000
        )

    except ValidationException as e:
        logger.warning(f"Rejected report submission {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except ApplicationException as e:
        logger.error(f"Error submitting report {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("submitting report", request_id, e), request_id=request_id)


@router.delete(
    "/{record_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse, "description": "No report with this id."}}
)
async def delete_report(
    record_id: str,
    service: ReportRecordService = Depends(provide_report_record_service),
    request_id: str = Depends(get_request_id)
):
    """Delete one report by id."""
    try:
        deleted = await service.delete_report(record_id)
        if not deleted:
            raise NotFoundException(
                message=f"Report {record_id} not found",
                entity="ReportRecord",
                identifier=record_id
            )
        return ResponseBuilder.success(
            data={"id": record_id, "deleted": True},
            message=f"Report {record_id} deleted",
            request_id=request_id
        )

    except ApplicationException as e:
        logger.warning(f"Error deleting report {record_id} {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("deleting report", request_id, e), request_id=request_id)


@router.get("/overview", response_model=SuccessResponse)
async def get_dashboard_overview(
    recent_limit: int = 5,
    service: ReportQueryService = Depends(provide_report_query_service),
    request_id: str = Depends(get_request_id)
):
    """All-time totals, safety status, current weather and recent activity."""
    start_time = time.time()

    try:
        overview = await service.get_dashboard_overview(recent_limit=recent_limit)
        return ResponseBuilder.success(
            data=overview,
            message="Dashboard overview retrieved successfully",
            request_id=request_id,
            execution_time_ms=(time.time() - start_time) * 1000
        )

    except ApplicationException as e:
        logger.error(f"Error building overview {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("building overview", request_id, e), request_id=request_id)


@router.get("/period", response_model=SuccessResponse)
async def get_period_report(
    period: str = PeriodKind.MONTH.value,
    anchor_date: Optional[str] = Query(None, alias="date"),
    service: ReportQueryService = Depends(provide_report_query_service),
    request_id: str = Depends(get_request_id)
):
    """Records and statistics of the day, trailing week or month around a date."""
    start_time = time.time()

    try:
        report = await service.get_period_report(_parse_period(period), _parse_anchor(anchor_date))
        return ResponseBuilder.success(
            data=report,
            message=f"{report['summary']['record_count']} reports in period",
            request_id=request_id,
            execution_time_ms=(time.time() - start_time) * 1000
        )

    except ApplicationException as e:
        logger.warning(f"Error building period report {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("building period report", request_id, e), request_id=request_id)


@router.get(
    "/export",
    responses={
        200: {
            "content": {"text/csv": {}},
            "description": "CSV export of the stored reports.",
        },
        500: {
            "model": ErrorResponse,
            "description": "Internal server error if any unexpected issue occurs.",
        },
    }
)
@async_timed
async def export_reports(
    period: Optional[str] = None,
    anchor_date: Optional[str] = Query(None, alias="date"),
    service: ReportQueryService = Depends(provide_report_query_service),
    request_id: str = Depends(get_request_id)
):
    """
    Download reports as CSV.

    Exports every stored report, or only those of a period when one is given.
    """
    try:
        logger.info(f"Starting export request {request_id}")
        selected = _parse_period(period) if period else None
        filename, content = await service.export_csv(selected, _parse_anchor(anchor_date))

        return Response(
            content=content,
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "X-Request-ID": request_id
            }
        )

    except ApplicationException as e:
        logger.error(f"Error in export {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("during export", request_id, e), request_id=request_id)


@router.post(
    "/audit",
    response_model=SuccessResponse,
    responses={409: {"model": ErrorResponse, "description": "Another audit is still pending."}}
)
async def request_audit(
    period: str = PeriodKind.MONTH.value,
    anchor_date: Optional[str] = Query(None, alias="date"),
    query_service: ReportQueryService = Depends(provide_report_query_service),
    audit_service: AuditService = Depends(provide_audit_service),
    request_id: str = Depends(get_request_id)
):
    """
    Generate an AI audit of the reports in a period.

    The report text is always returned; service problems come back as
    advisory text rather than an error.
    """
    start_time = time.time()

    try:
        records = await query_service.get_period_records(_parse_period(period), _parse_anchor(anchor_date))
        report = await audit_service.request_audit(records)
        return ResponseBuilder.success(
            data={"report": report, "record_count": len(records)},
            message="Audit completed",
            request_id=request_id,
            execution_time_ms=(time.time() - start_time) * 1000
        )

    except ApplicationException as e:
        logger.warning(f"Audit request {request_id} rejected: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("requesting audit", request_id, e), request_id=request_id)


@router.post("/seed", response_model=SuccessResponse)
async def seed_reports(
    service: ReportRecordService = Depends(provide_report_record_service),
    request_id: str = Depends(get_request_id)
):
    """Fill an empty store with generated sample history."""
    try:
        inserted = await service.seed_if_empty()
        return ResponseBuilder.success(
            data={"inserted": inserted},
            message=f"Seeded {inserted} reports" if inserted else "Store already populated",
            request_id=request_id
        )

    except ApplicationException as e:
        logger.error(f"Error seeding reports {request_id}: {e.message}")
        return ResponseBuilder.error(e, request_id=request_id)

    except Exception as e:
        return ResponseBuilder.error(_unexpected("seeding reports", request_id, e), request_id=request_id)
