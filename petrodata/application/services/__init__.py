"""
Application services module.
This package contains the business logic services for the application.
"""

from .audit_service import AuditService
from .report_query_service import ReportQueryService
from .report_record_service import ReportRecordService

__all__ = [
    "AuditService",
    "ReportQueryService",
    "ReportRecordService",
]
