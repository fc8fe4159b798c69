"""
Standardized exception hierarchy for the application.
Provides clear, typed exceptions with proper error context.
"""
from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application"""
    # Domain errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"

    # Infrastructure errors
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_API_ERROR = "EXTERNAL_API_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    FILE_SYSTEM_ERROR = "FILE_SYSTEM_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApplicationException(Exception):
    """Base exception for all application-specific errors"""

    default_http_status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        status_code_override: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.status_code_override = status_code_override

    @property
    def http_status_code(self) -> int:
        """HTTP status used when the exception is turned into an error response"""
        return self.status_code_override or self.default_http_status_code


class DomainException(ApplicationException):
    """Exceptions from the domain layer"""
    pass


class ValidationException(DomainException):
    """Data validation errors"""

    default_http_status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        status_code_override: Optional[int] = None
    ):
        context = {}
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)

        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            context=context,
            status_code_override=status_code_override
        )


class BusinessRuleViolationException(DomainException):
    """Business rule violations"""

    default_http_status_code = 409

    def __init__(self, message: str, rule: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.BUSINESS_RULE_VIOLATION,
            context={**(context or {}), "rule": rule}
        )


class NotFoundException(DomainException):
    """Requested entity does not exist"""

    default_http_status_code = 404

    def __init__(self, message: str, entity: str, identifier: Any):
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND_ERROR,
            context={"entity": entity, "identifier": str(identifier)}
        )


class InfrastructureException(ApplicationException):
    """Exceptions from the infrastructure layer"""
    pass


class DatabaseException(InfrastructureException):
    """Database-related errors"""

    def __init__(self, message: str, query: Optional[str] = None, cause: Optional[Exception] = None):
        context = {}
        if query:
            context["query"] = query

        super().__init__(
            message=message,
            error_code=ErrorCode.DATABASE_ERROR,
            context=context,
            cause=cause
        )


class ExternalApiException(InfrastructureException):
    """External API errors"""

    default_http_status_code = 502

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
        error_code: ErrorCode = ErrorCode.EXTERNAL_API_ERROR
    ):
        context = {}
        if endpoint:
            context["endpoint"] = endpoint
        if status_code:
            context["status_code"] = status_code

        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            cause=cause
        )


class ServiceUnavailableException(ExternalApiException):
    """The text-generation service could not produce a response"""

    default_http_status_code = 503

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            endpoint=endpoint,
            status_code=status_code,
            cause=cause,
            error_code=ErrorCode.SERVICE_UNAVAILABLE
        )


class FileSystemException(InfrastructureException):
    """File system errors"""

    def __init__(self, message: str, file_path: Optional[str] = None, cause: Optional[Exception] = None):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_SYSTEM_ERROR,
            context=context,
            cause=cause
        )
