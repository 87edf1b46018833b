"""
Application exceptions for the MediCamp API.

Route handlers raise these; ``medicamp.middleware.error_handler`` renders
each one as a JSON error envelope with the exception's status code.
"""

from typing import Any

from fastapi import status


class MediCampException(Exception):
    """Base class carrying an HTTP status, a machine-readable code and details."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "UNKNOWN_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(MediCampException):
    """A request value the schema accepts but the business rules do not."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = str(value)
        super().__init__(message, details)


class NotFoundError(MediCampException):
    """The addressed camp, registration, user or record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        resource_id: Any = None,
        message: str | None = None,
    ):
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message or f"{resource_type} not found", details)


class AuthenticationError(MediCampException):
    """Missing, malformed, expired or forged access token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_REQUIRED"

    def __init__(self, message: str = "unauthorized access"):
        super().__init__(message)


class AuthorizationError(MediCampException):
    """Valid token, but the caller may not touch this record."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "INSUFFICIENT_PERMISSIONS"

    def __init__(
        self,
        message: str = "forbidden access",
        required_permission: str | None = None,
    ):
        details = {}
        if required_permission:
            details["required_permission"] = required_permission
        super().__init__(message, details)


class ConflictError(MediCampException):
    """The request contradicts the stored state, e.g. cancelling a paid registration."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(message, {"violated_rule": rule} if rule else None)


class DatabaseError(MediCampException):
    error_code = "DATABASE_ERROR"

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: str | None = None,
        table: str | None = None,
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details)


class ConfigurationError(MediCampException):
    """Settings failed the startup check."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message, {"errors": errors} if errors else None)


class ExternalServiceError(MediCampException):
    """The payment processor is unavailable or refused the request."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        service: str,
        operation: str | None = None,
        status_code: int | None = None,
    ):
        details = {"service": service}
        if operation:
            details["operation"] = operation
        super().__init__(message, details, status_code=status_code)


def conflict(message: str, rule: str | None = None):
    """Raise a conflict error."""
    raise ConflictError(message=message, rule=rule)
