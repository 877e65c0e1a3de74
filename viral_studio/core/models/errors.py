"""
Error models and exception classes.

This module defines custom exception classes and error models
for the Viral Studio service.
"""

from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class ContentStudioError(Exception):
    """Base exception for Viral Studio."""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ContentStudioError):
    """Request validation error."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message, "VALIDATION_ERROR", {"field": field, "value": value})


class ConfigurationError(ContentStudioError):
    """Missing or incomplete configuration. Aborts the whole batch."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        super().__init__(
            message,
            "CONFIGURATION_ERROR",
            {"config_key": config_key}
        )


class ProviderInvocationError(ContentStudioError):
    """The generation provider call failed for one platform."""

    def __init__(
        self,
        message: str,
        platform: str = None,
        model: str = None,
        retryable: bool = True
    ):
        self.platform = platform
        self.model = model
        self.retryable = retryable
        super().__init__(
            message,
            "PROVIDER_INVOCATION_ERROR",
            {"platform": platform, "model": model, "retryable": retryable}
        )


class RefinementValidationError(ContentStudioError):
    """A refined completion failed the structural completeness gate."""

    def __init__(self, message: str, failures: List[str] = None, record_id: str = None):
        self.failures = failures or []
        self.record_id = record_id
        super().__init__(
            message,
            "REFINEMENT_VALIDATION_ERROR",
            {"failures": self.failures, "record_id": record_id}
        )


class AuthenticationError(ContentStudioError):
    """Authentication error."""

    def __init__(self, message: str):
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationError(ContentStudioError):
    """The authenticated identity may not act on behalf of the requester."""

    def __init__(self, message: str, requester_id: str = None):
        self.requester_id = requester_id
        super().__init__(
            message,
            "AUTHORIZATION_ERROR",
            {"requester_id": requester_id}
        )


class PersistenceError(ContentStudioError):
    """Persistence collaborator error."""

    def __init__(self, message: str, table: str = None, operation: str = None):
        self.table = table
        self.operation = operation
        super().__init__(
            message,
            "PERSISTENCE_ERROR",
            {"table": table, "operation": operation}
        )


class RecordNotFoundError(PersistenceError):
    """Requested record does not exist or is not visible to the requester."""

    def __init__(self, message: str, table: str = None, record_id: str = None):
        self.record_id = record_id
        super().__init__(message, table=table, operation="read")
        self.error_code = "RECORD_NOT_FOUND"
        self.details["record_id"] = record_id


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    error_code: str = Field(default="UNKNOWN_ERROR", description="Error code")
    status: int = Field(..., description="HTTP status code")

    # Optional Details
    details: Optional[Dict[str, Any]] = Field(None, description="Error details")
    field: Optional[str] = Field(None, description="Field that caused error")
    value: Optional[Any] = Field(None, description="Value that caused error")

    # Request Information
    request_id: Optional[str] = Field(None, description="Request ID")

    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    def to_json(self) -> Dict[str, Any]:
        """Serialize for a JSON response body."""
        return self.model_dump(mode="json")

    @classmethod
    def from_exception(cls, exc: ContentStudioError, status: int = 500, message: str = None) -> 'ErrorResponse':
        """Create error response from exception."""
        return cls(
            error=exc.__class__.__name__,
            message=message or exc.message,
            error_code=exc.error_code or "UNKNOWN_ERROR",
            status=status,
            details=exc.details
        )
