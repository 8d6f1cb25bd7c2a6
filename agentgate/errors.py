from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error payload for requests the gateway itself rejects:
    {
        "error": "configuration_missing",
        "message": "Model not set",
        "code": 400,
        "details": {...}
    }

    Provider failures never use this shape; they are returned as
    provider-shaped payloads by `agentgate.providers.responses`.
    """

    error: str = Field(..., description="Machine-readable error type")
    message: str = Field(..., description="Human-readable error message")
    code: int = Field(..., description="HTTP status code for this error")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Optional structured error details"
    )


class ConfigurationMissing(Exception):
    """
    Raised when a conversation cannot be dispatched because a required
    setting (model, credential, prompt) was never supplied.
    """

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class CompletionInProgress(Exception):
    """
    Raised when a second completion signal arrives for a session whose
    previous completion has not finished yet.
    """

    def __init__(self, session_id: str) -> None:
        super().__init__(f"A completion is already in progress for '{session_id}'")
        self.session_id = session_id


def http_error(
    status_code: int,
    *,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> HTTPException:
    """
    Helper to create an HTTPException with a standardised error body.
    """
    payload = ErrorResponse(
        error=error,
        message=message,
        code=status_code,
        details=details,
    )
    return HTTPException(status_code=status_code, detail=payload.model_dump())


def bad_request(message: str, *, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return http_error(
        status.HTTP_400_BAD_REQUEST, error="bad_request", message=message, details=details
    )


def configuration_missing(exc: ConfigurationMissing) -> HTTPException:
    return http_error(
        status.HTTP_400_BAD_REQUEST,
        error="configuration_missing",
        message=exc.message,
        details={"field": exc.field},
    )


def not_found(message: str, *, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return http_error(
        status.HTTP_404_NOT_FOUND, error="not_found", message=message, details=details
    )


def conflict(message: str, *, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return http_error(
        status.HTTP_409_CONFLICT,
        error="completion_in_progress",
        message=message,
        details=details,
    )


def internal_error_body() -> Dict[str, Any]:
    return ErrorResponse(
        error="internal_error",
        message="Internal server error",
        code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    ).model_dump()


__all__ = [
    "ErrorResponse",
    "ConfigurationMissing",
    "CompletionInProgress",
    "http_error",
    "bad_request",
    "configuration_missing",
    "not_found",
    "conflict",
    "internal_error_body",
]
