"""공통 에러 클래스 정의(Common error classes).

This module defines exceptions used throughout the pipeline to provide
clear error classification and recovery strategies.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class PipelineError(Exception):
    """Base exception for pipeline-related errors."""

    pass


class ExternalAPIError(PipelineError):
    """
    Raised when an upstream API (ranking API, npm registry) answers with a non-2xx status.

    Server errors (5xx) are transient and retried by the fetcher; anything
    else is final for that request.
    """

    def __init__(
        self,
        service: str,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        """
        Initialize ExternalAPIError.

        Args:
            service: Name of the upstream service (e.g., 'ecosyste.ms', 'npm registry')
            status_code: HTTP status code (if applicable)
            message: Optional additional error details
            url: Requested URL (if applicable)
        """
        self.service = service
        self.status_code = status_code
        self.message = message
        self.url = url

        msg = f"External API error: {service}"
        if status_code:
            msg += f" (HTTP {status_code})"
        if message:
            msg += f": {message}"

        super().__init__(msg)

    @property
    def is_transient(self) -> bool:
        """서버 측 일시적 오류 여부(Whether the status is a transient server error)."""
        return self.status_code is not None and self.status_code >= 500

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "service": self.service,
            "status_code": self.status_code,
            "message": self.message,
            "url": self.url,
        }


class DataValidationError(PipelineError):
    """
    Raised when input or payload validation fails.

    Covers bad run parameters (limit, strategy name) and upstream payloads
    that do not have the expected shape.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        """
        Initialize DataValidationError.

        Args:
            field: Name of the field that failed validation
            value: The invalid value
            reason: Why the value is invalid
        """
        self.field = field
        self.value = value
        self.reason = reason
        msg = f"Data validation error: {field}={value!r}. Reason: {reason}"
        super().__init__(msg)


def log_extra(exc: BaseException) -> Optional[Dict[str, Any]]:
    """로그용 구조화 오류 정보(Structured error details for a log record's ``extra``)."""
    if isinstance(exc, ExternalAPIError):
        return {"upstream_error": exc.to_dict()}
    return None
