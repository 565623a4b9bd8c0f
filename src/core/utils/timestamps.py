"""Timestamp utilities for consistent datetime handling across the pipeline."""

from datetime import datetime, timezone
from typing import Any

from common_lib.logger import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_timestamp(value: Any) -> str:
    """
    Convert various timestamp formats to an ISO-8601 UTC string.

    Args:
        value: Can be a datetime object, ISO format string, or other value

    Returns:
        ISO string with millisecond precision and a ``Z`` suffix
        (YYYY-MM-DDTHH:MM:SS.mmmZ). Naive datetimes are taken as UTC.
        If conversion fails, returns the current UTC time.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Invalid datetime format encountered: %s, using current time", value)
            value = None
    if not isinstance(value, datetime):
        value = utc_now()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
