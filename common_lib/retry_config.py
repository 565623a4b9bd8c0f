"""재시도 로직 설정 및 유틸리티(Retry logic configuration and utilities)."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from tenacity import (
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .errors import ExternalAPIError

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


def _is_retryable_exception(exc: BaseException) -> bool:
    """재시도 가능한 예외인지 확인(Check if exception is retryable).

    Retryable exceptions:
    - ExternalAPIError with status 5xx: Server errors

    Non-retryable exceptions:
    - ExternalAPIError with any other status (404, 429, 400, ...)
    - Transport errors raised by httpx (connection reset, DNS failure)
    """
    return isinstance(exc, ExternalAPIError) and exc.is_transient


def get_retry_strategy(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: SleepFunc = asyncio.sleep,
) -> dict[str, Any]:
    """
    AsyncRetrying용 재시도 전략 설정 반환(Return retry strategy configuration for AsyncRetrying).

    Configuration:
    - Max attempts: 3 (original attempt + 2 retries)
    - Backoff: base_delay * 2 ** (attempt - 1), i.e. 1s then 2s
    - Retry on: 5xx server errors only
    - The last error is re-raised once attempts are exhausted

    Returns:
        Dictionary of arguments for AsyncRetrying
    """
    return {
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=base_delay, exp_base=2, min=0),
        "retry": retry_if_exception(_is_retryable_exception),
        "sleep": sleep,
        "reraise": True,
    }
