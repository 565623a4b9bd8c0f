"""Helper utilities for per-package lookups."""

from typing import Any, Awaitable, Callable, Optional

from common_lib.errors import log_extra
from common_lib.logger import get_logger

logger = get_logger(__name__)


async def safe_call(
    coro: Awaitable[Any],
    fallback: Callable[[], Any],
    step: str,
    progress_cb: Optional[Callable[[str, str], None]] = None,
) -> Any:
    """
    Execute async operation with fallback on error.

    Attempts to execute the coroutine. If any exception occurs,
    calls the fallback function and logs a warning.

    Args:
        coro: Coroutine to execute
        fallback: Callable that returns fallback value if coro fails
        step: Step name for logging
        progress_cb: Optional progress callback (called with step and error message if exception)

    Returns:
        Result from coro or fallback value on exception
    """
    try:
        return await coro
    except Exception as exc:
        error_msg = f"오류 발생, 대체 경로 사용(Error occurred, using fallback): {exc}"
        if progress_cb:
            progress_cb(step, error_msg)
        logger.warning("%s 단계에서 예외 발생", step, exc_info=exc, extra=log_extra(exc))
        return fallback()
