"""진행 상황 이벤트 싱크(Progress event sink shared by pipeline components)."""
from __future__ import annotations

from typing import Callable

from .logger import get_logger

ProgressCallback = Callable[[str, str], None]

logger = get_logger(__name__)


def log_progress(step: str, message: str) -> None:
    """기본 진행 상황 콜백(Default progress callback)."""

    logger.info("[%s] %s", step, message)


def silent_progress(step: str, message: str) -> None:
    """진행 상황 무시(Discard progress events).

    For callers that want no progress output, such as tests or library use.
    """

    return None
