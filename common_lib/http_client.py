"""재시도 HTTP 조회기(Retrying HTTP fetcher shared by every upstream call)."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState

from .errors import ExternalAPIError
from .logger import get_logger
from .progress import ProgressCallback, log_progress
from .retry_config import DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, SleepFunc, get_retry_strategy

logger = get_logger(__name__)


class RetryingFetcher:
    """GET 요청 재시도 래퍼(Wraps GET requests with bounded retry and exponential backoff).

    A 2xx response is returned as-is. A 5xx response is retried until the
    attempt budget is spent; any other status raises immediately. Either way
    the raised ``ExternalAPIError`` carries the HTTP status code.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        service: str = "upstream",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: SleepFunc = asyncio.sleep,
        progress_cb: ProgressCallback = log_progress,
    ) -> None:
        self._client = client
        self._service = service
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._sleep = sleep
        self._progress_cb = progress_cb

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        self._progress_cb(
            "FETCH",
            f"{exc} (attempt {retry_state.attempt_number}/{self._max_attempts}); retrying in {delay:.1f}s",
        )

    async def _get_once(self, url: str, params: Optional[Dict[str, Any]]) -> httpx.Response:
        logger.debug("GET %s params=%s", url, params)
        response = await self._client.get(url, params=params)
        if response.is_success:
            return response
        raise ExternalAPIError(
            self._service,
            status_code=response.status_code,
            message=response.reason_phrase or None,
            url=str(response.request.url),
        )

    async def fetch(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """URL 조회(Fetch a URL, retrying transient server errors)."""

        retrying = AsyncRetrying(
            before_sleep=self._before_sleep,
            **get_retry_strategy(self._max_attempts, self._base_delay, self._sleep),
        )
        return await retrying(self._get_once, url, params)

    async def fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """URL 조회 후 JSON 디코딩(Fetch a URL and decode the JSON body)."""

        response = await self.fetch(url, params=params)
        return response.json()


def build_client(timeout: float, user_agent: str) -> httpx.AsyncClient:
    """공유 비동기 클라이언트 생성(Create the shared async client for one run)."""

    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": user_agent, "Accept": "application/json"},
    )
