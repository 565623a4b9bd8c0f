"""패키지 순위 수집 서비스 모듈(Package ranking collection service module)."""
from __future__ import annotations

import asyncio
import math
from typing import Any, List

from common_lib.errors import DataValidationError
from common_lib.http_client import RetryingFetcher
from common_lib.logger import get_logger
from common_lib.progress import ProgressCallback, log_progress
from common_lib.retry_config import SleepFunc

from .models import PackageRef

logger = get_logger(__name__)


class RankingService:
    """다운로드 순 패키지 목록 조회 서비스(Service listing packages by download rank)."""

    STEP = "RANKING"

    def __init__(
        self,
        fetcher: RetryingFetcher,
        api_url: str = "https://packages.ecosyste.ms/api/v1",
        registry: str = "npmjs.org",
        page_size: int = 100,
        page_delay: float = 0.5,
        sleep: SleepFunc = asyncio.sleep,
        progress_cb: ProgressCallback = log_progress,
    ) -> None:
        self._fetcher = fetcher
        self._api_url = api_url.rstrip("/")
        self._registry = registry
        self._page_size = page_size
        self._page_delay = page_delay
        self._sleep = sleep
        self._progress_cb = progress_cb

    @property
    def packages_url(self) -> str:
        return f"{self._api_url}/registries/{self._registry}/packages"

    async def _fetch_page(self, page: int) -> List[Any]:
        params = {
            "per_page": self._page_size,
            "page": page,
            "order": "desc",
            "sort": "downloads",
        }
        data = await self._fetcher.fetch_json(self.packages_url, params=params)
        if not isinstance(data, list):
            raise DataValidationError("page", page, f"expected a JSON array, got {type(data).__name__}")
        return data

    @staticmethod
    def _to_refs(rows: List[Any]) -> List[PackageRef]:
        refs: List[PackageRef] = []
        for row in rows:
            if not isinstance(row, dict) or not row.get("name"):
                logger.warning("Skipping ranking row without a package name: %r", row)
                continue
            refs.append(PackageRef.from_summary(row))
        return refs

    async def list_top_packages(self, limit: int) -> List[PackageRef]:
        """상위 N개 패키지 조회(List the top ``limit`` packages in descending download order).

        Pages are fetched one at a time with ``page_delay`` seconds between
        them. A short page marks the end of the available data. Any page
        failure propagates to the caller.
        """

        if limit <= 0:
            raise DataValidationError("limit", limit, "must be a positive integer")

        total_pages = math.ceil(limit / self._page_size)
        packages: List[PackageRef] = []

        for page in range(1, total_pages + 1):
            self._progress_cb(self.STEP, f"Fetching page {page}/{total_pages}")
            rows = await self._fetch_page(page)
            packages.extend(self._to_refs(rows))

            if len(rows) < self._page_size:
                self._progress_cb(self.STEP, f"Page {page} returned {len(rows)} items; no more data")
                break
            if page < total_pages:
                await self._sleep(self._page_delay)

        packages = packages[:limit]
        self._progress_cb(self.STEP, f"Collected {len(packages)} packages")
        return packages
