"""증명 보고서 파이프라인 오케스트레이터(Attestation report pipeline orchestrator)."""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional

import httpx

from attestation_checker.app.service import get_strategy
from common_lib.config import Settings, get_settings
from common_lib.http_client import RetryingFetcher, build_client
from common_lib.logger import get_logger
from common_lib.progress import ProgressCallback, log_progress
from common_lib.retry_config import SleepFunc
from ranking_lister.app.service import RankingService
from src.core.context import PipelineContext
from src.core.report import Report, ReportBuilder
from src.core.scheduler import BatchScheduler

logger = get_logger(__name__)


class ReportOrchestrator:
    """단계별 컴포넌트를 조율하는 오케스트레이터(Wires lister, scheduler, checker and builder for one run)."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: SleepFunc = asyncio.sleep,
        progress_cb: ProgressCallback = log_progress,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client
        self._sleep = sleep
        self._progress_cb = progress_cb

    def _fetcher(self, client: httpx.AsyncClient, service: str) -> RetryingFetcher:
        return RetryingFetcher(
            client,
            service=service,
            max_attempts=self._settings.max_attempts,
            base_delay=self._settings.retry_base_delay_seconds,
            sleep=self._sleep,
            progress_cb=self._progress_cb,
        )

    async def _run(
        self,
        client: httpx.AsyncClient,
        context: PipelineContext,
        generated_at: Optional[datetime],
    ) -> Report:
        settings = self._settings

        def record_error(step: str, message: str) -> None:
            context.add_error(step, message)
            self._progress_cb(step, message)

        ranking = RankingService(
            self._fetcher(client, "ecosyste.ms"),
            api_url=settings.ranking_api_url,
            registry=settings.registry_name,
            page_size=settings.page_size,
            page_delay=settings.page_delay_seconds,
            sleep=self._sleep,
            progress_cb=self._progress_cb,
        )
        strategy = get_strategy(
            context.strategy,
            self._fetcher(client, "npm registry"),
            registry_url=settings.registry_url,
            progress_cb=record_error,
        )
        scheduler = BatchScheduler(
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay_seconds,
            sleep=self._sleep,
            progress_cb=self._progress_cb,
        )

        self._progress_cb("INIT", f"Listing top {context.limit} packages (strategy={context.strategy})")
        refs = await ranking.list_top_packages(context.limit)
        context.listed_count = len(refs)

        records = await scheduler.run(refs, strategy.resolve)
        context.resolved_count = len(records)

        self._progress_cb("REPORT", "Building report")
        return ReportBuilder().build(records, generated_at=generated_at)

    async def build_report(
        self,
        limit: Optional[int] = None,
        strategy: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> Report:
        """전체 파이프라인 실행 후 보고서 반환(Run the whole pipeline and return the report).

        Ranking failures propagate; per-package failures only shrink the report.
        """

        context = PipelineContext(
            limit=limit if limit is not None else self._settings.package_limit,
            strategy=strategy or self._settings.strategy,
        )

        if self._client is not None:
            report = await self._run(self._client, context, generated_at)
        else:
            async with build_client(
                self._settings.request_timeout_seconds, self._settings.user_agent
            ) as client:
                report = await self._run(client, context, generated_at)

        logger.info("Pipeline completed: %s", context.summary())
        return report
