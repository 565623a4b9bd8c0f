"""배치 스케줄러(Batch scheduler driving per-package lookups)."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from common_lib.logger import get_logger
from common_lib.progress import ProgressCallback, log_progress
from common_lib.retry_config import SleepFunc

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BatchScheduler:
    """고정 크기 동시 배치 실행기(Runs a worker over items in fixed-size concurrent batches).

    Members of a batch run concurrently and the batch waits for all of them
    to settle. Batches run one after another with ``batch_delay`` seconds in
    between. ``None`` results are dropped; order of the rest is preserved.
    """

    STEP = "BATCH"

    def __init__(
        self,
        batch_size: int = 10,
        batch_delay: float = 1.0,
        sleep: SleepFunc = asyncio.sleep,
        progress_cb: ProgressCallback = log_progress,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._batch_size = batch_size
        self._batch_delay = batch_delay
        self._sleep = sleep
        self._progress_cb = progress_cb

    def batches(self, items: Sequence[T]) -> List[List[T]]:
        """연속 배치 분할(Split items into consecutive batches, preserving order)."""
        return [list(items[i : i + self._batch_size]) for i in range(0, len(items), self._batch_size)]

    async def _run_batch(self, batch: List[T], worker: Callable[[T], Awaitable[Optional[R]]]) -> List[R]:
        settled: List[Any] = await asyncio.gather(*(worker(item) for item in batch), return_exceptions=True)
        results: List[R] = []
        for item, outcome in zip(batch, settled):
            if isinstance(outcome, BaseException):
                logger.warning("Worker raised for %r; skipping", item, exc_info=outcome)
                continue
            if outcome is not None:
                results.append(outcome)
        return results

    async def run(self, items: Sequence[T], worker: Callable[[T], Awaitable[Optional[R]]]) -> List[R]:
        """모든 배치 실행(Run the worker over every item, batch by batch)."""

        batches = self.batches(items)
        results: List[R] = []
        for index, batch in enumerate(batches, start=1):
            self._progress_cb(
                self.STEP,
                f"Processing batch {index}/{len(batches)} ({len(batch)} packages)",
            )
            results.extend(await self._run_batch(batch, worker))
            if index < len(batches):
                await self._sleep(self._batch_delay)

        self._progress_cb(self.STEP, f"Resolved {len(results)} of {len(items)} packages")
        return results
