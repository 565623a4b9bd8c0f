"""증명 보고서 실행기(Attestation report runner).

Lists the most-downloaded npm packages, checks each for a provenance
attestation and writes the JSON report read by the display page.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Iterable, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from common_lib.config import STRATEGY_CHOICES, Settings, get_settings
from common_lib.errors import log_extra
from common_lib.logger import get_logger, set_level
from report_orchestrator import ReportOrchestrator
from src.core.report import Report, write_report

# Load .env file at startup
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """커맨드라인 인자 파싱(Parse CLI arguments)."""

    parser = argparse.ArgumentParser(description="npm 패키지 증명 보고서 생성기(npm attestation report generator)")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="조회할 상위 패키지 수(Number of top packages to check)",
    )
    parser.add_argument(
        "--strategy",
        choices=STRATEGY_CHOICES,
        default=None,
        help="조회 전략(Lookup strategy): version manifest only, or full package document",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="보고서 출력 경로(Report output path)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="동시 조회 배치 크기(Concurrent batch size)",
    )
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Settings:
    """CLI 인자로 설정 덮어쓰기(Apply CLI overrides on top of environment settings)."""

    overrides = {
        "package_limit": args.limit,
        "strategy": args.strategy,
        "output_path": args.output,
        "batch_size": args.batch_size,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    base = get_settings()
    if not overrides:
        return base
    return Settings(**{**base.model_dump(), **overrides})


async def main_async(settings: Settings) -> Report:
    """비동기 메인 루틴(Async main routine)."""

    orchestrator = ReportOrchestrator(settings=settings)
    report = await orchestrator.build_report()
    write_report(report, settings.output_path)
    return report


def main(argv: Optional[Iterable[str]] = None) -> int:
    """동기 진입점(Synchronous entrypoint); returns the process exit status."""

    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    set_level(settings.log_level)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        loop.run_until_complete(main_async(settings))
        loop.run_until_complete(loop.shutdown_asyncgens())
    except Exception as exc:
        logger.exception("Pipeline failed; no report written", extra=log_extra(exc))
        return 1
    finally:
        loop.close()
        asyncio.set_event_loop(None)
    return 0


def main_cli() -> None:
    """콘솔 스크립트 진입점(Console script entrypoint)."""

    sys.exit(main())


if __name__ == "__main__":
    main_cli()
