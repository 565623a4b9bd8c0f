"""보고서 생성 및 저장(Report building and serialization).

Turns ordered attestation records into the JSON artifact read by the
display page. Field names of the artifact are fixed.
"""
from __future__ import annotations

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from attestation_checker.app.models import AttestationRecord
from common_lib.logger import get_logger
from src.core.utils.timestamps import normalize_timestamp, utc_now

logger = get_logger(__name__)

SUPPORTED_HOSTS = ("github.com", "gitlab.com")


def normalize_repository_url(url: str) -> str:
    """``git+`` 접두사와 ``.git`` 접미사 제거(Strip a leading ``git+`` and trailing ``.git``)."""
    if url.startswith("git+"):
        url = url[len("git+") :]
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def is_supported_platform(url: Optional[str]) -> bool:
    """증명 지원 호스팅 여부(Whether the repository lives on a host that supports attestations)."""
    if not url:
        return False
    normalized = normalize_repository_url(url)
    return any(host in normalized for host in SUPPORTED_HOSTS)


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class ReportEntry(BaseModel):
    """순위가 매겨진 패키지 항목(Ranked package entry)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rank: int
    package: str
    version: str
    last_uploaded: str = Field(alias="lastUploaded")
    attestations_url: str = Field(alias="attestationsUrl")
    trusted_publisher_id: str = Field(alias="trustedPublisherId")
    repository_url: str = Field(alias="repositoryUrl")
    is_supported_platform: bool = Field(alias="isSupportedPlatform")


class ReportSummary(BaseModel):
    """요약 통계(Summary statistics)."""

    model_config = ConfigDict(frozen=True)

    total_packages: int
    packages_with_attestations: int
    attestation_percentage: float


class Report(BaseModel):
    """최종 보고서(Final report)."""

    model_config = ConfigDict(frozen=True)

    generated_at: str
    summary: ReportSummary
    packages: List[ReportEntry]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ReportBuilder:
    """증명 기록을 보고서로 변환(Builds the report from ordered attestation records)."""

    @staticmethod
    def rank(records: Sequence[AttestationRecord]) -> List[ReportEntry]:
        return [
            ReportEntry(
                rank=index,
                package=record.package,
                version=record.version,
                last_uploaded=record.last_uploaded,
                attestations_url=record.attestations_url,
                trusted_publisher_id=record.trusted_publisher_id,
                repository_url=record.repository_url,
                is_supported_platform=is_supported_platform(record.repository_url),
            )
            for index, record in enumerate(records, start=1)
        ]

    @staticmethod
    def summarize(records: Sequence[AttestationRecord]) -> ReportSummary:
        total = len(records)
        with_attestations = sum(1 for record in records if record.has_attestations)
        percentage = round_half_up(with_attestations / total * 100) if total else 0.0
        return ReportSummary(
            total_packages=total,
            packages_with_attestations=with_attestations,
            attestation_percentage=percentage,
        )

    def build(
        self,
        records: Sequence[AttestationRecord],
        generated_at: Optional[datetime] = None,
    ) -> Report:
        """보고서 생성(Build the report; ranks follow the given order)."""

        summary = self.summarize(records)
        logger.info(
            "Report summary: %d/%d packages with attestations (%.1f%%)",
            summary.packages_with_attestations,
            summary.total_packages,
            summary.attestation_percentage,
        )
        return Report(
            generated_at=normalize_timestamp(generated_at or utc_now()),
            summary=summary,
            packages=self.rank(records),
        )


def write_report(report: Report, path: Union[str, Path]) -> Path:
    """보고서를 JSON 파일로 저장(Write the report as a JSON file)."""

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info("Report written to %s", output)
    return output
