"""순위 목록 데이터 모델(Ranked package list data models)."""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PackageRef(BaseModel):
    """순위 API에서 얻은 패키지 참조(Package reference listed by the ranking API)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="패키지 이름(Package name)")
    repository_url: Optional[str] = Field(default=None, description="알려진 저장소 URL(Known repository URL)")
    latest_version: Optional[str] = Field(default=None, description="알려진 최신 버전(Known latest version)")
    published_at: Optional[str] = Field(default=None, description="최신 버전 게시 시각(Latest version publish time)")

    @classmethod
    def from_summary(cls, summary: Dict[str, Any]) -> "PackageRef":
        """순위 API 요약 객체 변환(Build a reference from a ranking API summary object)."""

        def _optional(key: str) -> Optional[str]:
            value = summary.get(key)
            return str(value) if value else None

        return cls(
            name=str(summary["name"]),
            repository_url=_optional("repository_url"),
            latest_version=_optional("latest_release_number"),
            published_at=_optional("latest_release_published_at"),
        )
