"""공통 설정 모듈(Common configuration module)."""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STRATEGY_CHOICES = ("version", "full")


class Settings(BaseSettings):
    """시스템 환경설정(System environment settings)."""

    model_config = SettingsConfigDict(
        env_prefix="NAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ranking_api_url: str = Field(
        default="https://packages.ecosyste.ms/api/v1",
        description="패키지 순위 API 기본 URL(Package ranking API base URL)",
    )
    registry_name: str = Field(default="npmjs.org", description="순위 API 레지스트리 이름(Registry name on the ranking API)")
    registry_url: str = Field(
        default="https://registry.npmjs.org",
        description="npm 레지스트리 URL(npm registry base URL)",
    )

    package_limit: int = Field(default=1000, gt=0, description="조회할 상위 패키지 수(Number of top packages)")
    page_size: int = Field(default=100, gt=0, description="순위 API 페이지 크기(Ranking API page size)")
    page_delay_seconds: float = Field(default=0.5, ge=0, description="페이지 간 지연(Delay between pages)")
    batch_size: int = Field(default=10, gt=0, description="동시 조회 배치 크기(Concurrent batch size)")
    batch_delay_seconds: float = Field(default=1.0, ge=0, description="배치 간 지연(Delay between batches)")

    max_attempts: int = Field(default=3, gt=0, description="최대 요청 시도 횟수(Max request attempts)")
    retry_base_delay_seconds: float = Field(default=1.0, ge=0, description="재시도 기본 지연(Retry base delay)")
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="요청 타임아웃(Request timeout)")
    user_agent: str = Field(default="npm-attestation-report", description="HTTP User-Agent 헤더(HTTP User-Agent header)")

    strategy: str = Field(default="version", description="증명 조회 전략(Attestation lookup strategy)")
    output_path: str = Field(default="attestations.json", description="보고서 출력 경로(Report output path)")

    log_level: str = Field(default="INFO", description="로그 레벨(Log level)")

    @field_validator("strategy", mode="before")
    @classmethod
    def validate_strategy(cls, v: Any) -> str:
        """Normalize and check the strategy name."""
        value = str(v).strip().lower()
        if value not in STRATEGY_CHOICES:
            raise ValueError(f"strategy must be one of {', '.join(STRATEGY_CHOICES)}")
        return value

    @field_validator("ranking_api_url", "registry_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """설정 인스턴스 반환(Return a cached settings instance)."""

    return Settings()
