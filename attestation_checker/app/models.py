"""증명 검사 데이터 모델(Attestation check data models)."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class AttestationRecord(BaseModel):
    """패키지별 증명 상태(Per-package attestation status).

    Missing values are stored as empty strings so the report never carries nulls.
    """

    model_config = ConfigDict(frozen=True)

    package: str
    version: str = ""
    last_uploaded: str = ""
    attestations_url: str = ""
    trusted_publisher_id: str = ""
    repository_url: str = ""

    @field_validator(
        "version",
        "last_uploaded",
        "attestations_url",
        "trusted_publisher_id",
        "repository_url",
        mode="before",
    )
    @classmethod
    def empty_if_missing(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @property
    def has_attestations(self) -> bool:
        return bool(self.attestations_url)
