"""패키지 증명 조회 서비스 모듈(Package attestation lookup service module).

Two interchangeable strategies resolve a ``PackageRef`` into an
``AttestationRecord``:

- ``VersionScopedStrategy`` fetches only the manifest of the version the
  ranking API already reported. Packages with no known version still get a
  partial record.
- ``FullDocumentStrategy`` fetches the whole packument and follows
  ``dist-tags.latest``. Packages whose latest tag or version entry is
  missing are dropped.

A lookup error for one package never propagates; it yields ``None``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import quote

from common_lib.errors import DataValidationError
from common_lib.http_client import RetryingFetcher
from common_lib.logger import get_logger
from common_lib.progress import ProgressCallback, log_progress
from ranking_lister.app.models import PackageRef
from src.core.agent_helpers import safe_call

from .models import AttestationRecord

logger = get_logger(__name__)


def _dig(document: Any, *keys: str) -> Any:
    """중첩 딕셔너리 안전 조회(Walk nested dicts, returning None on any gap)."""
    current = document
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def extract_repository_url(manifest: Dict[str, Any]) -> Optional[str]:
    """저장소 URL 추출(Read ``repository.url``; a bare string repository is the URL)."""
    repository = manifest.get("repository") if isinstance(manifest, dict) else None
    if isinstance(repository, str):
        return repository or None
    return _dig(repository, "url") or None


def encode_package_name(name: str) -> str:
    """레지스트리 경로용 이름 인코딩(Encode a name for a registry path; ``@scope/pkg`` -> ``@scope%2Fpkg``)."""
    return quote(name, safe="@")


class AttestationStrategy(ABC):
    """증명 조회 전략 기본 클래스(Base class for attestation lookup strategies)."""

    name: str = ""
    STEP = "CHECK"

    def __init__(
        self,
        fetcher: RetryingFetcher,
        registry_url: str = "https://registry.npmjs.org",
        progress_cb: ProgressCallback = log_progress,
    ) -> None:
        self._fetcher = fetcher
        self._registry_url = registry_url.rstrip("/")
        self._progress_cb = progress_cb

    @staticmethod
    def _record_from_manifest(
        package: str,
        version: str,
        manifest: Dict[str, Any],
        last_uploaded: Optional[str],
        fallback_repository_url: Optional[str] = None,
    ) -> AttestationRecord:
        return AttestationRecord(
            package=package,
            version=version,
            last_uploaded=last_uploaded,
            attestations_url=_dig(manifest, "dist", "attestations", "url"),
            trusted_publisher_id=_dig(manifest, "_npmUser", "trustedPublisher", "id"),
            repository_url=extract_repository_url(manifest) or fallback_repository_url,
        )

    @abstractmethod
    async def _lookup(self, ref: PackageRef) -> Optional[AttestationRecord]:
        """Resolve one package; may raise."""

    async def resolve(self, ref: PackageRef) -> Optional[AttestationRecord]:
        """패키지 증명 상태 조회(Resolve one package's attestation status, or None on failure)."""

        return await safe_call(
            self._lookup(ref),
            fallback=lambda: None,
            step=self.STEP,
            progress_cb=self._progress_cb,
        )


class VersionScopedStrategy(AttestationStrategy):
    """알려진 버전의 매니페스트만 조회(Fetch only the manifest of the already-known version)."""

    name = "version"

    async def _lookup(self, ref: PackageRef) -> Optional[AttestationRecord]:
        if not ref.latest_version:
            logger.debug("No known version for %s; recording partial entry", ref.name)
            return AttestationRecord(
                package=ref.name,
                last_uploaded=ref.published_at,
                repository_url=ref.repository_url,
            )

        url = f"{self._registry_url}/{encode_package_name(ref.name)}/{quote(ref.latest_version, safe='')}"
        manifest = await self._fetcher.fetch_json(url)
        if not isinstance(manifest, dict):
            raise DataValidationError("manifest", ref.name, "expected a JSON object")

        return self._record_from_manifest(
            ref.name,
            ref.latest_version,
            manifest,
            last_uploaded=ref.published_at,
            fallback_repository_url=ref.repository_url,
        )


class FullDocumentStrategy(AttestationStrategy):
    """전체 패키지 문서 조회(Fetch the full packument and follow ``dist-tags.latest``)."""

    name = "full"

    async def _lookup(self, ref: PackageRef) -> Optional[AttestationRecord]:
        url = f"{self._registry_url}/{encode_package_name(ref.name)}"
        document = await self._fetcher.fetch_json(url)
        if not isinstance(document, dict):
            raise DataValidationError("packument", ref.name, "expected a JSON object")

        latest = _dig(document, "dist-tags", "latest")
        if not latest:
            logger.warning("No latest dist-tag for %s; dropping package", ref.name)
            return None

        manifest = _dig(document, "versions", latest)
        if not isinstance(manifest, dict):
            logger.warning("Latest version %s missing from %s version map; dropping package", latest, ref.name)
            return None

        return self._record_from_manifest(
            ref.name,
            latest,
            manifest,
            last_uploaded=_dig(document, "time", latest),
        )


_STRATEGIES = {
    VersionScopedStrategy.name: VersionScopedStrategy,
    FullDocumentStrategy.name: FullDocumentStrategy,
}


def get_strategy(
    name: str,
    fetcher: RetryingFetcher,
    registry_url: str = "https://registry.npmjs.org",
    progress_cb: ProgressCallback = log_progress,
) -> AttestationStrategy:
    """이름으로 전략 생성(Create the strategy registered under ``name``)."""

    try:
        strategy_cls = _STRATEGIES[name]
    except KeyError:
        raise DataValidationError("strategy", name, f"must be one of {', '.join(sorted(_STRATEGIES))}") from None
    return strategy_cls(fetcher, registry_url=registry_url, progress_cb=progress_cb)
