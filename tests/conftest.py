"""Pytest configuration and shared fixtures."""
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from common_lib.config import Settings
from common_lib.logger import get_logger

logger = get_logger(__name__)

RANKING_HOST = "packages.example.test"
REGISTRY_HOST = "registry.example.test"


class RecordingSleep:
    """Async sleep replacement that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingProgress:
    """Progress callback that keeps (step, message) events."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str]] = []

    def __call__(self, step: str, message: str) -> None:
        self.events.append((step, message))

    def steps(self) -> List[str]:
        return [step for step, _ in self.events]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode(), headers={"Content-Type": "application/json"})


def create_mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """Create an AsyncClient whose requests are routed to handler."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_summary(
    name: str,
    version: Optional[str] = "1.0.0",
    repository_url: Optional[str] = None,
    published_at: Optional[str] = "2025-01-01T00:00:00.000Z",
) -> Dict[str, Any]:
    """Ranking API summary row."""
    return {
        "name": name,
        "repository_url": repository_url,
        "latest_release_number": version,
        "latest_release_published_at": published_at,
    }


def make_manifest(
    name: str,
    version: str = "1.0.0",
    attested: bool = True,
    trusted_publisher: Optional[str] = None,
    repository: Any = None,
) -> Dict[str, Any]:
    """npm version manifest."""
    manifest: Dict[str, Any] = {
        "name": name,
        "version": version,
        "dist": {"tarball": f"https://{REGISTRY_HOST}/{name}/-/{name}-{version}.tgz"},
    }
    if attested:
        manifest["dist"]["attestations"] = {
            "url": f"https://{REGISTRY_HOST}/-/npm/v1/attestations/{name}@{version}",
            "provenance": {"predicateType": "https://slsa.dev/provenance/v1"},
        }
    if trusted_publisher:
        manifest["_npmUser"] = {
            "name": "GitHub Actions",
            "trustedPublisher": {"id": trusted_publisher, "oidcConfigId": "oidc:1"},
        }
    if repository is not None:
        manifest["repository"] = repository
    return manifest


def make_packument(
    name: str,
    latest: Optional[str] = "1.0.0",
    versions: Optional[Dict[str, Any]] = None,
    published: str = "2025-02-03T04:05:06.789Z",
) -> Dict[str, Any]:
    """Full npm package document."""
    if versions is None:
        versions = {latest: make_manifest(name, latest)} if latest else {}
    document: Dict[str, Any] = {
        "name": name,
        "versions": versions,
        "time": {version: published for version in versions},
    }
    if latest is not None:
        document["dist-tags"] = {"latest": latest}
    return document


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at fake hosts, independent of the environment."""
    return Settings(
        _env_file=None,
        ranking_api_url=f"https://{RANKING_HOST}/api/v1",
        registry_name="npmjs.org",
        registry_url=f"https://{REGISTRY_HOST}",
        package_limit=25,
        page_size=10,
        batch_size=10,
        strategy="version",
    )
