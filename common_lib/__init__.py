"""공통 라이브러리 패키지 초기화(Common library package init)."""
from . import config, errors, http_client, logger, progress, retry_config

__all__ = [
    "config",
    "errors",
    "http_client",
    "logger",
    "progress",
    "retry_config",
]
