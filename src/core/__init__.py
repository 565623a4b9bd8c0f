"""Core utilities and abstractions for the attestation report pipeline."""

# Core components
from src.core.context import PipelineContext
from src.core.scheduler import BatchScheduler

# Utilities
from src.core.utils.timestamps import normalize_timestamp, utc_now
from src.core.agent_helpers import safe_call

# Reporting
from src.core.report import (
    Report,
    ReportBuilder,
    ReportEntry,
    ReportSummary,
    is_supported_platform,
    write_report,
)

__all__ = [
    # Core components
    "PipelineContext",
    "BatchScheduler",
    # Utilities
    "normalize_timestamp",
    "utc_now",
    "safe_call",
    # Reporting
    "Report",
    "ReportBuilder",
    "ReportEntry",
    "ReportSummary",
    "is_supported_platform",
    "write_report",
]
