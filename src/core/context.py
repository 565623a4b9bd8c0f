"""Pipeline execution context for one report run.

Tracks the run parameters, timings, and per-stage counts so the
orchestrator can log a single summary line when the run finishes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from src.core.utils.timestamps import utc_now


@dataclass
class PipelineContext:
    """
    Shared execution context for the attestation report pipeline.

    Holds configuration flags and intermediate counts; the records
    themselves flow through return values.
    """

    # Run parameters
    limit: int
    strategy: str

    # Execution metadata
    started_at: datetime = field(default_factory=utc_now)

    # Stage counts (populated during pipeline execution)
    listed_count: int = 0
    resolved_count: int = 0

    # Errors encountered during execution (for diagnostics)
    errors: List[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        """Get elapsed time since pipeline started."""
        return (utc_now() - self.started_at).total_seconds()

    @property
    def dropped_count(self) -> int:
        return self.listed_count - self.resolved_count

    def add_error(self, step: str, message: str) -> None:
        """Record an error encountered during pipeline execution."""
        error_msg = f"[{step}] {message}"
        self.errors.append(error_msg)

    def summary(self) -> Dict[str, Any]:
        """Get a summary of pipeline execution context."""
        return {
            "limit": self.limit,
            "strategy": self.strategy,
            "listed": self.listed_count,
            "resolved": self.resolved_count,
            "dropped": self.dropped_count,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
            "error_count": len(self.errors),
        }
