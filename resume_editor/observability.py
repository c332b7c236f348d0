"""Observability for editing runs - logging and per-stage metrics."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, Optional

MAX_EVENTS = 10_000


@dataclass
class PipelineEvent:
    """A single event in an editing run."""

    timestamp: datetime
    event_type: str  # "stage_start", "stage_end", "polish_failed", "polish_rejected", "run_end"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


class PipelineObserver:
    """
    Observability layer for tracking editing runs.

    Collects events and logs them through the ``resume_editor`` logger.
    Only the most recent ``max_events`` events are kept.
    One observer may be shared by concurrent runs; each event carries the
    run id it belongs to.
    """

    def __init__(self, verbose: bool = False, max_events: int = MAX_EVENTS):
        self.events: Deque[PipelineEvent] = deque(maxlen=max_events)
        self.logger = logging.getLogger("resume_editor")
        self.verbose = verbose
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO if self.verbose else logging.WARNING)

    def _record(self, event_type: str, data: Dict[str, Any], duration_ms: Optional[float] = None) -> PipelineEvent:
        event = PipelineEvent(timestamp=datetime.now(), event_type=event_type, data=data, duration_ms=duration_ms)
        self.events.append(event)
        return event

    def log_stage_start(self, run_id: int, stage: str):
        self._record("stage_start", {"run": run_id, "stage": stage})
        self.logger.debug(f"[run {run_id}] {stage} started")

    def log_stage_end(self, run_id: int, stage: str, duration_ms: float, **details: Any):
        """
        Log the end of a pipeline stage.

        Args:
            run_id: Identifier of the run the stage belongs to
            stage: Stage name ("validate", "normalize", "polish", "verify", "score")
            duration_ms: Stage duration in milliseconds
            **details: Stage-specific values (issue counts, scores)
        """
        self._record("stage_end", {"run": run_id, "stage": stage, **details}, duration_ms=duration_ms)
        extra = "".join(f" {k}={v}" for k, v in details.items())
        self.logger.info(f"[run {run_id}] {stage} completed ({duration_ms:.2f}ms){extra}")

    def log_polish_failed(self, run_id: int, error: BaseException, duration_ms: float):
        """Log a collaborator failure that sent the run down the fallback path."""
        message = str(error) or type(error).__name__
        self._record(
            "polish_failed",
            {"run": run_id, "error_type": type(error).__name__, "message": message},
            duration_ms=duration_ms,
        )
        self.logger.warning(f"[run {run_id}] Content polish failed ({type(error).__name__}): {message}")

    def log_polish_rejected(self, run_id: int, reason: str):
        self._record("polish_rejected", {"run": run_id, "reason": reason})
        self.logger.warning(f"[run {run_id}] Polished text rejected: {reason}")

    def log_run_end(self, run_id: int, ats_score: int, quality_score: int, passed: bool, duration_ms: float):
        self._record(
            "run_end",
            {"run": run_id, "ats_score": ats_score, "quality_score": quality_score, "passed": passed},
            duration_ms=duration_ms,
        )
        status = "PASSED" if passed else "NEEDS IMPROVEMENT"
        self.logger.info(
            f"[run {run_id}] Finished: ATS {ats_score}, quality {quality_score}, {status} ({duration_ms:.2f}ms)"
        )

    def get_run_stats(self) -> Dict[str, Any]:
        """
        Get aggregated statistics over every recorded run.

        Returns:
            Dictionary with run statistics
        """
        runs = [e for e in self.events if e.event_type == "run_end"]
        stage_ms: Dict[str, float] = {}
        for event in self.events:
            if event.event_type == "stage_end":
                stage = event.data["stage"]
                stage_ms[stage] = stage_ms.get(stage, 0.0) + (event.duration_ms or 0.0)

        return {
            "runs": len(runs),
            "passed": sum(1 for e in runs if e.data["passed"]),
            "polish_failures": sum(1 for e in self.events if e.event_type == "polish_failed"),
            "polish_rejections": sum(1 for e in self.events if e.event_type == "polish_rejected"),
            "total_duration_ms": sum(e.duration_ms or 0.0 for e in runs),
            "stage_duration_ms": stage_ms,
            "event_count": len(self.events),
        }

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
        self.logger.info("Observer events cleared")
