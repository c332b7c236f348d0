"""Resume editing pipeline: validate, normalize, polish, verify, score.

No stage failure aborts a run.  Collaborator failures and verification
rejections fall back to the pre-polish text and are recorded as issues.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .config import EditorConfig
from .domain import (
    ATSScoreResult,
    Issue,
    QualityScoreResult,
    Severity,
    format_pipeline_report,
    get_recommendation,
    inspect_polish,
    is_passing,
    normalize_resume,
    score_ats,
    score_quality,
    validate_resume,
)
from .observability import PipelineObserver
from .retry import RetryConfig, retry_with_backoff

logger = logging.getLogger(__name__)


class JobContext(BaseModel):
    """Target job the resume is being edited for."""

    model_config = ConfigDict(extra="forbid")

    title: str = ""
    description: str = ""


PolishFn = Callable[[str, Optional[JobContext]], Awaitable[str]]
JobContextLike = Union[JobContext, Mapping[str, Any], None]


@dataclass
class PipelineResult:
    """Everything one run produced.  Owned by a single run."""

    original_text: str
    final_text: str
    issues: List[Issue]
    ats_report: ATSScoreResult
    quality_report: QualityScoreResult
    polish_applied: bool = False

    @property
    def ats_score(self) -> int:
        return self.ats_report.score

    @property
    def quality_score(self) -> int:
        return self.quality_report.score

    @property
    def passed(self) -> bool:
        return is_passing(self.ats_score, self.quality_score)

    @property
    def recommendation(self) -> str:
        return get_recommendation(self.ats_score, self.quality_score)

    def format_report(self) -> str:
        return format_pipeline_report(self.ats_report, self.quality_report, self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "ats_score": self.ats_score,
            "quality_score": self.quality_score,
            "recommendation": self.recommendation,
            "polish_applied": self.polish_applied,
            "issues": [issue.to_dict() for issue in self.issues],
            "ats_issues": [issue.to_dict() for issue in self.ats_report.issues],
            "ats_breakdown": dict(self.ats_report.breakdown),
            "improvements": list(self.quality_report.improvements),
            "quality_breakdown": dict(self.quality_report.breakdown),
            "final_text": self.final_text,
        }


@dataclass
class _RunState:
    run_id: int
    issues: List[Issue] = field(default_factory=list)


class ResumeEditor:
    """Runs the editing pipeline for one or many resumes.

    ``polisher`` is any async callable ``(text, job_context) -> str``; when it
    is ``None`` the polish stage is skipped and the normalized text is scored.
    """

    def __init__(
        self,
        polisher: Optional[PolishFn] = None,
        timeout: float = 60.0,
        retry: Optional[RetryConfig] = None,
        observer: Optional[PipelineObserver] = None,
    ):
        self.polisher = polisher
        self.timeout = timeout
        self.retry = retry or RetryConfig()
        self.observer = observer or PipelineObserver()
        self._run_ids = itertools.count(1)

    @classmethod
    def from_config(
        cls,
        config: EditorConfig,
        observer: Optional[PipelineObserver] = None,
        polisher: Optional[PolishFn] = None,
    ) -> "ResumeEditor":
        if polisher is None and config.polish_enabled:
            from .polisher import LLMPolisher

            polisher = LLMPolisher.from_config(config)
        return cls(
            polisher=polisher if config.polish_enabled else None,
            timeout=config.polish_timeout,
            retry=config.retry,
            observer=observer,
        )

    async def run(self, raw_text: str, job_context: JobContextLike = None) -> PipelineResult:
        """Edit one resume.

        Raises:
            TypeError: If *raw_text* is not a string or *job_context* has the wrong type
            pydantic.ValidationError: If a *job_context* mapping has bad fields
        """
        if not isinstance(raw_text, str):
            raise TypeError(f"raw_text must be str, got {type(raw_text).__name__}")
        context = coerce_job_context(job_context)
        state = _RunState(run_id=next(self._run_ids))
        started = time.perf_counter()

        with self._stage(state, "validate") as details:
            validation = validate_resume(raw_text)
            state.issues.extend(validation.issues)
            details["issues"] = len(validation.issues)

        with self._stage(state, "normalize"):
            fixed = normalize_resume(raw_text)

        final_text = fixed
        polish_applied = False
        if self.polisher is not None:
            polished = await self._polish(state, fixed, context)
            if polished is not None:
                with self._stage(state, "verify") as details:
                    verdict = inspect_polish(fixed, polished)
                    details["accepted"] = verdict.accepted
                if not verdict.accepted:
                    self.observer.log_polish_rejected(state.run_id, verdict.reason)
                    state.issues.append(
                        Issue(
                            severity=Severity.WARNING,
                            message=f"Polished text rejected: {verdict.reason}",
                            fix="Original wording kept; review the resume manually",
                        )
                    )
                final_text = verdict.text
                polish_applied = verdict.accepted

        with self._stage(state, "score") as details:
            ats_report = score_ats(final_text)
            quality_report = score_quality(final_text, context)
            details["ats"] = ats_report.score
            details["quality"] = quality_report.score

        result = PipelineResult(
            original_text=raw_text,
            final_text=final_text,
            issues=state.issues,
            ats_report=ats_report,
            quality_report=quality_report,
            polish_applied=polish_applied,
        )
        self.observer.log_run_end(
            state.run_id,
            result.ats_score,
            result.quality_score,
            result.passed,
            (time.perf_counter() - started) * 1000,
        )
        return result

    async def run_many(
        self,
        texts: Sequence[str],
        job_context: JobContextLike = None,
    ) -> List[PipelineResult]:
        """Edit several resumes concurrently, one task each, results in input order."""
        context = coerce_job_context(job_context)
        return list(await asyncio.gather(*(self.run(text, context) for text in texts)))

    async def _polish(self, state: _RunState, text: str, context: Optional[JobContext]) -> Optional[str]:
        """Call the collaborator once (plus configured retries) within the timeout.

        Returns ``None`` when the call failed; the failure is already recorded.
        """
        self.observer.log_stage_start(state.run_id, "polish")
        started = time.perf_counter()
        try:
            polished = await asyncio.wait_for(
                retry_with_backoff(self.polisher, self.retry, text, context),
                timeout=self.timeout,
            )
            if not isinstance(polished, str):
                raise TypeError(f"polisher returned {type(polished).__name__}, expected str")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            self.observer.log_polish_failed(state.run_id, e, duration_ms)
            state.issues.append(
                Issue(
                    severity=Severity.WARNING,
                    message=f"Content polish failed: {_describe_failure(e, self.timeout)}",
                    fix="Original wording kept; try again later",
                )
            )
            return None

        self.observer.log_stage_end(state.run_id, "polish", (time.perf_counter() - started) * 1000)
        return polished

    def _stage(self, state: _RunState, name: str) -> "_StageTimer":
        return _StageTimer(self.observer, state.run_id, name)


class _StageTimer:
    """Context manager that logs start/end of a synchronous stage."""

    def __init__(self, observer: PipelineObserver, run_id: int, name: str):
        self.observer = observer
        self.run_id = run_id
        self.name = name
        self.details: Dict[str, Any] = {}
        self._started = 0.0

    def __enter__(self) -> Dict[str, Any]:
        self.observer.log_stage_start(self.run_id, self.name)
        self._started = time.perf_counter()
        return self.details

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            duration_ms = (time.perf_counter() - self._started) * 1000
            self.observer.log_stage_end(self.run_id, self.name, duration_ms, **self.details)


def coerce_job_context(job_context: JobContextLike) -> Optional[JobContext]:
    """Accept ``None``, a :class:`JobContext` or a mapping that validates into one."""
    if job_context is None or isinstance(job_context, JobContext):
        return job_context
    if isinstance(job_context, Mapping):
        return JobContext.model_validate(dict(job_context))
    raise TypeError(f"job_context must be a JobContext or mapping, got {type(job_context).__name__}")


def _describe_failure(error: BaseException, timeout: float) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return f"timed out after {timeout:g}s"
    cause = error.__cause__ if error.__cause__ is not None else error
    return str(cause) or type(cause).__name__
