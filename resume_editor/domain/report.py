"""Human-readable verdict for a full editing run.

All functions operate on already-computed results -- no file I/O.
"""

from __future__ import annotations

from typing import List, Sequence

from .ats_scorer import PASS_THRESHOLD, ATSScoreResult, format_ats_report
from .issues import Issue
from .quality_scorer import QualityScoreResult, format_quality_report

ATS_PASS = PASS_THRESHOLD
QUALITY_PASS = 80


def is_passing(ats_score: int, quality_score: int) -> bool:
    return ats_score >= ATS_PASS and quality_score >= QUALITY_PASS


def get_recommendation(ats_score: int, quality_score: int) -> str:
    """One-line recommendation for the given pair of scores."""
    if ats_score >= 90 and quality_score >= 90:
        return "Excellent! Resume is ready for submission."
    if ats_score >= ATS_PASS and quality_score >= QUALITY_PASS:
        return "Good quality. Consider implementing suggested improvements."
    if ats_score >= 70:
        return "Resume needs improvements for optimal ATS performance."
    return "Critical issues detected. Resume requires significant revision."


def format_pipeline_report(
    ats: ATSScoreResult,
    quality: QualityScoreResult,
    issues: Sequence[Issue],
) -> str:
    """Render both score reports and the run's issues as Markdown."""
    passed = is_passing(ats.score, quality.score)
    lines: List[str] = [
        "# Resume Editing Report",
        "",
        f"**Status:** {'PASSED' if passed else 'NEEDS IMPROVEMENT'}",
        f"**ATS Score:** {ats.score}/100",
        f"**Quality Score:** {quality.score}/100",
        "",
        f"> {get_recommendation(ats.score, quality.score)}",
        "",
    ]

    if issues:
        lines.append("## Issues")
        for issue in issues:
            fix = f" (fix: {issue.fix})" if issue.fix else ""
            lines.append(f"- **{issue.severity.value}**: {issue.message}{fix}")
        lines.append("")

    lines.append(format_ats_report(ats))
    lines.append("")
    lines.append(format_quality_report(quality))
    return "\n".join(lines)
