"""Pure domain logic for ATS (Applicant Tracking System) resume scoring.

The score starts at 100 and each rule contributes a signed delta; the total is
a fold over the rule outcomes.  All functions operate on content strings --
no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .headers import REQUIRED_HEADERS
from .issues import Issue, Severity
from .resume_validator import has_email, has_phone

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ACTION_VERBS: Tuple[str, ...] = (
    "achieved",
    "administered",
    "analyzed",
    "collaborated",
    "coordinated",
    "created",
    "delivered",
    "developed",
    "directed",
    "enhanced",
    "exceeded",
    "executed",
    "facilitated",
    "generated",
    "improved",
    "increased",
    "led",
    "managed",
    "optimized",
    "organized",
    "performed",
    "processed",
    "reduced",
    "resolved",
    "spearheaded",
    "streamlined",
    "supervised",
    "supported",
    "transformed",
)

QUANTIFIED_RE = re.compile(
    r"\d+(?:\.\d+)?%|\d+\+|\d+ (?:percent|years?|months?|customers?|projects?)",
    re.IGNORECASE,
)

_VERB_RES = [re.compile(r"\b" + verb, re.IGNORECASE) for verb in ACTION_VERBS]
_TABLE_LAYOUT_RE = re.compile(r"\t\t| {10,}")

BASE_SCORE = 100
PASS_THRESHOLD = 85
MIN_ACTION_VERBS = 5
MIN_QUANTIFIED = 3
WORD_RANGE = (300, 900)
CONTACT_WINDOW = 10


@dataclass
class RuleOutcome:
    """Signed contribution of one rule plus the issue it raised, if any."""

    category: str
    delta: int = 0
    issue: Optional[Issue] = None


@dataclass
class ATSScoreResult:
    """Structured result from ATS scoring."""

    score: int
    issues: List[Issue] = field(default_factory=list)
    breakdown: Dict[str, int] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.score >= PASS_THRESHOLD


# ---------------------------------------------------------------------------
# Shared text metrics
# ---------------------------------------------------------------------------


def count_action_verbs(text: str) -> int:
    """Distinct action verbs that start a word somewhere in *text*."""
    return sum(1 for pattern in _VERB_RES if pattern.search(text))


def count_quantified(text: str) -> int:
    """Quantified-achievement tokens: ``40%``, ``10+``, ``5 years`` and the like."""
    return len(QUANTIFIED_RE.findall(text))


def word_count(text: str) -> int:
    return len(text.split())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_ats(content: str) -> ATSScoreResult:
    """Score resume *content* for machine readability.

    Returns an :class:`ATSScoreResult`; the score is clamped at 0.
    """
    outcomes = [rule(content) for rule in _RULES]

    total = BASE_SCORE + sum(o.delta for o in outcomes)
    breakdown: Dict[str, int] = {o.category: o.delta for o in outcomes}
    issues = [o.issue for o in outcomes if o.issue is not None]

    return ATSScoreResult(score=max(0, min(BASE_SCORE, total)), issues=issues, breakdown=breakdown)


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_ats_report(result: ATSScoreResult) -> str:
    """Render an :class:`ATSScoreResult` as a human-readable report."""
    status = "PASS" if result.passed else "BELOW THRESHOLD"
    lines = [
        f"## ATS Score: {result.score}/100 ({status})",
        _score_bar(result.score),
        "",
        "| Rule | Impact |",
        "|------|--------|",
    ]
    for category, delta in result.breakdown.items():
        lines.append(f"| {category} | {delta:+d} |")

    if result.issues:
        lines.append("")
        lines.append("### Issues")
        for i, issue in enumerate(result.issues, 1):
            lines.append(f"{i}. [{issue.severity.value}] {issue.message} ({issue.impact:+d})")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _rule_headers(content: str) -> RuleOutcome:
    missing = [h for h in REQUIRED_HEADERS if h not in content]
    if not missing:
        return RuleOutcome("headers")
    delta = -10 * len(missing)
    return RuleOutcome(
        "headers",
        delta,
        Issue(
            severity=Severity.ERROR,
            message=f"Non-standard or missing section headers: {', '.join(missing)}",
            fix="Use the standard uppercase section headers",
            impact=delta,
        ),
    )


def _rule_layout(content: str) -> RuleOutcome:
    if not _TABLE_LAYOUT_RE.search(content):
        return RuleOutcome("layout")
    return RuleOutcome(
        "layout",
        -15,
        Issue(
            severity=Severity.ERROR,
            message="Detected complex formatting (tables/columns) that may break in ATS",
            fix="Remove tables, text boxes and multi-column layouts",
            impact=-15,
        ),
    )


def _rule_contact_placement(content: str) -> RuleOutcome:
    head = "\n".join(content.split("\n")[:CONTACT_WINDOW])
    if has_email(head) and has_phone(head):
        return RuleOutcome("contact")
    return RuleOutcome(
        "contact",
        -10,
        Issue(
            severity=Severity.WARNING,
            message="Contact information should be in the first few lines",
            fix="Put email and phone number directly under your name",
            impact=-10,
        ),
    )


def _rule_action_verbs(content: str) -> RuleOutcome:
    verbs = count_action_verbs(content)
    if verbs >= MIN_ACTION_VERBS:
        return RuleOutcome("action_verbs")
    return RuleOutcome(
        "action_verbs",
        -10,
        Issue(
            severity=Severity.WARNING,
            message=f"Only {verbs} action verbs found. Aim for 10+ for impact.",
            fix="Start bullet points with strong action verbs",
            impact=-10,
        ),
    )


def _rule_quantified(content: str) -> RuleOutcome:
    numbers = count_quantified(content)
    if numbers >= MIN_QUANTIFIED:
        return RuleOutcome("quantified")
    return RuleOutcome(
        "quantified",
        -5,
        Issue(
            severity=Severity.WARNING,
            message=f"Only {numbers} quantified achievements. Add more metrics.",
            fix="Add percentages, counts and durations to achievements",
            impact=-5,
        ),
    )


def _rule_length(content: str) -> RuleOutcome:
    words = word_count(content)
    low, high = WORD_RANGE
    if low <= words <= high:
        return RuleOutcome("length")
    return RuleOutcome(
        "length",
        -5,
        Issue(
            severity=Severity.WARNING,
            message=f"Resume length ({words} words) not optimal. Target 400-800 words.",
            fix="Trim or expand the resume towards 400-800 words",
            impact=-5,
        ),
    )


_RULES: List[Callable[[str], RuleOutcome]] = [
    _rule_headers,
    _rule_layout,
    _rule_contact_placement,
    _rule_action_verbs,
    _rule_quantified,
    _rule_length,
]


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'=' * filled}{' ' * (width - filled)}]"
