"""Pure domain logic for writing-quality scoring of resumes.

An additive rubric: each category is capped on its own, then the total is
capped at 100.  All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .ats_scorer import count_action_verbs, count_quantified
from .headers import BULLET, CORE_COMPETENCIES, PROFESSIONAL_SUMMARY, REQUIRED_HEADERS
from .polish_verifier import count_bullets
from .resume_parser import parse_sections

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CATEGORY_MAX: Dict[str, float] = {
    "summary": 20,
    "competencies": 15,
    "experience": 30,
    "formatting": 20,
    "keywords": 15,
}

SUMMARY_RANGE = (100, 400)
SUMMARY_MIN = 50
COMPETENCY_RANGE = (8, 15)
TARGET_ACTION_VERBS = 10
TARGET_QUANTIFIED = 5
MAX_KEYWORDS = 20
DEFAULT_KEYWORD_SCORE = 10

_STOP_WORDS: Set[str] = {
    "the",
    "and",
    "or",
    "but",
    "in",
    "on",
    "at",
    "to",
    "for",
    "of",
    "with",
    "this",
    "that",
    "will",
    "have",
    "from",
    "your",
    "they",
    "been",
    "were",
    "which",
    "their",
    "about",
    "would",
    "there",
    "what",
    "also",
    "into",
    "more",
    "than",
    "then",
    "them",
    "these",
    "some",
    "such",
    "must",
    "should",
    "could",
    "able",
    "other",
    "when",
    "where",
    "while",
}

_WORD_RE = re.compile(r"[a-z0-9][a-z0-9+#]*")
_EXCESS_BLANKS_RE = re.compile(r"\n{4,}")


@dataclass
class QualityScoreResult:
    """Structured result from quality scoring."""

    score: int
    improvements: List[str] = field(default_factory=list)
    breakdown: Dict[str, float] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_quality(text: str, job_context=None) -> QualityScoreResult:
    """Score *text* on writing quality.

    *job_context* is anything with a ``description`` attribute (or ``None``).
    Without it the keyword category gets a flat default.
    """
    sections = parse_sections(text)
    improvements: List[str] = []
    breakdown: Dict[str, float] = {}

    for category, scorer in (
        ("summary", lambda: _score_summary(sections.get(PROFESSIONAL_SUMMARY))),
        ("competencies", lambda: _score_competencies(sections.get(CORE_COMPETENCIES))),
        ("experience", lambda: _score_experience(text)),
        ("formatting", lambda: _score_formatting(text)),
        ("keywords", lambda: _score_keywords(text, _description_of(job_context))),
    ):
        points, notes = scorer()
        breakdown[category] = min(points, CATEGORY_MAX[category])
        improvements.extend(notes)

    total = min(100, round_half_up(sum(breakdown.values())))
    return QualityScoreResult(score=max(0, total), improvements=improvements, breakdown=breakdown)


def extract_job_keywords(description: str) -> List[str]:
    """Up to 20 unique lowercase words longer than 3 characters, in first-seen order."""
    keywords: List[str] = []
    for word in _WORD_RE.findall(description.lower()):
        if len(word) <= 3 or word in _STOP_WORDS or word in keywords:
            continue
        keywords.append(word)
        if len(keywords) == MAX_KEYWORDS:
            break
    return keywords


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_quality_report(result: QualityScoreResult) -> str:
    """Render a :class:`QualityScoreResult` as a human-readable report."""
    lines = [
        f"## Quality Score: {result.score}/100",
        "",
        "| Category | Points | Max |",
        "|----------|--------|-----|",
    ]
    for category, points in result.breakdown.items():
        lines.append(f"| {category} | {points:g} | {CATEGORY_MAX[category]:g} |")

    if result.improvements:
        lines.append("")
        lines.append("### Suggested Improvements")
        for note in result.improvements:
            lines.append(f"- {note}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Category scorers
# ---------------------------------------------------------------------------


def _score_summary(summary: Optional[str]) -> Tuple[float, List[str]]:
    if summary is None:
        return 0, ["Add a professional summary highlighting your key strengths"]
    length = len(summary)
    low, high = SUMMARY_RANGE
    if low <= length <= high:
        return 20, []
    if length > SUMMARY_MIN:
        return 10, [f"Adjust professional summary length ({length} chars) to 100-400 characters"]
    return 0, ["Expand the professional summary into 2-4 sentences"]


def _score_competencies(competencies: Optional[str]) -> Tuple[float, List[str]]:
    bullets = competencies.count(BULLET) if competencies else 0
    if not bullets:
        return 0, ["Add a core competencies section with 8-15 bulleted skills"]
    low, high = COMPETENCY_RANGE
    if low <= bullets <= high:
        return 15, []
    return 8, [f"List 8-15 core competencies (currently {bullets})"]


def _score_experience(text: str) -> Tuple[float, List[str]]:
    verbs = count_action_verbs(text)
    quantified = count_quantified(text)
    notes: List[str] = []
    if verbs < TARGET_ACTION_VERBS:
        notes.append(f"Use more varied action verbs ({verbs} found, aim for 10+)")
    if quantified < TARGET_QUANTIFIED:
        notes.append(f"Quantify more achievements ({quantified} metrics found, aim for 5+)")
    return min(15, verbs * 1.5) + min(15, quantified * 3), notes


def _score_formatting(text: str) -> Tuple[float, List[str]]:
    points = 0.0
    if not _EXCESS_BLANKS_RE.search(text):
        points += 5
    if count_bullets(text) > 5:
        points += 5
    points += 2.5 * sum(1 for header in REQUIRED_HEADERS if header in text)
    points = min(points, CATEGORY_MAX["formatting"])
    if points < 15:
        return points, ["Improve formatting: standard headers, bullet points and consistent spacing"]
    return points, []


def _score_keywords(text: str, description: Optional[str]) -> Tuple[float, List[str]]:
    if not description:
        return DEFAULT_KEYWORD_SCORE, []
    keywords = extract_job_keywords(description)
    if not keywords:
        return 0, ["Job description has no usable keywords; describe the role in more detail"]
    lowered = text.lower()
    matched = [kw for kw in keywords if kw in lowered]
    points = round_half_up(15 * len(matched) / len(keywords))
    if points < 10:
        missing = [kw for kw in keywords if kw not in matched]
        return points, [f"Work in more keywords from the job description: {', '.join(missing[:8])}"]
    return points, []


def _description_of(job_context) -> Optional[str]:
    if job_context is None:
        return None
    return getattr(job_context, "description", None)
