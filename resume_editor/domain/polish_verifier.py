"""Verification of text returned by the content-polish collaborator.

The collaborator is free to rewrite wording but is not trusted to keep the
resume's structure.  Any rule violation discards the rewrite and hands back
the pre-polish text unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from .headers import BULLET, HEADER_TOKENS, header_pattern
from .resume_normalizer import isolate_headers

MIN_BULLET_RATIO = 0.8

_BULLET_LINE_RE = re.compile(r"^" + re.escape(BULLET), re.MULTILINE)
_EXPERIENCE = "PROFESSIONAL EXPERIENCE"
_EDUCATION = "EDUCATION"


@dataclass(frozen=True)
class PolishVerdict:
    """Outcome of checking one rewrite."""

    text: str
    accepted: bool
    reason: str = ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def verify_polish(pre_text: str, post_text: str) -> str:
    """Return the repaired *post_text*, or *pre_text* if the rewrite is rejected."""
    return inspect_polish(pre_text, post_text).text


def inspect_polish(pre_text: str, post_text: str) -> PolishVerdict:
    """Like :func:`verify_polish` but also reports why a rewrite was rejected."""
    for rule in _REJECTION_RULES:
        reason = rule(pre_text, post_text)
        if reason:
            return PolishVerdict(text=pre_text, accepted=False, reason=reason)
    return PolishVerdict(text=_repair(post_text), accepted=True)


def count_bullets(text: str) -> int:
    """Number of lines that start with the canonical bullet glyph."""
    return len(_BULLET_LINE_RE.findall(text))


# ---------------------------------------------------------------------------
# Rejection rules (evaluated in order, first hit wins)
# ---------------------------------------------------------------------------


def _dropped_bullets(pre_text: str, post_text: str) -> Optional[str]:
    before = count_bullets(pre_text)
    after = count_bullets(post_text)
    if after < before * MIN_BULLET_RATIO:
        return f"collaborator dropped bullets ({after}/{before})"
    return None


def _collapsed_spacing(pre_text: str, post_text: str) -> Optional[str]:
    if "\n\n" not in post_text:
        return "collaborator removed all blank lines between sections"
    return None


def _merged_bullets(pre_text: str, post_text: str) -> Optional[str]:
    if BULLET + " " in post_text and "\n" + BULLET + " " not in post_text:
        return "collaborator merged bullet points onto one line"
    return None


def _broken_section_order(pre_text: str, post_text: str) -> Optional[str]:
    experience = header_pattern(_EXPERIENCE).search(post_text)
    education = header_pattern(_EDUCATION).search(post_text)
    if not experience or not education:
        return None
    if education.start() < experience.start():
        return "collaborator moved EDUCATION before PROFESSIONAL EXPERIENCE"
    if "\n\n" not in post_text[experience.start():education.start()]:
        return "collaborator merged EDUCATION into PROFESSIONAL EXPERIENCE"
    return None


_REJECTION_RULES: List[Callable[[str, str], Optional[str]]] = [
    _dropped_bullets,
    _collapsed_spacing,
    _merged_bullets,
    _broken_section_order,
]


# ---------------------------------------------------------------------------
# Repair pass
# ---------------------------------------------------------------------------


def _repair(text: str) -> str:
    for token in HEADER_TOKENS:
        text = _drop_duplicate_headers(text, token)
    return isolate_headers(text)


def _drop_duplicate_headers(text: str, token: str) -> str:
    """Delete every occurrence of *token* after the first one."""
    matches = list(header_pattern(token).finditer(text))
    if len(matches) < 2:
        return text

    # Walk backwards so earlier offsets stay valid
    for match in reversed(matches[1:]):
        line_start = text.rfind("\n", 0, match.start()) + 1
        line_end = text.find("\n", match.end())
        if line_end == -1:
            line_end = len(text)
        remainder = (text[line_start:match.start()] + text[match.end():line_end]).strip(" \t:")
        if remainder:
            before = text[: match.start()].rstrip(" \t")
            after = text[match.end():].lstrip(" \t:")
            glue = " " if before and after and not before.endswith("\n") and not after.startswith("\n") else ""
            text = before + glue + after
        else:
            # The header had the line to itself: drop the whole line
            text = text[:line_start] + text[line_end + 1:]
    return text
