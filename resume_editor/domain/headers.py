"""Canonical resume section headers and the alias table shared by every stage.

The normalizer, verifier and scorers look for the literal uppercase header
tokens; the section parser resolves free-form header lines through
:data:`HEADER_ALIASES`.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BULLET = "•"

CONTACT = "Contact"
PROFESSIONAL_SUMMARY = "Professional Summary"
CORE_COMPETENCIES = "Core Competencies"
PROFESSIONAL_EXPERIENCE = "Professional Experience"
EDUCATION = "Education"
CERTIFICATIONS = "Certifications"
KEY_ACHIEVEMENTS = "Key Achievements"

CANONICAL_SECTIONS: Tuple[str, ...] = (
    CONTACT,
    PROFESSIONAL_SUMMARY,
    CORE_COMPETENCIES,
    PROFESSIONAL_EXPERIENCE,
    EDUCATION,
    CERTIFICATIONS,
    KEY_ACHIEVEMENTS,
)

# Literal uppercase token for every canonical section except Contact.
HEADER_TOKENS: Dict[str, str] = {
    "PROFESSIONAL SUMMARY": PROFESSIONAL_SUMMARY,
    "CORE COMPETENCIES": CORE_COMPETENCIES,
    "PROFESSIONAL EXPERIENCE": PROFESSIONAL_EXPERIENCE,
    "EDUCATION": EDUCATION,
    "CERTIFICATIONS": CERTIFICATIONS,
    "KEY ACHIEVEMENTS": KEY_ACHIEVEMENTS,
}

REQUIRED_HEADERS: Tuple[str, ...] = (
    "PROFESSIONAL SUMMARY",
    "CORE COMPETENCIES",
    "PROFESSIONAL EXPERIENCE",
    "EDUCATION",
)

# Uppercased alias -> canonical section name.
HEADER_ALIASES: Dict[str, str] = {
    "PROFESSIONAL SUMMARY": PROFESSIONAL_SUMMARY,
    "SUMMARY": PROFESSIONAL_SUMMARY,
    "CAREER SUMMARY": PROFESSIONAL_SUMMARY,
    "CORE COMPETENCIES": CORE_COMPETENCIES,
    "SKILLS": CORE_COMPETENCIES,
    "KEY SKILLS": CORE_COMPETENCIES,
    "TECHNICAL SKILLS": CORE_COMPETENCIES,
    "PROFESSIONAL EXPERIENCE": PROFESSIONAL_EXPERIENCE,
    "WORK EXPERIENCE": PROFESSIONAL_EXPERIENCE,
    "EXPERIENCE": PROFESSIONAL_EXPERIENCE,
    "EMPLOYMENT HISTORY": PROFESSIONAL_EXPERIENCE,
    "EDUCATION": EDUCATION,
    "EDUCATION & CREDENTIALS": EDUCATION,
    "EDUCATION AND CREDENTIALS": EDUCATION,
    "CERTIFICATIONS": CERTIFICATIONS,
    "CERTIFICATES": CERTIFICATIONS,
    "PROFESSIONAL CREDENTIALS": CERTIFICATIONS,
    "LICENSES & CERTIFICATIONS": CERTIFICATIONS,
    "KEY ACHIEVEMENTS": KEY_ACHIEVEMENTS,
    "ACHIEVEMENTS": KEY_ACHIEVEMENTS,
}

# Longest alias first so "EDUCATION & CREDENTIALS" wins over "EDUCATION".
_ALIASES_BY_LENGTH: List[str] = sorted(HEADER_ALIASES, key=len, reverse=True)

_TOKEN_RE = re.compile(
    r"(?<![A-Z])(" + "|".join(re.escape(t) for t in sorted(HEADER_TOKENS, key=len, reverse=True)) + r")(?![A-Z])"
)
_SEPARATOR_RE = re.compile(r"^([=\-_*~#])\1{9,}$")
_QUALIFIER_CHARS = ":&|-–—(/"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def header_pattern(token: str) -> re.Pattern:
    """Regex for one literal header *token* not embedded in a longer uppercase word."""
    return re.compile(r"(?<![A-Z])" + re.escape(token) + r"(?![A-Z])")


def find_header_tokens(text: str) -> List[re.Match]:
    """All literal header token occurrences in *text*, in textual order."""
    return list(_TOKEN_RE.finditer(text))


def is_separator_line(line: str) -> bool:
    """True for underline rows such as ``==========`` (10+ repeated characters)."""
    return bool(_SEPARATOR_RE.match(line.strip()))


def resolve_header(line: str, underlined: bool = False) -> Optional[Tuple[str, str]]:
    """Resolve a header line to ``(canonical_name, inline_remainder)``.

    A line resolves when it equals an alias, or starts with an alias followed
    by a qualifier (``EDUCATION & CREDENTIALS``, ``Skills: Python``).  When the
    line is *underlined* by a separator row, an alias anywhere in the line is
    enough.  Matching is case-insensitive.  Returns ``None`` for content lines.
    """
    stripped = line.strip()
    upper = stripped.upper()
    if not upper:
        return None

    bare = upper.rstrip(":").strip()
    if bare in HEADER_ALIASES:
        return HEADER_ALIASES[bare], ""

    for alias in _ALIASES_BY_LENGTH:
        if stripped[: len(alias)].upper() != alias:
            continue
        rest = stripped[len(alias):].lstrip()
        if not rest:
            return HEADER_ALIASES[alias], ""
        if rest[0] not in _QUALIFIER_CHARS:
            continue
        if rest[0] == "&":
            # "EDUCATION & CREDENTIALS": the qualifier is part of the header
            return HEADER_ALIASES[alias], ""
        if rest[0] == "(":
            return HEADER_ALIASES[alias], rest
        return HEADER_ALIASES[alias], rest.lstrip(_QUALIFIER_CHARS).strip()

    if underlined:
        for alias in _ALIASES_BY_LENGTH:
            if re.search(r"\b" + re.escape(alias) + r"\b", upper):
                return HEADER_ALIASES[alias], ""

    return None


def is_isolated_header_line(line: str) -> bool:
    """True when *line* holds nothing but a header (token or alias, optional colon)."""
    bare = line.strip().rstrip(":").strip()
    return bare in HEADER_TOKENS or bare in HEADER_ALIASES
