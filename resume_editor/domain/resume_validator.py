"""Pure domain logic for resume format validation.

All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from .headers import REQUIRED_HEADERS
from .issues import Issue, Severity

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

# Anything outside word characters, whitespace and this punctuation/bullet set.
_PROBLEM_CHARS_RE = re.compile(r"[^\w\s\-.,():;'\"!?@#$%&*+=/\\|•]")

MAX_SPECIAL_CHARS = 5
MAX_LINE_LENGTH = 120


@dataclass
class ValidationResult:
    """Structured result from resume validation."""

    issues: List[Issue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.is_error for i in self.issues)

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.is_error]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if not i.is_error]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_resume(content: str) -> ValidationResult:
    """Validate resume *content* against the plain-text formatting contract.

    Every check runs regardless of earlier failures.  Errors come first
    (required sections, then contact details), warnings after.
    """
    errors: List[Issue] = []
    errors.extend(_check_required_sections(content))
    errors.extend(_check_contact(content))

    warnings: List[Issue] = []
    warnings.extend(_check_special_characters(content))
    warnings.extend(_check_line_length(content))

    return ValidationResult(issues=errors + warnings)


def has_email(text: str) -> bool:
    return EMAIL_RE.search(text) is not None


def has_phone(text: str) -> bool:
    return PHONE_RE.search(text) is not None


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_validation_report(result: ValidationResult) -> str:
    """Render a :class:`ValidationResult` as a human-readable report."""
    status = "FAIL" if result.has_errors else "PASS"
    lines = [f"## Validation: {status}", ""]

    if result.errors:
        lines.append("### Errors")
        for e in result.errors:
            lines.append(f"- {e.message} (fix: {e.fix})")
        lines.append("")

    if result.warnings:
        lines.append("### Warnings")
        for w in result.warnings:
            lines.append(f"- {w.message} (fix: {w.fix})")
        lines.append("")

    if not result.issues:
        lines.append("No issues found. Resume follows the formatting contract.")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private checks
# ---------------------------------------------------------------------------


def _check_required_sections(content: str) -> List[Issue]:
    issues: List[Issue] = []
    for header in REQUIRED_HEADERS:
        if header not in content:
            issues.append(
                Issue(
                    severity=Severity.ERROR,
                    message=f"Missing required section: {header}",
                    fix=f"Add {header} section",
                )
            )
    return issues


def _check_contact(content: str) -> List[Issue]:
    issues: List[Issue] = []
    if not has_email(content):
        issues.append(
            Issue(severity=Severity.ERROR, message="Missing email address", fix="Add email in contact section")
        )
    if not has_phone(content):
        issues.append(
            Issue(severity=Severity.ERROR, message="Missing phone number", fix="Add phone number in contact section")
        )
    return issues


def _check_special_characters(content: str) -> List[Issue]:
    matches = _PROBLEM_CHARS_RE.findall(content)
    if len(matches) <= MAX_SPECIAL_CHARS:
        return []
    return [
        Issue(
            severity=Severity.WARNING,
            message=f"Found {len(matches)} special characters that may cause ATS issues",
            fix="Remove or replace special characters with standard ones",
        )
    ]


def _check_line_length(content: str) -> List[Issue]:
    long_lines = [line for line in content.split("\n") if len(line) > MAX_LINE_LENGTH]
    if not long_lines:
        return []
    return [
        Issue(
            severity=Severity.WARNING,
            message=f"{len(long_lines)} lines exceed {MAX_LINE_LENGTH} characters",
            fix="Break long lines into multiple shorter lines",
        )
    ]
