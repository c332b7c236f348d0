"""Resume Editor Domain - Pure domain logic for resume structure.

This package contains pure functions with no file system or LLM dependencies.
All I/O is handled by the pipeline and tools layers; this package operates on strings.
"""

from .ats_scorer import ACTION_VERBS, ATSScoreResult, count_action_verbs, count_quantified, format_ats_report, score_ats
from .headers import (
    BULLET,
    CANONICAL_SECTIONS,
    CONTACT,
    HEADER_ALIASES,
    HEADER_TOKENS,
    REQUIRED_HEADERS,
    resolve_header,
)
from .issues import Issue, Severity
from .polish_verifier import PolishVerdict, count_bullets, inspect_polish, verify_polish
from .quality_scorer import QualityScoreResult, extract_job_keywords, format_quality_report, score_quality
from .report import format_pipeline_report, get_recommendation, is_passing
from .resume_normalizer import isolate_headers, normalize_resume
from .resume_parser import SectionMap, parse_sections, section_lines
from .resume_validator import ValidationResult, format_validation_report, validate_resume

__all__ = [
    # Headers
    "BULLET",
    "CANONICAL_SECTIONS",
    "CONTACT",
    "HEADER_ALIASES",
    "HEADER_TOKENS",
    "REQUIRED_HEADERS",
    "resolve_header",
    # Issues
    "Issue",
    "Severity",
    # Validator
    "validate_resume",
    "ValidationResult",
    "format_validation_report",
    # Normalizer
    "normalize_resume",
    "isolate_headers",
    # Polish Verifier
    "verify_polish",
    "inspect_polish",
    "PolishVerdict",
    "count_bullets",
    # Parser
    "parse_sections",
    "section_lines",
    "SectionMap",
    # ATS Scorer
    "score_ats",
    "ATSScoreResult",
    "ACTION_VERBS",
    "count_action_verbs",
    "count_quantified",
    "format_ats_report",
    # Quality Scorer
    "score_quality",
    "QualityScoreResult",
    "extract_job_keywords",
    "format_quality_report",
    # Report
    "get_recommendation",
    "format_pipeline_report",
    "is_passing",
]
