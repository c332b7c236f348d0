"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest

GOOD_RESUME = """\
Jane Doe
jane.doe@example.com | (555) 123-4567
Austin, TX

PROFESSIONAL SUMMARY
Operations manager with 8 years of experience leading cross-functional teams.
Known for streamlining processes and delivering measurable cost savings.

CORE COMPETENCIES
• Process Improvement
• Team Leadership
• Budget Management
• Vendor Relations
• Data Analysis
• Project Planning
• Quality Assurance
• Customer Success

PROFESSIONAL EXPERIENCE
Operations Manager | Acme Corp | 2019 - Present
• Led a team of 12 analysts across 3 regions
• Reduced processing costs by 25% through automation
• Streamlined vendor onboarding, cutting cycle time by 40%
• Managed a $2M annual budget and delivered 15 projects on schedule

Operations Analyst | Beta LLC | 2015 - 2019
• Analyzed fulfillment data for 200+ customers
• Developed reporting dashboards adopted by 4 departments
• Improved order accuracy by 18% in 6 months
• Coordinated audits and resolved compliance findings
• Supported launch of 2 new distribution centers
• Created onboarding guides for new hires

EDUCATION
B.S. Business Administration | University of Texas | 2015

CERTIFICATIONS
• Lean Six Sigma Green Belt
"""


@pytest.fixture
def good_resume() -> str:
    return GOOD_RESUME


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear provider API keys that can leak into tests on developer machines."""
    for key in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
        "GLM_API_KEY",
        "MINIMAX_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)
