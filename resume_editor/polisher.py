"""LLM-backed content-polish collaborator.

The polisher only rewrites wording.  Its output is untrusted: the pipeline
verifies it with :func:`resume_editor.domain.verify_polish` before use.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .config import EditorConfig
from .providers import ChatProvider, GenerationConfig, Message, create_provider

logger = logging.getLogger(__name__)

POLISH_SYSTEM_PROMPT = """You are a resume copy editor. You improve grammar, tone and clarity of plain-text resumes.

STRUCTURE RULES (must be followed exactly):
- Keep every section header exactly as written, in uppercase, on its own line.
- Keep one blank line between sections.
- Keep the section order unchanged.
- Keep every bullet point on its own line, starting with "• ".
- Do not merge, drop or add bullet points.
- Do not add Markdown, tables, columns or code fences.

CONTENT RULES:
- Never invent employers, dates, degrees, metrics or achievements.
- Prefer strong action verbs and keep existing numbers intact.
- Keep the contact block at the top unchanged.

Return only the edited resume text."""

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$")


class LLMPolisher:
    """Rewrites resume wording through a chat provider, one call per resume."""

    def __init__(
        self,
        provider: ChatProvider,
        temperature: float = 0.3,
        max_tokens: int = 3000,
    ):
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: EditorConfig) -> "LLMPolisher":
        provider = create_provider(
            provider=config.provider,
            api_key=config.api_key,
            model=config.model,
            api_base=config.api_base,
        )
        return cls(provider, temperature=config.temperature, max_tokens=config.max_tokens)

    async def __call__(self, text: str, job_context=None) -> str:
        response = await self.provider.generate(
            [Message.user(build_user_prompt(text, job_context))],
            GenerationConfig(
                system_prompt=POLISH_SYSTEM_PROMPT,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            ),
        )
        if response.usage:
            logger.info("Polish used %d tokens", response.usage.get("total_tokens", 0))
        return strip_code_fences(response.text)


def build_user_prompt(text: str, job_context=None) -> str:
    prompt = f"Polish the wording of this resume:\n\n{text}"
    title: Optional[str] = getattr(job_context, "title", None) if job_context is not None else None
    if title:
        prompt += f"\n\nTarget role: {title}"
    return prompt


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole response."""
    return _FENCE_RE.sub("", text.strip()).strip("\n")
