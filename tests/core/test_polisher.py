"""Tests for the LLM polish collaborator."""

import pytest

from resume_editor.pipeline import JobContext
from resume_editor.polisher import POLISH_SYSTEM_PROMPT, LLMPolisher, build_user_prompt, strip_code_fences
from resume_editor.providers import LLMResponse


class _FakeProvider:
    def __init__(self, text: str, usage=None):
        self.text = text
        self.usage = usage
        self.calls = []

    async def generate(self, messages, config):
        self.calls.append((messages, config))
        return LLMResponse(text=self.text, usage=self.usage)


class TestLLMPolisher:
    @pytest.mark.asyncio
    async def test_single_call_with_generation_settings(self):
        provider = _FakeProvider("PROFESSIONAL SUMMARY\nPolished.", usage={"total_tokens": 42})
        polisher = LLMPolisher(provider)

        result = await polisher("PROFESSIONAL SUMMARY\nRaw.", JobContext(title="Data Engineer"))

        assert result == "PROFESSIONAL SUMMARY\nPolished."
        assert len(provider.calls) == 1
        messages, config = provider.calls[0]
        assert config.system_prompt == POLISH_SYSTEM_PROMPT
        assert config.temperature == 0.3
        assert config.max_tokens == 3000
        assert messages[0].role == "user"
        assert "PROFESSIONAL SUMMARY\nRaw." in messages[0].text
        assert "Target role: Data Engineer" in messages[0].text

    @pytest.mark.asyncio
    async def test_fenced_response_is_unwrapped(self):
        polisher = LLMPolisher(_FakeProvider("```text\nEDUCATION\nB.S. Physics\n```"))
        assert await polisher("EDUCATION\nBS Physics") == "EDUCATION\nB.S. Physics"


class TestPromptHelpers:
    def test_prompt_without_context_has_no_target_role(self):
        assert "Target role" not in build_user_prompt("text")
        assert "Target role" not in build_user_prompt("text", JobContext(description="SQL"))

    def test_strip_code_fences_leaves_plain_text(self):
        assert strip_code_fences("SKILLS\n• SQL\n") == "SKILLS\n• SQL"

    def test_system_prompt_states_structure_rules(self):
        assert "own line" in POLISH_SYSTEM_PROMPT
        assert "Never invent" in POLISH_SYSTEM_PROMPT
