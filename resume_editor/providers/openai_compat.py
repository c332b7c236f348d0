"""OpenAI-compatible provider implementation."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from .types import GenerationConfig, LLMResponse, Message


class OpenAICompatibleProvider:
    """Provider for OpenAI-compatible chat APIs (OpenAI, DeepSeek, Kimi, GLM, MiniMax)."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
    ) -> None:
        self.model = model
        self.api_base = api_base or ""
        self.client = AsyncOpenAI(api_key=api_key, base_url=api_base or None)
        self._forced_temperature: Optional[float] = None

    async def generate(
        self,
        messages: List[Message],
        config: GenerationConfig,
    ) -> LLMResponse:
        kwargs = self._build_chat_kwargs(self._to_openai_messages(messages, config.system_prompt), config)
        completion = await self._create_with_temperature_retry(kwargs)
        return self._from_openai_completion(completion)

    def _build_chat_kwargs(self, messages: List[Dict[str, Any]], config: GenerationConfig) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if config.max_tokens and config.max_tokens > 0:
            kwargs["max_tokens"] = config.max_tokens
        temperature = self._forced_temperature if self._forced_temperature is not None else config.temperature
        if temperature is not None:
            kwargs["temperature"] = temperature
        return kwargs

    async def _create_with_temperature_retry(self, kwargs: Dict[str, Any]):
        try:
            return await self.client.chat.completions.create(**kwargs)
        except Exception as error:
            allowed = self._extract_allowed_temperature(error)
            current = kwargs.get("temperature")
            if allowed is None or current == allowed:
                raise

            retry_kwargs = dict(kwargs)
            retry_kwargs["temperature"] = allowed
            self._forced_temperature = allowed
            return await self.client.chat.completions.create(**retry_kwargs)

    def _extract_allowed_temperature(self, error: Exception) -> Optional[float]:
        message = str(error).lower()
        if "invalid temperature" not in message:
            return None

        # Example: "invalid temperature: only 0.6 is allowed for this model"
        match = re.search(r"only\s+([0-9]+(?:\.[0-9]+)?)\s+is allowed", message)
        if not match:
            return None
        return float(match.group(1))

    def _to_openai_messages(self, messages: List[Message], system_prompt: str) -> List[Dict[str, Any]]:
        result: List[Dict[str, Any]] = []
        if system_prompt:
            result.append({"role": "system", "content": system_prompt})
        for msg in messages:
            role = "assistant" if msg.role == "assistant" else "user"
            result.append({"role": role, "content": msg.text})
        return result

    def _from_openai_completion(self, completion) -> LLMResponse:
        if not completion.choices:
            raise RuntimeError("Empty LLM response: no choices")

        message = completion.choices[0].message
        text = self._normalize_message_content(getattr(message, "content", ""))

        usage_data = getattr(completion, "usage", None)
        usage = None
        if usage_data:
            usage = {
                "prompt_tokens": int(getattr(usage_data, "prompt_tokens", 0) or 0),
                "completion_tokens": int(getattr(usage_data, "completion_tokens", 0) or 0),
                "total_tokens": int(getattr(usage_data, "total_tokens", 0) or 0),
            }

        return LLMResponse(text=text, usage=usage, raw=completion)

    def _normalize_message_content(self, content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            chunks: List[str] = []
            for item in content:
                if isinstance(item, str):
                    chunks.append(item)
                elif isinstance(item, dict):
                    chunks.append(str(item.get("text", "")))
                else:
                    chunks.append(str(getattr(item, "text", "") or ""))
            return "".join(chunks)
        return str(content)
