from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from kb_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from kb_assistant.domain.errors import LLMError


@dataclass
class OpenAIChatAdapter(LLMPort):
    """Any OpenAI-compatible chat completions endpoint (OpenAI, vLLM, Ollama...)."""

    base_url: str | None = None  # None: the official OpenAI endpoint
    api_key: str = "EMPTY"
    model: str = "gpt-4o-mini"

    def __post_init__(self) -> None:
        # Defer import of OpenAI to chat() to avoid hard dependency in tests
        self._client: Any | None = None

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.7, max_tokens: int = 1024
    ) -> LLMResponse:
        try:
            if self._client is None:
                module = import_module("openai")
                self._client = module.OpenAI(base_url=self.base_url, api_key=self.api_key)
            payload: Any = [{"role": m.role, "content": m.content} for m in messages]
            resp: Any = self._client.chat.completions.create(
                model=self.model,
                messages=cast(Any, payload),
                temperature=temperature,
                max_tokens=max_tokens,
            )
            choice = resp.choices[0]
            usage = getattr(resp, "usage", None)
            return LLMResponse(
                text=choice.message.content or "",
                finish_reason=choice.finish_reason or "stop",
                usage_tokens=getattr(usage, "total_tokens", None),
            )
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            raise LLMError(f"LLM communication failed: {ex}") from ex
