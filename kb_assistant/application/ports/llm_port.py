from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class LLMResponse:
    text: str
    finish_reason: str = "stop"
    usage_tokens: int | None = None


class LLMPort(Protocol):
    """Answer-generation collaborator.

    Receives the system instruction (with the rendered document context),
    the recent conversation turns and the user question as chat messages.
    """

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.7, max_tokens: int = 1024
    ) -> LLMResponse: ...
