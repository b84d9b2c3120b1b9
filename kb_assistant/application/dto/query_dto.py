# kb_assistant/application/dto/query_dto.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from kb_assistant.application.ports.llm_port import ChatMessage
from kb_assistant.domain.models import Chunk, Citation


@dataclass(frozen=True)
class QueryRequest:
    """
    DTO for querying the knowledge base.

    - question: user question (non-empty)
    - history:  prior conversation turns, oldest first; only the most recent
                ones are forwarded to the LLM
    - limit:    max chunks in normal mode (None: configured default)
    """

    question: str
    history: Sequence[ChatMessage] = field(default_factory=tuple)
    limit: int | None = None


@dataclass(frozen=True)
class RAGAnswer:
    """Answer text plus the chunks it was grounded on."""

    text: str
    chunks: list[Chunk]

    @property
    def sources(self) -> list[str]:
        """Source names of the grounding chunks, first occurrence order."""
        return list(dict.fromkeys(c.source_name for c in self.chunks))

    @property
    def citations(self) -> list[Citation]:
        return [Citation(source=c.source_name, position=c.position) for c in self.chunks]
