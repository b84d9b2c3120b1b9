# kb_assistant/application/use_cases/query_knowledge_base.py
from __future__ import annotations

import logging

from kb_assistant.application.dto.query_dto import QueryRequest, RAGAnswer
from kb_assistant.application.knowledge_base import KnowledgeBase
from kb_assistant.application.ports.llm_port import LLMPort
from kb_assistant.application.prompting import (
    NO_CONTEXT_INSTRUCTION,
    build_messages,
    render_context,
)
from kb_assistant.domain.errors import DomainError, LLMError, ValidationError
from kb_assistant.domain.services.ranking import select
from kb_assistant.domain.services.relevance_scoring import RetrievalParams
from kb_assistant.domain.types import Result

logger = logging.getLogger(__name__)


class QueryKnowledgeBase:
    """
    Application use case: pick grounding chunks for a question and ask the LLM.
    Uses only ports; handles errors via Result[T, E].
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        llm: LLMPort | None = None,
        params: RetrievalParams | None = None,
        history_window: int = 5,
        temperature: float = 0.7,
    ) -> None:
        self.knowledge_base = knowledge_base
        self.llm = llm
        self.params = params or RetrievalParams()
        self.history_window = history_window
        self.temperature = temperature

    def execute(self, req: QueryRequest) -> Result[RAGAnswer, DomainError]:
        # 1) Validate
        if not req.question or not req.question.strip():
            return Result.failure(ValidationError("question must not be empty"))
        if req.limit is not None and req.limit <= 0:
            return Result.failure(ValidationError("limit must be > 0"))

        # 2) Retrieve from one consistent snapshot
        chunks = select(req.question, self.knowledge_base.snapshot(), req.limit, self.params)

        # 3) Extractive fallback without an LLM
        if self.llm is None:
            text = render_context(chunks) if chunks else NO_CONTEXT_INSTRUCTION
            return Result.success(RAGAnswer(text=text, chunks=chunks))

        # 4) Generative answer
        messages = build_messages(req.question, chunks, req.history, self.history_window)
        try:
            resp = self.llm.chat(messages, temperature=self.temperature)
        except LLMError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            logger.exception("LLM call failed")
            return Result.failure(LLMError(f"llm generation failed: {ex}"))

        text = resp.text or "I'm sorry, I couldn't generate a response."
        return Result.success(RAGAnswer(text=text, chunks=chunks))
