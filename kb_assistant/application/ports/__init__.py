"""Application ports package."""

from kb_assistant.application.ports.document_loader_port import DocumentLoaderPort, DocumentPayload
from kb_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse

__all__ = [
    "DocumentLoaderPort",
    "DocumentPayload",
    "LLMPort",
    "ChatMessage",
    "LLMResponse",
]
