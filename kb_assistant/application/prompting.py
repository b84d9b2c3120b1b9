"""Prompt assembly for the answer-generation step."""

from __future__ import annotations

from collections.abc import Sequence

from kb_assistant.application.ports.llm_port import ChatMessage
from kb_assistant.domain.models import Chunk

NO_CONTEXT_INSTRUCTION = (
    "No specific document context found. Answer from your general knowledge but "
    "mention that no relevant document sections were found."
)


def render_context(chunks: Sequence[Chunk]) -> str:
    """``[From <source>]: <content>`` blocks separated by blank lines."""
    return "\n\n".join(f"[From {c.source_name}]: {c.content}" for c in chunks)


def build_system_instruction(chunks: Sequence[Chunk]) -> str:
    if chunks:
        context = (
            "Use the following context to answer the user question. If the answer is not "
            "in the context, say you don't know based on the documents.\n\n"
            f"CONTEXT:\n{render_context(chunks)}"
        )
    else:
        context = NO_CONTEXT_INSTRUCTION
    return (
        "You are a helpful AI assistant.\n"
        "You have access to a knowledge base of uploaded documents.\n"
        f"{context}\n\n"
        "Always be concise, accurate, and citation-friendly. Use markdown for formatting."
    )


def build_messages(
    question: str,
    chunks: Sequence[Chunk],
    history: Sequence[ChatMessage] = (),
    history_window: int = 5,
) -> list[ChatMessage]:
    """System instruction, the last ``history_window`` turns, then the question.

    System turns from the history are not replayed.
    """
    recent = list(history)[-history_window:] if history_window > 0 else []
    messages = [ChatMessage(role="system", content=build_system_instruction(chunks))]
    messages.extend(
        ChatMessage(role="user" if m.role == "user" else "assistant", content=m.content)
        for m in recent
        if m.role != "system"
    )
    messages.append(ChatMessage(role="user", content=question))
    return messages
