"""Tests for LLM port protocol."""

from collections.abc import Sequence

from kb_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse


class FakeLLM:
    """Fake LLM adapter for testing."""

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.7, max_tokens: int = 1024
    ) -> LLMResponse:
        # Echo back the last user message
        last_user = next((m.content for m in reversed(messages) if m.role == "user"), "")
        return LLMResponse(text=f"Echo: {last_user}", finish_reason="stop", usage_tokens=10)


class TestLLMPort:
    def test_chat_message_creation(self) -> None:
        """ChatMessage should store role and content."""
        msg = ChatMessage(role="user", content="Hello")

        assert msg.role == "user"
        assert msg.content == "Hello"

    def test_llm_response_defaults(self) -> None:
        """LLMResponse should have sensible defaults."""
        resp = LLMResponse(text="Test")

        assert resp.text == "Test"
        assert resp.finish_reason == "stop"
        assert resp.usage_tokens is None

    def test_fake_llm_implements_protocol(self) -> None:
        """FakeLLM should satisfy LLMPort structurally."""
        llm: LLMPort = FakeLLM()
        messages = [
            ChatMessage(role="system", content="context"),
            ChatMessage(role="user", content="Test question"),
        ]

        response = llm.chat(messages)

        assert response.text == "Echo: Test question"
        assert response.usage_tokens == 10
