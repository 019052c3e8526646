"""
Test suite for ChatOrchestrator.

Uses fake LangChain chat models; no provider calls are made.

System role: Verification of chat message assembly and completion
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from archmen.boundary.vdb.vector_schemas import SimilarityMatch
from archmen.core.chat.chat_orchestrator import (
    DEFAULT_FALLBACK,
    ChatOrchestrator,
    ChatTurn,
    to_langchain_message,
)
from archmen.core.chat.prompts import CONTEXT_HEADER, format_context
from archmen.core.exceptions import ChatCompletionError, ValidationError


def make_match(content: str, similarity: float) -> SimilarityMatch:
    return SimilarityMatch(chunk_id=uuid.uuid4(), chunk_index=0, content=content, similarity=similarity)


@pytest.fixture
def fake_model() -> MagicMock:
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="The Warrior sets boundaries."))
    return model


@pytest.fixture
def orchestrator(fake_model: MagicMock) -> ChatOrchestrator:
    return ChatOrchestrator(
        system_prompt="You are an archetype guide.",
        chat_model_factory=lambda: fake_model,
    )


class TestBuildMessages:
    def test_order_without_context(self, orchestrator: ChatOrchestrator) -> None:
        history = [ChatTurn("user", "Hi"), ChatTurn("assistant", "Hello")]

        messages = orchestrator.build_messages(history, "Who am I?")

        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert messages[0].content == "You are an archetype guide."
        assert messages[-1].content == "Who am I?"

    def test_context_goes_after_system_prompt(self, orchestrator: ChatOrchestrator) -> None:
        context = [make_match("The King orders the realm.", 0.91)]

        messages = orchestrator.build_messages([], "Tell me about the King", context)

        assert isinstance(messages[1], SystemMessage)
        assert messages[1].content.startswith(CONTEXT_HEADER)
        assert "The King orders the realm." in messages[1].content
        assert isinstance(messages[2], HumanMessage)

    def test_system_prompt_override(self, orchestrator: ChatOrchestrator) -> None:
        messages = orchestrator.build_messages([], "Hi", system_prompt="Assessment interviewer")

        assert messages[0].content == "Assessment interviewer"

    def test_unknown_role_raises(self) -> None:
        with pytest.raises(ValidationError):
            to_langchain_message(ChatTurn("tool", "result"))


class TestComplete:
    @pytest.mark.asyncio
    async def test_returns_model_text_verbatim(self, orchestrator: ChatOrchestrator, fake_model: MagicMock) -> None:
        reply = await orchestrator.complete([], "What is my shadow?")

        assert reply == "The Warrior sets boundaries."
        fake_model.ainvoke.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_content_returns_fallback(self, orchestrator: ChatOrchestrator, fake_model: MagicMock) -> None:
        fake_model.ainvoke.return_value = AIMessage(content="")

        assert await orchestrator.complete([], "Hello") == DEFAULT_FALLBACK

    @pytest.mark.asyncio
    async def test_provider_error_is_wrapped_without_retry(
        self,
        orchestrator: ChatOrchestrator,
        fake_model: MagicMock,
    ) -> None:
        fake_model.ainvoke.side_effect = RuntimeError("503 overloaded")

        with pytest.raises(ChatCompletionError):
            await orchestrator.complete([], "Hello")

        assert fake_model.ainvoke.await_count == 1

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, orchestrator: ChatOrchestrator, fake_model: MagicMock) -> None:
        with pytest.raises(ValidationError):
            await orchestrator.complete([], "   ")

        fake_model.ainvoke.assert_not_awaited()

    def test_chat_model_built_lazily_once(self) -> None:
        built = []
        orchestrator = ChatOrchestrator(
            system_prompt="p",
            chat_model_factory=lambda: built.append(1) or MagicMock(),
        )

        assert built == []
        orchestrator.chat_model
        orchestrator.chat_model
        assert built == [1]


class TestFormatContext:
    def test_empty_matches_render_nothing(self) -> None:
        assert format_context([]) == ""

    def test_numbered_excerpts_with_similarity(self) -> None:
        rendered = format_context([make_match("first", 0.9), make_match("second", 0.75)])

        assert "[1] (similarity 0.90)\nfirst" in rendered
        assert "[2] (similarity 0.75)\nsecond" in rendered
