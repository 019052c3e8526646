"""
Chat orchestrator.

Assembles the fixed system prompt, optional retrieved context and the
conversation so far, then calls the chat-completion model once.
No retries: provider failures surface to the caller.

Dependencies: langchain_openai, langchain_core.messages
System role: Chat completion orchestration
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from archmen.boundary.vdb.vector_schemas import SimilarityMatch
from archmen.core.chat.prompts import format_context
from archmen.core.exceptions import ChatCompletionError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "I apologize, but I was unable to generate a response."

ChatModelFactory = Callable[[], BaseChatModel]


@dataclass(frozen=True)
class ChatTurn:
    """One message of a conversation."""

    role: str
    content: str


def to_langchain_message(turn: ChatTurn) -> BaseMessage:
    """
    Convert a role/content pair to a LangChain message.

    Raises:
        ValidationError: For roles other than user, assistant or system
    """
    if turn.role == "user":
        return HumanMessage(content=turn.content)
    if turn.role == "assistant":
        return AIMessage(content=turn.content)
    if turn.role == "system":
        return SystemMessage(content=turn.content)
    raise ValidationError(f"Unsupported message role: {turn.role}", field="role")


class ChatOrchestrator:
    """Single-shot chat completion with optional RAG context."""

    def __init__(
        self,
        system_prompt: str,
        model: str = "gpt-4-turbo-preview",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        api_key: str | None = None,
        fallback_response: str = DEFAULT_FALLBACK,
        chat_model_factory: ChatModelFactory | None = None,
    ) -> None:
        """
        Initialize orchestrator with model configuration.

        Args:
            system_prompt: Fixed system prompt sent first on every request
            model: Chat-completion model identifier
            temperature: Sampling temperature
            max_tokens: Completion token limit
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            fallback_response: Returned when the model produces no content
            chat_model_factory: Builds the LangChain chat model (tests inject fakes)
        """
        self.system_prompt = system_prompt
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.fallback_response = fallback_response
        self._api_key = api_key
        self._factory = chat_model_factory or self._build_chat_openai
        self._chat_model: BaseChatModel | None = None

    def _build_chat_openai(self) -> BaseChatModel:
        return ChatOpenAI(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            api_key=self._api_key,
        )

    @property
    def chat_model(self) -> BaseChatModel:
        """Lazily constructed chat model."""
        if self._chat_model is None:
            self._chat_model = self._factory()
        return self._chat_model

    def build_messages(
        self,
        history: Sequence[ChatTurn],
        user_message: str,
        context: Sequence[SimilarityMatch] = (),
        system_prompt: str | None = None,
    ) -> list[BaseMessage]:
        """
        Assemble the full message sequence for the model.

        Order: system prompt, retrieved context (when any), history, new user message.

        Args:
            history: Earlier conversation turns, oldest first
            user_message: The message being answered
            context: Retrieved knowledge base chunks
            system_prompt: Overrides the default prompt (assessment-specific prompts)

        Returns:
            list[BaseMessage]: Messages ready for the chat model
        """
        messages: list[BaseMessage] = [SystemMessage(content=system_prompt or self.system_prompt)]

        context_block = format_context(context)
        if context_block:
            messages.append(SystemMessage(content=context_block))

        messages.extend(to_langchain_message(turn) for turn in history)
        messages.append(HumanMessage(content=user_message))
        return messages

    async def complete(
        self,
        history: Sequence[ChatTurn],
        user_message: str,
        context: Sequence[SimilarityMatch] = (),
        system_prompt: str | None = None,
    ) -> str:
        """
        Generate the assistant reply.

        Args:
            history: Earlier conversation turns, oldest first
            user_message: The message being answered
            context: Retrieved knowledge base chunks
            system_prompt: Overrides the default prompt for this call

        Returns:
            str: Model text verbatim, or the fallback response when empty

        Raises:
            ValidationError: When the user message is blank
            ChatCompletionError: When the provider call fails
        """
        if not user_message or not user_message.strip():
            raise ValidationError("Message content is required", field="messages")

        messages = self.build_messages(history, user_message, context, system_prompt)

        try:
            response = await self.chat_model.ainvoke(messages)
        except Exception as e:
            logger.error(
                f"{__name__}:complete - chat completion failed: {type(e).__name__}: {e}"
            )
            raise ChatCompletionError(
                f"Chat completion failed: {e}",
                provider="openai",
                details={"model": self.model},
            ) from e

        content = response.content if isinstance(response.content, str) else ""
        logger.info(
            f"{__name__}:complete - reply generated",
            extra={
                "history_len": len(history),
                "context_chunks": len(context),
                "reply_chars": len(content),
            },
        )
        return content or self.fallback_response
