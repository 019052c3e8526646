"""
Chat service for archetype conversations.

Plain chat forwards the conversation to the chat model with the default
system prompt. Enhanced chat first retrieves the closest knowledge base
chunks of an assessment or archetype and places them in the prompt.
Signed-in callers can also save the transcript under a conversation ID.

Dependencies: archmen.core.chat, archmen.application.services.knowledge_base_service
System role: Chat service orchestration layer
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.application.services.knowledge_base_service import KnowledgeBaseService
from archmen.boundary.db.CRUD.conversation_crud import conversation_crud
from archmen.boundary.db.CRUD.embedding_settings_crud import embedding_settings_crud
from archmen.boundary.db.CRUD.parent_crud import assessment_crud, parent_exists
from archmen.boundary.db.models.conversation_model import ConversationModel
from archmen.boundary.db.models.parent import ParentKind, ParentRef
from archmen.boundary.vdb.vector_schemas import SimilarityMatch
from archmen.configs.knowledge_base import KnowledgeBaseSettings
from archmen.core.chat.chat_orchestrator import ChatOrchestrator, ChatTurn
from archmen.core.exceptions import ConversationNotFoundError, ParentNotFoundError, ValidationError
from archmen.core.knowledge_base.embedding_generator import EmbeddingGenerator
from archmen.models.chat import ChatMessage

logger = logging.getLogger(__name__)

# Rough characters-per-token ratio used to keep retrieved context inside
# the configured context window.
CHARS_PER_TOKEN = 4


def split_conversation(messages: Sequence[ChatMessage]) -> tuple[list[ChatTurn], str]:
    """
    Separate earlier turns from the message being answered.

    Raises:
        ValidationError: When there are no messages or the last one is not from the user
    """
    if not messages:
        raise ValidationError("At least one message is required", field="messages")
    latest = messages[-1]
    if latest.role != "user":
        raise ValidationError("The last message must come from the user", field="messages")

    history = [ChatTurn(role=message.role, content=message.content) for message in messages[:-1]]
    return history, latest.content


def fit_context_window(matches: Sequence[SimilarityMatch], context_window: int) -> list[SimilarityMatch]:
    """Keep the highest-ranked matches whose combined text fits the window."""
    budget = context_window * CHARS_PER_TOKEN
    kept: list[SimilarityMatch] = []
    used = 0
    for match in matches:
        if used + len(match.content) > budget:
            break
        kept.append(match)
        used += len(match.content)
    return kept


class ChatService:
    """
    Chat service for conversational archetype exploration.

    Coordinates conversation validation, knowledge base retrieval and the
    chat-completion call.
    """

    def __init__(
        self,
        db: AsyncSession,
        orchestrator: ChatOrchestrator,
        embedding_generator: EmbeddingGenerator,
        kb_settings: KnowledgeBaseSettings,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            orchestrator: Shared chat orchestrator
            embedding_generator: Shared embedding generator for query vectors
            kb_settings: Retrieval threshold, count and context window defaults
        """
        self.db = db
        self.orchestrator = orchestrator
        self.kb_settings = kb_settings
        self.knowledge_base = KnowledgeBaseService(db, embedding_generator, kb_settings)

    async def chat(self, messages: Sequence[ChatMessage]) -> str:
        """
        Answer the last user message with the default system prompt.

        Raises:
            ValidationError: Empty conversation or blank message
            ChatCompletionError: Provider failure
        """
        history, user_message = split_conversation(messages)
        return await self.orchestrator.complete(history, user_message)

    async def enhanced_chat(
        self,
        messages: Sequence[ChatMessage],
        parent: ParentRef | None = None,
    ) -> tuple[str, list[SimilarityMatch]]:
        """
        Answer the last user message using the parent's knowledge base.

        Flow:
        1. Validate the conversation and the parent
        2. Skip retrieval when the parent disabled semantic search
        3. Embed the user message and search the parent's chunks
        4. Trim matches to the context window and complete

        Args:
            messages: Conversation, last message from the user
            parent: Assessment or archetype to ground on (plain chat if None)

        Returns:
            tuple[str, list[SimilarityMatch]]: Reply and the context that was used

        Raises:
            ValidationError: Empty conversation or blank message
            ParentNotFoundError: Parent does not exist
            EmbeddingError, SimilaritySearchError, ChatCompletionError: Provider failures
        """
        history, user_message = split_conversation(messages)
        if parent is None:
            return await self.orchestrator.complete(history, user_message), []

        if not user_message.strip():
            raise ValidationError("Message content is required", field="messages")

        system_prompt = None
        if parent.kind is ParentKind.ASSESSMENT:
            assessment = await assessment_crud.get_by_id(self.db, parent.id)
            if assessment is None:
                raise ParentNotFoundError(parent.kind.value, str(parent.id))
            system_prompt = assessment.system_prompt
        elif not await parent_exists(self.db, parent):
            raise ParentNotFoundError(parent.kind.value, str(parent.id))

        settings = await embedding_settings_crud.get_for_parent(self.db, parent)
        context: list[SimilarityMatch] = []

        if settings is None or settings.semantic_search_enabled:
            matches = await self.knowledge_base.search(
                parent,
                user_message,
                match_threshold=self.kb_settings.chat_match_threshold,
                match_count=self.kb_settings.chat_match_count,
                embedding_model=settings.embedding_model if settings else None,
            )
            context_window = settings.context_window if settings else self.kb_settings.context_window
            context = fit_context_window(matches, context_window)

        logger.info(
            f"{__name__}:enhanced_chat - retrieved context",
            extra={
                "parent_kind": parent.kind.value,
                "parent_id": str(parent.id),
                "context_chunks": len(context),
            },
        )

        reply = await self.orchestrator.complete(
            history,
            user_message,
            context=context,
            system_prompt=system_prompt,
        )
        return reply, context

    async def save_conversation(
        self,
        user_id: UUID,
        conversation_id: UUID,
        messages: Sequence[ChatMessage],
        reply: str,
        parent: ParentRef | None,
        context: Sequence[SimilarityMatch],
    ) -> ConversationModel:
        """
        Store the transcript under a client-chosen conversation ID.

        Re-sending the same ID overwrites the previous transcript, so the
        stored copy always ends with the latest reply.

        Raises:
            ConversationNotFoundError: The ID belongs to another user
        """
        transcript = [message.model_dump(include={"role", "content"}) for message in messages]
        transcript.append({"role": "assistant", "content": reply})

        conversation = await conversation_crud.upsert(
            self.db,
            conversation_id,
            user_id,
            messages=transcript,
            assessment_id=parent.id if parent and parent.kind is ParentKind.ASSESSMENT else None,
            archetype_id=parent.id if parent and parent.kind is ParentKind.ARCHETYPE else None,
            context_used=[match.model_dump(mode="json") for match in context],
        )
        if conversation is None:
            raise ConversationNotFoundError(str(conversation_id))
        await self.db.commit()

        logger.info(
            f"{__name__}:save_conversation - transcript stored",
            extra={"conversation_id": str(conversation_id), "messages": len(transcript)},
        )
        return conversation
