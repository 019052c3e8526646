"""
Assessment chat history service.

Reads and appends the message log of an assessment session. Only the
session's owner can see or extend it; other users get the same not-found
error as for a missing session.

Dependencies: archmen.boundary.db.CRUD
System role: Assessment conversation use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.assessment_session_crud import assessment_session_crud
from archmen.boundary.db.CRUD.chat_history_crud import chat_history_crud
from archmen.boundary.db.models.chat_history_model import AssessmentChatHistoryModel
from archmen.core.assessment.message_types import ChatMessageType
from archmen.core.exceptions import (
    DuplicateMessageIndexError,
    SessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ChatHistoryService:
    """Owner-scoped access to assessment session chat logs."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _require_owned_session(self, user_id: UUID, assessment_session_id: UUID) -> None:
        session = await assessment_session_crud.get_for_user(self.db, assessment_session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(assessment_session_id))

    async def list_messages(
        self,
        user_id: UUID,
        assessment_session_id: UUID,
    ) -> list[AssessmentChatHistoryModel]:
        """
        Return the log in message_index order.

        Raises:
            SessionNotFoundError: Missing session or owned by another user
        """
        await self._require_owned_session(user_id, assessment_session_id)
        return list(await chat_history_crud.list_for_session(self.db, assessment_session_id))

    async def add_message(
        self,
        user_id: UUID,
        assessment_session_id: UUID,
        message_type: ChatMessageType,
        content: str,
        message_index: int,
    ) -> AssessmentChatHistoryModel:
        """
        Append one message to the session's log.

        Args:
            user_id: Signed-in user; must own the session
            assessment_session_id: Session being logged
            message_type: question, answer, system or follow_up
            content: Message text
            message_index: Position in the log, unique within the session

        Returns:
            AssessmentChatHistoryModel: Stored message

        Raises:
            ValidationError: Blank content or negative index
            SessionNotFoundError: Missing session or owned by another user
            DuplicateMessageIndexError: The index is already recorded
        """
        if not content.strip():
            raise ValidationError("Message content is required", field="content")
        if message_index < 0:
            raise ValidationError("Message index cannot be negative", field="messageIndex")

        await self._require_owned_session(user_id, assessment_session_id)
        if await chat_history_crud.index_taken(self.db, assessment_session_id, message_index):
            raise DuplicateMessageIndexError(str(assessment_session_id), message_index)

        message = await chat_history_crud.create(
            self.db,
            assessment_session_id=assessment_session_id,
            user_id=user_id,
            message_type=ChatMessageType(message_type),
            content=content,
            message_index=message_index,
        )
        await self.db.commit()

        logger.debug(
            f"{__name__}:add_message - message stored",
            extra={"session_id": str(assessment_session_id), "message_index": message_index},
        )
        return message
