"""
Assessment chat history CRUD operations.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Assessment conversation persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.chat_history_model import AssessmentChatHistoryModel


class ChatHistoryCRUD(BaseCRUD[AssessmentChatHistoryModel]):
    """CRUD operations for AssessmentChatHistoryModel."""

    def __init__(self) -> None:
        super().__init__(AssessmentChatHistoryModel)

    async def list_for_session(
        self,
        session: AsyncSession,
        assessment_session_id: UUID,
    ) -> Sequence[AssessmentChatHistoryModel]:
        """Return the session's messages ordered by message_index ascending."""
        stmt = (
            select(AssessmentChatHistoryModel)
            .where(AssessmentChatHistoryModel.assessment_session_id == assessment_session_id)
            .order_by(AssessmentChatHistoryModel.message_index.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def index_taken(
        self,
        session: AsyncSession,
        assessment_session_id: UUID,
        message_index: int,
    ) -> bool:
        stmt = select(AssessmentChatHistoryModel.id).where(
            AssessmentChatHistoryModel.assessment_session_id == assessment_session_id,
            AssessmentChatHistoryModel.message_index == message_index,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None


chat_history_crud = ChatHistoryCRUD()
