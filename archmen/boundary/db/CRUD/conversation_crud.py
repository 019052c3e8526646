"""
Conversation CRUD operations.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Chat transcript persistence
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.conversation_model import ConversationModel


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """CRUD operations for ConversationModel."""

    def __init__(self) -> None:
        super().__init__(ConversationModel)

    async def upsert(
        self,
        session: AsyncSession,
        conversation_id: UUID,
        user_id: UUID,
        **values,
    ) -> ConversationModel | None:
        """
        Insert the conversation or overwrite the stored one.

        Returns:
            The saved row, or None when the ID belongs to another user
        """
        existing = await self.get_by_id(session, conversation_id)
        if existing is None:
            return await self.create(session, id=conversation_id, user_id=user_id, **values)
        if existing.user_id != user_id:
            return None
        return await self.update_by_id(session, conversation_id, **values)


conversation_crud = ConversationCRUD()
