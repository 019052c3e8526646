"""
Assessment session CRUD operations.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Assessment progress persistence
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.assessment_session_model import (
    AssessmentSessionModel,
    SessionStatus,
)


class AssessmentSessionCRUD(BaseCRUD[AssessmentSessionModel]):
    """CRUD operations for AssessmentSessionModel, scoped per user."""

    def __init__(self) -> None:
        super().__init__(AssessmentSessionModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: UUID,
    ) -> AssessmentSessionModel | None:
        """Return the session only if it belongs to user_id."""
        stmt = select(AssessmentSessionModel).where(
            AssessmentSessionModel.id == id,
            AssessmentSessionModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        status: SessionStatus | None = None,
    ) -> Sequence[AssessmentSessionModel]:
        """
        Return the user's sessions, newest first.

        Args:
            session: Async database session
            user_id: Owner of the sessions
            status: Optional status filter
        """
        stmt = select(AssessmentSessionModel).where(AssessmentSessionModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(AssessmentSessionModel.status == status)
        stmt = stmt.order_by(AssessmentSessionModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


assessment_session_crud = AssessmentSessionCRUD()
