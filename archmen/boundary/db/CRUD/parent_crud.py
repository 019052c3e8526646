"""
Assessment and archetype CRUD operations.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Knowledge base parent persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.parent import (
    ArchetypeModel,
    AssessmentModel,
    ParentKind,
    ParentRef,
)


class AssessmentCRUD(BaseCRUD[AssessmentModel]):
    """CRUD operations for AssessmentModel."""

    def __init__(self) -> None:
        super().__init__(AssessmentModel)

    async def get_active(self, session: AsyncSession) -> Sequence[AssessmentModel]:
        """Return assessments users can currently start, ordered by name."""
        stmt = (
            select(AssessmentModel)
            .where(AssessmentModel.is_active.is_(True))
            .order_by(AssessmentModel.name)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class ArchetypeCRUD(BaseCRUD[ArchetypeModel]):
    """CRUD operations for ArchetypeModel."""

    def __init__(self) -> None:
        super().__init__(ArchetypeModel)


assessment_crud = AssessmentCRUD()
archetype_crud = ArchetypeCRUD()


async def parent_exists(session: AsyncSession, parent: ParentRef) -> bool:
    """Check the owning assessment or archetype exists."""
    crud = assessment_crud if parent.kind is ParentKind.ASSESSMENT else archetype_crud
    return await crud.exists(session, parent.id)
