"""
Assessment and archetype services.

Dependencies: archmen.boundary.db.CRUD
System role: Knowledge base parent management
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.parent_crud import archetype_crud, assessment_crud
from archmen.boundary.db.models.parent import ArchetypeModel, AssessmentModel
from archmen.core.exceptions import ParentNotFoundError, ValidationError
from archmen.models.common import CamelModel
from archmen.models.parents import (
    CreateArchetypeRequest,
    CreateAssessmentRequest,
    UpdateArchetypeRequest,
    UpdateAssessmentRequest,
)

logger = logging.getLogger(__name__)


def changed_fields(request: CamelModel, not_null: tuple[str, ...]) -> dict:
    """
    Fields the client actually sent.

    Raises:
        ValidationError: Nothing to change, or null sent for a required column
    """
    changes = request.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("At least one field must be provided")
    for field in not_null:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null", field=field)
    return changes


class AssessmentService:
    """Create, update and look up assessments."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_assessment(self, request: CreateAssessmentRequest) -> AssessmentModel:
        assessment = await assessment_crud.create(self.db, **request.model_dump())
        await self.db.commit()
        return assessment

    async def list_assessments(self, active_only: bool = False) -> list[AssessmentModel]:
        if active_only:
            return list(await assessment_crud.get_active(self.db))
        return list(await assessment_crud.get_all(self.db))

    async def get_assessment(self, assessment_id: UUID) -> AssessmentModel:
        """
        Raises:
            ParentNotFoundError: If the assessment does not exist
        """
        assessment = await assessment_crud.get_by_id(self.db, assessment_id)
        if assessment is None:
            raise ParentNotFoundError("assessment", str(assessment_id))
        return assessment

    async def update_assessment(
        self,
        assessment_id: UUID,
        request: UpdateAssessmentRequest,
    ) -> AssessmentModel:
        """
        Apply a partial update.

        Raises:
            ValidationError: Empty update or null name / isActive
            ParentNotFoundError: If the assessment does not exist
        """
        changes = changed_fields(request, not_null=("name", "is_active"))
        assessment = await assessment_crud.update_by_id(self.db, assessment_id, **changes)
        if assessment is None:
            raise ParentNotFoundError("assessment", str(assessment_id))
        await self.db.commit()

        logger.info(
            f"{__name__}:update_assessment - updated",
            extra={"assessment_id": str(assessment_id), "fields": sorted(changes)},
        )
        return assessment


class ArchetypeService:
    """Create, update and look up archetypes."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_archetype(self, request: CreateArchetypeRequest) -> ArchetypeModel:
        archetype = await archetype_crud.create(self.db, **request.model_dump())
        await self.db.commit()
        return archetype

    async def list_archetypes(self) -> list[ArchetypeModel]:
        return list(await archetype_crud.get_all(self.db))

    async def get_archetype(self, archetype_id: UUID) -> ArchetypeModel:
        """
        Raises:
            ParentNotFoundError: If the archetype does not exist
        """
        archetype = await archetype_crud.get_by_id(self.db, archetype_id)
        if archetype is None:
            raise ParentNotFoundError("archetype", str(archetype_id))
        return archetype

    async def update_archetype(
        self,
        archetype_id: UUID,
        request: UpdateArchetypeRequest,
    ) -> ArchetypeModel:
        """
        Raises:
            ValidationError: Empty update or null name
            ParentNotFoundError: If the archetype does not exist
        """
        changes = changed_fields(request, not_null=("name",))
        archetype = await archetype_crud.update_by_id(self.db, archetype_id, **changes)
        if archetype is None:
            raise ParentNotFoundError("archetype", str(archetype_id))
        await self.db.commit()

        logger.info(
            f"{__name__}:update_archetype - updated",
            extra={"archetype_id": str(archetype_id), "fields": sorted(changes)},
        )
        return archetype
