"""
Test suite for AssessmentService and ArchetypeService updates.

Runs on the in-memory SQLite database.

System role: Verification of partial parent updates
"""

import uuid

import pytest

from archmen.application.services.parent_service import ArchetypeService, AssessmentService
from archmen.core.exceptions import ParentNotFoundError, ValidationError
from archmen.models.parents import UpdateArchetypeRequest, UpdateAssessmentRequest


class TestUpdateAssessment:
    @pytest.mark.asyncio
    async def test_only_sent_fields_change(self, test_async_db, assessment) -> None:
        # Arrange
        service = AssessmentService(test_async_db)
        request = UpdateAssessmentRequest.model_validate({"isActive": False})

        # Act
        updated = await service.update_assessment(assessment.id, request)

        # Assert
        assert updated.is_active is False
        assert updated.name == "Mature Masculine Inventory"
        assert updated.description == "Explores the King, Warrior, Magician and Lover"

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, test_async_db, assessment) -> None:
        service = AssessmentService(test_async_db)

        updated = await service.update_assessment(
            assessment.id,
            UpdateAssessmentRequest.model_validate({"description": None}),
        )

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_missing_assessment_raises(self, test_async_db) -> None:
        service = AssessmentService(test_async_db)

        with pytest.raises(ParentNotFoundError):
            await service.update_assessment(uuid.uuid4(), UpdateAssessmentRequest(name="Renamed"))

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, test_async_db, assessment) -> None:
        service = AssessmentService(test_async_db)

        with pytest.raises(ValidationError):
            await service.update_assessment(assessment.id, UpdateAssessmentRequest())

    @pytest.mark.asyncio
    async def test_null_name_rejected(self, test_async_db, assessment) -> None:
        service = AssessmentService(test_async_db)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_assessment(assessment.id, UpdateAssessmentRequest.model_validate({"name": None}))

        assert exc_info.value.details == {"field": "name"}


class TestUpdateArchetype:
    @pytest.mark.asyncio
    async def test_update_persists(self, test_async_db, archetype) -> None:
        # Arrange
        service = ArchetypeService(test_async_db)

        # Act
        await service.update_archetype(archetype.id, UpdateArchetypeRequest(description="Courage with purpose"))
        reloaded = await service.get_archetype(archetype.id)

        # Assert
        assert reloaded.description == "Courage with purpose"
        assert reloaded.category == "mature masculine"

    @pytest.mark.asyncio
    async def test_missing_archetype_raises(self, test_async_db) -> None:
        service = ArchetypeService(test_async_db)

        with pytest.raises(ParentNotFoundError):
            await service.update_archetype(uuid.uuid4(), UpdateArchetypeRequest(category="shadow"))
