"""
Assessment session service orchestrator.

Coordinates the assessment session lifecycle. Every mutation goes through
the session state machine; sessions are visible only to their owner.

Dependencies: archmen.boundary.db.CRUD, archmen.core.assessment
System role: Assessment session use case orchestration
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.base import utcnow
from archmen.boundary.db.CRUD.assessment_session_crud import assessment_session_crud
from archmen.boundary.db.CRUD.parent_crud import assessment_crud
from archmen.boundary.db.models.assessment_session_model import AssessmentSessionModel
from archmen.core.assessment.session_state import (
    SessionEvent,
    SessionStatus,
    next_status,
    validate_progress,
)
from archmen.core.exceptions import ParentNotFoundError, SessionNotFoundError, ValidationError
from archmen.models.assessment_session import DiscoveredArchetype

logger = logging.getLogger(__name__)


class AssessmentSessionService:
    """Assessment session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def start_session(self, user_id: UUID, assessment_id: UUID) -> AssessmentSessionModel:
        """
        Start a new in-progress session.

        Raises:
            ParentNotFoundError: Assessment does not exist
            ValidationError: Assessment is not active
        """
        assessment = await assessment_crud.get_by_id(self.db, assessment_id)
        if assessment is None:
            raise ParentNotFoundError("assessment", str(assessment_id))
        if not assessment.is_active:
            raise ValidationError("Assessment is not active", field="assessmentId")

        session = await assessment_session_crud.create(
            self.db,
            user_id=user_id,
            assessment_id=assessment_id,
            status=SessionStatus.IN_PROGRESS,
            progress_percentage=0,
            current_question_index=0,
            discovered_archetypes=[],
        )
        await self.db.commit()

        logger.info(
            f"{__name__}:start_session - session started",
            extra={"session_id": str(session.id), "assessment_id": str(assessment_id)},
        )
        return session

    async def get_session(self, user_id: UUID, session_id: UUID) -> AssessmentSessionModel:
        """
        Raises:
            SessionNotFoundError: Missing or owned by another user
        """
        session = await assessment_session_crud.get_for_user(self.db, session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    async def list_sessions(
        self,
        user_id: UUID,
        status: SessionStatus | None = None,
    ) -> list[AssessmentSessionModel]:
        return list(await assessment_session_crud.list_for_user(self.db, user_id, status))

    async def update_progress(
        self,
        user_id: UUID,
        session_id: UUID,
        progress_percentage: int,
        current_question_index: int,
    ) -> AssessmentSessionModel:
        """
        Record an answer: in_progress -> in_progress.

        Raises:
            ValidationError: Progress values out of range
            SessionNotFoundError: Missing session
            InvalidSessionTransitionError: Session already completed or abandoned
        """
        validate_progress(progress_percentage, current_question_index)
        session = await self.get_session(user_id, session_id)

        session.status = next_status(session.status, SessionEvent.ANSWER)
        session.progress_percentage = progress_percentage
        session.current_question_index = current_question_index
        await self.db.commit()
        await self.db.refresh(session)
        return session

    async def complete_session(
        self,
        user_id: UUID,
        session_id: UUID,
        discovered_archetypes: Sequence[DiscoveredArchetype],
    ) -> AssessmentSessionModel:
        """
        Complete the session and snapshot the discovered archetypes.

        Raises:
            SessionNotFoundError: Missing session
            InvalidSessionTransitionError: Session already completed or abandoned
        """
        session = await self.get_session(user_id, session_id)

        session.status = next_status(session.status, SessionEvent.COMPLETE)
        session.progress_percentage = 100
        session.completed_at = utcnow()
        session.discovered_archetypes = [
            archetype.model_dump(mode="json", by_alias=True) for archetype in discovered_archetypes
        ]
        await self.db.commit()
        await self.db.refresh(session)

        logger.info(
            f"{__name__}:complete_session - session completed",
            extra={"session_id": str(session_id), "archetypes": len(discovered_archetypes)},
        )
        return session

    async def abandon_session(self, user_id: UUID, session_id: UUID) -> AssessmentSessionModel:
        """
        Raises:
            SessionNotFoundError: Missing session
            InvalidSessionTransitionError: Session already completed or abandoned
        """
        session = await self.get_session(user_id, session_id)
        session.status = next_status(session.status, SessionEvent.ABANDON)
        await self.db.commit()
        await self.db.refresh(session)
        return session

    async def delete_session(self, user_id: UUID, session_id: UUID) -> None:
        """
        Delete a session in any state.

        Raises:
            SessionNotFoundError: Missing session
        """
        await self.get_session(user_id, session_id)
        await assessment_session_crud.delete_by_id(self.db, session_id)
        await self.db.commit()
