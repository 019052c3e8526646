"""
Assessment session ORM model.

Tracks one user's run through an assessment, from start to completion
or abandonment, including the snapshot of discovered archetypes.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Assessment progress persistence
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from archmen.boundary.db.base import Base, TimestampMixin, UUIDMixin
from archmen.core.assessment.session_state import SessionStatus


class AssessmentSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Assessment session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Auth provider user ID (not a foreign key)
        assessment_id: Assessment being taken
        status: Current state enum
        progress_percentage: 0-100
        current_question_index: Index of the next question to answer
        discovered_archetypes: JSON snapshot list written on completion
        completed_at: Completion timestamp (UTC), None until completed
        messages: Chat log in message_index order (cascading delete)
    """

    __tablename__ = "assessment_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    assessment_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("assessments.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[SessionStatus] = mapped_column(
        Enum(
            SessionStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=SessionStatus.IN_PROGRESS,
    )
    progress_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_question_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    discovered_archetypes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    assessment = relationship("AssessmentModel", back_populates="sessions")
    messages = relationship(
        "AssessmentChatHistoryModel",
        back_populates="assessment_session",
        order_by="AssessmentChatHistoryModel.message_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
