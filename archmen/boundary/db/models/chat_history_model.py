"""
Assessment chat history ORM model.

Ordered message log of one assessment session: the interviewer's
questions, the user's answers, follow-ups and system notes.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Assessment conversation persistence
"""

import uuid

from sqlalchemy import Enum, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from archmen.boundary.db.base import Base, TimestampMixin, UUIDMixin
from archmen.core.assessment.message_types import ChatMessageType


class AssessmentChatHistoryModel(Base, UUIDMixin, TimestampMixin):
    """
    One message of an assessment session's chat log.

    Attributes:
        assessment_session_id: Session the message belongs to (cascading delete)
        user_id: Owner of the session, copied for direct filtering
        message_type: Kind of message
        content: Message text
        message_index: Position in the log; unique per session
    """

    __tablename__ = "assessment_chat_history"
    __table_args__ = (
        UniqueConstraint(
            "assessment_session_id",
            "message_index",
            name="uq_assessment_chat_history_session_index",
        ),
    )

    assessment_session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("assessment_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    message_type: Mapped[ChatMessageType] = mapped_column(
        Enum(
            ChatMessageType,
            native_enum=False,
            length=20,
            values_callable=lambda types: [t.value for t in types],
        ),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_index: Mapped[int] = mapped_column(Integer, nullable=False)

    assessment_session = relationship("AssessmentSessionModel", back_populates="messages")
