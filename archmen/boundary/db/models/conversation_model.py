"""
Saved enhanced-chat conversation.

The client picks the conversation ID; every enhanced-chat call that sends
it overwrites the stored transcript and the context used for the reply.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Chat transcript persistence
"""

import uuid

from sqlalchemy import ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from archmen.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Attributes:
        id: Client-chosen conversation ID
        user_id: Signed-in user who owns the conversation
        messages: Transcript as [{"role", "content"}], latest reply included
        assessment_id / archetype_id: Knowledge base the chat was grounded on, if any
        context_used: Chunks placed in the prompt for the latest reply
    """

    __tablename__ = "conversations"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    messages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    assessment_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("assessments.id", ondelete="SET NULL"),
        nullable=True,
    )
    archetype_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("archetypes.id", ondelete="SET NULL"),
        nullable=True,
    )
    context_used: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
