"""
Knowledge base parent models.

Assessments and archetypes both own a chunked knowledge base and one
embedding settings row. ParentKind selects which foreign key a
chunk or settings row uses.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Parent entities for knowledge base ownership
"""

import enum
import uuid
from dataclasses import dataclass

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from archmen.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ParentKind(str, enum.Enum):
    """
    Owner type of a knowledge base.

    ASSESSMENT: Chunks feed the assessment's interviewer prompts
    ARCHETYPE: Chunks describe one archetype
    """

    ASSESSMENT = "assessment"
    ARCHETYPE = "archetype"

    @property
    def foreign_key(self) -> str:
        """Column name of this parent on owned rows."""
        return f"{self.value}_id"


@dataclass(frozen=True)
class ParentRef:
    """Owner of a set of chunks: one assessment or one archetype."""

    kind: ParentKind
    id: uuid.UUID

    @classmethod
    def assessment(cls, id: uuid.UUID) -> "ParentRef":
        return cls(kind=ParentKind.ASSESSMENT, id=id)

    @classmethod
    def archetype(cls, id: uuid.UUID) -> "ParentRef":
        return cls(kind=ParentKind.ARCHETYPE, id=id)

    def owner_columns(self) -> dict[str, uuid.UUID | None]:
        """Foreign key values for a row owned by this parent."""
        return {
            "assessment_id": self.id if self.kind is ParentKind.ASSESSMENT else None,
            "archetype_id": self.id if self.kind is ParentKind.ARCHETYPE else None,
        }


class AssessmentModel(Base, UUIDMixin, TimestampMixin):
    """
    Assessment ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Display name
        description: Optional long description
        system_prompt: Optional assessment-specific system prompt
        is_active: Whether users can start sessions for it
        chunks: Knowledge base chunks (cascading delete)
        sessions: Assessment sessions started against it (cascading delete)
    """

    __tablename__ = "assessments"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    system_prompt: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    chunks = relationship(
        "ContentChunkModel",
        back_populates="assessment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions = relationship(
        "AssessmentSessionModel",
        back_populates="assessment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ArchetypeModel(Base, UUIDMixin, TimestampMixin):
    """
    Archetype ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Archetype name (e.g. "The King")
        description: Optional long description
        category: Optional grouping (e.g. "mature masculine", "shadow")
        chunks: Knowledge base chunks (cascading delete)
    """

    __tablename__ = "archetypes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)

    chunks = relationship(
        "ContentChunkModel",
        back_populates="archetype",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
