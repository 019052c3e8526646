"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (UUIDs, timestamps, assessment/archetype ownership).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class UUIDMixin:
    """
    Mixin providing UUID primary key to all models.

    Generates UUID v4 automatically on row creation. PostgreSQL stores
    as native UUID type for efficient indexing and sorting.

    Attributes:
        id: UUID v4 primary key, auto-generated on insert
    """

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every update via onupdate hook.
    Both use UTC timezone for consistency across deployments.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )


class ParentOwnedMixin:
    """
    Mixin for rows owned by exactly one assessment or one archetype.

    Both foreign keys are nullable; single_parent_constraint() adds the
    CHECK that exactly one of them is set. Rows are deleted together with
    their parent.

    Attributes:
        assessment_id: Owning assessment (None when owned by an archetype)
        archetype_id: Owning archetype (None when owned by an assessment)
    """

    @declared_attr
    def assessment_id(cls) -> Mapped[uuid.UUID | None]:
        return mapped_column(
            UUID(as_uuid=True),
            ForeignKey("assessments.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def archetype_id(cls) -> Mapped[uuid.UUID | None]:
        return mapped_column(
            UUID(as_uuid=True),
            ForeignKey("archetypes.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        )

    @staticmethod
    def single_parent_constraint(table_name: str) -> CheckConstraint:
        return CheckConstraint(
            "(assessment_id IS NULL) <> (archetype_id IS NULL)",
            name=f"ck_{table_name}_single_parent",
        )
