"""
Base CRUD operations for SQLAlchemy models.

Generic create/read/update/delete helpers shared by every model-specific
CRUD class. Nothing here commits: the calling service owns the
transaction and commits once its use case has succeeded.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic CRUD operations bound to one model class.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Insert a new row and flush it so generated columns are populated.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Return the row with this primary key, or None."""
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Return rows newest first with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip
        """
        stmt = select(self.model).order_by(self.model.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs,
    ) -> ModelT | None:
        """
        Set attributes on a loaded row and flush.

        Loading first keeps onupdate hooks and in-session identity consistent.

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a row by primary key.

        Returns:
            True if a row was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        """Check whether a row with this primary key exists."""
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
