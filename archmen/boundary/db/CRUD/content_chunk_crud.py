"""
Content chunk CRUD operations.

Every knowledge base query is scoped to one parent through ParentRef,
which resolves to either the assessment_id or the archetype_id column.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Knowledge Store persistence for chunks and embeddings
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.content_chunk_model import ContentChunkModel
from archmen.boundary.db.models.parent import ParentRef


def _owned_by(parent: ParentRef):
    return getattr(ContentChunkModel, parent.kind.foreign_key) == parent.id


class ContentChunkCRUD(BaseCRUD[ContentChunkModel]):
    """
    CRUD operations for ContentChunkModel.

    replace_content never commits; the caller commits once so the delete
    and the insert land in the same transaction.
    """

    def __init__(self) -> None:
        super().__init__(ContentChunkModel)

    async def replace_content(
        self,
        session: AsyncSession,
        parent: ParentRef,
        rows: Sequence[dict[str, Any]],
    ) -> list[ContentChunkModel]:
        """
        Delete every chunk of the parent, then insert the new set.

        Args:
            session: Async database session
            parent: Owner of the chunks
            rows: Column values per chunk (chunk_index, chunk_text, embedding, ...)

        Returns:
            list[ContentChunkModel]: Inserted chunks in index order
        """
        await self.delete_for_parent(session, parent)

        owner = parent.owner_columns()
        instances = [ContentChunkModel(**owner, **row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return sorted(instances, key=lambda chunk: chunk.chunk_index)

    async def delete_for_parent(self, session: AsyncSession, parent: ParentRef) -> int:
        """Delete every chunk of the parent. Returns the deleted row count."""
        result = await session.execute(delete(ContentChunkModel).where(_owned_by(parent)))
        return result.rowcount or 0

    async def delete_chunk(self, session: AsyncSession, chunk_id: UUID) -> bool:
        """Delete a single chunk regardless of its parent."""
        return await self.delete_by_id(session, chunk_id)

    async def list_chunks(
        self,
        session: AsyncSession,
        parent: ParentRef,
    ) -> Sequence[ContentChunkModel]:
        """Return all chunks of the parent ordered by chunk_index ascending."""
        stmt = (
            select(ContentChunkModel)
            .where(_owned_by(parent))
            .order_by(ContentChunkModel.chunk_index.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


content_chunk_crud = ContentChunkCRUD()
