"""
Embedding settings CRUD operations.

Dependencies: sqlalchemy, archmen.boundary.db.models
System role: Per-parent knowledge base configuration persistence
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.models.embedding_settings_model import EmbeddingSettingsModel
from archmen.boundary.db.models.parent import ParentRef


class EmbeddingSettingsCRUD(BaseCRUD[EmbeddingSettingsModel]):
    """CRUD operations for EmbeddingSettingsModel (one row per parent)."""

    def __init__(self) -> None:
        super().__init__(EmbeddingSettingsModel)

    async def get_for_parent(
        self,
        session: AsyncSession,
        parent: ParentRef,
    ) -> EmbeddingSettingsModel | None:
        """Return the parent's settings row, or None if never processed."""
        column = getattr(EmbeddingSettingsModel, parent.kind.foreign_key)
        result = await session.execute(select(EmbeddingSettingsModel).where(column == parent.id))
        return result.scalar_one_or_none()

    async def upsert_settings(
        self,
        session: AsyncSession,
        parent: ParentRef,
        **values,
    ) -> EmbeddingSettingsModel:
        """
        Insert the parent's settings row or overwrite the existing one.

        Args:
            session: Async database session
            parent: Owner of the settings
            **values: chunk_size, chunk_overlap, embedding_model, context_window,
                semantic_search_enabled

        Returns:
            EmbeddingSettingsModel: The stored row
        """
        existing = await self.get_for_parent(session, parent)
        if existing is None:
            return await self.create(session, **parent.owner_columns(), **values)

        for field, value in values.items():
            setattr(existing, field, value)
        await session.flush()
        return existing


embedding_settings_crud = EmbeddingSettingsCRUD()
