"""
Test suite for ContentChunkCRUD and EmbeddingSettingsCRUD.

Runs against the in-memory SQLite database so the replace semantics and
table constraints are exercised end to end.

System role: Verification of knowledge base persistence
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from archmen.boundary.db.CRUD.content_chunk_crud import content_chunk_crud
from archmen.boundary.db.CRUD.embedding_settings_crud import embedding_settings_crud
from archmen.boundary.db.models.content_chunk_model import ContentChunkModel
from archmen.boundary.db.models.embedding_settings_model import EmbeddingSettingsModel
from archmen.boundary.db.models.parent import ParentRef


def chunk_rows(texts: list[str]) -> list[dict]:
    return [
        {
            "chunk_index": index,
            "chunk_text": text,
            "chunk_size": len(text),
            "chunk_overlap": 0,
            "embedding": [0.1, 0.2, 0.3],
        }
        for index, text in enumerate(texts)
    ]


class TestReplaceContent:
    """Test suite for ContentChunkCRUD.replace_content()."""

    @pytest.mark.asyncio
    async def test_second_replace_leaves_only_second_set(self, test_async_db, assessment) -> None:
        # Arrange
        parent = ParentRef.assessment(assessment.id)
        await content_chunk_crud.replace_content(test_async_db, parent, chunk_rows(["a", "b", "c"]))
        await test_async_db.commit()

        # Act
        await content_chunk_crud.replace_content(test_async_db, parent, chunk_rows(["x", "y"]))
        await test_async_db.commit()

        # Assert
        chunks = await content_chunk_crud.list_chunks(test_async_db, parent)
        assert [c.chunk_text for c in chunks] == ["x", "y"]
        assert [c.chunk_index for c in chunks] == [0, 1]

    @pytest.mark.asyncio
    async def test_rows_owned_by_parent(self, test_async_db, archetype) -> None:
        parent = ParentRef.archetype(archetype.id)

        inserted = await content_chunk_crud.replace_content(test_async_db, parent, chunk_rows(["warrior"]))

        assert inserted[0].archetype_id == archetype.id
        assert inserted[0].assessment_id is None

    @pytest.mark.asyncio
    async def test_replace_does_not_touch_other_parents(self, test_async_db, assessment, archetype) -> None:
        assessment_ref = ParentRef.assessment(assessment.id)
        archetype_ref = ParentRef.archetype(archetype.id)
        await content_chunk_crud.replace_content(test_async_db, archetype_ref, chunk_rows(["keep me"]))

        await content_chunk_crud.replace_content(test_async_db, assessment_ref, chunk_rows(["new"]))

        assert [c.chunk_text for c in await content_chunk_crud.list_chunks(test_async_db, archetype_ref)] == ["keep me"]
        assert [c.chunk_text for c in await content_chunk_crud.list_chunks(test_async_db, assessment_ref)] == ["new"]


class TestListAndDelete:
    """Test suite for listing and deleting chunks."""

    @pytest.mark.asyncio
    async def test_list_orders_by_chunk_index(self, test_async_db, assessment) -> None:
        # Arrange
        parent = ParentRef.assessment(assessment.id)
        rows = chunk_rows(["zero", "one", "two"])
        await content_chunk_crud.replace_content(test_async_db, parent, list(reversed(rows)))

        # Act
        chunks = await content_chunk_crud.list_chunks(test_async_db, parent)

        # Assert
        assert [c.chunk_text for c in chunks] == ["zero", "one", "two"]

    @pytest.mark.asyncio
    async def test_list_for_unprocessed_parent_is_empty(self, test_async_db, assessment) -> None:
        chunks = await content_chunk_crud.list_chunks(test_async_db, ParentRef.assessment(assessment.id))

        assert list(chunks) == []

    @pytest.mark.asyncio
    async def test_delete_chunk_removes_single_row(self, test_async_db, assessment) -> None:
        parent = ParentRef.assessment(assessment.id)
        inserted = await content_chunk_crud.replace_content(test_async_db, parent, chunk_rows(["a", "b"]))

        deleted = await content_chunk_crud.delete_chunk(test_async_db, inserted[0].id)

        assert deleted is True
        remaining = await content_chunk_crud.list_chunks(test_async_db, parent)
        assert [c.chunk_text for c in remaining] == ["b"]

    @pytest.mark.asyncio
    async def test_delete_missing_chunk_returns_false(self, test_async_db) -> None:
        assert await content_chunk_crud.delete_chunk(test_async_db, uuid.uuid4()) is False


class TestSingleParentConstraint:
    """Chunks must belong to exactly one parent."""

    @pytest.mark.asyncio
    async def test_chunk_with_both_parents_rejected(self, test_async_db, assessment, archetype) -> None:
        # Arrange
        test_async_db.add(
            ContentChunkModel(
                assessment_id=assessment.id,
                archetype_id=archetype.id,
                chunk_index=0,
                chunk_text="ambiguous",
                chunk_size=9,
                embedding=[0.0],
            )
        )

        # Act / Assert
        with pytest.raises(IntegrityError):
            await test_async_db.flush()
        await test_async_db.rollback()

    @pytest.mark.asyncio
    async def test_chunk_without_parent_rejected(self, test_async_db) -> None:
        test_async_db.add(
            ContentChunkModel(chunk_index=0, chunk_text="orphan", chunk_size=6, embedding=[0.0])
        )

        with pytest.raises(IntegrityError):
            await test_async_db.flush()
        await test_async_db.rollback()


class TestEmbeddingSettingsUpsert:
    """Test suite for EmbeddingSettingsCRUD.upsert_settings()."""

    @pytest.mark.asyncio
    async def test_first_upsert_creates_row(self, test_async_db, assessment) -> None:
        parent = ParentRef.assessment(assessment.id)

        stored = await embedding_settings_crud.upsert_settings(
            test_async_db,
            parent,
            chunk_size=500,
            chunk_overlap=50,
            embedding_model="text-embedding-3-small",
            context_window=2000,
            semantic_search_enabled=True,
        )

        assert stored.assessment_id == assessment.id
        assert stored.chunk_size == 500

    @pytest.mark.asyncio
    async def test_second_upsert_overwrites_single_row(self, test_async_db, archetype) -> None:
        # Arrange
        parent = ParentRef.archetype(archetype.id)
        first = await embedding_settings_crud.upsert_settings(test_async_db, parent, chunk_size=500, chunk_overlap=50)

        # Act
        second = await embedding_settings_crud.upsert_settings(
            test_async_db,
            parent,
            chunk_size=800,
            chunk_overlap=100,
            semantic_search_enabled=False,
        )

        # Assert
        assert second.id == first.id
        assert second.chunk_size == 800
        assert second.semantic_search_enabled is False
        rows = await test_async_db.execute(select(func.count()).select_from(EmbeddingSettingsModel))
        assert rows.scalar_one() == 1

    @pytest.mark.asyncio
    async def test_get_for_unprocessed_parent_returns_none(self, test_async_db, assessment) -> None:
        assert await embedding_settings_crud.get_for_parent(test_async_db, ParentRef.assessment(assessment.id)) is None
