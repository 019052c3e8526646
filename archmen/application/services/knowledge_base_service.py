"""
Knowledge base service orchestrator.

Runs the ingestion pipeline for one parent (chunk, embed, store) and the
read/delete/test-search operations on its stored content.

Every embedding is generated before the first write, and the settings
upsert, chunk delete and chunk insert share one transaction: a failing
run leaves the previously stored knowledge base untouched.

Dependencies: archmen.core.knowledge_base, archmen.boundary.db, archmen.boundary.vdb,
    archmen.boundary.storage
System role: Knowledge base use case orchestration
"""

import asyncio
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.CRUD.content_chunk_crud import content_chunk_crud
from archmen.boundary.db.CRUD.embedding_settings_crud import embedding_settings_crud
from archmen.boundary.db.CRUD.parent_crud import parent_exists
from archmen.boundary.db.models.parent import ParentRef
from archmen.boundary.storage.s3_client import S3ContentClient
from archmen.boundary.vdb.similarity_search import SimilaritySearch
from archmen.boundary.vdb.vector_schemas import SimilarityMatch, SimilarityQuery
from archmen.configs.knowledge_base import KnowledgeBaseSettings
from archmen.core.exceptions import (
    ChunkNotFoundError,
    ParentNotFoundError,
    StorageError,
    ValidationError,
)
from archmen.core.knowledge_base.chunker import SlidingWindowChunker
from archmen.core.knowledge_base.embedding_generator import EmbeddingGenerator
from archmen.models.knowledge_base import (
    ChunkSummary,
    ContentChunkResponse,
    EmbeddingSettingsResponse,
    KnowledgeBaseContentResponse,
    ProcessContentData,
    ProcessingSettings,
)

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


def chunk_preview(text: str) -> str:
    return text[:PREVIEW_CHARS] + "..."


class KnowledgeBaseService:
    """Knowledge base service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        embedding_generator: EmbeddingGenerator,
        settings: KnowledgeBaseSettings,
        storage: S3ContentClient | None = None,
    ) -> None:
        """
        Initialize knowledge base service.

        Args:
            db: Async SQLAlchemy session (request scoped)
            embedding_generator: Shared embedding generator
            settings: Knowledge base defaults and search parameters
            storage: Object storage client, required only for file uploads
        """
        self.db = db
        self.embedding_generator = embedding_generator
        self.settings = settings
        self.storage = storage

    def default_processing_settings(self) -> ProcessingSettings:
        return ProcessingSettings(
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
            embedding_model=self.embedding_generator.default_model,
            context_window=self.settings.context_window,
            semantic_search_enabled=True,
        )

    async def _require_parent(self, parent: ParentRef) -> None:
        if not await parent_exists(self.db, parent):
            raise ParentNotFoundError(parent.kind.value, str(parent.id))

    async def process_content(
        self,
        parent: ParentRef,
        content: str | None,
        settings: ProcessingSettings | None = None,
        source_url: str | None = None,
        content_type: str = "text",
    ) -> ProcessContentData:
        """
        Chunk, embed and store content as the parent's whole knowledge base.

        Flow:
        1. Validate content and chunking configuration
        2. Verify the parent exists
        3. Chunk the text and embed every chunk
        4. Upsert settings and replace chunks in one transaction

        Args:
            parent: Assessment or archetype that owns the content
            content: Raw text
            settings: Chunking/embedding settings (configured defaults if None)
            source_url: Optional URL of the source document
            content_type: Source content type stored on each chunk

        Returns:
            ProcessContentData: Counts, effective settings and chunk summaries

        Raises:
            ValidationError: Missing or blank content
            ChunkingConfigurationError: chunk_size/overlap cannot make progress
            ParentNotFoundError: Parent does not exist
            EmbeddingError: Any embedding call failed (nothing is written)
        """
        if content is None or content == "":
            raise ValidationError("No content provided", field="textContent")
        if not content.strip():
            raise ValidationError("Content is empty", field="textContent")

        settings = settings or self.default_processing_settings()
        chunker = SlidingWindowChunker(chunk_size=settings.chunk_size, overlap=settings.chunk_overlap)

        await self._require_parent(parent)

        chunks = chunker.chunk(content)
        logger.info(
            f"{__name__}:process_content - chunked content",
            extra={
                "parent_kind": parent.kind.value,
                "parent_id": str(parent.id),
                "characters": len(content),
                "chunks": len(chunks),
            },
        )

        embeddings = await self.embedding_generator.embed_chunks(chunks, settings.embedding_model)

        processed_at = datetime.now(timezone.utc).isoformat()
        rows = [
            {
                "chunk_index": chunk.index,
                "chunk_text": chunk.text,
                "chunk_size": chunk.size,
                "chunk_overlap": chunk.overlap,
                "content_type": content_type,
                "source_url": source_url,
                "embedding": embedding,
                "chunk_metadata": {
                    "originalLength": len(content),
                    "chunkCount": len(chunks),
                    "processedAt": processed_at,
                    "model": settings.embedding_model,
                },
            }
            for chunk, embedding in zip(chunks, embeddings)
        ]

        try:
            await embedding_settings_crud.upsert_settings(
                self.db,
                parent,
                chunk_size=settings.chunk_size,
                chunk_overlap=settings.chunk_overlap,
                embedding_model=settings.embedding_model,
                context_window=settings.context_window,
                semantic_search_enabled=settings.semantic_search_enabled,
            )
            stored = await content_chunk_crud.replace_content(self.db, parent, rows)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"{__name__}:process_content - stored {len(stored)} chunks",
            extra={"parent_kind": parent.kind.value, "parent_id": str(parent.id)},
        )

        return ProcessContentData(
            assessment_id=parent.owner_columns()["assessment_id"],
            archetype_id=parent.owner_columns()["archetype_id"],
            chunks_processed=len(stored),
            total_characters=len(content),
            settings=settings,
            chunks=[
                ChunkSummary(
                    id=chunk.id,
                    index=chunk.chunk_index,
                    size=chunk.chunk_size,
                    preview=chunk_preview(chunk.chunk_text),
                )
                for chunk in stored
            ],
        )

    async def upload_file(
        self,
        parent: ParentRef,
        filename: str,
        body: bytes,
        mime_type: str | None = None,
        settings: ProcessingSettings | None = None,
    ) -> ProcessContentData:
        """
        Store a UTF-8 text file in object storage, then process its text.

        The stored object is removed again when processing fails.

        Raises:
            ValidationError: Empty or non-UTF-8 file
            StorageError: Storage not configured or the upload failed
        """
        if self.storage is None:
            raise StorageError("Object storage is not configured", provider="s3")
        if not body:
            raise ValidationError("Uploaded file is empty", field="file")
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError("Uploaded file must be UTF-8 text", field="file") from e

        await self._require_parent(parent)

        key = self.storage.build_key(parent.kind.value, parent.id, filename)
        public_url = await asyncio.to_thread(
            self.storage.upload,
            key,
            body,
            mime_type or "text/plain",
        )

        try:
            return await self.process_content(
                parent,
                text,
                settings=settings,
                source_url=public_url,
                content_type="file",
            )
        except Exception:
            logger.warning(f"{__name__}:upload_file - processing failed, removing {key}")
            try:
                await asyncio.to_thread(self.storage.delete, key)
            except StorageError as cleanup_error:
                logger.error(
                    f"{__name__}:upload_file - could not remove {key}: {cleanup_error.message}"
                )
            raise

    async def get_content(self, parent: ParentRef) -> KnowledgeBaseContentResponse:
        """
        Return the parent's chunks (index order) and settings.

        Raises:
            ParentNotFoundError: Parent does not exist
        """
        await self._require_parent(parent)

        chunks = await content_chunk_crud.list_chunks(self.db, parent)
        settings = await embedding_settings_crud.get_for_parent(self.db, parent)

        return KnowledgeBaseContentResponse(
            chunks=[ContentChunkResponse.model_validate(chunk) for chunk in chunks],
            settings=EmbeddingSettingsResponse.model_validate(settings) if settings else None,
            total_chunks=len(chunks),
            total_characters=sum(chunk.chunk_size for chunk in chunks),
        )

    async def delete_chunk(self, chunk_id: UUID) -> None:
        """
        Delete one chunk by ID.

        Raises:
            ChunkNotFoundError: No chunk with this ID
        """
        deleted = await content_chunk_crud.delete_chunk(self.db, chunk_id)
        if not deleted:
            raise ChunkNotFoundError(str(chunk_id))
        await self.db.commit()
        logger.info(f"{__name__}:delete_chunk - deleted chunk {chunk_id}")

    async def search(
        self,
        parent: ParentRef,
        query: str,
        match_threshold: float,
        match_count: int,
        embedding_model: str | None = None,
    ) -> list[SimilarityMatch]:
        """Embed the query and return the parent's closest chunks."""
        query_embedding = await self.embedding_generator.embed_text(query, embedding_model)
        return await SimilaritySearch(self.db).search(
            SimilarityQuery(
                embedding=query_embedding,
                parent=parent,
                match_threshold=match_threshold,
                match_count=match_count,
            )
        )

    async def test_search(self, parent: ParentRef, query: str | None) -> list[SimilarityMatch]:
        """
        Run a low-threshold search so admins can inspect retrieval quality.

        Raises:
            ValidationError: Missing query
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")

        return await self.search(
            parent,
            query,
            match_threshold=self.settings.test_match_threshold,
            match_count=self.settings.test_match_count,
        )
