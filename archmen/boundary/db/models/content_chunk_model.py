"""
Content chunk ORM model.

One window of a knowledge base document together with its embedding.
Embeddings are stored as JSON arrays and cast to pgvector inside the
match_content_chunks database function.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Knowledge base chunk persistence
"""

from sqlalchemy import Integer, JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from archmen.boundary.db.base import Base, ParentOwnedMixin, TimestampMixin, UUIDMixin


class ContentChunkModel(Base, UUIDMixin, TimestampMixin, ParentOwnedMixin):
    """
    Content chunk ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        assessment_id / archetype_id: Owning parent (exactly one is set)
        chunk_index: 0-based position within the parent, unique per parent
        chunk_text: Raw text span
        chunk_size: Character length of chunk_text
        chunk_overlap: Characters shared with the previous chunk (0 for the first)
        content_type: Source content type ("text", "file", ...)
        source_url: Optional URL of the source document
        chunk_metadata: processedAt, model, originalLength, chunkCount
        embedding: Embedding vector as JSON array

    Constraints:
        ck_content_chunks_single_parent: exactly one parent FK is set
        (parent, chunk_index): UNIQUE
    """

    __tablename__ = "content_chunks"
    __table_args__ = (
        ParentOwnedMixin.single_parent_constraint("content_chunks"),
        UniqueConstraint("assessment_id", "chunk_index", name="uq_content_chunks_assessment_index"),
        UniqueConstraint("archetype_id", "chunk_index", name="uq_content_chunks_archetype_index"),
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_text: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_size: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_overlap: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content_type: Mapped[str] = mapped_column(String(50), nullable=False, default="text")
    source_url: Mapped[str | None] = mapped_column(String(2048), nullable=True, default=None)
    chunk_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)

    assessment = relationship("AssessmentModel", back_populates="chunks")
    archetype = relationship("ArchetypeModel", back_populates="chunks")
