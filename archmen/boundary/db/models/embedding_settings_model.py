"""
Embedding settings ORM model.

Per-parent chunking and embedding configuration, overwritten on every
processing run.

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Knowledge base configuration persistence
"""

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from archmen.boundary.db.base import Base, ParentOwnedMixin, TimestampMixin, UUIDMixin


class EmbeddingSettingsModel(Base, UUIDMixin, TimestampMixin, ParentOwnedMixin):
    """
    Embedding settings ORM model (one row per parent).

    Attributes:
        chunk_size: Chunk window size in characters
        chunk_overlap: Overlap between consecutive chunks
        embedding_model: Embedding model identifier
        context_window: Token budget for retrieved context
        semantic_search_enabled: Whether chat uses this knowledge base
    """

    __tablename__ = "embedding_settings"
    __table_args__ = (
        ParentOwnedMixin.single_parent_constraint("embedding_settings"),
        UniqueConstraint("assessment_id", name="uq_embedding_settings_assessment"),
        UniqueConstraint("archetype_id", name="uq_embedding_settings_archetype"),
    )

    chunk_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)
    chunk_overlap: Mapped[int] = mapped_column(Integer, nullable=False, default=200)
    embedding_model: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="text-embedding-3-small",
    )
    context_window: Mapped[int] = mapped_column(Integer, nullable=False, default=4000)
    semantic_search_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
