"""
Knowledge base configuration settings.

Chunking defaults, embedding batch pacing and similarity-search
thresholds for the RAG pipeline.

Dependencies: pydantic, pydantic_settings
System role: RAG pipeline tuning parameters
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from archmen.configs.base import BaseSettings


class KnowledgeBaseSettings(BaseSettings):
    """Chunking, embedding and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KB_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Default chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Default overlap in characters")
    context_window: int = Field(default=4000, gt=0, description="Default context window")

    embedding_batch_size: int = Field(default=5, gt=0, description="Concurrent embedding calls per batch")
    batch_delay_seconds: float = Field(default=0.1, ge=0.0, description="Pause between embedding batches")
    max_embedding_input_chars: int = Field(
        default=8000,
        gt=0,
        description="Embedding input is truncated to this many characters",
    )

    test_match_threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    test_match_count: int = Field(default=5, ge=1, le=100)
    chat_match_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    chat_match_count: int = Field(default=5, ge=1, le=100)
