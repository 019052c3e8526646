"""
Vector search schemas.

Pydantic models for similarity-search queries and results.
Used for type-safe vector search interactions.

Dependencies: pydantic, archmen.boundary.db.models
System role: Type definitions for vector operations
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from archmen.boundary.db.models.parent import ParentRef


class SimilarityQuery(BaseModel):
    """Query parameters for similarity search."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    embedding: list[float] = Field(description="Query embedding vector")
    parent: ParentRef = Field(description="Only chunks owned by this parent are searched")
    match_threshold: float = Field(
        default=0.5,
        description="Results must score strictly above this (0.0-1.0)",
        ge=0.0,
        le=1.0,
    )
    match_count: int = Field(default=5, description="Maximum number of results", ge=1, le=100)


class SimilarityMatch(BaseModel):
    """Single result from similarity search."""

    chunk_id: uuid.UUID = Field(description="Chunk identifier")
    chunk_index: int = Field(description="Position of the chunk within its parent")
    content: str = Field(description="Chunk text content")
    similarity: float = Field(description="Cosine similarity (0.0-1.0)")
