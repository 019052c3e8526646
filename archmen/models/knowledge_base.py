"""
Knowledge base domain models and schemas.

Request/response schemas for content processing, listing and test search.

Dependencies: pydantic
System role: Knowledge base API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from archmen.models.common import CamelModel


class ProcessingSettings(CamelModel):
    """Chunking and embedding settings for one processing run."""

    chunk_size: int = Field(default=1000, description="Window size in characters")
    chunk_overlap: int = Field(default=200, description="Characters shared with the previous chunk")
    embedding_model: str = Field(default="text-embedding-3-small")
    context_window: int = Field(default=4000, gt=0)
    semantic_search_enabled: bool = True


class ProcessContentRequest(CamelModel):
    """
    Content to chunk and embed for one parent.

    textContent wins over fileContent when both are sent.
    """

    text_content: str | None = None
    file_content: str | None = None
    source_url: str | None = None
    content_type: str = "text"
    settings: ProcessingSettings | None = None

    @property
    def content(self) -> str | None:
        return self.text_content or self.file_content


class ProcessAssessmentContentRequest(ProcessContentRequest):
    assessment_id: uuid.UUID | None = None


class ProcessArchetypeContentRequest(ProcessContentRequest):
    archetype_id: uuid.UUID | None = None


class ChunkSummary(CamelModel):
    """Short description of a stored chunk."""

    id: uuid.UUID
    index: int
    size: int
    preview: str


class ProcessContentData(CamelModel):
    assessment_id: uuid.UUID | None = None
    archetype_id: uuid.UUID | None = None
    chunks_processed: int
    total_characters: int
    settings: ProcessingSettings
    chunks: list[ChunkSummary]


class ProcessContentResponse(CamelModel):
    success: bool = True
    message: str
    data: ProcessContentData


class ContentChunkResponse(CamelModel):
    """Stored chunk without its embedding vector."""

    id: uuid.UUID
    chunk_index: int
    chunk_text: str
    chunk_size: int
    chunk_overlap: int
    content_type: str
    source_url: str | None
    metadata: dict = Field(default_factory=dict, validation_alias="chunk_metadata")
    created_at: datetime


class EmbeddingSettingsResponse(CamelModel):
    chunk_size: int
    chunk_overlap: int
    embedding_model: str
    context_window: int
    semantic_search_enabled: bool
    updated_at: datetime


class KnowledgeBaseContentResponse(CamelModel):
    chunks: list[ContentChunkResponse]
    settings: EmbeddingSettingsResponse | None
    total_chunks: int
    total_characters: int


class EmbeddingTestRequest(CamelModel):
    query: str | None = None
    assessment_id: uuid.UUID | None = None


class ArchetypeEmbeddingTestRequest(CamelModel):
    query: str | None = None
    archetype_id: uuid.UUID | None = None


class SearchResult(CamelModel):
    content: str
    similarity: float


class EmbeddingTestResponse(CamelModel):
    success: bool = True
    results: list[SearchResult]
    query: str


class ChunkingTestConfig(BaseModel):
    """One chunking strategy to evaluate (snake_case on the wire)."""

    name: str
    chunk_size: int
    chunk_overlap: int = 0
    split_by: str = "words"
    test_queries: list[str] = Field(default_factory=list)
    sample_content: str | None = None


class ChunkingTestRequest(CamelModel):
    test_configs: list[ChunkingTestConfig] | None = None


class TopChunk(BaseModel):
    content: str
    similarity: float


class ChunkingQueryResult(BaseModel):
    query: str
    relevance_score: float
    retrieval_time: float
    top_chunks: list[TopChunk]


class ChunkingTestResult(BaseModel):
    config_name: str
    chunk_size: int
    chunk_overlap: int
    split_by: str
    score: float
    avg_relevance: float
    avg_time: float
    chunks_generated: int
    test_results: list[ChunkingQueryResult]


class ChunkingTestResponse(CamelModel):
    success: bool = True
    results: list[ChunkingTestResult]
