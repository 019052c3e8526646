"""
Chunking strategy comparison.

Ranks word-window chunking configurations by how well a cheap keyword
retriever finds relevant chunks for a set of test queries. Used by admins
to pick chunk size / overlap before running real embeddings.

Dependencies: None (pure domain layer)
System role: Offline evaluation of chunking configurations
"""

import re
import time
from dataclasses import dataclass, field

from archmen.core.exceptions import ChunkingConfigurationError

WORDS_PER_TOKEN = 0.75
TOP_K = 5
PREVIEW_CHARS = 100

SAMPLE_CONTENT = """
Attachment theory, developed by John Bowlby, describes the emotional bonds between people.
It suggests that early relationships with caregivers shape our ability to form relationships throughout life.

There are four main attachment styles: secure, anxious-preoccupied, dismissive-avoidant, and disorganized.
Secure attachment develops when caregivers are consistently responsive and available.

Archetypes, as described by Carl Jung, are universal patterns or images that derive from the collective unconscious.
They appear in dreams, literature, art, and religion across cultures.

The Shadow archetype represents the hidden, repressed, or denied aspects of the self.
Shadow work involves acknowledging and integrating these aspects for psychological wholeness.

In relationships, archetypal patterns influence how we connect with others.
The Lover archetype seeks passion and intimacy, while the Caregiver focuses on nurturing and support.
"""


@dataclass
class ChunkingConfig:
    """One chunking configuration under test."""

    name: str
    chunk_size: int
    chunk_overlap: int
    test_queries: list[str]
    split_by: str = "words"
    sample_content: str | None = None


@dataclass
class ScoredChunk:
    content: str
    similarity: float


@dataclass
class QueryResult:
    query: str
    relevance_score: float
    retrieval_time_ms: float
    top_chunks: list[ScoredChunk] = field(default_factory=list)


@dataclass
class ChunkingEvaluation:
    """Aggregate result for one configuration."""

    config_name: str
    chunk_size: int
    chunk_overlap: int
    split_by: str
    score: float
    avg_relevance: float
    avg_time_ms: float
    chunks_generated: int
    test_results: list[QueryResult]


def _tokenize(text: str) -> list[str]:
    return [word for word in re.split(r"\s+", text) if word]


def chunk_words(content: str, chunk_size: int, chunk_overlap: int) -> list[str]:
    """
    Split content into overlapping word windows.

    Sizes are given in tokens and converted to words at 0.75 words/token.

    Raises:
        ChunkingConfigurationError: When the window could not advance
    """
    words_per_chunk = int(chunk_size * WORDS_PER_TOKEN)
    overlap_words = int(chunk_overlap * WORDS_PER_TOKEN)
    if words_per_chunk <= 0 or overlap_words < 0 or overlap_words >= words_per_chunk:
        raise ChunkingConfigurationError(
            "Chunk overlap must be smaller than the chunk size",
            chunk_size=chunk_size,
            overlap=chunk_overlap,
        )

    words = _tokenize(content)
    chunks: list[str] = []
    start = 0
    while start < len(words):
        end = min(start + words_per_chunk, len(words))
        chunks.append(" ".join(words[start:end]))
        if end == len(words):
            break
        start = end - overlap_words
    return chunks


def keyword_similarity(query: str, content: str) -> float:
    """Fraction of query words found (as substrings either way) among the chunk's words."""
    query_words = _tokenize(query.lower())
    if not query_words:
        return 0.0
    chunk_words_lower = _tokenize(content.lower())
    matches = sum(
        1
        for query_word in query_words
        if any(query_word in word or word in query_word for word in chunk_words_lower)
    )
    return matches / len(query_words)


def retrieve(query: str, chunks: list[str], top_k: int = TOP_K) -> list[ScoredChunk]:
    scored = [ScoredChunk(content=chunk, similarity=keyword_similarity(query, chunk)) for chunk in chunks]
    scored.sort(key=lambda c: c.similarity, reverse=True)
    return scored[:top_k]


def relevance_score(results: list[ScoredChunk]) -> float:
    """Weighted score: the top hit counts 60%, the mean of the top three 40%."""
    if not results:
        return 0.0
    top_three = results[:3]
    avg_top_three = sum(r.similarity for r in top_three) / len(top_three)
    return results[0].similarity * 0.6 + avg_top_three * 0.4


def evaluate_config(config: ChunkingConfig, default_content: str = SAMPLE_CONTENT) -> ChunkingEvaluation:
    """Chunk the sample content with one configuration and score every query."""
    chunks = chunk_words(config.sample_content or default_content, config.chunk_size, config.chunk_overlap)

    query_results: list[QueryResult] = []
    for query in config.test_queries:
        started = time.perf_counter()
        retrieved = retrieve(query, chunks)
        elapsed_ms = (time.perf_counter() - started) * 1000
        query_results.append(
            QueryResult(
                query=query,
                relevance_score=relevance_score(retrieved),
                retrieval_time_ms=elapsed_ms,
                top_chunks=[
                    ScoredChunk(content=c.content[:PREVIEW_CHARS] + "...", similarity=c.similarity)
                    for c in retrieved[:3]
                ],
            )
        )

    count = len(query_results)
    avg_relevance = sum(r.relevance_score for r in query_results) / count if count else 0.0
    avg_time = sum(r.retrieval_time_ms for r in query_results) / count if count else 0.0
    score = avg_relevance * 0.8 + (1000 - min(avg_time, 1000)) / 1000 * 0.2

    return ChunkingEvaluation(
        config_name=config.name,
        chunk_size=config.chunk_size,
        chunk_overlap=config.chunk_overlap,
        split_by=config.split_by,
        score=score,
        avg_relevance=avg_relevance,
        avg_time_ms=avg_time,
        chunks_generated=len(chunks),
        test_results=query_results,
    )


def evaluate_chunking_strategies(
    configs: list[ChunkingConfig],
    sample_content: str = SAMPLE_CONTENT,
) -> list[ChunkingEvaluation]:
    """Evaluate every configuration and return them best score first."""
    results = [evaluate_config(config, sample_content) for config in configs]
    results.sort(key=lambda r: r.score, reverse=True)
    return results
