"""
Database-side similarity search.

Runs the match_content_chunks PostgreSQL function (pgvector cosine
similarity) for one parent's knowledge base.

Dependencies: sqlalchemy, archmen.boundary.vdb.vector_schemas
System role: Similarity Search adapter for RAG retrieval
"""

import json
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.vdb.vector_schemas import SimilarityMatch, SimilarityQuery
from archmen.core.exceptions import SimilaritySearchError

logger = logging.getLogger(__name__)

MATCH_CONTENT_CHUNKS = text(
    "SELECT id, chunk_index, content, similarity "
    "FROM match_content_chunks("
    "CAST(:query_embedding AS json), :parent_kind, :parent_id, "
    ":match_threshold, :match_count)"
)


class SimilaritySearch:
    """
    Nearest-neighbour lookup scoped to one parent.

    Results are re-checked against the threshold and the limit after the
    database call, so callers can rely on both even if the SQL function
    is replaced with a looser implementation.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize search with a request-scoped session.

        Args:
            db: Async database session
        """
        self.db = db

    async def search(self, query: SimilarityQuery) -> list[SimilarityMatch]:
        """
        Return the top matching chunks for the query embedding.

        Args:
            query: Embedding, parent scope, threshold and result limit

        Returns:
            list[SimilarityMatch]: Matches with similarity above the threshold,
            highest first, at most match_count entries

        Raises:
            SimilaritySearchError: When the database call fails
        """
        params = {
            "query_embedding": json.dumps(query.embedding),
            "parent_kind": query.parent.kind.value,
            "parent_id": query.parent.id,
            "match_threshold": query.match_threshold,
            "match_count": query.match_count,
        }

        try:
            result = await self.db.execute(MATCH_CONTENT_CHUNKS, params)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:search - match_content_chunks failed: {type(e).__name__}: {e}"
            )
            raise SimilaritySearchError(
                f"Similarity search failed: {e}",
                parent_id=str(query.parent.id),
            ) from e

        matches = [
            SimilarityMatch(
                chunk_id=row["id"],
                chunk_index=row["chunk_index"],
                content=row["content"],
                similarity=float(row["similarity"]),
            )
            for row in rows
            if float(row["similarity"]) > query.match_threshold
        ]
        matches.sort(key=lambda match: match.similarity, reverse=True)
        matches = matches[: query.match_count]

        logger.info(
            f"{__name__}:search - {len(matches)} matches",
            extra={
                "parent_kind": query.parent.kind.value,
                "parent_id": str(query.parent.id),
                "threshold": query.match_threshold,
                "returned": len(matches),
            },
        )
        return matches
