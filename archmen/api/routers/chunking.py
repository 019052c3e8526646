"""
Chunking evaluation endpoint.

Routes:
- POST /test-chunking - Rank word-based chunking strategies on sample content

Dependencies: archmen.core.knowledge_base.chunking_evaluation
System role: Chunking strategy comparison HTTP API
"""

from fastapi import APIRouter

from archmen.api.error_handling import handle_api_errors
from archmen.core.exceptions import ValidationError
from archmen.core.knowledge_base.chunking_evaluation import (
    ChunkingConfig,
    ChunkingEvaluation,
    evaluate_chunking_strategies,
)
from archmen.models.knowledge_base import (
    ChunkingQueryResult,
    ChunkingTestRequest,
    ChunkingTestResponse,
    ChunkingTestResult,
    TopChunk,
)

router = APIRouter(tags=["knowledge-base"])


def map_evaluation_to_response(evaluation: ChunkingEvaluation) -> ChunkingTestResult:
    return ChunkingTestResult(
        config_name=evaluation.config_name,
        chunk_size=evaluation.chunk_size,
        chunk_overlap=evaluation.chunk_overlap,
        split_by=evaluation.split_by,
        score=evaluation.score,
        avg_relevance=evaluation.avg_relevance,
        avg_time=evaluation.avg_time_ms,
        chunks_generated=evaluation.chunks_generated,
        test_results=[
            ChunkingQueryResult(
                query=result.query,
                relevance_score=result.relevance_score,
                retrieval_time=result.retrieval_time_ms,
                top_chunks=[
                    TopChunk(content=chunk.content, similarity=chunk.similarity)
                    for chunk in result.top_chunks
                ],
            )
            for result in evaluation.test_results
        ],
    )


@router.post("/test-chunking", response_model=ChunkingTestResponse)
@handle_api_errors
async def test_chunking(request: ChunkingTestRequest) -> ChunkingTestResponse:
    """
    Evaluate each chunking configuration with keyword retrieval.

    Raises:
        HTTPException(400): Missing configurations or overlap >= chunk size
    """
    if not request.test_configs:
        raise ValidationError("Invalid test configurations provided", field="testConfigs")

    evaluations = evaluate_chunking_strategies(
        [
            ChunkingConfig(
                name=config.name,
                chunk_size=config.chunk_size,
                chunk_overlap=config.chunk_overlap,
                test_queries=config.test_queries,
                split_by=config.split_by,
                sample_content=config.sample_content,
            )
            for config in request.test_configs
        ]
    )
    return ChunkingTestResponse(results=[map_evaluation_to_response(e) for e in evaluations])
