"""
Knowledge base API endpoints.

Routes:
- POST /process-assessment-content - Chunk, embed and store assessment content
- POST /process-archetype-content - Chunk, embed and store archetype content
- POST /assessment-content/{assessment_id}/upload - Upload a text file and process it
- GET /assessment-content/{assessment_id} - List assessment chunks and settings
- DELETE /assessment-content/{chunk_id} - Delete one assessment chunk
- GET /archetype-content/{archetype_id} - List archetype chunks and settings
- DELETE /archetype-content/{chunk_id} - Delete one archetype chunk
- POST /test-embedding - Low-threshold search over an assessment
- POST /test-archetype-embedding - Low-threshold search over an archetype

Dependencies: archmen.application.services, archmen.models
System role: Knowledge base management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile

from archmen.api.deps.dependencies import get_current_user, get_knowledge_base_service
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.knowledge_base_service import KnowledgeBaseService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.boundary.db.models.parent import ParentRef
from archmen.core.exceptions import ValidationError
from archmen.models.common import MessageResponse
from archmen.models.knowledge_base import (
    ArchetypeEmbeddingTestRequest,
    EmbeddingTestRequest,
    EmbeddingTestResponse,
    KnowledgeBaseContentResponse,
    ProcessArchetypeContentRequest,
    ProcessAssessmentContentRequest,
    ProcessContentData,
    ProcessContentResponse,
    SearchResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["knowledge-base"])


def _processed(data: ProcessContentData) -> ProcessContentResponse:
    return ProcessContentResponse(
        message=f"Successfully processed and embedded {data.chunks_processed} chunks",
        data=data,
    )


@router.post(
    "/process-assessment-content",
    response_model=ProcessContentResponse,
    response_model_exclude_none=True,
)
@handle_api_errors
async def process_assessment_content(
    request: ProcessAssessmentContentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> ProcessContentResponse:
    """
    Replace an assessment's knowledge base with new content.

    Raises:
        HTTPException(400): Missing assessment ID/content, invalid chunk settings
        HTTPException(401): Not signed in
        HTTPException(404): Assessment not found
        HTTPException(500): Embedding or database failure
    """
    if request.assessment_id is None:
        raise ValidationError("Assessment ID is required", field="assessmentId")

    logger.info(
        "Processing assessment content",
        extra={"assessment_id": str(request.assessment_id), "user_id": str(user.id)},
    )
    data = await service.process_content(
        ParentRef.assessment(request.assessment_id),
        request.content,
        settings=request.settings,
        source_url=request.source_url,
        content_type=request.content_type,
    )
    return _processed(data)


@router.post(
    "/process-archetype-content",
    response_model=ProcessContentResponse,
    response_model_exclude_none=True,
)
@handle_api_errors
async def process_archetype_content(
    request: ProcessArchetypeContentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> ProcessContentResponse:
    """Replace an archetype's knowledge base with new content."""
    if request.archetype_id is None:
        raise ValidationError("Archetype ID is required", field="archetypeId")

    logger.info(
        "Processing archetype content",
        extra={"archetype_id": str(request.archetype_id), "user_id": str(user.id)},
    )
    data = await service.process_content(
        ParentRef.archetype(request.archetype_id),
        request.content,
        settings=request.settings,
        source_url=request.source_url,
        content_type=request.content_type,
    )
    return _processed(data)


@router.post(
    "/assessment-content/{assessment_id}/upload",
    response_model=ProcessContentResponse,
    response_model_exclude_none=True,
)
@handle_api_errors
async def upload_assessment_content(
    assessment_id: UUID,
    file: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_current_user),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> ProcessContentResponse:
    """
    Store a UTF-8 text file and make it the assessment's knowledge base.

    Raises:
        HTTPException(400): Empty or non-UTF-8 file
        HTTPException(404): Assessment not found
        HTTPException(500): Storage, embedding or database failure
    """
    body = await file.read()
    data = await service.upload_file(
        ParentRef.assessment(assessment_id),
        filename=file.filename or "upload.txt",
        body=body,
        mime_type=file.content_type,
    )
    return _processed(data)


@router.get("/assessment-content/{assessment_id}", response_model=KnowledgeBaseContentResponse)
@handle_api_errors
async def get_assessment_content(
    assessment_id: UUID,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> KnowledgeBaseContentResponse:
    """List an assessment's chunks in index order with its embedding settings."""
    return await service.get_content(ParentRef.assessment(assessment_id))


@router.delete("/assessment-content/{chunk_id}", response_model=MessageResponse)
@handle_api_errors
async def delete_assessment_chunk(
    chunk_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> MessageResponse:
    """Delete one chunk. 404 when it does not exist."""
    await service.delete_chunk(chunk_id)
    return MessageResponse(message="Content chunk deleted successfully")


@router.get("/archetype-content/{archetype_id}", response_model=KnowledgeBaseContentResponse)
@handle_api_errors
async def get_archetype_content(
    archetype_id: UUID,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> KnowledgeBaseContentResponse:
    """List an archetype's chunks in index order with its embedding settings."""
    return await service.get_content(ParentRef.archetype(archetype_id))


@router.delete("/archetype-content/{chunk_id}", response_model=MessageResponse)
@handle_api_errors
async def delete_archetype_chunk(
    chunk_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> MessageResponse:
    await service.delete_chunk(chunk_id)
    return MessageResponse(message="Content chunk deleted successfully")


@router.post("/test-embedding", response_model=EmbeddingTestResponse)
@handle_api_errors
async def test_embedding(
    request: EmbeddingTestRequest,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> EmbeddingTestResponse:
    """
    Search an assessment's chunks with a low threshold (0.1, top 5).

    Raises:
        HTTPException(400): Missing query or assessment ID
    """
    if request.assessment_id is None or not request.query:
        raise ValidationError("Query and assessmentId are required")

    matches = await service.test_search(ParentRef.assessment(request.assessment_id), request.query)
    return EmbeddingTestResponse(
        results=[SearchResult(content=m.content, similarity=m.similarity) for m in matches],
        query=request.query,
    )


@router.post("/test-archetype-embedding", response_model=EmbeddingTestResponse)
@handle_api_errors
async def test_archetype_embedding(
    request: ArchetypeEmbeddingTestRequest,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
) -> EmbeddingTestResponse:
    """Search an archetype's chunks with a low threshold (0.1, top 5)."""
    if request.archetype_id is None or not request.query:
        raise ValidationError("Query and archetypeId are required")

    matches = await service.test_search(ParentRef.archetype(request.archetype_id), request.query)
    return EmbeddingTestResponse(
        results=[SearchResult(content=m.content, similarity=m.similarity) for m in matches],
        query=request.query,
    )
