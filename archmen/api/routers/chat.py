"""
Chat API endpoints.

Routes:
- POST /chat - Answer with the default archetype guide prompt
- POST /enhanced-chat - Answer grounded on an assessment or archetype knowledge base

Auth is optional on both; signed-in requests are logged with the user ID.
Signed-in enhanced-chat calls that send a conversationId also save the
transcript; anonymous calls never do.

Dependencies: archmen.application.services.chat_service
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from archmen.api.deps.dependencies import get_chat_service, get_optional_user
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.chat_service import ChatService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.boundary.db.models.parent import ParentRef
from archmen.core.exceptions import ValidationError
from archmen.models.chat import (
    ChatRequest,
    ChatResponse,
    ContextChunk,
    EnhancedChatRequest,
    EnhancedChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
@handle_api_errors
async def chat(
    request: ChatRequest,
    user: AuthenticatedUser | None = Depends(get_optional_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Raises:
        HTTPException(400): No messages or last message not from the user
        HTTPException(500): Chat provider failure
    """
    if user:
        logger.info("Authenticated chat request", extra={"user_id": str(user.id)})
    content = await chat_service.chat(request.messages)
    return ChatResponse(content=content)


@router.post("/enhanced-chat", response_model=EnhancedChatResponse)
@handle_api_errors
async def enhanced_chat(
    request: EnhancedChatRequest,
    user: AuthenticatedUser | None = Depends(get_optional_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> EnhancedChatResponse:
    """
    Raises:
        HTTPException(400): Invalid conversation, or both parent IDs sent
        HTTPException(404): Assessment or archetype not found, or conversation owned by another user
        HTTPException(500): Embedding, search or chat provider failure
    """
    if request.assessment_id and request.archetype_id:
        raise ValidationError("Send either assessmentId or archetypeId, not both")

    parent = None
    if request.assessment_id:
        parent = ParentRef.assessment(request.assessment_id)
    elif request.archetype_id:
        parent = ParentRef.archetype(request.archetype_id)

    if user:
        logger.info("Authenticated enhanced chat request", extra={"user_id": str(user.id)})

    content, context = await chat_service.enhanced_chat(request.messages, parent)

    if request.conversation_id and user:
        await chat_service.save_conversation(
            user.id,
            request.conversation_id,
            request.messages,
            content,
            parent,
            context,
        )

    return EnhancedChatResponse(
        content=content,
        context=[
            ContextChunk(
                chunk_id=match.chunk_id,
                chunk_index=match.chunk_index,
                content=match.content,
                similarity=match.similarity,
            )
            for match in context
        ],
    )
