"""
Assessment chat history API endpoints.

Routes:
- GET /chat-history?assessmentSessionId=... - Session's messages in order
- POST /chat-history - Append one message

Both require auth and only reach the caller's own sessions.

Dependencies: archmen.application.services.chat_history_service
System role: Assessment conversation HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from archmen.api.deps.dependencies import get_chat_history_service, get_current_user
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.chat_history_service import ChatHistoryService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.models.chat_history import (
    AddChatMessageRequest,
    ChatHistoryMessageResponse,
    ChatHistoryResponse,
)

router = APIRouter(prefix="/chat-history", tags=["chat-history"])


@router.get("", response_model=ChatHistoryResponse)
@handle_api_errors
async def get_chat_history(
    assessment_session_id: UUID = Query(alias="assessmentSessionId"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ChatHistoryService = Depends(get_chat_history_service),
) -> ChatHistoryResponse:
    """
    Raises:
        HTTPException(404): Session not found or owned by another user
    """
    messages = await service.list_messages(user.id, assessment_session_id)
    return ChatHistoryResponse(
        messages=[ChatHistoryMessageResponse.model_validate(m) for m in messages],
    )


@router.post("", response_model=ChatHistoryMessageResponse, status_code=201)
@handle_api_errors
async def add_chat_message(
    request: AddChatMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ChatHistoryService = Depends(get_chat_history_service),
) -> ChatHistoryMessageResponse:
    """
    Raises:
        HTTPException(400): Blank content
        HTTPException(404): Session not found or owned by another user
        HTTPException(409): Message index already recorded
    """
    message = await service.add_message(
        user.id,
        request.assessment_session_id,
        request.message_type,
        request.content,
        request.message_index,
    )
    return ChatHistoryMessageResponse.model_validate(message)
