"""
Assessment session API endpoints.

Routes:
- POST /assessment-sessions - Start a session
- GET /assessment-sessions - List the current user's sessions
- GET /assessment-sessions/{id} - Get single session
- PATCH /assessment-sessions/{id}/progress - Record progress
- POST /assessment-sessions/{id}/complete - Complete and snapshot archetypes
- POST /assessment-sessions/{id}/abandon - Abandon
- DELETE /assessment-sessions/{id} - Delete

All routes require auth and only see the caller's own sessions.

Dependencies: archmen.application.services.assessment_session_service
System role: Assessment session HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from archmen.api.deps.dependencies import get_assessment_session_service, get_current_user
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.assessment_session_service import AssessmentSessionService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.core.assessment.session_state import SessionStatus
from archmen.models.assessment_session import (
    AssessmentSessionResponse,
    CompleteSessionRequest,
    StartSessionRequest,
    UpdateProgressRequest,
)
from archmen.models.common import MessageResponse

router = APIRouter(prefix="/assessment-sessions", tags=["assessment-sessions"])


@router.post("", response_model=AssessmentSessionResponse, status_code=201)
@handle_api_errors
async def start_session(
    request: StartSessionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> AssessmentSessionResponse:
    """
    Raises:
        HTTPException(400): Assessment not active
        HTTPException(404): Assessment not found
    """
    session = await service.start_session(user.id, request.assessment_id)
    return AssessmentSessionResponse.model_validate(session)


@router.get("", response_model=list[AssessmentSessionResponse])
@handle_api_errors
async def list_sessions(
    status: SessionStatus | None = None,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> list[AssessmentSessionResponse]:
    sessions = await service.list_sessions(user.id, status)
    return [AssessmentSessionResponse.model_validate(s) for s in sessions]


@router.get("/{session_id}", response_model=AssessmentSessionResponse)
@handle_api_errors
async def get_session(
    session_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> AssessmentSessionResponse:
    return AssessmentSessionResponse.model_validate(await service.get_session(user.id, session_id))


@router.patch("/{session_id}/progress", response_model=AssessmentSessionResponse)
@handle_api_errors
async def update_progress(
    session_id: UUID,
    request: UpdateProgressRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> AssessmentSessionResponse:
    """
    Raises:
        HTTPException(400): Progress out of range
        HTTPException(409): Session already completed or abandoned
    """
    session = await service.update_progress(
        user.id,
        session_id,
        progress_percentage=request.progress_percentage,
        current_question_index=request.current_question_index,
    )
    return AssessmentSessionResponse.model_validate(session)


@router.post("/{session_id}/complete", response_model=AssessmentSessionResponse)
@handle_api_errors
async def complete_session(
    session_id: UUID,
    request: CompleteSessionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> AssessmentSessionResponse:
    session = await service.complete_session(user.id, session_id, request.discovered_archetypes)
    return AssessmentSessionResponse.model_validate(session)


@router.post("/{session_id}/abandon", response_model=AssessmentSessionResponse)
@handle_api_errors
async def abandon_session(
    session_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> AssessmentSessionResponse:
    return AssessmentSessionResponse.model_validate(await service.abandon_session(user.id, session_id))


@router.delete("/{session_id}", response_model=MessageResponse)
@handle_api_errors
async def delete_session(
    session_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentSessionService = Depends(get_assessment_session_service),
) -> MessageResponse:
    await service.delete_session(user.id, session_id)
    return MessageResponse(message="Assessment session deleted")
