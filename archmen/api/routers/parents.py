"""
Assessment and archetype API endpoints.

Routes:
- POST /assessments - Create assessment
- GET /assessments - List assessments
- GET /assessments/{id} - Get single assessment
- PATCH /assessments/{id} - Partially update assessment
- POST /archetypes - Create archetype
- GET /archetypes - List archetypes
- GET /archetypes/{id} - Get single archetype
- PATCH /archetypes/{id} - Partially update archetype

Creating and updating require auth; reads are public.

Dependencies: archmen.application.services, archmen.models
System role: Knowledge base parent management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from archmen.api.deps.dependencies import (
    get_archetype_service,
    get_assessment_service,
    get_current_user,
)
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.parent_service import ArchetypeService, AssessmentService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.models.parents import (
    ArchetypeResponse,
    AssessmentResponse,
    CreateArchetypeRequest,
    CreateAssessmentRequest,
    UpdateArchetypeRequest,
    UpdateAssessmentRequest,
)

logger = logging.getLogger(__name__)

assessments_router = APIRouter(prefix="/assessments", tags=["assessments"])
archetypes_router = APIRouter(prefix="/archetypes", tags=["archetypes"])


@assessments_router.post("", response_model=AssessmentResponse, status_code=201)
@handle_api_errors
async def create_assessment(
    request: CreateAssessmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResponse:
    assessment = await service.create_assessment(request)
    logger.info("Assessment created", extra={"assessment_id": str(assessment.id)})
    return AssessmentResponse.model_validate(assessment)


@assessments_router.get("", response_model=list[AssessmentResponse])
@handle_api_errors
async def list_assessments(
    active_only: bool = False,
    service: AssessmentService = Depends(get_assessment_service),
) -> list[AssessmentResponse]:
    assessments = await service.list_assessments(active_only=active_only)
    return [AssessmentResponse.model_validate(a) for a in assessments]


@assessments_router.get("/{assessment_id}", response_model=AssessmentResponse)
@handle_api_errors
async def get_assessment(
    assessment_id: UUID,
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResponse:
    return AssessmentResponse.model_validate(await service.get_assessment(assessment_id))


@assessments_router.patch("/{assessment_id}", response_model=AssessmentResponse)
@handle_api_errors
async def update_assessment(
    assessment_id: UUID,
    request: UpdateAssessmentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResponse:
    """
    Raises:
        HTTPException(400): Empty body or null name
        HTTPException(404): Assessment not found
    """
    assessment = await service.update_assessment(assessment_id, request)
    return AssessmentResponse.model_validate(assessment)


@archetypes_router.post("", response_model=ArchetypeResponse, status_code=201)
@handle_api_errors
async def create_archetype(
    request: CreateArchetypeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ArchetypeService = Depends(get_archetype_service),
) -> ArchetypeResponse:
    archetype = await service.create_archetype(request)
    logger.info("Archetype created", extra={"archetype_id": str(archetype.id)})
    return ArchetypeResponse.model_validate(archetype)


@archetypes_router.get("", response_model=list[ArchetypeResponse])
@handle_api_errors
async def list_archetypes(
    service: ArchetypeService = Depends(get_archetype_service),
) -> list[ArchetypeResponse]:
    return [ArchetypeResponse.model_validate(a) for a in await service.list_archetypes()]


@archetypes_router.get("/{archetype_id}", response_model=ArchetypeResponse)
@handle_api_errors
async def get_archetype(
    archetype_id: UUID,
    service: ArchetypeService = Depends(get_archetype_service),
) -> ArchetypeResponse:
    return ArchetypeResponse.model_validate(await service.get_archetype(archetype_id))


@archetypes_router.patch("/{archetype_id}", response_model=ArchetypeResponse)
@handle_api_errors
async def update_archetype(
    archetype_id: UUID,
    request: UpdateArchetypeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ArchetypeService = Depends(get_archetype_service),
) -> ArchetypeResponse:
    """
    Raises:
        HTTPException(400): Empty body or null name
        HTTPException(404): Archetype not found
    """
    archetype = await service.update_archetype(archetype_id, request)
    logger.info("Archetype updated", extra={"archetype_id": str(archetype.id)})
    return ArchetypeResponse.model_validate(archetype)
