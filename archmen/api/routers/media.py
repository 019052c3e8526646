"""
Media generation API endpoints.

Routes:
- POST /generate-avatar - 501 Not Implemented
- POST /generate-video - 501 Not Implemented

Dependencies: archmen.application.services.media_service
System role: Media generation HTTP API
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from archmen.api.deps.dependencies import get_current_user, get_media_service
from archmen.api.error_handling import handle_api_errors
from archmen.application.services.media_service import MediaService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser
from archmen.models.media import GenerateAvatarRequest, GenerateVideoRequest, NotImplementedCapability

router = APIRouter(tags=["media"])


def _capability_response(result: NotImplementedCapability) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        content=result.model_dump(by_alias=True),
    )


@router.post(
    "/generate-avatar",
    status_code=501,
    responses={501: {"model": NotImplementedCapability}},
)
@handle_api_errors
async def generate_avatar(
    request: GenerateAvatarRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
) -> JSONResponse:
    return _capability_response(await service.generate_avatar(request))


@router.post(
    "/generate-video",
    status_code=501,
    responses={501: {"model": NotImplementedCapability}},
)
@handle_api_errors
async def generate_video(
    request: GenerateVideoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
) -> JSONResponse:
    return _capability_response(await service.generate_video(request))
