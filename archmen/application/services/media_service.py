"""
Media generation service.

No avatar or video provider is integrated. Requests are validated and
answered with an explicit NotImplementedCapability result.

Dependencies: archmen.models.media
System role: Media generation placeholder
"""

import logging

from archmen.core.exceptions import ValidationError
from archmen.models.media import GenerateAvatarRequest, GenerateVideoRequest, NotImplementedCapability

logger = logging.getLogger(__name__)


class MediaService:
    """Avatar and video generation (not available)."""

    async def generate_avatar(self, request: GenerateAvatarRequest) -> NotImplementedCapability:
        if not request.prompt or not request.prompt.strip():
            raise ValidationError("Prompt is required", field="prompt")
        logger.info(f"{__name__}:generate_avatar - capability not available")
        return NotImplementedCapability(
            capability="avatar_generation",
            message="Avatar generation is not available yet",
        )

    async def generate_video(self, request: GenerateVideoRequest) -> NotImplementedCapability:
        if not request.script or not request.script.strip():
            raise ValidationError("Script is required", field="script")
        logger.info(f"{__name__}:generate_video - capability not available")
        return NotImplementedCapability(
            capability="video_generation",
            message="Video generation is not available yet",
        )
