"""
Media generation schemas.

Avatar and video generation are not available; the response makes that
explicit instead of returning a placeholder asset.

Dependencies: pydantic
System role: Media generation API contracts
"""

from typing import Literal

from pydantic import Field

from archmen.models.common import CamelModel


class GenerateAvatarRequest(CamelModel):
    prompt: str | None = Field(default=None, description="Avatar description")
    archetype_id: str | None = None
    style: str | None = None


class GenerateVideoRequest(CamelModel):
    script: str | None = Field(default=None, description="Narration text")
    avatar_id: str | None = None
    voice_id: str | None = None


class NotImplementedCapability(CamelModel):
    """Explicit result for a capability that has no provider yet."""

    capability: str
    implemented: Literal[False] = False
    message: str
