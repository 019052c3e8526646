"""
Assessment and archetype schemas.

Dependencies: pydantic
System role: Knowledge base parent API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from archmen.models.common import CamelModel


class CreateAssessmentRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    system_prompt: str | None = Field(
        default=None,
        description="Replaces the default interviewer prompt for this assessment",
    )
    is_active: bool = True


class AssessmentResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None
    system_prompt: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CreateArchetypeRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)


class ArchetypeResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None
    category: str | None
    created_at: datetime
    updated_at: datetime


class UpdateAssessmentRequest(CamelModel):
    """Partial update; only the fields present in the body change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    system_prompt: str | None = None
    is_active: bool | None = None


class UpdateArchetypeRequest(CamelModel):
    """Partial update; only the fields present in the body change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
