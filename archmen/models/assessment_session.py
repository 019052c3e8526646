"""
Assessment session domain models and schemas.

Dependencies: pydantic
System role: Assessment session API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from archmen.core.assessment.session_state import SessionStatus
from archmen.models.common import CamelModel


class DiscoveredArchetype(CamelModel):
    """One archetype found during an assessment, as snapshotted on completion."""

    archetype_id: uuid.UUID | None = None
    name: str = Field(min_length=1)
    confidence_score: float = Field(ge=0.0, le=1.0)
    is_primary: bool = False
    is_secondary: bool = False
    insight: str = ""
    resources: list[str] = Field(default_factory=list)


class StartSessionRequest(CamelModel):
    assessment_id: uuid.UUID


class UpdateProgressRequest(CamelModel):
    progress_percentage: int
    current_question_index: int


class CompleteSessionRequest(CamelModel):
    discovered_archetypes: list[DiscoveredArchetype] = Field(default_factory=list)


class AssessmentSessionResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    assessment_id: uuid.UUID
    status: SessionStatus
    progress_percentage: int
    current_question_index: int
    discovered_archetypes: list[DiscoveredArchetype]
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime
