"""
Chat domain models and schemas.

Request/response schemas for plain and knowledge-base-augmented chat.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from typing import Literal

from pydantic import Field

from archmen.models.common import CamelModel


class ChatMessage(CamelModel):
    """Single conversation message."""

    role: Literal["user", "assistant", "system"] = Field(description="Message author role")
    content: str = Field(description="Message content")


class ChatRequest(CamelModel):
    """Conversation so far; the last message is the one being answered."""

    messages: list[ChatMessage] = Field(default_factory=list)


class EnhancedChatRequest(ChatRequest):
    """Chat grounded on one assessment's or archetype's knowledge base."""

    assessment_id: uuid.UUID | None = None
    archetype_id: uuid.UUID | None = None
    conversation_id: uuid.UUID | None = Field(
        default=None,
        description="Save the transcript under this ID (signed-in users only)",
    )


class ChatResponse(CamelModel):
    content: str


class ContextChunk(CamelModel):
    """Knowledge base excerpt that was placed in the prompt."""

    chunk_id: uuid.UUID
    chunk_index: int
    content: str
    similarity: float


class EnhancedChatResponse(CamelModel):
    content: str
    context: list[ContextChunk] = Field(default_factory=list)
