"""
Assessment chat history schemas.

Dependencies: pydantic
System role: Assessment conversation API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from archmen.core.assessment.message_types import ChatMessageType
from archmen.models.common import CamelModel


class AddChatMessageRequest(CamelModel):
    assessment_session_id: uuid.UUID
    message_type: ChatMessageType
    content: str = Field(min_length=1)
    message_index: int = Field(ge=0)


class ChatHistoryMessageResponse(CamelModel):
    id: uuid.UUID
    assessment_session_id: uuid.UUID
    message_type: ChatMessageType
    content: str
    message_index: int
    created_at: datetime


class ChatHistoryResponse(CamelModel):
    messages: list[ChatHistoryMessageResponse] = Field(default_factory=list)
