"""
Database models package.

Exports:
  - AssessmentModel, ArchetypeModel, ParentKind, ParentRef: Knowledge base parents
  - ContentChunkModel: Chunk text + embedding rows
  - EmbeddingSettingsModel: Per-parent chunking configuration
  - AssessmentSessionModel, SessionStatus: Assessment progress tracking
  - AssessmentChatHistoryModel, ChatMessageType: Per-session message log
  - ConversationModel: Saved enhanced-chat transcripts

Dependencies: sqlalchemy, archmen.boundary.db.base
System role: Database model definitions for domain entities
"""

from archmen.boundary.db.models.parent import (
    ArchetypeModel,
    AssessmentModel,
    ParentKind,
    ParentRef,
)
from archmen.boundary.db.models.content_chunk_model import ContentChunkModel
from archmen.boundary.db.models.embedding_settings_model import EmbeddingSettingsModel
from archmen.boundary.db.models.assessment_session_model import (
    AssessmentSessionModel,
    SessionStatus,
)
from archmen.boundary.db.models.chat_history_model import (
    AssessmentChatHistoryModel,
    ChatMessageType,
)
from archmen.boundary.db.models.conversation_model import ConversationModel

__all__ = [
    "ArchetypeModel",
    "AssessmentModel",
    "ParentKind",
    "ParentRef",
    "ContentChunkModel",
    "EmbeddingSettingsModel",
    "AssessmentSessionModel",
    "SessionStatus",
    "AssessmentChatHistoryModel",
    "ChatMessageType",
    "ConversationModel",
]
