"""
CRUD operations for database models.

Exports CRUD class singletons for each model.
"""

from archmen.boundary.db.CRUD.base_crud import BaseCRUD
from archmen.boundary.db.CRUD.parent_crud import archetype_crud, assessment_crud
from archmen.boundary.db.CRUD.content_chunk_crud import content_chunk_crud
from archmen.boundary.db.CRUD.embedding_settings_crud import embedding_settings_crud
from archmen.boundary.db.CRUD.assessment_session_crud import assessment_session_crud
from archmen.boundary.db.CRUD.chat_history_crud import chat_history_crud
from archmen.boundary.db.CRUD.conversation_crud import conversation_crud

__all__ = [
    "BaseCRUD",
    "assessment_crud",
    "archetype_crud",
    "content_chunk_crud",
    "embedding_settings_crud",
    "assessment_session_crud",
    "chat_history_crud",
    "conversation_crud",
]
