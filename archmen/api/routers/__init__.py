"""
API routers.

Each module owns one resource; api_router in archmen.api mounts them all.
"""

from archmen.api.routers.assessment_sessions import router as assessment_sessions_router
from archmen.api.routers.chat import router as chat_router
from archmen.api.routers.chat_history import router as chat_history_router
from archmen.api.routers.chunking import router as chunking_router
from archmen.api.routers.health import router as health_router
from archmen.api.routers.knowledge_base import router as knowledge_base_router
from archmen.api.routers.media import router as media_router
from archmen.api.routers.parents import archetypes_router, assessments_router

__all__ = [
    "archetypes_router",
    "assessment_sessions_router",
    "assessments_router",
    "chat_router",
    "chat_history_router",
    "chunking_router",
    "health_router",
    "knowledge_base_router",
    "media_router",
]
