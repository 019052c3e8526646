"""
HTTP API package.

api_router aggregates every resource router; main.py mounts it under /api/v1.
"""

from fastapi import APIRouter

from archmen.api.routers import (
    archetypes_router,
    assessment_sessions_router,
    assessments_router,
    chat_router,
    chat_history_router,
    chunking_router,
    health_router,
    knowledge_base_router,
    media_router,
)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(knowledge_base_router)
api_router.include_router(chunking_router)
api_router.include_router(assessments_router)
api_router.include_router(archetypes_router)
api_router.include_router(chat_router)
api_router.include_router(assessment_sessions_router)
api_router.include_router(chat_history_router)
api_router.include_router(media_router)

__all__ = ["api_router"]
