"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: archmen.boundary.db
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.boundary.db.connection import get_async_db

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check_db(db: AsyncSession = Depends(get_async_db)):
    """Database health check: runs SELECT 1."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.exception("Database health check failed", extra={"error": str(e)})
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", message=str(e)).model_dump(),
        )
    return HealthResponse(status="healthy", message="Database connection OK")
