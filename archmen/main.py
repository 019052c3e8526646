"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, archmen.api, archmen.observability, archmen.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from archmen.api import api_router
from archmen.api.deps.dependencies import get_service_cache
from archmen.configs import get_settings
from archmen.observability.logger import configure_logging, get_logger
from archmen.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and closes shared provider clients on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger.info("Application startup: logging configured")

    yield

    await get_service_cache().aclose()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    app = FastAPI(
        title="ArchMen API",
        description="Archetype assessments with a retrieval-augmented knowledge base",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "archmen.main:app",
        host="localhost",
        port=8082,
        reload=get_settings().is_development,
    )
