"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI
dependency for database session injection.

Dependencies: sqlalchemy, asyncpg, archmen.configs
System role: Database connection lifecycle management
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from archmen.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the process-wide async SQLAlchemy engine.

    The engine owns the connection pool, so it is built once and reused by
    every request. pool_pre_ping=True verifies connections before use to
    detect stale/broken connections early.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False; services
    commit explicitly once a use case has fully succeeded.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Creates a new async database session for each request and ensures it's closed
    after the route completes, even if exceptions occur. Uncommitted work is
    rolled back when the session closes.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @router.get("/assessments/{id}")
        async def get_assessment(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await assessment_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
