"""
Database schema initialization.

Creates the pgvector extension, every ORM table and the
match_content_chunks similarity function.

Dependencies: sqlalchemy, asyncpg, archmen.configs
System role: Database schema initialization

Usage:
    python -m archmen.boundary.db.create_tables
"""

import asyncio
import logging
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from archmen.boundary.db.base import Base
from archmen.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from archmen.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).parent / "sql"


def load_sql(name: str) -> str:
    return (SQL_DIR / name).read_text(encoding="utf-8")


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create extension, tables and functions.

    Idempotent: tables use CREATE IF NOT EXISTS semantics and the function
    is CREATE OR REPLACE, so it is safe to run on every deploy.

    Raises:
        SQLAlchemyError: If the connection or any DDL statement fails
    """
    engine = engine or get_async_engine()

    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text(load_sql("match_content_chunks.sql")))

    logger.info(
        f"{__name__}:create_all_tables - schema ready",
        extra={"tables": sorted(Base.metadata.tables)},
    )


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop every ORM table and the similarity function.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()

    async with engine.begin() as conn:
        await conn.execute(text("DROP FUNCTION IF EXISTS match_content_chunks"))
        await conn.run_sync(Base.metadata.drop_all)

    logger.warning(f"{__name__}:drop_all_tables - all tables dropped")


if __name__ == "__main__":
    from archmen.observability.logger import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
