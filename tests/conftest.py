"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, fake embedding/chat providers, parent rows
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import hashlib
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import Embeddings


class HashEmbeddings(Embeddings):
    """Deterministic 8-dimensional embeddings derived from a SHA-256 digest."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [byte / 255 for byte in digest[:8]]


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from archmen.boundary.db import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def hash_embeddings() -> HashEmbeddings:
    return HashEmbeddings()


@pytest.fixture
def embedding_generator(hash_embeddings: HashEmbeddings):
    """EmbeddingGenerator backed by HashEmbeddings with no inter-batch delay."""
    from archmen.core.knowledge_base.embedding_generator import EmbeddingGenerator

    return EmbeddingGenerator(
        batch_size=5,
        batch_delay_seconds=0,
        embeddings_factory=lambda model: hash_embeddings,
    )


@pytest.fixture
def kb_settings():
    from archmen.configs.knowledge_base import KnowledgeBaseSettings

    return KnowledgeBaseSettings()


@pytest.fixture
async def assessment(test_async_db):
    """Persisted active assessment."""
    from archmen.boundary.db.CRUD.parent_crud import assessment_crud

    row = await assessment_crud.create(
        test_async_db,
        name="Mature Masculine Inventory",
        description="Explores the King, Warrior, Magician and Lover",
        system_prompt=None,
        is_active=True,
    )
    await test_async_db.commit()
    return row


@pytest.fixture
async def archetype(test_async_db):
    """Persisted archetype."""
    from archmen.boundary.db.CRUD.parent_crud import archetype_crud

    row = await archetype_crud.create(
        test_async_db,
        name="The Warrior",
        description="Discipline, courage and boundaries",
        category="mature masculine",
    )
    await test_async_db.commit()
    return row


@pytest.fixture
def mock_db():
    """Mock AsyncSession with async commit/rollback."""
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    db.refresh = AsyncMock()
    return db


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()
