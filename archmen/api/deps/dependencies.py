"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients (embeddings,
chat model, auth, storage) are built once in ServiceCache and handed to
request-scoped services together with the request's database session.

Dependencies: archmen.configs, archmen.application, archmen.boundary
System role: DI container for service injection
"""

import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from archmen.application.services.assessment_session_service import AssessmentSessionService
from archmen.application.services.chat_history_service import ChatHistoryService
from archmen.application.services.chat_service import ChatService
from archmen.application.services.knowledge_base_service import KnowledgeBaseService
from archmen.application.services.media_service import MediaService
from archmen.application.services.parent_service import ArchetypeService, AssessmentService
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser, SupabaseAuthClient
from archmen.boundary.db.connection import get_async_db
from archmen.boundary.storage.s3_client import S3ContentClient
from archmen.configs import Settings, get_settings
from archmen.core.chat.chat_orchestrator import ChatOrchestrator
from archmen.core.exceptions import AuthenticationError
from archmen.core.knowledge_base.embedding_generator import EmbeddingGenerator

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for provider clients shared across requests."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._embedding_generator: EmbeddingGenerator | None = None
        self._chat_orchestrator: ChatOrchestrator | None = None
        self._auth_client: SupabaseAuthClient | None = None
        self._storage_client: S3ContentClient | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_generator(self) -> EmbeddingGenerator:
        """Get cached embedding generator."""
        if self._embedding_generator is None:
            kb = self.settings.knowledge_base
            self._embedding_generator = EmbeddingGenerator(
                api_key=self.settings.openai.api_key,
                default_model=self.settings.openai.embedding_model,
                batch_size=kb.embedding_batch_size,
                batch_delay_seconds=kb.batch_delay_seconds,
                max_input_chars=kb.max_embedding_input_chars,
            )
        return self._embedding_generator

    @property
    def chat_orchestrator(self) -> ChatOrchestrator:
        """Get cached chat orchestrator."""
        if self._chat_orchestrator is None:
            openai = self.settings.openai
            self._chat_orchestrator = ChatOrchestrator(
                system_prompt=openai.system_prompt,
                model=openai.chat_model,
                temperature=openai.temperature,
                max_tokens=openai.max_tokens,
                api_key=openai.api_key,
                fallback_response=openai.fallback_response,
            )
        return self._chat_orchestrator

    @property
    def auth_client(self) -> SupabaseAuthClient:
        """Get cached Supabase auth client."""
        if self._auth_client is None:
            supabase = self.settings.supabase
            self._auth_client = SupabaseAuthClient(
                url=supabase.url,
                anon_key=supabase.anon_key,
                timeout_seconds=supabase.auth_timeout_seconds,
            )
        return self._auth_client

    @property
    def storage_client(self) -> S3ContentClient:
        """Get cached S3 content client."""
        if self._storage_client is None:
            storage = self.settings.storage
            self._storage_client = S3ContentClient(
                bucket=storage.bucket,
                region=storage.region,
                endpoint_url=storage.endpoint_url,
                public_base_url=storage.public_base_url,
                key_prefix=storage.key_prefix,
            )
        return self._storage_client

    async def aclose(self) -> None:
        """Release network clients and clear all cached instances."""
        if self._auth_client is not None:
            await self._auth_client.aclose()
        self._embedding_generator = None
        self._chat_orchestrator = None
        self._auth_client = None
        self._storage_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: str | None = Header(default=None),
    cache: ServiceCache = Depends(get_service_cache),
) -> AuthenticatedUser:
    """
    Resolve the signed-in user from the Authorization header.

    Raises:
        HTTPException(401): Missing, malformed or rejected token
    """
    token = _bearer_token(authorization)
    try:
        if token is None:
            raise AuthenticationError("Authentication required")
        return await cache.auth_client.get_user(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": e.message, "details": e.details},
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_optional_user(
    authorization: str | None = Header(default=None),
    cache: ServiceCache = Depends(get_service_cache),
) -> AuthenticatedUser | None:
    """Resolve the user when a valid token is sent; anonymous otherwise."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return await cache.auth_client.get_user(token)
    except AuthenticationError:
        logger.info(f"{__name__}:get_optional_user - ignoring invalid token")
        return None


def get_knowledge_base_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> KnowledgeBaseService:
    """
    Get knowledge base service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Shared provider clients

    Returns:
        KnowledgeBaseService: Service bound to this request's session
    """
    return KnowledgeBaseService(
        db=db,
        embedding_generator=cache.embedding_generator,
        settings=cache.settings.knowledge_base,
        storage=cache.storage_client,
    )


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatService:
    """Get chat service instance with the shared chat orchestrator."""
    return ChatService(
        db=db,
        orchestrator=cache.chat_orchestrator,
        embedding_generator=cache.embedding_generator,
        kb_settings=cache.settings.knowledge_base,
    )


def get_assessment_session_service(db: AsyncSession = Depends(get_async_db)) -> AssessmentSessionService:
    return AssessmentSessionService(db=db)


def get_chat_history_service(db: AsyncSession = Depends(get_async_db)) -> ChatHistoryService:
    return ChatHistoryService(db=db)


def get_assessment_service(db: AsyncSession = Depends(get_async_db)) -> AssessmentService:
    return AssessmentService(db=db)


def get_archetype_service(db: AsyncSession = Depends(get_async_db)) -> ArchetypeService:
    return ArchetypeService(db=db)


def get_media_service() -> MediaService:
    return MediaService()
