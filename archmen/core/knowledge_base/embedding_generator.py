"""
Batched embedding generation using OpenAI embeddings.

Embeds chunk text one request per chunk. Requests inside a batch run
concurrently; batches run one after another with a short pause so the
provider's rate limit is not hit.

Dependencies: langchain_openai, asyncio
System role: Second stage of the knowledge base ingestion pipeline
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

from archmen.core.exceptions import EmbeddingError
from archmen.core.knowledge_base.chunker import TextChunk

logger = logging.getLogger(__name__)

EmbeddingsFactory = Callable[[str], Embeddings]


class EmbeddingGenerator:
    """Generate embedding vectors for text chunks and queries."""

    def __init__(
        self,
        api_key: str | None = None,
        default_model: str = "text-embedding-3-small",
        batch_size: int = 5,
        batch_delay_seconds: float = 0.1,
        max_input_chars: int = 8000,
        embeddings_factory: EmbeddingsFactory | None = None,
    ) -> None:
        """
        Initialize generator with provider credentials and pacing.

        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            default_model: Model used when a call does not name one
            batch_size: Number of concurrent requests per batch
            batch_delay_seconds: Pause between consecutive batches
            max_input_chars: Input text is truncated to this length
            embeddings_factory: Builds a LangChain Embeddings client for a model id

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self._api_key = api_key
        self.default_model = default_model
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self.max_input_chars = max_input_chars
        self._factory = embeddings_factory or self._build_openai_embeddings
        self._clients: dict[str, Embeddings] = {}

    def _build_openai_embeddings(self, model: str) -> Embeddings:
        return OpenAIEmbeddings(model=model, api_key=self._api_key)

    def _client_for(self, model: str) -> Embeddings:
        """Return the cached client for a model, creating it on first use."""
        if model not in self._clients:
            self._clients[model] = self._factory(model)
        return self._clients[model]

    def prepare_input(self, text: str) -> str:
        """Flatten newlines and truncate text to the accepted input length."""
        return text.replace("\n", " ").strip()[: self.max_input_chars]

    async def embed_text(self, text: str, model: str | None = None) -> list[float]:
        """
        Generate a single embedding vector.

        Args:
            text: Text to embed
            model: Embedding model identifier (default model if None)

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: When the provider call fails
        """
        model = model or self.default_model
        try:
            return await self._client_for(model).aembed_query(self.prepare_input(text))
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embedding: {e}",
                provider="openai",
                details={"model": model, "input_chars": len(text)},
            ) from e

    async def _embed_concurrently(
        self, batch: Sequence[str], model: str | None
    ) -> list[list[float]]:
        # A failing request cancels its siblings before the error leaves the group
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.embed_text(text, model)) for text in batch]
        except* EmbeddingError as failures:
            raise failures.exceptions[0]

        return [task.result() for task in tasks]

    async def embed_batch(self, texts: Sequence[str], model: str | None = None) -> list[list[float]]:
        """
        Embed every text, batch by batch.

        The first failing request aborts the whole run; nothing partial is
        returned.

        Args:
            texts: Texts to embed, in order
            model: Embedding model identifier

        Returns:
            list[list[float]]: One vector per text, same order as input

        Raises:
            EmbeddingError: When any provider call fails
        """
        vectors: list[list[float]] = []
        total = len(texts)

        for batch_start in range(0, total, self.batch_size):
            batch = texts[batch_start : batch_start + self.batch_size]
            vectors.extend(await self._embed_concurrently(batch, model))
            logger.debug(
                f"{__name__}:embed_batch - batch done",
                extra={"embedded": len(vectors), "total": total},
            )

            if batch_start + self.batch_size < total:
                await asyncio.sleep(self.batch_delay_seconds)

        logger.info(
            f"{__name__}:embed_batch - generated {len(vectors)} embeddings",
            extra={"model": model or self.default_model, "count": len(vectors)},
        )
        return vectors

    async def embed_chunks(
        self,
        chunks: Sequence[TextChunk],
        model: str | None = None,
    ) -> list[list[float]]:
        """Embed chunker output; vectors come back in chunk order."""
        return await self.embed_batch([chunk.text for chunk in chunks], model)
