"""
Test suite for EmbeddingGenerator.

Covers input preparation, client caching, batching, pacing and failure
propagation with fake LangChain embeddings.

System role: Verification of embedding generation
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from archmen.core.exceptions import EmbeddingError
from archmen.core.knowledge_base.chunker import chunk_text
from archmen.core.knowledge_base.embedding_generator import EmbeddingGenerator

# Captured before any test patches asyncio.sleep
_yield_to_loop = asyncio.sleep


class ConcurrencyTrackingEmbeddings:
    """Records how many aembed_query calls overlap."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls: list[str] = []
        self.fail_on = fail_on

    async def aembed_query(self, text: str) -> list[float]:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.calls.append(text)
        await _yield_to_loop(0)
        self.in_flight -= 1
        if text == self.fail_on:
            raise RuntimeError("rate limited")
        return [float(len(text)), 1.0]


class StallingEmbeddings:
    """Fails on one text and blocks on every other until cancelled."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on
        self.finished: list[str] = []
        self.cancelled: list[str] = []
        self._release = asyncio.Event()

    async def aembed_query(self, text: str) -> list[float]:
        if text == self.fail_on:
            await _yield_to_loop(0)
            raise RuntimeError("upstream 500")
        try:
            await self._release.wait()
        except asyncio.CancelledError:
            self.cancelled.append(text)
            raise
        self.finished.append(text)
        return [1.0]


def make_generator(client, **kwargs) -> EmbeddingGenerator:
    return EmbeddingGenerator(embeddings_factory=lambda model: client, **kwargs)


class TestPrepareInput:
    def test_replaces_newlines_and_strips(self) -> None:
        generator = make_generator(MagicMock())

        assert generator.prepare_input("  line one\nline two\n") == "line one line two"

    def test_truncates_to_max_input_chars(self) -> None:
        generator = make_generator(MagicMock(), max_input_chars=8000)

        assert len(generator.prepare_input("a" * 9000)) == 8000


class TestEmbedText:
    @pytest.mark.asyncio
    async def test_returns_vector_from_client(self) -> None:
        client = MagicMock()
        client.aembed_query = AsyncMock(return_value=[0.1, 0.2])
        generator = make_generator(client)

        vector = await generator.embed_text("The King\nblesses")

        assert vector == [0.1, 0.2]
        client.aembed_query.assert_awaited_once_with("The King blesses")

    @pytest.mark.asyncio
    async def test_provider_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.aembed_query = AsyncMock(side_effect=RuntimeError("401 invalid api key"))
        generator = make_generator(client)

        with pytest.raises(EmbeddingError) as exc_info:
            await generator.embed_text("hello")

        assert exc_info.value.details["provider"] == "openai"
        assert exc_info.value.details["model"] == "text-embedding-3-small"

    @pytest.mark.asyncio
    async def test_one_client_per_model(self) -> None:
        built: list[str] = []

        def factory(model: str):
            built.append(model)
            client = MagicMock()
            client.aembed_query = AsyncMock(return_value=[1.0])
            return client

        generator = EmbeddingGenerator(embeddings_factory=factory)

        await generator.embed_text("a")
        await generator.embed_text("b")
        await generator.embed_text("c", model="text-embedding-3-large")

        assert built == ["text-embedding-3-small", "text-embedding-3-large"]


class TestEmbedBatch:
    @pytest.mark.asyncio
    async def test_batches_never_exceed_batch_size(self) -> None:
        client = ConcurrencyTrackingEmbeddings()
        generator = make_generator(client, batch_size=5, batch_delay_seconds=0)

        vectors = await generator.embed_batch([f"chunk {i}" for i in range(12)])

        assert len(vectors) == 12
        assert client.max_in_flight <= 5

    @pytest.mark.asyncio
    async def test_vectors_keep_input_order(self) -> None:
        client = ConcurrencyTrackingEmbeddings()
        generator = make_generator(client, batch_size=2, batch_delay_seconds=0)
        texts = ["a", "bb", "ccc", "dddd", "eeeee"]

        vectors = await generator.embed_batch(texts)

        assert [v[0] for v in vectors] == [1.0, 2.0, 3.0, 4.0, 5.0]

    @pytest.mark.asyncio
    async def test_delay_between_batches_not_after_last(self) -> None:
        client = ConcurrencyTrackingEmbeddings()
        generator = make_generator(client, batch_size=5, batch_delay_seconds=0.1)

        with patch(
            "archmen.core.knowledge_base.embedding_generator.asyncio.sleep",
            new=AsyncMock(),
        ) as mock_sleep:
            await generator.embed_batch([f"chunk {i}" for i in range(11)])

        # 3 batches -> 2 pauses
        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.1)

    @pytest.mark.asyncio
    async def test_single_batch_has_no_delay(self) -> None:
        client = ConcurrencyTrackingEmbeddings()
        generator = make_generator(client, batch_size=5, batch_delay_seconds=0.1)

        with patch(
            "archmen.core.knowledge_base.embedding_generator.asyncio.sleep",
            new=AsyncMock(),
        ) as mock_sleep:
            await generator.embed_batch(["one", "two"])

        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_aborts_remaining_batches(self) -> None:
        client = ConcurrencyTrackingEmbeddings(fail_on="chunk 2")
        generator = make_generator(client, batch_size=2, batch_delay_seconds=0)

        with pytest.raises(EmbeddingError):
            await generator.embed_batch([f"chunk {i}" for i in range(6)])

        assert "chunk 4" not in client.calls

    @pytest.mark.asyncio
    async def test_failure_cancels_rest_of_batch(self) -> None:
        client = StallingEmbeddings(fail_on="bad")
        generator = make_generator(client, batch_size=3, batch_delay_seconds=0)

        with pytest.raises(EmbeddingError):
            await generator.embed_batch(["a", "bad", "c"])

        assert client.finished == []
        assert sorted(client.cancelled) == ["a", "c"]

    @pytest.mark.asyncio
    async def test_embed_chunks_uses_chunk_text(self) -> None:
        client = ConcurrencyTrackingEmbeddings()
        generator = make_generator(client, batch_delay_seconds=0)
        chunks = chunk_text("ABCDEFGHIJ", chunk_size=4, overlap=1)

        vectors = await generator.embed_chunks(chunks)

        assert client.calls == ["ABCD", "DEFG", "GHIJ", "J"]
        assert len(vectors) == 4

    def test_batch_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            EmbeddingGenerator(batch_size=0)
