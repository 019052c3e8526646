"""
Test suite for SimilaritySearch.

The SQL function is mocked at the session level; these tests pin the
adapter's parameters and its threshold/limit guarantees.

System role: Verification of the similarity search adapter
"""

import json
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from archmen.boundary.db.models.parent import ParentRef
from archmen.boundary.vdb.similarity_search import SimilaritySearch
from archmen.boundary.vdb.vector_schemas import SimilarityQuery
from archmen.core.exceptions import SimilaritySearchError


def rows_result(rows: list[dict]) -> MagicMock:
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    return result


def row(similarity: float, index: int = 0, content: str = "chunk") -> dict:
    return {"id": uuid.uuid4(), "chunk_index": index, "content": content, "similarity": similarity}


@pytest.fixture
def parent() -> ParentRef:
    return ParentRef.assessment(uuid.uuid4())


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock()
    return session


class TestSimilaritySearch:
    @pytest.mark.asyncio
    async def test_passes_scope_threshold_and_limit(self, mock_session: MagicMock, parent: ParentRef) -> None:
        # Arrange
        mock_session.execute.return_value = rows_result([row(0.8)])
        query = SimilarityQuery(embedding=[0.1, 0.2], parent=parent, match_threshold=0.1, match_count=5)

        # Act
        await SimilaritySearch(mock_session).search(query)

        # Assert
        params = mock_session.execute.call_args.args[1]
        assert json.loads(params["query_embedding"]) == [0.1, 0.2]
        assert params["parent_kind"] == "assessment"
        assert params["parent_id"] == parent.id
        assert params["match_threshold"] == 0.1
        assert params["match_count"] == 5

    @pytest.mark.asyncio
    async def test_results_ordered_by_descending_similarity(self, mock_session: MagicMock, parent: ParentRef) -> None:
        mock_session.execute.return_value = rows_result([row(0.3, 2), row(0.9, 0), row(0.6, 1)])
        query = SimilarityQuery(embedding=[1.0], parent=parent, match_threshold=0.1, match_count=5)

        matches = await SimilaritySearch(mock_session).search(query)

        assert [m.similarity for m in matches] == [0.9, 0.6, 0.3]

    @pytest.mark.asyncio
    async def test_high_threshold_without_near_duplicates_is_empty(
        self,
        mock_session: MagicMock,
        parent: ParentRef,
    ) -> None:
        mock_session.execute.return_value = rows_result([row(0.42), row(0.37), row(0.9)])
        query = SimilarityQuery(embedding=[1.0], parent=parent, match_threshold=0.9, match_count=5)

        matches = await SimilaritySearch(mock_session).search(query)

        assert matches == []

    @pytest.mark.asyncio
    async def test_limit_is_enforced(self, mock_session: MagicMock, parent: ParentRef) -> None:
        mock_session.execute.return_value = rows_result([row(0.9 - i * 0.01, i) for i in range(8)])
        query = SimilarityQuery(embedding=[1.0], parent=parent, match_threshold=0.1, match_count=3)

        matches = await SimilaritySearch(mock_session).search(query)

        assert len(matches) == 3
        assert [m.chunk_index for m in matches] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_archetype_scope(self, mock_session: MagicMock) -> None:
        mock_session.execute.return_value = rows_result([])
        archetype = ParentRef.archetype(uuid.uuid4())

        await SimilaritySearch(mock_session).search(SimilarityQuery(embedding=[1.0], parent=archetype))

        assert mock_session.execute.call_args.args[1]["parent_kind"] == "archetype"

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped(self, mock_session: MagicMock, parent: ParentRef) -> None:
        mock_session.execute.side_effect = OperationalError("SELECT", {}, Exception("function missing"))

        with pytest.raises(SimilaritySearchError) as exc_info:
            await SimilaritySearch(mock_session).search(SimilarityQuery(embedding=[1.0], parent=parent))

        assert exc_info.value.details["parent_id"] == str(parent.id)
