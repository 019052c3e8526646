"""
Test suite for the match_content_chunks SQL function definition.

Checks the shipped DDL text against the call made by SimilaritySearch.

System role: Verification of the similarity search database function
"""

import re

import pytest

from archmen.boundary.db.create_tables import load_sql
from archmen.boundary.db.models.parent import ParentKind
from archmen.boundary.vdb.similarity_search import MATCH_CONTENT_CHUNKS


@pytest.fixture(scope="module")
def function_sql() -> str:
    return load_sql("match_content_chunks.sql")


def _normalized(sql: str) -> str:
    return re.sub(r"\s+", " ", sql)


class TestMatchContentChunksSql:
    def test_threshold_filter_is_strict(self, function_sql: str) -> None:
        sql = _normalized(function_sql)

        assert "> match_threshold" in sql
        assert ">= match_threshold" not in sql

    @pytest.mark.parametrize(
        ("kind", "column"),
        [
            (ParentKind.ASSESSMENT, "assessment_id"),
            (ParentKind.ARCHETYPE, "archetype_id"),
        ],
    )
    def test_scope_case_covers_each_parent_kind(self, function_sql: str, kind: ParentKind, column: str) -> None:
        sql = _normalized(function_sql)

        assert f"WHEN '{kind.value}' THEN c.{column} = parent_id" in sql

    def test_unknown_parent_kind_matches_nothing(self, function_sql: str) -> None:
        assert "ELSE false" in _normalized(function_sql)

    def test_orders_by_similarity_and_caps_at_match_count(self, function_sql: str) -> None:
        sql = _normalized(function_sql)

        assert sql.index("ORDER BY similarity DESC") < sql.index("LIMIT match_count")

    def test_signature_matches_adapter_call(self, function_sql: str) -> None:
        signature = _normalized(function_sql).split("RETURNS")[0]
        bound = re.findall(r":(\w+)", str(MATCH_CONTENT_CHUNKS))

        assert bound == ["query_embedding", "parent_kind", "parent_id", "match_threshold", "match_count"]
        positions = [signature.index(f"{name} ") for name in bound]
        assert positions == sorted(positions)
