"""
Test suite for the chunking evaluation endpoint.

System role: Verification of chunking strategy comparison over HTTP
"""

from fastapi.testclient import TestClient


class TestChunkingEndpoint:
    def test_configs_ranked_by_score(self, client: TestClient) -> None:
        # Arrange
        payload = {
            "testConfigs": [
                {"name": "irrelevant", "chunk_size": 100, "chunk_overlap": 10, "test_queries": ["zebra quantum"]},
                {"name": "relevant", "chunk_size": 100, "chunk_overlap": 10, "test_queries": ["shadow archetype"]},
            ]
        }

        # Act
        response = client.post("/test-chunking", json=payload)

        # Assert
        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["config_name"] for r in results] == ["relevant", "irrelevant"]
        first = results[0]
        assert first["chunks_generated"] >= 1
        assert "avg_time" in first
        assert first["test_results"][0]["query"] == "shadow archetype"
        assert len(first["test_results"][0]["top_chunks"]) <= 3

    def test_missing_configs_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/test-chunking", json={})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Invalid test configurations provided"

    def test_overlap_not_smaller_than_size_is_bad_request(self, client: TestClient) -> None:
        response = client.post(
            "/test-chunking",
            json={"testConfigs": [{"name": "bad", "chunk_size": 100, "chunk_overlap": 100}]},
        )

        assert response.status_code == 400
