"""
Test suite for media generation endpoints.

System role: Verification of the not-implemented media contract
"""

from fastapi.testclient import TestClient


class TestMediaRoutes:
    def test_avatar_generation_not_implemented(self, client: TestClient) -> None:
        response = client.post("/generate-avatar", json={"prompt": "A wise king on a throne"})

        assert response.status_code == 501
        body = response.json()
        assert body["implemented"] is False
        assert body["capability"] == "avatar_generation"
        assert "url" not in body

    def test_video_generation_not_implemented(self, client: TestClient) -> None:
        response = client.post("/generate-video", json={"script": "Welcome, traveller."})

        assert response.status_code == 501
        assert response.json()["capability"] == "video_generation"

    def test_empty_prompt_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/generate-avatar", json={"prompt": "  "})

        assert response.status_code == 400

    def test_requires_authentication(self, anonymous_app) -> None:
        response = TestClient(anonymous_app).post(
            "/generate-video",
            json={"script": "Hello"},
            headers={"Authorization": "Basic abc"},
        )

        assert response.status_code == 401
