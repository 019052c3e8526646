"""
Test suite for assessment session API endpoints.

System role: Verification of assessment session HTTP contracts
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from archmen.api.deps.dependencies import get_assessment_session_service
from archmen.core.assessment.session_state import SessionStatus
from archmen.core.exceptions import InvalidSessionTransitionError, SessionNotFoundError


def session_row(user_id: uuid.UUID, status: SessionStatus = SessionStatus.IN_PROGRESS, **overrides):
    now = datetime.now(timezone.utc)
    values = {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "assessment_id": uuid.uuid4(),
        "status": status,
        "progress_percentage": 0,
        "current_question_index": 0,
        "discovered_archetypes": [],
        "completed_at": None,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def sessions_client(app, mock_service) -> TestClient:
    app.dependency_overrides[get_assessment_session_service] = lambda: mock_service
    return TestClient(app)


class TestAssessmentSessionRoutes:
    def test_start_session(self, sessions_client, mock_service, current_user) -> None:
        # Arrange
        row = session_row(current_user.id)
        mock_service.start_session.return_value = row

        # Act
        response = sessions_client.post(
            "/assessment-sessions",
            json={"assessmentId": str(row.assessment_id)},
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "in_progress"
        assert body["progressPercentage"] == 0
        mock_service.start_session.assert_awaited_once_with(current_user.id, row.assessment_id)

    def test_list_sessions_with_status_filter(self, sessions_client, mock_service, current_user) -> None:
        mock_service.list_sessions.return_value = [session_row(current_user.id, SessionStatus.COMPLETED)]

        response = sessions_client.get("/assessment-sessions", params={"status": "completed"})

        assert response.status_code == 200
        assert len(response.json()) == 1
        mock_service.list_sessions.assert_awaited_once_with(current_user.id, SessionStatus.COMPLETED)

    def test_update_progress(self, sessions_client, mock_service, current_user) -> None:
        row = session_row(current_user.id, progress_percentage=30, current_question_index=3)
        mock_service.update_progress.return_value = row

        response = sessions_client.patch(
            f"/assessment-sessions/{row.id}/progress",
            json={"progressPercentage": 30, "currentQuestionIndex": 3},
        )

        assert response.status_code == 200
        assert response.json()["currentQuestionIndex"] == 3

    def test_complete_session_returns_snapshot(self, sessions_client, mock_service, current_user) -> None:
        # Arrange
        snapshot = [{"name": "The Warrior", "confidenceScore": 0.9, "isPrimary": True}]
        row = session_row(
            current_user.id,
            SessionStatus.COMPLETED,
            progress_percentage=100,
            discovered_archetypes=snapshot,
            completed_at=datetime.now(timezone.utc),
        )
        mock_service.complete_session.return_value = row

        # Act
        response = sessions_client.post(
            f"/assessment-sessions/{row.id}/complete",
            json={"discoveredArchetypes": snapshot},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["discoveredArchetypes"][0]["name"] == "The Warrior"
        archetypes = mock_service.complete_session.call_args.args[2]
        assert archetypes[0].confidence_score == 0.9

    def test_invalid_transition_is_conflict(self, sessions_client, mock_service) -> None:
        mock_service.abandon_session.side_effect = InvalidSessionTransitionError("completed", "abandon")

        response = sessions_client.post(f"/assessment-sessions/{uuid.uuid4()}/abandon")

        assert response.status_code == 409
        assert response.json()["detail"]["details"] == {"status": "completed", "event": "abandon"}

    def test_missing_session_is_not_found(self, sessions_client, mock_service) -> None:
        session_id = uuid.uuid4()
        mock_service.get_session.side_effect = SessionNotFoundError(str(session_id))

        response = sessions_client.get(f"/assessment-sessions/{session_id}")

        assert response.status_code == 404

    def test_delete_session(self, sessions_client, mock_service, current_user) -> None:
        session_id = uuid.uuid4()

        response = sessions_client.delete(f"/assessment-sessions/{session_id}")

        assert response.status_code == 200
        mock_service.delete_session.assert_awaited_once_with(current_user.id, session_id)

    def test_requires_authentication(self, anonymous_app, mock_service) -> None:
        anonymous_app.dependency_overrides[get_assessment_session_service] = lambda: mock_service

        response = TestClient(anonymous_app).get("/assessment-sessions")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
