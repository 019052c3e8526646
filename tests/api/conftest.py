"""
API test fixtures.

Routes run on a bare FastAPI app with the aggregated router; auth and
services are replaced through dependency_overrides.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from archmen.api import api_router
from archmen.api.deps.dependencies import get_current_user
from archmen.boundary.auth.supabase_auth_client import AuthenticatedUser


@pytest.fixture
def current_user() -> AuthenticatedUser:
    return AuthenticatedUser(id=uuid.uuid4(), email="admin@archmen.app")


@pytest.fixture
def app(current_user: AuthenticatedUser) -> FastAPI:
    app = FastAPI()
    app.include_router(api_router)
    app.dependency_overrides[get_current_user] = lambda: current_user
    return app


@pytest.fixture
def anonymous_app() -> FastAPI:
    """App without an auth override: requests need a real bearer token."""
    app = FastAPI()
    app.include_router(api_router)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock()
