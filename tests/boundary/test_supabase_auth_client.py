"""
Test suite for SupabaseAuthClient.

Uses httpx.MockTransport in place of the auth provider.

System role: Verification of token verification
"""

import uuid

import httpx
import pytest

from archmen.boundary.auth.supabase_auth_client import SupabaseAuthClient
from archmen.core.exceptions import AuthenticationError


def make_client(handler) -> SupabaseAuthClient:
    return SupabaseAuthClient(
        url="https://project.supabase.co/",
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestGetUser:
    @pytest.mark.asyncio
    async def test_valid_token_returns_user(self) -> None:
        user_id = uuid.uuid4()
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["authorization"] = request.headers["Authorization"]
            seen["apikey"] = request.headers["apikey"]
            return httpx.Response(
                200,
                json={"id": str(user_id), "email": "seeker@example.com", "user_metadata": {"name": "Sam"}},
            )

        user = await make_client(handler).get_user("token-123")

        assert user.id == user_id
        assert user.email == "seeker@example.com"
        assert user.metadata == {"name": "Sam"}
        assert seen == {
            "url": "https://project.supabase.co/auth/v1/user",
            "authorization": "Bearer token-123",
            "apikey": "anon-key",
        }

    @pytest.mark.asyncio
    async def test_rejected_token_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))

        with pytest.raises(AuthenticationError):
            await client.get_user("expired")

    @pytest.mark.asyncio
    async def test_missing_token_raises_without_request(self) -> None:
        calls = []
        client = make_client(lambda request: calls.append(request) or httpx.Response(200, json={}))

        with pytest.raises(AuthenticationError):
            await client.get_user("")

        assert calls == []

    @pytest.mark.asyncio
    async def test_unreachable_provider_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AuthenticationError) as exc_info:
            await make_client(handler).get_user("token")

        assert exc_info.value.details["reason"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_payload_without_id_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"email": "x@example.com"}))

        with pytest.raises(AuthenticationError):
            await client.get_user("token")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        with pytest.raises(AuthenticationError):
            await client.get_user("token")

    @pytest.mark.asyncio
    async def test_non_object_payload_raises(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json=["not", "a", "user"]))

        with pytest.raises(AuthenticationError):
            await client.get_user("token")
