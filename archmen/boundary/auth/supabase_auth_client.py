"""
Supabase GoTrue auth client.

Resolves a bearer access token to the signed-in user by calling the
provider's /auth/v1/user endpoint.

Dependencies: httpx
System role: Auth provider adapter ("get current user")
"""

import logging
import uuid
from dataclasses import dataclass, field

import httpx

from archmen.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user a request was made on behalf of."""

    id: uuid.UUID
    email: str | None = None
    metadata: dict = field(default_factory=dict)


class SupabaseAuthClient:
    """Verify access tokens against Supabase GoTrue."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize auth client.

        Args:
            url: Supabase project URL
            anon_key: Project anon key, sent as the apikey header
            timeout_seconds: Request timeout for the user lookup
            http_client: Shared AsyncClient (one is created when omitted)
        """
        self._user_endpoint = f"{url.rstrip('/')}/auth/v1/user"
        self._anon_key = anon_key
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def get_user(self, access_token: str) -> AuthenticatedUser:
        """
        Resolve an access token to its user.

        Args:
            access_token: JWT from the Authorization: Bearer header

        Returns:
            AuthenticatedUser: The token's user

        Raises:
            AuthenticationError: When the token is missing, rejected, or the
                provider cannot be reached
        """
        if not access_token:
            raise AuthenticationError("Authentication required")

        try:
            response = await self._client.get(
                self._user_endpoint,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "apikey": self._anon_key,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:get_user - auth provider unreachable: {type(e).__name__}: {e}")
            raise AuthenticationError(
                "Could not verify session",
                {"reason": type(e).__name__},
            ) from e

        if response.status_code != 200:
            logger.warning(
                f"{__name__}:get_user - token rejected",
                extra={"status_code": response.status_code},
            )
            raise AuthenticationError("Invalid or expired session")

        try:
            payload = response.json()
            user_id = uuid.UUID(str(payload["id"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"{__name__}:get_user - unreadable user payload: {type(e).__name__}")
            raise AuthenticationError("Auth provider returned no user id") from e

        return AuthenticatedUser(
            id=user_id,
            email=payload.get("email"),
            metadata=payload.get("user_metadata") or {},
        )

    async def aclose(self) -> None:
        await self._client.aclose()
