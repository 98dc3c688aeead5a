"""Twitch API client service.

Token types:
- App Access Token: For channel search. Fetched once per session via the
  client-credentials grant; never refreshed.
- User Access Token: For the who-am-I and follows queries. Obtained by the
  viewer page through the implicit grant (token arrives in the URL fragment).
"""

import logging
from typing import cast
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

HELIX_BASE = "https://api.twitch.tv/helix"
OAUTH_BASE = "https://id.twitch.tv/oauth2"


class TwitchAPIClient:
    """Client for interacting with Twitch API.

    Manages a shared httpx client for connection reuse. Transport errors and
    non-200 responses are logged here and surface to callers as ``None``.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        if not client_id or not client_secret:
            raise ValueError("Twitch client_id and client_secret are required")

        self.client_id = client_id
        self.client_secret = client_secret

        # Shared HTTP client, reuses TCP connections across requests
        self._http = http if http is not None else httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Client-Id": self.client_id}

    async def _helix_get(
        self,
        path: str,
        params: dict | None,
        *,
        token: str,
    ) -> httpx.Response | None:
        """GET request to Helix API with the given bearer token."""
        try:
            return await self._http.get(
                f"{HELIX_BASE}/{path}",
                params=params,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            logger.error(f"Helix GET /{path} error: {type(e).__name__}: {e}")
            return None

    # ------------------------------------------------------------------
    # OAuth flow
    # ------------------------------------------------------------------

    async def fetch_app_token(self) -> str | None:
        """Exchange client credentials for an app access token."""
        try:
            response = await self._http.post(
                f"{OAUTH_BASE}/token",
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            )
            if response.status_code != 200:
                logger.error(f"Failed to get app token: {response.status_code}")
                return None

            token = response.json().get("access_token")
            if not token:
                logger.error("No access_token in app token response")
                return None
            return cast(str, token)

        except httpx.TimeoutException:
            logger.error("Timeout while getting app access token")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.exception(f"Error getting app access token: {e}")
            return None

    def generate_implicit_oauth_url(self, redirect_uri: str, scopes: list[str]) -> str:
        """Generate the Twitch authorize URL for the implicit (token) grant."""
        scope_string = quote(" ".join(scopes), safe="")
        encoded_redirect_uri = quote(redirect_uri, safe="")

        return (
            f"{OAUTH_BASE}/authorize"
            f"?client_id={self.client_id}"
            f"&redirect_uri={encoded_redirect_uri}"
            f"&response_type=token"
            f"&scope={scope_string}"
        )

    # ------------------------------------------------------------------
    # User data
    # ------------------------------------------------------------------

    async def get_current_user(self, access_token: str) -> dict | None:
        """Return the raw Helix user object the user token belongs to."""
        try:
            response = await self._helix_get("users", None, token=access_token)
            if not response or response.status_code != 200:
                status = response.status_code if response else "no response"
                logger.error(f"Failed to fetch current user: {status}")
                return None

            users = response.json().get("data", [])
            if not users:
                logger.warning("No user returned for user token")
                return None

            return cast(dict, users[0])

        except ValueError as e:
            logger.exception(f"Error decoding user info: {e}")
            return None

    async def get_followed_channels(
        self,
        user_id: str,
        access_token: str,
        first: int = 100,
    ) -> list[dict] | None:
        """Get channels a user follows (requires user token).

        Returns ``None`` on failure so callers can keep what they had.
        """
        try:
            response = await self._helix_get(
                "users/follows",
                {"user_id": user_id, "first": min(first, 100)},
                token=access_token,
            )
            if not response or response.status_code != 200:
                logger.error(f"Failed to fetch followed channels: user={user_id}")
                return None

            return cast(list[dict], response.json().get("data", []))

        except ValueError as e:
            logger.exception(f"Error decoding followed channels: {e}")
            return None

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search_channels(
        self,
        query: str,
        access_token: str,
        first: int = 5,
    ) -> list[dict] | None:
        """Search channels by name (app token). ``None`` on failure."""
        try:
            response = await self._helix_get(
                "search/channels",
                {"query": query, "first": first},
                token=access_token,
            )
            if not response or response.status_code != 200:
                logger.error(f"Failed to search channels: query={query!r}")
                return None

            return cast(list[dict], response.json().get("data", []))

        except ValueError as e:
            logger.exception(f"Error decoding channel search: {e}")
            return None
