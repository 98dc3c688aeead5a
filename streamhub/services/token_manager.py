"""App and user credential lifecycle.

The app token comes from the client-credentials grant once per session.
The user token comes back from Twitch's implicit grant in the page's URL
fragment; ``resume`` consumes that fragment (or restores the last session
from durable storage) before anything else initializes.

Tokens are never refreshed or validated for expiry. An expired token only
shows up as failing Helix calls, which are logged and degrade to "feature
unavailable".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs

from streamhub.core.config import VIEWER_SCOPES
from streamhub.core.storage import USER_DATA_KEY, USER_TOKEN_KEY, KeyValueStore
from streamhub.models import PageLocation, UserProfile

from .twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)


class AppTokenState(str, Enum):
    ABSENT = "absent"
    PENDING = "pending"
    PRESENT = "present"


class UserSessionState(str, Enum):
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


@dataclass(frozen=True)
class OAuthFragment:
    """Token parameters from an implicit-grant redirect."""

    access_token: str
    scope: str


@dataclass(frozen=True)
class ResumeResult:
    """Outcome of the start-up resume step."""

    location: PageLocation
    signed_in: bool
    from_redirect: bool
    fetch_follows: bool


def parse_oauth_fragment(fragment: str) -> OAuthFragment | None:
    """Parse ``access_token=...&scope=...``; both parameters are required."""
    params = parse_qs(fragment.lstrip("#"))
    token = params.get("access_token", [""])[0]
    scope = params.get("scope", [""])[0]
    if not token or not scope:
        return None
    return OAuthFragment(access_token=token, scope=scope)


class TokenManager:
    """Owns the app credential and the optional signed-in user session."""

    def __init__(
        self,
        api: TwitchAPIClient,
        storage: KeyValueStore,
        scopes: list[str] | None = None,
    ) -> None:
        self.api = api
        self.storage = storage
        self.scopes = scopes if scopes is not None else list(VIEWER_SCOPES)

        self.app_state = AppTokenState.ABSENT
        self._app_token: str | None = None

        self._user_token: str | None = None
        self._profile: UserProfile | None = None

    # ==================== App credential ====================

    @property
    def app_token(self) -> str | None:
        return self._app_token if self.app_state is AppTokenState.PRESENT else None

    async def acquire_app_token(self) -> bool:
        """Run the client-credentials exchange. Stays absent on failure."""
        self.app_state = AppTokenState.PENDING
        token = await self.api.fetch_app_token()
        if not token:
            self.app_state = AppTokenState.ABSENT
            self._app_token = None
            logger.warning("App token unavailable; channel suggestions disabled")
            return False

        self._app_token = token
        self.app_state = AppTokenState.PRESENT
        logger.info("App token acquired")
        return True

    # ==================== User session ====================

    @property
    def user_token(self) -> str | None:
        return self._user_token

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def session_state(self) -> UserSessionState:
        if self._user_token:
            return UserSessionState.SIGNED_IN
        return UserSessionState.SIGNED_OUT

    @property
    def is_signed_in(self) -> bool:
        return self.session_state is UserSessionState.SIGNED_IN

    def sign_in_url(self, location: PageLocation) -> str:
        """Authorize URL that redirects back to the current page."""
        return self.api.generate_implicit_oauth_url(location.redirect_uri, self.scopes)

    async def resume(self, location: PageLocation) -> ResumeResult:
        """Consume an implicit-grant fragment, or restore the stored session."""
        fragment = parse_oauth_fragment(location.fragment)
        if fragment is None:
            self.restore()
            return ResumeResult(
                location=location,
                signed_in=self.is_signed_in,
                from_redirect=False,
                fetch_follows=False,
            )

        logger.info(f"Resuming sign-in from redirect (scope: {fragment.scope})")
        # A new token may belong to a different account than the stored profile
        self._profile = None
        self.storage.remove(USER_DATA_KEY)
        self._user_token = fragment.access_token
        self.storage.set(USER_TOKEN_KEY, fragment.access_token)

        user = await self.api.get_current_user(fragment.access_token)
        if user is not None:
            self._profile = UserProfile.from_helix(user)
            self.storage.set(USER_DATA_KEY, json.dumps(user))
            logger.info(f"Signed in as {self._profile.login}")
        else:
            logger.warning("Signed in, but user info could not be fetched")

        return ResumeResult(
            location=location.without_fragment(),
            signed_in=True,
            from_redirect=True,
            fetch_follows=user is not None,
        )

    def restore(self) -> bool:
        """Load token and profile persisted by an earlier sign-in."""
        token = self.storage.get(USER_TOKEN_KEY)
        raw_user = self.storage.get(USER_DATA_KEY)

        if token:
            self._user_token = token
        if raw_user:
            try:
                self._profile = UserProfile.from_helix(json.loads(raw_user))
            except (ValueError, AttributeError) as e:
                logger.warning(f"Stored user data is unreadable: {e}")

        if token:
            logger.debug("Restored user session from storage")
        return bool(token)

    def sign_out(self) -> None:
        """Forget the user session locally; the token is not revoked."""
        self._user_token = None
        self._profile = None
        self.storage.remove(USER_TOKEN_KEY)
        self.storage.remove(USER_DATA_KEY)
        logger.info("Signed out")
