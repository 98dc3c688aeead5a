"""Followed-channel list for the signed-in user."""

from __future__ import annotations

import logging

from streamhub.models import FollowedChannel, Slot
from streamhub.viewer.slots import StreamSlotStore

from .token_manager import TokenManager
from .twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)


class FollowListLoader:
    """Loads followed channels once after sign-in, then only on request."""

    def __init__(
        self,
        tokens: TokenManager,
        api: TwitchAPIClient,
        store: StreamSlotStore,
        page_size: int = 100,
    ) -> None:
        self.tokens = tokens
        self.api = api
        self.store = store
        self.page_size = page_size
        self.channels: list[FollowedChannel] = []
        self._auto_loaded = False

    @property
    def can_request(self) -> bool:
        """Whether an explicit "load followed channels" makes sense."""
        return self.tokens.is_signed_in and self.tokens.profile is not None and not self.channels

    async def load(self, force: bool = False) -> bool:
        """Fetch the follow list. Without *force*, runs at most once per session."""
        if not force:
            if self._auto_loaded:
                return False
            self._auto_loaded = True

        token = self.tokens.user_token
        profile = self.tokens.profile
        if not token or profile is None:
            logger.debug("Follow list skipped: not signed in")
            return False

        follows = await self.api.get_followed_channels(profile.id, token, first=self.page_size)
        if follows is None:
            logger.warning("Could not load followed channels; keeping previous list")
            return False

        self.channels = [FollowedChannel.from_helix(f) for f in follows]
        logger.info(f"Loaded {len(self.channels)} followed channels for {profile.login}")
        return True

    def add_to_store(self, login: str) -> Slot | None:
        return self.store.add_from_follow(login)

    def clear(self) -> None:
        self.channels = []
        self._auto_loaded = False
