"""Top-level application state for a single viewer.

Owns every component and the only mutable session state (slots, timers,
credentials, follow list, focus). ``start`` is the init boundary and
``shutdown`` the teardown; signing out resets the user half in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from streamhub.core.config import Settings
from streamhub.core.storage import KeyValueStore
from streamhub.models import FollowedChannel, Notice, PageLocation, Platform, Slot, UserProfile
from streamhub.services import (
    ChannelSearchEngine,
    FollowListLoader,
    ResumeResult,
    TokenManager,
    TwitchAPIClient,
)
from streamhub.viewer import (
    StreamSlotStore,
    TimerArena,
    grid_columns,
    placeholder_text,
    resolve_embed_url,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = PageLocation("http://localhost/")


@dataclass
class Tile:
    slot_id: int
    platform: Platform
    identifier: str
    embed_url: str
    placeholder: str | None = None


@dataclass
class ViewModel:
    """Everything the render surface needs for one frame."""

    columns: int
    focused_slot_id: int | None
    tiles: list[Tile]
    labelled: list[Slot]
    suggestions: dict[int, list[str]]
    active_suggestions: int | None
    user: UserProfile | None
    followed: list[FollowedChannel] = field(default_factory=list)
    can_load_follows: bool = False
    search_enabled: bool = False


class StreamHubController:
    """Single owner of the viewer's state."""

    def __init__(
        self,
        settings: Settings,
        *,
        api: TwitchAPIClient | None = None,
        storage: KeyValueStore | None = None,
    ) -> None:
        self.settings = settings
        self.api = api or TwitchAPIClient(
            settings.client_id,
            settings.client_secret,
            timeout=settings.http_timeout,
        )
        self.storage = storage or KeyValueStore(settings.storage_path)

        self.timers = TimerArena()
        self.store = StreamSlotStore(max_slots=settings.max_slots, timers=self.timers)
        self.tokens = TokenManager(self.api, self.storage)
        self.search = ChannelSearchEngine(
            self.store,
            self.tokens,
            self.api,
            debounce=settings.search_debounce_seconds,
            page_size=settings.search_page_size,
        )
        self.follows = FollowListLoader(
            self.tokens,
            self.api,
            self.store,
            page_size=settings.follows_page_size,
        )

        self.location = DEFAULT_LOCATION
        self.focused_slot_id: int | None = None
        self.started = False

        self.store.add_remove_listener(self._on_slot_removed)

    # ==================== Lifecycle ====================

    async def start(self, location: PageLocation | None = None) -> ResumeResult:
        """Resume the user session first, then fetch the app token."""
        result = await self.resume(location or self.location)
        await self.tokens.acquire_app_token()
        self.started = True
        logger.info(
            f"StreamHub started (app token: {self.tokens.app_state.value}, "
            f"user: {self.tokens.session_state.value})"
        )
        return result

    async def resume(self, location: PageLocation) -> ResumeResult:
        """Handle a page load: consume a sign-in redirect or restore storage."""
        result = await self.tokens.resume(location)
        self.location = result.location
        if result.from_redirect:
            self.follows.clear()
        if result.fetch_follows:
            await self.follows.load()
        return result

    async def shutdown(self) -> None:
        await self.search.shutdown()
        await self.api.close()
        self.started = False
        logger.info("StreamHub stopped")

    # ==================== Auth ====================

    def sign_in_url(self) -> str:
        return self.tokens.sign_in_url(self.location)

    def sign_out(self) -> None:
        self.tokens.sign_out()
        self.follows.clear()

    async def load_follows(self) -> bool:
        """Explicit "load followed channels" request."""
        return await self.follows.load(force=True)

    # ==================== Slots ====================

    def add_stream(self, platform: Platform | str, identifier: str) -> Slot | None:
        return self.store.add(platform, identifier)

    def add_followed(self, login: str) -> Slot | None:
        return self.follows.add_to_store(login)

    def remove_stream(self, slot_id: int) -> bool:
        return self.store.remove(slot_id)

    def edit_identifier(self, slot_id: int, value: str) -> Slot | None:
        self.search.on_identifier_edit(slot_id, value)
        return self.store.get(slot_id)

    def change_platform(self, slot_id: int, platform: Platform | str) -> Slot | None:
        return self.store.update(slot_id, "platform", Platform(platform).value)

    def select_suggestion(self, slot_id: int, name: str) -> Slot | None:
        if not self.search.select(slot_id, name):
            return None
        return self.store.get(slot_id)

    def focus(self, slot_id: int | None) -> int | None:
        """Single out one slot ("View"), or pass ``None`` for "View all"."""
        if slot_id is None or slot_id in self.store:
            self.focused_slot_id = slot_id
        return self.focused_slot_id

    def _on_slot_removed(self, slot_id: int) -> None:
        if self.focused_slot_id == slot_id:
            self.focused_slot_id = None

    def drain_notices(self) -> list[Notice]:
        return self.store.drain_notices()

    # ==================== Rendering ====================

    def _tile(self, slot: Slot) -> Tile:
        url = resolve_embed_url(slot.platform, slot.identifier, self.location.host)
        return Tile(
            slot_id=slot.id,
            platform=slot.platform,
            identifier=slot.identifier,
            embed_url=url,
            placeholder=None if url else placeholder_text(slot.platform),
        )

    def view(self) -> ViewModel:
        focused = self.focused_slot_id
        if focused is not None:
            slots = [s for s in self.store if s.id == focused]
        else:
            slots = list(self.store)

        return ViewModel(
            columns=grid_columns(len(self.store), focus_mode=focused is not None),
            focused_slot_id=focused,
            tiles=[self._tile(s) for s in slots],
            labelled=self.store.labelled(),
            suggestions=self.search.suggestions,
            active_suggestions=self.search.active_slot,
            user=self.tokens.profile if self.tokens.is_signed_in else None,
            followed=list(self.follows.channels) if self.tokens.is_signed_in else [],
            can_load_follows=self.follows.can_request,
            search_enabled=self.tokens.app_token is not None,
        )
