"""Debounced per-slot channel search with live suggestions."""

from __future__ import annotations

import asyncio
import logging

from streamhub.viewer.slots import StreamSlotStore

from .token_manager import TokenManager
from .twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.3
SEARCH_PAGE_SIZE = 5


class ChannelSearchEngine:
    """Suggest Twitch channels while a slot's identifier is being typed.

    Each edit restarts the slot's timer in the store's ``TimerArena``; only a
    quiet period of *debounce* seconds lets a query through, for the value the
    slot holds when the timer fires. Queries already sent are never cancelled.

    Every edit and every accepted suggestion bumps the slot's generation. A
    query remembers the generation and identifier it was sent for, and its
    result is dropped unless both still match (and the slot still exists).
    """

    def __init__(
        self,
        store: StreamSlotStore,
        tokens: TokenManager,
        api: TwitchAPIClient,
        *,
        debounce: float = SEARCH_DEBOUNCE_SECONDS,
        page_size: int = SEARCH_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.api = api
        self.debounce = debounce
        self.page_size = page_size

        self.active_slot: int | None = None
        self._suggestions: dict[int, list[str]] = {}
        self._generations: dict[int, int] = {}
        self._tasks: set[asyncio.Task] = set()

        store.add_remove_listener(self.forget)

    # ==================== Queries ====================

    def suggestions_for(self, slot_id: int) -> list[str]:
        return list(self._suggestions.get(slot_id, []))

    @property
    def suggestions(self) -> dict[int, list[str]]:
        return {k: list(v) for k, v in self._suggestions.items() if v}

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # ==================== Input ====================

    def _bump(self, slot_id: int) -> int:
        generation = self._generations.get(slot_id, 0) + 1
        self._generations[slot_id] = generation
        return generation

    def on_identifier_edit(self, slot_id: int, value: str) -> None:
        """Apply an edit now; schedule a search once typing settles."""
        if self.store.update(slot_id, "identifier", value) is None:
            return

        self._bump(slot_id)
        self.active_slot = slot_id
        self.store.timers.cancel(slot_id)

        if not value or self.tokens.app_token is None:
            self._suggestions.pop(slot_id, None)
            return

        self.store.timers.schedule(slot_id, self.debounce, lambda: self._fire(slot_id))

    def select(self, slot_id: int, name: str) -> bool:
        """Accept a suggestion; supersedes any pending or in-flight search."""
        if self.store.update(slot_id, "identifier", name) is None:
            return False

        self._bump(slot_id)
        self.store.timers.cancel(slot_id)
        self._suggestions.pop(slot_id, None)
        if self.active_slot == slot_id:
            self.active_slot = None
        return True

    def forget(self, slot_id: int) -> None:
        """Drop everything held for a removed slot."""
        self._suggestions.pop(slot_id, None)
        self._generations.pop(slot_id, None)
        if self.active_slot == slot_id:
            self.active_slot = None

    # ==================== Search ====================

    def _fire(self, slot_id: int) -> None:
        slot = self.store.get(slot_id)
        if slot is None:
            return

        query = slot.identifier
        token = self.tokens.app_token
        if not query or token is None:
            self._suggestions.pop(slot_id, None)
            return

        generation = self._generations.get(slot_id, 0)
        task = asyncio.create_task(self._search(slot_id, generation, query, token))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, slot_id: int, generation: int, query: str) -> bool:
        slot = self.store.get(slot_id)
        return (
            slot is not None
            and self._generations.get(slot_id) == generation
            and slot.identifier == query
        )

    async def _search(self, slot_id: int, generation: int, query: str, token: str) -> None:
        logger.debug(f"Searching channels for slot {slot_id}: {query!r}")
        results = await self.api.search_channels(query, token, first=self.page_size)
        if results is None:
            logger.warning(f"Channel search failed for {query!r}; keeping previous suggestions")
            return

        if not self._is_current(slot_id, generation, query):
            logger.debug(f"Discarding stale suggestions for slot {slot_id} ({query!r})")
            return

        names = [c["broadcaster_login"] for c in results if c.get("broadcaster_login")]
        self._suggestions[slot_id] = names[: self.page_size]

    # ==================== Lifecycle ====================

    async def wait_idle(self) -> None:
        """Wait for every in-flight search to settle."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        self.store.timers.cancel_all()
        for task in list(self._tasks):
            task.cancel()
        await self.wait_idle()
        self._suggestions.clear()
        self._generations.clear()
        self.active_slot = None
