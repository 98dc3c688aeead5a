"""Ordered, bounded collection of stream slots."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from streamhub.models import Notice, NoticeKind, NoticeLevel, Platform, Slot

from .timers import TimerArena

logger = logging.getLogger(__name__)

MAX_SLOTS = 12

CAPACITY_MESSAGE = "You can only add a maximum of {max_slots} streams."
EMPTY_MESSAGE = "Enter a stream name before adding it."
POLICY_MESSAGE = (
    "Warning: if you are streaming this page on Twitch and you pull up a "
    "Kick or YouTube streamer, Twitch may ban you."
)

_MUTABLE_FIELDS = ("platform", "identifier")


class StreamSlotStore:
    """Slots in insertion order, never more than *max_slots*.

    Removing a slot always cancels its pending search timer in *timers* and
    notifies remove listeners (the search engine drops its suggestions).
    Rejected adds and advisories are queued as :class:`Notice` objects.
    """

    def __init__(self, max_slots: int = MAX_SLOTS, timers: TimerArena | None = None) -> None:
        self.max_slots = max_slots
        self.timers = timers if timers is not None else TimerArena()
        self._slots: list[Slot] = []
        self._last_id = 0
        self._notices: list[Notice] = []
        self._remove_listeners: list[Callable[[int], None]] = []

    # ==================== Queries ====================

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(list(self._slots))

    def __contains__(self, slot_id: object) -> bool:
        return any(s.id == slot_id for s in self._slots)

    @property
    def is_full(self) -> bool:
        return len(self._slots) >= self.max_slots

    def get(self, slot_id: int) -> Slot | None:
        for slot in self._slots:
            if slot.id == slot_id:
                return slot
        return None

    def labelled(self) -> list[Slot]:
        """Slots that have an identifier (shown in the summary strip)."""
        return [s for s in self._slots if s.identifier]

    # ==================== Notices ====================

    def _notify(self, kind: NoticeKind, level: NoticeLevel, message: str) -> None:
        self._notices.append(Notice(kind=kind, level=level, message=message))
        if level is NoticeLevel.BLOCKING:
            logger.warning(message)
        else:
            logger.info(message)

    def drain_notices(self) -> list[Notice]:
        notices, self._notices = self._notices, []
        return notices

    # ==================== Mutations ====================

    def add_remove_listener(self, listener: Callable[[int], None]) -> None:
        self._remove_listeners.append(listener)

    def _next_id(self) -> int:
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def add(self, platform: Platform | str, identifier: str) -> Slot | None:
        """Append a slot. Returns ``None`` when the add is rejected."""
        platform = Platform(platform)
        identifier = identifier.strip()

        if not identifier:
            self._notify(NoticeKind.EMPTY, NoticeLevel.INFO, EMPTY_MESSAGE)
            return None
        if self.is_full:
            self._notify(
                NoticeKind.CAPACITY,
                NoticeLevel.BLOCKING,
                CAPACITY_MESSAGE.format(max_slots=self.max_slots),
            )
            return None

        if platform in (Platform.KICK, Platform.YOUTUBE):
            self._notify(NoticeKind.POLICY, NoticeLevel.INFO, POLICY_MESSAGE)

        slot = Slot(id=self._next_id(), platform=platform, identifier=identifier)
        self._slots.append(slot)
        logger.debug(f"Added slot {slot.id}: {platform.value}/{identifier}")
        return slot

    def add_from_follow(self, login: str) -> Slot | None:
        return self.add(Platform.TWITCH, login)

    def remove(self, slot_id: int) -> bool:
        """Remove a slot. Removing an unknown id is a no-op."""
        self.timers.cancel(slot_id)
        for listener in self._remove_listeners:
            listener(slot_id)

        slot = self.get(slot_id)
        if slot is None:
            return False
        self._slots.remove(slot)
        logger.debug(f"Removed slot {slot_id}")
        return True

    def update(self, slot_id: int, field: str, value: str) -> Slot | None:
        """Replace one field of one slot. Unknown ids are a no-op."""
        if field not in _MUTABLE_FIELDS:
            raise ValueError(f"Unknown slot field: {field!r}")

        slot = self.get(slot_id)
        if slot is None:
            return None
        if field == "platform":
            slot.platform = Platform(value)
        else:
            slot.identifier = value
        return slot
