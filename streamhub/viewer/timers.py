"""Per-slot cancellable timers on the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimerArena:
    """Slot id → pending ``loop.call_later`` handle.

    At most one handle per slot. Scheduling replaces (and cancels) the
    previous handle; a handle is erased when it fires or is cancelled.
    """

    def __init__(self) -> None:
        self._handles: dict[int, asyncio.TimerHandle] = {}

    def schedule(self, slot_id: int, delay: float, callback: Callable[[], None]) -> None:
        self.cancel(slot_id)
        loop = asyncio.get_running_loop()
        self._handles[slot_id] = loop.call_later(delay, self._fire, slot_id, callback)

    def _fire(self, slot_id: int, callback: Callable[[], None]) -> None:
        self._handles.pop(slot_id, None)
        callback()

    def cancel(self, slot_id: int) -> bool:
        """Cancel and erase the slot's handle. Returns whether one was pending."""
        handle = self._handles.pop(slot_id, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug(f"Cancelled pending timer for slot {slot_id}")
        return True

    def cancel_all(self) -> None:
        for slot_id in list(self._handles):
            self.cancel(slot_id)

    def is_pending(self, slot_id: int) -> bool:
        return slot_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)
