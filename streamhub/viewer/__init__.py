"""Viewer state: slots, per-slot timers, embed URLs and grid layout."""

from .embed import placeholder_text, resolve_embed_url
from .layout import grid_columns
from .slots import MAX_SLOTS, StreamSlotStore
from .timers import TimerArena

__all__ = [
    "MAX_SLOTS",
    "StreamSlotStore",
    "TimerArena",
    "grid_columns",
    "placeholder_text",
    "resolve_embed_url",
]
