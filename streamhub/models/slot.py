"""Data models for stream slots and user-facing notices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Platform(str, Enum):
    """Streaming providers a slot can embed."""

    TWITCH = "twitch"
    YOUTUBE = "youtube"
    KICK = "kick"


@dataclass
class Slot:
    """One viewing unit bound to a platform and a channel/video identifier."""

    id: int
    platform: Platform
    identifier: str = ""


class NoticeKind(str, Enum):
    CAPACITY = "capacity"
    POLICY = "policy"
    EMPTY = "empty"


class NoticeLevel(str, Enum):
    BLOCKING = "blocking"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    """Message the viewer must see (a rejected add or an advisory)."""

    kind: NoticeKind
    level: NoticeLevel
    message: str
