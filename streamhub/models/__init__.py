"""Shared data models for StreamHub."""

from .location import PageLocation
from .slot import Notice, NoticeKind, NoticeLevel, Platform, Slot
from .user import FollowedChannel, UserProfile

__all__ = [
    "FollowedChannel",
    "Notice",
    "NoticeKind",
    "NoticeLevel",
    "PageLocation",
    "Platform",
    "Slot",
    "UserProfile",
]
