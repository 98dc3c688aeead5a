"""Data models for the signed-in Twitch user and followed channels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class UserProfile:
    """Authenticated Twitch user."""

    id: str
    login: str
    display_name: str
    avatar_url: str = ""

    @classmethod
    def from_helix(cls, user: dict[str, Any]) -> UserProfile:
        """Build from a Helix ``users`` object."""
        return cls(
            id=str(user.get("id", "")),
            login=user.get("login", ""),
            display_name=user.get("display_name", ""),
            avatar_url=user.get("profile_image_url", ""),
        )


@dataclass
class FollowedChannel:
    """Channel the signed-in user follows."""

    id: str
    login: str
    display_name: str

    @classmethod
    def from_helix(cls, follow: dict[str, Any]) -> FollowedChannel:
        """Build from a Helix ``users/follows`` entry."""
        return cls(
            id=str(follow.get("to_id", "")),
            login=follow.get("to_login", ""),
            display_name=follow.get("to_name", ""),
        )
