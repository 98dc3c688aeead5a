"""Embed URLs for each streaming provider."""

from __future__ import annotations

from streamhub.models import Platform

TWITCH_PLAYER = "https://player.twitch.tv/"
YOUTUBE_EMBED = "https://www.youtube.com/embed"
KICK_PLAYER = "https://player.kick.com"

YOUTUBE_VIDEO_ID_LENGTH = 11


def resolve_embed_url(platform: Platform | str, identifier: str, parent_host: str) -> str:
    """Return the iframe URL for a slot, or ``""`` when there is nothing to embed.

    Twitch refuses to render unless ``parent`` matches the hosting page's
    domain. A YouTube identifier of exactly 11 characters is a video id;
    anything else is treated as a channel for the live-stream embed.
    """
    if not identifier:
        return ""

    try:
        platform = Platform(platform)
    except ValueError:
        return ""

    if platform is Platform.TWITCH:
        return f"{TWITCH_PLAYER}?channel={identifier}&parent={parent_host}"
    if platform is Platform.YOUTUBE:
        if len(identifier) == YOUTUBE_VIDEO_ID_LENGTH:
            return f"{YOUTUBE_EMBED}/{identifier}?autoplay=1"
        return f"{YOUTUBE_EMBED}/live_stream?channel={identifier}&autoplay=1"
    return f"{KICK_PLAYER}/{identifier}"


def placeholder_text(platform: Platform | str) -> str:
    value = platform.value if isinstance(platform, Platform) else platform
    return f"Enter a {value} channel name"
