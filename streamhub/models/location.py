"""The viewer page's location, as seen when it loads."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit


@dataclass(frozen=True)
class PageLocation:
    """Address of the hosting page.

    The Twitch embed needs the page's host as its ``parent`` parameter and the
    implicit-grant redirect comes back with the token in the fragment.
    """

    href: str

    @property
    def host(self) -> str:
        return urlsplit(self.href).hostname or ""

    @property
    def fragment(self) -> str:
        return urlsplit(self.href).fragment

    @property
    def redirect_uri(self) -> str:
        """Origin plus path, the address Twitch redirects back to."""
        parts = urlsplit(self.href)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))

    def without_fragment(self) -> PageLocation:
        parts = urlsplit(self.href)
        return PageLocation(urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, "")))
