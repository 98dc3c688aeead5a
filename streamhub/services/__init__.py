"""Services layer - Twitch access, credentials, search and follows

Services are initialized with their dependencies and owned by the
``StreamHubController``.
"""

from .channel_search import ChannelSearchEngine
from .follow_loader import FollowListLoader
from .token_manager import (
    AppTokenState,
    OAuthFragment,
    ResumeResult,
    TokenManager,
    UserSessionState,
    parse_oauth_fragment,
)
from .twitch_api import TwitchAPIClient

__all__ = [
    "AppTokenState",
    "ChannelSearchEngine",
    "FollowListLoader",
    "OAuthFragment",
    "ResumeResult",
    "TokenManager",
    "TwitchAPIClient",
    "UserSessionState",
    "parse_oauth_fragment",
]
