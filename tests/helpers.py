"""Shared test doubles."""

from unittest.mock import AsyncMock, MagicMock

from streamhub.services import TwitchAPIClient

DEBOUNCE = 0.02

TWITCH_USER = {
    "id": "141981764",
    "login": "twitchdev",
    "display_name": "TwitchDev",
    "profile_image_url": "https://static-cdn.jtvnw.net/twitchdev.png",
}


def _authorize_url(redirect_uri: str, scopes: list[str]) -> str:
    return f"https://id.twitch.tv/oauth2/authorize?redirect_uri={redirect_uri}"


def make_mock_api() -> MagicMock:
    """TwitchAPIClient double with every network call succeeding."""
    api = MagicMock(spec=TwitchAPIClient)
    api.fetch_app_token = AsyncMock(return_value="app-token")
    api.get_current_user = AsyncMock(return_value=dict(TWITCH_USER))
    api.get_followed_channels = AsyncMock(
        return_value=[
            {"to_id": "1", "to_login": "shroud", "to_name": "shroud"},
            {"to_id": "2", "to_login": "pokimane", "to_name": "Pokimane"},
        ]
    )
    api.search_channels = AsyncMock(
        return_value=[{"broadcaster_login": "shroud"}, {"broadcaster_login": "shroudy"}]
    )
    api.generate_implicit_oauth_url = MagicMock(side_effect=_authorize_url)
    api.close = AsyncMock()
    return api
