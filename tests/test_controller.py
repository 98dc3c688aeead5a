"""End-to-end tests through StreamHubController."""

import asyncio

from streamhub.core.storage import USER_TOKEN_KEY
from streamhub.models import NoticeKind, PageLocation, Platform

from tests.helpers import DEBOUNCE


class TestStartup:
    async def test_start_resumes_before_app_token(self, controller, mock_api):
        order = []
        mock_api.get_current_user.side_effect = lambda token: order.append("user") or {
            "id": "1",
            "login": "viewer",
        }
        mock_api.fetch_app_token.side_effect = lambda: order.append("app") or "app-token"

        await controller.start(PageLocation("http://localhost:8000/#access_token=abc&scope=x"))

        assert order == ["user", "app"]
        assert controller.started is True
        assert controller.location.href == "http://localhost:8000/"

    async def test_sign_in_redirect_end_to_end(self, controller, storage, mock_api):
        await controller.start(PageLocation("http://localhost:8000/#access_token=abc&scope=x"))

        assert controller.tokens.is_signed_in
        assert storage.get(USER_TOKEN_KEY) == "abc"
        assert controller.location.fragment == ""
        assert [c.login for c in controller.follows.channels] == ["shroud", "pokimane"]

    async def test_failed_second_sign_in_skips_follows(self, controller, mock_api):
        await controller.start(PageLocation("http://localhost:8000/#access_token=first&scope=x"))
        mock_api.get_followed_channels.reset_mock()
        mock_api.get_current_user.return_value = None

        await controller.resume(PageLocation("http://localhost:8000/#access_token=second&scope=x"))

        mock_api.get_followed_channels.assert_not_awaited()
        assert controller.follows.channels == []
        assert controller.view().user is None

    async def test_restore_does_not_fetch_follows(self, controller, storage, mock_api):
        storage.set(USER_TOKEN_KEY, "saved")

        await controller.start(PageLocation("http://localhost:8000/"))

        assert controller.tokens.is_signed_in
        mock_api.get_followed_channels.assert_not_awaited()
        assert controller.view().can_load_follows is False

    async def test_shutdown_closes_client(self, controller, mock_api):
        await controller.start()
        await controller.shutdown()

        mock_api.close.assert_awaited_once()
        assert controller.started is False


class TestViewing:
    async def test_twitch_slot_embeds_with_page_host(self, controller):
        await controller.start(PageLocation("http://viewer.example:8000/"))

        slot = controller.add_stream(Platform.TWITCH, "shroud")
        tile = controller.view().tiles[0]

        assert tile.slot_id == slot.id
        assert "channel=shroud" in tile.embed_url
        assert "parent=viewer.example" in tile.embed_url
        assert tile.placeholder is None

    async def test_empty_identifier_renders_placeholder(self, controller):
        await controller.start()
        slot = controller.add_stream(Platform.YOUTUBE, "lofi")
        controller.edit_identifier(slot.id, "")

        tile = controller.view().tiles[0]

        assert tile.embed_url == ""
        assert tile.placeholder == "Enter a youtube channel name"

    async def test_focus_and_view_all(self, controller):
        await controller.start()
        slots = [controller.add_stream(Platform.TWITCH, f"c{i}") for i in range(5)]

        assert controller.view().columns == 3

        controller.focus(slots[2].id)
        view = controller.view()
        assert view.columns == 1
        assert [t.slot_id for t in view.tiles] == [slots[2].id]

        controller.focus(None)
        assert len(controller.view().tiles) == 5

    async def test_focus_unknown_slot_is_noop(self, controller):
        await controller.start()
        controller.add_stream(Platform.TWITCH, "shroud")

        assert controller.focus(123) is None

    async def test_removing_focused_slot_clears_focus(self, controller):
        await controller.start()
        slot = controller.add_stream(Platform.TWITCH, "shroud")
        controller.focus(slot.id)

        controller.remove_stream(slot.id)

        assert controller.focused_slot_id is None
        assert controller.view().columns == 1

    async def test_notices_are_drained(self, controller):
        await controller.start()
        controller.add_stream(Platform.KICK, "xqc")

        assert [n.kind for n in controller.drain_notices()] == [NoticeKind.POLICY]
        assert controller.drain_notices() == []

    async def test_change_platform(self, controller):
        await controller.start()
        slot = controller.add_stream(Platform.TWITCH, "dQw4w9WgXcQ")

        controller.change_platform(slot.id, "youtube")

        assert controller.view().tiles[0].embed_url.startswith("https://www.youtube.com/embed/dQw")


class TestSearchAndFollows:
    async def test_edit_then_select(self, controller, mock_api):
        await controller.start()
        slot = controller.add_stream(Platform.TWITCH, "s")

        controller.edit_identifier(slot.id, "shr")
        await asyncio.sleep(DEBOUNCE * 4)
        await controller.search.wait_idle()
        assert controller.view().suggestions == {slot.id: ["shroud", "shroudy"]}

        controller.select_suggestion(slot.id, "shroud")

        view = controller.view()
        assert view.suggestions == {}
        assert view.tiles[0].identifier == "shroud"

    async def test_search_disabled_without_app_token(self, controller, mock_api):
        mock_api.fetch_app_token.return_value = None
        await controller.start()
        slot = controller.add_stream(Platform.TWITCH, "s")

        controller.edit_identifier(slot.id, "shroud")
        await asyncio.sleep(DEBOUNCE * 4)

        view = controller.view()
        assert view.search_enabled is False
        assert view.suggestions == {}

    async def test_sign_out_clears_follows(self, controller):
        await controller.start(PageLocation("http://localhost/#access_token=abc&scope=x"))
        assert controller.view().followed

        controller.sign_out()

        view = controller.view()
        assert view.user is None
        assert view.followed == []
        assert controller.follows.channels == []

    async def test_add_followed_channel(self, controller):
        await controller.start(PageLocation("http://localhost/#access_token=abc&scope=x"))

        slot = controller.add_followed(controller.follows.channels[0].login)

        assert slot.platform is Platform.TWITCH
        assert slot.identifier == "shroud"
