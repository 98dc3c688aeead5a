"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from streamhub.api import create_app
from streamhub.core.storage import USER_TOKEN_KEY


@pytest.fixture
def client(settings, controller):
    app = create_app(settings, controller)
    with TestClient(app) as test_client:
        yield test_client


class TestStreamRoutes:
    def test_add_and_view(self, client):
        response = client.post("/api/streams", json={"platform": "twitch", "identifier": "shroud"})
        assert response.status_code == 201
        slot = response.json()["slot"]
        assert slot["identifier"] == "shroud"

        view = client.get("/api/view").json()
        assert view["columns"] == 1
        assert view["tiles"][0]["embed_url"] == (
            "https://player.twitch.tv/?channel=shroud&parent=127.0.0.1"
        )

    def test_policy_notice_returned(self, client):
        response = client.post("/api/streams", json={"platform": "kick", "identifier": "xqc"})

        assert response.status_code == 201
        assert [n["kind"] for n in response.json()["notices"]] == ["policy"]

    def test_capacity_rejected_with_409(self, client):
        for i in range(12):
            client.post("/api/streams", json={"platform": "twitch", "identifier": f"c{i}"})

        response = client.post("/api/streams", json={"platform": "twitch", "identifier": "c12"})

        assert response.status_code == 409
        assert "12" in response.json()["detail"]
        assert len(client.get("/api/streams").json()) == 12

    def test_remove_is_idempotent(self, client):
        slot_id = client.post(
            "/api/streams", json={"platform": "twitch", "identifier": "shroud"}
        ).json()["slot"]["id"]

        assert client.delete(f"/api/streams/{slot_id}").json() == {"removed": True}
        assert client.delete(f"/api/streams/{slot_id}").json() == {"removed": False}

    def test_update_unknown_slot_is_404(self, client):
        response = client.patch("/api/streams/1", json={"identifier": "x"})
        assert response.status_code == 404

    def test_update_and_select(self, client):
        slot_id = client.post(
            "/api/streams", json={"platform": "twitch", "identifier": "s"}
        ).json()["slot"]["id"]

        updated = client.patch(f"/api/streams/{slot_id}", json={"identifier": "shr"})
        assert updated.json()["identifier"] == "shr"

        selected = client.post(f"/api/streams/{slot_id}/select", json={"name": "shroud"})
        assert selected.json()["identifier"] == "shroud"

    def test_focus(self, client):
        first = client.post("/api/streams", json={"identifier": "a"}).json()["slot"]["id"]
        client.post("/api/streams", json={"identifier": "b"})
        client.post("/api/streams", json={"identifier": "c"})

        client.post("/api/streams/focus", json={"slot_id": first})
        view = client.get("/api/view").json()
        assert view["columns"] == 1
        assert [t["slot_id"] for t in view["tiles"]] == [first]

        client.post("/api/streams/focus", json={"slot_id": None})
        assert client.get("/api/view").json()["columns"] == 2


class TestAuthRoutes:
    def test_resume_strips_fragment(self, client, storage):
        response = client.post(
            "/api/auth/resume", json={"href": "http://localhost:8000/#access_token=abc&scope=x"}
        )

        body = response.json()
        assert body["signed_in"] is True
        assert body["from_redirect"] is True
        assert body["location"] == "http://localhost:8000/"
        assert body["user"]["login"] == "twitchdev"
        assert storage.get(USER_TOKEN_KEY) == "abc"

    def test_login_redirects_to_twitch(self, client):
        response = client.get("/api/auth/twitch/login", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"].startswith("https://id.twitch.tv/oauth2/authorize")

    def test_user_requires_sign_in(self, client):
        assert client.get("/api/auth/user").status_code == 401

    def test_logout(self, client, storage):
        client.post(
            "/api/auth/resume", json={"href": "http://localhost:8000/#access_token=abc&scope=x"}
        )

        assert client.post("/api/auth/logout").status_code == 200

        assert storage.get(USER_TOKEN_KEY) is None
        assert client.get("/api/view").json()["user"] is None

    def test_follows_after_sign_in(self, client):
        client.post(
            "/api/auth/resume", json={"href": "http://localhost:8000/#access_token=abc&scope=x"}
        )

        follows = client.get("/api/follows").json()
        assert [c["login"] for c in follows["channels"]] == ["shroud", "pokimane"]

        added = client.post("/api/follows/add", json={"login": "pokimane"})
        assert added.status_code == 201
        assert added.json()["slot"]["platform"] == "twitch"

    def test_load_follows_requires_sign_in(self, client):
        assert client.post("/api/follows/load").status_code == 401


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
