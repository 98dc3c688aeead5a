import pytest

from streamhub.controller import StreamHubController
from streamhub.core.config import Settings
from streamhub.core.storage import KeyValueStore
from streamhub.services import TokenManager
from streamhub.viewer import StreamSlotStore, TimerArena

from tests.helpers import DEBOUNCE, make_mock_api


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        client_id="client-id",
        client_secret="client-secret",
        storage_path=tmp_path / "storage.json",
        search_debounce_seconds=DEBOUNCE,
    )


@pytest.fixture
def storage(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "storage.json")


@pytest.fixture
def mock_api():
    return make_mock_api()


@pytest.fixture
def store() -> StreamSlotStore:
    return StreamSlotStore(timers=TimerArena())


@pytest.fixture
def tokens(mock_api, storage) -> TokenManager:
    return TokenManager(mock_api, storage)


@pytest.fixture
def controller(settings, mock_api, storage) -> StreamHubController:
    return StreamHubController(settings, api=mock_api, storage=storage)
