import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.exceptions import StorageError

STORAGE_ENV_VARS = (
    "KV_REST_API_URL",
    "KV_REST_API_TOKEN",
    "KV_REST_API_READ_ONLY_TOKEN",
    "UPSTASH_REDIS_REST_URL",
    "UPSTASH_REDIS_REST_TOKEN",
    "KV_URL",
    "REDIS_URL",
    "WAITLIST_STORAGE",
    "WAITLIST_FILE",
    "WAITLIST_KEY",
    "DATA_DIR",
)


class RecordingStore:
    """In-memory store that remembers what it was asked to append"""

    name = "memory"

    def __init__(self, error: Exception = None):
        self.entries = []
        self.error = error

    async def initialize(self):
        return None

    async def append(self, entry):
        if self.error is not None:
            raise self.error
        self.entries.append(entry)

    async def close(self):
        return None


@pytest.fixture(autouse=True)
def clean_storage_env(monkeypatch):
    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides):
        values = {
            "DATA_DIR": str(tmp_path / "data"),
            "FRONTEND_DIST_DIR": str(tmp_path / "dist"),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def waitlist_csv(tmp_path):
    return tmp_path / "data" / "waitlist.csv"


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def failing_store():
    return RecordingStore(error=StorageError("Unable to save this submission.", details="disk full"))


@pytest.fixture
def client_for():
    def _client(app):
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    return _client
