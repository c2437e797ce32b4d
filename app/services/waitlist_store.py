from typing import Protocol
import logging

from app.core.exceptions import ConfigurationError
from app.core.storage import StorageConfig
from app.models.waitlist_entry import WaitlistEntry
from app.services.file_store import FileStore
from app.services.remote_list_store import RemoteListStore

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Redis is not configured. Set KV_REST_API_URL + KV_REST_API_TOKEN "
    "(or UPSTASH_REDIS_REST_URL + UPSTASH_REDIS_REST_TOKEN)."
)
READ_ONLY_TOKEN_MESSAGE = (
    "Read-only Redis token detected. Set KV_REST_API_TOKEN (write token) for waitlist writes."
)


class WaitlistStore(Protocol):
    name: str

    async def initialize(self) -> None:
        ...

    async def append(self, entry: WaitlistEntry) -> None:
        ...

    async def close(self) -> None:
        ...


class UnavailableStore:
    """Stand-in when activation was refused; every append fails with the same error."""

    name = "unavailable"

    def __init__(self, error: ConfigurationError):
        self.error = error

    async def initialize(self) -> None:
        logger.warning(f"⚠️ Waitlist storage unavailable ({self.error.error_code}): {self.error.message}")

    async def append(self, entry: WaitlistEntry) -> None:
        raise self.error

    async def close(self) -> None:
        return None


def activate_store(config: StorageConfig) -> WaitlistStore:
    """Pick the backend for this process, or raise ConfigurationError."""
    if config.mode == "file":
        return FileStore(config.file_path)

    if config.has_remote_credentials:
        return RemoteListStore(
            rest_url=config.rest_url,
            token=config.write_token,
            list_key=config.list_key,
            timeout=config.timeout_seconds,
        )

    if config.rest_url and config.has_read_only_token:
        raise ConfigurationError(READ_ONLY_TOKEN_MESSAGE, error_code=ConfigurationError.READ_ONLY_TOKEN)

    if config.mode == "remote":
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE, error_code=ConfigurationError.NOT_CONFIGURED)

    return FileStore(config.file_path)


def build_store(config: StorageConfig) -> WaitlistStore:
    try:
        store = activate_store(config)
    except ConfigurationError as e:
        return UnavailableStore(e)
    logger.info(f"Waitlist storage backend: {store.name}")
    return store
