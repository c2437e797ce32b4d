from typing import Optional
import logging

import httpx

from app.core.exceptions import StorageError
from app.models.waitlist_entry import WaitlistEntry

logger = logging.getLogger(__name__)


class RemoteListStore:
    """Pushes entries onto a Redis list through the Upstash REST API."""

    name = "remote"

    def __init__(
        self,
        rest_url: str,
        token: str,
        list_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rest_url = rest_url
        self.list_key = list_key

        logger.info(f"Remote waitlist store using {rest_url} key={list_key}")

        self._client = httpx.AsyncClient(
            base_url=rest_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )

    async def initialize(self) -> None:
        return None

    async def append(self, entry: WaitlistEntry) -> None:
        command = ["RPUSH", self.list_key, entry.to_json()]
        try:
            resp = await self._client.post("/", json=command)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            logger.exception(
                f"Remote store RPUSH failed status={e.response.status_code} response={e.response.text}"
            )
            raise StorageError(StorageError.public_message, details=e.response.text) from e
        except httpx.HTTPError as e:
            logger.exception(f"Remote store unreachable: {e!r}")
            raise StorageError(StorageError.public_message, details=str(e)) from e
        except ValueError as e:
            logger.exception(f"Remote store returned a non-JSON body: {resp.text[:200]}")
            raise StorageError(StorageError.public_message, details=str(e)) from e

        if isinstance(body, dict) and body.get("error"):
            logger.error(f"Remote store rejected RPUSH: {body['error']}")
            raise StorageError(StorageError.public_message, details=str(body["error"]))

    async def close(self) -> None:
        await self._client.aclose()
