"""Watch2Gether API client.

Thin client for the two Watch2Gether endpoints the bot needs: creating a room
and appending items to the room's current playlist. Failures of any kind are
reported as ``W2GError`` and never retried.
"""

import asyncio
import logging
from typing import Any, Protocol
from urllib.parse import quote

import aiohttp

from ..models import PlaylistItem

logger = logging.getLogger(__name__)


class W2GError(Exception):
    """Watch2Gether request failed or returned an unusable response."""


class RoomService(Protocol):
    """Operations the bot needs from a shared-viewing room service."""

    async def create_room(self, initial_url: str | None = None) -> str: ...

    async def add_to_playlist(self, streamkey: str, url: str, title: str | None = None) -> None: ...


class W2GClient:
    """Watch2Gether REST client."""

    def __init__(self, api_key: str, api_base: str = "https://api.w2g.tv", timeout: float = 20.0):
        """Initialize client.

        Args:
            api_key: Watch2Gether API key.
            api_base: REST API base URL.
            timeout: Total timeout for a single request in seconds.
        """
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    async def _post(self, path: str, payload: dict[str, Any], expect_json: bool = False) -> Any:
        """POST a JSON payload.

        Args:
            path: Endpoint path relative to the API base.
            payload: JSON body.
            expect_json: Decode and return the response body.

        Returns:
            Decoded JSON body if requested, otherwise None.

        Raises:
            W2GError: On transport failure, non-2xx status or undecodable body.
        """
        url = f"{self.api_base}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        headers = {"Accept": "application/json"}

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload, headers=headers) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text()
                        raise W2GError(f"POST {path} failed: {response.status} {error_text}")

                    if not expect_json:
                        return None
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise W2GError(f"POST {path} returned invalid JSON") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise W2GError(f"POST {path} failed: {e!r}") from e

    async def create_room(self, initial_url: str | None = None) -> str:
        """Create a new room.

        Args:
            initial_url: Link the room starts playing, if any.

        Returns:
            Streamkey of the new room.

        Raises:
            W2GError: If the request fails or no streamkey is returned.
        """
        payload: dict[str, Any] = {"w2g_api_key": self.api_key}
        if initial_url:
            payload["share"] = initial_url

        data = await self._post("/rooms/create.json", payload, expect_json=True)

        streamkey = data.get("streamkey") if isinstance(data, dict) else None
        if not streamkey:
            raise W2GError("No streamkey returned from Watch2Gether")

        logger.info(f"Created Watch2Gether room {streamkey}")
        return str(streamkey)

    async def add_to_playlist(self, streamkey: str, url: str, title: str | None = None) -> None:
        """Append a link to the room's current playlist.

        Args:
            streamkey: Room key.
            url: Link to add.
            title: Optional item title.

        Raises:
            W2GError: If the request fails.
        """
        item = PlaylistItem(url=url, title=title)
        payload = {
            "w2g_api_key": self.api_key,
            "add_items": [item.model_dump(exclude_none=True)],
        }

        path = f"/rooms/{quote(streamkey, safe='')}/playlists/current/playlist_items/sync_update"
        await self._post(path, payload)

        logger.info("Added %s to room %s", url, streamkey)
