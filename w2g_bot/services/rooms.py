"""Room management for chats.

Combines the room store and the Watch2Gether client: resolves the room bound
to a chat (creating it on first use), resets it on request, and adds links.

Two concurrent first messages in the same chat may both find no room and both
create one; the store keeps whichever write lands last.
"""

import logging

from .room_store import RoomStore
from .w2g import RoomService

logger = logging.getLogger(__name__)


class RoomManager:
    """Resolves, resets and fills chat rooms."""

    def __init__(self, store: RoomStore, service: RoomService, room_base: str = "https://w2g.tv/rooms"):
        self.store = store
        self.service = service
        self.room_base = room_base.rstrip("/")

    def room_link(self, streamkey: str) -> str:
        """Public link of a room."""
        return f"{self.room_base}/{streamkey}"

    async def ensure_room(self, chat_id: int, initial_url: str | None = None) -> tuple[str, bool]:
        """Return the chat's room, creating it if none is stored.

        Args:
            chat_id: Telegram chat identifier.
            initial_url: Link the room starts with when it has to be created.

        Returns:
            Tuple of (streamkey, created).

        Raises:
            W2GError: If room creation fails.
        """
        existing = self.store.get(chat_id)
        if existing and existing.streamkey:
            return existing.streamkey, False

        streamkey = await self.service.create_room(initial_url)
        self.store.set(chat_id, streamkey)
        logger.info(f"Created room {streamkey} for chat {chat_id}")
        return streamkey, True

    async def reset_room(self, chat_id: int) -> str:
        """Create a fresh room and bind it to the chat unconditionally.

        Raises:
            W2GError: If room creation fails.
        """
        streamkey = await self.service.create_room()
        self.store.set(chat_id, streamkey)
        logger.info(f"Reset room for chat {chat_id} to {streamkey}")
        return streamkey

    async def add_link(self, chat_id: int, url: str) -> str:
        """Add a link to the chat's room.

        A newly created room receives the link as its initial content; an
        existing room gets it appended to the playlist.

        Returns:
            Streamkey of the room the link went to.

        Raises:
            W2GError: If a Watch2Gether call fails.
        """
        streamkey, created = await self.ensure_room(chat_id, initial_url=url)
        if not created:
            await self.service.add_to_playlist(streamkey, url)
        return streamkey
