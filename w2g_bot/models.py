"""Data models for the W2G link bot.

Defines Pydantic models for the persisted chat-to-room association and for
the playlist items sent to the Watch2Gether API.
"""

from datetime import datetime

from pydantic import BaseModel


class ChatRoom(BaseModel):
    """Watch2Gether room bound to a Telegram chat.

    Attributes:
        chat_id: Telegram chat identifier, unique per row.
        streamkey: Room key returned by Watch2Gether on creation.
        updated_at: When the streamkey was last written (UTC).
    """

    chat_id: int
    streamkey: str
    updated_at: datetime


class PlaylistItem(BaseModel):
    """Single entry for the room playlist.

    Attributes:
        url: Link to add.
        title: Optional display title, omitted from the payload when None.
    """

    url: str
    title: str | None = None
