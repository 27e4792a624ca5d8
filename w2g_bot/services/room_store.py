"""SQLite-backed storage for chat room associations.

Keeps exactly one row per Telegram chat with the Watch2Gether streamkey the
chat is bound to. Writes are upserts: the last write for a chat wins.
"""

import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from ..models import ChatRoom

logger = logging.getLogger(__name__)


class RoomStore:
    """Persistent chat_id -> streamkey mapping.

    Attributes:
        db_path: Path to SQLite database file.
    """

    def __init__(self, db_path: str):
        """Open the store and make sure the table exists.

        Args:
            db_path: Path to SQLite database file; parent directories are created.
        """
        self.db_path = db_path

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_database()
        logger.info(f"Room store initialized with database: {db_path}")

    def _init_database(self) -> None:
        """Create chat_rooms table if it doesn't exist."""
        with closing(sqlite3.connect(self.db_path)) as conn, conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chat_rooms (
                    chat_id INTEGER PRIMARY KEY,
                    streamkey TEXT NOT NULL,
                    updated_at INTEGER NOT NULL
                )
            """)

    def get(self, chat_id: int) -> ChatRoom | None:
        """Look up the room bound to a chat.

        Args:
            chat_id: Telegram chat identifier.

        Returns:
            ChatRoom if one is stored, None otherwise.
        """
        with closing(sqlite3.connect(self.db_path)) as conn, conn:
            row = conn.execute(
                "SELECT chat_id, streamkey, updated_at FROM chat_rooms WHERE chat_id = ?",
                (chat_id,),
            ).fetchone()

        if row is None:
            return None

        return ChatRoom(
            chat_id=row[0],
            streamkey=row[1],
            updated_at=datetime.fromtimestamp(row[2], tz=timezone.utc),
        )

    def set(self, chat_id: int, streamkey: str) -> None:
        """Bind a chat to a streamkey, replacing any previous binding.

        Args:
            chat_id: Telegram chat identifier.
            streamkey: Watch2Gether room key.
        """
        now = int(datetime.now(timezone.utc).timestamp())
        with closing(sqlite3.connect(self.db_path)) as conn, conn:
            conn.execute(
                """
                INSERT INTO chat_rooms (chat_id, streamkey, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(chat_id) DO UPDATE SET
                    streamkey = excluded.streamkey,
                    updated_at = excluded.updated_at
                """,
                (chat_id, streamkey, now),
            )

        logger.debug("Stored room %s for chat %s", streamkey, chat_id)
