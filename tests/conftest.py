"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: environment setup, an
in-memory room service fake, a temporary room store and mocked Telegram
updates.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from telegram import Chat, Message

from w2g_bot.bot.utils import ROOMS_KEY, SETTINGS_KEY
from w2g_bot.config import BotConfig
from w2g_bot.services.room_store import RoomStore
from w2g_bot.services.rooms import RoomManager
from w2g_bot.services.w2g import W2GError

# Test constants
TEST_BOT_TOKEN = "123456:test_bot_token_placeholder"
TEST_BOT_USERNAME = "LinkBot"
TEST_W2G_API_KEY = "test_w2g_api_key"
TEST_CHAT_ID = 4242


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        "TELEGRAM_BOT_TOKEN": TEST_BOT_TOKEN,
        "BOT_USERNAME": TEST_BOT_USERNAME,
        "W2G_API_KEY": TEST_W2G_API_KEY,
        "LOG_LEVEL": "DEBUG",
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


class FakeRoomService:
    """In-memory stand-in for the Watch2Gether client."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.created: list[tuple[str, str | None]] = []
        self.playlist: list[tuple[str, str, str | None]] = []

    async def create_room(self, initial_url: str | None = None) -> str:
        if self.fail:
            raise W2GError("Failed to create room: 500")
        streamkey = f"room{len(self.created) + 1}"
        self.created.append((streamkey, initial_url))
        return streamkey

    async def add_to_playlist(self, streamkey: str, url: str, title: str | None = None) -> None:
        if self.fail:
            raise W2GError("Failed to add to playlist: 500")
        self.playlist.append((streamkey, url, title))


@pytest.fixture
def chat_id():
    return TEST_CHAT_ID


@pytest.fixture
def room_service():
    return FakeRoomService()


@pytest.fixture
def room_store(tmp_path):
    return RoomStore(db_path=str(tmp_path / "data" / "bot.sqlite"))


@pytest.fixture
def room_manager(room_store, room_service):
    return RoomManager(store=room_store, service=room_service)


@pytest.fixture
def bot_context(room_manager):
    """Handler context with collaborators in bot_data."""
    context = MagicMock()
    context.bot_data = {ROOMS_KEY: room_manager, SETTINGS_KEY: BotConfig()}
    return context


@pytest.fixture
def make_message():
    """Factory for real Telegram messages with a mocked reply_text."""

    def _make_message(
        text=None,
        entities=(),
        caption=None,
        caption_entities=(),
        reply_to=None,
        chat_type=Chat.PRIVATE,
        chat_id=TEST_CHAT_ID,
    ):
        return Message(
            message_id=1,
            date=datetime.now(timezone.utc),
            chat=Chat(id=chat_id, type=chat_type),
            text=text,
            entities=list(entities),
            caption=caption,
            caption_entities=list(caption_entities),
            reply_to_message=reply_to,
        )

    # Message objects are frozen, so replies are captured on the class
    with patch.object(Message, "reply_text", new_callable=AsyncMock):
        yield _make_message


@pytest.fixture
def make_update():
    """Factory for mocked updates around a message."""

    def _make_update(message, chat_type=None):
        update = MagicMock()
        update.message = message
        update.effective_chat = Chat(id=message.chat.id, type=chat_type or message.chat.type)
        return update

    return _make_update
