"""Telegram bot handlers.

Command handlers for /start, /help, /room and /clear, the link handler that
feeds the chat's Watch2Gether room, and the application error handler.
Collaborators are taken from ``context.bot_data``.
"""

import logging
import sqlite3

from telegram import Chat, Update
from telegram.ext import ContextTypes

from ..config import BotConfig
from ..services.rooms import RoomManager
from ..services.w2g import W2GError
from .messages import (
    ADD_FAILED_MESSAGE,
    ADDED_MESSAGE,
    CLEAR_FAILED_MESSAGE,
    CLEARED_MESSAGE,
    HELP_MESSAGE,
    INVALID_URL_MESSAGE,
    NO_URL_MESSAGE,
    ROOM_FAILED_MESSAGE,
    ROOM_MESSAGE,
    START_MESSAGE,
)
from .types import UrlLookup
from .url_extractor import url_extractor
from .utils import ROOMS_KEY, SETTINGS_KEY, time_limited

logger = logging.getLogger(__name__)


def _rooms(context: ContextTypes.DEFAULT_TYPE) -> RoomManager:
    return context.bot_data[ROOMS_KEY]


def _settings(context: ContextTypes.DEFAULT_TYPE) -> BotConfig:
    return context.bot_data[SETTINGS_KEY]


@time_limited
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command."""
    if update.message:
        await update.message.reply_text(START_MESSAGE, disable_web_page_preview=True)


@time_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command with usage for groups and private chats."""
    if update.message:
        text = HELP_MESSAGE.format(bot_username=_settings(context).bot_username)
        await update.message.reply_text(text, disable_web_page_preview=True)


@time_limited
async def room_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /room command.

    Shows the chat's room link, creating an empty room if the chat has none.

    Args:
        update: Telegram update object containing message data.
        context: Bot context with the room manager in bot_data.
    """
    if not update.message or not update.effective_chat:
        return

    rooms = _rooms(context)
    try:
        streamkey, _ = await rooms.ensure_room(update.effective_chat.id)
    except (W2GError, sqlite3.Error) as e:
        logger.error(f"Error handling /room for chat {update.effective_chat.id}: {e}")
        await update.message.reply_text(ROOM_FAILED_MESSAGE)
        return

    await update.message.reply_text(ROOM_MESSAGE.format(room_link=rooms.room_link(streamkey)))


@time_limited
async def clear_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /clear command.

    Always creates a new room and binds the chat to it, dropping the old one.

    Args:
        update: Telegram update object containing message data.
        context: Bot context with the room manager in bot_data.
    """
    if not update.message or not update.effective_chat:
        return

    rooms = _rooms(context)
    try:
        streamkey = await rooms.reset_room(update.effective_chat.id)
    except (W2GError, sqlite3.Error) as e:
        logger.error(f"Error handling /clear for chat {update.effective_chat.id}: {e}")
        await update.message.reply_text(CLEAR_FAILED_MESSAGE)
        return

    await update.message.reply_text(CLEARED_MESSAGE.format(room_link=rooms.room_link(streamkey)))


@time_limited
async def handle_link(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle text messages that may carry a link.

    In private chats every message is considered; in groups only messages
    that mention the bot. The link found in the message (or in the message it
    replies to) is added to the chat's room.

    Args:
        update: Telegram update object containing message data.
        context: Bot context with the room manager and settings in bot_data.
    """
    message = update.message
    chat = update.effective_chat
    if not message or not chat:
        return

    # Commands have their own handlers
    if url_extractor.is_command(message):
        return

    if chat.type != Chat.PRIVATE and not url_extractor.mentions_bot(
        message, _settings(context).bot_username
    ):
        return

    lookup: UrlLookup = url_extractor.find_url(message, message.reply_to_message)
    if lookup["invalid"] and not lookup["url"]:
        logger.info(f"Invalid URL from chat {chat.id}")
        await message.reply_text(INVALID_URL_MESSAGE)
        return

    url = lookup["url"]
    if not url:
        await message.reply_text(NO_URL_MESSAGE)
        return

    rooms = _rooms(context)
    try:
        streamkey = await rooms.add_link(chat.id, url)
    except (W2GError, sqlite3.Error) as e:
        logger.error(f"Error adding {url} for chat {chat.id}: {e}")
        await message.reply_text(ADD_FAILED_MESSAGE)
        return

    await message.reply_text(ADDED_MESSAGE.format(room_link=rooms.room_link(streamkey)))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers without replying to the user."""
    update_type = "unknown"
    if isinstance(update, Update):
        update_type = next(
            (kind for kind in Update.ALL_TYPES if getattr(update, kind, None) is not None),
            "unknown",
        )

    logger.error(f"Bot error while handling {update_type} update", exc_info=context.error)
