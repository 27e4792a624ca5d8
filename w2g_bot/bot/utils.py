"""Bot utility functions.

Helpers shared by the handlers: access to the objects stored in
``application.bot_data``, entity lookup and the per-update time limit.
"""

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from telegram import Message, MessageEntity, Update
from telegram.ext import ContextTypes

logger = logging.getLogger(__name__)

ROOMS_KEY = "rooms"
SETTINGS_KEY = "settings"

Handler = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[Any]]


def message_text(message: Message | None) -> str:
    """Text of a message, falling back to the media caption."""
    if message is None:
        return ""
    return message.text or message.caption or ""


def parse_message_entities(message: Message | None, types: list[str]) -> dict[MessageEntity, str]:
    """Entities of the given types mapped to the text they cover.

    Uses the text entities for text messages and the caption entities for
    media. The mapping keeps the order the entities appear in.
    """
    if message is None:
        return {}
    if message.text is not None:
        return message.parse_entities(types=types)
    if message.caption is not None:
        return message.parse_caption_entities(types=types)
    return {}


def time_limited(handler: Handler) -> Handler:
    """Run a handler under the configured per-update time limit.

    Exceeding the limit raises ``TimeoutError`` out of the handler, which the
    application error handler logs. Nothing is retried.
    """

    @functools.wraps(handler)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Any:
        timeout = context.bot_data[SETTINGS_KEY].handler_timeout
        return await asyncio.wait_for(handler(update, context), timeout=timeout)

    return wrapper
