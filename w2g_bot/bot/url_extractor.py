"""Link extraction from Telegram messages.

Picks the single link a message (or the message it replies to) is about.
Formatting entities are trusted over regex matches, and the user's own message
over the replied-to one. The first non-empty candidate decides the outcome:
a malformed link stops the search even if a later source holds a valid one.
"""

from __future__ import annotations

import logging
import re
from typing import Final

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError
from telegram import Message, MessageEntity

from .types import UrlLookup
from .utils import message_text, parse_message_entities

logger = logging.getLogger(__name__)

_HTTP_URL: Final[TypeAdapter[AnyHttpUrl]] = TypeAdapter(AnyHttpUrl)


class URLExtractor:
    """Finds links and bot mentions in messages."""

    URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"https?://\S+", re.IGNORECASE)

    def from_entities(self, message: Message | None) -> str | None:
        """First link carried by a ``url`` or ``text_link`` entity."""
        if message is None:
            return None

        links = parse_message_entities(message, [MessageEntity.URL, MessageEntity.TEXT_LINK])
        for entity, url_text in links.items():
            if entity.type == MessageEntity.URL and url_text:
                return url_text
            if entity.type == MessageEntity.TEXT_LINK and entity.url:
                return entity.url

        return None

    def from_text(self, text: str | None) -> str | None:
        """First ``http(s)://`` run of non-whitespace in free-form text."""
        if not text:
            return None

        match = self.URL_PATTERN.search(text)
        return match.group(0) if match else None

    def validate(self, candidate: str | None) -> UrlLookup:
        """Parse a candidate as an absolute http(s) URL.

        Returns:
            Normalized URL on success, ``invalid`` for a non-empty candidate
            that does not parse, neither for an empty candidate.
        """
        if not candidate:
            return UrlLookup(url=None, invalid=False)

        try:
            return UrlLookup(url=str(_HTTP_URL.validate_python(candidate)), invalid=False)
        except ValidationError:
            logger.debug("Rejected URL candidate %r", candidate)
            return UrlLookup(url=None, invalid=True)

    def find_url(self, message: Message, reply_message: Message | None = None) -> UrlLookup:
        """Choose the link a message refers to.

        Sources are tried in order: entities of the message, entities of the
        reply target, text of the message, text of the reply target.

        Args:
            message: Incoming message.
            reply_message: Message it replies to, if any.

        Returns:
            UrlLookup for the first non-empty candidate, or an empty lookup.
        """
        candidates = [
            self.from_entities(message),
            self.from_entities(reply_message),
            self.from_text(message_text(message)),
            self.from_text(message_text(reply_message)),
        ]

        for candidate in candidates:
            result = self.validate(candidate)
            if result["url"] or result["invalid"]:
                return result

        return UrlLookup(url=None, invalid=False)

    def mentions_bot(self, message: Message, bot_username: str) -> bool:
        """Check whether a message addresses the bot.

        Mention entities are checked first; the plain text is searched as a
        fallback for clients that do not tag the mention.

        Args:
            message: Incoming message.
            bot_username: Bot handle without ``@``, lowercased.
        """
        mention_tag = f"@{bot_username}".lower()
        mentions = parse_message_entities(message, [MessageEntity.MENTION])
        if any(mention.lower() == mention_tag for mention in mentions.values()):
            return True

        return mention_tag in message_text(message).lower()

    def is_command(self, message: Message) -> bool:
        """Check whether a message carries a bot command."""
        return bool(parse_message_entities(message, [MessageEntity.BOT_COMMAND]))


url_extractor = URLExtractor()
