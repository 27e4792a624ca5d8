"""Telegram bot message templates and constants.

Contains all user-facing texts of the bot. Templates with placeholders are
filled with ``str.format`` by the handlers.
"""

START_MESSAGE = "Send me a link and I will add it to your Watch2Gether room. Try /help for details."

HELP_MESSAGE = (
    "Add links to your Watch2Gether room for this chat.\n"
    "\n"
    "Groups:\n"
    "- Reply with @{bot_username} to a message that has a URL\n"
    "- Or write @{bot_username} <url>\n"
    "\n"
    "DMs:\n"
    "- Send any message with a URL\n"
    "\n"
    "Commands:\n"
    "/room - show the room link\n"
    "/clear - reset with a new room"
)

# User input
INVALID_URL_MESSAGE = "That doesn’t look like a valid URL."
NO_URL_MESSAGE = "Send me a link to add. Try /help"

# Success
ROOM_MESSAGE = "Room: {room_link}"
ADDED_MESSAGE = "Added ✅\nRoom: {room_link}"
CLEARED_MESSAGE = "Queue cleared ✅\nRoom: {room_link}"

# Service errors
ROOM_FAILED_MESSAGE = "Couldn’t load the room (W2G error). Try again."
CLEAR_FAILED_MESSAGE = "Couldn’t clear the queue (W2G error). Try again."
ADD_FAILED_MESSAGE = "Couldn’t add that (W2G error). Try again."
