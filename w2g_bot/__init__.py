"""W2G Link Bot Application Package.

A Telegram bot that picks links out of chat messages and adds them to a
Watch2Gether room playlist. Every chat gets its own room, remembered in a
local SQLite table.

The application is split into:
- Bot handlers, URL extraction and message templates
- Watch2Gether REST client and room management services
- Configuration and dependency wiring
"""
