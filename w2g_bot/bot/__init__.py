"""Telegram bot implementation package.

Contains the Telegram specific functionality: command and message handlers,
URL extraction from messages and entities, and user-facing message templates.
"""
