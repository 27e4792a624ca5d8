"""Typed structures shared across bot components."""

from __future__ import annotations

from typing import TypedDict


class UrlLookup(TypedDict):
    """Outcome of looking for a link in a message.

    ``url`` set: a valid link was found. ``invalid`` set: a malformed link was
    found first. Neither: the message had no link at all.
    """

    url: str | None
    invalid: bool
