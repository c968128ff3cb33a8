# moonlight_content/sheets/errors.py

from __future__ import annotations


class ContentError(Exception):
    """Base class for content pipeline errors."""


class SourceUnavailable(ContentError):
    """A sheet tab could not be fetched or read.

    Callers use this to tell "fetch failed" apart from "zero rows".
    """

    def __init__(self, tab: str, reason: str) -> None:
        super().__init__(f"Sheet tab {tab!r} unavailable: {reason}")
        self.tab = tab
        self.reason = reason


class SourceTimeout(SourceUnavailable):
    """The fetch exceeded the configured timeout."""
