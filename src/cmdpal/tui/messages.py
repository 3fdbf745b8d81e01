"""Custom Textual Message types for the palette front-end.

Widgets post these to the App; the App updates the session and
re-renders. No widget calls another widget directly.
"""

from __future__ import annotations

from textual.message import Message

from cmdpal.models import Command


class ResultsUpdated(Message):
    """Fired after the session committed a query and recomputed results."""

    def __init__(self, query: str, count: int) -> None:
        self.query = query
        self.count = count
        super().__init__()


class CommandActivated(Message):
    """Fired when the user runs a command from the palette."""

    def __init__(self, command: Command) -> None:
        self.command = command
        super().__init__()
