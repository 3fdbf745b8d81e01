"""Query input for the palette front-end.

A plain Textual Input; the App feeds every change into the session's
debouncer, so the widget holds no timers of its own.
"""

from __future__ import annotations

from textual.widgets import Input


class SearchBar(Input):
    """Single-line query input docked above the results."""

    DEFAULT_CSS = """
    SearchBar {
        dock: top;
        height: 3;
        padding: 0 1;
        border-bottom: solid $primary;
    }
    """

    def __init__(self, placeholder: str = "Type a command or search...") -> None:
        super().__init__(placeholder=placeholder, id="search-bar")

    def clear_query(self) -> None:
        """Empty the input; the resulting change clears results at once."""
        self.value = ""
