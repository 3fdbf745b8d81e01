"""Results widget rendering a palette session's grouped view.

Only the rows inside the session's virtual window are rendered. Small
result sets are shown grouped under category headers; virtualized sets
are shown as the flat visible slice with counts of the rows above and
below. While the query is empty the quick links, recent searches and
(search-modal mode) popular commands follow the rows.
"""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from cmdpal.constants import RECENT_GROUP
from cmdpal.models import Command
from cmdpal.search.highlight import highlight
from cmdpal.session.palette import PaletteSession

SECTION_STYLE = "bold magenta"


def render_session(session: PaletteSession) -> tuple[Text, list[str]]:
    """Build the display text and the ids of the command rows it shows."""
    rendered: list[str] = []
    display = Text()

    message = session.empty_message
    if message is not None:
        display.append(f"{message}\n", style="dim italic")
    else:
        selected = session.selected_command
        selected_id = selected.id if selected is not None else None
        window = session.window

        if window.virtualized:
            if window.start_index > 0:
                display.append(f"  ↑ {window.start_index} more\n", style="dim")
            for command in window.materialize(session.ranked):
                _append_row(display, rendered, command, session, command.id == selected_id)
            below = window.item_count - window.end_index - 1
            if below > 0:
                display.append(f"  ↓ {below} more\n", style="dim")
        else:
            config = session.config
            for name, members in session.grouped.items():
                if name == RECENT_GROUP and config.show_recent:
                    display.append(f"{name}\n", style=SECTION_STYLE)
                elif name and config.show_categories:
                    display.append(f"{name}\n", style=SECTION_STYLE)
                for command in members:
                    _append_row(display, rendered, command, session, command.id == selected_id)

    _append_empty_state(display, session)
    return display, rendered


def _append_row(
    display: Text,
    rendered: list[str],
    command: Command,
    session: PaletteSession,
    selected: bool,
) -> None:
    rendered.append(command.id)
    row_style = "reverse" if selected else ""
    display.append("› " if selected else "  ", style=row_style)
    label = highlight(command.label, session.query, style="bold underline")
    if selected:
        label.stylize(row_style)
    display.append_text(label)
    if command.description:
        display.append(f"  {command.description}", style="dim")
    if command.shortcut and session.config.show_shortcuts:
        display.append(f"  [{command.shortcut}]", style="cyan")
    display.append("\n")


def _append_empty_state(display: Text, session: PaletteSession) -> None:
    links = session.visible_quick_links
    if links:
        display.append("Quick Links\n", style=SECTION_STYLE)
        for link in links:
            display.append(f"  {link.label}", style="underline")
            display.append(f"  {link.url}\n", style="dim")
    searches = session.visible_recent_searches
    if searches:
        display.append("Recent Searches\n", style=SECTION_STYLE)
        for query in searches:
            display.append(f'  "{query}"\n')
    popular = session.popular
    if popular:
        display.append("Popular\n", style=SECTION_STYLE)
        for command in popular:
            display.append(f"  {command.label}")
            if command.description:
                display.append(f"  {command.description}", style="dim")
            display.append("\n")


class ResultsView(Static):
    """Static widget showing one row per visible command."""

    DEFAULT_CSS = """
    ResultsView {
        width: 100%;
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__("", id="results")
        self.rendered_ids: list[str] = []

    def show_session(self, session: PaletteSession) -> None:
        """Re-render from the session's current results and selection."""
        display, self.rendered_ids = render_session(session)
        self.update(display)
