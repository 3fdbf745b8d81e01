"""Palette TUI Application.

Textual App hosting one PaletteSession: a query input, the grouped
results and a status line. Navigation keys, Home and End included, are
priority bindings: they move the result selection even while the input
has focus, so the input cursor is moved with the left/right arrows only.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from reactivex.scheduler.eventloop import AsyncIOScheduler
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, Static

from cmdpal.config import PaletteConfig
from cmdpal.models import Command, QuickLink
from cmdpal.session.palette import PaletteSession
from cmdpal.telemetry import Telemetry, set_telemetry
from cmdpal.tui.messages import CommandActivated, ResultsUpdated
from cmdpal.tui.providers import CatalogCommands
from cmdpal.tui.widgets import ResultsView, SearchBar


class PaletteApp(App):
    """Interactive command palette over a fixed command catalog."""

    TITLE = "cmdpal"
    SUB_TITLE = "Command Palette"
    COMMANDS = App.COMMANDS | {CatalogCommands}

    CSS = """
    #status-bar {
        dock: bottom;
        height: 1;
        background: $primary-background;
        color: $text;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("down", "navigate('down')", "Next", priority=True, show=False),
        Binding("up", "navigate('up')", "Previous", priority=True, show=False),
        # Home/End select the first/last result rather than moving the input cursor
        Binding("home", "navigate('home')", "First", priority=True, show=False),
        Binding("end", "navigate('end')", "Last", priority=True, show=False),
        Binding("pagedown", "navigate('pagedown')", "Page Down", priority=True, show=False),
        Binding("pageup", "navigate('pageup')", "Page Up", priority=True, show=False),
        Binding("enter", "navigate('enter')", "Run", priority=True),
        Binding("escape", "clear_query", "Clear"),
        Binding("ctrl+p", "command_palette", "Commands"),
    ]

    def __init__(
        self,
        commands: Sequence[Command],
        recents: Sequence[Command] = (),
        config: PaletteConfig | None = None,
        telemetry: Telemetry | None = None,
        quick_links: Sequence[QuickLink] = (),
        recent_searches: Sequence[str] = (),
    ) -> None:
        """Store the catalog; the session is built on mount.

        Args:
            commands: Catalog commands.
            recents: Recently used commands, most recent first.
            config: Palette settings, in terminal rows.
            telemetry: OTel facade. Defaults to no-op.
            quick_links: Links listed while the query is empty.
            recent_searches: Earlier queries listed while the query is empty.
        """
        super().__init__()
        self.config = config or PaletteConfig(item_height=1, container_height=12)
        self._commands = list(commands)
        self._recents = list(recents)
        self._quick_links = list(quick_links)
        self._recent_searches = list(recent_searches)
        self.telemetry = telemetry if telemetry is not None else Telemetry.noop()
        set_telemetry(self.telemetry)
        self.session: PaletteSession | None = None
        self.activated: list[Command] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield SearchBar(placeholder=self.config.placeholder)
        yield ResultsView()
        yield Static("Ready", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Create the session with an asyncio-backed debounce scheduler."""
        scheduler = AsyncIOScheduler(asyncio.get_running_loop())
        self.session = PaletteSession(
            self._commands,
            self._recents,
            config=self.config,
            on_select=lambda command: self.post_message(CommandActivated(command)),
            on_results=lambda s: self.post_message(ResultsUpdated(s.query, len(s.ranked))),
            scheduler=scheduler,
            quick_links=self._quick_links,
            recent_searches=self._recent_searches,
        )
        self.session.open()
        self.query_one(SearchBar).focus()
        self._refresh()
        self.telemetry.event("app mounted", commands=len(self._commands))

    # ------------------------------------------------------------------
    # Message handlers
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.session is None or event.input.id != "search-bar":
            return
        self.session.type_query(event.value)

    def on_results_updated(self, event: ResultsUpdated) -> None:
        self._refresh()

    def on_command_activated(self, event: CommandActivated) -> None:
        """Record the run and reopen the palette for the next command."""
        self.activated.append(event.command)
        self.notify(f"Ran {event.command.label}")
        self.telemetry.event("command activated", id=event.command.id)
        self.query_one(SearchBar).clear_query()
        if self.session is not None:
            self.session.open()
        self._refresh(status=f"Ran: {event.command.label}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Let modal screens (e.g. the Ctrl+P palette) keep their own keys."""
        if action == "navigate" and len(self.screen_stack) > 1:
            return False
        return True

    def action_navigate(self, key: str) -> None:
        """Route a navigation key to the session."""
        if self.session is None:
            return
        if self.session.handle_key(key):
            self._refresh()

    def action_clear_query(self) -> None:
        self.query_one(SearchBar).clear_query()

    def run_command(self, command_id: str) -> None:
        """Activate a command by id (used by the Textual palette provider)."""
        if self.session is None:
            return
        for index, command in enumerate(self.session.ranked):
            if command.id == command_id:
                self.session.hover(index)
                self.session.activate()
                return
        for command in self.session.commands:
            if command.id == command_id and not command.disabled:
                self.post_message(CommandActivated(command))
                return

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self, status: str | None = None) -> None:
        if self.session is None:
            return
        self.query_one(ResultsView).show_session(self.session)
        count = len(self.session.ranked)
        if status is None:
            status = self.session.announcement or f"{count} commands"
        self.query_one("#status-bar", Static).update(
            f"{status} | Enter: run | Esc: clear | Ctrl+P: Commands"
        )
