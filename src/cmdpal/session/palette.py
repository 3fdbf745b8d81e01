"""Interactive palette session.

PaletteSession is the single stateful unit between the pure search
engine and a rendering surface. It owns the live query, the ranked and
grouped results, the navigation controller and the scroll offset, and
recomputes the derived structures whenever one of its inputs changes.

Two ranking modes are available through ``PaletteConfig.scoring``:
``"fuzzy"`` (tiered fuzzy scorer with recents, listing everything while
idle) and ``"modal"`` (additive search-modal relevance, listing nothing
while idle so the quick links, recent searches and popular commands
take the space instead).
"""

from __future__ import annotations

from typing import Callable, Sequence

from reactivex.abc import SchedulerBase

from cmdpal.config import PaletteConfig
from cmdpal.constants import NO_RESULTS_QUICK_LINKS, POPULAR_LIMIT
from cmdpal.models import Command, GroupedResult, QuickLink, RankedResult, VirtualWindow
from cmdpal.navigation.controller import NavigationController
from cmdpal.search.grouper import group, locate
from cmdpal.search.modal import score_modal
from cmdpal.search.ranker import has_query, score_commands
from cmdpal.session.debounce import QueryDebouncer
from cmdpal.telemetry import ACTIVATE_SPAN, RANK_SPAN, get_telemetry
from cmdpal.view.virtualizer import scroll_into_view, window_for

ACTIVATION_KEYS = ("enter", "space")


class PaletteSession:
    """Search-and-select session over a fixed command set.

    Args:
        commands: Snapshot of the available commands.
        recents: Recently used commands, most recent first.
        config: Layout and ranking settings.
        on_select: Called with the activated command.
        on_results: Called with the session after a query is committed.
        scheduler: reactivex scheduler for the query debouncer.
        quick_links: Links offered while the query is empty.
        recent_searches: Earlier queries, most recent first.
        on_search: Called with every committed non-blank query.
        on_quick_link: Called with a quick link the user opened.
    """

    def __init__(
        self,
        commands: Sequence[Command],
        recents: Sequence[Command] = (),
        config: PaletteConfig | None = None,
        on_select: Callable[[Command], None] | None = None,
        on_results: Callable[[PaletteSession], None] | None = None,
        scheduler: SchedulerBase | None = None,
        quick_links: Sequence[QuickLink] = (),
        recent_searches: Sequence[str] = (),
        on_search: Callable[[str], None] | None = None,
        on_quick_link: Callable[[QuickLink], None] | None = None,
    ) -> None:
        self.config = config or PaletteConfig()
        self.commands: tuple[Command, ...] = tuple(commands)
        self.recents: tuple[Command, ...] = tuple(recents)
        self.quick_links: tuple[QuickLink, ...] = tuple(quick_links)
        self.recent_searches: tuple[str, ...] = tuple(recent_searches)
        self.on_select = on_select
        self.on_results = on_results
        self.on_search = on_search
        self.on_quick_link = on_quick_link
        self.is_open = False
        self.query = ""
        self.ranked: RankedResult = []
        self.grouped: GroupedResult = {}
        self.scores: dict[str, float] = {}
        self.scroll_offset: float = 0
        self.announcement = ""
        self.navigation = NavigationController(page_size=self.config.page_size)
        self.debouncer = QueryDebouncer(
            self.set_query,
            delay=self.config.debounce_seconds,
            scheduler=scheduler,
        )
        self._recompute()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open the palette with an empty query and the top item selected."""
        self.debouncer.cancel()
        self.is_open = True
        self.query = ""
        self.scroll_offset = 0
        self._recompute()
        self.announcement = ""
        get_telemetry().event("palette opened", commands=len(self.commands))

    def close(self) -> None:
        self.debouncer.cancel()
        self.is_open = False
        get_telemetry().event("palette closed")

    def update_commands(
        self,
        commands: Sequence[Command],
        recents: Sequence[Command] | None = None,
    ) -> None:
        """Replace the command snapshot and re-run the current query."""
        self.commands = tuple(commands)
        if recents is not None:
            self.recents = tuple(recents)
        self._recompute()

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def type_query(self, query: str) -> None:
        """Feed a keystroke; the query is committed after the debounce delay."""
        self.debouncer.submit(query)

    def set_query(self, query: str) -> None:
        """Commit *query* immediately and recompute results."""
        self.query = query
        self.scroll_offset = 0
        self._recompute()
        if has_query(query):
            self.announcement = self._count_announcement()
        else:
            self.announcement = ""
        get_telemetry().event("query committed", query=query, result_count=len(self.ranked))
        if has_query(query) and self.on_search is not None:
            self.on_search(query)
        if self.on_results is not None:
            self.on_results(self)

    def commit_pending(self) -> bool:
        """Commit a debounced query that has not fired yet.

        Returns:
            True if a pending query was committed.
        """
        pending = self.debouncer.pending_query
        if pending is None:
            return False
        self.debouncer.flush(pending)
        return True

    def choose_recent_search(self, query: str) -> None:
        """Re-run an earlier query at once."""
        self.debouncer.cancel()
        self.set_query(query)

    @property
    def has_query(self) -> bool:
        return has_query(self.query)

    @property
    def empty_message(self) -> str | None:
        """Message to show when a query matched nothing."""
        if self.has_query and not self.ranked:
            return self.config.empty_message
        return None

    # ------------------------------------------------------------------
    # Empty state
    # ------------------------------------------------------------------

    @property
    def visible_quick_links(self) -> tuple[QuickLink, ...]:
        """All quick links while idle, the first few when nothing matched."""
        if not self.has_query:
            return self.quick_links
        if self.empty_message is not None:
            return self.quick_links[:NO_RESULTS_QUICK_LINKS]
        return ()

    @property
    def visible_recent_searches(self) -> tuple[str, ...]:
        if self.has_query:
            return ()
        return self.recent_searches

    @property
    def popular(self) -> list[Command]:
        """Leading enabled commands, listed by the idle search-modal view."""
        if self.has_query or self.config.scoring != "modal":
            return []
        return [c for c in self.commands if not c.disabled][:POPULAR_LIMIT]

    def open_quick_link(self, link: QuickLink) -> None:
        """Hand *link* to ``on_quick_link`` and close the palette."""
        get_telemetry().event("quick link opened", url=link.url)
        if self.on_quick_link is not None:
            self.on_quick_link(link)
        self.close()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_index(self) -> int | None:
        return self.navigation.selected_index

    @property
    def selected_command(self) -> Command | None:
        index = self.navigation.selected_index
        if index is None:
            return None
        return self.ranked[index]

    @property
    def selected_location(self) -> tuple[str, int] | None:
        """Group name and position of the selection in the grouped view."""
        command = self.selected_command
        if command is None:
            return None
        return locate(self.grouped, command.id)

    def handle_key(self, key: str) -> bool:
        """Apply a navigation key. Enter/space activate the selection.

        A query still waiting out the debounce delay is committed before
        activation, so the command that runs always matches what was typed.

        Returns:
            True if the key was consumed.
        """
        if key in ACTIVATION_KEYS:
            self.commit_pending()
            if self.navigation.selected_index is None:
                return False
            self.activate()
            return True
        if not self.navigation.handle_key(key):
            return False
        self._after_move()
        return True

    def hover(self, index: int) -> None:
        self.navigation.hover(index)
        self._after_move()

    def activate(self) -> Command | None:
        """Run the selected command and close the palette.

        Disabled commands are never activated. If ``on_select`` raises,
        the error is recorded on the activation span and propagates with
        the palette left open.

        Returns:
            The activated command, or None if nothing was activated.
        """
        index = self.navigation.activate()
        if index is None:
            return None
        command = self.ranked[index]
        if command.disabled:
            return None

        attributes = {"command.id": command.id, "command.index": index}
        with get_telemetry().span(ACTIVATE_SPAN, attributes):
            self._remember(command)
            if self.on_select is not None:
                self.on_select(command)
        self.close()
        return command

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    def scroll_to(self, offset: float) -> VirtualWindow:
        """Record the viewport's scroll position and return the new window."""
        self.scroll_offset = max(0, offset)
        return self.window

    @property
    def window(self) -> VirtualWindow:
        return window_for(
            len(self.ranked),
            self.config.item_height,
            self.config.container_height,
            self.scroll_offset,
            overscan=self.config.overscan,
            threshold=self.config.virtualization_threshold,
        )

    @property
    def visible_commands(self) -> list[Command]:
        return self.window.materialize(self.ranked)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _recompute(self) -> None:
        modal = self.config.scoring == "modal"
        attributes = {
            "palette.query_length": len(self.query),
            "palette.scoring": self.config.scoring,
        }
        with get_telemetry().span(RANK_SPAN, attributes) as span:
            if modal:
                scored = score_modal(self.commands, self.query, self.config.max_results)
            else:
                scored = score_commands(
                    self.commands, self.recents, self.query, self.config.max_results
                )
            self.ranked = [sc.command for sc in scored]
            self.scores = {sc.command.id: sc.score for sc in scored}
            self.grouped = group(
                self.ranked,
                () if modal else self.recents,
                has_query=has_query(self.query),
                show_recent=self.config.show_recent and not modal,
                show_categories=self.config.show_categories,
            )
            self.navigation.item_count_changed(len(self.ranked))
            span.set_attribute("palette.result_count", len(self.ranked))
            span.set_attribute("palette.group_count", len(self.grouped))

    def _after_move(self) -> None:
        index = self.navigation.selected_index
        if index is None:
            return
        self.scroll_offset = scroll_into_view(
            index,
            self.config.item_height,
            self.config.container_height,
            self.scroll_offset,
        )
        command = self.ranked[index]
        if command.description:
            self.announcement = f"{command.label}, {command.description}"
        else:
            self.announcement = command.label

    def _count_announcement(self) -> str:
        count = len(self.ranked)
        if count == 0:
            return self.config.empty_message
        noun = "command" if count == 1 else "commands"
        return f"{count} {noun} found"

    def _remember(self, command: Command) -> None:
        """Move *command* (and a non-blank query) to the front of the recents."""
        rest = [c for c in self.recents if c.id != command.id]
        self.recents = tuple([command, *rest][: self.config.recent_limit])
        query = self.query.strip()
        if query:
            searches = [s for s in self.recent_searches if s != query]
            self.recent_searches = tuple([query, *searches][: self.config.recent_limit])
