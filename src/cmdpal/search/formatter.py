"""Rich display formatting for ranked palette results and windows.

Renders grouped results as a table with group header rows, highlighted
labels, shortcut hints and optional score bars. Used by the CLI; the
TUI builds its own widgets from the same highlight helpers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cmdpal.constants import EXACT_SCORE, LABEL_WEIGHT, RECENCY_BOOST
from cmdpal.search.highlight import highlight

if TYPE_CHECKING:
    from cmdpal.models import Command, GroupedResult, QuickLink, VirtualWindow

# Best possible score: exact label match on a recent command.
MAX_SCORE = EXACT_SCORE * LABEL_WEIGHT * RECENCY_BOOST


def score_bar(score: float, width: int = 10) -> str:
    """Render a visual relevance bar for a weighted command score.

    Args:
        score: Weighted score as produced by the ranker.
        width: Total number of bar characters (filled + empty).

    Returns:
        Formatted string like ``"━━━━━━━━○○ 3000"``.
    """
    ratio = max(0.0, min(1.0, score / MAX_SCORE))
    filled = round(ratio * width)
    empty = width - filled
    return f"{'━' * filled}{'○' * empty} {score:.0f}"


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text at a word boundary.

    If ``len(text) <= max_len``, returns text unchanged.
    Otherwise, truncates at the last space before ``max_len - len(suffix)``
    and appends the suffix.
    """
    if len(text) <= max_len:
        return text

    cutoff = max_len - len(suffix)
    if cutoff <= 0:
        return suffix[:max_len]

    space_idx = text.rfind(" ", 0, cutoff)
    if space_idx > 0:
        return text[:space_idx] + suffix
    return text[:cutoff] + suffix


def display_grouped_results(
    grouped: GroupedResult,
    query: str,
    scores: dict[str, float] | None = None,
    selected_id: str | None = None,
    show_shortcuts: bool = True,
    terminal_width: int = 100,
    console: Console | None = None,
) -> None:
    """Print grouped results as a Rich table.

    Args:
        grouped: Output of :func:`cmdpal.search.grouper.group`.
        query: Query used for highlighting.
        scores: Optional command id -> score map; adds a Score column.
        selected_id: Id of the selected command, marked with a pointer.
        show_shortcuts: Include the shortcut hint column.
        terminal_width: Used to size the description column.
        console: Optional Console for testing.
    """
    con = console or Console()

    table = Table(show_header=True, expand=False)
    table.add_column("", width=1)
    table.add_column("Command", style="bold", no_wrap=True)
    table.add_column("Description", style="dim", max_width=max(20, terminal_width - 50))
    if show_shortcuts:
        table.add_column("Shortcut", style="cyan", justify="right")
    if scores is not None:
        table.add_column("Score", style="green", no_wrap=True)

    for name, members in grouped.items():
        if name:
            header: list[Text | str] = [Text(""), Text(name, style="bold magenta")]
            header.extend("" for _ in range(len(table.columns) - 2))
            table.add_row(*header)
        for command in members:
            marker = ">" if command.id == selected_id else ""
            row: list[Text | str] = [
                marker,
                highlight(command.label, query),
                Text(truncate_text(command.description or "", max(20, terminal_width - 50))),
            ]
            if show_shortcuts:
                row.append(Text(command.shortcut or ""))
            if scores is not None:
                row.append(score_bar(scores.get(command.id, 0.0)))
            table.add_row(*row)

    con.print(table)


def display_window(window: VirtualWindow, console: Console | None = None) -> None:
    """Print the fields of a VirtualWindow as a two-column table."""
    con = console or Console()
    table = Table(title="Virtual window", show_header=False, expand=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("items", str(window.item_count))
    table.add_row("virtualized", "yes" if window.virtualized else "no")
    table.add_row("start_index", str(window.start_index))
    table.add_row("end_index", str(window.end_index))
    table.add_row("rendered", str(len(window.visible_items)))
    table.add_row("total_height", str(window.total_height))
    table.add_row("offset_y", str(window.offset_y))
    con.print(table)


def display_no_results(message: str = "No commands found", console: Console | None = None) -> None:
    """Display the empty-state message."""
    con = console or Console()
    con.print(f"[dim]{message}[/dim]")


def display_empty_state(
    quick_links: Sequence[QuickLink],
    recent_searches: Sequence[str],
    popular: Sequence[Command],
    console: Console | None = None,
) -> None:
    """Print the idle search-modal sections that have entries."""
    con = console or Console()
    if quick_links:
        con.print("[bold magenta]Quick Links[/bold magenta]")
        for link in quick_links:
            con.print(Text.assemble("  ", (link.label, "underline"), "  ", (link.url, "dim")))
    if recent_searches:
        con.print("[bold magenta]Recent Searches[/bold magenta]")
        for query in recent_searches:
            con.print(Text(f'  "{query}"'))
    if popular:
        con.print("[bold magenta]Popular[/bold magenta]")
        for command in popular:
            con.print(Text.assemble("  ", command.label, "  ", (command.description or "", "dim")))
