"""CLI entry point for the command palette engine.

Provides commands:
  - search: Rank a catalog against a query and print the grouped results
  - window: Show the virtual window for a list size and scroll position
  - validate: Check a catalog file and summarize its contents
  - tui: Launch the interactive terminal palette
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cmdpal.catalog import Catalog, load_catalog
from cmdpal.config import PaletteConfig, load_palette_config
from cmdpal.constants import POPULAR_LIMIT
from cmdpal.exceptions import CmdpalError

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="cmdpal - fuzzy command search, ranking and navigation",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def app_callback(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Palette configuration JSON"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log ranking and windowing details"),
    ] = False,
) -> None:
    """Load the palette configuration shared by all commands."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")
    try:
        ctx.obj = load_palette_config(config_path)
    except CmdpalError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_config(ctx: typer.Context) -> PaletteConfig:
    """Type-safe accessor for the PaletteConfig on the Typer context."""
    if ctx.obj is None:
        return PaletteConfig()
    return ctx.obj


def _load(catalog_path: Path) -> Catalog:
    try:
        return load_catalog(catalog_path)
    except CmdpalError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


@app.command()
def search(
    ctx: typer.Context,
    catalog_path: Annotated[Path, typer.Argument(help="YAML or JSON command catalog")],
    query: Annotated[str, typer.Argument(help="Search query (empty lists everything)")] = "",
    recent: Annotated[
        Optional[list[str]],
        typer.Option("--recent", "-r", help="Recent command id (repeatable, most recent first)"),
    ] = None,
    max_results: Annotated[
        Optional[int],
        typer.Option("--max-results", "-n", help="Result cap (defaults to configuration)"),
    ] = None,
    flat: Annotated[
        bool,
        typer.Option("--flat", help="Do not group by category"),
    ] = False,
    show_scores: Annotated[
        bool,
        typer.Option("--scores", help="Show a score column"),
    ] = False,
    modal: Annotated[
        bool,
        typer.Option("--modal", help="Use additive search-modal relevance instead of fuzzy tiers"),
    ] = False,
) -> None:
    """Rank CATALOG against QUERY and print the grouped results."""
    from cmdpal.search.formatter import (
        display_empty_state,
        display_grouped_results,
        display_no_results,
    )
    from cmdpal.search.grouper import group
    from cmdpal.search.modal import score_modal
    from cmdpal.search.ranker import has_query, score_commands

    config = get_config(ctx)
    catalog = _load(catalog_path)

    recents = catalog.recents
    if recent:
        recents = []
        for command_id in recent:
            command = catalog.by_id(command_id)
            if command is None:
                console.print(f"[red]Unknown recent command id:[/red] {escape(command_id)}")
                raise typer.Exit(code=1)
            recents.append(command)

    limit = max_results if max_results is not None else config.max_results
    use_modal = modal or config.scoring == "modal"
    if use_modal and not has_query(query):
        enabled = [c for c in catalog.commands if not c.disabled]
        display_empty_state(
            catalog.quick_links,
            catalog.recent_searches,
            enabled[:POPULAR_LIMIT],
            console=console,
        )
        return

    if use_modal:
        scored = score_modal(catalog.commands, query, limit)
        recents = []
    else:
        scored = score_commands(catalog.commands, recents, query, limit)
    ranked = [sc.command for sc in scored]

    if not ranked:
        display_no_results(config.empty_message, console=console)
        return

    grouped = group(
        ranked,
        recents,
        has_query=has_query(query),
        show_recent=config.show_recent and not flat and not use_modal,
        show_categories=config.show_categories and not flat,
    )
    display_grouped_results(
        grouped,
        query,
        scores={sc.command.id: sc.score for sc in scored} if show_scores else None,
        selected_id=ranked[0].id,
        show_shortcuts=config.show_shortcuts,
        terminal_width=console.width,
        console=console,
    )
    noun = "command" if len(ranked) == 1 else "commands"
    console.print(f"[dim]{len(ranked)} {noun} found[/dim]")


@app.command()
def window(
    ctx: typer.Context,
    total: Annotated[int, typer.Option("--total", "-t", help="Number of result rows")],
    scroll: Annotated[float, typer.Option("--scroll", "-s", help="Scroll offset")] = 0,
    item_height: Annotated[
        Optional[int], typer.Option("--item-height", help="Row height")
    ] = None,
    container_height: Annotated[
        Optional[int], typer.Option("--container-height", help="Viewport height")
    ] = None,
    overscan: Annotated[
        Optional[int], typer.Option("--overscan", help="Extra rows above and below")
    ] = None,
    threshold: Annotated[
        Optional[int], typer.Option("--threshold", help="Virtualize above this many rows")
    ] = None,
) -> None:
    """Show which rows a list of TOTAL items renders at a scroll offset."""
    from cmdpal.search.formatter import display_window
    from cmdpal.view.virtualizer import window_for

    config = get_config(ctx)
    try:
        result = window_for(
            total,
            item_height if item_height is not None else config.item_height,
            container_height if container_height is not None else config.container_height,
            scroll,
            overscan=overscan if overscan is not None else config.overscan,
            threshold=threshold if threshold is not None else config.virtualization_threshold,
        )
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    display_window(result, console=console)


@app.command()
def validate(
    catalog_path: Annotated[Path, typer.Argument(help="YAML or JSON command catalog")],
) -> None:
    """Check CATALOG and summarize its commands."""
    catalog = _load(catalog_path)
    disabled = sum(1 for c in catalog.commands if c.disabled)
    categories = {c.group_name for c in catalog.commands}
    console.print(
        f"[green]OK[/green] {catalog_path}: {len(catalog.commands)} commands, "
        f"{len(categories)} categories, {disabled} disabled, {len(catalog.recents)} recent"
    )


@app.command()
def tui(
    ctx: typer.Context,
    catalog_path: Annotated[Path, typer.Argument(help="YAML or JSON command catalog")],
    log_dir: Annotated[
        Optional[str], typer.Option("--log-dir", help="Write JSON-lines logs here")
    ] = None,
) -> None:
    """Launch the interactive terminal palette over CATALOG."""
    from cmdpal.tui import run_tui

    config_path = ctx.parent.params.get("config_path") if ctx.parent else None
    try:
        run_tui(catalog_path, config_path=config_path, log_dir=log_dir)
    except CmdpalError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
