"""Textual front-end for the command palette.

Provides an interactive terminal palette over a command catalog with
live ranking, category groups and keyboard navigation.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

DEFAULT_VISIBLE_ROWS = 12


def run_tui(catalog_path: Path, config_path: Path | None = None, log_dir: str | None = None) -> None:
    """Load the catalog and configuration, then run the Textual app.

    Imports are deferred so the CLI starts quickly for other commands.

    Args:
        catalog_path: YAML or JSON command catalog.
        config_path: Optional palette configuration JSON.
        log_dir: If given, write JSON-lines logs into this directory.
    """
    from cmdpal.catalog import load_catalog
    from cmdpal.config import load_palette_config
    from cmdpal.telemetry import configure_file_logging
    from cmdpal.tui.app import PaletteApp

    catalog = load_catalog(catalog_path)
    config = load_palette_config(config_path)
    # Terminal rows instead of pixels
    config = replace(config, item_height=1, container_height=DEFAULT_VISIBLE_ROWS)

    if log_dir:
        configure_file_logging(log_dir)

    app = PaletteApp(
        catalog.commands,
        catalog.recents,
        config=config,
        quick_links=catalog.quick_links,
        recent_searches=catalog.recent_searches,
    )
    app.run()
