"""Configuration loading and validation for the palette."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

from cmdpal.constants import (
    CONTAINER_HEIGHT,
    DEBOUNCE_SECONDS,
    ITEM_HEIGHT,
    MAX_RESULTS,
    OVERSCAN,
    PAGE_SIZE,
    RECENT_LIMIT,
    SCORING_MODES,
    VIRTUALIZATION_THRESHOLD,
)
from cmdpal.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path("config/palette_config.json")


@dataclass
class PaletteConfig:
    """Palette settings. Defaults suit a pixel-based list view.

    Heights are in rendering-surface units: pixels for a web list, rows
    for the terminal front-end.
    """

    max_results: int = MAX_RESULTS
    item_height: int = ITEM_HEIGHT
    container_height: int = CONTAINER_HEIGHT
    overscan: int = OVERSCAN
    virtualization_threshold: int = VIRTUALIZATION_THRESHOLD
    page_size: int = PAGE_SIZE
    debounce_seconds: float = DEBOUNCE_SECONDS
    show_categories: bool = True
    show_recent: bool = True
    show_shortcuts: bool = True
    recent_limit: int = RECENT_LIMIT
    scoring: str = "fuzzy"
    placeholder: str = "Type a command or search..."
    empty_message: str = "No commands found"

    def __post_init__(self) -> None:
        """Reject values the virtualizer and navigation cannot work with."""
        if self.item_height <= 0:
            raise ConfigError(f"item_height must be positive, got {self.item_height}")
        if self.container_height < 0:
            raise ConfigError(
                f"container_height must not be negative, got {self.container_height}"
            )
        if self.overscan < 0:
            raise ConfigError(f"overscan must not be negative, got {self.overscan}")
        if self.page_size <= 0:
            raise ConfigError(f"page_size must be positive, got {self.page_size}")
        if self.debounce_seconds < 0:
            raise ConfigError(
                f"debounce_seconds must not be negative, got {self.debounce_seconds}"
            )
        if self.recent_limit < 0:
            raise ConfigError(f"recent_limit must not be negative, got {self.recent_limit}")
        if self.scoring not in SCORING_MODES:
            raise ConfigError(
                f"scoring must be one of {', '.join(SCORING_MODES)}, got {self.scoring!r}"
            )


def load_palette_config(config_path: Path | None = None) -> PaletteConfig:
    """Load palette configuration from JSON, falling back to defaults.

    Reads ``config/palette_config.json`` when *config_path* is ``None``.
    A missing file yields a default ``PaletteConfig``; unknown keys are
    ignored.

    Args:
        config_path: Optional explicit path to the JSON file.

    Returns:
        PaletteConfig populated from the file merged over defaults.

    Raises:
        ConfigError: If the file is not valid JSON, is not an object, or
            holds invalid values.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"{config_path}: cannot read configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: configuration must be a JSON object")

    # Only keep recognised fields
    field_names = {f.name for f in fields(PaletteConfig)}
    kwargs = {k: v for k, v in data.items() if k in field_names}

    try:
        return PaletteConfig(**kwargs)
    except TypeError as exc:
        raise ConfigError(f"{config_path}: {exc}") from exc
