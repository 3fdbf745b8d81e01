"""Shared pytest fixtures for cmdpal tests.

Provides a small realistic command set, matching recents, catalog files
on disk (YAML and JSON), and a Telemetry instance with an in-memory
span exporter.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cmdpal.models import Command
from cmdpal.telemetry import Telemetry, set_telemetry


CATALOG_DATA = {
    "commands": [
        {"id": "file.save", "label": "Save", "category": "File", "shortcut": "Ctrl+S",
         "description": "Write the current document to disk", "keywords": ["write", "store"]},
        {"id": "nav.settings", "label": "Settings", "category": "Preferences",
         "description": "Open preferences", "keywords": ["options", "config"]},
        {"id": "search.files", "label": "Search Files", "category": "Navigation",
         "description": "Find files by name", "keywords": ["find", "locate"]},
        {"id": "nav.home", "label": "Go to Home", "category": "Navigation"},
        {"id": "help.shortcuts", "label": "Keyboard Shortcuts"},
        {"id": "admin.reset", "label": "Reset Workspace", "category": "Danger Zone",
         "disabled": True},
    ],
    "recent": ["nav.home"],
    "quick_links": [{"label": "Docs", "url": "/docs"}],
    "recent_searches": ["theme"],
}


def make_command(
    id: str,
    label: str | None = None,
    description: str | None = None,
    category: str | None = None,
    keywords: tuple[str, ...] = (),
    disabled: bool = False,
) -> Command:
    """Build a Command with the label defaulting to the id."""
    return Command(
        id=id,
        label=label or id,
        description=description,
        category=category,
        keywords=keywords,
        disabled=disabled,
    )


@pytest.fixture
def commands() -> list[Command]:
    """Six commands across four categories, one of them disabled."""
    return [
        make_command("file.save", "Save", "Write the current document to disk", "File",
                     ("write", "store")),
        make_command("nav.settings", "Settings", "Open preferences", "Preferences",
                     ("options", "config")),
        make_command("search.files", "Search Files", "Find files by name", "Navigation",
                     ("find", "locate")),
        make_command("nav.home", "Go to Home", category="Navigation"),
        make_command("help.shortcuts", "Keyboard Shortcuts"),
        make_command("admin.reset", "Reset Workspace", category="Danger Zone", disabled=True),
    ]


@pytest.fixture
def recents(commands) -> list[Command]:
    """'Go to Home' as the single recent command."""
    return [c for c in commands if c.id == "nav.home"]


@pytest.fixture
def catalog_yaml(tmp_path: Path) -> Path:
    """The shared catalog written as YAML."""
    import yaml

    path = tmp_path / "catalog.yml"
    path.write_text(yaml.safe_dump(CATALOG_DATA, sort_keys=False))
    return path


@pytest.fixture
def catalog_json(tmp_path: Path) -> Path:
    """The shared catalog written as JSON."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG_DATA))
    return path


@pytest.fixture
def telemetry():
    """Telemetry with an in-memory exporter, installed as the active instance."""
    tel, exporter = Telemetry.for_testing()
    set_telemetry(tel)
    yield tel, exporter
    set_telemetry(Telemetry.noop())
