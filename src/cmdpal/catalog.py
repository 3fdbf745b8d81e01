"""Command catalog loading and validation.

A catalog is a YAML or JSON document listing commands, either as a bare
list or under a ``commands:`` key, with an optional ``recent:`` list of
command ids (most recent first). The search-modal view also reads
``quick_links`` (label and url) and ``recent_searches`` (query strings)::

    commands:
      - id: file.save
        label: Save
        category: File
        shortcut: Ctrl+S
        keywords: [write, store]
    recent: [file.save]
    quick_links:
      - {label: Docs, url: /docs}
    recent_searches: [theme]

Entries are validated with pydantic. Keys outside the Command fields are
kept as the command's payload dict.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cmdpal.exceptions import CatalogError
from cmdpal.models import Command, QuickLink

YAML_SUFFIXES = {".yml", ".yaml"}


class CommandSpec(BaseModel):
    """Schema of one catalog entry."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    id: str = Field(min_length=1, description="Unique, stable identifier")
    label: str = Field(min_length=1, description="Primary display and match text")
    description: str | None = None
    category: str | None = None
    keywords: list[str] = Field(default_factory=list)
    disabled: bool = False
    shortcut: str | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    def to_command(self) -> Command[dict]:
        payload = dict(self.model_extra or {})
        return Command(
            id=self.id,
            label=self.label,
            description=self.description or None,
            category=self.category or None,
            keywords=tuple(self.keywords),
            disabled=self.disabled,
            shortcut=self.shortcut,
            payload=payload or None,
        )


class QuickLinkSpec(BaseModel):
    """Schema of one quick link."""

    model_config = ConfigDict(str_strip_whitespace=True)

    label: str = Field(min_length=1)
    url: str = Field(min_length=1)


class CatalogSpec(BaseModel):
    """Schema of a whole catalog document."""

    commands: list[CommandSpec]
    recent: list[str] = Field(default_factory=list)
    quick_links: list[QuickLinkSpec] = Field(default_factory=list)
    recent_searches: list[str] = Field(default_factory=list)


@dataclass
class Catalog:
    """Validated commands plus the recent ones resolved to Command objects."""

    commands: list[Command]
    recents: list[Command]
    source: str | None = None
    quick_links: list[QuickLink] = field(default_factory=list)
    recent_searches: list[str] = field(default_factory=list)

    def by_id(self, command_id: str) -> Command | None:
        for command in self.commands:
            if command.id == command_id:
                return command
        return None


def parse_catalog(raw: Any, source: str | None = None) -> Catalog:
    """Validate an already-decoded catalog document.

    Args:
        raw: A list of command mappings or a mapping with ``commands``
            and optional ``recent``.
        source: Where the document came from, for error messages.

    Raises:
        CatalogError: On schema violations, duplicate ids or recent ids
            that name no command.
    """
    if isinstance(raw, list):
        raw = {"commands": raw}
    if not isinstance(raw, dict):
        raise CatalogError("catalog must be a list or a mapping with a 'commands' key", source)

    try:
        spec = CatalogSpec.model_validate(raw)
    except ValidationError as exc:
        raise CatalogError(f"invalid catalog: {exc}", source) from exc

    commands: list[Command] = []
    seen: set[str] = set()
    for entry in spec.commands:
        if entry.id in seen:
            raise CatalogError(f"duplicate command id {entry.id!r}", source)
        seen.add(entry.id)
        commands.append(entry.to_command())

    index = {c.id: c for c in commands}
    recents: list[Command] = []
    for command_id in spec.recent:
        if command_id not in index:
            raise CatalogError(f"recent id {command_id!r} does not name a command", source)
        recents.append(index[command_id])

    return Catalog(
        commands=commands,
        recents=recents,
        source=source,
        quick_links=[QuickLink(label=q.label, url=q.url) for q in spec.quick_links],
        recent_searches=[s.strip() for s in spec.recent_searches if s.strip()],
    )


def load_catalog(path: Path) -> Catalog:
    """Load and validate a catalog file.

    ``.yml``/``.yaml`` files are read with ``yaml.safe_load``, anything
    else as JSON.

    Raises:
        CatalogError: If the file cannot be read, decoded or validated.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog: {exc}", str(path)) from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise CatalogError(f"cannot parse catalog: {exc}", str(path)) from exc

    if raw is None:
        raw = []
    return parse_catalog(raw, source=str(path))
