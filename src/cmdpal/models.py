"""Data models for the command palette engine.

Command is the caller-supplied input. ScoredCommand, VirtualWindow and
NavigationState are derived values: the engine builds fresh instances
on every query or scroll event and never mutates them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from cmdpal.constants import DEFAULT_CATEGORY
from cmdpal.exceptions import InvalidCommandError

PayloadT = TypeVar("PayloadT")
ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class Command(Generic[PayloadT]):
    """An entry that can be searched and activated.

    ``shortcut`` and ``payload`` are carried through untouched; scoring,
    ranking and grouping only read the text fields and ``disabled``.
    """

    id: str
    label: str
    description: str | None = None
    category: str | None = None
    keywords: tuple[str, ...] = ()
    disabled: bool = False
    shortcut: str | None = None
    payload: PayloadT | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidCommandError(f"command id must be a non-empty string, got {self.id!r}")
        if not isinstance(self.label, str) or not self.label.strip():
            raise InvalidCommandError(
                f"command {self.id!r} must have a non-empty label, got {self.label!r}"
            )
        if not isinstance(self.keywords, tuple):
            object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def group_name(self) -> str:
        """Category bucket this command falls into."""
        return self.category or DEFAULT_CATEGORY


@dataclass(frozen=True)
class QuickLink:
    """A shortcut offered while the search-modal query is empty."""

    label: str
    url: str

    def __post_init__(self) -> None:
        if not self.label.strip():
            raise InvalidCommandError(f"quick link {self.url!r} must have a non-empty label")


@dataclass(frozen=True)
class ScoredCommand:
    """A command paired with its relevance score (0 means no match)."""

    command: Command
    score: float


# Ordered, score-descending list of commands.
RankedResult = list[Command]

# Group name -> ordered sub-sequence of the ranked list.
GroupedResult = dict[str, list[Command]]


@dataclass(frozen=True)
class VirtualWindow:
    """The slice of a result list that must be materialized.

    ``total_height`` sizes the scroll placeholder and ``offset_y``
    positions the rendered slice inside it.
    """

    start_index: int
    end_index: int
    total_height: int
    offset_y: int
    virtualized: bool
    item_count: int = 0

    @property
    def visible_items(self) -> range:
        """Indices of the items to render (empty for an empty list)."""
        if self.item_count == 0:
            return range(0)
        return range(self.start_index, self.end_index + 1)

    def materialize(self, items: Sequence[ItemT]) -> list[ItemT]:
        """Return the visible slice of *items*."""
        if self.item_count == 0:
            return []
        return list(items[self.start_index : self.end_index + 1])


@dataclass(frozen=True)
class NavigationState:
    """Snapshot of the selection over a result list.

    ``selected_index`` is None when the list is empty.
    """

    selected_index: int | None
    item_count: int

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0
