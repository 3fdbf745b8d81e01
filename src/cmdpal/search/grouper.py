"""Partition a ranked list into named display groups.

Rank order is preserved inside every group. Group order is "Recent"
(idle palette only) followed by categories in first-seen order.
"""

from __future__ import annotations

from typing import Sequence

from cmdpal.constants import RECENT_GROUP
from cmdpal.models import Command, GroupedResult

UNGROUPED = ""


def group(
    ranked: Sequence[Command],
    recents: Sequence[Command],
    has_query: bool,
    show_recent: bool,
    show_categories: bool = True,
) -> GroupedResult:
    """Group ranked commands for display.

    Args:
        ranked: Output of :func:`cmdpal.search.ranker.rank`.
        recents: Recently used commands.
        has_query: Whether the ranked list came from a non-empty query.
        show_recent: Pull recent commands into a leading "Recent" group
            when the palette is idle.
        show_categories: Bucket by category. With both flags off the
            ranked list is returned as a single unnamed group.

    Returns:
        Ordered mapping of group name to commands.
    """
    if not show_categories and not show_recent:
        return {UNGROUPED: list(ranked)}

    groups: GroupedResult = {}
    use_recent = show_recent and not has_query and len(recents) > 0
    recent_ids = {c.id for c in recents} if use_recent else set()

    if use_recent:
        recent_hits = [c for c in ranked if c.id in recent_ids]
        if recent_hits:
            groups[RECENT_GROUP] = recent_hits

    for command in ranked:
        if command.id in recent_ids:
            continue
        groups.setdefault(command.group_name, []).append(command)

    return groups


def flatten(grouped: GroupedResult) -> list[Command]:
    """Return commands in grouped display order."""
    return [command for members in grouped.values() for command in members]


def locate(grouped: GroupedResult, command_id: str) -> tuple[str, int] | None:
    """Find where a command is displayed.

    Maps a selection made against the ranked list back into the grouped
    view so the presentation layer can highlight the right row.

    Returns:
        ``(group_name, position_in_group)`` or None if not displayed.
    """
    for name, members in grouped.items():
        for position, command in enumerate(members):
            if command.id == command_id:
                return name, position
    return None
