"""Rank a command set against a query.

Builds the candidate list (recent commands first, then everything else),
drops disabled entries, weighs each candidate, boosts recently used
commands, and returns the best ``max_results`` in score order.

Usage::

    from cmdpal.search.ranker import rank

    ranked = rank(commands, recents, "open", max_results=10)
"""

from __future__ import annotations

import logging
from typing import Sequence

from cmdpal.constants import RECENCY_BOOST
from cmdpal.models import Command, RankedResult, ScoredCommand
from cmdpal.search.weigher import weigh

logger = logging.getLogger(__name__)


def has_query(query: str | None) -> bool:
    """Return True if *query* holds anything besides whitespace."""
    return bool(query and query.strip())


def candidates(commands: Sequence[Command], recents: Sequence[Command]) -> list[Command]:
    """Return ``recents`` followed by the commands not among them.

    Duplicate ids keep their first occurrence. Disabled commands are
    removed on every path, including the no-query listing.
    """
    seen: set[str] = set()
    merged: list[Command] = []
    for command in [*recents, *commands]:
        if command.id in seen:
            continue
        seen.add(command.id)
        if command.disabled:
            continue
        merged.append(command)
    return merged


def score_commands(
    commands: Sequence[Command],
    recents: Sequence[Command],
    query: str,
    max_results: int,
) -> list[ScoredCommand]:
    """Score, filter, boost, sort and truncate the candidate set.

    Without a query every candidate is kept in candidate order with a
    score of 0. With a query, zero-score candidates are dropped and the
    rest are sorted by score descending; ties keep candidate order.

    Args:
        commands: Full command set.
        recents: Recently used commands, most recent first.
        query: The live query string.
        max_results: Result cap; ``<= 0`` yields an empty list.

    Returns:
        At most ``max_results`` ScoredCommand entries.
    """
    if max_results <= 0:
        return []

    pool = candidates(commands, recents)

    if not has_query(query):
        return [ScoredCommand(command=c, score=0.0) for c in pool[:max_results]]

    recent_ids = {c.id for c in recents}
    scored: list[ScoredCommand] = []
    for command in pool:
        value = weigh(command, query)
        if value <= 0:
            continue
        if command.id in recent_ids:
            value *= RECENCY_BOOST
        scored.append(ScoredCommand(command=command, score=value))

    # sorted() is stable, so equal scores keep candidate order
    scored = sorted(scored, key=lambda sc: sc.score, reverse=True)

    logger.debug(
        "ranked query=%r candidates=%d matches=%d cap=%d",
        query,
        len(pool),
        len(scored),
        max_results,
    )
    return scored[:max_results]


def rank(
    commands: Sequence[Command],
    recents: Sequence[Command],
    query: str,
    max_results: int,
) -> RankedResult:
    """Return the ranked commands for *query* (see :func:`score_commands`)."""
    return [sc.command for sc in score_commands(commands, recents, query, max_results)]
