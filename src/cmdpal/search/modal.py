"""Additive relevance scoring for the search-modal view.

Unlike the tiered fuzzy scorer, every rule that matches adds to the
total, so a multi-word query rewards commands that contain each word in
several fields. Matching is case-insensitive containment only; there is
no subsequence fallback, and an empty query ranks nothing (the modal
shows its quick links instead).

Usage::

    from cmdpal.search.modal import rank_modal

    ranked = rank_modal(commands, "dark theme")
"""

from __future__ import annotations

import logging
from typing import Sequence

from cmdpal.constants import (
    MODAL_CATEGORY,
    MODAL_DESCRIPTION,
    MODAL_DESCRIPTION_WORD,
    MODAL_KEYWORD,
    MODAL_KEYWORD_WORD,
    MODAL_TITLE_EXACT,
    MODAL_TITLE_PREFIX,
    MODAL_TITLE_SUBSTRING,
    MODAL_TITLE_WORD,
)
from cmdpal.models import Command, RankedResult, ScoredCommand
from cmdpal.search.ranker import has_query

logger = logging.getLogger(__name__)


def relevance(command: Command, query: str) -> int:
    """Sum the points of every rule *query* satisfies on *command*.

    The whole query is tried against the label (exact, prefix or
    substring, first hit only), the description, the category and each
    keyword; each whitespace-separated word is then tried against the
    label, the description and each keyword.
    """
    q = query.strip().lower()
    if not q:
        return 0
    words = q.split()

    title = command.label.lower()
    description = (command.description or "").lower()
    category = (command.category or "").lower()
    keywords = [kw.lower() for kw in command.keywords]

    total = 0
    if title == q:
        total += MODAL_TITLE_EXACT
    elif title.startswith(q):
        total += MODAL_TITLE_PREFIX
    elif q in title:
        total += MODAL_TITLE_SUBSTRING
    total += MODAL_TITLE_WORD * sum(1 for w in words if w in title)

    if q in description:
        total += MODAL_DESCRIPTION
    total += MODAL_DESCRIPTION_WORD * sum(1 for w in words if w in description)

    if q in category:
        total += MODAL_CATEGORY

    for keyword in keywords:
        if q in keyword:
            total += MODAL_KEYWORD
        total += MODAL_KEYWORD_WORD * sum(1 for w in words if w in keyword)

    return total


def score_modal(
    commands: Sequence[Command],
    query: str,
    max_results: int | None = None,
) -> list[ScoredCommand]:
    """Score *commands*, drop non-matches and sort by relevance.

    Disabled commands are skipped. Equal scores keep catalog order.

    Args:
        commands: Full command set.
        query: The committed query; blank queries yield ``[]``.
        max_results: Optional cap; ``<= 0`` yields ``[]``.
    """
    if not has_query(query):
        return []
    if max_results is not None and max_results <= 0:
        return []

    scored = []
    for command in commands:
        if command.disabled:
            continue
        value = relevance(command, query)
        if value > 0:
            scored.append(ScoredCommand(command=command, score=float(value)))
    scored = sorted(scored, key=lambda sc: sc.score, reverse=True)

    logger.debug("modal ranked query=%r matches=%d", query, len(scored))
    if max_results is not None:
        return scored[:max_results]
    return scored


def rank_modal(
    commands: Sequence[Command],
    query: str,
    max_results: int | None = None,
) -> RankedResult:
    """Return the commands of :func:`score_modal` in order."""
    return [sc.command for sc in score_modal(commands, query, max_results)]
