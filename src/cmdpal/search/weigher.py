"""Combine per-field fuzzy scores into one command score.

The best-matching field decides relevance: the result is the maximum of
the weighted field scores, not their sum.
"""

from __future__ import annotations

from cmdpal.constants import (
    CATEGORY_WEIGHT,
    DESCRIPTION_WEIGHT,
    KEYWORD_WEIGHT,
    LABEL_WEIGHT,
)
from cmdpal.models import Command
from cmdpal.search.fuzzy import score


def field_scores(command: Command, query: str) -> dict[str, float]:
    """Return the weighted score of each searchable field.

    Missing fields (no description, no category, no keywords) score 0.
    """
    keyword_score = max((score(kw, query) for kw in command.keywords), default=0)
    return {
        "label": score(command.label, query) * LABEL_WEIGHT,
        "description": (
            score(command.description, query) * DESCRIPTION_WEIGHT
            if command.description
            else 0.0
        ),
        "category": (
            score(command.category, query) * CATEGORY_WEIGHT if command.category else 0.0
        ),
        "keywords": keyword_score * KEYWORD_WEIGHT,
    }


def weigh(command: Command, query: str) -> float:
    """Score a command against a query; 0 means it is not a match."""
    return max(field_scores(command, query).values())
