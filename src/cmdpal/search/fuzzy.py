"""Tiered fuzzy scorer for command palette matching.

Exact, prefix and substring matches dominate. Long queries fall back to
word-level matching only; short queries additionally accept an in-order
character subsequence, scored by the longest consecutive run.

Usage::

    from cmdpal.search.fuzzy import score

    score("Search Files", "srch")   # 330
    score("Save", "save")           # 1000
"""

from __future__ import annotations

from cmdpal.constants import (
    CONSECUTIVE_BONUS,
    EXACT_SCORE,
    LONG_QUERY_LENGTH,
    MIN_CONSECUTIVE,
    MIN_MATCH_RATIO,
    PREFIX_SCORE,
    SHORT_QUERY_LENGTH,
    SUBSEQUENCE_BASE_SCORE,
    SUBSTRING_SCORE,
    WORD_PREFIX_SCORE,
    WORD_SUBSTRING_SCORE,
)


def score(text: str, query: str) -> int:
    """Score how well *query* matches *text*, case-insensitively.

    Args:
        text: Candidate string (label, description, category or keyword).
        query: The user's query.

    Returns:
        A non-negative relevance score. 0 means no match.
    """
    text_lower = text.lower()
    query_lower = query.lower()

    if text_lower == query_lower:
        return EXACT_SCORE
    if text_lower.startswith(query_lower):
        return PREFIX_SCORE
    if query_lower in text_lower:
        return SUBSTRING_SCORE

    if len(query_lower) > LONG_QUERY_LENGTH:
        return _word_score(text_lower, query_lower)

    return _subsequence_score(text_lower, query_lower)


def _word_score(text: str, query: str) -> int:
    """Word-level matching for long queries (no character fuzziness)."""
    text_words = text.split()
    query_words = query.split()

    for query_word in query_words:
        if any(word.startswith(query_word) for word in text_words):
            return WORD_PREFIX_SCORE

    for query_word in query_words:
        if any(query_word in word for word in text_words):
            return WORD_SUBSTRING_SCORE

    return 0


def _subsequence_score(text: str, query: str) -> int:
    """Greedy in-order subsequence match for short queries."""
    matched = 0
    run = 0
    max_consecutive = 0

    for char in text:
        if matched == len(query):
            break
        if char == query[matched]:
            matched += 1
            run += 1
            max_consecutive = max(max_consecutive, run)
        else:
            run = 0

    if matched != len(query):
        return 0

    bonus = SUBSEQUENCE_BASE_SCORE + max_consecutive * CONSECUTIVE_BONUS
    if len(query) <= SHORT_QUERY_LENGTH:
        return bonus

    # 5-6 character queries must look like a real abbreviation of the text
    if max_consecutive >= MIN_CONSECUTIVE and len(query) / len(text) >= MIN_MATCH_RATIO:
        return bonus
    return 0
