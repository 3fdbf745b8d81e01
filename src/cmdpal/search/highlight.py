"""Query highlighting for rendered results.

Marks every case-insensitive occurrence of the query inside a string.
When the query only matched as a character subsequence, the matched
characters are marked instead.
"""

from __future__ import annotations

import re

from rich.text import Text

from cmdpal.constants import LONG_QUERY_LENGTH

DEFAULT_HIGHLIGHT_STYLE = "bold reverse"


def match_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of *text* matched by *query*.

    Spans are non-overlapping and sorted. An empty or whitespace query
    matches nothing.
    """
    needle = query.strip()
    if not needle:
        return []

    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    spans = [(m.start(), m.end()) for m in pattern.finditer(text)]
    if spans or len(needle) > LONG_QUERY_LENGTH:
        return spans

    return _subsequence_spans(text, needle)


def _subsequence_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Spans for a greedy in-order character match, merged into runs."""
    text_lower = text.lower()
    query_lower = query.lower()
    positions: list[int] = []
    qi = 0
    for i, char in enumerate(text_lower):
        if qi == len(query_lower):
            break
        if char == query_lower[qi]:
            positions.append(i)
            qi += 1
    if qi != len(query_lower):
        return []

    spans: list[tuple[int, int]] = []
    for pos in positions:
        if spans and spans[-1][1] == pos:
            spans[-1] = (spans[-1][0], pos + 1)
        else:
            spans.append((pos, pos + 1))
    return spans


def highlight(text: str, query: str, style: str = DEFAULT_HIGHLIGHT_STYLE) -> Text:
    """Build a Rich Text of *text* with the query matches styled.

    Args:
        text: The string to render.
        query: The user's query.
        style: Rich style applied to matched spans.

    Returns:
        Rich Text ready for a console or a Textual widget.
    """
    rendered = Text(text)
    for start, end in match_spans(text, query):
        rendered.stylize(style, start, end)
    return rendered
