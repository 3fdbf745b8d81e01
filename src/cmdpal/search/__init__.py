"""Search subpackage: fuzzy scoring, ranking, grouping and highlighting."""

from cmdpal.search.formatter import display_grouped_results, display_window, score_bar
from cmdpal.search.fuzzy import score
from cmdpal.search.grouper import flatten, group, locate
from cmdpal.search.highlight import highlight, match_spans
from cmdpal.search.ranker import has_query, rank, score_commands
from cmdpal.search.weigher import field_scores, weigh

__all__ = [
    "score",
    "weigh",
    "field_scores",
    "rank",
    "score_commands",
    "has_query",
    "group",
    "flatten",
    "locate",
    "highlight",
    "match_spans",
    "score_bar",
    "display_grouped_results",
    "display_window",
]
