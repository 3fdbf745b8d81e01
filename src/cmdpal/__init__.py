"""Command palette search and navigation engine."""

__version__ = "0.1.0"

from cmdpal.models import Command, NavigationState, ScoredCommand, VirtualWindow
from cmdpal.navigation import NavigationController
from cmdpal.search import group, rank, score, weigh
from cmdpal.view import window_for

__all__ = [
    "Command",
    "NavigationController",
    "NavigationState",
    "ScoredCommand",
    "VirtualWindow",
    "group",
    "rank",
    "score",
    "weigh",
    "window_for",
    "__version__",
]
