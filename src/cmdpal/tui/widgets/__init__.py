"""TUI widget modules for the palette front-end."""

from .results import ResultsView
from .search_bar import SearchBar

__all__ = ["ResultsView", "SearchBar"]
