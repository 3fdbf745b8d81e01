"""Interactive session layer: debounced queries and palette state."""

from cmdpal.session.debounce import QueryDebouncer
from cmdpal.session.palette import PaletteSession

__all__ = ["PaletteSession", "QueryDebouncer"]
