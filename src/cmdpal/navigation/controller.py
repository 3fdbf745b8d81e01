"""Keyboard-driven selection over the ranked result list.

NavigationController keeps ``selected_index`` valid against the current
result count. Every movement is a no-op while the list is empty. The
index refers to the ranked (ungrouped) list; presentation code maps it
into the grouped view with :func:`cmdpal.search.grouper.locate`.
"""

from __future__ import annotations

import logging
from typing import Callable

from cmdpal.constants import PAGE_SIZE
from cmdpal.models import NavigationState
from cmdpal.navigation.fsm import SelectionLifecycleSM, create_fsm

logger = logging.getLogger(__name__)

# Key name -> controller method. Names follow Textual's key naming.
KEY_ACTIONS: dict[str, str] = {
    "down": "next",
    "up": "previous",
    "home": "first",
    "end": "last",
    "pagedown": "page_forward",
    "pageup": "page_back",
    "enter": "activate",
    "space": "activate",
}


class NavigationController:
    """Selection state machine over ``[0, item_count)``.

    Args:
        item_count: Initial number of results.
        page_size: Step used by page_forward/page_back.
        on_activate: Called with the selected index on activate().
    """

    def __init__(
        self,
        item_count: int = 0,
        page_size: int = PAGE_SIZE,
        on_activate: Callable[[int], None] | None = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.on_activate = on_activate
        self._sm: SelectionLifecycleSM = create_fsm("empty")
        self._index = 0
        self._count = 0
        self.item_count_changed(item_count)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self._sm.current_state_value == "empty"

    @property
    def selected_index(self) -> int | None:
        """Selected position, or None while there are no results."""
        return None if self.is_empty else self._index

    @property
    def item_count(self) -> int:
        return self._count

    @property
    def state(self) -> NavigationState:
        return NavigationState(selected_index=self.selected_index, item_count=self._count)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def next(self) -> None:
        """Select the following item, wrapping to the first."""
        if not self.is_empty:
            self._index = (self._index + 1) % self._count

    def previous(self) -> None:
        """Select the preceding item, wrapping to the last."""
        if not self.is_empty:
            self._index = (self._index - 1 + self._count) % self._count

    def first(self) -> None:
        if not self.is_empty:
            self._index = 0

    def last(self) -> None:
        if not self.is_empty:
            self._index = self._count - 1

    def page_forward(self) -> None:
        if not self.is_empty:
            self._index = min(self._count - 1, self._index + self.page_size)

    def page_back(self) -> None:
        if not self.is_empty:
            self._index = max(0, self._index - self.page_size)

    def activate(self) -> int | None:
        """Report the selected index as chosen.

        The controller's own state is unchanged; closing the palette is
        the session's job.

        Returns:
            The selected index, or None when there is nothing to activate.
        """
        if self.is_empty or not 0 <= self._index < self._count:
            return None
        if self.on_activate is not None:
            self.on_activate(self._index)
        return self._index

    def item_count_changed(self, new_count: int) -> None:
        """Adopt a new result count and reset the selection to the top."""
        self._count = max(0, new_count)
        self._index = 0
        if self._count == 0:
            self._sm.drain()
        else:
            self._sm.populate()

    def hover(self, index: int) -> None:
        """Pointer-driven selection; out-of-range indices are ignored."""
        if self.is_empty or not 0 <= index < self._count:
            logger.debug("hover ignored index=%d count=%d", index, self._count)
            return
        self._index = index

    def handle_key(self, key: str) -> bool:
        """Apply the transition bound to *key*.

        Returns:
            True if the key is a navigation key, whether or not the
            selection moved.
        """
        action = KEY_ACTIONS.get(key)
        if action is None:
            return False
        getattr(self, action)()
        return True
