"""Windowed rendering math for long result lists.

Given list size, row height, viewport height and scroll offset, works out
which contiguous rows must be materialized and where to place them inside
a full-height placeholder. Small lists are rendered whole.
"""

from __future__ import annotations

import logging
import math

from cmdpal.constants import OVERSCAN, VIRTUALIZATION_THRESHOLD
from cmdpal.models import VirtualWindow

logger = logging.getLogger(__name__)


def _check_geometry(item_height: int, container_height: int) -> None:
    if item_height <= 0:
        raise ValueError(f"item_height must be positive, got {item_height}")
    if container_height < 0:
        raise ValueError(f"container_height must not be negative, got {container_height}")


def window_for(
    total_items: int,
    item_height: int,
    container_height: int,
    scroll_offset: float,
    overscan: int = OVERSCAN,
    threshold: int = VIRTUALIZATION_THRESHOLD,
) -> VirtualWindow:
    """Compute the window of rows to render.

    Args:
        total_items: Length of the ranked result list.
        item_height: Height of one row; must be positive.
        container_height: Height of the scroll viewport; must not be negative.
        scroll_offset: Current scroll position. Clamped to the scrollable
            range so the window never runs past either end of the list.
        overscan: Extra rows rendered above and below the viewport.
        threshold: Lists with at most this many rows are not virtualized.

    Returns:
        The VirtualWindow describing the slice and its placement.

    Raises:
        ValueError: On non-positive item height, negative container
            height or negative overscan.
    """
    _check_geometry(item_height, container_height)
    if overscan < 0:
        raise ValueError(f"overscan must not be negative, got {overscan}")

    if total_items <= 0:
        return VirtualWindow(
            start_index=0,
            end_index=0,
            total_height=0,
            offset_y=0,
            virtualized=False,
            item_count=0,
        )

    total_height = total_items * item_height

    if total_items <= threshold:
        return VirtualWindow(
            start_index=0,
            end_index=total_items - 1,
            total_height=total_height,
            offset_y=0,
            virtualized=False,
            item_count=total_items,
        )

    max_scroll = max(0, total_height - container_height)
    scroll = min(max(scroll_offset, 0), max_scroll)

    start = max(0, math.floor(scroll / item_height) - overscan)
    end = min(total_items - 1, math.ceil((scroll + container_height) / item_height) + overscan)

    logger.debug(
        "window items=%d scroll=%s start=%d end=%d", total_items, scroll, start, end
    )
    return VirtualWindow(
        start_index=start,
        end_index=end,
        total_height=total_height,
        offset_y=start * item_height,
        virtualized=True,
        item_count=total_items,
    )


def scroll_into_view(
    index: int,
    item_height: int,
    container_height: int,
    scroll_offset: float,
) -> float:
    """Return the smallest scroll change that shows row *index* in full.

    Rows already fully visible leave the offset unchanged; rows above the
    viewport align to its top edge, rows below align to its bottom edge.
    """
    _check_geometry(item_height, container_height)
    top = index * item_height
    bottom = top + item_height

    if top < scroll_offset:
        return top
    if bottom > scroll_offset + container_height:
        return max(0, bottom - container_height)
    return scroll_offset
