"""View math for rendering long result lists."""

from cmdpal.view.virtualizer import scroll_into_view, window_for

__all__ = ["scroll_into_view", "window_for"]
