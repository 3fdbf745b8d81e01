"""Debounced query commits built on reactivex.

Every keystroke becomes a one-shot delayed observable pushed into a
subject; ``switch_latest`` subscribes only to the newest one and disposes
the previous timer. At most one commit is ever pending.
"""

from __future__ import annotations

import logging
from typing import Callable

import reactivex as rx
from reactivex import operators as ops
from reactivex.abc import SchedulerBase
from reactivex.subject import Subject

from cmdpal.constants import DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


class QueryDebouncer:
    """Latest-request-wins scheduler for query commits.

    ``submit`` restarts the delay, ``flush`` commits at once (Enter),
    ``cancel`` drops whatever is pending. Empty queries skip the delay
    so clearing the input clears results immediately.

    Args:
        on_commit: Called with the committed query string. With a
            threaded scheduler it runs on the timer thread; callers own
            synchronization with their rendering loop.
        delay: Debounce delay in seconds.
        scheduler: reactivex scheduler for the delay timers. Defaults to
            reactivex's timeout scheduler.
    """

    def __init__(
        self,
        on_commit: Callable[[str], None],
        delay: float = DEBOUNCE_SECONDS,
        scheduler: SchedulerBase | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.delay = delay
        self._on_commit = on_commit
        self._scheduler = scheduler
        self._pending: str | None = None
        self._requests: Subject = Subject()
        self._subscription = self._requests.pipe(ops.switch_latest()).subscribe(
            on_next=self._commit,
        )

    @property
    def pending(self) -> bool:
        """True while a commit is scheduled but has not fired."""
        return self._pending is not None

    @property
    def pending_query(self) -> str | None:
        return self._pending

    def submit(self, query: str) -> None:
        """Schedule *query*, replacing any pending commit."""
        if not query.strip():
            self.flush(query)
            return
        self._pending = query
        self._requests.on_next(
            rx.timer(self.delay, scheduler=self._scheduler).pipe(
                ops.map(lambda _: query),
            )
        )

    def flush(self, query: str) -> None:
        """Commit *query* now, cancelling any pending commit."""
        self._pending = None
        self._requests.on_next(rx.of(query))

    def cancel(self) -> None:
        """Drop the pending commit, if any."""
        if self._pending is not None:
            logger.debug("debounce cancelled query=%r", self._pending)
        self._pending = None
        self._requests.on_next(rx.empty())

    def dispose(self) -> None:
        """Tear down the pipeline; later calls are ignored."""
        self._pending = None
        self._subscription.dispose()

    def _commit(self, query: str) -> None:
        if self._pending == query:
            self._pending = None
        self._on_commit(query)
