"""Deferred callbacks run one tick after the current event."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Callable

logger = logging.getLogger(__name__)


class TickScheduler:
    """FIFO of callbacks drained by the host's event loop.

    The host calls :meth:`run_pending` once it has finished processing an
    event, so callbacks observe settled state.
    """

    def __init__(self) -> None:
        self._pending: deque[tuple[Callable[..., Any], tuple]] = deque()

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._pending.append((callback, args))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the callbacks queued so far. Returns how many ran.

        Callbacks queued while draining wait for the next call.
        """
        count = len(self._pending)
        for _ in range(count):
            callback, args = self._pending.popleft()
            callback(*args)
        if count:
            logger.debug("Ran %d deferred callback(s)", count)
        return count


class AsyncioTickScheduler:
    """Scheduler backed by ``loop.call_soon`` for asyncio hosts."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback, *args)
