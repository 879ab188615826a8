"""Recompute schedulers owned by a MetricsEngine.

:class:`DebouncedScheduler` coalesces bursts of structural changes (cards
dragged between columns, dependency edits) into a single recomputation once
the board has been quiet for ``delay_secs``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from beadboard.config import get_settings

logger = logging.getLogger(__name__)


class RecomputeScheduler(Protocol):
    def schedule(self, callback: Callable[[], None]) -> None: ...

    def flush(self) -> bool: ...

    def cancel(self) -> None: ...

    @property
    def pending(self) -> bool: ...


class ImmediateScheduler:
    """Runs every scheduled callback synchronously."""

    def schedule(self, callback: Callable[[], None]) -> None:
        callback()

    def flush(self) -> bool:
        return False

    def cancel(self) -> None:
        pass

    @property
    def pending(self) -> bool:
        return False


class DebouncedScheduler:
    """Trailing-edge debounce on the running asyncio event loop.

    - ``schedule()`` replaces any pending callback and restarts the timer.
    - ``flush()`` runs the pending callback now.
    - ``cancel()`` drops it.
    """

    def __init__(self, delay_secs: float | None = None) -> None:
        if delay_secs is None:
            delay_secs = get_settings().recompute_debounce_ms / 1000
        self._delay = delay_secs
        self._callback: Callable[[], None] | None = None
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay_secs(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        """Must be called from within a running event loop."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Coalesced pending recomputation.")
        self._callback = callback
        self._handle = loop.call_later(self._delay, self._fire)

    def _fire(self) -> None:
        callback = self._callback
        self._callback = None
        self._handle = None
        if callback is not None:
            callback()

    def flush(self) -> bool:
        """Run the pending callback immediately. Returns True if one ran."""
        if self._handle is not None:
            self._handle.cancel()
        if self._callback is None:
            self._handle = None
            return False
        self._fire()
        return True

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None
