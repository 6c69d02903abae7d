"""Debounced recompute scheduling.

Change notifications tend to arrive in bursts (an item is equipped, then an
effect is toggled, then derived data is rebuilt). Each composite keeps at most
one pending recompute; a new request within the window replaces it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging

logger = logging.getLogger(__name__)


class RecomputeScheduler:
    """Per-composite debounce timers on an asyncio event loop.

    Args:
        callback: Invoked with the composite id once its window elapses.
        delay_ms: Coalescing window in milliseconds.
        loop: Event loop to arm timers on. When None the running loop is used
            at schedule time; with no running loop the callback runs
            immediately.

    Example:
        >>> scheduler = RecomputeScheduler(orchestrator.refresh_composite, delay_ms=150)
        >>> scheduler.schedule("party-1")
    """

    def __init__(
        self,
        callback: Callable[[str], object],
        delay_ms: int = 150,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.callback = callback
        self.delay_ms = delay_ms
        self._loop = loop
        self._pending: dict[str, asyncio.TimerHandle] = {}

    def _resolve_loop(self) -> asyncio.AbstractEventLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _fire(self, composite_id: str) -> None:
        self._pending.pop(composite_id, None)
        try:
            self.callback(composite_id)
        except Exception:
            logger.exception("Recompute failed for composite %s", composite_id)

    def schedule(self, composite_id: str) -> None:
        """Arm (or re-arm) the recompute for a composite."""
        self.cancel(composite_id)
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("No event loop; recomputing %s immediately", composite_id)
            self._fire(composite_id)
            return
        self._pending[composite_id] = loop.call_later(
            self.delay_ms / 1000.0, self._fire, composite_id
        )

    def cancel(self, composite_id: str) -> bool:
        """Drop a pending recompute. Returns True if one was pending."""
        handle = self._pending.pop(composite_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        for composite_id in list(self._pending):
            self.cancel(composite_id)

    def pending(self, composite_id: str | None = None) -> bool | list[str]:
        """Pending composite ids, or whether one composite is pending."""
        if composite_id is not None:
            return composite_id in self._pending
        return sorted(self._pending)
