"""Debounced recalculation of calculator targets."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.5


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        """Prevent the callback from running."""


class Clock(Protocol):
    """Schedules callbacks after a delay without blocking."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> TimerHandle:
        """Run ``callback`` once ``delay_seconds`` have elapsed."""


@dataclass
class AsyncioClock(Clock):
    """Clock backed by the running asyncio event loop."""

    loop: asyncio.AbstractEventLoop | None = None

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> TimerHandle:
        """Schedule ``callback`` on the event loop."""
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)


class RecalculationScheduler:
    """Runs a recalculation once inputs have been quiet for ``delay_seconds``.

    At most one timer is pending; each qualifying change cancels it and
    starts a fresh one, so a burst of edits produces a single recompute
    using the final values.
    """

    def __init__(
        self,
        clock: Clock,
        recalculate: Callable[[], None],
        should_schedule: Callable[[], bool],
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        self.clock = clock
        self.delay_seconds = delay_seconds
        self._recalculate = recalculate
        self._should_schedule = should_schedule
        self._pending: TimerHandle | None = None
        self.runs = 0

    @property
    def pending(self) -> bool:
        """Return True when a recalculation is waiting to fire."""
        return self._pending is not None

    def notify_change(self) -> None:
        """Restart the quiet-period timer after an input change."""
        if not self._should_schedule():
            _logger.debug("All targets pinned; skipping recalculation schedule")
            return
        self.cancel()
        self._pending = self.clock.call_later(self.delay_seconds, self._fire)

    def cancel(self) -> None:
        """Drop the pending recalculation, if any."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def flush(self) -> bool:
        """Run a pending recalculation now. Returns True if one was pending."""
        if self._pending is None:
            return False
        self.cancel()
        self._run()
        return True

    def _fire(self) -> None:
        self._pending = None
        self._run()

    def _run(self) -> None:
        self.runs += 1
        _logger.debug("Running recalculation #%s", self.runs)
        self._recalculate()
