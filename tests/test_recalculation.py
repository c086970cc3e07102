"""Tests for the debounced recalculation scheduler."""

import asyncio

from nutrition_calculator.services.recalculation import (
    AsyncioClock,
    RecalculationScheduler,
)
from tests.conftest import VirtualClock


def _scheduler(
    clock: VirtualClock, calls: list[int], auto: list[bool] | None = None
) -> RecalculationScheduler:
    flags = auto if auto is not None else [True]
    return RecalculationScheduler(
        clock=clock,
        recalculate=lambda: calls.append(1),
        should_schedule=lambda: flags[0],
        delay_seconds=0.5,
    )


def test_burst_of_changes_runs_once() -> None:
    clock = VirtualClock()
    calls: list[int] = []
    scheduler = _scheduler(clock, calls)

    for _ in range(5):
        scheduler.notify_change()
        clock.advance(0.02)
    clock.advance(0.47)
    assert calls == []

    clock.advance(0.05)
    assert calls == [1]
    assert not scheduler.pending
    assert len(clock.active) == 0


def test_at_most_one_pending_timer() -> None:
    clock = VirtualClock()
    scheduler = _scheduler(clock, [])

    scheduler.notify_change()
    scheduler.notify_change()

    assert len(clock.active) == 1


def test_no_schedule_when_everything_is_pinned() -> None:
    clock = VirtualClock()
    calls: list[int] = []
    scheduler = _scheduler(clock, calls, auto=[False])

    scheduler.notify_change()
    clock.advance(1)

    assert calls == []
    assert not scheduler.pending


def test_flush_and_cancel() -> None:
    clock = VirtualClock()
    calls: list[int] = []
    scheduler = _scheduler(clock, calls)

    assert scheduler.flush() is False
    scheduler.notify_change()
    assert scheduler.flush() is True
    assert calls == [1]

    scheduler.notify_change()
    scheduler.cancel()
    clock.advance(1)
    assert calls == [1]


def test_asyncio_clock_debounces() -> None:
    async def scenario() -> list[int]:
        calls: list[int] = []
        scheduler = RecalculationScheduler(
            clock=AsyncioClock(),
            recalculate=lambda: calls.append(1),
            should_schedule=lambda: True,
            delay_seconds=0.01,
        )
        for _ in range(3):
            scheduler.notify_change()
        await asyncio.sleep(0.1)
        return calls

    assert asyncio.run(scenario()) == [1]
