# scheduler.py
"""
Timer service port used by the engine to pace itself.

The engine never sleeps or reads the wall clock directly: it asks a scheduler
for the current time and to "call me back after N ms". Hosts supply one:

- ManualScheduler: time only moves when a test calls advance().
- PygameScheduler: time is pygame's tick counter; the frame loop pumps run_due().
"""
from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Tuple

import pygame  # type: ignore


class TimerHandle:
    """Token returned by call_later(); pass it to cancel()."""

    __slots__ = ("due_ms", "callback", "cancelled", "fired")

    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self):
        state = "active" if self.active else ("fired" if self.fired else "cancelled")
        return f"<TimerHandle due={self.due_ms} {state}>"


class Scheduler:
    """
    Base timer queue. Subclasses only decide where "now" comes from.
    """

    def __init__(self):
        self._queue: List[Tuple[int, int, TimerHandle]] = []
        self._seq = itertools.count()

    def now_ms(self) -> int:
        raise NotImplementedError

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now_ms() + max(int(delay_ms), 0), callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is not None and handle.active:
            handle.cancelled = True

    def pending(self) -> int:
        """Number of timers that have neither fired nor been cancelled."""
        return sum(1 for _, _, h in self._queue if h.active)

    def run_due(self) -> int:
        """Fire every timer due at or before now. Returns how many fired."""
        now = self.now_ms()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired


class ManualScheduler(Scheduler):
    """Deterministic clock for tests: nothing happens until advance()."""

    def __init__(self, start_ms: int = 0):
        super().__init__()
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        """
        Move time forward by `ms`, firing callbacks in due order.
        The clock steps to each timer's due time before firing it, so a
        callback that reschedules itself sees the right "now".
        """
        if ms < 0:
            raise ValueError("cannot move time backwards")
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = max(self._now, due)
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = target
        return fired


class PygameScheduler(Scheduler):
    """Timer queue on pygame's millisecond counter; pump run_due() every frame."""

    def now_ms(self) -> int:
        return pygame.time.get_ticks()
