"""Frame schedulers driving the playback clock.

A scheduler runs a callback once before the next display refresh, the way a
browser's requestAnimationFrame does. Callbacks receive a monotonic timestamp
in milliseconds. Three implementations are provided:

- ManualScheduler: advanced explicitly, for tests and headless rendering
- ThreadScheduler: wall-clock timer threads at a fixed refresh rate
- AsyncioScheduler: timers on an asyncio event loop
"""

from __future__ import annotations

import asyncio
import itertools
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

from ..config import settings

FrameCallback = Callable[[float], None]
"Callback receiving the refresh timestamp in milliseconds"


class FrameScheduler(ABC):
    """Schedules callbacks for the next display refresh."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> Any:
        """Runs callback once at the next refresh.

        :param callback: Function receiving the timestamp in milliseconds
        :return: A handle for :meth:`cancel_frame`
        """
        ...

    @abstractmethod
    def cancel_frame(self, handle: Any) -> None:
        """Cancels a pending callback. Unknown or finished handles are ignored."""
        ...

    @abstractmethod
    def now(self) -> float:
        """The scheduler's current time in milliseconds."""
        ...


class ManualScheduler(FrameScheduler):
    """Scheduler advanced by hand.

    Each call to :meth:`advance` or :meth:`tick` is one display refresh: all
    callbacks requested before it run once, callbacks requested while it runs
    wait for the next refresh.

    Example:
        scheduler = ManualScheduler()
        clock = PlaybackClock(scheduler, frames, fps=10)
        clock.start()
        scheduler.advance(0)      # first refresh
        scheduler.advance(100)    # 100 ms later, one frame step
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = start_time
        self._pending: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    def now(self) -> float:
        return self._now

    @property
    def pending_count(self) -> int:
        """Number of callbacks waiting for the next refresh."""
        return len(self._pending)

    def tick(self, timestamp: float | None = None) -> int:
        """Runs one refresh.

        :param timestamp: The refresh time in ms, defaults to the current time
        :return: Number of callbacks run
        """
        if timestamp is not None:
            self._now = timestamp
        due = self._pending
        self._pending = {}
        for callback in due.values():
            callback(self._now)
        return len(due)

    def advance(self, milliseconds: float) -> int:
        """Moves time forward and runs one refresh.

        :param milliseconds: Time since the previous refresh
        :return: Number of callbacks run
        """
        return self.tick(self._now + milliseconds)

    def run(self, refreshes: int, interval: float) -> None:
        """Runs several refreshes spaced interval milliseconds apart."""
        for _ in range(refreshes):
            self.advance(interval)


class ThreadScheduler(FrameScheduler):
    """Scheduler using wall-clock timer threads.

    Callbacks run in background threads, refresh_rate times per second.
    """

    def __init__(self, refresh_rate: float | None = None) -> None:
        """
        :param refresh_rate: Refreshes per second, settings.REFRESH_RATE by
            default
        """
        self._interval = 1.0 / (refresh_rate or settings.REFRESH_RATE)

    def request_frame(self, callback: FrameCallback) -> threading.Timer:
        timer = threading.Timer(self._interval, lambda: callback(self.now()))
        timer.daemon = True
        timer.start()
        return timer

    def cancel_frame(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()

    def now(self) -> float:
        return time.perf_counter() * 1000.0


class AsyncioScheduler(FrameScheduler):
    """Scheduler running callbacks on an asyncio event loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        refresh_rate: float | None = None,
    ) -> None:
        """
        :param loop: The event loop, the running loop by default
        :param refresh_rate: Refreshes per second, settings.REFRESH_RATE by
            default
        """
        self._loop = loop or asyncio.get_running_loop()
        self._interval = 1.0 / (refresh_rate or settings.REFRESH_RATE)

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        return self._loop.call_later(self._interval, lambda: callback(self.now()))

    def cancel_frame(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()

    def now(self) -> float:
        return self._loop.time() * 1000.0


__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "ManualScheduler",
    "ThreadScheduler",
    "AsyncioScheduler",
]
