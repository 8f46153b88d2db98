"""Playback clock advancing the frame index of an animation.

The clock accumulates the wall-clock time between scheduler refreshes. Once
the accumulated time reaches one frame interval (1000 / fps ms) the index
advances by exactly one step and only the surplus is carried forward, so
irregular refresh timing does not make the frame rate drift.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from functools import partial
from typing import Any, Callable, Sized

from ..config import settings
from .scheduler import FrameScheduler

logger = logging.getLogger(__name__)

FrameIndexCallback = Callable[[int], None]


class PlaybackState(Enum):
    """Lifecycle states of a playback clock."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class PlaybackClock:
    """Frame-accurate timer for animation playback.

    The clock only tracks an index; renderers read :attr:`current_index` to
    pick the frame to display and may register ``on_frame`` to be told about
    every index change.

    Example:
        clock = PlaybackClock(ThreadScheduler(), animation, fps=12, loop=True)
        clock.start()
        ...
        frame = animation[clock.current_index]
        ...
        clock.close()

    Attributes:
        _state: Current PlaybackState
        _index: Index of the frame currently shown
        _accumulated: Milliseconds collected towards the next step
        _last_time: Timestamp of the previous refresh, None before the first
        _handle: Pending scheduler handle, None if nothing is scheduled
        _generation: Incremented whenever scheduling is cancelled so that
            callbacks already in flight are ignored
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        frames: Sized | None = None,
        fps: float = settings.DEFAULT_FPS,
        loop: bool = True,
        autoplay: bool = False,
        on_frame: FrameIndexCallback | None = None,
    ) -> None:
        """
        :param scheduler: The refresh scheduler
        :param frames: The frame sequence (only its length is used)
        :param fps: Frames per second, clamped to [MIN_FPS, MAX_FPS]
        :param loop: Wrap to the first frame at the end instead of stopping
        :param autoplay: Start running as soon as a non-empty sequence is set
        :param on_frame: Called with the new index on every advance
        """
        self._scheduler = scheduler
        self._frame_count = len(frames) if frames is not None else 0
        self._fps = self._clamp_fps(fps)
        self._loop = loop
        self._autoplay = autoplay
        self._on_frame = on_frame

        self._lock = threading.RLock()
        self._state = PlaybackState.STOPPED
        self._index = 0
        self._accumulated = 0.0
        self._last_time: float | None = None
        self._handle: Any = None
        self._generation = 0
        self._completed = False

        if self._autoplay:
            self.start()

    @staticmethod
    def _clamp_fps(fps: float) -> float:
        return max(settings.MIN_FPS, min(settings.MAX_FPS, fps))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """Starts playback from the current index.

        A clock which stopped at the end of a non-looping sequence starts
        over at frame 0.

        :return: True if the clock is running afterwards
        """
        with self._lock:
            if self._state == PlaybackState.RUNNING:
                return True
            if self._frame_count == 0:
                logger.debug("Playback not started: no frames")
                return False
            if self._completed:
                self._index = 0
                self._completed = False
            self._reset_timing()
            self._state = PlaybackState.RUNNING
            self._schedule()
            logger.debug("Playback started at frame %d, %s fps", self._index, self._fps)
            return True

    def stop(self) -> None:
        """Stops playback and cancels the pending refresh. The index is kept."""
        with self._lock:
            self._cancel()
            self._reset_timing()
            if self._state != PlaybackState.STOPPED:
                logger.debug("Playback stopped at frame %d", self._index)
            self._state = PlaybackState.STOPPED

    def pause(self) -> None:
        """Pauses a running clock, keeping index and accumulated time."""
        with self._lock:
            if self._state != PlaybackState.RUNNING:
                return
            self._cancel()
            self._state = PlaybackState.PAUSED

    def resume(self) -> None:
        """Resumes a paused clock. Time spent paused does not count."""
        with self._lock:
            if self._state != PlaybackState.PAUSED:
                return
            self._last_time = None
            self._state = PlaybackState.RUNNING
            self._schedule()

    def toggle_pause(self) -> None:
        """Toggle between paused and running state."""
        with self._lock:
            if self._state == PlaybackState.PAUSED:
                self.resume()
            else:
                self.pause()

    def set_frames(self, frames: Sized | None, autoplay: bool | None = None) -> None:
        """Replaces the frame sequence.

        Always rewinds to frame 0 and clears the accumulated time. The clock
        then runs if autoplay is enabled and the sequence is non-empty,
        otherwise it is stopped.

        :param frames: The new sequence
        :param autoplay: Overrides the autoplay policy given at construction
        """
        with self._lock:
            if autoplay is not None:
                self._autoplay = autoplay
            self._cancel()
            self._frame_count = len(frames) if frames is not None else 0
            self._index = 0
            self._completed = False
            self._reset_timing()
            self._state = PlaybackState.STOPPED
            if self._autoplay:
                self.start()

    def close(self) -> None:
        """Stops the clock and releases the frame callback."""
        self.stop()
        self._on_frame = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the clock is advancing frames."""
        return self._state == PlaybackState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state == PlaybackState.PAUSED

    @property
    def is_completed(self) -> bool:
        """Whether a non-looping sequence played to its end.

        Distinguishes natural completion from a user-initiated stop.
        """
        return self._completed

    @property
    def current_index(self) -> int:
        """Index of the frame to display."""
        return self._index

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def accumulated_time(self) -> float:
        """Milliseconds collected towards the next frame step."""
        return self._accumulated

    @property
    def fps(self) -> float:
        return self._fps

    @fps.setter
    def fps(self, value: float) -> None:
        """Changes the rate. Time accumulated at the old rate is discarded."""
        with self._lock:
            self._fps = self._clamp_fps(value)
            self._accumulated = 0.0

    @property
    def frame_interval(self) -> float:
        """Milliseconds per frame."""
        return 1000.0 / self._fps

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool) -> None:
        self._loop = value

    @property
    def on_frame(self) -> FrameIndexCallback | None:
        return self._on_frame

    @on_frame.setter
    def on_frame(self, callback: FrameIndexCallback | None) -> None:
        self._on_frame = callback

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _reset_timing(self) -> None:
        self._accumulated = 0.0
        self._last_time = None

    def _schedule(self) -> None:
        self._handle = self._scheduler.request_frame(
            partial(self._on_refresh, self._generation)
        )

    def _cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_refresh(self, generation: int, timestamp: float) -> None:
        """Scheduler callback, runs once per display refresh while running."""
        notify: int | None = None
        with self._lock:
            if generation != self._generation or self._state != PlaybackState.RUNNING:
                return
            self._handle = None

            if self._last_time is None:
                self._last_time = timestamp
            self._accumulated += timestamp - self._last_time
            self._last_time = timestamp

            if self._accumulated >= self.frame_interval:
                self._accumulated -= self.frame_interval
                notify = self._advance()

            if self._state == PlaybackState.RUNNING:
                self._schedule()
            callback = self._on_frame

        if notify is not None and callback is not None:
            callback(notify)

    def _advance(self) -> int | None:
        """Moves one step forward.

        :return: The new index, or None if playback completed instead
        """
        next_index = self._index + 1
        if next_index >= self._frame_count:
            if self._loop:
                self._index = 0
                return 0
            self._state = PlaybackState.STOPPED
            self._completed = True
            self._reset_timing()
            logger.debug("Playback completed at frame %d", self._index)
            return None
        self._index = next_index
        return next_index


__all__ = ["PlaybackClock", "PlaybackState", "FrameIndexCallback"]
