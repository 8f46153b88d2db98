"""IconMatrix playback package.

This package provides the animation playback clock and the schedulers that
drive it:

- PlaybackClock: Advances a frame index at a given fps with loop/no-loop
  semantics, pause/resume and an on_frame callback
- FrameScheduler: Abstract "run before next refresh" primitive
- ManualScheduler: Explicitly advanced scheduler for tests and headless use
- ThreadScheduler: Wall-clock timer threads
- AsyncioScheduler: asyncio event loop timers

Example:
    from iconmatrix.playback import PlaybackClock, ThreadScheduler

    clock = PlaybackClock(ThreadScheduler(), frames, fps=12, loop=False,
                          on_frame=lambda index: render(frames[index]))
    clock.start()
"""

from .clock import PlaybackClock, PlaybackState, FrameIndexCallback
from .scheduler import (
    FrameCallback,
    FrameScheduler,
    ManualScheduler,
    ThreadScheduler,
    AsyncioScheduler,
)

__all__ = [
    "PlaybackClock",
    "PlaybackState",
    "FrameIndexCallback",
    "FrameCallback",
    "FrameScheduler",
    "ManualScheduler",
    "ThreadScheduler",
    "AsyncioScheduler",
]
