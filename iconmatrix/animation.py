# IconMatrix - Animation
"""
Animation class holding an ordered, non-empty sequence of same-sized frames.

Like :class:`~iconmatrix.frame.Frame` an Animation is immutable; every edit
returns a new Animation. The index of the frame currently shown is not part
of the animation, it belongs to the editor or to a playback clock.
"""

from __future__ import annotations

from typing import Iterable, Iterator, overload

from .config import settings
from .easing import TweenEasing
from .errors import DimensionMismatchError
from .frame import Frame
from .tween import generate_tween_frames


class Animation:
    """An ordered, non-empty sequence of frames sharing one size."""

    __slots__ = ("_frames",)

    def __init__(self, frames: Iterable[Frame]):
        """
        :param frames: The frames, at least one

        Raises a ValueError if no frames are passed and a
        DimensionMismatchError if the frames differ in size
        """
        frames = tuple(frames)
        if not frames:
            raise ValueError("An animation requires at least one frame")
        shape = frames[0].shape
        for index, frame in enumerate(frames):
            if frame.shape != shape:
                raise DimensionMismatchError(
                    f"Frame {index} is {frame.rows}x{frame.cols}, "
                    f"expected {shape[0]}x{shape[1]}"
                )
        self._frames = frames

    @classmethod
    def blank(cls, rows: int, cols: int) -> Animation:
        """Creates an animation consisting of a single empty frame."""
        return cls([Frame.empty(rows, cols)])

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    @property
    def frames(self) -> tuple[Frame, ...]:
        """The frames in playback order."""
        return self._frames

    @property
    def rows(self) -> int:
        return self._frames[0].rows

    @property
    def cols(self) -> int:
        return self._frames[0].cols

    def __len__(self) -> int:
        return len(self._frames)

    @overload
    def __getitem__(self, index: int) -> Frame: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Frame, ...]: ...

    def __getitem__(self, index):
        return self._frames[index]

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Animation):
            return NotImplemented
        return self._frames == other._frames

    def __hash__(self) -> int:
        return hash(self._frames)

    def __repr__(self) -> str:
        return f"Animation({len(self)} frames, {self.rows}x{self.cols})"

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def insert_frame(self, index: int, frame: Frame) -> Animation:
        """Returns a copy with frame inserted before index."""
        frames = list(self._frames)
        frames.insert(index, frame)
        return Animation(frames)

    def add_empty_frame(self, after: int) -> Animation:
        """Returns a copy with an empty frame inserted after the given index."""
        return self.insert_frame(after + 1, Frame.empty(self.rows, self.cols))

    def duplicate_frame(self, index: int) -> Animation:
        """Returns a copy with frame index duplicated directly after itself."""
        return self.insert_frame(index + 1, self._frames[index].copy())

    def delete_frame(self, index: int) -> Animation:
        """
        Returns a copy without frame index.

        The last remaining frame can not be deleted, in this case the
        animation is returned unchanged.
        """
        if len(self._frames) <= 1:
            return self
        return Animation(f for i, f in enumerate(self._frames) if i != index)

    def replace_frame(self, index: int, frame: Frame) -> Animation:
        """Returns a copy with frame index replaced."""
        frames = list(self._frames)
        frames[index] = frame
        return Animation(frames)

    def reorder(self, from_index: int, to_index: int) -> Animation:
        """Returns a copy with the frame at from_index moved to to_index."""
        if from_index == to_index:
            return self
        frames = list(self._frames)
        moved = frames.pop(from_index)
        frames.insert(to_index, moved)
        return Animation(frames)

    def resized(self, rows: int, cols: int) -> Animation:
        """Returns a copy with every frame padded or truncated to rows x cols."""
        return Animation(frame.resized(rows, cols) for frame in self._frames)

    def with_tween(
        self,
        from_index: int,
        to_index: int,
        count: int,
        easing: TweenEasing | str = TweenEasing.SMOOTHSTEP,
    ) -> Animation:
        """
        Returns a copy with tween frames generated between two keyframes.

        Frames strictly between the keyframes are replaced by the tween. The
        count is capped at ``settings.MAX_TWEEN_FRAMES``. Requests with
        from_index >= to_index or count <= 0 return the animation unchanged.

        :param from_index: Index of the start keyframe
        :param to_index: Index of the end keyframe
        :param count: Number of frames to generate
        :param easing: The easing identifier
        :return: The new animation
        """
        if from_index >= to_index or count <= 0:
            return self
        result = generate_tween_frames(
            self._frames,
            from_index,
            to_index,
            min(count, settings.MAX_TWEEN_FRAMES),
            easing,
        )
        frames = list(self._frames)
        frames[result.insert_index:to_index] = result.frames
        return Animation(frames)


__all__ = ["Animation"]
