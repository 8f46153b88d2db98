# IconMatrix - Tweening
"""
Generates in-between frames for two keyframes.

Interpolation is a per-cell value lerp reparameterized by an easing curve.
It does not morph shapes: a lit cell fades out while another fades in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .easing import EasingFunction, TweenEasing, get_easing
from .errors import DimensionMismatchError
from .frame import Frame


@dataclass(frozen=True)
class TweenResult:
    """Tween frames generated between two frames of a sequence.

    :ivar frames: The generated frames, nearest to the start keyframe first
    :ivar insert_index: Where the frames belong in the source sequence
    """

    frames: list[Frame]
    insert_index: int


def interpolate_frames(
    from_frame: Frame,
    to_frame: Frame,
    count: int,
    easing: EasingFunction,
) -> list[Frame]:
    """
    Interpolates count frames between two frames of identical size.

    Step i (1..count) uses t = easing(i / (count + 1)), so neither endpoint is
    ever reproduced.

    :param from_frame: The start keyframe
    :param to_frame: The end keyframe
    :param count: Number of frames to generate, at least 1
    :param easing: The easing function
    :return: Newly allocated frames, ordered from start to end
    """
    if from_frame.shape != to_frame.shape:
        raise DimensionMismatchError(
            f"Cannot tween {from_frame.rows}x{from_frame.cols} "
            f"to {to_frame.rows}x{to_frame.cols}"
        )
    if count < 1:
        raise ValueError(f"Tween count must be at least 1, got {count}")

    start = from_frame.pixels
    delta = to_frame.pixels - start
    frames = []
    for i in range(1, count + 1):
        t = easing(i / (count + 1))
        frames.append(Frame(np.clip(start + delta * t, 0.0, 1.0)))
    return frames


def generate_tween(
    from_frame: Frame,
    to_frame: Frame,
    count: int,
    easing: TweenEasing | str = TweenEasing.LINEAR,
) -> list[Frame]:
    """
    Generates count tween frames using a named easing curve.

    :param from_frame: The start keyframe
    :param to_frame: The end keyframe
    :param count: Number of frames to generate, at least 1
    :param easing: The easing identifier
    :return: The tween frames
    """
    return interpolate_frames(from_frame, to_frame, count, get_easing(easing))


def generate_tween_frames(
    frames: Sequence[Frame],
    from_index: int,
    to_index: int,
    count: int,
    easing: TweenEasing | str,
) -> TweenResult:
    """
    Generates tween frames between two frames of a sequence.

    :param frames: The frame sequence
    :param from_index: Index of the start keyframe
    :param to_index: Index of the end keyframe
    :param count: Number of frames to generate
    :param easing: The easing identifier
    :return: The frames and the index directly after the start keyframe
    """
    tweened = generate_tween(frames[from_index], frames[to_index], count, easing)
    return TweenResult(frames=tweened, insert_index=from_index + 1)


__all__ = [
    "TweenResult",
    "interpolate_frames",
    "generate_tween",
    "generate_tween_frames",
]
