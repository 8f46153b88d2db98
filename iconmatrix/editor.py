# IconMatrix - Editor state
"""
Explicit editor state with pure reducer methods.

:class:`EditorState` holds everything an editing surface needs: the
animation, the current frame, playback settings, the active tool, the tween
selection, onion skin settings and the undo history. It is immutable; each
method returns a new state and leaves the original untouched. Notifying
views about changes is up to the UI layer embedding the state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Sequence

from .animation import Animation
from .config import settings
from .easing import TweenEasing
from .export import Palette
from .fill import flood_fill
from .frame import Frame, PixelUpdate, clamp01


class Tool(str, Enum):
    """Drawing tools of the editing surface."""

    BRUSH = "brush"
    ERASER = "eraser"
    FILL = "fill"


class OnionSkinMode(str, Enum):
    """Which neighbour frames are overlaid while editing."""

    PREVIOUS = "previous"
    NEXT = "next"
    BOTH = "both"


@dataclass(frozen=True)
class OnionSkinLayer:
    """A neighbour frame drawn translucently behind the current frame."""

    frame: Frame
    opacity: float  # 0..1
    kind: str  # 'previous' or 'next'


@dataclass(frozen=True)
class History:
    """Bounded undo and redo stacks of animation snapshots.

    :ivar past: Snapshots restored by undo, oldest first
    :ivar future: Snapshots restored by redo, next first
    """

    past: tuple[Animation, ...] = ()
    future: tuple[Animation, ...] = ()

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def push(self, animation: Animation, limit: int | None = None) -> History:
        """Saves a snapshot and discards the redo stack."""
        limit = settings.HISTORY_LIMIT if limit is None else limit
        if limit <= 0:
            return History((), ())
        return History((self.past + (animation,))[-limit:], ())

    def undo(self, current: Animation) -> tuple[Animation, History]:
        """Returns the snapshot to restore and the history after restoring it."""
        return self.past[-1], History(self.past[:-1], (current,) + self.future)

    def redo(self, current: Animation) -> tuple[Animation, History]:
        return self.future[0], History(self.past + (current,), self.future[1:])


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _default_animation() -> Animation:
    return Animation.blank(settings.DEFAULT_GRID_SIZE, settings.DEFAULT_GRID_SIZE)


@dataclass(frozen=True)
class EditorState:
    """Complete state of a matrix editor."""

    # Animation
    animation: Animation = field(default_factory=_default_animation)
    current_frame_index: int = 0
    fps: int = settings.DEFAULT_FPS
    is_playing: bool = False
    is_paused: bool = False
    loop: bool = True

    # Editing
    palette: Palette = field(default_factory=Palette)
    tool: Tool = Tool.BRUSH
    brush_brightness: float = 1.0

    # Onion skin, opacities in percent
    onion_skin_enabled: bool = False
    onion_skin_previous_opacity: float = 30
    onion_skin_next_opacity: float = 15
    onion_skin_mode: OnionSkinMode = OnionSkinMode.BOTH

    # Tween selection
    selected_frame_indices: tuple[int, ...] = ()
    tween_easing: TweenEasing = TweenEasing.SMOOTHSTEP

    history: History = field(default_factory=History)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def current_frame(self) -> Frame:
        return self.animation[self.current_frame_index]

    @property
    def grid_size(self) -> tuple[int, int]:
        """(rows, cols)"""
        return self.animation.rows, self.animation.cols

    @property
    def onion_skin_layers(self) -> list[OnionSkinLayer]:
        """The neighbour frames to overlay, empty if onion skin is disabled."""
        if not self.onion_skin_enabled:
            return []
        layers = []
        index = self.current_frame_index
        if self.onion_skin_mode in (OnionSkinMode.PREVIOUS, OnionSkinMode.BOTH) and index > 0:
            layers.append(
                OnionSkinLayer(
                    self.animation[index - 1],
                    self.onion_skin_previous_opacity / 100,
                    "previous",
                )
            )
        if (
            self.onion_skin_mode in (OnionSkinMode.NEXT, OnionSkinMode.BOTH)
            and index < len(self.animation) - 1
        ):
            layers.append(
                OnionSkinLayer(
                    self.animation[index + 1],
                    self.onion_skin_next_opacity / 100,
                    "next",
                )
            )
        return layers

    def _with_current_frame(self, frame: Frame) -> EditorState:
        return replace(
            self,
            animation=self.animation.replace_frame(self.current_frame_index, frame),
        )

    def _with_animation(self, animation: Animation, **changes) -> EditorState:
        index = changes.pop("current_frame_index", self.current_frame_index)
        index = int(_clamp(index, 0, len(animation) - 1))
        return replace(self, animation=animation, current_frame_index=index, **changes)

    # -------------------------------------------------------------------------
    # Animation
    # -------------------------------------------------------------------------

    def set_current_frame_index(self, index: int) -> EditorState:
        return replace(
            self, current_frame_index=int(_clamp(index, 0, len(self.animation) - 1))
        )

    def set_fps(self, fps: int) -> EditorState:
        return replace(self, fps=int(_clamp(fps, settings.MIN_FPS, settings.EDITOR_MAX_FPS)))

    def toggle_playing(self) -> EditorState:
        """Starts or stops playback. A single frame is never played."""
        if len(self.animation) <= 1:
            return replace(self, is_playing=False)
        return replace(self, is_playing=not self.is_playing, is_paused=False)

    def set_paused(self, paused: bool) -> EditorState:
        return replace(self, is_paused=paused)

    def toggle_loop(self) -> EditorState:
        return replace(self, loop=not self.loop)

    def add_frame(self) -> EditorState:
        """Inserts an empty frame after the current one and selects it."""
        return self._with_animation(
            self.animation.add_empty_frame(self.current_frame_index),
            current_frame_index=self.current_frame_index + 1,
        )

    def duplicate_frame(self) -> EditorState:
        """Duplicates the current frame and selects the copy."""
        return self._with_animation(
            self.animation.duplicate_frame(self.current_frame_index),
            current_frame_index=self.current_frame_index + 1,
        )

    def delete_frame(self) -> EditorState:
        """Deletes the current frame unless it is the only one."""
        if len(self.animation) <= 1:
            return self
        return self._with_animation(
            self.animation.delete_frame(self.current_frame_index),
            current_frame_index=max(0, self.current_frame_index - 1),
        )

    def load_frames(self, frames: Sequence[Frame]) -> EditorState:
        """Replaces the animation, ignoring empty sequences."""
        if not frames:
            return self
        return self._with_animation(Animation(frames), current_frame_index=0)

    def load_pattern(self, pattern: Frame) -> EditorState:
        """Replaces the animation by a single frame."""
        return self._with_animation(Animation([pattern]), current_frame_index=0)

    def reorder_frames(self, from_index: int, to_index: int) -> EditorState:
        """Moves a frame, keeping the current frame selected."""
        if from_index == to_index:
            return self
        current = self.current_frame_index
        if current == from_index:
            current = to_index
        elif from_index < current <= to_index:
            current -= 1
        elif to_index <= current < from_index:
            current += 1
        return self._with_animation(
            self.animation.reorder(from_index, to_index),
            current_frame_index=current,
            selected_frame_indices=(),
        )

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def set_grid_size(self, rows: int, cols: int) -> EditorState:
        """Resizes all frames, padding with zeros or truncating."""
        return self._with_animation(self.animation.resized(rows, cols))

    def set_palette(self, palette: Palette) -> EditorState:
        return replace(self, palette=palette)

    def set_tool(self, tool: Tool | str) -> EditorState:
        return replace(self, tool=Tool(tool))

    def set_brush_brightness(self, brightness: float) -> EditorState:
        return replace(self, brush_brightness=clamp01(brightness))

    def set_pixel(self, row: int, col: int, value: float) -> EditorState:
        return self._with_current_frame(self.current_frame.with_pixel(row, col, value))

    def set_pixels_batch(self, updates: Iterable[PixelUpdate]) -> EditorState:
        """Applies updates to the current frame. Cells out of range are skipped."""
        return self._with_current_frame(self.current_frame.with_updates(updates))

    def apply_tool(self, row: int, col: int) -> EditorState:
        """Applies the active tool at a cell of the current frame.

        A fill is applied as one batch so it forms one undo step.
        """
        if self.tool == Tool.BRUSH:
            return self.set_pixel(row, col, self.brush_brightness)
        if self.tool == Tool.ERASER:
            return self.set_pixel(row, col, 0.0)
        updates = flood_fill(self.current_frame, row, col, self.brush_brightness)
        if not updates:
            return self
        return self.set_pixels_batch(updates)

    def clear_frame(self) -> EditorState:
        rows, cols = self.grid_size
        return self._with_current_frame(Frame.empty(rows, cols))

    def fill_frame(self) -> EditorState:
        return self._with_current_frame(self.current_frame.filled(self.brush_brightness))

    # -------------------------------------------------------------------------
    # Onion skin
    # -------------------------------------------------------------------------

    def set_onion_skin_enabled(self, enabled: bool) -> EditorState:
        return replace(self, onion_skin_enabled=enabled)

    def toggle_onion_skin(self) -> EditorState:
        return replace(self, onion_skin_enabled=not self.onion_skin_enabled)

    def set_onion_skin_opacity(self, previous: float, next: float) -> EditorState:
        return replace(
            self,
            onion_skin_previous_opacity=_clamp(previous, 0, 100),
            onion_skin_next_opacity=_clamp(next, 0, 100),
        )

    def set_onion_skin_mode(self, mode: OnionSkinMode | str) -> EditorState:
        return replace(self, onion_skin_mode=OnionSkinMode(mode))

    # -------------------------------------------------------------------------
    # Selection & tweening
    # -------------------------------------------------------------------------

    def select_frame(self, index: int) -> EditorState:
        return replace(self, selected_frame_indices=(index,))

    def toggle_frame_selection(self, index: int) -> EditorState:
        selected = self.selected_frame_indices
        if index in selected:
            selected = tuple(i for i in selected if i != index)
        else:
            selected = selected + (index,)
        return replace(self, selected_frame_indices=selected)

    def select_frame_range(self, from_index: int, to_index: int) -> EditorState:
        low, high = sorted((from_index, to_index))
        return replace(self, selected_frame_indices=tuple(range(low, high + 1)))

    def clear_selection(self) -> EditorState:
        return replace(self, selected_frame_indices=())

    def set_tween_easing(self, easing: TweenEasing | str) -> EditorState:
        return replace(self, tween_easing=TweenEasing(easing))

    def generate_tween(self, from_index: int, to_index: int, count: int) -> EditorState:
        """Replaces the frames between two keyframes by count tween frames.

        Uses the selected tween easing. Invalid requests leave the state
        unchanged.
        """
        if from_index >= to_index or count <= 0:
            return self
        return self._with_animation(
            self.animation.with_tween(from_index, to_index, count, self.tween_easing),
            selected_frame_indices=(),
        )

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def save_history(self) -> EditorState:
        """Saves the animation as an undo snapshot, e.g. before a stroke."""
        return replace(self, history=self.history.push(self.animation))

    def undo(self) -> EditorState:
        if not self.history.can_undo:
            return self
        animation, history = self.history.undo(self.animation)
        return self._with_animation(animation, history=history)

    def redo(self) -> EditorState:
        if not self.history.can_redo:
            return self
        animation, history = self.history.redo(self.animation)
        return self._with_animation(animation, history=history)


__all__ = [
    "Tool",
    "OnionSkinMode",
    "OnionSkinLayer",
    "History",
    "EditorState",
]
