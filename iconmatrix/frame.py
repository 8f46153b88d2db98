# IconMatrix - Frame
"""
Implements the class :class:`.Frame`, a rectangular grid of brightness values
in the range [0, 1], and the helpers to create, copy and resize frames.

Frames are immutable values. Every operation which "modifies" a frame returns
a new instance, so callers may keep references to older frames (e.g. for
undo) without copying them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Union

import numpy as np

FrameSourceTypes = Union["Frame", np.ndarray, Sequence[Sequence[float]]]
"The valid source types for creating a frame"

DEFAULT_TOLERANCE = 0.001
"Tolerance used when comparing frames for visual equality"


def clamp01(value: float) -> float:
    """Clamps a value to the range [0, 1]."""
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class PixelUpdate:
    """A single cell assignment, e.g. produced by a flood fill."""

    row: int
    col: int
    value: float


class Frame:
    """
    A rows x cols grid of brightness values (0 = off, 1 = fully lit).

    The values are stored in a read-only numpy float64 array. Values passed in
    are clamped to [0, 1].
    """

    __slots__ = ("_pixels",)

    def __init__(self, source: FrameSourceTypes):
        """
        :param source: Another frame, a 2D numpy array or a list of rows

        Raises a ValueError if the source is not a non-empty rectangular grid
        """
        if isinstance(source, Frame):
            pixels = source._pixels.copy()
        elif isinstance(source, np.ndarray):
            pixels = np.array(source, dtype=np.float64)
        else:
            rows = [list(row) for row in source]
            if rows and any(len(row) != len(rows[0]) for row in rows):
                raise ValueError("All rows of a frame must have the same length")
            pixels = np.array(rows, dtype=np.float64)
        if pixels.ndim != 2 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(
                f"A frame requires a non-empty 2D grid, got shape {pixels.shape}"
            )
        np.clip(pixels, 0.0, 1.0, out=pixels)
        pixels.flags.writeable = False
        self._pixels = pixels

    @classmethod
    def empty(cls, rows: int, cols: int) -> Frame:
        """
        Creates a frame with all cells switched off.

        :param rows: The number of rows
        :param cols: The number of columns
        :return: The new frame
        """
        return cls(np.zeros((rows, cols), dtype=np.float64))

    @classmethod
    def from_list(cls, rows: Sequence[Sequence[float]]) -> Frame:
        """Creates a frame from a list of rows."""
        return cls(rows)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        """The number of rows."""
        return self._pixels.shape[0]

    @property
    def cols(self) -> int:
        """The number of columns."""
        return self._pixels.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)"""
        return self._pixels.shape[0], self._pixels.shape[1]

    @property
    def pixels(self) -> np.ndarray:
        """The read-only brightness array of shape (rows, cols)."""
        return self._pixels

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        """Whether the given cell lies inside the frame."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int, default: float = 0.0) -> float:
        """
        Returns the value of a cell or the default if it is out of range.

        :param row: The row
        :param col: The column
        :param default: The value for cells outside the frame
        :return: The brightness
        """
        if not self.in_bounds(row, col):
            return default
        return float(self._pixels[row, col])

    def __getitem__(self, item: tuple[int, int]) -> float:
        row, col = item
        return float(self._pixels[row, col])

    def __iter__(self) -> Iterator[list[float]]:
        for row in self._pixels:
            yield row.tolist()

    def to_list(self) -> list[list[float]]:
        """Returns the frame as a list of rows."""
        return self._pixels.tolist()

    # -------------------------------------------------------------------------
    # Derived frames
    # -------------------------------------------------------------------------

    def copy(self) -> Frame:
        """Returns a deep, independent copy of this frame."""
        return Frame(self)

    def with_pixel(self, row: int, col: int, value: float) -> Frame:
        """
        Returns a copy with a single cell changed.

        Raises an IndexError if the cell is outside the frame.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside of {self.rows}x{self.cols}")
        pixels = self._pixels.copy()
        pixels[row, col] = value
        return Frame(pixels)

    def with_updates(self, updates: Iterable[PixelUpdate]) -> Frame:
        """
        Returns a copy with all updates applied as a single batch.

        Updates addressing cells outside the frame are skipped.

        :param updates: The cell assignments
        :return: The new frame
        """
        pixels = self._pixels.copy()
        for update in updates:
            if self.in_bounds(update.row, update.col):
                pixels[update.row, update.col] = update.value
        return Frame(pixels)

    def filled(self, value: float) -> Frame:
        """Returns a frame of the same size with every cell set to value."""
        return Frame(np.full(self.shape, value, dtype=np.float64))

    def resized(self, rows: int, cols: int) -> Frame:
        """
        Returns a frame of the new size, padded with zeros or truncated.

        :param rows: The new row count
        :param cols: The new column count
        :return: The resized frame
        """
        pixels = np.zeros((rows, cols), dtype=np.float64)
        keep_rows = min(rows, self.rows)
        keep_cols = min(cols, self.cols)
        pixels[:keep_rows, :keep_cols] = self._pixels[:keep_rows, :keep_cols]
        return Frame(pixels)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def is_close(self, other: Frame, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """
        Whether both frames have the same size and every cell differs by at
        most the tolerance.
        """
        if self.shape != other.shape:
            return False
        return bool(np.all(np.abs(self._pixels - other._pixels) <= tolerance))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    def __hash__(self) -> int:
        return hash((self.shape, self._pixels.tobytes()))

    def __repr__(self) -> str:
        return f"Frame({self.rows}x{self.cols})"


def empty_frame(rows: int, cols: int) -> Frame:
    """Creates a frame of the given size with all cells off."""
    return Frame.empty(rows, cols)


def clone_frame(frame: Frame) -> Frame:
    """Creates a deep copy of a frame, sharing no storage with the original."""
    return frame.copy()


def resize_frame(frame: Frame, rows: int, cols: int) -> Frame:
    """
    Resizes a frame, padding new cells with zeros and dropping cells outside
    the new size. Shrinking is lossy.
    """
    return frame.resized(rows, cols)


def frames_equal(a: Frame, b: Frame, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Tolerant frame comparison, see :meth:`Frame.is_close`."""
    return a.is_close(b, tolerance)


__all__ = [
    "Frame",
    "FrameSourceTypes",
    "PixelUpdate",
    "DEFAULT_TOLERANCE",
    "clamp01",
    "empty_frame",
    "clone_frame",
    "resize_frame",
    "frames_equal",
]
