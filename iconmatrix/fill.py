# IconMatrix - Flood fill
"""
Connected-region fill over a single frame.

The fill never touches the frame it is given. It returns the list of cell
updates, which the caller applies as one batch (one history entry per fill).
"""

from __future__ import annotations

from typing import Iterable

from .errors import OutOfBoundsError
from .frame import Frame, PixelUpdate, clamp01


def flood_fill(
    frame: Frame,
    start_row: int,
    start_col: int,
    fill_value: float,
) -> list[PixelUpdate]:
    """
    Computes a 4-connected flood fill starting at the given cell.

    A cell belongs to the region if its value exactly equals the start cell's
    value. Values which merely look alike, e.g. 0.5 and 0.5000001, form
    different regions.

    :param frame: The frame to fill
    :param start_row: Row of the start cell
    :param start_col: Column of the start cell
    :param fill_value: The value to paint, clamped to [0, 1]
    :return: One update per region cell, empty if the start cell already
        holds fill_value
    """
    if not frame.in_bounds(start_row, start_col):
        raise OutOfBoundsError(
            f"Fill start ({start_row}, {start_col}) outside of "
            f"{frame.rows}x{frame.cols} frame"
        )
    fill_value = clamp01(fill_value)
    pixels = frame.pixels
    target = pixels[start_row, start_col]
    if target == fill_value:
        return []

    rows, cols = frame.shape
    visited: set[tuple[int, int]] = set()
    updates: list[PixelUpdate] = []
    stack = [(start_row, start_col)]
    while stack:
        row, col = stack.pop()
        if (row, col) in visited:
            continue
        if row < 0 or row >= rows or col < 0 or col >= cols:
            continue
        if pixels[row, col] != target:
            continue
        visited.add((row, col))
        updates.append(PixelUpdate(row, col, fill_value))
        stack.extend(((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)))
    return updates


def apply_updates(frame: Frame, updates: Iterable[PixelUpdate]) -> Frame:
    """
    Applies a batch of updates, returning a new frame.

    Updates outside the frame are ignored.
    """
    return frame.with_updates(updates)


__all__ = ["flood_fill", "apply_updates"]
