# IconMatrix - Patterns
"""Procedurally generated frames."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .frame import Frame, clamp01


def vu_meter(columns: int, levels: Sequence[float], rows: int = 7) -> Frame:
    """
    Creates a VU meter frame with one bar per column.

    Each bar is lit from the bottom up to floor(level * rows) cells. Cells in
    the top 30% of the rows are drawn at full brightness, cells up to 60% at
    0.8 and the rest at 0.6.

    :param columns: Number of columns
    :param levels: Level per column in [0, 1], missing levels are 0
    :param rows: Number of rows
    :return: The frame
    """
    pixels = np.zeros((rows, columns), dtype=np.float64)
    for col in range(min(columns, len(levels))):
        height = math.floor(clamp01(levels[col]) * rows)
        for row in range(rows):
            if rows - 1 - row >= height:
                continue
            if row < rows * 0.3:
                pixels[row, col] = 1.0
            elif row < rows * 0.6:
                pixels[row, col] = 0.8
            else:
                pixels[row, col] = 0.6
    return Frame(pixels)


__all__ = ["vu_meter"]
