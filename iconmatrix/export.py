# IconMatrix - Export
"""
Text exports of frames: source code literals and an SVG rendering.

The palette is an opaque pair of display colors which is written into the
output verbatim. It takes no part in any computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .frame import Frame

OFF_THRESHOLD = 0.05
"Cells at or below this brightness are drawn with the off color"


@dataclass(frozen=True)
class Palette:
    """Display colors for lit and unlit cells, e.g. CSS color strings."""

    on: str = "hsl(200, 100%, 50%)"
    off: str = "hsl(200, 20%, 20%)"


def format_value(value: float) -> str:
    """Formats a brightness with two decimals and without trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


def format_frame(frame: Frame) -> str:
    """Formats a frame as a nested list literal, one row per line."""
    rows = [f"  [{', '.join(format_value(v) for v in row)}]" for row in frame]
    return "[\n" + ",\n".join(rows) + "\n]"


def format_frames(frames: Sequence[Frame]) -> str:
    """Formats a sequence of frames as a nested list literal."""
    blocks = [
        "\n".join("  " + line for line in format_frame(frame).split("\n"))
        for frame in frames
    ]
    return "[\n" + ",\n".join(blocks) + "\n]"


def generate_pattern_code(frame: Frame, name: str = "PATTERN") -> str:
    """Generates a Python assignment of a single frame."""
    return f"{name} = {format_frame(frame)}\n"


def generate_frames_code(frames: Sequence[Frame], name: str = "FRAMES") -> str:
    """Generates a Python assignment of a frame sequence."""
    return f"{name} = {format_frames(frames)}\n"


def frame_to_svg(
    frame: Frame,
    palette: Palette | None = None,
    size: int = 10,
    gap: int = 2,
) -> str:
    """
    Renders a frame as an SVG document with one circle per cell.

    :param frame: The frame
    :param palette: The display colors
    :param size: Cell diameter in pixels
    :param gap: Spacing between cells in pixels
    :return: The SVG document
    """
    palette = palette or Palette()
    width = frame.cols * (size + gap) - gap
    height = frame.rows * (size + gap) - gap
    radius = format_value(size / 2 * 0.9)

    circles = []
    for r, row in enumerate(frame):
        for c, value in enumerate(row):
            x = c * (size + gap) + size / 2
            y = r * (size + gap) + size / 2
            lit = value > OFF_THRESHOLD
            color = palette.on if lit else palette.off
            opacity = value if lit else 0.1
            circles.append(
                f'  <circle cx="{x:g}" cy="{y:g}" r="{radius}" fill="{color}" '
                f'opacity="{format_value(opacity)}" />\n'
            )

    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg">\n'
        f"{''.join(circles)}</svg>"
    )


__all__ = [
    "Palette",
    "OFF_THRESHOLD",
    "format_value",
    "format_frame",
    "format_frames",
    "generate_pattern_code",
    "generate_frames_code",
    "frame_to_svg",
]
