# IconMatrix - Sample Icons
"""
Sample stroke icons for demos and testing.

The icons are 24x24 stroke drawings in the style of common open icon sets.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iconmatrix.frame import Frame
    from iconmatrix.rasterize import RasterizeOptions

# Base path for sample icons
SAMPLES_DIR = Path(__file__).parent


def list_icons() -> list[str]:
    """List all available sample icons.

    Returns:
        List of icon names that can be loaded.
    """
    return sorted(path.stem for path in (SAMPLES_DIR / 'icons').glob('*.svg'))


def load_svg(name: str) -> str:
    """Load the SVG source of a sample icon.

    Args:
        name: Icon name (see list_icons())

    Returns:
        The SVG document

    Example:
        from iconmatrix.samples import load_svg
        svg = load_svg('heart')
    """
    name = name.lower()
    path = SAMPLES_DIR / 'icons' / f'{name}.svg'
    if not path.exists():
        available = ', '.join(list_icons())
        raise ValueError(f"Unknown sample: {name}. Available: {available}")
    return path.read_text(encoding='utf-8')


def load_matrix(
    name: str,
    size: int = 9,
    options: 'RasterizeOptions | None' = None,
) -> 'Frame':
    """Load a sample icon converted to a size x size frame."""
    from iconmatrix.rasterize import icon_to_matrix
    return icon_to_matrix(load_svg(name), size, options)


__all__ = ['SAMPLES_DIR', 'list_icons', 'load_svg', 'load_matrix']
