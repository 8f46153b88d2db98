"""
Pytest fixtures for IconMatrix tests
"""

import pytest

from iconmatrix import Animation, Frame
from iconmatrix.playback import ManualScheduler
from iconmatrix.samples import SAMPLES_DIR


@pytest.fixture
def blank_frame() -> Frame:
    """
    Returns an empty 9x9 frame.
    :return: The frame
    """
    return Frame.empty(9, 9)


@pytest.fixture
def lit_frame() -> Frame:
    """
    Returns a fully lit 9x9 frame.
    :return: The frame
    """
    return Frame.empty(9, 9).filled(1.0)


@pytest.fixture
def ring_frame() -> Frame:
    """
    Returns a 5x5 frame with a lit ring around an unlit center cell.
    :return: The frame
    """
    return Frame([
        [0, 0, 0, 0, 0],
        [0, 1, 1, 1, 0],
        [0, 1, 0, 1, 0],
        [0, 1, 1, 1, 0],
        [0, 0, 0, 0, 0],
    ])


@pytest.fixture
def three_frames() -> Animation:
    """
    Returns a 3 frame 2x2 animation with the values 0, 0.5 and 1.
    :return: The animation
    """
    return Animation([Frame.empty(2, 2).filled(v) for v in (0.0, 0.5, 1.0)])


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture(scope="module")
def square_svg() -> str:
    """
    Returns the square sample icon.
    :return: The SVG source
    """
    return (SAMPLES_DIR / "icons" / "square.svg").read_text(encoding="utf-8")
