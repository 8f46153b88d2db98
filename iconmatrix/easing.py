# IconMatrix - Easing
"""
Easing curves used to pace frame interpolation.

Each curve maps normalized time t in [0, 1] to normalized progress with
f(0) = 0 and f(1) = 1. Curves are selected through :class:`TweenEasing`; the
table below is closed, adding a curve means adding an enum member and a row.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

EasingFunction = Callable[[float], float]


class TweenEasing(str, Enum):
    """Identifiers of the available easing curves."""

    LINEAR = "linear"
    EASE_IN = "easeIn"
    EASE_OUT = "easeOut"
    EASE_IN_OUT = "easeInOut"
    SMOOTHSTEP = "smoothstep"


def _clamp(t: float) -> float:
    return max(0.0, min(1.0, t))


def linear(t: float) -> float:
    """No easing, constant velocity."""
    return _clamp(t)


def ease_in(t: float) -> float:
    """Quadratic ease in, accelerating from zero."""
    t = _clamp(t)
    return t * t


def ease_out(t: float) -> float:
    """Quadratic ease out, decelerating to zero."""
    t = _clamp(t)
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    """Quadratic ease in/out, accelerating until halfway, then decelerating."""
    t = _clamp(t)
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def smoothstep(t: float) -> float:
    """Hermite smoothstep."""
    t = _clamp(t)
    return t * t * (3 - 2 * t)


EASING_FUNCTIONS: dict[TweenEasing, EasingFunction] = {
    TweenEasing.LINEAR: linear,
    TweenEasing.EASE_IN: ease_in,
    TweenEasing.EASE_OUT: ease_out,
    TweenEasing.EASE_IN_OUT: ease_in_out,
    TweenEasing.SMOOTHSTEP: smoothstep,
}


def get_easing(name: TweenEasing | str) -> EasingFunction:
    """
    Get an easing function by identifier.

    :param name: A TweenEasing member or its value, e.g. 'easeInOut'
    :return: The easing function

    Raises a ValueError if the name is unknown
    """
    try:
        easing = TweenEasing(name)
    except ValueError:
        available = ", ".join(e.value for e in TweenEasing)
        raise ValueError(f"Unknown easing '{name}'. Available: {available}") from None
    return EASING_FUNCTIONS[easing]


__all__ = [
    "EasingFunction",
    "TweenEasing",
    "linear",
    "ease_in",
    "ease_out",
    "ease_in_out",
    "smoothstep",
    "EASING_FUNCTIONS",
    "get_easing",
]
