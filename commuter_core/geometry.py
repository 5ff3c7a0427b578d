"""
Geometry helpers shared by the generator, simulation and controller.

Points are anything exposing ``x`` and ``y`` attributes or plain ``(x, y)``
tuples.
"""

from __future__ import annotations

import math
from typing import Any, Tuple


def _xy(p: Any) -> Tuple[float, float]:
    if isinstance(p, tuple):
        return float(p[0]), float(p[1])
    return float(p.x), float(p.y)


def distance(a: Any, b: Any) -> float:
    """Euclidean distance between two points."""
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return math.hypot(ax - bx, ay - by)


def lerp(a: float, b: float, t: float) -> float:
    """Linear blend from ``a`` to ``b``; ``t`` is not clamped."""
    return a + (b - a) * t


def lerp_point(start: Any, end: Any, t: float) -> Tuple[float, float]:
    """Linear blend between two points."""
    sx, sy = _xy(start)
    ex, ey = _xy(end)
    return lerp(sx, ex, t), lerp(sy, ey, t)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
