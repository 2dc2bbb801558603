"""Leaf-node geometry helpers for the orbit viewport. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

TWO_PI = 2.0 * math.pi


def viewport_center(width: float, height: float) -> tuple[float, float]:
    """Center point of a width x height viewport."""
    return (width / 2.0, height / 2.0)


def is_degenerate(width: float, height: float) -> bool:
    """True when the viewport has no drawable area."""
    return width <= 0 or height <= 0


def usable_radius(width: float, height: float, padding: float) -> float:
    """Largest ring radius that keeps a padding margin inside the viewport."""
    cx, cy = viewport_center(width, height)
    return min(cx, cy) - padding


def polar_to_cartesian(
    center: tuple[float, float], radius: float, angle: float
) -> tuple[float, float]:
    """Point at ``angle`` radians on a circle of ``radius`` around ``center``."""
    cx, cy = center
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2π)."""
    return angle % TWO_PI


def even_angles(count: int, offset: float = 0.0) -> NDArray[np.float64]:
    """``count`` angles spaced 2π/count apart, starting at ``offset``, wrapped."""
    if count <= 0:
        return np.empty(0)
    step = TWO_PI / count
    return (np.arange(count) * step + offset) % TWO_PI


def in_bounds(x: float, y: float, width: float, height: float) -> bool:
    """Is (x, y) inside the closed viewport box?"""
    return 0.0 <= x <= width and 0.0 <= y <= height
