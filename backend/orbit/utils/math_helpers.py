"""Math helpers — clamping, blends, moving averages. No engine imports."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a scalar into [lo, hi]."""
    return max(lo, min(hi, value))


def linear_ramp(count: int, top: float = 10.0) -> NDArray[np.float64]:
    """``count`` values falling linearly from ``top`` to 0. A single value is ``top``."""
    if count <= 0:
        return np.empty(0)
    if count == 1:
        return np.array([top])
    return top * (count - 1 - np.arange(count)) / (count - 1)


def blend(
    current: Sequence[float], previous: Sequence[float], alpha: float
) -> NDArray[np.float64]:
    """alpha * current + (1 - alpha) * previous, index by index.

    Indices that ``previous`` does not cover keep their current value.
    """
    cur = np.asarray(current, dtype=np.float64)
    out = cur.copy()
    n = min(len(cur), len(previous))
    if n:
        prev = np.asarray(previous[:n], dtype=np.float64)
        out[:n] = alpha * cur[:n] + (1.0 - alpha) * prev
    return out


def interior_moving_average(
    values: Sequence[float], alpha: float, lo: float = 0.0, hi: float = 10.0
) -> NDArray[np.float64]:
    """Smooth interior points toward their neighbours' mean; endpoints untouched.

    smoothed[i] = alpha * v[i] + (1 - alpha) * (v[i-1] + v[i+1]) / 2, clipped to [lo, hi].
    """
    arr = np.asarray(values, dtype=np.float64)
    if len(arr) <= 2:
        return arr.copy()
    out = arr.copy()
    neighbours = (arr[:-2] + arr[2:]) / 2.0
    out[1:-1] = np.clip(alpha * arr[1:-1] + (1.0 - alpha) * neighbours, lo, hi)
    return out
