"""Ring layout — turn closeness scores into concentric rings and friend positions.

Rings are fixed: 20 thresholds at 0.5 steps (0.5 … 10.0) and 20 radii that
grow from the innermost ring (closest friends) outward with a sub-linear
curve, so rings of close friends sit further apart than those of distant ones.
Thresholds are blended with the previous frame's to avoid jumps between
recomputations; ring assignment uses the fixed linear map instead.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Protocol

import numpy as np
from pydantic import BaseModel, Field

from orbit.engine.config import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from orbit.utils.geometry import (
    TWO_PI,
    even_angles,
    is_degenerate,
    normalize_angle,
    polar_to_cartesian,
    usable_radius,
    viewport_center,
)
from orbit.utils.math_helpers import blend, clamp

logger = logging.getLogger(__name__)


class Scored(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def closeness(self) -> float: ...


class RingLayout(BaseModel):
    radii: list[float] = Field(default_factory=list)
    thresholds: list[float] = Field(default_factory=list)

    @property
    def ring_count(self) -> int:
        return len(self.radii)


class FriendPosition(BaseModel):
    id: str
    x: float
    y: float
    ring: int
    angle: float  # radians, [0, 2π)


def raw_thresholds(config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> list[float]:
    """interval, 2·interval, …, ring_count·interval (0.5 … 10.0 by default)."""
    return [config.interval * (i + 1) for i in range(config.ring_count)]


def smooth_thresholds(
    thresholds: Sequence[float],
    previous: Sequence[float] | None,
    alpha: float = DEFAULT_LAYOUT_CONFIG.smoothing_alpha,
) -> list[float]:
    """Blend toward the previous frame: alpha·new + (1-alpha)·previous, per index."""
    if previous is None or len(previous) == 0:
        return list(thresholds)
    return [float(v) for v in blend(thresholds, previous, alpha)]


def ring_radii(
    count: int,
    width: float,
    height: float,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[float]:
    """min_r + (max_r - min_r) · (i / (count-1)) ** exponent for i in 0..count-1."""
    if count <= 0:
        return []
    min_r = config.min_radius
    # Tiny viewports collapse every ring onto the innermost radius
    max_r = max(usable_radius(width, height, config.padding), min_r)
    if count == 1:
        return [min_r]
    progress = np.arange(count) / (count - 1)
    return [float(r) for r in min_r + (max_r - min_r) * progress**config.radius_exponent]


def compute_rings(
    scores: Sequence[float],
    width: float,
    height: float,
    previous_thresholds: Sequence[float] | None = None,
    config: LayoutConfig | None = None,
) -> RingLayout:
    """Radii and thresholds for the current friend set and viewport."""
    cfg = config or DEFAULT_LAYOUT_CONFIG
    if len(scores) == 0:
        return RingLayout()
    if is_degenerate(width, height):
        logger.warning("Ring layout skipped: degenerate viewport %sx%s", width, height)
        return RingLayout()
    if len(scores) == 1:
        # A lone friend always sits on the innermost ring
        return RingLayout(
            radii=[cfg.single_ring_radius],
            thresholds=[cfg.single_ring_threshold],
        )

    thresholds = smooth_thresholds(
        raw_thresholds(cfg), previous_thresholds, cfg.smoothing_alpha
    )
    radii = ring_radii(cfg.ring_count, width, height, cfg)
    logger.debug(
        "Rings for %d scores in %sx%s: r=[%.1f..%.1f]",
        len(scores),
        width,
        height,
        radii[0],
        radii[-1],
    )
    return RingLayout(radii=radii, thresholds=thresholds)


def ring_index(
    closeness: float,
    ring_count: int = DEFAULT_LAYOUT_CONFIG.ring_count,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> int:
    """Closeness 10 → ring 0 (innermost), 0 → ring 19; one ring per 0.5 step."""
    steps = 1.0 / config.interval
    c = clamp(closeness, 0.0, 10.0)
    raw = math.floor(-steps * c + (config.ring_count - 1))
    return int(clamp(raw, 0, max(ring_count - 1, 0)))


def compute_friend_positions(
    friends: Sequence[Scored],
    layout: RingLayout,
    width: float,
    height: float,
    rng: np.random.Generator | None = None,
    config: LayoutConfig | None = None,
) -> list[FriendPosition]:
    """Place each friend on its ring.

    A ring's only occupant gets a random angle; several occupants are spaced
    evenly from a random starting angle. Positions come back in input order.
    """
    cfg = config or DEFAULT_LAYOUT_CONFIG
    if not friends or not layout.radii or is_degenerate(width, height):
        return []
    rng = rng or np.random.default_rng()
    center = viewport_center(width, height)

    by_ring: dict[int, list[int]] = {}
    for i, friend in enumerate(friends):
        ring = ring_index(friend.closeness, layout.ring_count, cfg)
        by_ring.setdefault(ring, []).append(i)
        logger.debug("  %s (%.2f) -> ring %d", friend.id, friend.closeness, ring)

    placed: dict[int, FriendPosition] = {}
    for ring in sorted(by_ring):
        members = by_ring[ring]
        radius = layout.radii[ring]
        offset = float(rng.uniform(0.0, TWO_PI))
        angles = [offset] if len(members) == 1 else even_angles(len(members), offset)
        for i, angle in zip(members, angles):
            angle = normalize_angle(float(angle))
            x, y = polar_to_cartesian(center, radius, angle)
            placed[i] = FriendPosition(id=friends[i].id, x=x, y=y, ring=ring, angle=angle)

    return [placed[i] for i in range(len(friends))]
