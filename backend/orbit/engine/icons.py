"""Icon classification — closeness → (shape, color, size).

Six half-open buckets over [0, 10]; a boundary value belongs to the bucket
above it. Pure and deterministic.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

from orbit.utils.math_helpers import clamp

MIN_ICON_SIZE = 12.0
MAX_ICON_SIZE = 24.0


class Shape(str, enum.Enum):
    DOT = "dot"
    SQUARE = "square"
    HEXAGON = "hexagon"
    FLOWER = "flower"
    STAR8 = "star8"
    STAR12 = "star12"


class IconColor(str, enum.Enum):
    BLUE = "blue"
    TEAL = "teal"
    GREEN = "green"
    YELLOW_GREEN = "yellow-green"
    ORANGE = "orange"
    RED = "red"


class IconKey(BaseModel):
    """Tagged (shape, color) pair."""

    model_config = ConfigDict(frozen=True)

    shape: Shape
    color: IconColor

    @property
    def token(self) -> str:
        """Display form, e.g. ``star12-red``."""
        return f"{self.shape.value}-{self.color.value}"


class IconConfig(BaseModel):
    shape: Shape
    color: IconColor
    size: float

    @property
    def token(self) -> str:
        return IconKey(shape=self.shape, color=self.color).token


# (exclusive upper bound, shape, color), ascending. The last bucket is closed at 10.
_BUCKETS: tuple[tuple[float, Shape, IconColor], ...] = (
    (2.0, Shape.DOT, IconColor.BLUE),
    (4.0, Shape.SQUARE, IconColor.TEAL),
    (6.0, Shape.HEXAGON, IconColor.GREEN),
    (7.5, Shape.FLOWER, IconColor.YELLOW_GREEN),
    (9.0, Shape.STAR8, IconColor.ORANGE),
)
_TOP_BUCKET = (Shape.STAR12, IconColor.RED)

_KEYS: dict[tuple[Shape, IconColor], IconKey] = {
    (shape, color): IconKey(shape=shape, color=color)
    for _, shape, color in _BUCKETS
}
_KEYS[_TOP_BUCKET] = IconKey(shape=_TOP_BUCKET[0], color=_TOP_BUCKET[1])


def classify(closeness: float) -> IconKey:
    """Map a closeness score to its icon key."""
    c = clamp(closeness, 0.0, 10.0)
    for upper, shape, color in _BUCKETS:
        if c < upper:
            return _KEYS[(shape, color)]
    return _KEYS[_TOP_BUCKET]


def icon_size(closeness: float) -> float:
    """Display size, 12 at closeness 0 up to 24 at closeness 10."""
    return clamp(MIN_ICON_SIZE + (closeness / 10.0) * 12.0, MIN_ICON_SIZE, MAX_ICON_SIZE)


def icon_config(closeness: float) -> IconConfig:
    key = classify(closeness)
    return IconConfig(shape=key.shape, color=key.color, size=icon_size(closeness))


def format_closeness(closeness: float) -> str:
    """One-decimal display string."""
    return f"{closeness:.1f}"
