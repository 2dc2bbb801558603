"""Core data model — friends and the comparisons that rank them."""

from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field, field_validator

from orbit.engine.icons import IconKey, classify
from orbit.utils.math_helpers import clamp


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Coordinates(BaseModel):
    lat: float
    lng: float


class Friend(BaseModel):
    """A ranked entity. ``closeness`` is 10 for the closest, 0 for the farthest."""

    id: str
    name: str = ""
    closeness: float = 0.0
    user_id: str | None = None
    # Location is carried through ranking and layout untouched
    city: str | None = None
    state: str | None = None
    country: str | None = None
    coordinates: Coordinates | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("closeness")
    @classmethod
    def _clamp_closeness(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("closeness must be a finite number")
        return clamp(v, 0.0, 10.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon_key(self) -> IconKey:
        return classify(self.closeness)

    def with_closeness(self, closeness: float) -> Friend:
        """Copy of this friend with a new (clamped) score."""
        return self.model_copy(update={"closeness": clamp(closeness, 0.0, 10.0)})


class RatingComparison(BaseModel):
    """One answer from the comparison oracle: candidate (A) versus pivot (B)."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    friend_a_id: str
    friend_b_id: str
    result: str  # CompareResult value
    created_at: datetime = Field(default_factory=_utcnow)
