"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from orbit.engine.layout import RingLayout
from orbit.engine.ranking import CompareResult
from orbit.models.friend import Friend


class FriendScore(BaseModel):
    id: str
    closeness: float = Field(..., ge=0.0, le=10.0)


class ClassifyRequest(BaseModel):
    closeness: float = Field(..., description="Closeness score, clamped to [0, 10]")


class RingsRequest(BaseModel):
    scores: list[float] = Field(default_factory=list, description="Closeness of every friend")
    width: float = Field(..., description="Viewport width")
    height: float = Field(..., description="Viewport height")
    previous_thresholds: list[float] | None = Field(
        default=None,
        description="Thresholds from the previous layout, for smoothing",
    )


class PositionsRequest(BaseModel):
    friends: list[FriendScore] = Field(default_factory=list)
    layout: RingLayout
    width: float
    height: float


class LayoutRequest(BaseModel):
    friends: list[FriendScore] = Field(default_factory=list)
    width: float
    height: float
    previous_thresholds: list[float] | None = None


class StartRatingRequest(BaseModel):
    friends: list[Friend] = Field(
        default_factory=list,
        description="Currently ranked friends, sorted by descending closeness",
    )
    candidate: Friend = Field(..., description="Friend being added")
    max_comparisons: int | None = Field(default=None, description="Override the comparison budget")
    smoothing_factor: float | None = Field(
        default=0.3,
        description="Interior smoothing weight; null disables smoothing",
    )


class AnswerRequest(BaseModel):
    result: CompareResult = Field(..., description="Candidate versus the current pivot")
