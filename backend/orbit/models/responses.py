"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from orbit.engine.icons import IconColor, Shape
from orbit.engine.layout import FriendPosition, RingLayout
from orbit.models.friend import Friend, RatingComparison


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"
    open_sessions: int = 0


class IconResponse(BaseModel):
    shape: Shape
    color: IconColor
    size: float
    token: str
    label: str = ""


class PositionsResponse(BaseModel):
    positions: list[FriendPosition] = Field(default_factory=list)


class LayoutResponse(BaseModel):
    layout: RingLayout
    positions: list[FriendPosition] = Field(default_factory=list)


class InsertResultModel(BaseModel):
    friends: list[Friend]
    comparisons_used: int
    insert_index: int
    pivots_visited: list[str] = Field(default_factory=list)
    comparisons: list[RatingComparison] = Field(default_factory=list)
    tied_with: str | None = None


class RatingSessionResponse(BaseModel):
    session_id: str
    status: str
    candidate: Friend
    pivot: Friend | None = None
    comparisons_used: int = 0
    max_comparisons: int = 0
    result: InsertResultModel | None = None
