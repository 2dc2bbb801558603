"""POST /api/orbit/* — ring layout and friend positions."""

from __future__ import annotations

from fastapi import APIRouter

from orbit.engine.layout import RingLayout, compute_friend_positions, compute_rings
from orbit.models.requests import LayoutRequest, PositionsRequest, RingsRequest
from orbit.models.responses import LayoutResponse, PositionsResponse

router = APIRouter(prefix="/orbit")


@router.post("/rings", response_model=RingLayout)
async def rings(req: RingsRequest) -> RingLayout:
    return compute_rings(req.scores, req.width, req.height, req.previous_thresholds)


@router.post("/positions", response_model=PositionsResponse)
async def positions(req: PositionsRequest) -> PositionsResponse:
    placed = compute_friend_positions(req.friends, req.layout, req.width, req.height)
    return PositionsResponse(positions=placed)


@router.post("/layout", response_model=LayoutResponse)
async def rings_and_positions(req: LayoutRequest) -> LayoutResponse:
    """Rings and positions in one round trip."""
    ring_layout = compute_rings(
        [f.closeness for f in req.friends], req.width, req.height, req.previous_thresholds
    )
    placed = compute_friend_positions(req.friends, ring_layout, req.width, req.height)
    return LayoutResponse(layout=ring_layout, positions=placed)
