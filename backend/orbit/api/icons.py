"""POST /api/icons/* — closeness to icon classification."""

from __future__ import annotations

from fastapi import APIRouter

from orbit.engine.icons import format_closeness, icon_config
from orbit.models.requests import ClassifyRequest
from orbit.models.responses import IconResponse

router = APIRouter(prefix="/icons")


@router.post("/classify", response_model=IconResponse)
async def classify_closeness(req: ClassifyRequest) -> IconResponse:
    config = icon_config(req.closeness)
    return IconResponse(
        shape=config.shape,
        color=config.color,
        size=config.size,
        token=config.token,
        label=format_closeness(req.closeness),
    )
