"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from orbit.api.sessions import SessionStore
from orbit.config import Settings
from orbit.dependencies import get_sessions, get_settings
from orbit.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        env=settings.orbit_env,
        open_sessions=len(sessions),
    )
