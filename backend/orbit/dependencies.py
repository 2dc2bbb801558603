"""FastAPI dependency injection."""

from __future__ import annotations

from orbit.api.sessions import SessionStore, get_session_store
from orbit.config import Settings, settings


def get_settings() -> Settings:
    return settings


def get_sessions() -> SessionStore:
    return get_session_store()
