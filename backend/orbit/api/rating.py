"""/api/rating/sessions — drive a ranked insertion one human answer at a time.

POST   /sessions               start; returns the first pivot (or the result)
POST   /sessions/{id}/answer   answer for the current pivot
GET    /sessions/{id}          current state
DELETE /sessions/{id}          cancel; nothing is changed
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from orbit.api.sessions import OpenSession, SessionStore
from orbit.dependencies import get_sessions
from orbit.engine.ranking import InsertResult, RankingError, RankingSession
from orbit.models.requests import AnswerRequest, StartRatingRequest
from orbit.models.responses import InsertResultModel, RatingSessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rating")


def _snapshot(entry: OpenSession, result: InsertResult | None = None) -> RatingSessionResponse:
    session = entry.session
    return RatingSessionResponse(
        session_id=entry.id,
        status=session.status.value,
        candidate=session.candidate,
        pivot=session.pivot,
        comparisons_used=session.comparisons_used,
        max_comparisons=session.max_comparisons,
        result=None
        if result is None
        else InsertResultModel(
            friends=result.friends,
            comparisons_used=result.comparisons_used,
            insert_index=result.insert_index,
            pivots_visited=result.pivots_visited,
            comparisons=result.comparisons,
            tied_with=result.tied_with,
        ),
    )


def _advance(entry: OpenSession, sessions: SessionStore) -> RatingSessionResponse:
    """Resolve and drop the session once its insertion point is decided."""
    if not entry.session.is_decided:
        return _snapshot(entry)
    result = entry.session.resolve(entry.smoothing_factor)
    sessions.close(entry.id)
    return _snapshot(entry, result)


def _lookup(session_id: str, sessions: SessionStore) -> OpenSession:
    entry = sessions.get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"rating session {session_id} not found")
    return entry


@router.post("/sessions", response_model=RatingSessionResponse)
async def start_session(
    req: StartRatingRequest, sessions: SessionStore = Depends(get_sessions)
) -> RatingSessionResponse:
    if req.smoothing_factor is not None and not 0.0 <= req.smoothing_factor <= 1.0:
        raise RankingError(f"smoothing factor must be within [0, 1], got {req.smoothing_factor}")
    session = RankingSession.start(req.friends, req.candidate, req.max_comparisons)
    entry = sessions.open(session, req.smoothing_factor)
    return _advance(entry, sessions)


@router.get("/sessions/{session_id}", response_model=RatingSessionResponse)
async def get_session(
    session_id: str, sessions: SessionStore = Depends(get_sessions)
) -> RatingSessionResponse:
    return _snapshot(_lookup(session_id, sessions))


@router.post("/sessions/{session_id}/answer", response_model=RatingSessionResponse)
async def answer(
    session_id: str, req: AnswerRequest, sessions: SessionStore = Depends(get_sessions)
) -> RatingSessionResponse:
    entry = _lookup(session_id, sessions)
    entry.session.record(req.result)
    return _advance(entry, sessions)


@router.delete("/sessions/{session_id}", response_model=RatingSessionResponse)
async def cancel_session(
    session_id: str, sessions: SessionStore = Depends(get_sessions)
) -> RatingSessionResponse:
    entry = _lookup(session_id, sessions)
    entry.session.cancel()
    sessions.close(session_id)
    logger.info("Cancelled rating session %s", session_id)
    return _snapshot(entry)
