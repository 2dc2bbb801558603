"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orbit.config import settings
from orbit.engine.ranking import RankingError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.orbit_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
# Font discovery floods DEBUG output when render.py is imported
logging.getLogger("matplotlib").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


async def ranking_error_handler(request: Request, exc: RankingError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Orbit",
        description="Rank friends by pairwise comparison and lay them out on concentric rings",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Precondition failures from the engine surface as 422 on every route
    app.add_exception_handler(RankingError, ranking_error_handler)

    from orbit.api.router import api_router

    app.include_router(api_router)
    logger.info(
        "Orbit API ready (env=%s, max %d rating sessions)",
        settings.orbit_env,
        settings.max_rating_sessions,
    )

    return app


app = create_app()
