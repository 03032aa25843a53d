"""
ProfileDesk Backend — Health Check & Root Routes
=================================================

What:  GET / (hello envelope) and GET /health (service + database status).
How:   /health runs SELECT 1 on the AppContext engine.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from profiledesk import __version__
from profiledesk.context import AppContext
from profiledesk.routes.deps import get_context
from profiledesk.schemas.common import Envelope, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_model=Envelope, summary="Service greeting")
async def root() -> Envelope:
    return Envelope(message="Hello from ProfileDesk!")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(context: AppContext = Depends(get_context)):
    db_status = "connected"
    overall = "healthy"

    try:
        async with context.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
