"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status, version and
whether the database answers.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.database import Database
from app.interfaces.subscriptions.dependencies import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    database: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and database reachability.",
)
async def health_check(
    request: Request, database: Database = Depends(get_database)
) -> HealthResponse:
    """Return current application health status."""
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        database_status = "ok"
    except (SQLAlchemyError, OSError):
        logger.warning("Database health check failed", exc_info=True)
        database_status = "unavailable"

    return HealthResponse(
        status="ok" if database_status == "ok" else "degraded",
        version=request.app.state.settings.version,
        database=database_status,
    )
