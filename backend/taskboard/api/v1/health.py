"""Liveness and readiness checks."""

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from taskboard.config import Settings
from taskboard.db.session import Database

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """Process is up; touches nothing else."""
    settings: Settings = request.app.state.settings
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, str | dict[str, str]]:
    """Store reachability plus whether task extraction can be used.

    A missing AI key does not make the service unready; only the generate
    endpoint depends on it.
    """
    settings: Settings = request.app.state.settings
    database: Database = request.app.state.database

    checks: dict[str, str] = {}
    try:
        await database.ping()
        checks["database"] = "healthy"
    except (SQLAlchemyError, OSError) as e:
        checks["database"] = f"unhealthy: {e}"

    checks["ai"] = "configured" if settings.xai_api_key.get_secret_value() else "not configured"

    return {
        "status": "healthy" if checks["database"] == "healthy" else "unhealthy",
        "version": settings.app_version,
        "checks": checks,
    }
