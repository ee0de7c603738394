"""Health check and system endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from account_rules.core.database import get_db_session
from account_rules.core.settings import get_settings
from account_rules.schemas.base import HealthCheckResponse

router = APIRouter()
settings = get_settings()

SERVICE_NAME = "account-rules-service"
SERVICE_VERSION = "1.0.0"
EXPECTED_TABLES = ("accounts", "users", "invitations", "contacts", "activities", "calls")


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """
    Service health check endpoint.

    Checks the health of the service and its database dependency.
    """
    health_data = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc),
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "dependencies": {}
    }

    try:
        result = await session.execute(text("SELECT 1 as health_check"))
        row = result.fetchone()
        if not row or row[0] != 1:
            raise RuntimeError("Unexpected database response")
        health_data["dependencies"]["database"] = {
            "status": "healthy",
            "details": "Connection successful"
        }
    except Exception as e:
        health_data["dependencies"]["database"] = {
            "status": "unhealthy",
            "error": str(e),
            "details": "Database connection failed"
        }
        health_data["status"] = "unhealthy"
        health_data["timestamp"] = health_data["timestamp"].isoformat()
        raise HTTPException(
            status_code=503,
            detail={
                "message": "Database connection failed",
                "code": "DATABASE_UNAVAILABLE",
                "health": health_data
            }
        )

    return HealthCheckResponse(**health_data)


@router.get("/health/database")
async def database_health(session: AsyncSession = Depends(get_db_session)):
    """Detailed database health check."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.fetchone()

        table_names = await session.run_sync(
            lambda sync_session: inspect(sync_session.connection()).get_table_names()
        )
        missing = [name for name in EXPECTED_TABLES if name not in table_names]

        return {
            "status": "healthy" if not missing else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": {
                "connectivity": "ok",
                "tables": sorted(name for name in table_names if name in EXPECTED_TABLES),
                "missing_tables": missing
            }
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail={
                "message": "Database connection failed",
                "code": "DATABASE_UNAVAILABLE",
                "status": "unhealthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "error": str(e)
            }
        )


@router.get("/version")
async def version_info():
    """Get service version information."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "api_version": "v1",
    }
