# 📄 File: app/api/health.py
# 🧭 Purpose (Layman Explanation): 
# Quick checkup endpoints that tell hosting platforms whether PetVally is up and whether
# it can reach its database.
# 🧪 Purpose (Technical Summary): 
# Liveness (`/health`) and readiness (`/health/ready`, database round trip) probes.
# 🔗 Dependencies: 
# FastAPI, app.shared.infrastructure.database.connection
# 🔄 Connected Modules / Calls From: 
# app.main.py, load balancers, container orchestration

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.shared.config.settings import get_settings
from app.shared.infrastructure.database.connection import database_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health",
                   summary="Basic Health Check",
                   description="Basic health check endpoint for load balancers and monitoring",
                   tags=["Health Check"])
async def health_check() -> JSONResponse:
    """Simple OK status for quick health verification."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "petvally-api",
            "version": get_settings().APP_VERSION
        }
    )


@health_router.get("/health/ready",
                   summary="Readiness Probe",
                   description="Reports ready only when the database answers",
                   tags=["Health Check"])
async def readiness_probe() -> JSONResponse:
    """
    Readiness probe.

    Returns 503 while the database is unreachable so traffic is held back.
    """
    database = await database_health_check()
    ready = database["status"] == "healthy"
    if not ready:
        logger.warning(f"Readiness check failed: {database.get('error')}")

    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"database": database["status"]}
        }
    )
