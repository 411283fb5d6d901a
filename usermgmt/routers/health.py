"""Liveness and readiness probes.

All three are static: they answer 200 whenever the process can serve HTTP
and never touch the database or require credentials.
"""

from datetime import UTC, datetime

from fastapi import APIRouter

from usermgmt.config import settings
from usermgmt.schemas import HealthResponse, ProbeResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, summary="Health check")
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="UP",
        timestamp=datetime.now(UTC),
        service=settings.app_name,
        version=settings.app_version,
    )


@router.get("/ready", response_model=ProbeResponse, summary="Readiness check")
async def readiness_check() -> ProbeResponse:
    return ProbeResponse(status="READY")


@router.get("/live", response_model=ProbeResponse, summary="Liveness check")
async def liveness_check() -> ProbeResponse:
    return ProbeResponse(status="ALIVE")
