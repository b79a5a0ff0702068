# tourlead/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.config import settings
from tourlead.core.logging import get_structlog_logger
from tourlead.db.session import get_session

logger = get_structlog_logger()

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()
VERSION = "1.0.0"


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str
    uptime: float
    checks: Dict[str, Dict[str, str]]


async def check_database(session: AsyncSession) -> Dict[str, str]:
    start_time = time.perf_counter()
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
    return {
        "status": "healthy",
        "response_time_ms": f"{(time.perf_counter() - start_time) * 1000:.2f}",
    }


def check_email() -> Dict[str, str]:
    if settings.email_provider == "resend" and not settings.resend_api_key:
        return {"status": "degraded", "provider": "resend", "error": "RESEND_API_KEY is not set"}
    return {"status": "healthy", "provider": settings.email_provider}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(session: AsyncSession = Depends(get_session)):
    """Database is critical; a misconfigured mailer only degrades the service."""
    checks = {
        "database": await check_database(session),
        "email": check_email(),
    }

    overall_status = "healthy"
    if checks["database"]["status"] != "healthy":
        overall_status = "unhealthy"
    elif any(check["status"] != "healthy" for check in checks.values()):
        overall_status = "degraded"

    response = HealthCheckResponse(
        status=overall_status,
        service="tourlead_api",
        environment=settings.environment,
        version=VERSION,
        timestamp=_timestamp(),
        uptime=time.monotonic() - STARTED_AT,
        checks=checks,
    )

    log = logger.info if overall_status == "healthy" else logger.warning
    log("health.check", status=overall_status, checks=checks)

    if overall_status == "unhealthy":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=response.model_dump())
    return response


@router.get("/health/live")
async def liveness_probe():
    return {"status": "alive", "timestamp": _timestamp()}
