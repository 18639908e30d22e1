"""
Health Routes

GET /api/health reports service metadata and a database round trip.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from sqlalchemy.exc import SQLAlchemyError

from boom_booking.responses import error_response, success_response

router = APIRouter(tags=["Monitoring"])
logger = logging.getLogger(__name__)


@router.get("")
async def health_check(request: Request):
    settings = request.app.state.settings
    payload = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {"database": {"status": "healthy"}},
    }

    try:
        await request.app.state.database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error("Health check database ping failed: %s", e)
        payload["status"] = "unhealthy"
        payload["checks"]["database"] = {"status": "unhealthy", "error": str(e) if settings.debug else "unreachable"}
        return error_response(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="Database unavailable",
            data=payload,
        )

    return success_response(data=payload)
