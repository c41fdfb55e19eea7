"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from app.api.models.responses import HealthResponse
from pagelens import __version__
from pagelens.audit.catalog import ALL_ASSESSMENTS
from pagelens.audit.registry import build_default_registry

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and service status.",
)
async def health_check() -> HealthResponse:
    """Return API health status."""
    checks = {
        "assessment_catalog": len(build_default_registry()) == len(ALL_ASSESSMENTS),
    }
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
