"""API v1 router aggregation."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.endpoints import assessments, audit, batch, health

PREFIX = "/pagelens"

router = APIRouter()

router.include_router(audit.router, prefix=PREFIX)
router.include_router(batch.router, prefix=PREFIX)
router.include_router(assessments.router, prefix=PREFIX)
router.include_router(health.router, prefix=PREFIX)
