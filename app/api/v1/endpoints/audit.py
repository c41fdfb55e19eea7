"""Single page audit endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.models.errors import ErrorCodes, ErrorResponse, error_body
from app.api.models.requests import AuditRequest
from app.api.models.responses import AuditResponse
from pagelens.audit.config import validate_config
from pagelens.pipeline import run_audit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audit"])


def check_assessment_config(body: AuditRequest) -> None:
    """Reject assessment selections naming unknown assessments.

    Raises:
        HTTPException: 400 with INVALID_ASSESSMENT_CONFIG
    """
    if body.options is None or body.options.assessment_config is None:
        return

    validation = validate_config(body.options.assessment_config.to_config())
    if not validation.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body(
                ErrorCodes.INVALID_ASSESSMENT_CONFIG,
                "; ".join(validation.errors),
                {"errors": validation.errors, "warnings": validation.warnings},
            ),
        )
    for warning in validation.warnings:
        logger.info("Assessment config warning: %s", warning)


@router.post(
    "",
    response_model=AuditResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid assessment configuration"},
        422: {"model": ErrorResponse, "description": "The audit pipeline failed"},
    },
    summary="Audit a page",
    description="""
Run the SEO and readability assessments over the supplied HTML.

The whole document body is analyzed unless `options.contentSelectors` or
`options.excludeSelectors` narrow it. Every assessment in the catalog runs
unless `options.assessmentConfig` selects a subset.
""",
)
def audit_page(body: AuditRequest) -> AuditResponse:
    """Audit one page."""
    check_assessment_config(body)

    outcome = run_audit(**body.audit_kwargs())
    if not outcome.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=error_body(
                outcome.error.code,
                outcome.error.message,
                {"stage": outcome.error.stage, "processingTimeMs": outcome.processing_time_ms},
            ),
        )

    return AuditResponse.model_validate(outcome.to_dict())
