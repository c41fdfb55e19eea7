"""Batch audit endpoint."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.api.models.errors import ErrorCodes, ErrorResponse, error_body
from app.api.models.requests import BatchAuditRequest
from app.api.models.responses import BatchItemResult, BatchResponse
from app.api.v1.endpoints.audit import check_assessment_config
from pagelens.config.settings import settings
from pagelens.pipeline import run_audit

router = APIRouter(tags=["Audit"])


@router.post(
    "/batch",
    response_model=BatchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Too many items or invalid configuration"},
    },
    summary="Audit several pages",
    description="Audit up to the configured number of pages. Each item succeeds or fails on its own.",
)
def audit_batch(body: BatchAuditRequest) -> BatchResponse:
    """Audit each item in order, collecting per-item outcomes."""
    limit = settings.api.batch_max_items
    if len(body.items) > limit:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body(
                ErrorCodes.BATCH_TOO_LARGE,
                f"Batch contains {len(body.items)} items, maximum is {limit}",
                {"items": len(body.items), "maximum": limit},
            ),
        )

    for item in body.items:
        check_assessment_config(item)

    results = []
    for index, item in enumerate(body.items):
        outcome = run_audit(**item.audit_kwargs())
        results.append(BatchItemResult.model_validate({
            "index": index,
            "url": item.page_details.url,
            **outcome.to_dict(),
        }))

    succeeded = sum(1 for r in results if r.success)
    return BatchResponse(
        total=len(results),
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=results,
    )
