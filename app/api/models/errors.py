"""API error response models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pagelens.errors import ErrorCodes as PipelineErrorCodes


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Ingredients gathering failed: Page URL is required",
                    "details": {"stage": "gathering", "processingTimeMs": 1},
                }
            }
        }
    }


class ErrorCodes(PipelineErrorCodes):
    """Standardized error codes, including those of the audit pipeline."""

    # 4xx Client Errors
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_ASSESSMENT_CONFIG = "INVALID_ASSESSMENT_CONFIG"
    BATCH_TOO_LARGE = "BATCH_TOO_LARGE"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict:
    """Build an ErrorResponse body for HTTPException detail."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message, details=details)).model_dump()
