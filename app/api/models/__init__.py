"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import AuditRequest, BatchAuditRequest
from app.api.models.responses import (
    AssessmentsResponse,
    AuditResponse,
    BatchResponse,
    HealthResponse,
)

__all__ = [
    "AuditRequest",
    "BatchAuditRequest",
    "AuditResponse",
    "BatchResponse",
    "AssessmentsResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
