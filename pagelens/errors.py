"""Error taxonomy for the audit pipeline."""
from __future__ import annotations

from typing import Any


class ErrorCodes:
    """Standardized error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    ASSESSMENT_ERROR = "ASSESSMENT_ERROR"
    FORMAT_ERROR = "FORMAT_ERROR"


class PageLensError(Exception):
    """Base error carrying a machine-readable code and optional details."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details or None,
        }


class ValidationError(PageLensError):
    """Missing or malformed caller input."""

    code = ErrorCodes.VALIDATION_ERROR


class ExtractionError(PageLensError):
    """HTML could not be turned into a structural snapshot."""

    code = ErrorCodes.EXTRACTION_ERROR


class AssessmentError(PageLensError):
    """A rule raised while evaluating a snapshot."""

    code = ErrorCodes.ASSESSMENT_ERROR


class FormatError(PageLensError):
    """The final report could not be built."""

    code = ErrorCodes.FORMAT_ERROR
