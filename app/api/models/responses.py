"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.api.models.base import CamelModel

Rating = Literal["good", "ok", "bad"]
ImpactLevel = Literal["high", "medium", "low"]
GradeLabel = Literal["excellent", "good", "needs-improvement", "poor"]


# === Report Models ===


class OverallScores(CamelModel):
    """Category and overall scores with their grades."""

    seo_score: int = Field(..., ge=0, le=100)
    readability_score: int = Field(..., ge=0, le=100)
    overall_score: int = Field(..., ge=0, le=100)
    seo_grade: GradeLabel
    readability_grade: GradeLabel
    overall_grade: GradeLabel


class DetailedIssue(CamelModel):
    """Public view of one assessment result."""

    id: str = Field(..., description="Stable assessment identifier", examples=["H1_MISSING"])
    name: str
    description: str
    rating: Rating
    recommendation: str
    impact: ImpactLevel
    score: int = Field(..., ge=0, le=100)
    details: dict[str, Any] = Field(default_factory=dict)
    standards: dict[str, Any] | None = None


class ReportSummary(CamelModel):
    """Rating counts and highlighted issues."""

    total_issues: int
    good_issues: int
    ok_issues: int
    bad_issues: int
    critical_issues: list[DetailedIssue] = Field(..., max_length=3)
    quick_wins: list[DetailedIssue] = Field(..., max_length=3)


class AuditReport(CamelModel):
    """Complete audit report."""

    url: str
    timestamp: str
    overall_scores: OverallScores
    detailed_issues: list[DetailedIssue]
    summary: ReportSummary


class PageUnderstanding(CamelModel):
    """Display summary of the page structure."""

    title: str
    meta_description: str | None = None
    language: str
    h1_count: int
    h2_count: int
    h3_count: int
    image_count: int
    video_count: int
    internal_links: int
    external_links: int
    paragraph_count: int
    word_count: int
    sentence_count: int
    avg_words_per_sentence: float
    reading_time_minutes: int
    author: str | None = None
    published_date: str | None = None
    structured_data_types: list[str] = Field(default_factory=list)


# === Main Response Models ===


class AuditResponse(CamelModel):
    """Response of a successful single audit."""

    success: bool = True
    processing_time_ms: int
    report: AuditReport
    page_understanding: PageUnderstanding


class StageError(CamelModel):
    """Failure of one pipeline stage."""

    code: str
    stage: str
    message: str
    details: dict[str, Any] | None = None


class BatchItemResult(CamelModel):
    """Outcome of one item of a batch."""

    index: int
    url: str
    success: bool
    processing_time_ms: int
    report: AuditReport | None = None
    page_understanding: PageUnderstanding | None = None
    error: StageError | None = None


class BatchResponse(CamelModel):
    """Response of a batch audit."""

    total: int
    succeeded: int
    failed: int
    results: list[BatchItemResult]


class AssessmentInfo(CamelModel):
    """Catalog entry of one assessment."""

    id: str
    category: Literal["seo", "readability"]
    name: str
    description: str


class AssessmentsResponse(CamelModel):
    """Available assessments and configuration examples."""

    total: int
    seo: list[AssessmentInfo]
    readability: list[AssessmentInfo]
    config_examples: dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
