"""Audit pipeline: gather, extract, assess and format in strict sequence."""
from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

from pagelens.audit.config import AssessmentConfig, resolve_enabled_assessments
from pagelens.audit.registry import build_default_registry
from pagelens.audit.scoring import score_evaluations
from pagelens.config.settings import AssessmentStandards, settings
from pagelens.errors import (
    AssessmentError,
    ExtractionError,
    FormatError,
    PageLensError,
    ValidationError,
)
from pagelens.ingredients import PageDetails, gather_ingredients
from pagelens.parser.structure import ExtractionOptions, StructuralSnapshot, extract_structure
from pagelens.report.builder import AuditReport, build_report

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Stage name, failure prefix and the error raised for unexpected exceptions
STAGES = {
    "gathering": ("Ingredients gathering failed", ValidationError),
    "extraction": ("Content extraction failed", ExtractionError),
    "assessment": ("Test execution failed", AssessmentError),
    "formatting": ("Report generation failed", FormatError),
}


@dataclass
class AuditOptions:
    """Per-call options of an audit run.

    Attributes:
        content_selectors: Selectors tried in order to scope the content
        exclude_selectors: Selectors removed before analysis
        base_url: Base for link classification, defaults to the page URL
        extract_main_content: Narrow to the main article when no selector matched
        assessment_config: Subset of assessments to run, full catalog if None
    """
    content_selectors: list[str] = field(default_factory=list)
    exclude_selectors: list[str] = field(default_factory=list)
    base_url: str = ""
    extract_main_content: bool = False
    assessment_config: AssessmentConfig | None = None


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    stage: str
    message: str
    details: dict | None = None

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class PageUnderstanding:
    """Display summary projected from the structural snapshot."""
    title: str
    meta_description: str | None
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
    structured_data_types: list[str] = field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: StructuralSnapshot) -> PageUnderstanding:
        stats = snapshot.text_stats
        external = sum(1 for link in snapshot.links if link.is_external)
        types = []
        for item in snapshot.structured_data:
            item_type = item.get("@type")
            if isinstance(item_type, list):
                types.extend(str(t) for t in item_type)
            elif item_type:
                types.append(str(item_type))
        return cls(
            title=snapshot.title,
            meta_description=snapshot.meta_description,
            language=snapshot.language,
            h1_count=len(snapshot.headings_at(1)),
            h2_count=len(snapshot.headings_at(2)),
            h3_count=len(snapshot.headings_at(3)),
            image_count=len(snapshot.images),
            video_count=len(snapshot.videos),
            internal_links=len(snapshot.links) - external,
            external_links=external,
            paragraph_count=stats.paragraph_count,
            word_count=snapshot.word_count,
            sentence_count=stats.sentence_count,
            avg_words_per_sentence=(
                round(snapshot.word_count / stats.sentence_count, 1) if stats.sentence_count else 0.0
            ),
            reading_time_minutes=stats.reading_time_minutes,
            author=snapshot.author,
            published_date=snapshot.published_date,
            structured_data_types=types,
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "metaDescription": self.meta_description,
            "language": self.language,
            "h1Count": self.h1_count,
            "h2Count": self.h2_count,
            "h3Count": self.h3_count,
            "imageCount": self.image_count,
            "videoCount": self.video_count,
            "internalLinks": self.internal_links,
            "externalLinks": self.external_links,
            "paragraphCount": self.paragraph_count,
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "avgWordsPerSentence": self.avg_words_per_sentence,
            "readingTimeMinutes": self.reading_time_minutes,
            "author": self.author,
            "publishedDate": self.published_date,
            "structuredDataTypes": self.structured_data_types,
        }


@dataclass(frozen=True)
class AuditOutcome:
    """Result of a pipeline run; exactly one of report or error is set."""
    success: bool
    processing_time_ms: int
    report: AuditReport | None = None
    page_understanding: PageUnderstanding | None = None
    error: ErrorInfo | None = None

    def to_dict(self) -> dict:
        data: dict = {"success": self.success, "processingTimeMs": self.processing_time_ms}
        if self.report is not None:
            data["report"] = self.report.to_dict()
        if self.page_understanding is not None:
            data["pageUnderstanding"] = self.page_understanding.to_dict()
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


class _StageFailed(Exception):
    def __init__(self, info: ErrorInfo):
        super().__init__(info.message)
        self.info = info


def _run_stage(stage: str, func: Callable[[], T]) -> T:
    """Run one stage, converting any exception into a stage-qualified failure."""
    prefix, fallback = STAGES[stage]
    try:
        return func()
    except PageLensError as exc:
        error = exc
    except Exception as exc:
        logger.exception("Unexpected error during %s", stage)
        error = fallback(f"{type(exc).__name__}: {exc}")

    raise _StageFailed(ErrorInfo(
        code=error.code,
        stage=stage,
        message=f"{prefix}: {error.message}",
        details=error.details or None,
    ))


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def run_audit(
    html: str,
    page_details: PageDetails,
    focus_keyword: str = "",
    related_keywords: Iterable[str] = (),
    options: AuditOptions | None = None,
    standards: AssessmentStandards | None = None,
) -> AuditOutcome:
    """Audit one HTML document.

    Never raises for bad input: every failure is returned as an unsuccessful
    AuditOutcome carrying the failing stage and elapsed time.

    Args:
        html: Raw HTML of the page
        page_details: Page metadata; url and title are required
        focus_keyword: Primary keyword, may be empty
        related_keywords: Secondary keywords in priority order
        options: Content scoping and assessment selection
        standards: Thresholds, defaults to settings.standards

    Returns:
        AuditOutcome with the report and page understanding on success
    """
    start = time.perf_counter()
    options = options or AuditOptions()
    standards = standards or settings.standards

    try:
        ingredients = _run_stage("gathering", lambda: gather_ingredients(
            html, page_details, focus_keyword, related_keywords,
        ))

        extraction_options = ExtractionOptions(
            content_selectors=list(options.content_selectors),
            exclude_selectors=list(options.exclude_selectors),
            base_url=options.base_url or page_details.url,
            extract_main_content=options.extract_main_content,
        )
        snapshot = _run_stage("extraction", lambda: extract_structure(
            ingredients.html_content, extraction_options,
        ))

        registry = build_default_registry(standards)
        selected = resolve_enabled_assessments(options.assessment_config)
        evaluations = _run_stage("assessment", lambda: registry.run_selected(
            selected, snapshot, ingredients,
        ))

        report = _run_stage("formatting", lambda: build_report(
            score_evaluations(evaluations), page_details.url,
        ))
    except _StageFailed as failure:
        elapsed = _elapsed_ms(start)
        logger.warning("Audit of %s failed after %d ms: %s",
                       getattr(page_details, "url", ""), elapsed, failure.info.message)
        return AuditOutcome(success=False, processing_time_ms=elapsed, error=failure.info)

    elapsed = _elapsed_ms(start)
    logger.debug("Audit of %s completed in %d ms (%d assessments)",
                 page_details.url, elapsed, len(evaluations))
    return AuditOutcome(
        success=True,
        processing_time_ms=elapsed,
        report=report,
        page_understanding=PageUnderstanding.from_snapshot(snapshot),
    )
