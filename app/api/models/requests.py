"""API request models."""
from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from app.api.models.base import CamelModel
from pagelens.audit.config import AssessmentConfig
from pagelens.ingredients import PageDetails
from pagelens.pipeline import AuditOptions


class PageDetailsModel(CamelModel):
    """Metadata of the page being audited."""

    url: str = Field(..., description="Canonical URL of the page", examples=["https://example.com/post"])
    title: str = Field(..., description="Page title", examples=["Best Coffee Beans of 2024"])
    description: str | None = None
    language: str | None = None
    published_date: str | None = None
    author: str | None = None

    model_config = ConfigDict(extra="allow")

    def to_page_details(self) -> PageDetails:
        return PageDetails(
            url=self.url,
            title=self.title,
            description=self.description,
            language=self.language,
            published_date=self.published_date,
            author=self.author,
            extra=dict(self.model_extra or {}),
        )


class AssessmentConfigModel(CamelModel):
    """Selection of assessments to run; empty selects the full catalog."""

    enable_all: bool = False
    enable_all_seo: bool = Field(default=False, alias="enableAllSEO")
    enable_all_readability: bool = False
    enabled_assessments: list[str] = Field(
        default_factory=list,
        examples=[["H1_MISSING", "FLESCH_READING_EASE"]],
    )

    def to_config(self) -> AssessmentConfig:
        return AssessmentConfig(
            enable_all=self.enable_all,
            enable_all_seo=self.enable_all_seo,
            enable_all_readability=self.enable_all_readability,
            enabled_assessments=tuple(self.enabled_assessments),
        )


class AuditOptionsModel(CamelModel):
    """Content scoping and assessment selection."""

    content_selectors: list[str] = Field(default_factory=list, examples=[["article", ".post-content"]])
    exclude_selectors: list[str] = Field(default_factory=list, examples=[["nav", ".ads"]])
    base_url: str | None = None
    extract_main_content: bool = False
    assessment_config: AssessmentConfigModel | None = None


class AuditRequest(CamelModel):
    """Request body for a single page audit."""

    html_content: str = Field(..., description="Raw HTML of the page")
    page_details: PageDetailsModel
    focus_keyword: str = Field(default="", description="Primary keyword the page targets")
    related_keywords: list[str] = Field(default_factory=list, description="Secondary keywords")
    options: AuditOptionsModel | None = None

    @field_validator("related_keywords")
    @classmethod
    def drop_blank_keywords(cls, v: list[str]) -> list[str]:
        return [k for k in v if k and k.strip()]

    def to_audit_options(self) -> AuditOptions:
        options = self.options or AuditOptionsModel()
        return AuditOptions(
            content_selectors=options.content_selectors,
            exclude_selectors=options.exclude_selectors,
            base_url=options.base_url or "",
            extract_main_content=options.extract_main_content,
            assessment_config=(
                options.assessment_config.to_config() if options.assessment_config else None
            ),
        )

    def audit_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for pagelens.pipeline.run_audit."""
        return {
            "html": self.html_content,
            "page_details": self.page_details.to_page_details(),
            "focus_keyword": self.focus_keyword,
            "related_keywords": self.related_keywords,
            "options": self.to_audit_options(),
        }


class BatchAuditRequest(CamelModel):
    """Request body for auditing several pages in one call."""

    items: list[AuditRequest] = Field(..., min_length=1, description="Pages to audit")
