"""Validation and normalization of caller-supplied audit inputs."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pagelens.config.settings import settings
from pagelens.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageDetails:
    """Metadata describing the page being audited.

    Attributes:
        url: Canonical URL of the page (required)
        title: Page title as known by the caller (required)
        description: Optional description supplied by the caller
        language: Optional language hint
        published_date: Optional publication date string
        author: Optional author name
        extra: Any further free-form metadata
    """
    url: str
    title: str
    description: str | None = None
    language: str | None = None
    published_date: str | None = None
    author: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "language": self.language,
            "publishedDate": self.published_date,
            "author": self.author,
            **self.extra,
        }


@dataclass(frozen=True)
class PageIngredients:
    """Canonical, immutable inputs of one audit run."""
    html_content: str
    page_details: PageDetails
    focus_keyword: str = ""
    related_keywords: tuple[str, ...] = ()

    @property
    def all_keywords(self) -> list[str]:
        """Focus keyword followed by related keywords, empties dropped."""
        keywords = [self.focus_keyword] if self.focus_keyword else []
        return keywords + list(self.related_keywords)


def normalize_keyword(keyword: str | None) -> str:
    return (keyword or "").strip().lower()


def gather_ingredients(
    html_content: str,
    page_details: PageDetails,
    focus_keyword: str = "",
    related_keywords: Iterable[str] = (),
) -> PageIngredients:
    """Validate inputs and build the canonical ingredients record.

    Args:
        html_content: Raw HTML of the page
        page_details: Page metadata; url and title are required
        focus_keyword: Primary keyword, may be empty
        related_keywords: Secondary keywords in priority order

    Returns:
        PageIngredients with lower-cased, trimmed keywords

    Raises:
        ValidationError: If the HTML is missing or too short, or the page URL
            or title is missing
    """
    if not html_content or not html_content.strip():
        raise ValidationError("HTML content is required")

    min_length = settings.extraction.min_html_length
    if len(html_content) < min_length:
        raise ValidationError(
            f"HTML content too short ({len(html_content)} chars, minimum {min_length})",
            details={"length": len(html_content), "minimum": min_length},
        )

    if page_details is None or not (page_details.url or "").strip():
        raise ValidationError("Page URL is required")

    if not (page_details.title or "").strip():
        raise ValidationError("Page title is required")

    focus = normalize_keyword(focus_keyword)
    related = tuple(
        keyword for keyword in (normalize_keyword(k) for k in related_keywords or ())
        if keyword
    )

    if not focus:
        logger.warning("No focus keyword provided for %s; keyword checks will be skipped", page_details.url)

    return PageIngredients(
        html_content=html_content,
        page_details=page_details,
        focus_keyword=focus,
        related_keywords=related,
    )
