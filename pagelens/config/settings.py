"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class AssessmentStandards:
    """Thresholds the assessment rules judge against.

    Instances are immutable and handed to each assessment when the registry
    is built, so one run can never observe another run's thresholds.
    """
    # Title width (px)
    title_min_width: int = 150
    title_max_width: int = 600
    title_acceptable_min_width: int = 100

    # Meta description width (px)
    meta_min_width: int = 600
    meta_max_width: int = 960
    meta_acceptable_min_width: int = 300

    # Keyword placement and density, measured over the opening characters
    first_paragraph_window: int = 100
    density_window: int = 100
    density_min_percent: float = 12.0

    min_content_words: int = 300

    # Readability
    flesch_min_chars: int = 100
    flesch_good_threshold: float = 60.0
    flesch_ok_threshold: float = 30.0
    long_paragraph_chars: int = 150
    long_sentence_words: int = 20
    long_sentence_cjk_chars: int = 30
    cjk_sentence_ratio: float = 0.5
    long_share_bad_ratio: float = 0.5
    subheading_words_optimal: int = 300
    subheading_words_max: int = 600


@dataclass
class ExtractionSettings:
    """Settings for the structural extractor."""
    min_html_length: int = 100
    reading_words_per_minute: int = 200
    # Tags whose text never counts as page content
    stripped_tags: tuple[str, ...] = ("script", "style", "noscript", "template")


@dataclass
class FetcherSettings:
    """Settings for the CLI's HTML fetcher."""
    request_timeout: int = 15
    max_response_size: int = 10 * 1024 * 1024  # 10 MB
    max_redirects: int = 5
    user_agent: str = "PageLens/1.0 (+https://github.com/pagelens/pagelens)"


@dataclass
class APISettings:
    """API-specific settings."""
    batch_max_items: int = 10
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class LogSettings:
    """Logging settings."""
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass
class Settings:
    """Main application settings container."""
    standards: AssessmentStandards = field(default_factory=AssessmentStandards)
    extraction: ExtractionSettings = field(default_factory=ExtractionSettings)
    fetcher: FetcherSettings = field(default_factory=FetcherSettings)
    api: APISettings = field(default_factory=APISettings)
    log: LogSettings = field(default_factory=LogSettings)

    debug: bool = False

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("PAGELENS_DEBUG", "").lower() in ("true", "1", "yes")

        if level := os.environ.get("PAGELENS_LOG_LEVEL"):
            self.log.level = level.upper()
        elif self.debug:
            self.log.level = "DEBUG"

        if min_length := os.environ.get("PAGELENS_MIN_HTML_LENGTH"):
            self.extraction.min_html_length = int(min_length)

        if min_words := os.environ.get("PAGELENS_MIN_CONTENT_WORDS"):
            self.standards = replace(self.standards, min_content_words=int(min_words))

        if timeout := os.environ.get("PAGELENS_REQUEST_TIMEOUT"):
            self.fetcher.request_timeout = int(timeout)

        if batch_max := os.environ.get("PAGELENS_BATCH_MAX_ITEMS"):
            self.api.batch_max_items = int(batch_max)
        if cors := os.environ.get("PAGELENS_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]


# Global settings instance
settings = Settings()
