"""Stable identifiers of every available assessment."""
from __future__ import annotations

from enum import Enum


class AvailableAssessments(str, Enum):
    """Assessment IDs. Renaming one is a breaking change for API callers."""

    # SEO
    H1_MISSING = "H1_MISSING"
    MULTIPLE_H1 = "MULTIPLE_H1"
    H1_KEYWORD_MISSING = "H1_KEYWORD_MISSING"
    H2_SYNONYMS_MISSING = "H2_SYNONYMS_MISSING"
    IMAGES_MISSING_ALT = "IMAGES_MISSING_ALT"
    KEYWORD_MISSING_FIRST_PARAGRAPH = "KEYWORD_MISSING_FIRST_PARAGRAPH"
    KEYWORD_DENSITY_LOW = "KEYWORD_DENSITY_LOW"
    META_DESCRIPTION_NEEDS_IMPROVEMENT = "META_DESCRIPTION_NEEDS_IMPROVEMENT"
    META_DESCRIPTION_MISSING = "META_DESCRIPTION_MISSING"
    TITLE_NEEDS_IMPROVEMENT = "TITLE_NEEDS_IMPROVEMENT"
    TITLE_MISSING = "TITLE_MISSING"
    CONTENT_LENGTH_SHORT = "CONTENT_LENGTH_SHORT"

    # Readability
    FLESCH_READING_EASE = "FLESCH_READING_EASE"
    PARAGRAPH_LENGTH_LONG = "PARAGRAPH_LENGTH_LONG"
    SENTENCE_LENGTH_LONG = "SENTENCE_LENGTH_LONG"
    SUBHEADING_DISTRIBUTION_POOR = "SUBHEADING_DISTRIBUTION_POOR"


SEO_ASSESSMENTS: tuple[AvailableAssessments, ...] = (
    AvailableAssessments.H1_MISSING,
    AvailableAssessments.MULTIPLE_H1,
    AvailableAssessments.H1_KEYWORD_MISSING,
    AvailableAssessments.H2_SYNONYMS_MISSING,
    AvailableAssessments.IMAGES_MISSING_ALT,
    AvailableAssessments.KEYWORD_MISSING_FIRST_PARAGRAPH,
    AvailableAssessments.KEYWORD_DENSITY_LOW,
    AvailableAssessments.META_DESCRIPTION_NEEDS_IMPROVEMENT,
    AvailableAssessments.META_DESCRIPTION_MISSING,
    AvailableAssessments.TITLE_NEEDS_IMPROVEMENT,
    AvailableAssessments.TITLE_MISSING,
    AvailableAssessments.CONTENT_LENGTH_SHORT,
)

READABILITY_ASSESSMENTS: tuple[AvailableAssessments, ...] = (
    AvailableAssessments.FLESCH_READING_EASE,
    AvailableAssessments.PARAGRAPH_LENGTH_LONG,
    AvailableAssessments.SENTENCE_LENGTH_LONG,
    AvailableAssessments.SUBHEADING_DISTRIBUTION_POOR,
)

ALL_ASSESSMENTS = SEO_ASSESSMENTS + READABILITY_ASSESSMENTS


def is_valid_assessment_id(assessment_id: str) -> bool:
    return assessment_id in {a.value for a in ALL_ASSESSMENTS}
