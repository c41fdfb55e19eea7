"""Aggregation of evaluations into category and overall scores."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from pagelens.audit.base import AssessmentCategory, Evaluation
from pagelens.text.metrics import round_half_up

SEO_WEIGHT = 0.6
READABILITY_WEIGHT = 0.4


class Grade(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"
    POOR = "poor"


def score_to_grade(score: float) -> Grade:
    if score >= 90:
        return Grade.EXCELLENT
    if score >= 75:
        return Grade.GOOD
    if score >= 50:
        return Grade.NEEDS_IMPROVEMENT
    return Grade.POOR


def category_score(evaluations: Sequence[Evaluation]) -> int:
    """Impact-weighted average of evaluation scores; 0 for no evaluations."""
    total_weight = sum(e.impact.weight for e in evaluations)
    if total_weight == 0:
        return 0
    weighted = sum(e.score * e.impact.weight for e in evaluations)
    return round_half_up(weighted / total_weight)


def overall_score(seo_score: float, readability_score: float) -> int:
    return round_half_up(SEO_WEIGHT * seo_score + READABILITY_WEIGHT * readability_score)


@dataclass(frozen=True)
class ScoredResults:
    """Evaluations together with their aggregate scores and grades."""
    evaluations: tuple[Evaluation, ...]
    seo_score: int
    readability_score: int
    overall_score: int

    @property
    def seo_grade(self) -> Grade:
        return score_to_grade(self.seo_score)

    @property
    def readability_grade(self) -> Grade:
        return score_to_grade(self.readability_score)

    @property
    def overall_grade(self) -> Grade:
        return score_to_grade(self.overall_score)

    def to_dict(self) -> dict:
        return {
            "seoScore": self.seo_score,
            "readabilityScore": self.readability_score,
            "overallScore": self.overall_score,
            "seoGrade": self.seo_grade.value,
            "readabilityGrade": self.readability_grade.value,
            "overallGrade": self.overall_grade.value,
        }


def score_evaluations(evaluations: Sequence[Evaluation]) -> ScoredResults:
    """Compute category and overall scores for a list of evaluations."""
    seo = category_score([e for e in evaluations if e.category == AssessmentCategory.SEO])
    readability = category_score(
        [e for e in evaluations if e.category == AssessmentCategory.READABILITY]
    )
    return ScoredResults(
        evaluations=tuple(evaluations),
        seo_score=seo,
        readability_score=readability,
        overall_score=overall_score(seo, readability),
    )
