"""Construction of the public audit report."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pagelens.audit.base import AssessmentStatus, Evaluation, Impact
from pagelens.audit.scoring import ScoredResults

MAX_HIGHLIGHTS = 3

# Internal status to public rating. Kept separate so the two can diverge.
_RATINGS = {
    AssessmentStatus.GOOD: "good",
    AssessmentStatus.OK: "ok",
    AssessmentStatus.BAD: "bad",
}


def status_to_rating(status: AssessmentStatus) -> str:
    return _RATINGS[status]


@dataclass(frozen=True)
class DetailedIssue:
    """Public view of one evaluation."""
    id: str
    name: str
    description: str
    rating: str
    recommendation: str
    impact: str
    score: int
    details: dict[str, Any] = field(default_factory=dict)
    standards: dict | None = None

    @classmethod
    def from_evaluation(cls, evaluation: Evaluation) -> DetailedIssue:
        return cls(
            id=evaluation.assessment_id,
            name=evaluation.name,
            description=evaluation.description,
            rating=status_to_rating(evaluation.status),
            recommendation=evaluation.recommendation,
            impact=evaluation.impact.value,
            score=evaluation.score,
            details=evaluation.details,
            standards=evaluation.standards.to_dict() if evaluation.standards else None,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "rating": self.rating,
            "recommendation": self.recommendation,
            "impact": self.impact,
            "score": self.score,
            "details": self.details,
        }
        if self.standards is not None:
            data["standards"] = self.standards
        return data


@dataclass(frozen=True)
class ReportSummary:
    total_issues: int
    good_issues: int
    ok_issues: int
    bad_issues: int
    critical_issues: list[DetailedIssue]
    quick_wins: list[DetailedIssue]

    def to_dict(self) -> dict:
        return {
            "totalIssues": self.total_issues,
            "goodIssues": self.good_issues,
            "okIssues": self.ok_issues,
            "badIssues": self.bad_issues,
            "criticalIssues": [i.to_dict() for i in self.critical_issues],
            "quickWins": [i.to_dict() for i in self.quick_wins],
        }


@dataclass(frozen=True)
class AuditReport:
    """Final, immutable report returned to callers."""
    url: str
    timestamp: str
    scores: ScoredResults
    detailed_issues: list[DetailedIssue]
    summary: ReportSummary

    def to_dict(self) -> dict:
        """Convert to the public JSON shape."""
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "overallScores": self.scores.to_dict(),
            "detailedIssues": [i.to_dict() for i in self.detailed_issues],
            "summary": self.summary.to_dict(),
        }


def _top_by_score(issues: list[DetailedIssue], rating: str) -> list[DetailedIssue]:
    selected = [i for i in issues if i.rating == rating and i.impact == Impact.HIGH.value]
    return sorted(selected, key=lambda i: i.score, reverse=True)[:MAX_HIGHLIGHTS]


def build_summary(issues: list[DetailedIssue]) -> ReportSummary:
    """Count ratings and pick critical issues and quick wins.

    Critical issues are bad, high-impact findings; quick wins are ok,
    high-impact findings. Each list is sorted by score, highest first.
    """
    return ReportSummary(
        total_issues=len(issues),
        good_issues=sum(1 for i in issues if i.rating == "good"),
        ok_issues=sum(1 for i in issues if i.rating == "ok"),
        bad_issues=sum(1 for i in issues if i.rating == "bad"),
        critical_issues=_top_by_score(issues, "bad"),
        quick_wins=_top_by_score(issues, "ok"),
    )


def build_report(results: ScoredResults, url: str, timestamp: datetime | None = None) -> AuditReport:
    """Build the public report from scored results.

    Args:
        results: Evaluations with aggregate scores
        url: URL of the audited page
        timestamp: Report time, defaults to now (UTC)

    Returns:
        AuditReport ready for serialization
    """
    issues = [DetailedIssue.from_evaluation(e) for e in results.evaluations]
    moment = timestamp or datetime.now(timezone.utc)
    return AuditReport(
        url=url,
        timestamp=moment.isoformat(),
        scores=results,
        detailed_issues=issues,
        summary=build_summary(issues),
    )
