"""Base classes for the assessment framework."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pagelens.config.settings import AssessmentStandards
from pagelens.text.metrics import round_half_up

if TYPE_CHECKING:
    from pagelens.ingredients import PageIngredients
    from pagelens.parser.structure import StructuralSnapshot


class AssessmentCategory(str, Enum):
    """Category an assessment contributes its score to."""
    SEO = "seo"
    READABILITY = "readability"


class AssessmentStatus(str, Enum):
    """Health of a single finding."""
    GOOD = "good"
    OK = "ok"
    BAD = "bad"


class Impact(str, Enum):
    """Severity multiplier of a finding, used only for score aggregation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


@dataclass(frozen=True)
class Band:
    """A numeric target, either a range or a single value."""
    min: float | None = None
    max: float | None = None
    value: float | None = None
    unit: str = ""

    def to_dict(self) -> dict:
        data = {"min": self.min, "max": self.max, "value": self.value}
        data = {k: v for k, v in data.items() if v is not None}
        data["unit"] = self.unit
        return data


@dataclass(frozen=True)
class Standard:
    """The targets a threshold-based assessment judged against."""
    optimal: Band
    description: str
    acceptable: Band | None = None

    def to_dict(self) -> dict:
        data = {"optimal": self.optimal.to_dict(), "description": self.description}
        if self.acceptable is not None:
            data["acceptable"] = self.acceptable.to_dict()
        return data


@dataclass
class Evaluation:
    """Result of a single assessment.

    Attributes:
        assessment_id: Stable identifier, equal to the catalog key
        category: Category the score contributes to
        name: Human-readable name of the assessment
        description: What was found on this page
        status: Health of the finding
        score: Numeric score (0-100)
        impact: Severity multiplier for aggregation
        recommendation: Suggested fix or improvement
        details: Assessment-specific evidence
        standards: Targets the assessment judged against, if threshold-based
    """
    assessment_id: str
    category: AssessmentCategory
    name: str
    description: str
    status: AssessmentStatus
    score: int
    impact: Impact
    recommendation: str
    details: dict[str, Any] = field(default_factory=dict)
    standards: Standard | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.assessment_id,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "score": self.score,
            "impact": self.impact.value,
            "recommendation": self.recommendation,
            "details": self.details,
            "standards": self.standards.to_dict() if self.standards else None,
        }


class BaseAssessment(ABC):
    """Abstract base class for all assessments.

    Subclasses must implement:
    - assessment_id: Stable identifier from the catalog
    - name: Human-readable name
    - category: SEO or readability
    - run(): Evaluate a snapshot and return an Evaluation

    Thresholds come from the AssessmentStandards given at construction.
    """

    def __init__(self, standards: AssessmentStandards | None = None):
        self.standards = standards or AssessmentStandards()

    @property
    @abstractmethod
    def assessment_id(self) -> str:
        """Stable identifier of this assessment."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this assessment."""
        pass

    @property
    @abstractmethod
    def category(self) -> AssessmentCategory:
        """Category the score contributes to."""
        pass

    @property
    def description(self) -> str:
        """Optional description of what this assessment checks."""
        return ""

    @abstractmethod
    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        """Evaluate the snapshot.

        Args:
            snapshot: Structural snapshot of the analyzed content
            ingredients: Canonical audit inputs (keywords, page details)

        Returns:
            Evaluation with findings
        """
        pass

    def result(
        self,
        status: AssessmentStatus,
        score: float,
        impact: Impact,
        description: str,
        recommendation: str,
        details: dict[str, Any] | None = None,
        standards: Standard | None = None,
    ) -> Evaluation:
        """Build an Evaluation for this assessment, clamping the score to 0-100."""
        return Evaluation(
            assessment_id=self.assessment_id,
            category=self.category,
            name=self.name,
            description=description,
            status=status,
            score=max(0, min(100, round_half_up(score))),
            impact=impact,
            recommendation=recommendation,
            details=details or {},
            standards=standards,
        )
