"""Assessment framework for SEO and readability checks."""
from pagelens.audit.base import (
    AssessmentCategory,
    AssessmentStatus,
    BaseAssessment,
    Evaluation,
    Impact,
    Standard,
)
from pagelens.audit.catalog import (
    READABILITY_ASSESSMENTS,
    SEO_ASSESSMENTS,
    AvailableAssessments,
)
from pagelens.audit.config import AssessmentConfig, resolve_enabled_assessments, validate_config
from pagelens.audit.registry import AssessmentRegistry, build_default_registry
from pagelens.audit.scoring import Grade, ScoredResults, score_evaluations

__all__ = [
    "AssessmentCategory",
    "AssessmentConfig",
    "AssessmentRegistry",
    "AssessmentStatus",
    "AvailableAssessments",
    "BaseAssessment",
    "Evaluation",
    "Grade",
    "Impact",
    "READABILITY_ASSESSMENTS",
    "SEO_ASSESSMENTS",
    "ScoredResults",
    "Standard",
    "build_default_registry",
    "resolve_enabled_assessments",
    "score_evaluations",
    "validate_config",
]
