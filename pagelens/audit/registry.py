"""Assessment registry for managing available assessments."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from pagelens.audit.base import AssessmentCategory, BaseAssessment, Evaluation
from pagelens.audit.readability_audits import READABILITY_AUDIT_CLASSES
from pagelens.audit.seo_audits import SEO_AUDIT_CLASSES
from pagelens.config.settings import AssessmentStandards
from pagelens.errors import AssessmentError
from pagelens.ingredients import PageIngredients
from pagelens.parser.structure import StructuralSnapshot

logger = logging.getLogger(__name__)


class AssessmentRegistry:
    """Registry for managing and running assessments.

    Usage:
        registry = build_default_registry()
        evaluations = registry.run_selected(ids, snapshot, ingredients)
    """

    def __init__(self):
        self._assessments: dict[str, BaseAssessment] = {}
        self._categories: dict[AssessmentCategory, list[str]] = {}

    def register(self, assessment: BaseAssessment) -> None:
        """Register an assessment instance.

        Args:
            assessment: Assessment instance to register
        """
        self._assessments[assessment.assessment_id] = assessment
        self._categories.setdefault(assessment.category, []).append(assessment.assessment_id)

    def get(self, assessment_id: str) -> BaseAssessment | None:
        """Get an assessment by ID.

        Args:
            assessment_id: ID of assessment to retrieve

        Returns:
            Assessment instance or None if not found
        """
        return self._assessments.get(assessment_id)

    def get_by_category(self, category: AssessmentCategory) -> list[BaseAssessment]:
        """Get all assessments in a category.

        Args:
            category: Category to filter on

        Returns:
            List of assessment instances in the category
        """
        ids = self._categories.get(category, [])
        return [self._assessments[aid] for aid in ids if aid in self._assessments]

    def list_all(self) -> list[BaseAssessment]:
        """List all registered assessments in registration order."""
        return list(self._assessments.values())

    def __len__(self) -> int:
        return len(self._assessments)

    def run(
        self,
        assessment_id: str,
        snapshot: StructuralSnapshot,
        ingredients: PageIngredients,
    ) -> Evaluation | None:
        """Run a specific assessment.

        Returns:
            Evaluation or None if the assessment is not registered

        Raises:
            AssessmentError: If the assessment raised unexpectedly
        """
        assessment = self._assessments.get(assessment_id)
        if assessment is None:
            return None
        try:
            return assessment.run(snapshot, ingredients)
        except Exception as exc:
            logger.exception("Assessment %s failed", assessment_id)
            raise AssessmentError(
                f"{assessment_id} raised {type(exc).__name__}: {exc}",
                details={"assessmentId": assessment_id},
            ) from exc

    def run_selected(
        self,
        assessment_ids: Iterable[str],
        snapshot: StructuralSnapshot,
        ingredients: PageIngredients,
    ) -> list[Evaluation]:
        """Run the given assessments in order, skipping unknown IDs."""
        evaluations = []
        for assessment_id in assessment_ids:
            evaluation = self.run(assessment_id, snapshot, ingredients)
            if evaluation is not None:
                evaluations.append(evaluation)
        return evaluations

    def run_all(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> list[Evaluation]:
        """Run every registered assessment."""
        return self.run_selected(list(self._assessments), snapshot, ingredients)


def build_default_registry(standards: AssessmentStandards | None = None) -> AssessmentRegistry:
    """Build a registry holding the full catalog, configured with the given standards."""
    registry = AssessmentRegistry()
    for audit_class in SEO_AUDIT_CLASSES + READABILITY_AUDIT_CLASSES:
        registry.register(audit_class(standards))
    return registry
