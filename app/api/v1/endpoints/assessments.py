"""Assessment catalog endpoint."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.models.responses import AssessmentInfo, AssessmentsResponse
from pagelens.audit.base import AssessmentCategory
from pagelens.audit.config import CONFIG_EXAMPLES
from pagelens.audit.registry import build_default_registry
from pagelens.config.settings import settings

router = APIRouter(tags=["Assessments"])


@router.get(
    "/assessments",
    response_model=AssessmentsResponse,
    summary="List assessments",
    description="List every assessment ID by category, with assessment selection examples.",
)
def list_assessments() -> AssessmentsResponse:
    """Return the assessment catalog."""
    registry = build_default_registry(settings.standards)

    def infos(category: AssessmentCategory) -> list[AssessmentInfo]:
        return [
            AssessmentInfo(
                id=a.assessment_id,
                category=a.category.value,
                name=a.name,
                description=a.description,
            )
            for a in registry.get_by_category(category)
        ]

    return AssessmentsResponse(
        total=len(registry),
        seo=infos(AssessmentCategory.SEO),
        readability=infos(AssessmentCategory.READABILITY),
        config_examples=CONFIG_EXAMPLES,
    )
