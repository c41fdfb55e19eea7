"""Selection of which assessments run."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from pagelens.audit.catalog import (
    ALL_ASSESSMENTS,
    READABILITY_ASSESSMENTS,
    SEO_ASSESSMENTS,
    is_valid_assessment_id,
)


@dataclass(frozen=True)
class AssessmentConfig:
    """Caller-supplied assessment selection.

    An empty configuration selects the full catalog.
    """
    enable_all: bool = False
    enable_all_seo: bool = False
    enable_all_readability: bool = False
    enabled_assessments: tuple[str, ...] = ()

    @classmethod
    def only(cls, assessment_ids: Iterable[str]) -> AssessmentConfig:
        return cls(enabled_assessments=tuple(assessment_ids))

    @property
    def is_empty(self) -> bool:
        return not (
            self.enable_all
            or self.enable_all_seo
            or self.enable_all_readability
            or self.enabled_assessments
        )


@dataclass
class ConfigValidation:
    """Outcome of validating an AssessmentConfig."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": self.errors, "warnings": self.warnings}


def validate_config(config: AssessmentConfig) -> ConfigValidation:
    """Check an assessment selection for unknown IDs and conflicting flags."""
    result = ConfigValidation()
    specific = list(config.enabled_assessments)

    if config.enable_all and (specific or config.enable_all_seo or config.enable_all_readability):
        result.warnings.append(
            "enable_all is set, specific assessment configurations will be ignored"
        )

    invalid = [a for a in specific if not is_valid_assessment_id(a)]
    if invalid:
        result.errors.append(f"Invalid assessments specified: {', '.join(invalid)}")

    if specific and len(invalid) == len(specific) and not (
        config.enable_all or config.enable_all_seo or config.enable_all_readability
    ):
        result.warnings.append("No valid assessments enabled, no tests will be run")

    if config.is_empty:
        result.warnings.append("No assessments enabled, all assessments will be run by default")

    return result


def sanitize_config(config: AssessmentConfig) -> AssessmentConfig:
    """Drop unknown assessment IDs, keeping everything else."""
    return replace(
        config,
        enabled_assessments=tuple(a for a in config.enabled_assessments if is_valid_assessment_id(a)),
    )


def resolve_enabled_assessments(config: AssessmentConfig | None) -> list[str]:
    """Resolve a selection to assessment IDs in catalog order.

    No configuration, or an empty one, resolves to the full catalog.
    Unknown IDs are ignored.
    """
    if config is None or config.is_empty or config.enable_all:
        return [a.value for a in ALL_ASSESSMENTS]

    selected: set[str] = set()
    if config.enable_all_seo:
        selected.update(a.value for a in SEO_ASSESSMENTS)
    if config.enable_all_readability:
        selected.update(a.value for a in READABILITY_ASSESSMENTS)
    selected.update(a for a in config.enabled_assessments if is_valid_assessment_id(a))

    return [a.value for a in ALL_ASSESSMENTS if a.value in selected]


CONFIG_EXAMPLES = {
    "enableAll": {"enableAll": True},
    "onlySEO": {"enableAllSEO": True},
    "onlyReadability": {"enableAllReadability": True},
    "specific": {
        "enabledAssessments": ["MULTIPLE_H1", "IMAGES_MISSING_ALT", "FLESCH_READING_EASE"],
    },
    "mixed": {
        "enableAllSEO": True,
        "enabledAssessments": ["FLESCH_READING_EASE", "PARAGRAPH_LENGTH_LONG"],
    },
}
