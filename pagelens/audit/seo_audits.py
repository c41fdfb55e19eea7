"""SEO assessment implementations."""
from __future__ import annotations

from pagelens.audit.base import (
    AssessmentCategory,
    AssessmentStatus,
    Band,
    BaseAssessment,
    Evaluation,
    Impact,
    Standard,
)
from pagelens.audit.catalog import AvailableAssessments
from pagelens.ingredients import PageIngredients
from pagelens.parser.structure import StructuralSnapshot
from pagelens.text.metrics import (
    char_equivalent,
    contains_all_characters,
    find_matching_related_keyword,
    keyword_match_chars,
    text_pixel_width,
)

NO_KEYWORD_REASON = "No focus keyword provided"


class SEOAssessment(BaseAssessment):
    """Base for assessments scored into the SEO category."""

    @property
    def category(self) -> AssessmentCategory:
        return AssessmentCategory.SEO

    def skipped_without_keyword(self, subject: str, **details) -> Evaluation:
        """Neutral result for keyword checks when no focus keyword was given."""
        return self.result(
            AssessmentStatus.OK,
            75,
            Impact.LOW,
            description=f"No focus keyword provided for {subject} analysis",
            recommendation=f"Set a focus keyword to analyze {subject} optimization.",
            details={**details, "reason": NO_KEYWORD_REASON},
        )


class H1PresenceAudit(SEOAssessment):
    """Audit for the presence of an H1 heading."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.H1_MISSING.value

    @property
    def name(self) -> str:
        return "H1 Heading"

    @property
    def description(self) -> str:
        return "Checks that the page has at least one H1 heading"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        h1_count = len(snapshot.headings_at(1))

        if h1_count == 0:
            return self.result(
                AssessmentStatus.BAD, 0, Impact.HIGH,
                description="Page is missing an H1 heading",
                recommendation="Add exactly one H1 heading that describes the main topic of your page.",
                details={"h1Count": 0},
            )

        return self.result(
            AssessmentStatus.GOOD, 100, Impact.HIGH,
            description="Page has an H1 heading",
            recommendation="Great! Your page has an H1 heading.",
            details={"h1Count": h1_count},
        )


class SingleH1Audit(SEOAssessment):
    """Audit for exactly one H1 heading."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.MULTIPLE_H1.value

    @property
    def name(self) -> str:
        return "Single H1 Heading"

    @property
    def description(self) -> str:
        return "Checks that the page has exactly one H1 heading"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        h1s = snapshot.headings_at(1)
        details = {"h1Count": len(h1s), "h1Texts": [h.text for h in h1s]}

        if len(h1s) == 1:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description="Page has exactly one H1 heading",
                recommendation="Perfect! Your page has exactly one H1 heading.",
                details=details,
            )

        if len(h1s) > 1:
            return self.result(
                AssessmentStatus.BAD, 40, Impact.MEDIUM,
                description=f"Page has {len(h1s)} H1 headings",
                recommendation="Use only one H1 heading per page. Convert additional H1s to H2 or H3.",
                details=details,
            )

        return self.result(
            AssessmentStatus.BAD, 0, Impact.MEDIUM,
            description="Page has no H1 heading",
            recommendation="Add exactly one H1 heading.",
            details=details,
        )


class _KeywordPlacementAudit(SEOAssessment):
    """Shared grading of focus and related keywords within one piece of text.

    Both present is GOOD, focus only and related only are OK, neither is BAD.
    Matching is character-level containment.
    """

    subject = ""
    neither_score = 40

    def target_text(self, snapshot: StructuralSnapshot) -> str | None:
        raise NotImplementedError

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        text = self.target_text(snapshot)
        text_key = f"{self.subject.lower()}Text"
        focus = ingredients.focus_keyword
        related = list(ingredients.related_keywords)

        if not focus:
            return self.skipped_without_keyword(self.subject, **{text_key: text})

        if text is None:
            return self.result(
                AssessmentStatus.BAD, 0, Impact.HIGH,
                description=f"Cannot analyze {self.subject} keyword because {self.subject} is missing",
                recommendation=f"Add an {self.subject} that includes your focus keyword.",
                details={"reason": f"No {self.subject} found"},
            )

        has_focus = contains_all_characters(text, focus)
        matching_related = find_matching_related_keyword(text, related)
        details = {
            text_key: text,
            "focusKeyword": focus,
            "hasFocusKeyword": has_focus,
            "hasRelatedKeyword": matching_related is not None,
        }
        if matching_related:
            details["matchingRelatedKeyword"] = matching_related

        if has_focus and matching_related:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.HIGH,
                description=f"{self.subject} contains focus keyword and a related keyword",
                recommendation=f"Perfect! Your {self.subject} contains both the focus keyword and a related keyword.",
                details=details,
            )

        if has_focus:
            details["availableRelatedKeywords"] = related
            recommendation = (
                f"Good! {self.subject} contains focus keyword. Consider also including one of "
                f"these related keywords: {', '.join(related)}"
                if related
                else f"Good! {self.subject} contains focus keyword. Consider adding related keywords."
            )
            return self.result(
                AssessmentStatus.OK, 75, Impact.HIGH,
                description=f"{self.subject} contains focus keyword but no related keyword",
                recommendation=recommendation,
                details=details,
            )

        if matching_related:
            return self.result(
                AssessmentStatus.OK, 50, Impact.HIGH,
                description=f"{self.subject} contains a related keyword but not the focus keyword",
                recommendation=(
                    f'{self.subject} contains related keyword "{matching_related}" but is missing the '
                    f'focus keyword "{focus}". Include the focus keyword for better SEO.'
                ),
                details=details,
            )

        details["availableRelatedKeywords"] = related
        return self.result(
            AssessmentStatus.BAD, self.neither_score, Impact.HIGH,
            description=f"{self.subject} is missing both focus and related keywords",
            recommendation=(
                f'Include your focus keyword "{focus}" and at least one related keyword '
                f"in the {self.subject}."
            ),
            details=details,
        )


class H1KeywordAudit(_KeywordPlacementAudit):
    """Audit for keywords in the first H1 heading."""

    subject = "H1"
    neither_score = 40

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.H1_KEYWORD_MISSING.value

    @property
    def name(self) -> str:
        return "Keyword in H1"

    @property
    def description(self) -> str:
        return "Checks that the first H1 contains the focus and a related keyword"

    def target_text(self, snapshot: StructuralSnapshot) -> str | None:
        h1s = snapshot.headings_at(1)
        return h1s[0].text if h1s else None


class TitleKeywordAudit(_KeywordPlacementAudit):
    """Audit for keywords in the page title."""

    subject = "Title"
    neither_score = 30

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.TITLE_MISSING.value

    @property
    def name(self) -> str:
        return "Keyword in Title"

    @property
    def description(self) -> str:
        return "Checks that the title contains the focus and a related keyword"

    def target_text(self, snapshot: StructuralSnapshot) -> str | None:
        return snapshot.title


class H2RelatedKeywordsAudit(SEOAssessment):
    """Audit for related keyword coverage across H2 headings."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.H2_SYNONYMS_MISSING.value

    @property
    def name(self) -> str:
        return "Related Keywords in H2"

    @property
    def description(self) -> str:
        return "Checks that related keywords appear in H2 headings"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        related = list(ingredients.related_keywords)
        if not ingredients.focus_keyword:
            return self.skipped_without_keyword("H2")

        if not related:
            return self.result(
                AssessmentStatus.OK, 75, Impact.LOW,
                description="No related keywords provided for H2 analysis",
                recommendation="Provide related keywords to analyze H2 optimization.",
                details={"reason": "No related keywords provided"},
            )

        h2s = snapshot.headings_at(2)
        if not h2s:
            return self.result(
                AssessmentStatus.BAD, 40, Impact.MEDIUM,
                description="No H2 headings found to check for related keywords",
                recommendation="Add H2 headings that include your related keywords.",
                details={"h2Count": 0, "relatedKeywords": related},
            )

        # Whole-phrase substring match, stricter than the character containment
        # used for H1 and title.
        h2_text = " ".join(h.text.lower() for h in h2s)
        found = [k for k in related if k in h2_text]
        missing = [k for k in related if k not in h2_text]
        coverage = len(found) / len(related) * 100
        details = {
            "h2Count": len(h2s),
            "coverage": round(coverage, 1),
            "foundKeywords": found,
            "missingKeywords": missing,
        }

        if coverage == 100:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description="All related keywords appear in H2 headings",
                recommendation="Excellent! All your related keywords appear in H2 headings.",
                details=details,
            )

        if coverage >= 50:
            return self.result(
                AssessmentStatus.OK, 70 + coverage * 0.3, Impact.MEDIUM,
                description=f"{len(found)} out of {len(related)} related keywords found in H2",
                recommendation=f"Consider including these keywords in H2 headings: {', '.join(missing)}",
                details=details,
            )

        return self.result(
            AssessmentStatus.BAD, 40 + coverage * 0.6, Impact.MEDIUM,
            description=f"Only {len(found)} out of {len(related)} related keywords found in H2",
            recommendation=f"Include these related keywords in your H2 headings: {', '.join(missing)}",
            details=details,
        )


class ImageAltAudit(SEOAssessment):
    """Audit for image alt text."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.IMAGES_MISSING_ALT.value

    @property
    def name(self) -> str:
        return "Image Alt Text"

    @property
    def description(self) -> str:
        return "Checks that every image carries alt text"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        images = snapshot.images
        standard = Standard(
            optimal=Band(value=0, unit="missing"),
            description="Every image should have an alt attribute",
        )

        if not images:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description="No images found on the page",
                recommendation="Consider adding relevant images with descriptive alt text.",
                details={"totalImages": 0},
                standards=standard,
            )

        missing = [img for img in images if not img.has_alt]
        details = {
            "totalImages": len(images),
            "imagesWithoutAlt": len(missing),
            "missingSources": [img.src for img in missing[:10]],
        }

        if not missing:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=f"All {len(images)} images have alt text",
                recommendation="Great! All your images have descriptive alt text.",
                details=details,
                standards=standard,
            )

        missing_pct = len(missing) / len(images) * 100
        return self.result(
            AssessmentStatus.BAD, 100 - missing_pct, Impact.MEDIUM,
            description=f"{len(missing)} out of {len(images)} images are missing alt text",
            recommendation="Add descriptive alt text to every image for accessibility and image search.",
            details=details,
            standards=standard,
        )


class KeywordFirstParagraphAudit(SEOAssessment):
    """Audit for the focus keyword near the start of the content."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.KEYWORD_MISSING_FIRST_PARAGRAPH.value

    @property
    def name(self) -> str:
        return "Keyword in Introduction"

    @property
    def description(self) -> str:
        return "Checks that the focus keyword appears in the opening text"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        focus = ingredients.focus_keyword
        if not focus:
            return self.skipped_without_keyword("introduction")

        window = snapshot.text_content[: self.standards.first_paragraph_window]
        details = {"focusKeyword": focus, "openingText": window}

        if contains_all_characters(window, focus):
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.HIGH,
                description="Focus keyword appears in the opening text",
                recommendation="Great! Your focus keyword appears early in the content.",
                details=details,
            )

        return self.result(
            AssessmentStatus.BAD, 30, Impact.HIGH,
            description="Focus keyword is missing from the opening text",
            recommendation=(
                f'Mention your focus keyword "{focus}" within the first '
                f"{self.standards.first_paragraph_window} characters of the content."
            ),
            details=details,
        )


class KeywordDensityAudit(SEOAssessment):
    """Audit for keyword density in the opening text.

    Only a floor is enforced; there is no upper limit on density.
    """

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.KEYWORD_DENSITY_LOW.value

    @property
    def name(self) -> str:
        return "Keyword Density"

    @property
    def description(self) -> str:
        return "Checks how much of the opening text is made up of keywords"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        focus = ingredients.focus_keyword
        if not focus:
            return self.skipped_without_keyword("keyword density")

        window_size = self.standards.density_window
        minimum = self.standards.density_min_percent
        standard = Standard(
            optimal=Band(min=minimum, unit="%"),
            description=f"Keywords should make up at least {minimum:g}% of the first {window_size} characters",
        )

        window = snapshot.text_content[:window_size]
        matched = keyword_match_chars(window, ingredients.all_keywords)
        density = matched / window_size * 100
        details = {
            "density": round(density, 1),
            "matchedCharacters": matched,
            "windowSize": window_size,
            "keywords": ingredients.all_keywords,
        }

        if density >= minimum:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=f"Keyword density is {density:.1f}% in the opening text",
                recommendation="Perfect! Your keywords are well represented in the opening text.",
                details=details,
                standards=standard,
            )

        return self.result(
            AssessmentStatus.BAD, 20 if matched == 0 else 40, Impact.MEDIUM,
            description=f"Keyword density is {density:.1f}% (minimum {minimum:g}%)",
            recommendation="Use your focus and related keywords more often at the start of the content.",
            details=details,
            standards=standard,
        )


class MetaDescriptionKeywordAudit(SEOAssessment):
    """Audit for the focus keyword in the meta description."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.META_DESCRIPTION_NEEDS_IMPROVEMENT.value

    @property
    def name(self) -> str:
        return "Keyword in Meta Description"

    @property
    def description(self) -> str:
        return "Checks that the meta description contains the focus keyword"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        focus = ingredients.focus_keyword
        meta = snapshot.meta_description or ""
        if not focus:
            return self.skipped_without_keyword("meta description")

        if not meta:
            return self.result(
                AssessmentStatus.BAD, 0, Impact.HIGH,
                description="Page has no meta description to check for the focus keyword",
                recommendation=f'Add a meta description that includes your focus keyword "{focus}".',
                details={"focusKeyword": focus, "hasMetaDescription": False},
            )

        details = {"focusKeyword": focus, "metaDescription": meta}
        if contains_all_characters(meta, focus):
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.HIGH,
                description="Meta description contains the focus keyword",
                recommendation="Great! Your meta description includes the focus keyword.",
                details=details,
            )

        return self.result(
            AssessmentStatus.BAD, 50, Impact.HIGH,
            description="Meta description does not contain the focus keyword",
            recommendation=f'Include your focus keyword "{focus}" in the meta description.',
            details=details,
        )


class MetaDescriptionLengthAudit(SEOAssessment):
    """Audit for the rendered width of the meta description."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.META_DESCRIPTION_MISSING.value

    @property
    def name(self) -> str:
        return "Meta Description Length"

    @property
    def description(self) -> str:
        return "Checks the meta description's rendered width"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        low, high = self.standards.meta_min_width, self.standards.meta_max_width
        standard = Standard(
            optimal=Band(min=low, max=high, unit="px"),
            acceptable=Band(min=self.standards.meta_acceptable_min_width, max=high, unit="px"),
            description=f"Meta description width should be {low}-{high}px",
        )
        width = text_pixel_width(snapshot.meta_description or "")
        details = {"pixelWidth": width, "charEquivalent": char_equivalent(width)}

        if width == 0:
            return self.result(
                AssessmentStatus.BAD, 0, Impact.HIGH,
                description="Page is missing a meta description",
                recommendation=f"Add a meta description (optimal width: {low}-{high}px).",
                details=details,
                standards=standard,
            )

        if low <= width <= high:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=f"Meta description width is {width}px",
                recommendation="Perfect! Your meta description width is optimal.",
                details=details,
                standards=standard,
            )

        too_long = width > high
        return self.result(
            AssessmentStatus.OK, 40 if too_long else 70, Impact.MEDIUM,
            description=f"Meta description width is {width}px (recommended: {low}-{high}px)",
            recommendation=(
                "Shorten your meta description so it is not truncated in search results."
                if too_long
                else "Expand your meta description to describe the page more fully."
            ),
            details=details,
            standards=standard,
        )


class TitleWidthAudit(SEOAssessment):
    """Audit for the rendered width of the title."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.TITLE_NEEDS_IMPROVEMENT.value

    @property
    def name(self) -> str:
        return "Title Width"

    @property
    def description(self) -> str:
        return "Checks the title's rendered width"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        low, high = self.standards.title_min_width, self.standards.title_max_width
        standard = Standard(
            optimal=Band(min=low, max=high, unit="px"),
            acceptable=Band(min=self.standards.title_acceptable_min_width, max=high, unit="px"),
            description=f"Title width should be {low}-{high}px",
        )
        width = text_pixel_width(snapshot.title)
        details = {"pixelWidth": width, "charEquivalent": char_equivalent(width)}

        if width == 0:
            return self.result(
                AssessmentStatus.BAD, 0, Impact.HIGH,
                description="Page is missing a title",
                recommendation=f"Add a descriptive title (optimal width: {low}-{high}px).",
                details=details,
                standards=standard,
            )

        if low <= width <= high:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.HIGH,
                description=f"Title width is {width}px",
                recommendation="Perfect! Your title width is optimal.",
                details=details,
                standards=standard,
            )

        if width > high:
            return self.result(
                AssessmentStatus.BAD, 40, Impact.HIGH,
                description=f"Title width is {width}px (max: {high}px)",
                recommendation="Consider shortening your title.",
                details=details,
                standards=standard,
            )

        return self.result(
            AssessmentStatus.OK, 70, Impact.HIGH,
            description=f"Title width is {width}px (recommended: at least {low}px)",
            recommendation="Consider expanding your title.",
            details=details,
            standards=standard,
        )


class ContentLengthAudit(SEOAssessment):
    """Audit for minimum content length."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.CONTENT_LENGTH_SHORT.value

    @property
    def name(self) -> str:
        return "Content Length"

    @property
    def description(self) -> str:
        return "Checks that the page has enough words"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        minimum = self.standards.min_content_words
        word_count = snapshot.word_count
        standard = Standard(
            optimal=Band(min=minimum, unit="words"),
            description=f"Content should have at least {minimum} words",
        )
        details = {"wordCount": word_count, "minimumWords": minimum}

        if word_count >= minimum:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=f"Content has {word_count} words",
                recommendation="Great! Your content length is sufficient.",
                details=details,
                standards=standard,
            )

        return self.result(
            AssessmentStatus.BAD, word_count / minimum * 100, Impact.MEDIUM,
            description=f"Content has only {word_count} words (minimum {minimum})",
            recommendation=f"Add more content. Aim for at least {minimum} words.",
            details=details,
            standards=standard,
        )


SEO_AUDIT_CLASSES: tuple[type[SEOAssessment], ...] = (
    H1PresenceAudit,
    SingleH1Audit,
    H1KeywordAudit,
    H2RelatedKeywordsAudit,
    ImageAltAudit,
    KeywordFirstParagraphAudit,
    KeywordDensityAudit,
    MetaDescriptionKeywordAudit,
    MetaDescriptionLengthAudit,
    TitleWidthAudit,
    TitleKeywordAudit,
    ContentLengthAudit,
)
