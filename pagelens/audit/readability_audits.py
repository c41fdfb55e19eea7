"""Readability assessment implementations."""
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
    CJK_RE,
    ENGLISH_WORD_RE,
    chinese_ratio,
    count_syllables,
    count_words,
    split_paragraphs,
    split_sentences,
)


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    """Flesch Reading Ease from word, sentence and syllable totals."""
    if words == 0 or sentences == 0:
        return 0.0
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def interpret_flesch(score: float) -> str:
    if score >= 90:
        return "Very easy"
    if score >= 80:
        return "Easy"
    if score >= 70:
        return "Fairly easy"
    if score >= 60:
        return "Standard"
    if score >= 50:
        return "Fairly difficult"
    if score >= 30:
        return "Difficult"
    return "Very difficult"


class ReadabilityAssessment(BaseAssessment):
    """Base for assessments scored into the readability category."""

    @property
    def category(self) -> AssessmentCategory:
        return AssessmentCategory.READABILITY

    def _grade_long_share(self, long_count: int, total: int) -> tuple[AssessmentStatus, float]:
        """Grade by the share of items that are too long."""
        share = long_count / total
        status = AssessmentStatus.BAD if share > self.standards.long_share_bad_ratio else AssessmentStatus.OK
        return status, max(0.0, 100 - share * 100)


class FleschReadingEaseAudit(ReadabilityAssessment):
    """Audit for Flesch Reading Ease.

    Words come from the snapshot's word count and sentences from its text
    statistics, so the ratio uses the same units as every other rule.
    Syllables are estimated for English words, one per CJK ideograph.
    """

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.FLESCH_READING_EASE.value

    @property
    def name(self) -> str:
        return "Flesch Reading Ease"

    @property
    def description(self) -> str:
        return "Estimates how easy the content is to read"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        text = snapshot.text_content
        good, ok = self.standards.flesch_good_threshold, self.standards.flesch_ok_threshold

        if len(text) < self.standards.flesch_min_chars:
            return self.result(
                AssessmentStatus.OK, 80, Impact.LOW,
                description="Content is too short for reliable readability analysis",
                recommendation="Add more content for better readability analysis.",
                details={"contentLength": len(text), "fleschScore": 0},
            )

        words = snapshot.word_count
        sentences = snapshot.text_stats.sentence_count
        syllables = sum(count_syllables(w) for w in ENGLISH_WORD_RE.findall(text))
        syllables += len(CJK_RE.findall(text))
        flesch = flesch_reading_ease(words, sentences, syllables)

        standard = Standard(
            optimal=Band(min=good, max=100, unit="points"),
            acceptable=Band(min=ok, max=100, unit="points"),
            description=f"A Flesch score of {good:g} or more is easy to read",
        )
        details = {
            "fleschScore": round(flesch, 1),
            "interpretation": interpret_flesch(flesch),
            "words": words,
            "sentences": sentences,
            "syllables": syllables,
        }

        if flesch >= good:
            status, score, impact = AssessmentStatus.GOOD, 100, Impact.HIGH
            recommendation = "Excellent! Your content is easy to read."
        elif flesch >= ok:
            status, score, impact = AssessmentStatus.OK, 70, Impact.MEDIUM
            recommendation = "Consider simplifying your language for better readability."
        else:
            status, score, impact = AssessmentStatus.BAD, 30, Impact.HIGH
            recommendation = "Simplify your language and use shorter sentences for better readability."

        return self.result(
            status, score, impact,
            description=f"Flesch Reading Ease score: {flesch:.1f} ({interpret_flesch(flesch)})",
            recommendation=recommendation,
            details=details,
            standards=standard,
        )


class ParagraphLengthAudit(ReadabilityAssessment):
    """Audit for overly long paragraphs."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.PARAGRAPH_LENGTH_LONG.value

    @property
    def name(self) -> str:
        return "Paragraph Length"

    @property
    def description(self) -> str:
        return "Checks for paragraphs that are too long to read comfortably"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        limit = self.standards.long_paragraph_chars
        paragraphs = split_paragraphs(snapshot.text_content)
        standard = Standard(
            optimal=Band(max=limit, unit="characters"),
            description=f"Paragraphs should not exceed {limit} characters",
        )

        if not paragraphs:
            return self.result(
                AssessmentStatus.OK, 80, Impact.LOW,
                description="No paragraphs found in the content",
                recommendation="Structure your content into paragraphs for better readability.",
                details={"paragraphCount": 0, "longParagraphs": 0},
                standards=standard,
            )

        long_count = sum(1 for p in paragraphs if len(p) > limit)
        average = sum(len(p) for p in paragraphs) / len(paragraphs)
        details = {
            "paragraphCount": len(paragraphs),
            "longParagraphs": long_count,
            "avgLength": round(average, 1),
        }

        if long_count == 0:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=f"All paragraphs are under {limit} characters (average: {average:.0f})",
                recommendation="Perfect! Your paragraphs are well-sized for readability.",
                details=details,
                standards=standard,
            )

        status, score = self._grade_long_share(long_count, len(paragraphs))
        return self.result(
            status, score, Impact.MEDIUM,
            description=f"{long_count} out of {len(paragraphs)} paragraphs are too long",
            recommendation="Break up long paragraphs into shorter ones for better readability.",
            details=details,
            standards=standard,
        )


class SentenceLengthAudit(ReadabilityAssessment):
    """Audit for overly long sentences.

    Sentences that are mostly CJK are measured against a character limit
    instead of the word limit.
    """

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.SENTENCE_LENGTH_LONG.value

    @property
    def name(self) -> str:
        return "Sentence Length"

    @property
    def description(self) -> str:
        return "Checks for sentences that are too long to read comfortably"

    def is_long(self, sentence: str) -> bool:
        length = count_words(sentence)
        if chinese_ratio(sentence) > self.standards.cjk_sentence_ratio:
            return length > self.standards.long_sentence_cjk_chars
        return length > self.standards.long_sentence_words

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        limit = self.standards.long_sentence_words
        sentences = split_sentences(snapshot.text_content)
        standard = Standard(
            optimal=Band(max=limit, unit="words"),
            description=(
                f"Sentences should not exceed {limit} words "
                f"({self.standards.long_sentence_cjk_chars} characters for Chinese)"
            ),
        )

        if not sentences:
            return self.result(
                AssessmentStatus.OK, 80, Impact.LOW,
                description="No sentences found in the content",
                recommendation="Structure your content into clear sentences.",
                details={"sentenceCount": 0, "longSentences": 0},
                standards=standard,
            )

        long_count = sum(1 for s in sentences if self.is_long(s))
        average = sum(count_words(s) for s in sentences) / len(sentences)
        details = {
            "sentenceCount": len(sentences),
            "longSentences": long_count,
            "avgLength": round(average, 1),
        }

        if long_count == 0:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.HIGH,
                description=f"All sentences are within the length limit (average: {average:.1f} words)",
                recommendation="Great! Your sentences are well-sized for readability.",
                details=details,
                standards=standard,
            )

        status, score = self._grade_long_share(long_count, len(sentences))
        return self.result(
            status, score, Impact.HIGH,
            description=f"{long_count} out of {len(sentences)} sentences are too long",
            recommendation="Break up long sentences into shorter ones for better readability.",
            details=details,
            standards=standard,
        )


class SubheadingDistributionAudit(ReadabilityAssessment):
    """Audit for words per subheading."""

    @property
    def assessment_id(self) -> str:
        return AvailableAssessments.SUBHEADING_DISTRIBUTION_POOR.value

    @property
    def name(self) -> str:
        return "Subheading Distribution"

    @property
    def description(self) -> str:
        return "Checks that long content is broken up by subheadings"

    def run(self, snapshot: StructuralSnapshot, ingredients: PageIngredients) -> Evaluation:
        optimal = self.standards.subheading_words_optimal
        maximum = self.standards.subheading_words_max
        word_count = snapshot.word_count
        headings = snapshot.subheadings
        standard = Standard(
            optimal=Band(max=optimal, unit="words per heading"),
            acceptable=Band(max=maximum, unit="words per heading"),
            description=f"Add a subheading at least every {optimal} words",
        )

        if word_count < self.standards.min_content_words:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.LOW,
                description="Content is too short to require subheadings",
                recommendation="No subheadings needed for short content.",
                details={"headingCount": len(headings), "wordCount": word_count, "wordsPerHeading": 0},
                standards=standard,
            )

        if not headings:
            return self.result(
                AssessmentStatus.BAD, 30, Impact.MEDIUM,
                description="Content lacks subheadings for better organization",
                recommendation="Add subheadings (H2, H3) to organize your content better.",
                details={"headingCount": 0, "wordCount": word_count, "wordsPerHeading": word_count},
                standards=standard,
            )

        words_per_heading = word_count / len(headings)
        details = {
            "headingCount": len(headings),
            "wordCount": word_count,
            "wordsPerHeading": round(words_per_heading, 1),
        }

        if words_per_heading <= optimal:
            return self.result(
                AssessmentStatus.GOOD, 100, Impact.MEDIUM,
                description=(
                    f"{len(headings)} subheadings for {word_count} words "
                    f"({words_per_heading:.0f} words per heading)"
                ),
                recommendation="Excellent! Your subheadings are well-distributed.",
                details=details,
                standards=standard,
            )

        score = max(0.0, 100 - (words_per_heading - optimal) / optimal * 50)
        status = AssessmentStatus.BAD if words_per_heading > maximum else AssessmentStatus.OK
        return self.result(
            status, score, Impact.MEDIUM,
            description=(
                f"{len(headings)} subheadings for {word_count} words "
                f"({words_per_heading:.0f} words per heading)"
            ),
            recommendation="Add more subheadings (H2, H3) to break up long sections of text.",
            details=details,
            standards=standard,
        )


READABILITY_AUDIT_CLASSES: tuple[type[ReadabilityAssessment], ...] = (
    FleschReadingEaseAudit,
    ParagraphLengthAudit,
    SentenceLengthAudit,
    SubheadingDistributionAudit,
)
