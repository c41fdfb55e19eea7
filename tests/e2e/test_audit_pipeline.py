"""End-to-end tests for the audit pipeline."""
from __future__ import annotations

import pytest

from pagelens.audit.config import AssessmentConfig
from pagelens.audit.seo_audits import ContentLengthAudit
from pagelens.config.settings import AssessmentStandards
from pagelens.ingredients import PageDetails
from pagelens.pipeline import AuditOptions, run_audit

KEYWORD_DEPENDENT = {
    "H1_KEYWORD_MISSING",
    "TITLE_MISSING",
    "H2_SYNONYMS_MISSING",
    "KEYWORD_MISSING_FIRST_PARAGRAPH",
    "KEYWORD_DENSITY_LOW",
    "META_DESCRIPTION_NEEDS_IMPROVEMENT",
}


def issues_by_id(outcome) -> dict:
    return {issue.id: issue for issue in outcome.report.detailed_issues}


class TestSuccessfulAudit:
    """Tests for complete audits of valid pages."""

    def test_full_catalog(self, valid_html, page_details):
        """A valid page yields one issue per assessment."""
        outcome = run_audit(valid_html, page_details, "coffee beans", ["arabica", "roasting"])

        assert outcome.success is True
        assert outcome.error is None
        assert outcome.processing_time_ms >= 0
        assert len(outcome.report.detailed_issues) == 16

    def test_summary_counts_add_up(self, valid_html, page_details):
        """Rating counts add up to the number of issues."""
        summary = run_audit(valid_html, page_details, "coffee beans").report.summary
        assert summary.good_issues + summary.ok_issues + summary.bad_issues == summary.total_issues
        assert len(summary.critical_issues) <= 3
        assert len(summary.quick_wins) <= 3

    def test_report_url_is_page_url(self, valid_html, page_details):
        """The report carries the page URL."""
        outcome = run_audit(valid_html, page_details, "coffee beans")
        assert outcome.report.url == page_details.url

    def test_page_understanding(self, valid_html, page_details):
        """Page understanding summarizes the structure, with the page URL as link base."""
        understanding = run_audit(valid_html, page_details, "coffee beans").page_understanding
        assert understanding.h1_count == 1
        assert understanding.h2_count == 2
        assert understanding.image_count == 2
        assert understanding.external_links == 1
        assert understanding.internal_links == 5
        assert understanding.author == "Jane Doe"
        assert "Article" in understanding.structured_data_types

    def test_explicit_base_url(self, valid_html, page_details):
        """An explicit base URL overrides the page URL for link classification."""
        options = AuditOptions(base_url="https://other.org/")
        understanding = run_audit(valid_html, page_details, options=options).page_understanding
        assert understanding.external_links == 2
        assert understanding.internal_links == 4

    def test_to_dict_shape(self, valid_html, page_details):
        """The outcome serializes with camelCase keys."""
        data = run_audit(valid_html, page_details, "coffee beans").to_dict()
        assert set(data) == {"success", "processingTimeMs", "report", "pageUnderstanding"}


class TestScenarios:
    """Behavior on characteristic pages."""

    def test_missing_h1(self, html_no_h1, mock_url):
        """A page without H1 fails H1_MISSING with a zero score."""
        outcome = run_audit(html_no_h1, PageDetails(url=mock_url, title="No Heading Page"), "heading")
        issue = issues_by_id(outcome)["H1_MISSING"]
        assert issue.rating == "bad"
        assert issue.score == 0
        assert issue.impact == "high"

    def test_multiple_h1(self, html_multiple_h1, mock_url):
        """Two H1 headings fail MULTIPLE_H1."""
        outcome = run_audit(html_multiple_h1, PageDetails(url=mock_url, title="Multiple H1 Test"), "test")
        issue = issues_by_id(outcome)["MULTIPLE_H1"]
        assert issue.rating == "bad"
        assert issue.score == 40

    def test_three_hundred_word_article(self, english_article_html, mock_url):
        """A 300-word article meets the length minimum; no meta description scores zero."""
        html = english_article_html(words=300, h1="Best Coffee Beans Guide")
        outcome = run_audit(html, PageDetails(url=mock_url, title="Coffee"), "coffee beans", ["guide"])
        issues = issues_by_id(outcome)

        assert outcome.page_understanding.word_count == 300
        assert issues["CONTENT_LENGTH_SHORT"].rating == "good"
        assert issues["CONTENT_LENGTH_SHORT"].score == 100
        assert issues["H1_KEYWORD_MISSING"].rating == "good"
        assert issues["META_DESCRIPTION_MISSING"].rating == "bad"
        assert issues["META_DESCRIPTION_MISSING"].score == 0

    def test_empty_focus_keyword(self, valid_html, page_details):
        """Without a focus keyword every keyword check is neutral."""
        outcome = run_audit(valid_html, page_details, "", ["arabica"])
        assert outcome.success
        issues = issues_by_id(outcome)
        for assessment_id in KEYWORD_DEPENDENT:
            assert issues[assessment_id].rating == "ok"
            assert issues[assessment_id].score == 75
            assert issues[assessment_id].impact == "low"

    def test_related_keywords_only_in_h2(self, english_article_html, mock_url):
        """Related keywords in H2 headings are found."""
        html = english_article_html(h2s=("Arabica Origins", "Roasting Basics"))
        outcome = run_audit(
            html, PageDetails(url=mock_url, title="Coffee"), "coffee", ["arabica", "roasting"]
        )
        assert issues_by_id(outcome)["H2_SYNONYMS_MISSING"].rating == "good"


class TestOptions:
    """Tests for audit options."""

    def test_readability_only(self, valid_html, page_details):
        """Selecting only readability runs four assessments and scores SEO as zero."""
        options = AuditOptions(assessment_config=AssessmentConfig(enable_all_readability=True))
        outcome = run_audit(valid_html, page_details, "coffee beans", options=options)

        assert len(outcome.report.detailed_issues) == 4
        assert outcome.report.scores.seo_score == 0
        assert outcome.report.scores.overall_score == round(outcome.report.scores.readability_score * 0.4)

    def test_specific_assessments(self, valid_html, page_details):
        """Specific IDs run in catalog order."""
        options = AuditOptions(
            assessment_config=AssessmentConfig.only(["FLESCH_READING_EASE", "H1_MISSING"])
        )
        outcome = run_audit(valid_html, page_details, "coffee beans", options=options)
        assert [i.id for i in outcome.report.detailed_issues] == ["H1_MISSING", "FLESCH_READING_EASE"]

    def test_custom_standards(self, valid_html, page_details):
        """Thresholds can be supplied per run."""
        outcome = run_audit(
            valid_html, page_details, "coffee beans",
            standards=AssessmentStandards(min_content_words=10),
        )
        assert issues_by_id(outcome)["CONTENT_LENGTH_SHORT"].rating == "good"


class TestStageFailures:
    """Each stage reports its own failures."""

    def test_gathering_failure(self, short_html, page_details):
        """Short HTML fails during gathering."""
        outcome = run_audit(short_html, page_details)

        assert outcome.success is False
        assert outcome.report is None
        assert outcome.page_understanding is None
        assert outcome.error.code == "VALIDATION_ERROR"
        assert outcome.error.stage == "gathering"
        assert outcome.error.message.startswith("Ingredients gathering failed:")
        assert outcome.processing_time_ms >= 0

    def test_missing_url(self, valid_html):
        """A missing URL fails during gathering."""
        outcome = run_audit(valid_html, PageDetails(url="", title="Title"))
        assert outcome.error.message == "Ingredients gathering failed: Page URL is required"

    def test_extraction_failure(self, page_details):
        """A document with no title and no text fails during extraction."""
        html = "<html><head></head><body>" + "<div></div>" * 20 + "</body></html>"
        outcome = run_audit(html, page_details)

        assert outcome.error.code == "EXTRACTION_ERROR"
        assert outcome.error.stage == "extraction"
        assert outcome.error.message.startswith("Content extraction failed:")

    def test_invalid_selector(self, valid_html, page_details):
        """An invalid selector fails during extraction."""
        outcome = run_audit(valid_html, page_details, options=AuditOptions(content_selectors=["div[["]))
        assert outcome.error.code == "EXTRACTION_ERROR"

    def test_assessment_failure(self, valid_html, page_details, monkeypatch):
        """An assessment raising fails during assessment."""

        def boom(self, snapshot, ingredients):
            raise ZeroDivisionError("division by zero")

        monkeypatch.setattr(ContentLengthAudit, "run", boom)
        outcome = run_audit(valid_html, page_details, "coffee")

        assert outcome.error.code == "ASSESSMENT_ERROR"
        assert outcome.error.stage == "assessment"
        assert outcome.error.message.startswith("Test execution failed:")
        assert outcome.error.details == {"assessmentId": "CONTENT_LENGTH_SHORT"}

    def test_formatting_failure(self, valid_html, page_details, monkeypatch):
        """A report that cannot be built fails during formatting."""

        def broken_report(*args, **kwargs):
            raise TypeError("bad timestamp")

        monkeypatch.setattr("pagelens.pipeline.build_report", broken_report)
        outcome = run_audit(valid_html, page_details, "coffee")

        assert outcome.error.code == "FORMAT_ERROR"
        assert outcome.error.stage == "formatting"
        assert outcome.error.message == "Report generation failed: TypeError: bad timestamp"

    @pytest.mark.parametrize("bad_html", ["", "   "])
    def test_failure_serializes(self, bad_html, page_details):
        """Failed outcomes serialize without a report."""
        data = run_audit(bad_html, page_details).to_dict()
        assert data["success"] is False
        assert "report" not in data
        assert data["error"]["stage"] == "gathering"
