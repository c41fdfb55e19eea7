"""Tests for the command line interface."""
from __future__ import annotations

import json

from typer.testing import CliRunner

from pagelens import __version__
from pagelens.cli.run import app

runner = CliRunner()


class TestAuditCommand:
    """Tests for `pagelens audit`."""

    def test_audit_local_file_saves_json(self, tmp_path, valid_html, mock_url):
        """Auditing a local file writes the JSON report."""
        page = tmp_path / "page.html"
        page.write_text(valid_html, encoding="utf-8")
        out = tmp_path / "report.json"

        runner.invoke(app, [
            "audit", str(page), "--url", mock_url,
            "-k", "coffee beans", "-r", "arabica", "-o", "json", "-s", str(out),
        ])

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["url"] == mock_url
        assert len(data["detailedIssues"]) == 16
        assert data["pageUnderstanding"]["h1Count"] == 1

    def test_only_limits_assessments(self, tmp_path, valid_html):
        """--only runs just the named assessments."""
        page = tmp_path / "page.html"
        page.write_text(valid_html, encoding="utf-8")
        out = tmp_path / "report.json"

        runner.invoke(app, [
            "audit", str(page), "--only", "H1_MISSING", "--only", "MULTIPLE_H1",
            "-o", "json", "-s", str(out),
        ])

        data = json.loads(out.read_text(encoding="utf-8"))
        assert [i["id"] for i in data["detailedIssues"]] == ["H1_MISSING", "MULTIPLE_H1"]

    def test_unknown_assessment_rejected(self, tmp_path, valid_html):
        """Unknown assessment IDs exit with an error."""
        page = tmp_path / "page.html"
        page.write_text(valid_html, encoding="utf-8")
        result = runner.invoke(app, ["audit", str(page), "--only", "BOGUS"])
        assert result.exit_code == 1
        assert "Unknown assessment IDs" in result.output

    def test_invalid_output_format(self, tmp_path, valid_html):
        """Unsupported output formats exit with an error."""
        page = tmp_path / "page.html"
        page.write_text(valid_html, encoding="utf-8")
        result = runner.invoke(app, ["audit", str(page), "-o", "xml"])
        assert result.exit_code == 1
        assert "Invalid output format" in result.output

    def test_missing_file(self, tmp_path):
        """A missing file exits with an error."""
        result = runner.invoke(app, ["audit", str(tmp_path / "missing.html")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_pipeline_failure_reported(self, tmp_path, short_html):
        """Validation failures are reported with their code."""
        page = tmp_path / "short.html"
        page.write_text(short_html, encoding="utf-8")
        result = runner.invoke(app, ["audit", str(page)])
        assert result.exit_code == 1
        assert "VALIDATION_ERROR" in result.output


class TestInfoCommands:
    """Tests for the informational commands."""

    def test_assessments(self):
        """The catalog is listed."""
        result = runner.invoke(app, ["assessments"])
        assert result.exit_code == 0
        assert "H1_MISSING" in result.output

    def test_version(self):
        """The version is printed."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
