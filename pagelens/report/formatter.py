"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from pagelens.audit.catalog import READABILITY_ASSESSMENTS, SEO_ASSESSMENTS

OutputFormat = Literal["cli", "json", "markdown"]

_SEO_IDS = {a.value for a in SEO_ASSESSMENTS}
_READABILITY_IDS = {a.value for a in READABILITY_ASSESSMENTS}

_GRADE_COLORS = {
    "excellent": "green",
    "good": "blue",
    "needs-improvement": "yellow",
    "poor": "red bold",
}

_RATING_MARKS = {
    "good": ("[green]✓[/green]", "✅"),
    "ok": ("[yellow]![/yellow]", "⚠️"),
    "bad": ("[red]✗[/red]", "❌"),
}

_UNDERSTANDING_LABELS = {
    "h1Count": "H1 headings",
    "h2Count": "H2 headings",
    "h3Count": "H3 headings",
    "imageCount": "Images",
    "videoCount": "Videos",
    "internalLinks": "Internal links",
    "externalLinks": "External links",
    "paragraphCount": "Paragraphs",
    "wordCount": "Words",
    "sentenceCount": "Sentences",
    "avgWordsPerSentence": "Avg. words per sentence",
    "readingTimeMinutes": "Reading time (min)",
    "language": "Language",
}


def format_report(
    report: dict,
    output: OutputFormat = "cli",
    page_understanding: dict | None = None,
) -> str:
    """Format an audit report for output.

    Args:
        report: Report dict as produced by AuditReport.to_dict()
        output: Output format - 'cli', 'json', or 'markdown'
        page_understanding: Optional page summary shown alongside the report

    Returns:
        Formatted string representation of the report
    """
    if output == "json":
        return _format_json(report, page_understanding)
    elif output == "markdown":
        return _format_markdown(report, page_understanding)
    else:
        return _format_cli(report, page_understanding)


def _issues_in(report: dict, ids: set[str]) -> list[dict]:
    return [i for i in report.get("detailedIssues", []) if i.get("id") in ids]


def _format_json(report: dict, page_understanding: dict | None) -> str:
    """Format the report as JSON."""
    payload = dict(report)
    if page_understanding:
        payload["pageUnderstanding"] = page_understanding
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _score_bar(score: int, width: int = 20) -> str:
    filled = int(width * score / 100)
    bar = "█" * filled + "░" * (width - filled)
    if score >= 75:
        color = "green"
    elif score >= 50:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{bar}[/{color}]"


def _format_cli(report: dict, page_understanding: dict | None) -> str:
    """Format the report for terminal display with Rich-compatible markup."""
    lines = []
    scores = report.get("overallScores", {})
    summary = report.get("summary", {})

    lines.append("[bold cyan]PageLens Audit Report[/bold cyan]")
    lines.append(f"[dim]URL:[/dim] {report.get('url', '')}")
    lines.append("")

    overall = scores.get("overallScore", 0)
    grade = scores.get("overallGrade", "poor")
    grade_color = _GRADE_COLORS.get(grade, "white")
    lines.append(f"[bold]Overall Score:[/bold] [{grade_color}]{overall}/100 ({grade})[/{grade_color}]")
    lines.append("")

    lines.append("[bold]Category Scores:[/bold]")
    for label, key in (("SEO", "seo"), ("Readability", "readability")):
        score = scores.get(f"{key}Score", 0)
        lines.append(f"  {label:12} {_score_bar(score)} {score}/100 ({scores.get(f'{key}Grade', '')})")
    lines.append("")

    lines.append(
        f"[bold]Findings:[/bold] {summary.get('totalIssues', 0)} total, "
        f"[green]{summary.get('goodIssues', 0)} good[/green], "
        f"[yellow]{summary.get('okIssues', 0)} ok[/yellow], "
        f"[red]{summary.get('badIssues', 0)} bad[/red]"
    )
    lines.append("")

    critical = summary.get("criticalIssues", [])
    if critical:
        lines.append("[bold red]Critical Issues:[/bold red]")
        for issue in critical:
            lines.append(f"  [red]✗[/red] {issue['name']}: {issue['recommendation']}")
        lines.append("")

    quick_wins = summary.get("quickWins", [])
    if quick_wins:
        lines.append("[bold yellow]Quick Wins:[/bold yellow]")
        for issue in quick_wins:
            lines.append(f"  [yellow]![/yellow] {issue['name']}: {issue['recommendation']}")
        lines.append("")

    for title, ids in (("SEO", _SEO_IDS), ("Readability", _READABILITY_IDS)):
        issues = _issues_in(report, ids)
        if not issues:
            continue
        lines.append(f"[bold]{title} Checks:[/bold]")
        for issue in issues:
            mark = _RATING_MARKS.get(issue.get("rating"), ("?", "?"))[0]
            lines.append(f"  {mark} {issue['name']:32} {issue['score']:>3}  [dim]{issue['description']}[/dim]")
        lines.append("")

    if page_understanding:
        lines.append("[bold]Page Understanding:[/bold]")
        for key, label in _UNDERSTANDING_LABELS.items():
            if key in page_understanding:
                lines.append(f"  {label:24} {page_understanding[key]}")

    return "\n".join(lines).rstrip()


def _format_markdown(report: dict, page_understanding: dict | None) -> str:
    """Format the report as Markdown."""
    lines = []
    scores = report.get("overallScores", {})
    summary = report.get("summary", {})

    lines.append("# PageLens Audit Report")
    lines.append("")
    lines.append(f"**URL:** {report.get('url', '')}")
    lines.append(f"**Generated:** {report.get('timestamp', '')}")
    lines.append("")

    lines.append("## Scores")
    lines.append("")
    lines.append("| Category | Score | Grade |")
    lines.append("|----------|-------|-------|")
    lines.append(f"| SEO | {scores.get('seoScore', 0)} | {scores.get('seoGrade', '')} |")
    lines.append(
        f"| Readability | {scores.get('readabilityScore', 0)} | {scores.get('readabilityGrade', '')} |"
    )
    lines.append(f"| **Overall** | **{scores.get('overallScore', 0)}** | **{scores.get('overallGrade', '')}** |")
    lines.append("")

    lines.append(
        f"{summary.get('totalIssues', 0)} checks: {summary.get('goodIssues', 0)} good, "
        f"{summary.get('okIssues', 0)} ok, {summary.get('badIssues', 0)} bad."
    )
    lines.append("")

    critical = summary.get("criticalIssues", [])
    if critical:
        lines.append("## Critical Issues")
        lines.append("")
        for issue in critical:
            lines.append(f"- ❌ **{issue['name']}** ({issue['score']}): {issue['recommendation']}")
        lines.append("")

    quick_wins = summary.get("quickWins", [])
    if quick_wins:
        lines.append("## Quick Wins")
        lines.append("")
        for issue in quick_wins:
            lines.append(f"- ⚠️ **{issue['name']}** ({issue['score']}): {issue['recommendation']}")
        lines.append("")

    for title, ids in (("SEO Checks", _SEO_IDS), ("Readability Checks", _READABILITY_IDS)):
        issues = _issues_in(report, ids)
        if not issues:
            continue
        lines.append(f"## {title}")
        lines.append("")
        lines.append("| Check | Rating | Score | Impact | Finding |")
        lines.append("|-------|--------|-------|--------|---------|")
        for issue in issues:
            emoji = _RATING_MARKS.get(issue.get("rating"), ("?", "❓"))[1]
            description = issue.get("description", "").replace("|", "\\|")
            lines.append(
                f"| {issue['name']} | {emoji} {issue['rating']} | {issue['score']} "
                f"| {issue['impact']} | {description} |"
            )
        lines.append("")

    if page_understanding:
        lines.append("## Page Understanding")
        lines.append("")
        lines.append("| Signal | Value |")
        lines.append("|--------|-------|")
        for key, label in _UNDERSTANDING_LABELS.items():
            if key in page_understanding:
                lines.append(f"| {label} | {page_understanding[key]} |")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
