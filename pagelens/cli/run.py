"""CLI commands."""
from __future__ import annotations

from pathlib import Path

import requests
import typer
from bs4 import BeautifulSoup
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pagelens import __version__
from pagelens.audit.catalog import is_valid_assessment_id
from pagelens.audit.config import AssessmentConfig
from pagelens.audit.registry import build_default_registry
from pagelens.audit.scoring import Grade
from pagelens.config.log import configure_logging
from pagelens.config.settings import settings
from pagelens.fetcher.html_fetcher import fetch_html, is_url
from pagelens.ingredients import PageDetails
from pagelens.pipeline import AuditOptions, run_audit
from pagelens.report.formatter import OutputFormat, format_report

app = typer.Typer(
    add_completion=False,
    help="PageLens - SEO and readability audits for HTML pages",
)
console = Console()


def _load_html(target: str) -> str:
    if is_url(target):
        return fetch_html(target)
    path = Path(target)
    if not path.is_file():
        raise ValueError(f"File not found: {target}")
    return path.read_text(encoding="utf-8")


def _document_title(html: str) -> str:
    soup = BeautifulSoup(html, "lxml")
    return soup.title.get_text(strip=True) if soup.title else ""


@app.command()
def audit(
    target: str = typer.Argument(..., help="URL or local HTML file to audit"),
    url: str | None = typer.Option(None, "--url", help="Page URL (defaults to the target)"),
    title: str | None = typer.Option(None, "--title", help="Page title (defaults to <title>)"),
    keyword: str = typer.Option("", "--keyword", "-k", help="Focus keyword"),
    related: list[str] = typer.Option([], "--related", "-r", help="Related keyword (repeatable)"),
    content_selector: list[str] = typer.Option(
        [], "--content-selector", help="CSS selector scoping the content (repeatable, first match wins)",
    ),
    exclude_selector: list[str] = typer.Option(
        [], "--exclude-selector", help="CSS selector removed before analysis (repeatable)",
    ),
    main_content: bool = typer.Option(
        False, "--main-content", help="Analyze only the main article when no selector matches",
    ),
    only: list[str] = typer.Option([], "--only", help="Run only this assessment ID (repeatable)"),
    output: str = typer.Option("cli", "--output", "-o", help="Output format: cli, json, markdown"),
    save: str | None = typer.Option(None, "--save", "-s", help="Save report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress and logs"),
) -> None:
    """Audit a page for SEO and readability.

    Examples:
        pagelens audit https://example.com/post -k "coffee beans"
        pagelens audit article.html --url https://example.com/post -o json
        pagelens audit https://example.com -o markdown -s report.md
    """
    configure_logging("DEBUG" if verbose else None)

    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)
    output_format: OutputFormat = output  # type: ignore

    unknown = [a for a in only if not is_valid_assessment_id(a)]
    if unknown:
        console.print(f"[red]Error:[/red] Unknown assessment IDs: {', '.join(unknown)}")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold cyan]PageLens[/bold cyan]\n[dim]Auditing:[/dim] {target}",
        border_style="cyan",
    ))

    try:
        with console.status("[bold blue]Loading page...", spinner="dots"):
            html = _load_html(target)
    except (ValueError, OSError, requests.RequestException) as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Loaded {len(html):,} characters[/dim]")

    page_url = url or (target if is_url(target) else Path(target).resolve().as_uri())
    details = PageDetails(url=page_url, title=title or _document_title(html) or target)
    options = AuditOptions(
        content_selectors=content_selector,
        exclude_selectors=exclude_selector,
        extract_main_content=main_content,
        assessment_config=AssessmentConfig.only(only) if only else None,
    )

    with console.status("[bold blue]Running assessments...", spinner="dots"):
        outcome = run_audit(html, details, keyword, related, options)

    if not outcome.success:
        console.print(f"\n[red]Error ({outcome.error.code}):[/red] {outcome.error.message}")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Completed in {outcome.processing_time_ms} ms[/dim]")

    report = format_report(
        outcome.report.to_dict(),
        output_format,
        page_understanding=outcome.page_understanding.to_dict(),
    )

    if save:
        save_path = Path(save)
        save_path.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    else:
        console.print("")
        if output_format == "cli":
            console.print(report)
        else:
            console.print(report, markup=False)

    if outcome.report.scores.overall_grade == Grade.POOR:
        raise typer.Exit(1)


@app.command()
def assessments() -> None:
    """List every available assessment."""
    table = Table(title="Available Assessments")
    table.add_column("ID", style="cyan")
    table.add_column("Category")
    table.add_column("Name")
    table.add_column("Checks", style="dim")

    for assessment in build_default_registry(settings.standards).list_all():
        table.add_row(
            assessment.assessment_id,
            assessment.category.value,
            assessment.name,
            assessment.description,
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]PageLens[/bold] v{__version__}")
    console.print("[dim]SEO and readability auditing for HTML content[/dim]")


if __name__ == "__main__":
    app()
