"""wsg-check CLI entry point.

Checks a single URL against the Web Sustainability Guidelines and prints
the report. Exits 1 when the page cannot be checked or the score is below
the fail threshold.
"""

import asyncio
import io
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from wsg_check.config import OUTPUT_FORMATS, Settings, load_settings
from wsg_check.logger import set_verbose
from wsg_check.services.checks.registry import select_checks
from wsg_check.services.errors import ConfigError
from wsg_check.services.formatters import format_html, format_json, format_markdown
from wsg_check.services.http_client import HttpClient
from wsg_check.services.page_fetcher import PageFetcher
from wsg_check.services.report_builder import build_report
from wsg_check.services.wsg_checker import WsgChecker
from wsg_check.terminal import render_report

app = typer.Typer(
    name="wsg-check",
    help="Check a web page against the W3C Web Sustainability Guidelines",
    add_completion=False,
)

err_console = Console(stderr=True)

_FORMATTERS = {
    "json": format_json,
    "markdown": format_markdown,
    "html": format_html,
}


def build_checker(s: Settings) -> WsgChecker:
    """Wire the checker from resolved settings."""
    client = HttpClient(
        timeout=s.TIMEOUT,
        user_agent=s.USER_AGENT,
        follow_redirects=s.FOLLOW_REDIRECTS,
        max_retries=s.MAX_RETRIES,
        retry_delay=s.RETRY_DELAY,
        respect_robots=s.RESPECT_ROBOTS,
        block_private_networks=s.BLOCK_PRIVATE_NETWORKS,
    )
    checks = select_checks(s.CATEGORIES, s.GUIDELINES, s.EXCLUDE_GUIDELINES)
    return WsgChecker(checks=checks, fetcher=PageFetcher(client).fetch)


@app.command()
def check(
    url: str = typer.Argument(..., help="URL of the page to check"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help=f"Output format: {', '.join(OUTPUT_FORMATS)}"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    categories: Optional[str] = typer.Option(
        None, "--categories", "-c", help="Comma-separated categories (ux, web-dev, hosting, business)"
    ),
    guidelines: Optional[str] = typer.Option(None, "--guidelines", "-g", help="Comma-separated guideline ids"),
    fail_threshold: Optional[int] = typer.Option(
        None, "--fail-threshold", help="Exit with code 1 when the overall score is below this value"
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Directory containing the config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Check URL and print a sustainability report."""
    overrides = {
        "FORMAT": output_format,
        "CATEGORIES": categories,
        "GUIDELINES": guidelines,
        "FAIL_THRESHOLD": fail_threshold,
        "VERBOSE": True if verbose else None,
    }
    try:
        s = load_settings(overrides, str(config) if config else None)
    except ConfigError as e:
        err_console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=1)

    set_verbose(s.VERBOSE)

    checker = build_checker(s)
    result = asyncio.run(checker.check(url))
    if not result.ok:
        err_console.print(f"[bold red]Could not check {url}:[/bold red] {result.error}")
        raise typer.Exit(code=1)

    report = build_report(result.value)

    if s.FORMAT == "terminal":
        if output:
            buffer = io.StringIO()
            render_report(report, Console(file=buffer, width=120))
            output.write_text(buffer.getvalue(), encoding="utf-8")
        else:
            render_report(report, Console())
    else:
        rendered = _FORMATTERS[s.FORMAT](report)
        if output:
            output.write_text(rendered, encoding="utf-8")
        else:
            typer.echo(rendered)

    if output:
        err_console.print(f"Report written to {output}")

    if report.overall_score < s.FAIL_THRESHOLD:
        err_console.print(
            f"[bold red]Score {report.overall_score} is below the fail threshold {s.FAIL_THRESHOLD}[/bold red]"
        )
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
