"""
Rich terminal output for a sustainability report.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from wsg_check.schemas.report import SustainabilityReport
from wsg_check.services.formatters import format_bytes, format_duration

# status value -> (symbol, Rich style)
_STATUS_STYLES: dict[str, tuple[str, str]] = {
    "pass": ("✓ pass", "green"),
    "fail": ("✗ fail", "bold red"),
    "warn": ("! warn", "yellow"),
    "info": ("i info", "blue"),
    "not-applicable": ("- n/a", "dim"),
}

_GRADE_STYLES = {"A": "bold green", "B": "green", "C": "yellow", "D": "dark_orange", "F": "bold red"}


def _score_style(score: int) -> str:
    if score >= 75:
        return "green"
    if score >= 45:
        return "yellow"
    return "red"


def render_report(report: SustainabilityReport, console: Console) -> None:
    """Print the headline, category table, check table and recommendations."""
    grade_style = _GRADE_STYLES.get(report.grade, "bold")
    console.print(Panel(
        f"[bold]{report.url}[/bold]\n"
        f"Score: [{grade_style}]{report.overall_score}/100  Grade {report.grade}[/{grade_style}]\n"
        f"Checked in {format_duration(report.duration)}",
        title="WSG Sustainability Report",
        expand=False,
    ))

    categories = Table(title="Categories", box=box.SIMPLE)
    categories.add_column("Category", style="bold")
    categories.add_column("Score", justify="right")
    categories.add_column("Passed", justify="right")
    categories.add_column("Failed", justify="right")
    categories.add_column("Warned", justify="right")
    categories.add_column("N/A", justify="right")
    for c in report.categories:
        style = _score_style(c.score)
        categories.add_row(
            c.category.value,
            f"[{style}]{c.score}[/{style}]",
            str(c.passed),
            str(c.failed),
            str(c.warned),
            str(c.not_applicable),
        )
    console.print(categories)

    checks = Table(title="Checks", box=box.SIMPLE)
    checks.add_column("ID")
    checks.add_column("Guideline")
    checks.add_column("Status")
    checks.add_column("Impact")
    checks.add_column("Message", overflow="fold")
    for check in report.checks:
        symbol, style = _STATUS_STYLES.get(check.status.value, (check.status.value, ""))
        checks.add_row(
            check.guideline_id,
            check.guideline_name,
            f"[{style}]{symbol}[/{style}]" if style else symbol,
            check.impact.value,
            check.message,
        )
    console.print(checks)

    if report.recommendations:
        console.print("[bold]Recommendations[/bold]")
        for i, rec in enumerate(report.recommendations, start=1):
            console.print(
                f"{i}. [bold]{rec.guideline_id} {rec.guideline_name}[/bold] "
                f"({rec.impact.value} impact, {rec.status.value})"
            )
            console.print(f"   {rec.recommendation}", highlight=False)
        console.print()

    meta = report.metadata
    co2 = f"{meta.co2_per_page_view:.4f}g" if meta.co2_per_page_view is not None else "n/a"
    console.print(
        f"Page weight {format_bytes(meta.page_weight)} | {meta.request_count} resources "
        f"({meta.third_party_count} third-party) | CO2 {co2} per view | "
        f"green hosting: {'yes' if meta.is_green_hosted else 'no'}"
    )
    console.print(f"[dim]{report.methodology.disclaimer}[/dim]")
