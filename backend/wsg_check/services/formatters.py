"""
Report formatters - JSON, Markdown and HTML renderings of a SustainabilityReport.

Every formatter is a pure function of the report.
"""
import os
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wsg_check.schemas.report import Recommendation, SustainabilityReport

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

GRADE_EMOJI = {"A": "🏆", "B": "✅", "C": "⚠️", "D": "🔶", "F": "❌"}

STATUS_EMOJI = {
    "pass": "✅",
    "fail": "❌",
    "warn": "⚠️",
    "info": "ℹ️",
    "not-applicable": "➖",
}

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def format_duration(ms: int) -> str:
    return f"{ms}ms" if ms < 1000 else f"{ms / 1000:.1f}s"


def format_timestamp(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%B %d, %Y %H:%M UTC")
    except ValueError:
        return timestamp


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|")


def format_json(report: SustainabilityReport, indent: int = 2) -> str:
    return report.model_dump_json(indent=indent)


def _markdown_recommendations(recommendations: list[Recommendation]) -> list[str]:
    if not recommendations:
        return ["_No recommendations, great work!_"]

    lines = []
    for i, rec in enumerate(recommendations, start=1):
        lines.append(
            f"{i}. **[{rec.guideline_id} {_md_cell(rec.guideline_name)}]** "
            f"_({rec.impact.value} impact, {rec.status.value})_"
        )
        lines.append(f"   {rec.recommendation}")
        lines.extend(f"   - {resource}" for resource in rec.resources)
        lines.append("")
    return lines


def format_markdown(report: SustainabilityReport) -> str:
    meta = report.metadata
    lines = [
        "# WSG Sustainability Report",
        "",
        f"**URL:** {report.url}  ",
        f"**Date:** {format_timestamp(report.timestamp)}  ",
        f"**Duration:** {format_duration(report.duration)}  ",
        "",
        f"## Overall Score: {report.overall_score} / 100 (Grade {GRADE_EMOJI.get(report.grade, '')} {report.grade})",
        "",
        "| Metric | Count |",
        "|--------|------:|",
        f"| Checks Passed | {report.summary.passed} |",
        f"| Checks Failed | {report.summary.failed} |",
        f"| Warnings | {report.summary.warnings} |",
        f"| Not Applicable | {report.summary.not_applicable} |",
        f"| **Total Checks** | **{report.summary.total_checks}** |",
        "",
        "## Category Scores",
        "",
        "| Category | Score | Passed | Failed | Warned | N/A |",
        "|----------|------:|-------:|-------:|-------:|----:|",
    ]
    for c in report.categories:
        lines.append(
            f"| {c.category.value} | {c.score} | {c.passed} | {c.failed} | {c.warned} | {c.not_applicable} |"
        )

    lines += ["", "## Recommendations", ""]
    lines += _markdown_recommendations(report.recommendations)

    lines += [
        "",
        "## Check Results",
        "",
        "| ID | Guideline | Status | Score | Impact |",
        "|----|-----------|--------|------:|--------|",
    ]
    for check in report.checks:
        status = check.status.value
        lines.append(
            f"| {check.guideline_id} | {_md_cell(check.guideline_name)} | "
            f"{STATUS_EMOJI.get(status, '')} {status} | {check.score} | {check.impact.value} |"
        )

    lines += [
        "",
        "## Page Metrics",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Page Weight | {format_bytes(meta.page_weight)} |",
        f"| Resource Count | {meta.request_count} |",
        f"| Third-party Resources | {meta.third_party_count} |",
    ]
    if meta.co2_per_page_view is not None:
        lines.append(f"| CO2 per Page View | {meta.co2_per_page_view:.4f}g |")
    if meta.co2_model is not None:
        lines.append(f"| CO2 Model | {meta.co2_model} |")
    if meta.is_green_hosted is not None:
        lines.append(f"| Green Hosting | {'Yes' if meta.is_green_hosted else 'No'} |")

    lines += ["", "## Methodology", "", f"> {report.methodology.disclaimer}", ""]
    return "\n".join(lines)


def format_html(report: SustainabilityReport) -> str:
    template = _env.get_template("report.html")
    return template.render(
        report=report,
        date=format_timestamp(report.timestamp),
        duration=format_duration(report.duration),
        page_weight=format_bytes(report.metadata.page_weight),
        status_emoji=STATUS_EMOJI,
    )
