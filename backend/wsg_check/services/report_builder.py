"""
Report Builder - project a RunResult into a SustainabilityReport.
"""
from typing import Iterable, List
from urllib.parse import quote

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, RunResult
from wsg_check.schemas.report import (
    Recommendation,
    ReportMetadata,
    ReportMethodology,
    ReportSummary,
    SustainabilityReport,
)

STATIC_ANALYSIS_DISCLAIMER = (
    "This report is based on static HTML and HTTP response analysis only. "
    "External stylesheet and script content is not fetched, so checks that require CSS or "
    "JavaScript execution (e.g. Core Web Vitals) may produce false negatives. "
    "For live Core Web Vitals data, see Google PageSpeed Insights (https://pagespeed.web.dev/). "
    "For scenario-based energy monitoring, see GreenFrame (https://greenframe.io/) "
    "or Sitespeed.io (https://www.sitespeed.io/)."
)

CO2_MODEL_DESCRIPTION = "Sustainable Web Design model v4 (per-byte), Green Web Foundation hosting data"

# Guidelines whose findings are better confirmed with field performance data
CWV_GUIDELINE_IDS = ("3.1",)

IMPACT_ORDER = {Impact.HIGH: 0, Impact.MEDIUM: 1, Impact.LOW: 2}
STATUS_ORDER = {CheckStatus.FAIL: 0, CheckStatus.WARN: 1}


def score_to_grade(score: int) -> str:
    if score >= 90:
        return "A"
    if score >= 75:
        return "B"
    if score >= 60:
        return "C"
    if score >= 45:
        return "D"
    return "F"


def summarise_results(results: Iterable[CheckResult]) -> ReportSummary:
    counts = {"passed": 0, "failed": 0, "warnings": 0, "not_applicable": 0}
    total = 0
    for result in results:
        total += 1
        if result.status == CheckStatus.PASS:
            counts["passed"] += 1
        elif result.status == CheckStatus.FAIL:
            counts["failed"] += 1
        elif result.status == CheckStatus.WARN:
            counts["warnings"] += 1
        else:
            counts["not_applicable"] += 1
    return ReportSummary(total_checks=total, **counts)


def build_recommendations(results: Iterable[CheckResult], page_url: str = "") -> List[Recommendation]:
    """Fail / warn results with advice, highest impact first, then fails before warnings."""
    actionable = [
        r for r in results
        if r.status in STATUS_ORDER and r.recommendation
    ]
    # sorted() is stable, so registration order breaks ties
    actionable.sort(key=lambda r: (IMPACT_ORDER.get(r.impact, len(IMPACT_ORDER)), STATUS_ORDER[r.status]))

    recommendations = []
    for r in actionable:
        resources = list(r.resources or [])
        if r.guideline_id in CWV_GUIDELINE_IDS and page_url:
            resources.append(f"https://pagespeed.web.dev/report?url={quote(page_url, safe='')}")
        recommendations.append(Recommendation(
            guideline_id=r.guideline_id,
            guideline_name=r.guideline_name,
            status=r.status,
            impact=r.impact,
            recommendation=r.recommendation,
            resources=resources,
        ))
    return recommendations


def build_report(run_result: RunResult) -> SustainabilityReport:
    return SustainabilityReport(
        url=run_result.url,
        timestamp=run_result.timestamp,
        duration=run_result.duration,
        overall_score=run_result.overall_score,
        grade=score_to_grade(run_result.overall_score),
        categories=run_result.category_scores,
        checks=run_result.results,
        summary=summarise_results(run_result.results),
        recommendations=build_recommendations(run_result.results, run_result.url),
        metadata=ReportMetadata(
            page_weight=run_result.page_weight,
            request_count=run_result.resource_count,
            third_party_count=run_result.third_party_count,
            co2_per_page_view=run_result.co2_per_page_view,
            co2_model=run_result.co2_model,
            is_green_hosted=run_result.is_green_hosted,
        ),
        methodology=ReportMethodology(
            analysis_type="static",
            disclaimer=STATIC_ANALYSIS_DISCLAIMER,
            co2_estimation_model=CO2_MODEL_DESCRIPTION,
        ),
    )
