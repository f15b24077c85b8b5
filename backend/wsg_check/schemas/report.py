"""
Pydantic schemas for the sustainability report projection.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from wsg_check.schemas.check_result import CategoryScore, CheckResult, CheckStatus, Impact


class Recommendation(BaseModel):
    """Actionable advice taken from a fail / warn result."""
    model_config = ConfigDict(frozen=True)

    guideline_id: str
    guideline_name: str
    status: CheckStatus
    impact: Impact
    recommendation: str
    resources: list[str] = Field(default_factory=list)


class ReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_checks: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    not_applicable: int = 0


class ReportMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_weight: int = 0
    request_count: int = 0
    third_party_count: int = 0
    co2_per_page_view: Optional[float] = None
    co2_model: Optional[str] = None
    is_green_hosted: Optional[bool] = None


class ReportMethodology(BaseModel):
    model_config = ConfigDict(frozen=True)

    analysis_type: str = "static"
    disclaimer: str
    co2_estimation_model: Optional[str] = None


class SustainabilityReport(BaseModel):
    """Presentation-ready view of one RunResult."""
    model_config = ConfigDict(frozen=True)

    url: str
    timestamp: str
    duration: int
    overall_score: int = Field(..., ge=0, le=100)
    grade: str
    categories: list[CategoryScore]
    checks: list[CheckResult]
    summary: ReportSummary
    recommendations: list[Recommendation]
    metadata: ReportMetadata
    methodology: ReportMethodology
