"""
Pydantic schemas for check results, category scores and run results.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CheckStatus(str, Enum):
    """Outcome of a single guideline check."""
    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"
    INFO = "info"
    NOT_APPLICABLE = "not-applicable"


class Impact(str, Enum):
    """Severity tier used to weight a check in aggregate scores."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WSGCategory(str, Enum):
    """Closed set of WSG categories. Iterate the enum for every known category."""
    UX = "ux"
    WEB_DEV = "web-dev"
    HOSTING = "hosting"
    BUSINESS = "business"


# Canonical status -> score mapping. info / not-applicable are never scored.
STATUS_SCORES = {
    CheckStatus.PASS: 100,
    CheckStatus.WARN: 50,
    CheckStatus.FAIL: 0,
}


class CheckResult(BaseModel):
    """Outcome of one WSG guideline evaluation."""
    model_config = ConfigDict(frozen=True)

    guideline_id: str
    guideline_name: str
    success_criterion: str = ""
    status: CheckStatus
    score: int = Field(..., ge=0, le=100)
    message: str
    details: Optional[str] = None
    recommendation: Optional[str] = None
    resources: Optional[list[str]] = None
    impact: Impact
    category: WSGCategory
    machine_testable: bool = True

    @model_validator(mode="before")
    @classmethod
    def _derive_score(cls, data):
        """Fill in the score from the status when it was not given."""
        if isinstance(data, dict) and data.get("score") is None and "status" in data:
            try:
                status = CheckStatus(data["status"])
            except ValueError:
                return data
            data = {**data, "score": STATUS_SCORES.get(status, 0)}
        return data

    @model_validator(mode="after")
    def _check_score_matches_status(self):
        expected = STATUS_SCORES.get(self.status)
        if expected is not None and self.score != expected:
            raise ValueError(
                f"score {self.score} does not match status '{self.status.value}' (expected {expected})"
            )
        return self

    @property
    def is_scored(self) -> bool:
        return self.status in STATUS_SCORES


class CategoryScore(BaseModel):
    """Aggregate score for one category."""
    model_config = ConfigDict(frozen=True)

    category: WSGCategory
    score: int = Field(..., ge=0, le=100)
    total_checks: int = 0
    passed: int = 0
    failed: int = 0
    warned: int = 0
    not_applicable: int = 0
    scored_checks: int = 0


class RunResult(BaseModel):
    """Complete output of one check(url) pass."""
    model_config = ConfigDict(frozen=True)

    # Request info
    url: str

    # Timing
    timestamp: str
    duration: int = Field(..., ge=0, description="End-to-end duration in milliseconds")

    # Scores
    overall_score: int = Field(..., ge=0, le=100)
    category_scores: list[CategoryScore]

    # Details
    results: list[CheckResult]

    # Carbon
    co2_per_page_view: float = 0.0
    co2_model: str = "swd-v4"
    is_green_hosted: bool = False

    # Page metrics
    page_weight: int = Field(0, ge=0, description="HTML transfer size in bytes")
    resource_count: int = 0
    third_party_count: int = 0
