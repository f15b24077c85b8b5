"""
Shared building blocks for guideline checks.
"""
from dataclasses import dataclass
from typing import List, Optional

from wsg_check.schemas.check_result import STATUS_SCORES, CheckResult, CheckStatus, Impact, WSGCategory

WSG_BASE_URL = "https://www.w3.org/TR/web-sustainability-guidelines/"


@dataclass(frozen=True)
class Guideline:
    """Static description of one WSG guideline as a check reports it."""
    id: str
    name: str
    success_criterion: str
    category: WSGCategory
    impact: Impact
    anchor: str
    machine_testable: bool = True

    @property
    def resources(self) -> List[str]:
        return [f"{WSG_BASE_URL}#{self.anchor}"]

    def result(
        self,
        status: CheckStatus,
        message: str,
        details: Optional[str] = None,
        recommendation: Optional[str] = None,
        with_resources: Optional[bool] = None,
    ) -> CheckResult:
        """Build a CheckResult for this guideline; the score follows the status."""
        if with_resources is None:
            with_resources = status in (CheckStatus.FAIL, CheckStatus.WARN)
        return CheckResult(
            guideline_id=self.id,
            guideline_name=self.name,
            success_criterion=self.success_criterion,
            status=status,
            score=STATUS_SCORES.get(status, 0),
            message=message,
            details=details,
            recommendation=recommendation,
            resources=self.resources if with_resources else None,
            impact=self.impact,
            category=self.category,
            machine_testable=self.machine_testable,
        )
