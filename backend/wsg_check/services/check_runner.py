"""
Check Runner - execute registered checks concurrently against one page.

Every check is invoked for the same read-only PageData. A check that raises
is converted into a fail result; one broken check never aborts the batch.
Results come back in registration order, not completion order.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Iterable, List, Union

from wsg_check.logger import logger
from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.errors import CheckError
from wsg_check.services.page_fetcher import PageData

CheckFn = Callable[[PageData], Union[CheckResult, Awaitable[CheckResult]]]

# Applied to synthesized failure results when the failing check is unknown
FALLBACK_CATEGORY = WSGCategory.WEB_DEV
FALLBACK_IMPACT = Impact.HIGH


def check_error_result(error: Exception, index: int) -> CheckResult:
    """Fail result standing in for a check that raised."""
    guideline_id = error.guideline_id if isinstance(error, CheckError) else None
    if not isinstance(guideline_id, str) or not guideline_id:
        guideline_id = f"check-error-{index}"
    message = str(error) or "An unexpected error occurred during the check"
    return CheckResult(
        guideline_id=guideline_id,
        guideline_name=guideline_id,
        success_criterion="",
        status=CheckStatus.FAIL,
        score=0,
        message=f"Check error: {message}",
        impact=FALLBACK_IMPACT,
        category=FALLBACK_CATEGORY,
        machine_testable=True,
    )


class CheckRunner:
    """Ordered collection of checks, reusable across runs."""

    def __init__(self):
        self._checks: List[CheckFn] = []

    def register(self, check: CheckFn) -> "CheckRunner":
        self._checks.append(check)
        return self

    def register_all(self, checks: Iterable[CheckFn]) -> "CheckRunner":
        for check in checks:
            self.register(check)
        return self

    @property
    def check_count(self) -> int:
        return len(self._checks)

    async def run(self, page: PageData) -> List[CheckResult]:
        """Run every registered check; one result per check, in registration order."""
        checks = list(self._checks)
        outcomes = await asyncio.gather(
            *(self._invoke(check, page) for check in checks),
            return_exceptions=True,
        )

        results = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, Exception):
                name = getattr(checks[index], "__name__", repr(checks[index]))
                logger.warning(f"Check {name} raised {type(outcome).__name__}: {outcome}")
                results.append(check_error_result(outcome, index))
            elif isinstance(outcome, BaseException):
                # KeyboardInterrupt, CancelledError and friends are not check failures
                raise outcome
            else:
                results.append(outcome)
        return results

    @staticmethod
    async def _invoke(check: CheckFn, page: PageData) -> CheckResult:
        # Called inside a coroutine so synchronous raises are gathered too
        result = check(page)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, CheckResult):
            raise TypeError(f"check returned {type(result).__name__}, expected CheckResult")
        return result
