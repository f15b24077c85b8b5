"""
Scoring Engine - impact-weighted aggregation of check results.

score = round_half_up( sum(points * weight) / sum(weight) ) over scored results only.
An aggregate with no scored results is 100.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from wsg_check.schemas.check_result import CategoryScore, CheckResult, CheckStatus, WSGCategory
from wsg_check.services.scoring.weights import NEUTRAL_SCORE, impact_weight, status_points


@dataclass(frozen=True)
class ScoredResults:
    """Overall score plus one CategoryScore per known category."""
    overall_score: int
    category_scores: List[CategoryScore] = field(default_factory=list)


def _round_half_up(numerator: int, denominator: int) -> int:
    # Integer arithmetic; round() would use banker's rounding
    return (2 * numerator + denominator) // (2 * denominator)


def _weighted_score(results: Iterable[CheckResult]) -> int:
    weighted_sum = 0
    total_weight = 0
    for result in results:
        points = status_points(result.status)
        if points is None:
            continue
        weight = impact_weight(result.impact)
        weighted_sum += points * weight
        total_weight += weight

    if total_weight == 0:
        return NEUTRAL_SCORE
    return _round_half_up(weighted_sum, total_weight)


def calculate_overall_score(results: Sequence[CheckResult]) -> int:
    """Impact-weighted score over every result, regardless of category."""
    return _weighted_score(results)


def calculate_category_score(results: Sequence[CheckResult], category: WSGCategory) -> CategoryScore:
    """Score and status counts for the results belonging to one category."""
    category = WSGCategory(category)
    in_category = [r for r in results if r.category == category]

    counts = {status: 0 for status in CheckStatus}
    for result in in_category:
        if result.status in counts:
            counts[result.status] += 1

    passed = counts[CheckStatus.PASS]
    failed = counts[CheckStatus.FAIL]
    warned = counts[CheckStatus.WARN]
    # info results are counted as not applicable so the totals add up
    not_applicable = counts[CheckStatus.NOT_APPLICABLE] + counts[CheckStatus.INFO]

    return CategoryScore(
        category=category,
        score=_weighted_score(in_category),
        total_checks=len(in_category),
        passed=passed,
        failed=failed,
        warned=warned,
        not_applicable=not_applicable,
        scored_checks=passed + failed + warned,
    )


def score_results(results: Sequence[CheckResult]) -> ScoredResults:
    """Overall score plus a CategoryScore for every category in WSGCategory."""
    return ScoredResults(
        overall_score=calculate_overall_score(results),
        category_scores=[calculate_category_score(results, category) for category in WSGCategory],
    )

