"""Tests for wsg_check.services.scoring - weighted averages, rounding and category counts."""

from __future__ import annotations

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.scoring.engine import (
    calculate_category_score,
    calculate_overall_score,
    score_results,
)
from wsg_check.services.scoring.weights import impact_weight, status_points


def _make_result(
    status: CheckStatus,
    impact: Impact = Impact.MEDIUM,
    category: WSGCategory = WSGCategory.WEB_DEV,
    guideline_id: str = "3.1",
) -> CheckResult:
    return CheckResult(
        guideline_id=guideline_id,
        guideline_name="Test guideline",
        status=status,
        message="test",
        impact=impact,
        category=category,
    )


class TestWeights:

    def test_status_points(self):
        assert status_points(CheckStatus.PASS) == 100
        assert status_points(CheckStatus.WARN) == 50
        assert status_points(CheckStatus.FAIL) == 0
        assert status_points(CheckStatus.INFO) is None
        assert status_points(CheckStatus.NOT_APPLICABLE) is None
        assert status_points("bogus") is None

    def test_impact_weights(self):
        assert impact_weight(Impact.HIGH) == 3
        assert impact_weight(Impact.MEDIUM) == 2
        assert impact_weight(Impact.LOW) == 1
        assert impact_weight("medium") == 2

    def test_unknown_impact_weighs_one(self):
        assert impact_weight("critical") == 1
        assert impact_weight(None) == 1


class TestOverallScore:

    def test_impact_weighting(self):
        results = [
            _make_result(CheckStatus.FAIL, Impact.HIGH),
            _make_result(CheckStatus.PASS, Impact.MEDIUM),
        ]
        assert calculate_overall_score(results) == 40

    def test_info_and_not_applicable_are_excluded(self):
        results = [
            _make_result(CheckStatus.PASS, Impact.LOW),
            _make_result(CheckStatus.INFO, Impact.HIGH),
            _make_result(CheckStatus.NOT_APPLICABLE, Impact.HIGH),
        ]
        assert calculate_overall_score(results) == 100

    def test_rounds_to_nearest(self):
        results = [
            _make_result(CheckStatus.FAIL, Impact.LOW),
            _make_result(CheckStatus.PASS, Impact.LOW),
            _make_result(CheckStatus.PASS, Impact.LOW),
        ]
        assert calculate_overall_score(results) == 67

    def test_exact_half_rounds_up(self):
        # (50*3 + 100*1) / 4 = 62.5
        results = [
            _make_result(CheckStatus.WARN, Impact.HIGH),
            _make_result(CheckStatus.PASS, Impact.LOW),
        ]
        assert calculate_overall_score(results) == 63

    def test_empty_results_score_100(self):
        assert calculate_overall_score([]) == 100

    def test_only_unscored_results_score_100(self):
        results = [_make_result(CheckStatus.INFO), _make_result(CheckStatus.NOT_APPLICABLE)]
        assert calculate_overall_score(results) == 100

    def test_all_failures_score_0(self):
        results = [_make_result(CheckStatus.FAIL, impact) for impact in Impact]
        assert calculate_overall_score(results) == 0

    def test_unrecognised_impact_defaults_to_weight_one(self):
        odd = CheckResult.model_construct(
            guideline_id="9.9",
            guideline_name="Odd",
            status=CheckStatus.FAIL,
            score=0,
            message="odd",
            impact="critical",
            category=WSGCategory.UX,
        )
        results = [odd, _make_result(CheckStatus.PASS, Impact.LOW)]
        assert calculate_overall_score(results) == 50

    def test_score_is_order_independent(self):
        results = [
            _make_result(CheckStatus.WARN, Impact.HIGH),
            _make_result(CheckStatus.FAIL, Impact.LOW),
            _make_result(CheckStatus.PASS, Impact.MEDIUM),
        ]
        assert calculate_overall_score(results) == calculate_overall_score(list(reversed(results)))


class TestCategoryScore:

    def test_counts_add_up(self):
        results = [
            _make_result(CheckStatus.PASS, category=WSGCategory.UX),
            _make_result(CheckStatus.FAIL, category=WSGCategory.UX),
            _make_result(CheckStatus.WARN, category=WSGCategory.UX),
            _make_result(CheckStatus.NOT_APPLICABLE, category=WSGCategory.UX),
            _make_result(CheckStatus.INFO, category=WSGCategory.UX),
            _make_result(CheckStatus.PASS, category=WSGCategory.HOSTING),
        ]
        score = calculate_category_score(results, WSGCategory.UX)
        assert score.total_checks == 5
        assert score.passed == 1
        assert score.failed == 1
        assert score.warned == 1
        assert score.not_applicable == 2
        assert score.scored_checks == 3
        assert score.passed + score.failed + score.warned + score.not_applicable == score.total_checks

    def test_only_counts_own_category(self):
        results = [
            _make_result(CheckStatus.FAIL, category=WSGCategory.HOSTING),
            _make_result(CheckStatus.PASS, category=WSGCategory.UX),
        ]
        assert calculate_category_score(results, WSGCategory.UX).score == 100
        assert calculate_category_score(results, WSGCategory.HOSTING).score == 0

    def test_empty_category_is_neutral(self):
        score = calculate_category_score([], WSGCategory.BUSINESS)
        assert score.score == 100
        assert score.total_checks == 0
        assert score.scored_checks == 0

    def test_accepts_category_value_string(self):
        results = [_make_result(CheckStatus.WARN, category=WSGCategory.WEB_DEV)]
        assert calculate_category_score(results, "web-dev").score == 50


class TestScoreResults:

    def test_every_category_present_in_order(self):
        scored = score_results([_make_result(CheckStatus.PASS, category=WSGCategory.HOSTING)])
        assert [c.category for c in scored.category_scores] == list(WSGCategory)

    def test_empty_run(self):
        scored = score_results([])
        assert scored.overall_score == 100
        assert len(scored.category_scores) == 4
        assert all(c.score == 100 and c.total_checks == 0 for c in scored.category_scores)

    def test_overall_spans_categories(self):
        results = [
            _make_result(CheckStatus.FAIL, Impact.HIGH, WSGCategory.HOSTING),
            _make_result(CheckStatus.PASS, Impact.MEDIUM, WSGCategory.UX),
        ]
        scored = score_results(results)
        assert scored.overall_score == 40
        by_category = {c.category: c for c in scored.category_scores}
        assert by_category[WSGCategory.HOSTING].score == 0
        assert by_category[WSGCategory.UX].score == 100
