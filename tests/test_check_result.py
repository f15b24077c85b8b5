"""Tests for the CheckResult / RunResult schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, RunResult, WSGCategory


def _make_result(**overrides) -> CheckResult:
    data = {
        "guideline_id": "3.2",
        "guideline_name": "Remove unnecessary code",
        "status": CheckStatus.PASS,
        "message": "ok",
        "impact": Impact.LOW,
        "category": WSGCategory.WEB_DEV,
    }
    data.update(overrides)
    return CheckResult(**data)


class TestCheckResult:

    @pytest.mark.parametrize(
        "status, expected",
        [
            (CheckStatus.PASS, 100),
            (CheckStatus.WARN, 50),
            (CheckStatus.FAIL, 0),
            (CheckStatus.INFO, 0),
            (CheckStatus.NOT_APPLICABLE, 0),
        ],
    )
    def test_score_derived_from_status(self, status, expected):
        assert _make_result(status=status).score == expected

    def test_explicit_matching_score_is_accepted(self):
        assert _make_result(status="warn", score=50).score == 50

    def test_mismatched_score_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_result(status=CheckStatus.FAIL, score=100)

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_result(status="skipped")

    def test_is_scored(self):
        assert _make_result(status=CheckStatus.WARN).is_scored
        assert not _make_result(status=CheckStatus.INFO).is_scored

    def test_results_are_frozen(self):
        result = _make_result()
        with pytest.raises(ValidationError):
            result.status = CheckStatus.FAIL

    def test_serialises_enum_values(self):
        data = _make_result(status=CheckStatus.NOT_APPLICABLE).model_dump(mode="json")
        assert data["status"] == "not-applicable"
        assert data["category"] == "web-dev"


class TestRunResult:

    def test_defaults(self):
        run = RunResult(
            url="https://example.com/",
            timestamp="2024-01-01T00:00:00+00:00",
            duration=12,
            overall_score=100,
            category_scores=[],
            results=[],
        )
        assert run.co2_model == "swd-v4"
        assert run.is_green_hosted is False
        assert run.page_weight == 0

    def test_negative_duration_is_rejected(self):
        with pytest.raises(ValidationError):
            RunResult(
                url="https://example.com/",
                timestamp="2024-01-01T00:00:00+00:00",
                duration=-1,
                overall_score=100,
                category_scores=[],
                results=[],
            )
