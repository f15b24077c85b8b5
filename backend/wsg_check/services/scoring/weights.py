"""
Scoring Weights Configuration.

Status points and impact weights for the impact-weighted average.
"""

from typing import Optional

from wsg_check.schemas.check_result import STATUS_SCORES, CheckStatus, Impact

# Points a scored status contributes. info / not-applicable are absent on purpose:
# they are excluded from both numerator and denominator.
STATUS_POINTS = dict(STATUS_SCORES)

IMPACT_WEIGHTS = {
    Impact.HIGH: 3,
    Impact.MEDIUM: 2,
    Impact.LOW: 1,
}

# Weight for an impact tier that is missing or not recognised
DEFAULT_WEIGHT = 1

# Score of an aggregate with nothing to aggregate
NEUTRAL_SCORE = 100


def status_points(status) -> Optional[int]:
    """Points for a status, or None when the status is not scored."""
    try:
        return STATUS_POINTS.get(CheckStatus(status))
    except ValueError:
        return None


def impact_weight(impact) -> int:
    try:
        return IMPACT_WEIGHTS.get(Impact(impact), DEFAULT_WEIGHT)
    except ValueError:
        return DEFAULT_WEIGHT
