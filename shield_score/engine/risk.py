"""Risk classifier — map an overall score to a risk tier."""

from __future__ import annotations

from shield_score.domain.models import RiskLevel

# Upper bounds (exclusive), checked in ascending order. A score equal to a
# bound belongs to the next tier up.
_TIERS: list[tuple[float, RiskLevel]] = [
    (20, RiskLevel.CRITICAL),
    (40, RiskLevel.HIGH),
    (60, RiskLevel.MEDIUM),
    (80, RiskLevel.LOW),
]


def classify_risk(score: float) -> RiskLevel:
    """Return the risk tier for a 0–100 score."""
    for bound, level in _TIERS:
        if score < bound:
            return level
    return RiskLevel.EXCELLENT
