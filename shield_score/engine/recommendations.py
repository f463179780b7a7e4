"""Recommendation engine — findings and remediation items from a score breakdown.

Two independent outputs are derived from the same breakdown:

  details          — informational findings, one line per weak category
  recommendations  — structured remediation items with estimated impact

They use different cutoffs per category (e.g. MFA finding below 20 points,
MFA recommendation below 25). Neither list implies the other.
"""

from __future__ import annotations

from dataclasses import dataclass

from shield_score.domain.models import (
    SUBSCORE_CAPS,
    Difficulty,
    Priority,
    Recommendation,
    ScoreBreakdown,
    SecurityScoreInput,
)
from shield_score.engine.rounding import round_half_up

ALL_GOOD = "All security metrics are in good shape"

_DETAIL_THRESHOLDS: dict[str, float] = {
    "mfa_score": 20,
    "agent_score": 16,
    "training_score": 12,
    "simulation_score": 7,
    "password_score": 8,
}


@dataclass(frozen=True)
class _RecommendationTemplate:
    field: str
    id: str
    priority: Priority
    title: str
    description: str
    action: str
    difficulty: Difficulty


# A recommendation fires when its field is strictly below the field's cap.
_RECOMMENDATIONS: list[_RecommendationTemplate] = [
    _RecommendationTemplate(
        field="mfa_score",
        id="mfa-001",
        priority=Priority.CRITICAL,
        title="Increase MFA Enrollment",
        description="Multi-factor authentication significantly reduces account compromise risks",
        action="mfa_enrollment_campaign",
        difficulty=Difficulty.EASY,
    ),
    _RecommendationTemplate(
        field="agent_score",
        id="agent-001",
        priority=Priority.CRITICAL,
        title="Deploy Agent to All Devices",
        description="The security agent provides real-time threat detection and response",
        action="agent_deployment",
        difficulty=Difficulty.MEDIUM,
    ),
    _RecommendationTemplate(
        field="training_score",
        id="training-001",
        priority=Priority.HIGH,
        title="Increase Training Completion",
        description="Security awareness training is crucial for employee preparedness",
        action="training_assignment",
        difficulty=Difficulty.EASY,
    ),
    _RecommendationTemplate(
        field="password_score",
        id="password-001",
        priority=Priority.HIGH,
        title="Strengthen Password Policies",
        description="Enforce regular password changes and complexity requirements",
        action="password_policy_update",
        difficulty=Difficulty.MEDIUM,
    ),
]


def generate_details(breakdown: ScoreBreakdown, snapshot: SecurityScoreInput) -> list[str]:
    """Return human-readable findings in category order.

    Returns a single positive line when no finding applies.
    """
    details: list[str] = []

    if breakdown.mfa_score < _DETAIL_THRESHOLDS["mfa_score"]:
        pct = _percent_of_cap(breakdown.mfa_score, "mfa_score")
        details.append(f"MFA enrollment at {pct}% - Encourage all employees to enable MFA")

    if breakdown.agent_score < _DETAIL_THRESHOLDS["agent_score"]:
        pct = _percent_of_cap(breakdown.agent_score, "agent_score")
        details.append(f"Agent installation at {pct}% - Deploy agent to remaining devices")

    unresolved = sum(1 for t in snapshot.threats if t.unresolved)
    if unresolved > 0:
        details.append(
            f"{unresolved} unresolved threat(s) - Review and remediate threats in dashboard"
        )

    if breakdown.training_score < _DETAIL_THRESHOLDS["training_score"]:
        details.append("Low training completion - Assign mandatory security training modules")

    if breakdown.simulation_score < _DETAIL_THRESHOLDS["simulation_score"]:
        details.append("High phishing click rate - Consider additional training and simulations")

    if breakdown.password_score < _DETAIL_THRESHOLDS["password_score"]:
        details.append("Password compliance issues - Enforce strong password policies")

    if not details:
        details.append(ALL_GOOD)

    return details


def generate_recommendations(breakdown: ScoreBreakdown) -> list[Recommendation]:
    """Return remediation items for every category short of its cap.

    estimated_impact is the number of points the category can still recover.
    """
    recommendations: list[Recommendation] = []
    for template in _RECOMMENDATIONS:
        cap = SUBSCORE_CAPS[template.field]
        current = getattr(breakdown, template.field)
        if current < cap:
            recommendations.append(
                Recommendation(
                    id=template.id,
                    priority=template.priority,
                    title=template.title,
                    description=template.description,
                    action=template.action,
                    estimated_impact=cap - current,
                    implementation_difficulty=template.difficulty,
                )
            )
    return recommendations


def _percent_of_cap(value: float, name: str) -> int:
    return round_half_up(value / SUBSCORE_CAPS[name] * 100)
