"""Score calculator — compute the security posture score from a signal snapshot.

Six independently scaled sub-scores, each clamped to [0, cap]:

  MFA enrollment       — 25 pts, share of employees with MFA enabled
  Agent health         — 20 pts, share of devices whose agent is online
  Breach history       — 20 pts, minus 2 per unresolved critical/high threat,
                                 1 per unresolved medium threat and 0.5 per
                                 threat resolved in the last 30 days
  Training completion  — 15 pts, share of total_employees with a completed module
  Simulation outcomes  — 10 pts, 10 - mean click rate / 10
  Password hygiene     — 10 pts, share of employees who changed their
                                 password in the last 90 days

"No data" is scored pessimistically (0 pts) for employees, devices and
training, and optimistically (full 10 pts) for simulations.

The overall score is the sum of the unrounded sub-scores, rounded once.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from shield_score.domain.models import (
    SUBSCORE_CAPS,
    ScoreBreakdown,
    SecurityScoreInput,
    SecurityScoreResult,
)
from shield_score.engine.recommendations import generate_details, generate_recommendations
from shield_score.engine.risk import classify_risk
from shield_score.engine.rounding import round_half_up
from shield_score.engine.signals import SignalCounts, collect_signals

logger = logging.getLogger("shield_score.engine.calculator")

_SEVERE_THREAT_PENALTY = 2.0
_MEDIUM_THREAT_PENALTY = 1.0
_RECENT_RESOLUTION_PENALTY = 0.5


def calculate_security_score(
    snapshot: SecurityScoreInput,
    now: datetime | None = None,
    include_recommendations: bool = True,
) -> SecurityScoreResult:
    """Score a snapshot and derive its risk tier, findings and recommendations.

    Args:
        snapshot: Already-validated signals for one organization.
        now: Reference instant for the 30- and 90-day windows. Defaults to
            the current UTC time.
        include_recommendations: When False, the result carries an empty
            recommendation list.

    Returns:
        A SecurityScoreResult. Never raises for empty collections.
    """
    breakdown = calculate_breakdown(snapshot, now=now)
    overall = max(0, min(100, round_half_up(breakdown.total)))

    result = SecurityScoreResult(
        overall_score=overall,
        risk_level=classify_risk(overall),
        breakdown=breakdown,
        details=generate_details(breakdown, snapshot),
        recommendations=generate_recommendations(breakdown) if include_recommendations else [],
    )
    logger.debug("overall=%d risk=%s", result.overall_score, result.risk_level.value)
    return result


def calculate_breakdown(snapshot: SecurityScoreInput, now: datetime | None = None) -> ScoreBreakdown:
    """Compute the six clamped, unrounded sub-scores for a snapshot."""
    return breakdown_from_signals(collect_signals(snapshot, now=now))


def breakdown_from_signals(signals: SignalCounts) -> ScoreBreakdown:
    """Apply the point formulas to pre-counted signals."""
    breakdown = ScoreBreakdown(
        mfa_score=_clamp("mfa_score", _ratio_points(signals.mfa_enabled, signals.employee_count, 25)),
        agent_score=_clamp(
            "agent_score", _ratio_points(signals.agents_online, signals.device_count, 20)
        ),
        breach_score=_clamp("breach_score", _breach_points(signals)),
        training_score=_clamp(
            "training_score",
            _ratio_points(signals.trained_employees, signals.total_employees, 15),
        ),
        simulation_score=_clamp("simulation_score", _simulation_points(signals.mean_click_rate)),
        password_score=_clamp(
            "password_score", _ratio_points(signals.fresh_passwords, signals.employee_count, 10)
        ),
    )
    logger.debug("breakdown=%s", dict(breakdown.items()))
    return breakdown


def _ratio_points(count: int, denominator: int, cap: float) -> float:
    if denominator <= 0:
        return 0.0
    return count / denominator * cap


def _breach_points(signals: SignalCounts) -> float:
    score = SUBSCORE_CAPS["breach_score"]
    score -= signals.unresolved_severe * _SEVERE_THREAT_PENALTY
    score -= signals.unresolved_medium * _MEDIUM_THREAT_PENALTY
    score -= signals.recently_resolved * _RECENT_RESOLUTION_PENALTY
    return max(0.0, score)


def _simulation_points(mean_click_rate: float | None) -> float:
    if mean_click_rate is None:
        return SUBSCORE_CAPS["simulation_score"]
    return max(0.0, 10 - mean_click_rate / 10)


def _clamp(name: str, value: float) -> float:
    cap = SUBSCORE_CAPS[name]
    if math.isnan(value):
        logger.warning("%s evaluated to NaN; scoring it as 0", name)
        return 0.0
    return float(max(0.0, min(cap, value)))
