"""Signal counting — reduce a snapshot to the raw counts behind each sub-score.

Keeping the counts separate from the point formulas lets a score be audited
against its inputs: every sub-score is a function of one or two of these
numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from shield_score.domain.models import (
    AgentStatus,
    SecurityScoreInput,
    ThreatSeverity,
    ThreatStatus,
    TrainingStatus,
)
from shield_score.engine.timestamps import as_utc

RECENT_RESOLUTION_WINDOW = timedelta(days=30)
PASSWORD_MAX_AGE = timedelta(days=90)

_SEVERE = frozenset({ThreatSeverity.CRITICAL, ThreatSeverity.HIGH})


@dataclass(frozen=True)
class SignalCounts:
    """Raw counts extracted from one SecurityScoreInput."""

    employee_count: int
    mfa_enabled: int
    device_count: int
    agents_online: int
    unresolved_severe: int
    """Unresolved threats of critical or high severity."""

    unresolved_medium: int
    unresolved_total: int
    recently_resolved: int
    """Resolved threats whose resolved_at falls inside the trailing window."""

    trained_employees: int
    """Distinct employees with at least one completed assignment."""

    total_employees: int
    simulation_count: int
    mean_click_rate: float | None
    """None when no simulations were run."""

    fresh_passwords: int


def collect_signals(snapshot: SecurityScoreInput, now: datetime | None = None) -> SignalCounts:
    """Count every signal the score formulas consume.

    Args:
        snapshot: Signals for one organization.
        now: Reference instant for the trailing windows. Defaults to the
            current UTC time.
    """
    now = as_utc(now) if now else datetime.now(UTC)
    resolved_cutoff = now - RECENT_RESOLUTION_WINDOW
    password_cutoff = now - PASSWORD_MAX_AGE

    unresolved = [t for t in snapshot.threats if t.unresolved]
    recently_resolved = [
        t
        for t in snapshot.threats
        if t.status is ThreatStatus.RESOLVED
        and t.resolved_at is not None
        and as_utc(t.resolved_at) > resolved_cutoff
    ]

    trained = {
        a.employee_id
        for a in snapshot.training_assignments
        if a.status is TrainingStatus.COMPLETED
    }

    sims = snapshot.simulations
    mean_click_rate = sum(s.metrics.click_rate for s in sims) / len(sims) if sims else None

    return SignalCounts(
        employee_count=len(snapshot.employees),
        mfa_enabled=sum(1 for e in snapshot.employees if e.mfa_enabled),
        device_count=len(snapshot.devices),
        agents_online=sum(1 for d in snapshot.devices if d.agent_status is AgentStatus.ONLINE),
        unresolved_severe=sum(1 for t in unresolved if t.severity in _SEVERE),
        unresolved_medium=sum(1 for t in unresolved if t.severity is ThreatSeverity.MEDIUM),
        unresolved_total=len(unresolved),
        recently_resolved=len(recently_resolved),
        trained_employees=len(trained),
        total_employees=snapshot.total_employees,
        simulation_count=len(sims),
        mean_click_rate=mean_click_rate,
        fresh_passwords=sum(
            1 for e in snapshot.employees if as_utc(e.password_last_changed) > password_cutoff
        ),
    )
