"""Core domain models for the security posture score engine.

These models have ZERO dependencies on storage, CLI, or any framework.
Signal entities (Employee, Device, Threat, Simulation, TrainingAssignment)
are supplied read-only by upstream collectors; ScoreBreakdown,
SecurityScoreResult and Recommendation are produced by the engine.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class AgentStatus(Enum):
    """Health of the endpoint agent installed on a device."""

    ONLINE = "online"
    OFFLINE = "offline"
    OUTDATED = "outdated"


class ThreatSeverity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class ThreatStatus(Enum):
    """Lifecycle state of a detected threat.

    Anything other than RESOLVED counts as unresolved, including
    FALSE_POSITIVE.
    """

    DETECTED = "detected"
    QUARANTINED = "quarantined"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"


class TrainingStatus(Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class RiskLevel(Enum):
    """Ordinal risk tier derived solely from the overall score."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    EXCELLENT = "excellent"


class Priority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ─── Signal entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Employee:
    employee_id: str
    mfa_enabled: bool
    password_last_changed: datetime


@dataclass(frozen=True)
class Device:
    device_id: str
    agent_status: AgentStatus


@dataclass(frozen=True)
class Threat:
    threat_id: str
    severity: ThreatSeverity
    status: ThreatStatus
    resolved_at: datetime | None = None

    @property
    def unresolved(self) -> bool:
        return self.status is not ThreatStatus.RESOLVED


@dataclass(frozen=True)
class SimulationMetrics:
    """Phishing simulation outcome rates, as percentages (0–100)."""

    click_rate: float
    open_rate: float = 0.0


@dataclass(frozen=True)
class Simulation:
    simulation_id: str
    metrics: SimulationMetrics


@dataclass(frozen=True)
class TrainingAssignment:
    assignment_id: str
    employee_id: str
    status: TrainingStatus


@dataclass(frozen=True)
class SecurityScoreInput:
    """Snapshot of every signal the score is computed from.

    total_employees is the training denominator and may differ from
    len(employees); total_devices is informational.
    """

    employees: list[Employee] = field(default_factory=list)
    devices: list[Device] = field(default_factory=list)
    threats: list[Threat] = field(default_factory=list)
    simulations: list[Simulation] = field(default_factory=list)
    training_assignments: list[TrainingAssignment] = field(default_factory=list)
    total_employees: int = 0
    total_devices: int = 0


# ─── Engine output ────────────────────────────────────────────────────────────

SUBSCORE_CAPS: dict[str, float] = {
    "mfa_score": 25.0,
    "agent_score": 20.0,
    "breach_score": 20.0,
    "training_score": 15.0,
    "simulation_score": 10.0,
    "password_score": 10.0,
}
"""Maximum points per sub-score. Caps sum to 100."""


@dataclass(frozen=True)
class ScoreBreakdown:
    """The six weighted sub-scores, each within [0, cap]."""

    mfa_score: float = 0.0
    agent_score: float = 0.0
    breach_score: float = 0.0
    training_score: float = 0.0
    simulation_score: float = 0.0
    password_score: float = 0.0

    @property
    def total(self) -> float:
        """Unrounded sum of all sub-scores."""
        return sum(value for _, value in self.items())

    def items(self) -> Iterator[tuple[str, float]]:
        """Yield (field name, value) pairs in field order."""
        for name in SUBSCORE_CAPS:
            yield name, getattr(self, name)


@dataclass(frozen=True)
class Recommendation:
    """An actionable remediation item.

    action is an opaque key interpreted by the calling system.
    """

    id: str
    priority: Priority
    title: str
    description: str
    action: str
    estimated_impact: float
    """Points recoverable if the category reaches its cap."""

    implementation_difficulty: Difficulty


@dataclass(frozen=True)
class SecurityScoreResult:
    overall_score: int
    """0–100. Rounded once from the sum of the unrounded sub-scores."""

    risk_level: RiskLevel
    breakdown: ScoreBreakdown
    details: list[str] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass(frozen=True)
class ScoreTrend:
    """A previously recorded score sample."""

    date: datetime
    score: float
    category: str
