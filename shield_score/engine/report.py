"""Report generation engine.

Produces a Markdown security posture report from a signal snapshot and,
optionally, previously recorded score samples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from shield_score.domain.models import (
    SUBSCORE_CAPS,
    ScoreTrend,
    SecurityScoreInput,
    SecurityScoreResult,
)
from shield_score.engine.calculator import calculate_security_score
from shield_score.engine.signals import SignalCounts, collect_signals
from shield_score.engine.timestamps import as_utc
from shield_score.engine.trend import calculate_score_trend, score_change

CATEGORY_LABELS = {
    "mfa_score": "MFA Enrollment",
    "agent_score": "Agent Health",
    "breach_score": "Breach History",
    "training_score": "Training Completion",
    "simulation_score": "Phishing Simulations",
    "password_score": "Password Hygiene",
}


@dataclass(frozen=True)
class Report:
    """Structured security posture report for one snapshot."""

    generated_at: datetime
    result: SecurityScoreResult
    signals: SignalCounts
    trend: list[ScoreTrend] = field(default_factory=list)
    change: float | None = None


def generate_report(
    snapshot: SecurityScoreInput,
    now: datetime | None = None,
    trend: list[ScoreTrend] | None = None,
) -> Report:
    """Build a Report by scoring the snapshot and ordering any trend samples."""
    now = as_utc(now) if now else datetime.now(UTC)
    samples = trend or []
    return Report(
        generated_at=now,
        result=calculate_security_score(snapshot, now=now),
        signals=collect_signals(snapshot, now=now),
        trend=calculate_score_trend(samples),
        change=score_change(samples),
    )


def render_markdown(report: Report) -> str:
    """Render a Report as a Markdown string."""
    lines: list[str] = []
    res = report.result
    sig = report.signals

    lines.append("# Security Posture Report")
    lines.append("")
    generated = as_utc(report.generated_at).astimezone(UTC)
    lines.append(f"Generated: {generated.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    lines.append("")

    # Score summary
    lines.append("## Security Score")
    lines.append("")
    lines.append(f"**{res.overall_score}/100** — Risk level: **{res.risk_level.value.upper()}**")
    lines.append("")

    lines.append("## Score Breakdown")
    lines.append("")
    lines.append("| Category | Score | Max |")
    lines.append("|---|---|---|")
    for name, value in res.breakdown.items():
        lines.append(f"| {CATEGORY_LABELS[name]} | {value:.1f} | {SUBSCORE_CAPS[name]:.0f} |")
    lines.append("")

    lines.append("## Signals")
    lines.append("")
    click_rate = "n/a" if sig.mean_click_rate is None else f"{sig.mean_click_rate:.1f}%"
    lines.append(f"- MFA enabled: {sig.mfa_enabled}/{sig.employee_count} employees")
    lines.append(f"- Agents online: {sig.agents_online}/{sig.device_count} devices")
    lines.append(
        f"- Unresolved threats: {sig.unresolved_total} "
        f"({sig.unresolved_severe} critical/high, {sig.unresolved_medium} medium); "
        f"recently resolved: {sig.recently_resolved}"
    )
    lines.append(f"- Trained employees: {sig.trained_employees}/{sig.total_employees}")
    lines.append(f"- Simulations: {sig.simulation_count}, mean click rate {click_rate}")
    lines.append(f"- Passwords changed within 90 days: {sig.fresh_passwords}/{sig.employee_count}")
    lines.append("")

    lines.append("## Findings")
    lines.append("")
    for detail in res.details:
        lines.append(f"- {detail}")
    lines.append("")

    lines.append("## Recommendations")
    lines.append("")
    if not res.recommendations:
        lines.append("No remediation needed.")
    else:
        lines.append("| Priority | Recommendation | Impact | Difficulty |")
        lines.append("|---|---|---|---|")
        for rec in res.recommendations:
            lines.append(
                f"| {rec.priority.value.upper()} | {rec.title} | "
                f"+{rec.estimated_impact:.1f} | {rec.implementation_difficulty.value} |"
            )
    lines.append("")

    # Trend (only if samples were supplied)
    if report.trend:
        lines.append("## Score Trend")
        lines.append("")
        lines.append("| Date | Score | Category |")
        lines.append("|---|---|---|")
        for sample in report.trend:
            lines.append(
                f"| {sample.date.strftime('%Y-%m-%d')} | {sample.score:g} | {sample.category} |"
            )
        lines.append("")
        if report.change is not None:
            lines.append(f"Latest change: {report.change:+g} pts")
            lines.append("")

    return "\n".join(lines)
