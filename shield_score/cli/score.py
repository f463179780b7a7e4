"""Score command — security posture dashboard for a signal snapshot."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shield_score.domain.models import SUBSCORE_CAPS, SecurityScoreInput
from shield_score.engine.calculator import calculate_security_score
from shield_score.engine.report import CATEGORY_LABELS
from shield_score.snapshots.loader import load_snapshot

console = Console()

_RISK_COLORS = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "green",
    "excellent": "bold green",
}
_PRIORITY_COLORS = {"low": "dim", "medium": "yellow", "high": "red", "critical": "bold red"}


@click.command()
@click.argument("snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--now",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    default=None,
    help="Reference time (UTC) for the 30/90-day windows. Defaults to now.",
)
@click.option(
    "--no-recommendations",
    is_flag=True,
    default=False,
    help="Skip the remediation list.",
)
def score(snapshot_path: Path, now: datetime | None, no_recommendations: bool) -> None:
    """Show the security posture score for a YAML signal snapshot."""
    snapshot = _load_snapshot(snapshot_path)
    reference = now.replace(tzinfo=UTC) if now else None
    result = calculate_security_score(
        snapshot, now=reference, include_recommendations=not no_recommendations
    )

    # ── Score panel ────────────────────────────────────────────────────────────
    risk = result.risk_level.value
    risk_color = _RISK_COLORS.get(risk, "white")
    score_line = (
        f"[bold]{result.overall_score}/100[/bold]  "
        f"Risk: [{risk_color}]{risk.upper()}[/{risk_color}]"
    )
    meta = (
        f"Employees: {len(snapshot.employees)}  "
        f"Devices: {len(snapshot.devices)}  "
        f"Threats: {len(snapshot.threats)}  "
        f"Simulations: {len(snapshot.simulations)}"
    )
    console.print(
        Panel(f"{score_line}\n{meta}", title="[bold]Security Score[/bold]", expand=False)
    )
    console.print()

    # ── Breakdown table ────────────────────────────────────────────────────────
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("Category", width=22)
    table.add_column("Score", width=8, justify="right")
    table.add_column("Max", width=5, justify="right")

    for name, value in result.breakdown.items():
        table.add_row(CATEGORY_LABELS[name], f"{value:.1f}", f"{SUBSCORE_CAPS[name]:.0f}")

    console.print(table)
    console.print()

    console.print("[bold]Findings[/bold]")
    for detail in result.details:
        console.print(f"  • {detail}")
    console.print()

    if result.recommendations:
        rec_table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
        rec_table.add_column("Priority", width=10)
        rec_table.add_column("Recommendation", min_width=30)
        rec_table.add_column("Impact", width=8, justify="right")
        rec_table.add_column("Difficulty", width=10)

        for rec in result.recommendations:
            color = _PRIORITY_COLORS.get(rec.priority.value, "white")
            rec_table.add_row(
                f"[{color}]{rec.priority.value.upper()}[/{color}]",
                rec.title,
                f"+{rec.estimated_impact:.1f}",
                rec.implementation_difficulty.value,
            )

        console.print(rec_table)
        console.print()


def _load_snapshot(path: Path) -> SecurityScoreInput:
    try:
        return load_snapshot(path)
    except ValueError as e:
        console.print(f"[red]Invalid snapshot: {e}[/red]")
        raise SystemExit(1) from e
