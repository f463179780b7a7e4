"""Trend command — display recorded score samples in chronological order."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shield_score.domain.models import ScoreTrend
from shield_score.engine.trend import calculate_score_trend, score_change
from shield_score.snapshots.loader import load_trend

console = Console()


@click.command()
@click.argument("samples_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--category",
    default=None,
    help="Only show samples recorded for this category.",
)
def trend(samples_path: Path, category: str | None) -> None:
    """Show score samples from a YAML file, oldest first."""
    samples = _load_samples(samples_path)
    if category is not None:
        samples = [s for s in samples if s.category == category]

    if not samples:
        console.print("[yellow]No score samples found.[/yellow]")
        return

    ordered = calculate_score_trend(samples)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("Date", style="dim", width=19)
    table.add_column("Score", width=7, justify="right")
    table.add_column("Category", min_width=12)

    for sample in ordered:
        table.add_row(sample.date.strftime("%Y-%m-%d %H:%M:%S"), f"{sample.score:g}", sample.category)

    console.print(table)

    change = score_change(ordered)
    if change is not None:
        color = "green" if change >= 0 else "red"
        console.print(f"\nLatest change: [{color}]{change:+g} pts[/{color}]")


def _load_samples(path: Path) -> list[ScoreTrend]:
    try:
        return load_trend(path)
    except ValueError as e:
        console.print(f"[red]Invalid trend file: {e}[/red]")
        raise SystemExit(1) from e
