"""Report command — generate a Markdown security posture report."""

from __future__ import annotations

import os
from contextlib import suppress
from datetime import UTC, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markdown import Markdown

from shield_score.engine.report import generate_report, render_markdown
from shield_score.snapshots.loader import load_snapshot, load_trend

console = Console()


@click.command()
@click.argument("snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--trend",
    "trend_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file of recorded score samples to include as a trend.",
)
@click.option(
    "--now",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
    default=None,
    help="Reference time (UTC) for the 30/90-day windows. Defaults to now.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write report to a Markdown file instead of printing to console.",
)
def report(
    snapshot_path: Path,
    trend_path: Path | None,
    now: datetime | None,
    output_path: Path | None,
) -> None:
    """Generate a Markdown security posture report for a YAML signal snapshot."""
    try:
        snapshot = load_snapshot(snapshot_path)
        samples = load_trend(trend_path) if trend_path is not None else None
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]")
        raise SystemExit(1) from e

    reference = now.replace(tzinfo=UTC) if now else None
    rep = generate_report(snapshot, now=reference, trend=samples)
    md_text = render_markdown(rep)

    if output_path is not None:
        output_path.write_text(md_text, encoding="utf-8")
        with suppress(OSError):
            os.chmod(output_path, 0o600)
        console.print(f"[green]Report written to {output_path}[/green]")
    else:
        console.print(Markdown(md_text))
