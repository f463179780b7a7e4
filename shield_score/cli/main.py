"""CLI entry point for shield-score."""

import logging

import click
from rich.logging import RichHandler

from shield_score.cli.report import report
from shield_score.cli.score import score
from shield_score.cli.trend import trend


@click.group()
@click.version_option(package_name="shield-score")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Security posture score — score, trend and report on organization signals."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(score)
cli.add_command(trend)
cli.add_command(report)
