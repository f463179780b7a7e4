"""Trend tracker — order recorded score samples for display.

Purely an ordering operation: no deduplication, no gap filling and no
category filtering. Callers query the right category and date range first.
"""

from __future__ import annotations

from collections.abc import Iterable

from shield_score.domain.models import ScoreTrend
from shield_score.engine.timestamps import as_utc


def calculate_score_trend(samples: Iterable[ScoreTrend]) -> list[ScoreTrend]:
    """Return samples sorted ascending by date.

    The sort is stable: samples sharing a date keep their input order.
    The input is not modified. Naive dates are read as UTC.
    """
    return sorted(samples, key=lambda s: as_utc(s.date))


def score_change(samples: Iterable[ScoreTrend]) -> float | None:
    """Return latest score minus the previous one, or None with < 2 samples."""
    ordered = calculate_score_trend(samples)
    if len(ordered) < 2:
        return None
    return ordered[-1].score - ordered[-2].score
