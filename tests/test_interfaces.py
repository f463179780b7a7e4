"""Tests for driving the engine through the collaborator protocols."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from shield_score.domain.interfaces import ScoreRepository, SnapshotSource
from shield_score.domain.models import (
    AgentStatus,
    Device,
    ScoreTrend,
    SecurityScoreInput,
    SecurityScoreResult,
)
from shield_score.engine.calculator import calculate_security_score
from shield_score.engine.trend import calculate_score_trend

NOW = datetime(2026, 6, 1, tzinfo=UTC)


class InMemorySource:
    def __init__(self, snapshots: dict[str, SecurityScoreInput]) -> None:
        self._snapshots = snapshots

    def load_snapshot(self, organization_id: str) -> SecurityScoreInput:
        return self._snapshots[organization_id]


class InMemoryRepository:
    def __init__(self) -> None:
        self.saved: list[tuple[str, datetime, SecurityScoreResult]] = []

    def save_result(
        self, organization_id: str, calculated_at: datetime, result: SecurityScoreResult
    ) -> None:
        self.saved.append((organization_id, calculated_at, result))

    def list_trend(self, organization_id: str, category: str) -> list[ScoreTrend]:
        # Newest first, the way a store typically returns them.
        return [
            ScoreTrend(at, float(result.overall_score), category)
            for org, at, result in reversed(self.saved)
            if org == organization_id
        ]


def _run(source: SnapshotSource, repo: ScoreRepository, org: str, at: datetime) -> None:
    result = calculate_security_score(source.load_snapshot(org), now=at)
    repo.save_result(org, at, result)


def test_scheduled_runs_produce_ordered_trend() -> None:
    half_online = SecurityScoreInput(
        devices=[Device("d1", AgentStatus.ONLINE), Device("d2", AgentStatus.OFFLINE)]
    )
    all_online = SecurityScoreInput(
        devices=[Device("d1", AgentStatus.ONLINE), Device("d2", AgentStatus.ONLINE)]
    )
    repo = InMemoryRepository()

    _run(InMemorySource({"org": half_online}), repo, "org", NOW - timedelta(days=7))
    _run(InMemorySource({"org": all_online}), repo, "org", NOW)

    trend = calculate_score_trend(repo.list_trend("org", "overall"))
    assert [t.date for t in trend] == [NOW - timedelta(days=7), NOW]
    assert [t.score for t in trend] == [40.0, 50.0]
