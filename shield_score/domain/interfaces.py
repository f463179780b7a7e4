"""Collaborator interfaces.

These are pure protocols — the engine never fetches or persists anything
itself. Callers that schedule score runs implement them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from shield_score.domain.models import ScoreTrend, SecurityScoreInput, SecurityScoreResult


class SnapshotSource(Protocol):
    """Provide an already-validated signal snapshot for one organization."""

    def load_snapshot(self, organization_id: str) -> SecurityScoreInput:
        """Return the current signals. Retries on failure are the caller's job."""
        ...


class ScoreRepository(Protocol):
    """Persist score results and query previously recorded samples."""

    def save_result(
        self,
        organization_id: str,
        calculated_at: datetime,
        result: SecurityScoreResult,
    ) -> None:
        """Store a result keyed by organization and timestamp."""
        ...

    def list_trend(self, organization_id: str, category: str) -> list[ScoreTrend]:
        """Return recorded samples for one category, in any order."""
        ...
