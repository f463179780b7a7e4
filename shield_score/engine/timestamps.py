"""Timestamp normalization shared by the engine and the snapshot loader."""

from __future__ import annotations

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """Return an aware datetime. Naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
