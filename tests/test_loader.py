"""Tests for YAML snapshot and trend loading."""

from __future__ import annotations

import textwrap
from datetime import UTC, datetime
from pathlib import Path

import pytest

from shield_score.domain.models import (
    AgentStatus,
    ThreatSeverity,
    ThreatStatus,
    TrainingStatus,
)
from shield_score.snapshots.loader import (
    load_snapshot,
    load_trend,
    parse_snapshot,
    parse_trend,
)

_SNAPSHOT = textwrap.dedent(
    """\
    total_employees: 3
    employees:
      - id: e1
        mfa_enabled: true
        password_last_changed: 2026-05-01T00:00:00Z
      - id: e2
        password_last_changed: "2026-01-15T08:30:00"
    devices:
      - id: d1
        agent_status: online
      - id: d2
        agent_status: outdated
    threats:
      - id: t1
        severity: critical
        status: detected
      - id: t2
        severity: medium
        status: resolved
        resolved_at: 2026-05-20
    simulations:
      - id: s1
        metrics:
          click_rate: 12.5
          open_rate: 40
    training_assignments:
      - id: a1
        employee_id: e1
        status: completed
    """
)


def _write(tmp_path: Path, content: str, name: str = "snapshot.yml") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestLoadSnapshot:
    def test_loads_all_sections(self, tmp_path: Path) -> None:
        snapshot = load_snapshot(_write(tmp_path, _SNAPSHOT))
        assert [e.employee_id for e in snapshot.employees] == ["e1", "e2"]
        assert snapshot.employees[0].mfa_enabled is True
        assert snapshot.employees[1].mfa_enabled is False
        assert [d.agent_status for d in snapshot.devices] == [
            AgentStatus.ONLINE,
            AgentStatus.OUTDATED,
        ]
        assert snapshot.threats[0].severity == ThreatSeverity.CRITICAL
        assert snapshot.threats[0].resolved_at is None
        assert snapshot.threats[1].status == ThreatStatus.RESOLVED
        assert snapshot.simulations[0].metrics.click_rate == 12.5
        assert snapshot.simulations[0].metrics.open_rate == 40.0
        assert snapshot.training_assignments[0].status == TrainingStatus.COMPLETED

    def test_timestamps_are_timezone_aware(self, tmp_path: Path) -> None:
        snapshot = load_snapshot(_write(tmp_path, _SNAPSHOT))
        assert snapshot.employees[0].password_last_changed == datetime(2026, 5, 1, tzinfo=UTC)
        assert snapshot.employees[1].password_last_changed == datetime(
            2026, 1, 15, 8, 30, tzinfo=UTC
        )
        assert snapshot.threats[1].resolved_at == datetime(2026, 5, 20, tzinfo=UTC)

    def test_total_devices_defaults_to_list_length(self, tmp_path: Path) -> None:
        snapshot = load_snapshot(_write(tmp_path, _SNAPSHOT))
        assert snapshot.total_employees == 3
        assert snapshot.total_devices == 2

    def test_empty_file_is_an_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="mapping"):
            load_snapshot(_write(tmp_path, ""))

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "nope.yml")

    def test_invalid_yaml_raises_value_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_snapshot(_write(tmp_path, "employees: [unclosed"))


class TestParseSnapshot:
    def test_empty_mapping_gives_empty_snapshot(self) -> None:
        snapshot = parse_snapshot({})
        assert snapshot.employees == []
        assert snapshot.total_employees == 0
        assert snapshot.total_devices == 0

    def test_invalid_agent_status(self) -> None:
        data = {"devices": [{"id": "d1", "agent_status": "sleeping"}]}
        with pytest.raises(ValueError, match="agent_status 'sleeping'"):
            parse_snapshot(data, source="x.yml")

    def test_missing_required_field(self) -> None:
        data = {"threats": [{"id": "t1", "severity": "high"}]}
        with pytest.raises(ValueError, match="missing 'status'"):
            parse_snapshot(data)

    def test_missing_click_rate(self) -> None:
        data = {"simulations": [{"id": "s1", "metrics": {"open_rate": 10}}]}
        with pytest.raises(ValueError, match="click_rate"):
            parse_snapshot(data)

    def test_bad_timestamp(self) -> None:
        data = {"employees": [{"id": "e1", "password_last_changed": "last tuesday"}]}
        with pytest.raises(ValueError, match="password_last_changed"):
            parse_snapshot(data)

    def test_section_must_be_list(self) -> None:
        with pytest.raises(ValueError, match="'devices' must be a list"):
            parse_snapshot({"devices": {"id": "d1"}})

    def test_non_integer_total(self) -> None:
        with pytest.raises(ValueError, match="total_employees"):
            parse_snapshot({"total_employees": "many"})

    @pytest.mark.parametrize("metrics", [5, "click_rate", [0.1]])
    def test_metrics_must_be_mapping(self, metrics: object) -> None:
        data = {"simulations": [{"id": "s1", "metrics": metrics}]}
        with pytest.raises(ValueError, match="metrics must be a mapping"):
            parse_snapshot(data)

    @pytest.mark.parametrize("flag", ["false", "yes", 1])
    def test_mfa_enabled_must_be_boolean(self, flag: object) -> None:
        employee = {"id": "e1", "mfa_enabled": flag, "password_last_changed": "2026-01-01"}
        with pytest.raises(ValueError, match="mfa_enabled"):
            parse_snapshot({"employees": [employee]})


class TestTrend:
    def test_load_trend_keeps_file_order(self, tmp_path: Path) -> None:
        content = textwrap.dedent(
            """\
            - date: 2026-03-01
              score: 70
              category: overall
            - date: 2026-01-01
              score: 55.5
              category: overall
            """
        )
        samples = load_trend(_write(tmp_path, content, "trend.yml"))
        assert [s.score for s in samples] == [70.0, 55.5]
        assert samples[1].date == datetime(2026, 1, 1, tzinfo=UTC)
        assert samples[0].category == "overall"

    def test_empty_trend(self) -> None:
        assert parse_trend(None) == []

    def test_trend_must_be_list(self) -> None:
        with pytest.raises(ValueError, match="list of samples"):
            parse_trend({"date": "2026-01-01"})

    def test_sample_missing_score(self) -> None:
        with pytest.raises(ValueError, match="missing 'score'"):
            parse_trend([{"date": "2026-01-01", "category": "overall"}])
