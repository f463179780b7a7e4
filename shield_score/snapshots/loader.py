"""YAML snapshot loader.

Loads SecurityScoreInput snapshots and ScoreTrend samples from YAML files.
The YAML schema mirrors the domain models — no mapping magic needed.

Snapshot schema:
  total_employees: int  (optional, defaults to len(employees))
  total_devices: int    (optional, defaults to len(devices))
  employees:
    - id: string
      mfa_enabled: true | false
      password_last_changed: timestamp
  devices:
    - id: string
      agent_status: online | offline | outdated
  threats:
    - id: string
      severity: critical | high | medium | low | info
      status: detected | quarantined | resolved | false_positive
      resolved_at: timestamp | null  (optional)
  simulations:
    - id: string
      metrics: {click_rate: number, open_rate: number}
  training_assignments:
    - id: string
      employee_id: string
      status: assigned | in_progress | completed | overdue

Trend schema: a list of {date: timestamp, score: number, category: string}.

Timestamps without a timezone are read as UTC.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from shield_score.domain.models import (
    AgentStatus,
    Device,
    Employee,
    ScoreTrend,
    SecurityScoreInput,
    Simulation,
    SimulationMetrics,
    Threat,
    ThreatSeverity,
    ThreatStatus,
    TrainingAssignment,
    TrainingStatus,
)
from shield_score.engine.timestamps import as_utc

logger = logging.getLogger("shield_score.snapshots.loader")

_E = TypeVar("_E", bound=Enum)


def load_snapshot(path: Path) -> SecurityScoreInput:
    """Load a SecurityScoreInput from a YAML file.

    Raises:
        FileNotFoundError: if the file doesn't exist.
        ValueError: if the YAML is structurally invalid.
    """
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot must be a mapping (source: {path})")
    snapshot = parse_snapshot(data, source=str(path))
    logger.debug(
        "loaded snapshot from %s: %d employees, %d devices, %d threats",
        path,
        len(snapshot.employees),
        len(snapshot.devices),
        len(snapshot.threats),
    )
    return snapshot


def load_trend(path: Path) -> list[ScoreTrend]:
    """Load ScoreTrend samples from a YAML file, in file order.

    Raises:
        FileNotFoundError: if the file doesn't exist.
        ValueError: if the YAML is structurally invalid.
    """
    samples = parse_trend(_read_yaml(path), source=str(path))
    logger.debug("loaded %d trend samples from %s", len(samples), path)
    return samples


def parse_snapshot(data: dict[str, Any], source: str = "") -> SecurityScoreInput:
    employees = [_parse_employee(e, source) for e in _section(data, "employees", source)]
    devices = [_parse_device(d, source) for d in _section(data, "devices", source)]
    threats = [_parse_threat(t, source) for t in _section(data, "threats", source)]
    simulations = [_parse_simulation(s, source) for s in _section(data, "simulations", source)]
    assignments = [
        _parse_assignment(a, source) for a in _section(data, "training_assignments", source)
    ]

    return SecurityScoreInput(
        employees=employees,
        devices=devices,
        threats=threats,
        simulations=simulations,
        training_assignments=assignments,
        total_employees=_int(data.get("total_employees", len(employees)), "total_employees", source),
        total_devices=_int(data.get("total_devices", len(devices)), "total_devices", source),
    )


def parse_trend(data: Any, source: str = "") -> list[ScoreTrend]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Trend file must contain a list of samples (source: {source})")

    samples = []
    for item in data:
        _require(item, ("date", "score", "category"), "trend sample", source)
        samples.append(
            ScoreTrend(
                date=_timestamp(item["date"], "date", source),
                score=_number(item["score"], "score", source),
                category=str(item["category"]),
            )
        )
    return samples


# ─── Internals ────────────────────────────────────────────────────────────────


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path) as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ValueError(f"Invalid YAML in {path}: {err}") from err


def _section(data: dict[str, Any], key: str, source: str) -> list[dict[str, Any]]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise ValueError(f"'{key}' must be a list (source: {source})")
    return items


def _require(item: Any, keys: tuple[str, ...], kind: str, source: str) -> None:
    if not isinstance(item, dict):
        raise ValueError(f"Each {kind} must be a mapping (source: {source})")
    for key in keys:
        if key not in item:
            raise ValueError(f"{kind.capitalize()} missing '{key}' field (source: {source})")


def _parse_employee(data: Any, source: str) -> Employee:
    _require(data, ("id", "password_last_changed"), "employee", source)
    return Employee(
        employee_id=str(data["id"]),
        mfa_enabled=_bool(data.get("mfa_enabled", False), "mfa_enabled", source),
        password_last_changed=_timestamp(
            data["password_last_changed"], "password_last_changed", source
        ),
    )


def _parse_device(data: Any, source: str) -> Device:
    _require(data, ("id", "agent_status"), "device", source)
    return Device(
        device_id=str(data["id"]),
        agent_status=_enum(AgentStatus, data["agent_status"], "agent_status", source),
    )


def _parse_threat(data: Any, source: str) -> Threat:
    _require(data, ("id", "severity", "status"), "threat", source)
    resolved_at = data.get("resolved_at")
    return Threat(
        threat_id=str(data["id"]),
        severity=_enum(ThreatSeverity, data["severity"], "severity", source),
        status=_enum(ThreatStatus, data["status"], "status", source),
        resolved_at=_timestamp(resolved_at, "resolved_at", source) if resolved_at else None,
    )


def _parse_simulation(data: Any, source: str) -> Simulation:
    _require(data, ("id", "metrics"), "simulation", source)
    metrics = data["metrics"] or {}
    if not isinstance(metrics, dict):
        raise ValueError(f"Simulation '{data['id']}' metrics must be a mapping (source: {source})")
    if "click_rate" not in metrics:
        raise ValueError(f"Simulation '{data['id']}' missing 'click_rate' (source: {source})")
    return Simulation(
        simulation_id=str(data["id"]),
        metrics=SimulationMetrics(
            click_rate=_number(metrics["click_rate"], "click_rate", source),
            open_rate=_number(metrics.get("open_rate", 0), "open_rate", source),
        ),
    )


def _parse_assignment(data: Any, source: str) -> TrainingAssignment:
    _require(data, ("id", "employee_id", "status"), "training assignment", source)
    return TrainingAssignment(
        assignment_id=str(data["id"]),
        employee_id=str(data["employee_id"]),
        status=_enum(TrainingStatus, data["status"], "status", source),
    )


def _enum(cls: type[_E], value: Any, name: str, source: str) -> _E:
    try:
        return cls(value)
    except ValueError as err:
        raise ValueError(f"Invalid {name} '{value}' (source: {source})") from err


def _number(value: Any, name: str, source: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name} '{value}' (source: {source})")
    try:
        return float(value)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid {name} '{value}' (source: {source})") from err


def _bool(value: Any, name: str, source: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Invalid {name} '{value}', expected true or false (source: {source})")
    return value


def _int(value: Any, name: str, source: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {name} '{value}' (source: {source})")
    return value


def _timestamp(value: Any, name: str, source: str) -> datetime:
    # PyYAML already turns unquoted ISO timestamps into date/datetime objects.
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value)
        except ValueError as err:
            raise ValueError(f"Invalid {name} timestamp '{value}' (source: {source})") from err
    else:
        raise ValueError(f"Invalid {name} timestamp '{value}' (source: {source})")

    return as_utc(dt)
