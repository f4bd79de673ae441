"""Shared fixtures for cycle engine tests."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from cyclekit.engine.config_loader import EngineConfig, load_engine_config
from cyclekit.engine.datemath import parse_date
from cyclekit.engine.models import CycleRecord, DailyEntry
from cyclekit.engine.tags import CycleMood, Flow

# Fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Reference cycle used throughout: 28-day cycle, 5-day period
ANCHOR = date(2024, 1, 1)


def make_record(
    anchor: date | None = ANCHOR,
    length: int = 28,
    duration: int = 5,
    override: date | None = None,
    symptoms: tuple[str, ...] = (),
) -> CycleRecord:
    return CycleRecord(
        anchor_date=anchor,
        cycle_length_days=length,
        period_duration_days=duration,
        ovulation_date_override=override,
        symptoms=frozenset(symptoms),
    )


def record_from_json(raw: dict) -> CycleRecord:
    return CycleRecord.from_text(
        anchor_date=raw["anchor_date"],
        cycle_length_days=raw["cycle_length_days"],
        period_duration_days=raw["period_duration_days"],
        symptoms=raw.get("symptoms", []),
    )


def entry_from_json(raw: dict) -> DailyEntry:
    return DailyEntry(
        date=parse_date(raw["date"]),
        mood=CycleMood(raw["mood"]) if raw.get("mood") else None,
        symptoms=tuple(raw.get("symptoms", [])),
        flow=Flow(raw["flow"]) if raw.get("flow") else None,
        notes=raw.get("notes", ""),
        sleep=raw.get("sleep"),
        energy=raw.get("energy"),
        exercise=raw.get("exercise"),
        stress=raw.get("stress"),
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine_config() -> EngineConfig:
    """Load the real engine config for tests."""
    return load_engine_config()


# ---------------------------------------------------------------------------
# JSON fixture loaders
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_data() -> dict:
    return json.loads((FIXTURES_DIR / "cycle_data.json").read_text())


@pytest.fixture
def regular_history(cycle_data: dict) -> list[CycleRecord]:
    return [record_from_json(r) for r in cycle_data["regular_history"]]


@pytest.fixture
def variable_history(cycle_data: dict) -> list[CycleRecord]:
    return [record_from_json(r) for r in cycle_data["variable_history"]]


@pytest.fixture
def daily_entries(cycle_data: dict) -> list[DailyEntry]:
    return [entry_from_json(e) for e in cycle_data["daily_entries"]]


# ---------------------------------------------------------------------------
# Record fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def reference_record() -> CycleRecord:
    """2024-01-01 anchor, 28-day cycle, 5-day period."""
    return make_record()


@pytest.fixture
def no_data_record() -> CycleRecord:
    return make_record(anchor=None)
