"""Cycle phase and prediction engine.

Pure, synchronous derivations over immutable :class:`CycleRecord` values.
Nothing here performs I/O apart from loading ``cycle_config.yaml`` once.

Modules:
    datemath      — YYYY-MM-DD parsing/formatting and day arithmetic
    models        — CycleRecord, CyclePhases, FertileWindow, PredictionData
    tags          — Symptom, mood and flow tag sets with display lookups
    phases        — Four-phase partition of the anchor cycle
    fertility     — Fertile window around ovulation
    membership    — Period membership, cycle day and period arrival for any date
    prediction    — Next-cycle estimate from history
    insights      — Rule-based cycle insights
    export        — CSV export of daily entries
    config_loader — Load/validate/hot-reload cycle_config.yaml
"""

from cyclekit.engine.errors import (
    CycleEngineError,
    InsufficientHistory,
    InvalidCycleParameters,
    InvalidDateFormat,
)
from cyclekit.engine.fertility import (
    fertile_window,
    fertile_window_for,
    is_in_any_fertile_window,
    is_in_fertile_window,
)
from cyclekit.engine.membership import (
    cycle_day_of,
    days_until_next_period,
    is_in_period,
    record_period_arrival,
)
from cyclekit.engine.models import (
    CyclePhases,
    CycleRecord,
    DailyEntry,
    DateInterval,
    FertileWindow,
    Phase,
    PredictionData,
)
from cyclekit.engine.phases import PhaseCalculator, compute_phases, phase_for_date
from cyclekit.engine.prediction import PredictionEngine, predict_next_cycle

__all__ = [
    "CycleEngineError",
    "InsufficientHistory",
    "InvalidCycleParameters",
    "InvalidDateFormat",
    "CycleRecord",
    "CyclePhases",
    "DailyEntry",
    "DateInterval",
    "FertileWindow",
    "Phase",
    "PredictionData",
    "PhaseCalculator",
    "compute_phases",
    "phase_for_date",
    "fertile_window",
    "fertile_window_for",
    "is_in_fertile_window",
    "is_in_any_fertile_window",
    "is_in_period",
    "cycle_day_of",
    "days_until_next_period",
    "record_period_arrival",
    "PredictionEngine",
    "predict_next_cycle",
]
