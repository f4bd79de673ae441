"""Pydantic request/response schemas for the cycle endpoints.

Dates cross the API boundary as strict ``YYYY-MM-DD`` strings; they are
parsed with the engine's own date parser so the accepted format is the
same everywhere.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from cyclekit.engine.datemath import format_date, parse_date
from cyclekit.engine.insights import CycleInsight, InsightCategory
from cyclekit.engine.models import (
    CyclePhases,
    CycleRecord,
    DailyEntry,
    DateInterval,
    Phase,
    PredictionData,
)
from cyclekit.engine.tags import CycleMood, Flow
from cyclekit.models.base import CycleKitBase


def _to_date(value: Any) -> Any:
    if isinstance(value, date):
        return value
    return parse_date(value)


# Upper bound for day counts accepted over HTTP
MAX_DAYS = 1000

CalendarDate = Annotated[
    date,
    BeforeValidator(_to_date),
    PlainSerializer(format_date, return_type=str),
]


# ---------- Requests ----------

class CycleRecordIn(CycleKitBase):
    anchor_date: CalendarDate | None = None
    cycle_length_days: int = Field(default=28, le=MAX_DAYS)
    period_duration_days: int = Field(default=5, le=MAX_DAYS)
    ovulation_date_override: CalendarDate | None = None
    symptoms: list[str] = Field(default_factory=list)
    mood: CycleMood | None = None
    flow: Flow | None = None

    def to_record(self) -> CycleRecord:
        return CycleRecord(
            anchor_date=self.anchor_date,
            cycle_length_days=self.cycle_length_days,
            period_duration_days=self.period_duration_days,
            ovulation_date_override=self.ovulation_date_override,
            symptoms=frozenset(self.symptoms),
            mood=self.mood,
            flow=self.flow,
        )

    @classmethod
    def from_record(cls, record: CycleRecord) -> CycleRecordIn:
        return cls(
            anchor_date=record.anchor_date,
            cycle_length_days=record.cycle_length_days,
            period_duration_days=record.period_duration_days,
            ovulation_date_override=record.ovulation_date_override,
            symptoms=sorted(record.symptoms),
            mood=record.mood,
            flow=record.flow,
        )


class DayQuery(CycleKitBase):
    record: CycleRecordIn
    date: CalendarDate


class ArrivalQuery(CycleKitBase):
    record: CycleRecordIn
    actual_start: CalendarDate
    symptoms: list[str] = Field(default_factory=list)
    mood: CycleMood | None = None
    flow: Flow | None = None


class HistoryIn(CycleKitBase):
    history: list[CycleRecordIn] = Field(default_factory=list)


class DailyEntryIn(CycleKitBase):
    date: CalendarDate
    mood: CycleMood | None = None
    symptoms: list[str] = Field(default_factory=list)
    flow: Flow | None = None
    notes: str = ""
    sleep: float | None = Field(default=None, ge=0, le=24)
    energy: int | None = Field(default=None, ge=1, le=10)
    exercise: int | None = Field(default=None, ge=0)
    stress: int | None = Field(default=None, ge=1, le=10)

    def to_entry(self) -> DailyEntry:
        return DailyEntry(
            date=self.date,
            mood=self.mood,
            symptoms=tuple(self.symptoms),
            flow=self.flow,
            notes=self.notes,
            sleep=self.sleep,
            energy=self.energy,
            exercise=self.exercise,
            stress=self.stress,
        )


class InsightsQuery(CycleKitBase):
    record: CycleRecordIn
    date: CalendarDate
    entries: list[DailyEntryIn] = Field(default_factory=list)


class ExportQuery(CycleKitBase):
    record: CycleRecordIn
    entries: list[DailyEntryIn] = Field(default_factory=list)


# ---------- Responses ----------

class IntervalOut(CycleKitBase):
    start: CalendarDate | None = None
    end: CalendarDate | None = None
    is_empty: bool = True

    @classmethod
    def from_interval(cls, interval: DateInterval) -> IntervalOut:
        if interval.is_empty:
            return cls()
        return cls(start=interval.start, end=interval.end, is_empty=False)


class PhasesOut(CycleKitBase):
    has_data: bool
    menstrual: IntervalOut
    follicular: IntervalOut
    ovulatory: IntervalOut
    luteal: IntervalOut
    ovulation_date: CalendarDate | None = None
    next_period_start: CalendarDate | None = None
    fertile_window: IntervalOut

    @classmethod
    def from_phases(cls, phases: CyclePhases, window: DateInterval) -> PhasesOut:
        return cls(
            has_data=not phases.is_empty,
            menstrual=IntervalOut.from_interval(phases.menstrual),
            follicular=IntervalOut.from_interval(phases.follicular),
            ovulatory=IntervalOut.from_interval(phases.ovulatory),
            luteal=IntervalOut.from_interval(phases.luteal),
            ovulation_date=phases.ovulation_date,
            next_period_start=phases.next_period_start,
            fertile_window=IntervalOut.from_interval(window),
        )


class DayOut(CycleKitBase):
    date: CalendarDate
    is_in_period: bool
    cycle_day: int | None = None
    phase: Phase | None = None
    in_fertile_window: bool = False
    days_until_next_period: int | None = None


class PredictionOut(CycleKitBase):
    predicted_next_start: CalendarDate | None = None
    predicted_cycle_length: int
    predicted_period_duration: int
    certainty: float = Field(ge=0.0, le=1.0)
    symptom_likelihood: dict[str, float] = Field(default_factory=dict)
    cycles_used: int
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_prediction(cls, prediction: PredictionData) -> PredictionOut:
        return cls(
            predicted_next_start=prediction.predicted_next_start,
            predicted_cycle_length=prediction.predicted_cycle_length,
            predicted_period_duration=prediction.predicted_period_duration,
            certainty=prediction.certainty,
            symptom_likelihood=dict(prediction.symptom_likelihood),
            cycles_used=prediction.cycles_used,
            warnings=list(prediction.warnings),
        )


class InsightOut(CycleKitBase):
    insight_id: str
    title: str
    description: str
    category: InsightCategory
    relevancy: float
    recommendations: list[str] = Field(default_factory=list)

    @classmethod
    def from_insight(cls, insight: CycleInsight) -> InsightOut:
        return cls(
            insight_id=insight.insight_id,
            title=insight.title,
            description=insight.description,
            category=insight.category,
            relevancy=insight.relevancy,
            recommendations=list(insight.recommendations),
        )
