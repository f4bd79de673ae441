"""Value types consumed and produced by the cycle engine.

Every type here is a frozen dataclass built fresh from its inputs; nothing
is persisted or mutated in place.  Derived values (phases, fertile window,
predictions) are always recomputed from the authoritative
:class:`CycleRecord`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterator

from cyclekit.engine.datemath import parse_date
from cyclekit.engine.errors import InvalidCycleParameters
from cyclekit.engine.tags import CycleMood, Flow


class Phase(str, Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulatory = "ovulatory"
    luteal = "luteal"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class CycleRecord:
    """A single anchor observation supplied by the storage layer.

    Attributes:
        anchor_date:             First day of the most recent known period.
                                 None means "no data".
        cycle_length_days:       Days from one period start to the next.
        period_duration_days:    Bleeding days within the cycle.
        ovulation_date_override: User- or sensor-confirmed ovulation date,
                                 used instead of the derived one.
        symptoms:                Symptom tags (opaque strings to phase math).
        mood:                    Mood tag.
        flow:                    Flow intensity tag.
    """

    anchor_date: date | None
    cycle_length_days: int = 28
    period_duration_days: int = 5
    ovulation_date_override: date | None = None
    symptoms: frozenset[str] = field(default_factory=frozenset)
    mood: CycleMood | None = None
    flow: Flow | None = None

    @classmethod
    def from_text(
        cls,
        anchor_date: str | None,
        cycle_length_days: int,
        period_duration_days: int,
        ovulation_date_override: str | None = None,
        symptoms: list[str] | None = None,
        mood: str | None = None,
        flow: str | None = None,
    ) -> CycleRecord:
        """Build a record from boundary text, parsing dates strictly.

        Empty or missing anchor text produces a no-data record rather than
        an error; malformed text raises :class:`InvalidDateFormat`.
        """
        return cls(
            anchor_date=parse_date(anchor_date) if anchor_date else None,
            cycle_length_days=cycle_length_days,
            period_duration_days=period_duration_days,
            ovulation_date_override=(
                parse_date(ovulation_date_override) if ovulation_date_override else None
            ),
            symptoms=frozenset(symptoms or ()),
            mood=CycleMood(mood) if mood else None,
            flow=Flow(flow) if flow else None,
        )

    @property
    def has_anchor(self) -> bool:
        return self.anchor_date is not None

    @property
    def has_valid_parameters(self) -> bool:
        return 0 < self.period_duration_days < self.cycle_length_days

    @property
    def is_computable(self) -> bool:
        """True when derivations can produce non-empty results."""
        return self.has_anchor and self.has_valid_parameters

    def validate(self) -> CycleRecord:
        """Raise :class:`InvalidCycleParameters` if lengths are out of range.

        Derivations never call this; it is for callers that want a typed
        failure at the boundary instead of degraded empty results.
        """
        if not self.has_valid_parameters:
            raise InvalidCycleParameters(self.cycle_length_days, self.period_duration_days)
        return self


@dataclass(frozen=True)
class DateInterval:
    """Inclusive ``[start, end]`` date interval.

    ``start > end`` marks an empty interval ("phase not applicable").
    """

    start: date
    end: date

    @classmethod
    def empty(cls) -> DateInterval:
        return cls(start=date.max, end=date.min)

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    @property
    def length(self) -> int:
        return 0 if self.is_empty else (self.end - self.start).days + 1

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class FertileWindow(DateInterval):
    """Estimated days of peak conception probability around ovulation."""

    @classmethod
    def empty(cls) -> FertileWindow:
        return cls(start=date.max, end=date.min)


@dataclass(frozen=True)
class CyclePhases:
    """Four-phase partition of one cycle plus its boundary dates.

    For a computable record the intervals are contiguous, non-overlapping
    and together span ``[anchor_date, next_period_start - 1]``.
    """

    menstrual: DateInterval
    follicular: DateInterval
    ovulatory: DateInterval
    luteal: DateInterval
    ovulation_date: date | None = None
    next_period_start: date | None = None

    @classmethod
    def empty(cls) -> CyclePhases:
        return cls(
            menstrual=DateInterval.empty(),
            follicular=DateInterval.empty(),
            ovulatory=DateInterval.empty(),
            luteal=DateInterval.empty(),
        )

    @property
    def is_empty(self) -> bool:
        return all(interval.is_empty for _, interval in self.intervals())

    def intervals(self) -> Iterator[tuple[Phase, DateInterval]]:
        yield Phase.menstrual, self.menstrual
        yield Phase.follicular, self.follicular
        yield Phase.ovulatory, self.ovulatory
        yield Phase.luteal, self.luteal


@dataclass(frozen=True)
class PredictionData:
    """Estimate of the next cycle derived from a history of records.

    Attributes:
        predicted_next_start:      Most recent anchor + mean cycle length; None
                                   when that falls outside the calendar.
        predicted_cycle_length:    Mean cycle length, rounded to whole days.
        predicted_period_duration: Mean period duration, rounded.
        certainty:                 Heuristic confidence in ``[0, 1]``.
        symptom_likelihood:        Symptom tag → fraction of records with it.
        cycles_used:               Number of records the estimate is built on.
        warnings:                  Flags such as short/long cycles or an
                                   unordered history.
    """

    predicted_next_start: date | None
    predicted_cycle_length: int
    predicted_period_duration: int
    certainty: float
    symptom_likelihood: dict[str, float] = field(default_factory=dict)
    cycles_used: int = 0
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class DailyEntry:
    """One day of logged mood, symptoms and lifestyle metrics.

    Attributes:
        date:     Calendar date of the entry.
        mood:     Mood tag, if logged.
        symptoms: Symptom tags logged that day.
        flow:     Flow intensity, if bleeding.
        notes:    Free text.
        sleep:    Hours of sleep.
        energy:   Energy level 1-10.
        exercise: Minutes of exercise.
        stress:   Stress level 1-10.
    """

    date: date
    mood: CycleMood | None = None
    symptoms: tuple[str, ...] = ()
    flow: Flow | None = None
    notes: str = ""
    sleep: float | None = None
    energy: int | None = None
    exercise: int | None = None
    stress: int | None = None
