"""Periodic projection of the anchor cycle onto arbitrary dates.

Every query is a closed-form modular computation on the day offset from
the anchor, so it terminates in constant time for dates any distance into
the past or future.  Python's ``%`` with a positive modulus is never
negative, which makes the projection symmetric around the anchor.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date

from cyclekit.engine.datemath import add_days, days_between
from cyclekit.engine.models import CycleRecord
from cyclekit.engine.tags import CycleMood, Flow

logger = logging.getLogger("cyclekit.engine.membership")


def _position(record: CycleRecord, on_date: date) -> int | None:
    """Zero-based position of ``on_date`` within its projected cycle, or None."""
    if not record.is_computable:
        return None
    return days_between(record.anchor_date, on_date) % record.cycle_length_days


def is_in_period(record: CycleRecord, on_date: date) -> bool:
    """Return True if ``on_date`` falls inside any projected menstrual period.

    Periods repeat every ``cycle_length_days`` from the anchor, both
    backwards and forwards, each lasting ``period_duration_days``.
    False when the record has no anchor or invalid parameters.
    """
    position = _position(record, on_date)
    return position is not None and position < record.period_duration_days


def cycle_day_of(record: CycleRecord, on_date: date) -> int | None:
    """Return the 1-indexed cycle day of ``on_date``.

    Defined only on or after the anchor; None (not 0) for earlier dates and
    for records without usable data, so callers can tell "no data" from
    "day 1".
    """
    if not record.is_computable or on_date < record.anchor_date:
        return None
    return _position(record, on_date) + 1


def days_until_next_period(record: CycleRecord, on_date: date) -> int | None:
    """Days from ``on_date`` to the next projected period start (0 on a start day)."""
    position = _position(record, on_date)
    if position is None:
        return None
    return (record.cycle_length_days - position) % record.cycle_length_days


def cycle_start_for(record: CycleRecord, on_date: date) -> date | None:
    """Return the projected period start of the cycle containing ``on_date``.

    None when there is no usable data or that start precedes ``date.min``.
    """
    position = _position(record, on_date)
    if position is None:
        return None
    try:
        return add_days(on_date, -position)
    except OverflowError:
        logger.debug("Cycle containing %s starts before the calendar range", on_date)
        return None


def project_record(record: CycleRecord, on_date: date) -> CycleRecord:
    """Shift ``record`` so its anchor is the cycle start containing ``on_date``.

    An ovulation override keeps its offset from the anchor.  Records without
    usable data, or whose projection leaves the calendar range, are returned
    unchanged.
    """
    start = cycle_start_for(record, on_date)
    if start is None or start == record.anchor_date:
        return record

    override = record.ovulation_date_override
    if override is not None:
        try:
            override = add_days(start, days_between(record.anchor_date, override))
        except OverflowError:
            logger.debug("Projected ovulation override for %s leaves the calendar range", on_date)
            return record

    logger.debug("Projected anchor %s → %s for %s", record.anchor_date, start, on_date)
    return dataclasses.replace(record, anchor_date=start, ovulation_date_override=override)


def record_period_arrival(
    record: CycleRecord,
    actual_start: date,
    *,
    symptoms: frozenset[str] | None = None,
    mood: CycleMood | None = None,
    flow: Flow | None = None,
) -> CycleRecord:
    """Return the record that follows ``record`` once a period actually starts.

    The finished cycle's real length becomes the new cycle length, the
    period duration carries over, and ovulation is derived again (any
    override belongs to the finished cycle and is dropped).  A record with
    no anchor simply gains ``actual_start`` as its anchor.

    Raises:
        InvalidCycleParameters: If ``actual_start`` is not far enough after
            the current anchor to form a valid cycle.
    """
    if record.anchor_date is None:
        length = record.cycle_length_days
    else:
        length = days_between(record.anchor_date, actual_start)

    arrived = CycleRecord(
        anchor_date=actual_start,
        cycle_length_days=length,
        period_duration_days=record.period_duration_days,
        symptoms=symptoms if symptoms is not None else frozenset(),
        mood=mood,
        flow=flow,
    ).validate()
    logger.info(
        "Period arrived %s; finished cycle was %d days (previous anchor %s)",
        actual_start,
        length,
        record.anchor_date,
    )
    return arrived
