"""Four-phase partition of a single menstrual cycle.

Derives menstrual, follicular, ovulatory and luteal intervals plus the next
period start from one :class:`CycleRecord`.  All arithmetic is whole-day
offsets from the anchor date.

Ovulation defaults to ``cycle_length // 2 - 2`` days after the anchor.  The
ovulation offset is clamped into ``[period_duration, cycle_length - 1]`` so
the four intervals always tile the cycle exactly; when the clamp bites, the
follicular (or luteal) interval is reported empty instead of raising.
"""

from __future__ import annotations

import logging
from datetime import date

from cyclekit.engine.config_loader import EngineConfig, get_engine_config
from cyclekit.engine.datemath import add_days, days_between
from cyclekit.engine.models import CyclePhases, CycleRecord, DateInterval, Phase

logger = logging.getLogger("cyclekit.engine.phases")


class PhaseCalculator:
    """Compute the phase partition of the anchor cycle.

    Usage::

        calculator = PhaseCalculator()
        phases = calculator.compute(record)
        print(phases.ovulatory.start, phases.next_period_start)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()

    def ovulation_offset(self, record: CycleRecord) -> int:
        """Return the ovulation day offset from the anchor, clamped into the cycle.

        Args:
            record: A computable cycle record.

        Returns:
            Offset in days, in ``[period_duration_days, cycle_length_days - 1]``.
        """
        length = record.cycle_length_days
        duration = record.period_duration_days

        if record.ovulation_date_override is not None:
            offset = days_between(record.anchor_date, record.ovulation_date_override)
        else:
            offset = length // 2 - self._config.ovulation.offset_from_midpoint

        clamped = min(max(offset, duration), length - 1)
        if clamped != offset:
            log = logger.warning if record.ovulation_date_override is not None else logger.debug
            log(
                "Ovulation offset %d clamped to %d (cycle_length=%d, period_duration=%d)",
                offset, clamped, length, duration,
            )
        return clamped

    def compute(self, record: CycleRecord) -> CyclePhases:
        """Derive the four phases and boundary dates for ``record``.

        Returns all-empty phases (never raises) when the anchor is missing
        or the cycle parameters are invalid.
        """
        if not record.has_anchor:
            logger.debug("No anchor date; returning empty phases")
            return CyclePhases.empty()
        if not record.has_valid_parameters:
            logger.warning(
                "Invalid cycle parameters (cycle_length=%d, period_duration=%d); "
                "returning empty phases",
                record.cycle_length_days,
                record.period_duration_days,
            )
            return CyclePhases.empty()

        anchor = record.anchor_date
        try:
            next_start = add_days(anchor, record.cycle_length_days)
            ovulation = add_days(anchor, self.ovulation_offset(record))
            period_end = add_days(anchor, record.period_duration_days - 1)
            follicular_start = add_days(period_end, 1)
            follicular_end = add_days(ovulation, -1)
            luteal_start = add_days(ovulation, 1)
            luteal_end = add_days(next_start, -1)
        except OverflowError:
            logger.warning(
                "Cycle from %s (cycle_length=%d) leaves the calendar range; "
                "returning empty phases",
                anchor,
                record.cycle_length_days,
            )
            return CyclePhases.empty()

        return CyclePhases(
            menstrual=DateInterval(anchor, period_end),
            # Empty (start > end) when ovulation directly follows the period
            follicular=DateInterval(follicular_start, follicular_end),
            ovulatory=DateInterval(ovulation, ovulation),
            luteal=DateInterval(luteal_start, luteal_end),
            ovulation_date=ovulation,
            next_period_start=next_start,
        )

    def phase_for_date(self, record: CycleRecord, on_date: date) -> Phase | None:
        """Return the phase of the anchor cycle containing ``on_date``.

        Only the anchor cycle is considered; use
        :func:`cyclekit.engine.membership.project_record` first to look up
        a date in another cycle.
        """
        phases = self.compute(record)
        for phase, interval in phases.intervals():
            if interval.contains(on_date):
                return phase
        return None


def compute_phases(record: CycleRecord, config: EngineConfig | None = None) -> CyclePhases:
    """Shortcut for ``PhaseCalculator(config).compute(record)``."""
    return PhaseCalculator(config).compute(record)


def phase_for_date(
    record: CycleRecord, on_date: date, config: EngineConfig | None = None
) -> Phase | None:
    """Shortcut for ``PhaseCalculator(config).phase_for_date(record, on_date)``."""
    return PhaseCalculator(config).phase_for_date(record, on_date)
