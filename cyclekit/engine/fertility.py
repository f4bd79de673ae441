"""Fertile window estimation.

The window spans ``[ovulation - 5, ovulation + 1]`` by default: roughly five
days of sperm viability before ovulation plus one day of ovum viability
after it.  Offsets come from ``cycle_config.yaml``.
"""

from __future__ import annotations

import logging
from datetime import date

from cyclekit.engine.config_loader import EngineConfig, get_engine_config
from cyclekit.engine.datemath import add_days
from cyclekit.engine.membership import project_record
from cyclekit.engine.models import CycleRecord, FertileWindow
from cyclekit.engine.phases import PhaseCalculator

logger = logging.getLogger("cyclekit.engine.fertility")


def fertile_window(ovulation_date: date | None, config: EngineConfig | None = None) -> FertileWindow:
    """Return the fertile window around ``ovulation_date``.

    An empty window is returned when no ovulation date is available or the
    window would leave the calendar range.
    """
    if ovulation_date is None:
        return FertileWindow.empty()
    fw = (config or get_engine_config()).fertile_window
    try:
        return FertileWindow(
            start=add_days(ovulation_date, -fw.days_before),
            end=add_days(ovulation_date, fw.days_after),
        )
    except OverflowError:
        logger.warning("Fertile window around %s leaves the calendar range", ovulation_date)
        return FertileWindow.empty()


def fertile_window_for(record: CycleRecord, config: EngineConfig | None = None) -> FertileWindow:
    """Fertile window of the anchor cycle of ``record``."""
    phases = PhaseCalculator(config).compute(record)
    return fertile_window(phases.ovulation_date, config)


def is_in_fertile_window(
    record: CycleRecord, on_date: date, config: EngineConfig | None = None
) -> bool:
    """Return True if ``on_date`` lies in the fertile window of the anchor cycle."""
    return fertile_window_for(record, config).contains(on_date)


def is_in_any_fertile_window(
    record: CycleRecord, on_date: date, config: EngineConfig | None = None
) -> bool:
    """Return True if ``on_date`` lies in the fertile window of any projected cycle.

    A window can reach past its own cycle: for short cycles it starts before
    the anchor, and an ovulation on the last cycle day pushes it into the
    next cycle.  Neighbouring cycles are checked as far as the window reaches.
    """
    if not record.is_computable:
        return False
    config = config or get_engine_config()
    fw = config.fertile_window
    length = record.cycle_length_days
    reach = (fw.days_before + fw.days_after) // length + 1

    for shift in range(-reach, reach + 1):
        try:
            in_cycle = add_days(on_date, shift * length)
        except OverflowError:
            continue
        if is_in_fertile_window(project_record(record, in_cycle), on_date, config):
            return True
    return False
