"""CSV export of daily log entries annotated with cycle day and phase."""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable

from cyclekit.engine.config_loader import EngineConfig
from cyclekit.engine.datemath import format_date
from cyclekit.engine.membership import cycle_day_of, project_record
from cyclekit.engine.models import CycleRecord, DailyEntry
from cyclekit.engine.phases import PhaseCalculator
from cyclekit.engine.tags import FLOW_DISPLAY, symptom_label

logger = logging.getLogger("cyclekit.engine.export")

CSV_HEADER = [
    "Date",
    "Cycle Day",
    "Phase",
    "Mood",
    "Symptoms",
    "Flow",
    "Notes",
    "Sleep",
    "Energy",
    "Exercise",
    "Stress",
]


def _blank(value: object) -> object:
    return "" if value is None else value


def export_entries_csv(
    record: CycleRecord,
    entries: Iterable[DailyEntry],
    config: EngineConfig | None = None,
) -> str:
    """Render ``entries`` as CSV text, oldest first.

    Each row is labelled with the phase of the projected cycle containing
    the entry date (``Unknown`` when it cannot be derived) and its cycle
    day (blank before the anchor or without data).
    """
    calculator = PhaseCalculator(config)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    rows = 0
    for entry in sorted(entries, key=lambda e: e.date):
        phase = calculator.phase_for_date(project_record(record, entry.date), entry.date)
        writer.writerow(
            [
                format_date(entry.date),
                _blank(cycle_day_of(record, entry.date)),
                phase.label if phase else "Unknown",
                entry.mood.value if entry.mood else "",
                "; ".join(symptom_label(s) for s in entry.symptoms),
                FLOW_DISPLAY[entry.flow][0] if entry.flow else "",
                entry.notes,
                _blank(entry.sleep),
                _blank(entry.energy),
                _blank(entry.exercise),
                _blank(entry.stress),
            ]
        )
        rows += 1

    logger.debug("Exported %d daily entr%s to CSV", rows, "y" if rows == 1 else "ies")
    return buffer.getvalue()
