"""Stateless cycle endpoints: phases, day lookup, arrival, prediction, insights, export.

Every request carries its cycle record(s) by value; nothing is stored.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from cyclekit.engine.errors import InvalidCycleParameters
from cyclekit.engine.export import export_entries_csv
from cyclekit.engine.fertility import fertile_window, is_in_any_fertile_window
from cyclekit.engine.insights import generate_insights
from cyclekit.engine.membership import (
    cycle_day_of,
    days_until_next_period,
    is_in_period,
    project_record,
    record_period_arrival,
)
from cyclekit.engine.phases import compute_phases, phase_for_date
from cyclekit.engine.prediction import predict_next_cycle
from cyclekit.models.cycle import (
    MAX_DAYS,
    ArrivalQuery,
    CycleRecordIn,
    DayOut,
    DayQuery,
    ExportQuery,
    HistoryIn,
    InsightOut,
    InsightsQuery,
    PhasesOut,
    PredictionOut,
)

router = APIRouter(prefix="/cycle", tags=["cycle"])
logger = logging.getLogger("cyclekit.routers.cycle")


@router.post("/phases", response_model=PhasesOut)
async def get_phases(body: CycleRecordIn) -> Any:
    phases = compute_phases(body.to_record())
    return PhasesOut.from_phases(phases, fertile_window(phases.ovulation_date))


@router.post("/day", response_model=DayOut)
async def get_day(body: DayQuery) -> Any:
    """Describe a single date: period membership, cycle day, phase, fertility.

    Phase is looked up in the projected cycle that contains the date, so
    any past or future date works.  The fertile window check also covers
    neighbouring cycles whose window reaches across a cycle boundary.
    """
    record = body.record.to_record()
    projected = project_record(record, body.date)
    return DayOut(
        date=body.date,
        is_in_period=is_in_period(record, body.date),
        cycle_day=cycle_day_of(record, body.date),
        phase=phase_for_date(projected, body.date),
        in_fertile_window=is_in_any_fertile_window(record, body.date),
        days_until_next_period=days_until_next_period(record, body.date),
    )


@router.post("/predict", response_model=PredictionOut)
async def predict(body: HistoryIn) -> Any:
    prediction = predict_next_cycle([r.to_record() for r in body.history])
    return PredictionOut.from_prediction(prediction)


@router.post("/insights", response_model=list[InsightOut])
async def list_insights(body: InsightsQuery) -> Any:
    insights = generate_insights(
        body.record.to_record(),
        body.date,
        [e.to_entry() for e in body.entries],
    )
    return [InsightOut.from_insight(i) for i in insights]


@router.post("/export", response_class=PlainTextResponse)
async def export_csv(body: ExportQuery) -> PlainTextResponse:
    content = export_entries_csv(body.record.to_record(), [e.to_entry() for e in body.entries])
    logger.info("Exported %d daily entries", len(body.entries))
    return PlainTextResponse(
        content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="cycle_entries.csv"'},
    )


@router.post("/arrival", response_model=CycleRecordIn)
async def period_arrival(body: ArrivalQuery) -> Any:
    """Start a new cycle record from the date a period actually arrived."""
    arrived = record_period_arrival(
        body.record.to_record(),
        body.actual_start,
        symptoms=frozenset(body.symptoms),
        mood=body.mood,
        flow=body.flow,
    )
    if arrived.cycle_length_days > MAX_DAYS:
        raise InvalidCycleParameters(arrived.cycle_length_days, arrived.period_duration_days)
    return CycleRecordIn.from_record(arrived)
