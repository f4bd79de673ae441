"""Next-cycle prediction from a history of cycle records.

Uses plain calendar averaging over the whole history:

- next start  = most recent anchor + mean cycle length
- length      = mean cycle length, rounded half-up to whole days
- duration    = mean period duration, rounded half-up
- certainty   = clamp(1 - stddev / mean, 0, 1) * min(n, 3) / 3

Certainty is a heuristic, not a diagnostic guarantee.  A single record
always yields a low but non-zero score.
"""

from __future__ import annotations

import logging
import math
import statistics
from collections import Counter
from typing import Sequence

from cyclekit.engine.config_loader import EngineConfig, get_engine_config
from cyclekit.engine.datemath import add_days
from cyclekit.engine.errors import InsufficientHistory
from cyclekit.engine.models import CycleRecord, PredictionData

logger = logging.getLogger("cyclekit.engine.prediction")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (28.5 → 29)."""
    return math.floor(value + 0.5)


class PredictionEngine:
    """Estimate the next cycle from historical records (oldest first).

    Usage::

        engine = PredictionEngine()
        prediction = engine.predict(history)
        print(prediction.predicted_next_start, prediction.certainty)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()

    def predict(self, history: Sequence[CycleRecord]) -> PredictionData:
        """Generate a prediction from ``history``.

        Args:
            history: Cycle records ordered oldest to newest.  The order is a
                     precondition; an out-of-order history is logged and
                     flagged in ``warnings`` but still predicted.

        Returns:
            A fresh PredictionData.

        Raises:
            InsufficientHistory: If ``history`` is empty or its most recent
                record has no anchor date.
        """
        if not history:
            raise InsufficientHistory()

        most_recent = history[-1]
        if most_recent.anchor_date is None:
            raise InsufficientHistory("Most recent cycle record has no anchor date")

        warnings: list[str] = []
        if not self._is_chronological(history):
            logger.warning("Cycle history is not ordered oldest to newest; prediction may be skewed")
            warnings.append("History is not in chronological order")

        lengths = [r.cycle_length_days for r in history]
        durations = [r.period_duration_days for r in history]

        mean_length = statistics.fmean(lengths)
        mean_duration = statistics.fmean(durations)
        predicted_length = round_half_up(mean_length)

        warnings.extend(self._length_warnings(lengths))

        try:
            next_start = add_days(most_recent.anchor_date, predicted_length)
        except OverflowError:
            logger.warning(
                "Predicted start %s + %d days leaves the calendar range",
                most_recent.anchor_date,
                predicted_length,
            )
            next_start = None
            warnings.append("Predicted next start is outside the supported calendar range")

        prediction = PredictionData(
            predicted_next_start=next_start,
            predicted_cycle_length=predicted_length,
            predicted_period_duration=round_half_up(mean_duration),
            certainty=self.certainty(lengths),
            symptom_likelihood=self.symptom_likelihood(history),
            cycles_used=len(history),
            warnings=tuple(warnings),
        )
        logger.debug(
            "Predicted next start %s from %d record(s), certainty %.2f",
            prediction.predicted_next_start,
            prediction.cycles_used,
            prediction.certainty,
        )
        return prediction

    def certainty(self, lengths: Sequence[int]) -> float:
        """Heuristic confidence from cycle-length variability and history size.

        ``clamp(1 - stddev / mean, 0, 1)`` scaled by ``min(n, N) / N`` where
        N is ``prediction.full_certainty_history`` (3 by default).
        """
        if not lengths:
            return 0.0
        mean = statistics.fmean(lengths)
        if mean <= 0:
            return 0.0
        spread = statistics.pstdev(lengths) if len(lengths) > 1 else 0.0
        regularity = min(max(1.0 - spread / mean, 0.0), 1.0)

        full = self._config.prediction.full_certainty_history
        return regularity * min(len(lengths), full) / full

    @staticmethod
    def symptom_likelihood(history: Sequence[CycleRecord]) -> dict[str, float]:
        """Fraction of records in which each observed symptom tag appears."""
        if not history:
            return {}
        counts: Counter[str] = Counter()
        for record in history:
            counts.update(set(record.symptoms))
        total = len(history)
        return {tag: count / total for tag, count in sorted(counts.items())}

    def average_cycle_length(self, history: Sequence[CycleRecord]) -> float | None:
        """Mean cycle length over plausible cycles only.

        Lengths outside ``[min_cycle_days, max_cycle_days]`` are treated as
        outliers.  Returns None with fewer than two records or when no
        length qualifies.
        """
        if len(history) < 2:
            return None
        cl = self._config.cycle_length
        lengths = [
            r.cycle_length_days
            for r in history
            if cl.min_cycle_days <= r.cycle_length_days <= cl.max_cycle_days
        ]
        return statistics.fmean(lengths) if lengths else None

    def classify_cycle(self, cycle_length: int) -> str:
        """Classify a cycle length as 'short', 'normal', or 'long'."""
        cl = self._config.cycle_length
        if cycle_length < cl.min_cycle_days:
            return "short"
        if cycle_length > cl.max_cycle_days:
            return "long"
        return "normal"

    def _length_warnings(self, lengths: Sequence[int]) -> list[str]:
        cl = self._config.cycle_length
        warnings = []
        for length in lengths:
            kind = self.classify_cycle(length)
            if kind == "short":
                warnings.append(
                    f"Short cycle detected: {length} days (below {cl.min_cycle_days} day minimum)"
                )
                break
            if kind == "long":
                warnings.append(
                    f"Long cycle detected: {length} days (above {cl.max_cycle_days} day maximum)"
                )
                break
        return warnings

    @staticmethod
    def _is_chronological(history: Sequence[CycleRecord]) -> bool:
        anchors = [r.anchor_date for r in history if r.anchor_date is not None]
        return all(a <= b for a, b in zip(anchors, anchors[1:]))


def predict_next_cycle(
    history: Sequence[CycleRecord], config: EngineConfig | None = None
) -> PredictionData:
    """Shortcut for ``PredictionEngine(config).predict(history)``."""
    return PredictionEngine(config).predict(history)


def average_cycle_length(
    history: Sequence[CycleRecord], config: EngineConfig | None = None
) -> float | None:
    return PredictionEngine(config).average_cycle_length(history)


def classify_cycle(cycle_length: int, config: EngineConfig | None = None) -> str:
    return PredictionEngine(config).classify_cycle(cycle_length)
