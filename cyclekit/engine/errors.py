"""Exception types raised by the cycle engine.

Derivations never raise for bad cycle parameters; they degrade to empty
results.  Only text parsing, explicit validation, and prediction over an
empty history fail loudly.
"""

from __future__ import annotations


class CycleEngineError(Exception):
    """Base class for every error raised by :mod:`cyclekit.engine`."""


class InvalidDateFormat(CycleEngineError, ValueError):
    """Raised when date text is not a valid ``YYYY-MM-DD`` calendar date."""

    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"Invalid date {text!r}: expected YYYY-MM-DD")


class InvalidCycleParameters(CycleEngineError, ValueError):
    """Raised by explicit validation when cycle length or period duration is out of range."""

    def __init__(self, cycle_length_days: int, period_duration_days: int) -> None:
        self.cycle_length_days = cycle_length_days
        self.period_duration_days = period_duration_days
        super().__init__(
            f"Invalid cycle parameters: cycle_length_days={cycle_length_days}, "
            f"period_duration_days={period_duration_days} "
            f"(need 0 < period_duration_days < cycle_length_days)"
        )


class InsufficientHistory(CycleEngineError, ValueError):
    """Raised when a prediction is requested over an empty history."""

    def __init__(self, message: str = "At least one cycle record is required for prediction") -> None:
        super().__init__(message)
