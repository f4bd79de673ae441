"""Tests for the fertile window."""

from __future__ import annotations

from datetime import date

from cyclekit.engine.config_loader import EngineConfig, FertileWindowConfig
from cyclekit.engine.fertility import (
    fertile_window,
    fertile_window_for,
    is_in_any_fertile_window,
    is_in_fertile_window,
)
from cyclekit.engine.membership import project_record
from cyclekit.engine.models import FertileWindow
from cyclekit.engine.tests.conftest import make_record


class TestFertileWindow:
    def test_window_around_ovulation(self, engine_config: EngineConfig) -> None:
        window = fertile_window(date(2024, 1, 13), engine_config)
        assert window == FertileWindow(date(2024, 1, 8), date(2024, 1, 14))
        assert window.length == 7

    def test_window_for_reference_record(self, engine_config: EngineConfig) -> None:
        window = fertile_window_for(make_record(), engine_config)
        assert (window.start, window.end) == (date(2024, 1, 8), date(2024, 1, 14))

    def test_window_follows_override(self, engine_config: EngineConfig) -> None:
        window = fertile_window_for(make_record(override=date(2024, 1, 18)), engine_config)
        assert (window.start, window.end) == (date(2024, 1, 13), date(2024, 1, 19))

    def test_no_ovulation_gives_empty_window(self, engine_config: EngineConfig) -> None:
        assert fertile_window(None, engine_config).is_empty
        assert fertile_window_for(make_record(anchor=None), engine_config).is_empty

    def test_configured_offsets(self) -> None:
        config = EngineConfig(fertile_window=FertileWindowConfig(days_before=3, days_after=0))
        window = fertile_window(date(2024, 1, 13), config)
        assert (window.start, window.end) == (date(2024, 1, 10), date(2024, 1, 13))

    def test_window_outside_calendar_is_empty(self, engine_config: EngineConfig) -> None:
        assert fertile_window(date(1, 1, 3), engine_config).is_empty
        assert fertile_window(date.max, engine_config).is_empty


class TestIsInFertileWindow:
    def test_boundaries(self, engine_config: EngineConfig) -> None:
        record = make_record()
        assert not is_in_fertile_window(record, date(2024, 1, 7), engine_config)
        assert is_in_fertile_window(record, date(2024, 1, 8), engine_config)
        assert is_in_fertile_window(record, date(2024, 1, 14), engine_config)
        assert not is_in_fertile_window(record, date(2024, 1, 15), engine_config)

    def test_no_data_is_false(self, engine_config: EngineConfig) -> None:
        assert not is_in_fertile_window(make_record(anchor=None), date(2024, 1, 10), engine_config)

    def test_anchor_near_date_max_is_false(self, engine_config: EngineConfig) -> None:
        record = make_record(anchor=date(9999, 12, 20))
        assert not is_in_fertile_window(record, date(9999, 12, 25), engine_config)


class TestAnyProjectedWindow:
    def test_window_reaching_back_into_previous_cycle(self, engine_config: EngineConfig) -> None:
        # Ovulation 3 days after each anchor, so the Jan 11 cycle's window
        # starts on Jan 9, inside the anchor cycle
        record = make_record(length=10, duration=2)
        projected = project_record(record, date(2024, 1, 9))
        assert not is_in_fertile_window(projected, date(2024, 1, 9), engine_config)
        assert is_in_any_fertile_window(record, date(2024, 1, 9), engine_config)
        assert is_in_any_fertile_window(record, date(2024, 1, 10), engine_config)
        assert not is_in_any_fertile_window(record, date(2024, 1, 7), engine_config)

    def test_window_reaching_into_next_cycle(self, engine_config: EngineConfig) -> None:
        # Ovulation on the last cycle day; the window ends on the next anchor
        record = make_record(override=date(2024, 1, 28))
        assert is_in_any_fertile_window(record, date(2024, 1, 29), engine_config)
        assert not is_in_any_fertile_window(record, date(2024, 1, 30), engine_config)

    def test_matches_projected_cycle_for_typical_record(self, engine_config: EngineConfig) -> None:
        record = make_record()
        assert is_in_any_fertile_window(record, date(2024, 2, 5), engine_config)
        assert not is_in_any_fertile_window(record, date(2024, 2, 15), engine_config)

    def test_no_data_is_false(self, engine_config: EngineConfig) -> None:
        no_anchor = make_record(anchor=None)
        assert not is_in_any_fertile_window(no_anchor, date(2024, 1, 10), engine_config)
        huge = make_record(length=10**10)
        assert not is_in_any_fertile_window(huge, date(1, 1, 2), engine_config)
