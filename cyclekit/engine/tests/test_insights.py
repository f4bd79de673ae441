"""Tests for rule-based cycle insights."""

from __future__ import annotations

from datetime import date, timedelta

from cyclekit.engine.config_loader import EngineConfig
from cyclekit.engine.insights import InsightCategory, generate_insights
from cyclekit.engine.models import DailyEntry
from cyclekit.engine.tests.conftest import make_record


def ids(insights) -> list[str]:
    return [i.insight_id for i in insights]


class TestPhaseInsights:
    def test_luteal_day_with_logged_headaches(
        self, engine_config: EngineConfig, daily_entries: list[DailyEntry]
    ) -> None:
        insights = generate_insights(make_record(), date(2024, 1, 20), daily_entries, engine_config)
        assert ids(insights) == ["luteal_mood", "headache_pattern", "sleep_patterns"]

    def test_menstrual_day(self, engine_config: EngineConfig) -> None:
        insights = generate_insights(make_record(), date(2024, 1, 2), config=engine_config)
        assert ids(insights) == ["menstrual_nutrition", "menstrual_exercise"]
        assert insights[0].category is InsightCategory.nutrition

    def test_phase_in_projected_future_cycle(self, engine_config: EngineConfig) -> None:
        # Second cycle starts Jan 29, ovulation 12 days later
        insights = generate_insights(make_record(), date(2024, 2, 10), config=engine_config)
        assert ids(insights) == ["peak_fertility"]
        assert insights[0].relevancy == 1.0

    def test_follicular_day_before_anchor(self, engine_config: EngineConfig) -> None:
        # Previous cycle started Dec 4; Dec 12 is follicular
        insights = generate_insights(make_record(), date(2023, 12, 12), config=engine_config)
        assert ids(insights) == ["follicular_energy"]


class TestCycleLengthInsights:
    def test_short_cycle(self, engine_config: EngineConfig) -> None:
        insights = generate_insights(
            make_record(length=19, duration=4), date(2024, 1, 8), config=engine_config
        )
        short = next(i for i in insights if i.insight_id == "short_cycle")
        assert short.category is InsightCategory.medical

    def test_long_cycle(self, engine_config: EngineConfig) -> None:
        insights = generate_insights(make_record(length=40), date(2024, 1, 8), config=engine_config)
        assert "long_cycle" in ids(insights)

    def test_typical_cycle_has_no_length_insight(self, engine_config: EngineConfig) -> None:
        insights = generate_insights(make_record(), date(2024, 1, 8), config=engine_config)
        assert not {"short_cycle", "long_cycle"} & set(ids(insights))


class TestSymptomInsights:
    def _entries(self, start: date, symptoms: tuple[str, ...], n: int = 3) -> list[DailyEntry]:
        return [DailyEntry(date=start + timedelta(days=i), symptoms=symptoms) for i in range(n)]

    def test_pms_cluster_and_mood(self, engine_config: EngineConfig) -> None:
        entries = self._entries(date(2024, 1, 15), ("Mood Swings", "bloating"))
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert {"pms_management", "mood_patterns"} <= set(ids(insights))

    def test_fatigue_pattern(self, engine_config: EngineConfig) -> None:
        entries = self._entries(date(2024, 1, 15), ("low_energy",))
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "energy_patterns" in ids(insights)

    def test_below_threshold_is_ignored(self, engine_config: EngineConfig) -> None:
        entries = self._entries(date(2024, 1, 15), ("headache",), n=2)
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "headache_pattern" not in ids(insights)

    def test_old_and_future_entries_are_ignored(self, engine_config: EngineConfig) -> None:
        old = self._entries(date(2023, 6, 1), ("headache",))
        future = self._entries(date(2024, 1, 25), ("headache",))
        insights = generate_insights(make_record(), date(2024, 1, 20), old + future, engine_config)
        assert "headache_pattern" not in ids(insights)


class TestExerciseInsights:
    def test_low_exercise(self, engine_config: EngineConfig) -> None:
        entries = [DailyEntry(date=date(2024, 1, 10), exercise=10)]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "exercise_recommendation" in ids(insights)

    def test_high_exercise(self, engine_config: EngineConfig) -> None:
        entries = [DailyEntry(date=date(2024, 1, 10), exercise=90)]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "high_exercise" in ids(insights)


class TestSleepInsights:
    def test_phase_with_least_sleep_is_named(self, engine_config: EngineConfig) -> None:
        entries = [
            DailyEntry(date=date(2024, 1, 2), sleep=8.0),
            DailyEntry(date=date(2024, 1, 3), sleep=7.5),
            DailyEntry(date=date(2024, 1, 16), sleep=5.0),
            DailyEntry(date=date(2024, 1, 17), sleep=6.0),
        ]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        sleep = next(i for i in insights if i.insight_id == "sleep_patterns")
        assert "Luteal phase" in sleep.description
        assert sleep.category is InsightCategory.general
        assert sleep.relevancy == 0.8

    def test_single_phase_gives_no_sleep_insight(self, engine_config: EngineConfig) -> None:
        entries = [
            DailyEntry(date=date(2024, 1, 15), sleep=5.0),
            DailyEntry(date=date(2024, 1, 18), sleep=9.0),
        ]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "sleep_patterns" not in ids(insights)

    def test_entries_in_earlier_cycles_use_their_own_phase(
        self, engine_config: EngineConfig
    ) -> None:
        # Dec 5 is menstrual in the cycle starting Dec 4; Jan 10 is follicular
        entries = [
            DailyEntry(date=date(2023, 12, 5), sleep=4.5),
            DailyEntry(date=date(2024, 1, 10), sleep=8.0),
        ]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        sleep = next(i for i in insights if i.insight_id == "sleep_patterns")
        assert "Menstrual phase" in sleep.description

    def test_entries_without_sleep_are_skipped(self, engine_config: EngineConfig) -> None:
        entries = [
            DailyEntry(date=date(2024, 1, 2)),
            DailyEntry(date=date(2024, 1, 16), sleep=6.0),
        ]
        insights = generate_insights(make_record(), date(2024, 1, 20), entries, engine_config)
        assert "sleep_patterns" not in ids(insights)


class TestNoData:
    def test_no_anchor_gives_no_insights(
        self, engine_config: EngineConfig, daily_entries: list[DailyEntry]
    ) -> None:
        record = make_record(anchor=None)
        assert generate_insights(record, date(2024, 1, 20), daily_entries, engine_config) == []

    def test_insights_sorted_by_relevancy(
        self, engine_config: EngineConfig, daily_entries: list[DailyEntry]
    ) -> None:
        insights = generate_insights(
            make_record(length=19, duration=4), date(2024, 1, 2), daily_entries, engine_config
        )
        scores = [i.relevancy for i in insights]
        assert scores == sorted(scores, reverse=True)
