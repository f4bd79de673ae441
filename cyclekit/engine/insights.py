"""Rule-based cycle insights.

Surfaces short, actionable notes from the anchor record and recent daily
entries:

- cycle length outside the typical range
- guidance for the phase a given date falls in
- recurring symptom clusters (headaches, mood changes, fatigue, PMS)
- exercise volume
- the phase with the poorest logged sleep

Insights are heuristics for display, not medical advice.
"""

from __future__ import annotations

import logging
import statistics
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable

from cyclekit.engine.config_loader import EngineConfig, get_engine_config
from cyclekit.engine.datemath import days_between
from cyclekit.engine.membership import project_record
from cyclekit.engine.models import CycleRecord, DailyEntry, Phase
from cyclekit.engine.phases import PhaseCalculator
from cyclekit.engine.tags import CycleSymptom, parse_symptom

logger = logging.getLogger("cyclekit.engine.insights")

# Entries older than this are ignored for symptom and exercise patterns
RECENT_ENTRY_DAYS = 90

# Only the most frequent symptoms drive pattern insights
TOP_SYMPTOMS = 3

_PMS_SYMPTOMS = {
    CycleSymptom.bloating,
    CycleSymptom.breast_tenderness,
    CycleSymptom.mood_swings,
    CycleSymptom.irritability,
    CycleSymptom.cravings,
}


class InsightCategory(str, Enum):
    general = "general"
    nutrition = "nutrition"
    fitness = "fitness"
    mood = "mood"
    medical = "medical"
    fertility = "fertility"


@dataclass(frozen=True)
class CycleInsight:
    """A single generated insight.

    Attributes:
        insight_id:      Stable identifier, e.g. ``"luteal_mood"``.
        title:           Short title for display.
        description:     Full insight text.
        category:        Grouping for display.
        relevancy:       0.0–1.0, higher sorts first.
        recommendations: Suggested actions.
    """

    insight_id: str
    title: str
    description: str
    category: InsightCategory = InsightCategory.general
    relevancy: float = 0.0
    recommendations: tuple[str, ...] = field(default_factory=tuple)


_PHASE_INSIGHTS: dict[Phase, tuple[CycleInsight, ...]] = {
    Phase.menstrual: (
        CycleInsight(
            insight_id="menstrual_nutrition",
            title="Menstrual Phase Nutrition",
            description="During your period, focus on iron-rich foods to replenish what's lost through bleeding.",
            category=InsightCategory.nutrition,
            relevancy=0.95,
            recommendations=(
                "Include iron-rich foods like spinach, legumes, and lean red meat",
                "Stay hydrated to reduce bloating",
                "Foods rich in omega-3 fatty acids may help reduce inflammation",
            ),
        ),
        CycleInsight(
            insight_id="menstrual_exercise",
            title="Exercise During Period",
            description="Light to moderate exercise can help alleviate cramps and boost your mood.",
            category=InsightCategory.fitness,
            relevancy=0.85,
            recommendations=(
                "Try gentle yoga or walking",
                "Light cardio can help relieve cramps",
                "Listen to your body and rest if needed",
            ),
        ),
    ),
    Phase.follicular: (
        CycleInsight(
            insight_id="follicular_energy",
            title="Follicular Phase Energy",
            description="Your energy levels tend to rise during this phase as estrogen increases.",
            category=InsightCategory.fitness,
            relevancy=0.8,
            recommendations=(
                "Good time for high-intensity workouts",
                "Try new fitness classes or activities",
                "Focus on strength training for optimal results",
            ),
        ),
    ),
    Phase.ovulatory: (
        CycleInsight(
            insight_id="peak_fertility",
            title="Peak Fertility Window",
            description="You're in your most fertile phase. Egg survival is typically 24 hours after ovulation.",
            category=InsightCategory.fertility,
            relevancy=1.0,
            recommendations=(
                "If trying to conceive, this is your optimal window",
                "If preventing pregnancy, use additional protection",
                "You may notice increased energy and libido during this time",
            ),
        ),
    ),
    Phase.luteal: (
        CycleInsight(
            insight_id="luteal_mood",
            title="Luteal Phase Mood Support",
            description="Progesterone rises and then falls during this phase, which can affect mood.",
            category=InsightCategory.mood,
            relevancy=0.85,
            recommendations=(
                "Prioritize self-care and stress management",
                "Foods rich in vitamin B6 and magnesium may help stabilize mood",
                "Gentle exercise like yoga or walking can help manage PMS symptoms",
            ),
        ),
    ),
}

_HEADACHE = CycleInsight(
    insight_id="headache_pattern",
    title="Headache Pattern Detected",
    description="You frequently experience headaches during your cycle. This could be hormone-related.",
    category=InsightCategory.medical,
    relevancy=0.8,
    recommendations=(
        "Track when headaches occur in relation to your cycle phases",
        "Stay hydrated throughout your cycle",
        "If severe, consult with a healthcare provider about hormone-related migraines",
    ),
)

_MOOD = CycleInsight(
    insight_id="mood_patterns",
    title="Mood Pattern Insights",
    description="Your tracking shows mood changes are common in your cycle, particularly in the luteal phase.",
    category=InsightCategory.mood,
    relevancy=0.85,
    recommendations=(
        "Consider adding B vitamins and magnesium-rich foods to your diet",
        "Practice mindfulness or meditation during the luteal phase",
        "Plan self-care activities for the week before your period",
    ),
)

_ENERGY = CycleInsight(
    insight_id="energy_patterns",
    title="Energy Fluctuation Pattern",
    description="Your energy levels appear to fluctuate with your cycle phases.",
    category=InsightCategory.general,
    relevancy=0.7,
    recommendations=(
        "Plan high-energy activities during follicular and ovulatory phases",
        "Focus on iron-rich foods if fatigue occurs during menstruation",
        "Ensure adequate sleep during the luteal phase when fatigue may increase",
    ),
)

_PMS = CycleInsight(
    insight_id="pms_management",
    title="PMS Symptom Management",
    description="Your tracking shows several common PMS symptoms regularly occurring before your period.",
    category=InsightCategory.general,
    relevancy=0.9,
    recommendations=(
        "Reduce salt, caffeine, and alcohol in the week before your period",
        "Regular exercise can help reduce PMS symptoms",
        "Track which symptoms are most disruptive to better manage them",
    ),
)


class InsightGenerator:
    """Build the list of insights for a record on a given date."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or get_engine_config()
        self._phases = PhaseCalculator(self._config)

    def generate(
        self,
        record: CycleRecord,
        on_date: date,
        entries: Iterable[DailyEntry] = (),
    ) -> list[CycleInsight]:
        """Return insights sorted by relevancy, highest first.

        Records with no anchor or invalid parameters yield an empty list.
        """
        if not record.is_computable:
            return []

        insights: list[CycleInsight] = []
        insights.extend(self._length_insights(record.cycle_length_days))

        phase = self._phases.phase_for_date(project_record(record, on_date), on_date)
        if phase is not None:
            insights.extend(_PHASE_INSIGHTS[phase])

        recent = [
            e for e in entries if 0 <= days_between(e.date, on_date) <= RECENT_ENTRY_DAYS
        ]
        insights.extend(self._symptom_insights(recent))
        insights.extend(self._exercise_insights(recent))
        insights.extend(self._sleep_insights(record, recent))

        logger.debug("Generated %d insight(s) for %s (phase=%s)", len(insights), on_date, phase)
        return sorted(insights, key=lambda i: i.relevancy, reverse=True)

    def _length_insights(self, cycle_length: int) -> list[CycleInsight]:
        cl = self._config.cycle_length
        if cycle_length < cl.short_insight_days:
            return [
                CycleInsight(
                    insight_id="short_cycle",
                    title="Short Cycle Length",
                    description=(
                        f"Your cycle length is shorter than average. Short cycles (less than "
                        f"{cl.short_insight_days} days) may indicate hormonal imbalances."
                    ),
                    category=InsightCategory.medical,
                    relevancy=0.9,
                    recommendations=(
                        "Consider consulting with a healthcare provider",
                        "Track your cycle consistency over the next few months",
                    ),
                )
            ]
        if cycle_length > cl.long_insight_days:
            return [
                CycleInsight(
                    insight_id="long_cycle",
                    title="Long Cycle Length",
                    description=(
                        "Your cycle length is longer than average. Long cycles may be normal "
                        "for some, but could indicate hormonal changes."
                    ),
                    category=InsightCategory.general,
                    relevancy=0.7,
                    recommendations=(
                        "Track your cycle consistency over several months",
                        "Consider consulting a healthcare provider if this is a recent change",
                    ),
                )
            ]
        return []

    def _symptom_insights(self, entries: list[DailyEntry]) -> list[CycleInsight]:
        counts: Counter[CycleSymptom] = Counter()
        for entry in entries:
            counts.update({s for s in map(parse_symptom, entry.symptoms) if s is not None})

        threshold = self._config.insights.min_symptom_occurrences
        common = {
            symptom
            for symptom, count in counts.most_common(TOP_SYMPTOMS)
            if count >= threshold
        }

        insights = []
        if CycleSymptom.headache in common:
            insights.append(_HEADACHE)
        if common & {CycleSymptom.mood_swings, CycleSymptom.irritability}:
            insights.append(_MOOD)
        if common & {CycleSymptom.fatigue, CycleSymptom.low_energy}:
            insights.append(_ENERGY)
        if common & _PMS_SYMPTOMS:
            insights.append(_PMS)
        return insights

    @staticmethod
    def _exercise_insights(entries: list[DailyEntry]) -> list[CycleInsight]:
        minutes = [e.exercise for e in entries if e.exercise]
        if not minutes:
            return []
        average = statistics.fmean(minutes)
        if average < 15:
            return [
                CycleInsight(
                    insight_id="exercise_recommendation",
                    title="Exercise Benefits",
                    description="Regular exercise can help reduce PMS symptoms and regulate your cycle.",
                    category=InsightCategory.fitness,
                    relevancy=0.75,
                    recommendations=(
                        "Aim for at least 30 minutes of moderate activity most days",
                        "Even short walks can help with menstrual cramps",
                    ),
                )
            ]
        if average > 60:
            return [
                CycleInsight(
                    insight_id="high_exercise",
                    title="Exercise and Your Cycle",
                    description=(
                        "Your exercise levels are high. Very intense exercise can sometimes "
                        "affect cycle regularity."
                    ),
                    category=InsightCategory.fitness,
                    relevancy=0.7,
                    recommendations=(
                        "Consider reducing intensity during your period if you experience discomfort",
                        "Ensure you're getting adequate nutrition to support your activity level",
                    ),
                )
            ]
        return []

    def _sleep_insights(
        self, record: CycleRecord, entries: list[DailyEntry]
    ) -> list[CycleInsight]:
        sleep_by_phase: dict[Phase, list[float]] = {}
        for entry in entries:
            if entry.sleep is None:
                continue
            phase = self._phases.phase_for_date(project_record(record, entry.date), entry.date)
            if phase is not None:
                sleep_by_phase.setdefault(phase, []).append(entry.sleep)

        # A single phase gives nothing to compare against
        if len(sleep_by_phase) < 2:
            return []

        worst = min(sleep_by_phase, key=lambda p: statistics.fmean(sleep_by_phase[p]))
        return [
            CycleInsight(
                insight_id="sleep_patterns",
                title="Sleep Quality Patterns",
                description=(
                    "Your tracking shows changes in sleep quality during different cycle "
                    f"phases, with the {worst.label} phase showing the most disruption."
                ),
                category=InsightCategory.general,
                relevancy=0.8,
                recommendations=(
                    "Create a consistent sleep routine regardless of cycle phase",
                    f"Consider relaxation techniques before bed during the {worst.label} phase",
                    "Limit caffeine and alcohol, especially during phases with disrupted sleep",
                    "Track bedroom temperature - hormonal changes can affect your temperature comfort",
                ),
            )
        ]


def generate_insights(
    record: CycleRecord,
    on_date: date,
    entries: Iterable[DailyEntry] = (),
    config: EngineConfig | None = None,
) -> list[CycleInsight]:
    """Shortcut for ``InsightGenerator(config).generate(record, on_date, entries)``."""
    return InsightGenerator(config).generate(record, on_date, entries)
