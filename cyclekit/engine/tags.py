"""Closed tag sets for symptoms, mood, and flow intensity.

The enums carry only their stable value.  Display metadata (labels, emoji,
categories) lives in separate lookup tables so the computational path never
touches presentation strings.
"""

from __future__ import annotations

from enum import Enum


class CycleSymptom(str, Enum):
    cramps = "cramps"
    headache = "headache"
    backache = "backache"
    fatigue = "fatigue"
    bloating = "bloating"
    breast_tenderness = "breast_tenderness"
    acne = "acne"
    insomnia = "insomnia"
    mood_swings = "mood_swings"
    irritability = "irritability"
    anxiety = "anxiety"
    depression = "depression"
    low_energy = "low_energy"
    cravings = "cravings"
    digestive_issues = "digestive_issues"
    nausea = "nausea"
    dizziness = "dizziness"


class CycleMood(str, Enum):
    happy = "happy"
    energetic = "energetic"
    calm = "calm"
    tired = "tired"
    irritable = "irritable"
    anxious = "anxious"
    sad = "sad"
    sensitive = "sensitive"


class Flow(str, Enum):
    spotting = "spotting"
    light = "light"
    medium = "medium"
    heavy = "heavy"


# (category, display name)
SYMPTOM_DISPLAY: dict[CycleSymptom, tuple[str, str]] = {
    CycleSymptom.cramps: ("Physical", "Cramps"),
    CycleSymptom.headache: ("Physical", "Headache"),
    CycleSymptom.backache: ("Physical", "Backache"),
    CycleSymptom.fatigue: ("Physical", "Fatigue"),
    CycleSymptom.bloating: ("Physical", "Bloating"),
    CycleSymptom.breast_tenderness: ("Physical", "Breast Tenderness"),
    CycleSymptom.acne: ("Physical", "Acne"),
    CycleSymptom.insomnia: ("Physical", "Insomnia"),
    CycleSymptom.mood_swings: ("Emotional", "Mood Swings"),
    CycleSymptom.irritability: ("Emotional", "Irritability"),
    CycleSymptom.anxiety: ("Emotional", "Anxiety"),
    CycleSymptom.depression: ("Emotional", "Depression"),
    CycleSymptom.low_energy: ("Emotional", "Low Energy"),
    CycleSymptom.cravings: ("Other", "Food Cravings"),
    CycleSymptom.digestive_issues: ("Other", "Digestive Issues"),
    CycleSymptom.nausea: ("Other", "Nausea"),
    CycleSymptom.dizziness: ("Other", "Dizziness"),
}

# (emoji, display name)
MOOD_DISPLAY: dict[CycleMood, tuple[str, str]] = {
    CycleMood.happy: ("😊", "Happy"),
    CycleMood.energetic: ("⚡", "Energetic"),
    CycleMood.calm: ("😌", "Calm"),
    CycleMood.tired: ("😴", "Tired"),
    CycleMood.irritable: ("😠", "Irritable"),
    CycleMood.anxious: ("😰", "Anxious"),
    CycleMood.sad: ("😢", "Sad"),
    CycleMood.sensitive: ("🥺", "Sensitive"),
}

# (display name, description)
FLOW_DISPLAY: dict[Flow, tuple[str, str]] = {
    Flow.spotting: ("Spotting", "Very light bleeding or spotting"),
    Flow.light: ("Light", "Lighter than usual flow"),
    Flow.medium: ("Medium", "Normal flow"),
    Flow.heavy: ("Heavy", "Heavier than usual flow"),
}


def parse_symptom(value: str) -> CycleSymptom | None:
    """Map free text (``"Mood Swings"``, ``"mood_swings"``) to a known symptom.

    Returns None for tags outside the closed set; callers may still carry
    such tags as opaque strings.
    """
    key = value.strip().lower().replace(" ", "_").replace("-", "_")
    try:
        return CycleSymptom(key)
    except ValueError:
        pass
    for symptom, (_, label) in SYMPTOM_DISPLAY.items():
        if label.lower() == value.strip().lower():
            return symptom
    return None


def symptom_label(tag: str) -> str:
    """Return the display name for a symptom tag, or the tag itself if unknown."""
    symptom = parse_symptom(tag)
    return SYMPTOM_DISPLAY[symptom][1] if symptom else tag
