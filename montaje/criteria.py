"""
Evaluation criteria reference table for Montaje.

Defines the six fixed criteria an instrument or section is evaluated on,
with their weight, five-level descriptive scale, practice tips, risk
mitigations and targeted technique programme.

This module contains DEFINITIONS ONLY. The table is read-only and shared by
the risk assessor and the recommendation generator.

Weights are informational: aggregate scores are an unweighted mean of the
rated criteria.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class Criterion(Enum):
    """The six evaluation criteria, in table order."""

    TUNING = "tuning"
    ARTICULATION = "articulation"
    RHYTHM = "rhythm"
    COHESION = "cohesion"
    DYNAMICS = "dynamics"
    MEMORIZATION = "memorization"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TechniqueProgram:
    """Template for a criterion-specific technique recommendation."""

    title: str
    description: str
    expected_impact: str
    timeline: str


@dataclass(frozen=True)
class CriterionDefinition:
    """
    Definition of one evaluation criterion.

    `source_key` is the field name the evaluation repository stores the
    score under.
    """

    criterion: Criterion
    source_key: str
    name: str
    description: str
    weight: float
    scales: tuple[str, str, str, str, str]  # levels 1..5
    tips: tuple[str, ...]
    mitigations: tuple[str, ...]
    program: TechniqueProgram

    def describe_level(self, level: int) -> str:
        """Descriptive text for a 1-5 score level."""
        if not 1 <= level <= 5:
            raise ValueError(f"Level must be 1-5, got {level}")
        return self.scales[level - 1]


# =============================================================================
# CRITERIA
# =============================================================================

TUNING = CriterionDefinition(
    criterion=Criterion.TUNING,
    source_key="afinacion",
    name="Tuning",
    description="Pitch accuracy and intonation",
    weight=1.2,
    scales=(
        "Very out of tune - constant intonation errors",
        "Out of tune - frequent errors, needs correction",
        "Acceptable - generally in tune with occasional errors",
        "Well tuned - consistent intonation with minimal errors",
        "Perfect tuning - flawless and consistent intonation",
    ),
    tips=(
        "Use a tuner before every rehearsal",
        "Practice scales and arpeggios slowly",
        "Listen to tuning references",
    ),
    mitigations=(
        "Use digital tuners in every rehearsal",
        "Practice scales and arpeggios daily",
        "Introduce intonation exercises",
    ),
    program=TechniqueProgram(
        title="Intensive Tuning Programme",
        description="Daily tuning exercises and mandatory use of tuners",
        expected_impact="40% improvement in pitch accuracy",
        timeline="2-3 weeks",
    ),
)

ARTICULATION = CriterionDefinition(
    criterion=Criterion.ARTICULATION,
    source_key="articulacion",
    name="Articulation",
    description="Clarity and precision of note articulation",
    weight=1.0,
    scales=(
        "Very imprecise - confused and inconsistent articulation",
        "Irregular - variable articulation, lacks clarity",
        "Acceptable - basic articulation is correct",
        "Clear - precise and consistent articulation",
        "Extremely crisp - perfect and expressive articulation",
    ),
    tips=(
        "Practice staccato and legato exercises",
        "Work with a metronome",
        "Study different articulation types",
    ),
    mitigations=(
        "Practice staccato and legato exercises",
        "Work with a metronome",
        "Study different articulation types",
    ),
    program=TechniqueProgram(
        title="Articulation Clinic",
        description="Short daily staccato/legato drills on the passages of the work",
        expected_impact="Cleaner attacks and releases across the section",
        timeline="2-3 weeks",
    ),
)

RHYTHM = CriterionDefinition(
    criterion=Criterion.RHYTHM,
    source_key="ritmo",
    name="Rhythm",
    description="Rhythmic precision and tempo stability",
    weight=1.3,
    scales=(
        "Unstable - inconsistent tempo, frequent rhythmic errors",
        "Off beat - struggles to hold the tempo",
        "In tempo - basic rhythm is correct",
        "Precise - consistent and accurate rhythm",
        "Very precise - flawless rhythm with exact subdivisions",
    ),
    tips=(
        "Use a metronome in every practice",
        "Practice rhythmic subdivisions",
        "Work at different tempos",
    ),
    mitigations=(
        "Use a metronome in every practice",
        "Practice rhythmic subdivisions",
        "Work at different tempos",
    ),
    program=TechniqueProgram(
        title="Metronome Discipline Plan",
        description="Graduated tempo work with subdivision counting in every session",
        expected_impact="Stable tempo through the hardest passages",
        timeline="2-4 weeks",
    ),
)

COHESION = CriterionDefinition(
    criterion=Criterion.COHESION,
    source_key="cohesion",
    name="Cohesion",
    description="Unity and coordination with the other instruments",
    weight=1.1,
    scales=(
        "Scattered section - no coordination or unity",
        "Little unity - inconsistent coordination",
        "Basic unity - acceptable coordination",
        "Good cohesion - well coordinated section",
        "Total unison - perfect coordination and unity",
    ),
    tips=(
        "Listen actively to the other instruments",
        "Practice in small groups",
        "Work entries and cut-offs together",
    ),
    mitigations=(
        "Schedule more sectional rehearsals",
        "Practice active listening",
        "Work entries and cut-offs together",
    ),
    program=TechniqueProgram(
        title="Sectional Cohesion Sessions",
        description="Weekly sectionals focused on entries, cut-offs and balance",
        expected_impact="Tighter ensemble playing within the section",
        timeline="3-4 weeks",
    ),
)

DYNAMICS = CriterionDefinition(
    criterion=Criterion.DYNAMICS,
    source_key="dinamica",
    name="Dynamics",
    description="Control and range of musical dynamics",
    weight=0.9,
    scales=(
        "No contrast - flat dynamics, no variation",
        "Barely dynamic - minimal and inconsistent variation",
        "Dynamic - basic dynamic contrast",
        "Very dynamic - good control and range",
        "Excellent control - expressive and precise dynamics",
    ),
    tips=(
        "Practice crescendos and diminuendos",
        "Study the dynamic markings",
        "Work extreme contrasts",
    ),
    mitigations=(
        "Practice crescendos and diminuendos",
        "Study the dynamic markings",
        "Work extreme contrasts",
    ),
    program=TechniqueProgram(
        title="Dynamic Range Workshop",
        description="Exercises on sustained crescendos, diminuendos and marked contrasts",
        expected_impact="Audible dynamic contrast matching the score",
        timeline="2-3 weeks",
    ),
)

MEMORIZATION = CriterionDefinition(
    criterion=Criterion.MEMORIZATION,
    source_key="memorizacion",
    name="Memorization",
    description="How much of the work is memorized",
    weight=0.8,
    scales=(
        "Not memorized - fully dependent on the score",
        "Constant reference - very partial memorization",
        "Partial - some sections memorized",
        "Well memorized - most of the work memorized",
        "Fully memorized - the whole work is memorized",
    ),
    tips=(
        "Memorize in small sections",
        "Gradually practice without the score",
        "Use harmonic analysis as an aid",
    ),
    mitigations=(
        "Memorize in small sections",
        "Gradually practice without the score",
        "Use harmonic analysis as an aid",
    ),
    program=TechniqueProgram(
        title="Section-by-Section Memorization Plan",
        description="Memorize one short section per week and rehearse it without the score",
        expected_impact="Reduced reliance on the score in performance",
        timeline="4-6 weeks",
    ),
)

CRITERIA: MappingProxyType = MappingProxyType(
    {
        definition.criterion: definition
        for definition in (TUNING, ARTICULATION, RHYTHM, COHESION, DYNAMICS, MEMORIZATION)
    }
)
"""Criterion -> CriterionDefinition, in table order."""


def get_criterion(criterion: Criterion | str) -> CriterionDefinition:
    """Look up a definition by enum member, English key or stored field name."""
    if isinstance(criterion, Criterion):
        return CRITERIA[criterion]
    for definition in CRITERIA.values():
        if criterion in (definition.criterion.value, definition.source_key):
            return definition
    raise KeyError(f"Unknown criterion: {criterion}")
