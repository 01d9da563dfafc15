"""Pairwise affinity scoring from element relationships.

All functions are *pure* (no side-effects, no I/O).
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from lib_zodiac.zodiac_types import Element, ZodiacSign, element_of


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CompatibilityLevel(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"
    DIFFICULT = "Difficult"

    def __str__(self) -> str:
        return self.value


class ElementHarmony(str, Enum):
    HARMONIOUS = "Harmonious"
    CHALLENGING = "Challenging"
    NEUTRAL = "Neutral"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------
class AffinityEntry(BaseModel, frozen=True):
    """Scores for one unordered sign pair."""

    sign_1: ZodiacSign
    sign_2: ZodiacSign
    overall_score: int = Field(ge=0, le=100)
    work_score: int = Field(ge=0, le=100)
    communication_score: int = Field(ge=0, le=100)
    conflict_potential: int = Field(ge=0, le=100)
    synergy_score: int = Field(ge=0, le=100)
    level: CompatibilityLevel
    element_harmony: ElementHarmony
    strengths: str = ""
    challenges: str = ""
    management_tips: str = ""
    best_collaboration: str = ""


# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------
SAME_SIGN_SCORE = 85
DEFAULT_SCORE = 60

# Checked in order; the first matching unordered element pair wins.
_ELEMENT_PAIR_SCORES: list[tuple[frozenset[Element], int]] = [
    (frozenset({Element.FIRE, Element.AIR}), 92),
    (frozenset({Element.EARTH, Element.WATER}), 90),
]
_SAME_ELEMENT_SCORE = 78
_CLASHING_PAIR_SCORES: list[tuple[frozenset[Element], int]] = [
    (frozenset({Element.FIRE, Element.WATER}), 45),
    (frozenset({Element.EARTH, Element.AIR}), 55),
]

_HARMONIOUS_PAIRS = (
    frozenset({Element.FIRE, Element.AIR}),
    frozenset({Element.EARTH, Element.WATER}),
)
_CHALLENGING_PAIRS = (
    frozenset({Element.FIRE, Element.WATER}),
    frozenset({Element.EARTH, Element.AIR}),
)

# (lower bound inclusive, level), highest first
_LEVEL_BANDS: list[tuple[int, CompatibilityLevel]] = [
    (80, CompatibilityLevel.EXCELLENT),
    (65, CompatibilityLevel.GOOD),
    (50, CompatibilityLevel.MODERATE),
    (35, CompatibilityLevel.CHALLENGING),
]


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------
def elements_compatible(e1: Element, e2: Element) -> bool:
    """Same element, Fire ↔ Air and Earth ↔ Water are compatible."""
    return e1 == e2 or frozenset({e1, e2}) in _HARMONIOUS_PAIRS


def element_harmony(e1: Element, e2: Element) -> ElementHarmony:
    if elements_compatible(e1, e2):
        return ElementHarmony.HARMONIOUS
    if frozenset({e1, e2}) in _CHALLENGING_PAIRS:
        return ElementHarmony.CHALLENGING
    return ElementHarmony.NEUTRAL


def level_for_score(score: int | float | Decimal) -> CompatibilityLevel:
    """Band a pair score or a team average into a compatibility level."""
    for lower, level in _LEVEL_BANDS:
        if score >= lower:
            return level
    return CompatibilityLevel.DIFFICULT


# ---------------------------------------------------------------------------
# Score components
# ---------------------------------------------------------------------------
def overall_score(c1: ZodiacSign, c2: ZodiacSign) -> int:
    if c1 == c2:
        return SAME_SIGN_SCORE
    e1, e2 = element_of(c1), element_of(c2)
    pair = frozenset({e1, e2})
    for elements, score in _ELEMENT_PAIR_SCORES:
        if pair == elements:
            return score
    if e1 == e2:
        return _SAME_ELEMENT_SCORE
    for elements, score in _CLASHING_PAIR_SCORES:
        if pair == elements:
            return score
    return DEFAULT_SCORE


def work_score(overall: int) -> int:
    return min(100, overall + 5)


def communication_score(c1: ZodiacSign, c2: ZodiacSign, overall: int) -> int:
    # Air signs communicate well with everyone
    if Element.AIR in (element_of(c1), element_of(c2)):
        return 85
    return overall


def score_pair(c1: ZodiacSign, c2: ZodiacSign) -> AffinityEntry:
    """Compute the full affinity entry for the ordered pair (*c1*, *c2*)."""
    overall = overall_score(c1, c2)
    level = level_for_score(overall)
    return AffinityEntry(
        sign_1=c1,
        sign_2=c2,
        overall_score=overall,
        work_score=work_score(overall),
        communication_score=communication_score(c1, c2, overall),
        conflict_potential=100 - overall,
        synergy_score=overall - 5,
        level=level,
        element_harmony=element_harmony(element_of(c1), element_of(c2)),
        strengths=_strengths_text(c1, c2, level),
        challenges=_challenges_text(c1, c2, level),
        management_tips=_management_tips_text(c1, c2, level),
        best_collaboration=_best_collaboration_text(c1, c2),
    )


# ---------------------------------------------------------------------------
# Advisory text helpers
# ---------------------------------------------------------------------------
def _strengths_text(c1: ZodiacSign, c2: ZodiacSign, level: CompatibilityLevel) -> str:
    if level == CompatibilityLevel.EXCELLENT:
        return (
            f"{c1} and {c2} work exceptionally well together. "
            "They share similar energy and complement each other's strengths. "
            "Great communication and mutual understanding."
        )
    if level == CompatibilityLevel.GOOD:
        return (
            f"{c1} and {c2} have good synergy. "
            "They can collaborate effectively with some adjustments. "
            "Respect for differences enhances teamwork."
        )
    if level == CompatibilityLevel.MODERATE:
        return (
            f"{c1} and {c2} can work together with effort. "
            "Finding common ground and clear communication is key."
        )
    return (
        f"{c1} and {c2} require careful management. "
        "Focus on complementary skills and clear role definitions."
    )


def _challenges_text(c1: ZodiacSign, c2: ZodiacSign, level: CompatibilityLevel) -> str:
    if level == CompatibilityLevel.EXCELLENT:
        return "May become too similar in approach. Need to ensure diverse perspectives."
    if level == CompatibilityLevel.GOOD:
        return "Minor differences in work style. Occasional miscommunication possible."
    if level == CompatibilityLevel.MODERATE:
        return "Different approaches to work. May clash on methods or priorities."
    return (
        f"Significant differences between {c1} and {c2}. "
        "Potential for conflict if not managed properly. "
        "Different values and work styles may cause friction."
    )


def _management_tips_text(c1: ZodiacSign, c2: ZodiacSign, level: CompatibilityLevel) -> str:
    if level == CompatibilityLevel.EXCELLENT:
        return (
            "Leverage their natural synergy. Assign collaborative projects. "
            "Encourage them to mentor others together."
        )
    if level == CompatibilityLevel.GOOD:
        return (
            "Provide clear communication channels. Acknowledge both their strengths. "
            "Use their differences as complementary assets."
        )
    if level == CompatibilityLevel.MODERATE:
        return (
            "Set clear expectations and boundaries. Facilitate regular check-ins. "
            "Focus on shared goals rather than methods."
        )
    return (
        f"Carefully manage {c1} and {c2} interactions. "
        "Assign them to different aspects of projects. "
        "Have a mediator available. Emphasize respect and professionalism. "
        "Focus on their complementary skills."
    )


def _best_collaboration_text(c1: ZodiacSign, c2: ZodiacSign) -> str:
    # direction-sensitive: only (Fire, Air) and (Earth, Water) in this order
    e1, e2 = element_of(c1), element_of(c2)
    if e1 == Element.FIRE and e2 == Element.AIR:
        return "Creative projects, brainstorming sessions, innovation"
    if e1 == Element.EARTH and e2 == Element.WATER:
        return "Strategic planning, detailed execution, long-term projects"
    if e1 == e2:
        return "Projects requiring similar energy and approach"
    return "Tasks requiring diverse perspectives and complementary skills"
