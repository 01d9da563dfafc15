"""Team-level affinity aggregation.

All functions are *pure* (no side-effects, no I/O).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
import logging

from pydantic import BaseModel, Field

from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.scorer import CompatibilityLevel, level_for_score
from lib_zodiac.errors import InvalidArgumentError
from lib_zodiac.zodiac_types import ELEMENT_ORDER, Element, Member, ZodiacSign


logger = logging.getLogger(__name__)

CONFLICT_THRESHOLD = 40
BEST_PAIRS_LIMIT = 3

_TWO_PLACES = Decimal("0.01")


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class PairAffinity(BaseModel):
    """Affinity of one member pair inside a team."""

    member_a_id: str
    member_a_name: str = ""
    member_a_sign: ZodiacSign
    member_b_id: str
    member_b_name: str = ""
    member_b_sign: ZodiacSign
    score: int = Field(ge=0, le=100)
    level: CompatibilityLevel


class MemberPairAffinity(PairAffinity):
    """Organization-wide pair with its best collaboration type."""

    best_for: str = ""


class TeamAffinityResult(BaseModel):
    """Aggregated affinity report for a group of members."""

    team_size: int = Field(ge=0)
    member_ids: list[str]
    average_score: Decimal = Field(ge=0, le=100)
    level: CompatibilityLevel
    element_balance: dict[Element, int]
    pairs: list[PairAffinity]
    conflicts: list[PairAffinity]
    best_pairs: list[PairAffinity]
    insights: list[str]

    @property
    def is_balanced(self) -> bool:
        """Every element is represented at least once."""
        return all(count >= 1 for count in self.element_balance.values())

    @property
    def missing_elements(self) -> list[Element]:
        return [e for e, count in self.element_balance.items() if count == 0]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def pair_affinities(members: list[Member], matrix: AffinityMatrix) -> list[PairAffinity]:
    """Score every i < j member pair, in discovery order."""
    results: list[PairAffinity] = []
    for i, ma in enumerate(members):
        for mb in members[i + 1:]:
            entry = matrix.lookup(ma.sign, mb.sign)
            results.append(PairAffinity(
                member_a_id=ma.id,
                member_a_name=ma.display_name,
                member_a_sign=ma.sign,
                member_b_id=mb.id,
                member_b_name=mb.display_name,
                member_b_sign=mb.sign,
                score=entry.overall_score,
                level=entry.level,
            ))
    return results


def average_score(members: list[Member], matrix: AffinityMatrix) -> Decimal:
    """Mean pair score rounded half-up to 2 decimal places.

    Raises:
        InvalidArgumentError: If fewer than 2 members are given.
    """
    if len(members) < 2:
        raise InvalidArgumentError("Team must have at least 2 members")
    total = 0
    count = 0
    for i, ma in enumerate(members):
        for mb in members[i + 1:]:
            total += matrix.score(ma.sign, mb.sign)
            count += 1
    return (Decimal(total) / Decimal(count)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def element_histogram(members: list[Member]) -> dict[Element, int]:
    """Member count per element; all 4 elements are always present."""
    counts: dict[Element, int] = {e: 0 for e in ELEMENT_ORDER}
    for m in members:
        counts[m.element] += 1
    return counts


def aggregate_team(members: list[Member], matrix: AffinityMatrix) -> TeamAffinityResult:
    """Aggregate pairwise affinities of *members* into a team report.

    Raises:
        InvalidArgumentError: If fewer than 2 members are given.
    """
    if len(members) < 2:
        raise InvalidArgumentError("Team must have at least 2 members")
    logger.debug("Aggregating team affinity for %d members", len(members))

    pairs = pair_affinities(members, matrix)
    total = sum(p.score for p in pairs)
    average = (Decimal(total) / Decimal(len(pairs))).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)

    balance = element_histogram(members)
    conflicts = [p for p in pairs if p.score < CONFLICT_THRESHOLD]
    # sorted() is stable: ties keep discovery order
    best = sorted(pairs, key=lambda p: p.score, reverse=True)[:BEST_PAIRS_LIMIT]

    return TeamAffinityResult(
        team_size=len(members),
        member_ids=[m.id for m in members],
        average_score=average,
        level=level_for_score(average),
        element_balance=balance,
        pairs=pairs,
        conflicts=conflicts,
        best_pairs=best,
        insights=_team_insights(average, balance, conflicts),
    )


def find_best_member_pairs(
    active_members: list[Member],
    matrix: AffinityMatrix,
    limit: int = 10,
) -> list[MemberPairAffinity]:
    """Best-scoring member pairs across the organization, best first."""
    logger.info("Finding best member pairs among %d members (limit: %d)", len(active_members), limit)
    results: list[MemberPairAffinity] = []
    for i, ma in enumerate(active_members):
        for mb in active_members[i + 1:]:
            entry = matrix.lookup(ma.sign, mb.sign)
            results.append(MemberPairAffinity(
                member_a_id=ma.id,
                member_a_name=ma.display_name,
                member_a_sign=ma.sign,
                member_b_id=mb.id,
                member_b_name=mb.display_name,
                member_b_sign=mb.sign,
                score=entry.overall_score,
                level=entry.level,
                best_for=entry.best_collaboration,
            ))
    return sorted(results, key=lambda p: p.score, reverse=True)[:limit]


# ---------------------------------------------------------------------------
# Insight text helpers
# ---------------------------------------------------------------------------
def _team_insights(
    average: Decimal,
    balance: dict[Element, int],
    conflicts: list[PairAffinity],
) -> list[str]:
    insights: list[str] = []

    if average >= 75:
        insights.append("✅ Excellent team compatibility! This team has strong natural synergy.")
    elif average >= 60:
        insights.append("👍 Good team compatibility. Minor adjustments may enhance collaboration.")
    else:
        insights.append("⚠️ Team requires careful management. Focus on leveraging complementary strengths.")

    missing = sum(1 for count in balance.values() if count == 0)
    if missing == 0:
        insights.append("🌟 Perfect element balance! All 4 elements represented.")
    elif missing == 1:
        insights.append("⚖️ Good element diversity. Consider adding one more element for perfect balance.")
    else:
        insights.append("📊 Limited element diversity. Team may benefit from more varied perspectives.")

    if not conflicts:
        insights.append("✨ No significant conflicts detected. Team should work smoothly.")
    else:
        insights.append(
            f"⚠️ {len(conflicts)} potential conflict pair(s) detected. Monitor these relationships closely."
        )

    return insights
