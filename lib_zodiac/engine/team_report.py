"""Team build report: strengths, weaknesses and recommendations.

All functions are *pure*.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from lib_zodiac.engine.conflicts import MemberSummary, RiskLevel, risk_level
from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.team_affinity import TeamAffinityResult, aggregate_team
from lib_zodiac.zodiac_types import Element, Member


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class ConflictPair(BaseModel):
    member_1: MemberSummary
    member_2: MemberSummary
    compatibility_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    suggestion: str


class BestPair(BaseModel):
    member_1: MemberSummary
    member_2: MemberSummary
    compatibility_score: int = Field(ge=0, le=100)
    collaboration_type: str


class TeamBuildReport(BaseModel):
    """Presentation-ready analysis of one team."""

    team_name: str
    members: list[MemberSummary]
    affinity: TeamAffinityResult
    missing_elements: list[Element]
    is_element_balanced: bool
    potential_conflicts: list[ConflictPair]
    top_compatible_pairs: list[BestPair]
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]
    dynamics_summary: str

    @property
    def conflict_count(self) -> int:
        return len(self.potential_conflicts)

    @property
    def has_high_conflicts(self) -> bool:
        return bool(self.potential_conflicts)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def build_team_report(
    members: list[Member],
    matrix: AffinityMatrix,
    team_name: str = "Team",
) -> TeamBuildReport:
    """Analyse *members* as one team.

    Raises:
        InvalidArgumentError: If fewer than 2 members are given.
    """
    result = aggregate_team(members, matrix)
    by_id = {m.id: m for m in members}

    conflicts = [
        ConflictPair(
            member_1=MemberSummary.from_member(by_id[p.member_a_id]),
            member_2=MemberSummary.from_member(by_id[p.member_b_id]),
            compatibility_score=p.score,
            risk_level=risk_level(p.score),
            suggestion=_conflict_suggestion(by_id[p.member_a_id], by_id[p.member_b_id], p.score),
        )
        for p in result.conflicts
    ]
    best = [
        BestPair(
            member_1=MemberSummary.from_member(by_id[p.member_a_id]),
            member_2=MemberSummary.from_member(by_id[p.member_b_id]),
            compatibility_score=p.score,
            collaboration_type=matrix.lookup(p.member_a_sign, p.member_b_sign).best_collaboration,
        )
        for p in result.best_pairs
    ]

    represented = sum(1 for count in result.element_balance.values() if count > 0)
    return TeamBuildReport(
        team_name=team_name,
        members=[MemberSummary.from_member(m) for m in members],
        affinity=result,
        missing_elements=result.missing_elements,
        is_element_balanced=result.is_balanced,
        potential_conflicts=conflicts,
        top_compatible_pairs=best,
        strengths=_strengths(result.average_score, represented, conflicts),
        weaknesses=_weaknesses(represented, conflicts),
        recommendations=_recommendations(result.average_score, result.is_balanced, conflicts),
        dynamics_summary=(
            f"Team of {result.team_size} members with {result.level} compatibility "
            f"({result.average_score:.1f}%). "
            f"{'Perfect' if represented == 4 else 'Partial'} element representation."
        ),
    )


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------
def _conflict_suggestion(m1: Member, m2: Member, score: int) -> str:
    if risk_level(score) == "CRITICAL":
        return (
            f"Avoid pairing {m1.display_name} and {m2.display_name} on same projects. "
            "Consider separate work streams."
        )
    return (
        f"Monitor interactions between {m1.display_name} and {m2.display_name}. "
        "Provide clear communication channels."
    )


def _strengths(average: Decimal, represented: int, conflicts: list[ConflictPair]) -> list[str]:
    strengths: list[str] = []
    if average >= 75:
        strengths.append("Strong natural synergy and compatibility")
    if represented >= 3:
        strengths.append("Diverse perspectives with multiple elements represented")
    if not conflicts:
        strengths.append("No significant conflicts detected - smooth collaboration expected")
    return strengths


def _weaknesses(represented: int, conflicts: list[ConflictPair]) -> list[str]:
    weaknesses: list[str] = []
    if conflicts:
        weaknesses.append(f"{len(conflicts)} potential conflict pair(s) require management")
    if represented < 3:
        weaknesses.append("Limited element diversity may result in one-sided approaches")
    return weaknesses


def _recommendations(average: Decimal, balanced: bool, conflicts: list[ConflictPair]) -> list[str]:
    recs: list[str] = []
    if not balanced:
        recs.append("Consider adding members from missing elements for better balance")
    if conflicts:
        recs.append("Implement conflict management strategies for identified pairs")
    if average < 60:
        recs.append("Team may benefit from team-building activities to improve cohesion")
    return recs
