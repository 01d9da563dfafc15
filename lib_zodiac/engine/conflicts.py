"""Organization-wide conflict scanning over member pairs.

All functions are *pure* apart from logging.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Literal

from pydantic import BaseModel, Field

from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.scorer import AffinityEntry
from lib_zodiac.engine.team_affinity import CONFLICT_THRESHOLD
from lib_zodiac.zodiac_types import Element, Member, ZodiacSign


logger = logging.getLogger(__name__)

CRITICAL_THRESHOLD = 30
_DEFAULT_WARN_PAIRS = 5000


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
Severity = Literal["CRITICAL", "HIGH"]
RiskLevel = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW"]

_SEVERITY_ORDER: dict[str, int] = {"CRITICAL": 0, "HIGH": 1, "MEDIUM": 2, "LOW": 3}


class MemberSummary(BaseModel):
    """The member fields an alert carries."""

    id: str
    name: str
    sign: ZodiacSign
    element: Element

    @classmethod
    def from_member(cls, member: Member) -> MemberSummary:
        return cls(
            id=member.id,
            name=member.display_name,
            sign=member.sign,
            element=member.element,
        )


class ConflictAlert(BaseModel):
    """A single low-affinity member pair."""

    severity: Severity
    member_1: MemberSummary
    member_2: MemberSummary
    compatibility_score: int = Field(ge=0, le=100)
    conflict_potential: int = Field(ge=0, le=100)
    primary_issue: str = ""
    conflict_areas: list[str] = Field(default_factory=list)
    recommendation: str = ""
    prevention_strategies: list[str] = Field(default_factory=list)
    detected_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_resolved: bool = False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def risk_level(score: int) -> RiskLevel:
    """Four-tier risk banding for a pair score."""
    if score < CRITICAL_THRESHOLD:
        return "CRITICAL"
    if score < CONFLICT_THRESHOLD:
        return "HIGH"
    if score < 50:
        return "MEDIUM"
    return "LOW"


def scan_organization(
    active_members: list[Member],
    matrix: AffinityMatrix,
    warn_pairs: int = _DEFAULT_WARN_PAIRS,
) -> list[ConflictAlert]:
    """Return alerts for every active pair scoring below the conflict threshold.

    Sorted CRITICAL before HIGH, then by ascending score. Cost is quadratic in
    the member count; above *warn_pairs* pairs a warning is logged.
    """
    members = [m for m in active_members if m.active]
    pair_count = len(members) * (len(members) - 1) // 2
    logger.info("Detecting conflicts across %d active members", len(members))
    if pair_count > warn_pairs:
        logger.warning(
            "Conflict scan over %d pairs exceeds %d; consider running it off the request path",
            pair_count,
            warn_pairs,
        )

    alerts: list[ConflictAlert] = []
    for i, m1 in enumerate(members):
        for m2 in members[i + 1:]:
            entry = matrix.lookup(m1.sign, m2.sign)
            if entry.overall_score < CONFLICT_THRESHOLD:
                alerts.append(_create_alert(m1, m2, entry))

    return sorted(alerts, key=lambda a: (_SEVERITY_ORDER[a.severity], a.compatibility_score))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _create_alert(m1: Member, m2: Member, entry: AffinityEntry) -> ConflictAlert:
    score = entry.overall_score
    severity: Severity = "CRITICAL" if score < CRITICAL_THRESHOLD else "HIGH"
    return ConflictAlert(
        severity=severity,
        member_1=MemberSummary.from_member(m1),
        member_2=MemberSummary.from_member(m2),
        compatibility_score=score,
        conflict_potential=entry.conflict_potential,
        primary_issue=entry.challenges,
        conflict_areas=["Work style differences", "Communication challenges"],
        recommendation=entry.management_tips,
        prevention_strategies=[
            "Regular check-ins",
            "Clear communication channels",
            "Defined roles and responsibilities",
        ],
    )
