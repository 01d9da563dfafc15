"""Id-based facade over the affinity engine.

Resolves member ids through a :class:`MemberDirectory` and hands member
snapshots to the pure engine functions.
"""

from __future__ import annotations

import logging

from lib_zodiac.engine.conflicts import ConflictAlert, scan_organization
from lib_zodiac.engine.heatmap import AffinityHeatmap, build_heatmap
from lib_zodiac.engine.matrix import AffinityMatrix, get_matrix
from lib_zodiac.engine.optimizer import find_optimal_team
from lib_zodiac.engine.resolver import MemberAffinityResolver
from lib_zodiac.engine.scorer import AffinityEntry
from lib_zodiac.engine.team_affinity import (
    MemberPairAffinity,
    TeamAffinityResult,
    aggregate_team,
    find_best_member_pairs,
)
from lib_zodiac.engine.team_report import TeamBuildReport, build_team_report
from lib_zodiac.errors import InvalidArgumentError
from lib_zodiac.member_directory import MemberDirectory
from lib_zodiac.settings import EngineSettings
from lib_zodiac.zodiac_types import ZodiacSign


logger = logging.getLogger(__name__)


class AffinityService:
    """Engine entry point for presentation and API layers."""

    def __init__(
        self,
        directory: MemberDirectory,
        matrix: AffinityMatrix | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.directory = directory
        self.matrix = matrix if matrix is not None else get_matrix()
        self.settings = settings if settings is not None else EngineSettings()
        self._resolver = MemberAffinityResolver(directory, self.matrix)

    # ------------------------------------------------------------------
    # Pair lookups
    # ------------------------------------------------------------------
    def lookup_sign_affinity(self, sign_1: ZodiacSign, sign_2: ZodiacSign) -> AffinityEntry:
        logger.debug("Fetching compatibility for %s and %s", sign_1, sign_2)
        return self.matrix.lookup(sign_1, sign_2)

    def lookup_member_affinity(self, member_id_1: str, member_id_2: str) -> AffinityEntry:
        logger.info("Calculating compatibility for members: %s and %s", member_id_1, member_id_2)
        return self._resolver.resolve(member_id_1, member_id_2)

    # ------------------------------------------------------------------
    # Team operations
    # ------------------------------------------------------------------
    def aggregate_team(self, member_ids: list[str]) -> TeamAffinityResult:
        """Team affinity for *member_ids*; the id order does not matter.

        Raises:
            InvalidArgumentError: If fewer than 2 ids are given or an id repeats.
            NotFoundError: If an id is unknown.
        """
        _check_team_ids(member_ids)
        logger.info("Calculating team compatibility for %d members", len(member_ids))
        members = self.directory.get_members(sorted(member_ids))
        return aggregate_team(members, self.matrix)

    def scan_conflicts(self, active_member_ids: list[str] | None = None) -> list[ConflictAlert]:
        """Conflict alerts among the given ids, or among all active members."""
        if active_member_ids is None:
            members = self.directory.get_active_members()
        else:
            _check_unique_ids(active_member_ids)
            members = self.directory.get_members(active_member_ids)
        return scan_organization(members, self.matrix, warn_pairs=self.settings.scan_warn_pairs)

    def optimize_team(self, target_size: int, pool_ids: list[str]) -> TeamAffinityResult:
        """Greedy team of up to *target_size* members from *pool_ids*.

        The pool is sorted by id first, so ties go to the lowest member id.

        Raises:
            InvalidArgumentError: If the pool is smaller than *target_size*.
            NotFoundError: If an id is unknown.
        """
        if len(set(pool_ids)) < target_size:
            raise InvalidArgumentError("Not enough members available")
        pool = self.directory.get_members(sorted(set(pool_ids)))
        return find_optimal_team(target_size, pool, self.matrix, warn_pairs=self.settings.scan_warn_pairs)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------
    def build_team_report(self, member_ids: list[str], team_name: str = "Team") -> TeamBuildReport:
        logger.info("Building team with %d members", len(member_ids))
        _check_team_ids(member_ids)
        members = self.directory.get_members(member_ids)
        return build_team_report(members, self.matrix, team_name=team_name)

    def best_member_pairs(self, limit: int | None = None) -> list[MemberPairAffinity]:
        return find_best_member_pairs(
            self.directory.get_active_members(),
            self.matrix,
            limit=limit if limit is not None else self.settings.best_pairs_limit,
        )

    def heatmap(self, member_ids: list[str]) -> AffinityHeatmap:
        _check_unique_ids(member_ids)
        return build_heatmap(self.directory.get_members(member_ids), self.matrix)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _check_unique_ids(member_ids: list[str]) -> None:
    if len(set(member_ids)) != len(member_ids):
        dupes = sorted({mid for mid in member_ids if member_ids.count(mid) > 1})
        raise InvalidArgumentError(f"Duplicate member ids: {', '.join(dupes)}")


def _check_team_ids(member_ids: list[str]) -> None:
    if len(member_ids) < 2:
        raise InvalidArgumentError("Team must have at least 2 members")
    _check_unique_ids(member_ids)
