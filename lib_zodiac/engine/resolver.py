"""Member ↔ member affinity resolution."""

from __future__ import annotations

import logging

from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.scorer import AffinityEntry
from lib_zodiac.member_directory import MemberDirectory
from lib_zodiac.zodiac_types import Member


logger = logging.getLogger(__name__)


def resolve_members(a: Member, b: Member, matrix: AffinityMatrix) -> AffinityEntry:
    """Return the sign-pair entry for two already-fetched members."""
    return matrix.lookup(a.sign, b.sign)


class MemberAffinityResolver:
    """Maps member ids to their signs and delegates to the matrix."""

    def __init__(self, directory: MemberDirectory, matrix: AffinityMatrix) -> None:
        self._directory = directory
        self._matrix = matrix

    def resolve(self, member_a_id: str, member_b_id: str) -> AffinityEntry:
        """Affinity between two members.

        Raises:
            NotFoundError: If either member id is unknown.
        """
        logger.debug("Resolving affinity for members %s and %s", member_a_id, member_b_id)
        a = self._directory.get_member(member_a_id)
        b = self._directory.get_member(member_b_id)
        return resolve_members(a, b, self._matrix)
