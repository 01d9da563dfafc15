"""Greedy high-affinity team construction.

Seed with the best-scoring pair of the pool, then repeatedly add the candidate
that maximizes the team average. No backtracking. Ties go to the candidate
found first in pool order, so results are deterministic for a given order.
"""

from __future__ import annotations

from decimal import Decimal
import logging

from lib_zodiac.engine.matrix import AffinityMatrix
from lib_zodiac.engine.team_affinity import TeamAffinityResult, aggregate_team, average_score
from lib_zodiac.errors import InvalidArgumentError
from lib_zodiac.zodiac_types import Member


logger = logging.getLogger(__name__)

_DEFAULT_WARN_PAIRS = 5000


def find_optimal_team(
    target_size: int,
    pool: list[Member],
    matrix: AffinityMatrix,
    warn_pairs: int = _DEFAULT_WARN_PAIRS,
) -> TeamAffinityResult:
    """Build a team of up to *target_size* members from *pool*.

    The result may hold fewer than *target_size* members when the pool runs
    out of candidates; callers check ``result.team_size``.

    Raises:
        InvalidArgumentError: If *target_size* < 2 or the pool has fewer
            distinct members than *target_size*.
    """
    candidates = _distinct(pool)
    if target_size < 2:
        raise InvalidArgumentError("Target team size must be at least 2")
    if len(candidates) < target_size:
        raise InvalidArgumentError("Not enough members available")

    logger.info("Finding optimal team of size %d from %d available members", target_size, len(candidates))
    pair_count = len(candidates) * (len(candidates) - 1) // 2
    if pair_count > warn_pairs:
        logger.warning("Optimizer seeding over %d pairs exceeds %d", pair_count, warn_pairs)

    selected = _best_seed_pair(candidates, matrix)
    while len(selected) < target_size:
        nxt = _best_next_member(selected, candidates, matrix)
        if nxt is None:
            logger.warning("Candidate pool exhausted at %d of %d members", len(selected), target_size)
            break
        selected.append(nxt)

    return aggregate_team(selected, matrix)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _distinct(pool: list[Member]) -> list[Member]:
    seen: set[str] = set()
    result: list[Member] = []
    for m in pool:
        if m.id not in seen:
            seen.add(m.id)
            result.append(m)
    return result


def _best_seed_pair(candidates: list[Member], matrix: AffinityMatrix) -> list[Member]:
    best_score: int | None = None
    best: list[Member] = []
    for i, m1 in enumerate(candidates):
        for m2 in candidates[i + 1:]:
            score = matrix.score(m1.sign, m2.sign)
            if best_score is None or score > best_score:
                best_score = score
                best = [m1, m2]
    return best


def _best_next_member(
    selected: list[Member],
    candidates: list[Member],
    matrix: AffinityMatrix,
) -> Member | None:
    chosen_ids = {m.id for m in selected}
    best_avg: Decimal | None = None
    best: Member | None = None
    for candidate in candidates:
        if candidate.id in chosen_ids:
            continue
        avg = average_score([*selected, candidate], matrix)
        if best_avg is None or avg > best_avg:
            best_avg = avg
            best = candidate
    return best
