"""Shared fixtures for engine tests."""

from collections.abc import Callable

from lib_zodiac.engine.matrix import AffinityMatrix, canonical_pair
from lib_zodiac.engine.scorer import level_for_score
from lib_zodiac.zodiac_types import ZodiacSign
import pytest


@pytest.fixture
def matrix() -> AffinityMatrix:
    return AffinityMatrix.build()


@pytest.fixture
def scored_matrix() -> Callable[[dict[tuple[ZodiacSign, ZodiacSign], int]], AffinityMatrix]:
    """Factory: the real matrix with some pair scores overridden.

    The real heuristic never scores below 45, so conflict paths are only
    reachable with injected scores.
    """

    def _make(overrides: dict[tuple[ZodiacSign, ZodiacSign], int]) -> AffinityMatrix:
        entries = {(e.sign_1, e.sign_2): e for e in AffinityMatrix.build()}
        for (c1, c2), score in overrides.items():
            key = canonical_pair(c1, c2)
            entries[key] = entries[key].model_copy(update={
                "overall_score": score,
                "conflict_potential": 100 - score,
                "level": level_for_score(score),
            })
        return AffinityMatrix(entries)

    return _make

