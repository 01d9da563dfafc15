"""Tests for lib_zodiac/engine/matrix.py."""

import threading

from lib_zodiac.engine import matrix as matrix_module
from lib_zodiac.engine.matrix import AffinityMatrix, canonical_pair, get_matrix, reset_matrix
from lib_zodiac.engine.scorer import CompatibilityLevel
from lib_zodiac.errors import NotFoundError
from lib_zodiac.zodiac_types import SIGN_ORDER, ZodiacSign
import pytest


@pytest.fixture(autouse=True)
def _fresh_shared_matrix():
    reset_matrix()
    yield
    reset_matrix()


class TestBuild:
    def test_seventy_eight_entries(self, matrix):
        # 12 self-pairs + 66 distinct pairs
        assert len(matrix) == 78
        assert matrix.is_built

    def test_symmetric(self, matrix):
        for a in SIGN_ORDER:
            for b in SIGN_ORDER:
                assert matrix.lookup(a, b) == matrix.lookup(b, a)

    def test_self_pairs(self, matrix):
        for s in SIGN_ORDER:
            assert matrix.score(s, s) == 85

    def test_scores_in_range_and_conflict_identity(self, matrix):
        for e in matrix:
            assert 0 <= e.overall_score <= 100
            assert e.conflict_potential == 100 - e.overall_score

    def test_entries_stored_in_canonical_order(self, matrix):
        for e in matrix:
            assert canonical_pair(e.sign_1, e.sign_2) == (e.sign_1, e.sign_2)

    def test_canonical_pair(self):
        assert canonical_pair(ZodiacSign.PISCES, ZodiacSign.ARIES) == (ZodiacSign.ARIES, ZodiacSign.PISCES)
        assert canonical_pair(ZodiacSign.LEO, ZodiacSign.LEO) == (ZodiacSign.LEO, ZodiacSign.LEO)


class TestLookup:
    def test_reversed_lookup_returns_canonical_entry(self, matrix):
        e = matrix.lookup(ZodiacSign.GEMINI, ZodiacSign.ARIES)
        assert (e.sign_1, e.sign_2) == (ZodiacSign.ARIES, ZodiacSign.GEMINI)
        assert e.overall_score == 92

    def test_unbuilt_matrix_raises(self):
        empty = AffinityMatrix()
        assert not empty.is_built
        with pytest.raises(NotFoundError, match="Compatibility not found for pair: Aries - Leo"):
            empty.lookup(ZodiacSign.ARIES, ZodiacSign.LEO)

    def test_invalid_sign_raises(self, matrix):
        with pytest.raises(NotFoundError):
            matrix.lookup("Ophiuchus", ZodiacSign.LEO)  # type: ignore[arg-type]

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            AffinityMatrix().score(ZodiacSign.ARIES, ZodiacSign.ARIES)


class TestQueries:
    def test_entries_for_sign(self, matrix):
        entries = matrix.entries_for_sign(ZodiacSign.VIRGO)
        assert len(entries) == 12

    def test_best_matches_for_aries(self, matrix):
        best = matrix.best_matches_for_sign(ZodiacSign.ARIES)
        scores = [e.overall_score for e in best]
        # Gemini, Libra, Aquarius at 92; Aries itself 85; Leo 78 before Sagittarius
        assert scores == [92, 92, 92, 85, 78]
        assert best[-1].sign_2 == ZodiacSign.LEO

    def test_high_compatibility_pairs(self, matrix):
        high = matrix.high_compatibility_pairs()
        # 12 self + 9 Fire/Air + 9 Earth/Water
        assert len(high) == 30
        assert high[0].overall_score == 92
        assert all(e.overall_score >= 80 for e in high)

    def test_low_compatibility_pairs(self, matrix):
        low = matrix.low_compatibility_pairs()
        # 9 Fire/Water pairs at 45
        assert len(low) == 9
        assert {e.overall_score for e in low} == {45}

    def test_pairs_by_level(self, matrix):
        assert matrix.pairs_by_level(CompatibilityLevel.DIFFICULT) == []
        good = matrix.pairs_by_level(CompatibilityLevel.GOOD)
        # 12 same-element distinct pairs at 78
        assert len(good) == 12


class TestSharedMatrix:
    def test_built_once(self):
        assert get_matrix() is get_matrix()

    def test_reset_rebuilds(self):
        first = get_matrix()
        reset_matrix()
        assert get_matrix() is not first

    def test_concurrent_first_use_builds_once(self, monkeypatch):
        calls = []
        original = AffinityMatrix.build.__func__

        def counting_build(cls):
            calls.append(1)
            return original(cls)

        monkeypatch.setattr(AffinityMatrix, "build", classmethod(counting_build))
        results = []
        threads = [threading.Thread(target=lambda: results.append(get_matrix())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
        assert matrix_module._matrix is results[0]
