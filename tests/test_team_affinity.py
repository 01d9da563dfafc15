"""Tests for lib_zodiac/engine/team_affinity.py."""

from decimal import Decimal

from lib_zodiac.default_roster import DEFAULT_ROSTER
from lib_zodiac.engine.scorer import CompatibilityLevel
from lib_zodiac.engine.team_affinity import (
    aggregate_team,
    average_score,
    element_histogram,
    find_best_member_pairs,
)
from lib_zodiac.errors import InvalidArgumentError
from lib_zodiac.zodiac_types import Element, Member, ZodiacSign
import pytest


def _m(member_id: str, sign: ZodiacSign) -> Member:
    return Member(id=member_id, name=member_id.upper(), sign=sign)


def _four_elements() -> list[Member]:
    return [
        _m("m1", ZodiacSign.ARIES),
        _m("m2", ZodiacSign.TAURUS),
        _m("m3", ZodiacSign.GEMINI),
        _m("m4", ZodiacSign.CANCER),
    ]


class TestAverageScore:
    def test_same_sign_pair(self, matrix):
        team = [_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.ARIES)]
        assert average_score(team, matrix) == Decimal("85.00")

    def test_two_decimal_places(self, matrix):
        team = [_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.ARIES), _m("c", ZodiacSign.GEMINI)]
        # (85 + 92 + 92) / 3 = 89.666...
        assert average_score(team, matrix) == Decimal("89.67")

    def test_rounds_half_up(self, matrix):
        team = [_m(f"a{i}", ZodiacSign.ARIES) for i in range(15)] + [_m("leo", ZodiacSign.LEO)]
        # (105 * 85 + 15 * 78) / 120 = 84.125
        assert average_score(team, matrix) == Decimal("84.13")

    @pytest.mark.parametrize("size", [0, 1])
    def test_too_small(self, matrix, size):
        with pytest.raises(InvalidArgumentError, match="at least 2 members"):
            average_score([_m("a", ZodiacSign.LEO)][:size], matrix)


class TestElementHistogram:
    def test_all_elements_always_present(self):
        counts = element_histogram([_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.LEO)])
        assert counts == {Element.FIRE: 2, Element.EARTH: 0, Element.AIR: 0, Element.WATER: 0}

    def test_empty(self):
        assert set(element_histogram([]).values()) == {0}


class TestAggregateTeam:
    def test_same_sign_pair(self, matrix):
        result = aggregate_team([_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.ARIES)], matrix)
        assert result.average_score == Decimal("85.00")
        assert result.level == CompatibilityLevel.EXCELLENT
        assert result.missing_elements == [Element.EARTH, Element.AIR, Element.WATER]
        assert not result.is_balanced

    def test_balanced_team(self, matrix):
        result = aggregate_team(_four_elements(), matrix)
        # 60 + 92 + 45 + 55 + 90 + 60 = 402; 402 / 6 = 67
        assert result.average_score == Decimal("67.00")
        assert result.level == CompatibilityLevel.GOOD
        assert result.team_size == 4
        assert len(result.pairs) == 6
        assert result.is_balanced
        assert result.conflicts == []

    def test_best_pairs_stable_on_ties(self, matrix):
        result = aggregate_team(_four_elements(), matrix)
        best = [(p.member_a_id, p.member_b_id, p.score) for p in result.best_pairs]
        # two pairs score 60; the first discovered wins
        assert best == [("m1", "m3", 92), ("m2", "m4", 90), ("m1", "m2", 60)]

    def test_best_pairs_capped_at_pair_count(self, matrix):
        result = aggregate_team([_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.LEO)], matrix)
        assert len(result.best_pairs) == 1

    def test_insights_balanced(self, matrix):
        insights = aggregate_team(_four_elements(), matrix).insights
        assert len(insights) == 3
        assert "Good team compatibility" in insights[0]
        assert "Perfect element balance" in insights[1]
        assert "No significant conflicts" in insights[2]

    def test_insights_limited_diversity(self, matrix):
        insights = aggregate_team([_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.ARIES)], matrix).insights
        assert "Excellent team compatibility" in insights[0]
        assert "Limited element diversity" in insights[1]

    def test_insights_one_missing_element(self, matrix):
        team = [_m("a", ZodiacSign.ARIES), _m("b", ZodiacSign.TAURUS), _m("c", ZodiacSign.GEMINI)]
        assert "Good element diversity" in aggregate_team(team, matrix).insights[1]

    def test_too_small(self, matrix):
        with pytest.raises(InvalidArgumentError):
            aggregate_team([_m("a", ZodiacSign.ARIES)], matrix)


class TestConflictThreshold:
    @pytest.mark.parametrize("score,flagged", [(39, True), (40, False), (41, False)])
    def test_boundary(self, scored_matrix, score, flagged):
        matrix = scored_matrix({(ZodiacSign.ARIES, ZodiacSign.CANCER): score})
        result = aggregate_team([_m("a", ZodiacSign.ARIES), _m("c", ZodiacSign.CANCER)], matrix)
        assert bool(result.conflicts) is flagged

    def test_conflict_insight(self, scored_matrix):
        matrix = scored_matrix({(ZodiacSign.ARIES, ZodiacSign.CANCER): 20})
        result = aggregate_team([_m("a", ZodiacSign.ARIES), _m("c", ZodiacSign.CANCER)], matrix)
        assert result.level == CompatibilityLevel.DIFFICULT
        assert "1 potential conflict pair(s)" in result.insights[2]
        assert "careful management" in result.insights[0]


class TestBestMemberPairs:
    def test_default_roster_top_three(self, matrix):
        pairs = find_best_member_pairs(DEFAULT_ROSTER, matrix, limit=3)
        # Aries (m01) with Gemini, Libra, Aquarius are the first 92s found
        assert [(p.member_a_id, p.member_b_id) for p in pairs] == [
            ("m01", "m03"), ("m01", "m07"), ("m01", "m11"),
        ]
        assert all(p.score == 92 for p in pairs)
        assert pairs[0].best_for.startswith("Creative projects")

    def test_limit(self, matrix):
        assert len(find_best_member_pairs(DEFAULT_ROSTER, matrix, limit=10)) == 10
        # 66 pairs available
        assert len(find_best_member_pairs(DEFAULT_ROSTER, matrix, limit=100)) == 66

    def test_fewer_than_two_members(self, matrix):
        assert find_best_member_pairs(DEFAULT_ROSTER[:1], matrix) == []
