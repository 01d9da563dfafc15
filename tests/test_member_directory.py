"""Tests for lib_zodiac/member_directory.py and lib_zodiac/engine/resolver.py."""

from lib_zodiac.engine.resolver import MemberAffinityResolver, resolve_members
from lib_zodiac.errors import NotFoundError
from lib_zodiac.member_directory import MemberDirectory
from lib_zodiac.zodiac_types import Member, ZodiacSign
import pytest


def _m(member_id: str, sign: ZodiacSign, active: bool = True) -> Member:
    return Member(id=member_id, name=member_id.upper(), sign=sign, active=active)


@pytest.fixture
def directory() -> MemberDirectory:
    return MemberDirectory([
        _m("a", ZodiacSign.ARIES),
        _m("b", ZodiacSign.GEMINI),
        _m("c", ZodiacSign.CANCER, active=False),
    ])


class TestMemberDirectory:
    def test_get_member(self, directory):
        assert directory.get_member("b").sign == ZodiacSign.GEMINI

    def test_unknown_member(self, directory):
        with pytest.raises(NotFoundError, match="Member not found with id: zz"):
            directory.get_member("zz")

    def test_get_members_keeps_order(self, directory):
        assert [m.id for m in directory.get_members(["c", "a"])] == ["c", "a"]

    def test_get_members_lists_every_missing_id(self, directory):
        with pytest.raises(NotFoundError, match="x, y"):
            directory.get_members(["a", "x", "y"])

    def test_active_members(self, directory):
        assert [m.id for m in directory.get_active_members()] == ["a", "b"]
        assert len(directory.all_members()) == 3

    def test_add_replaces(self, directory):
        directory.add(_m("a", ZodiacSign.LEO))
        assert len(directory) == 3
        assert directory.get_member("a").sign == ZodiacSign.LEO

    def test_remove(self, directory):
        directory.remove("a")
        assert "a" not in directory
        with pytest.raises(NotFoundError):
            directory.remove("a")


class TestResolver:
    def test_resolve_by_id(self, directory, matrix):
        entry = MemberAffinityResolver(directory, matrix).resolve("a", "b")
        assert entry.overall_score == 92

    def test_order_does_not_matter(self, directory, matrix):
        resolver = MemberAffinityResolver(directory, matrix)
        assert resolver.resolve("a", "c") == resolver.resolve("c", "a")

    def test_inactive_members_still_resolve(self, directory, matrix):
        assert MemberAffinityResolver(directory, matrix).resolve("a", "c").overall_score == 45

    def test_unknown_id(self, directory, matrix):
        with pytest.raises(NotFoundError):
            MemberAffinityResolver(directory, matrix).resolve("a", "nope")

    def test_resolve_members(self, matrix):
        e = resolve_members(_m("x", ZodiacSign.TAURUS), _m("y", ZodiacSign.TAURUS), matrix)
        assert e.overall_score == 85
