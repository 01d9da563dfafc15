"""Tests for lib_zodiac/default_roster.py."""

from lib_zodiac.default_roster import DEFAULT_ROSTER, create_default_directory, get_all_signs
from lib_zodiac.zodiac_types import SIGN_ORDER, Element, Member, ZodiacSign


class TestDefaultRoster:
    def test_twelve_members(self):
        assert len(DEFAULT_ROSTER) == 12

    def test_unique_ids(self):
        ids = [m.id for m in DEFAULT_ROSTER]
        assert len(set(ids)) == len(ids)

    def test_one_member_per_sign_in_catalog_order(self):
        assert [m.sign for m in DEFAULT_ROSTER] == list(SIGN_ORDER)
        assert get_all_signs() == set(SIGN_ORDER)

    def test_elements_derived(self):
        assert sum(1 for m in DEFAULT_ROSTER if m.element == Element.WATER) == 3

    def test_all_active(self):
        assert all(m.active for m in DEFAULT_ROSTER)


class TestCreateDefaultDirectory:
    def test_holds_roster(self):
        directory = create_default_directory()
        assert len(directory) == 12
        assert directory.get_member("m01").name == "Ava Reyes"

    def test_instances_independent(self):
        first = create_default_directory()
        second = create_default_directory()
        first.add(Member(id="extra", sign=ZodiacSign.LEO))
        assert "extra" not in second
