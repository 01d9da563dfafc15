"""Demo 12-member roster: one member per zodiac sign.

Used by the dashboard when no roster is supplied.
"""

from __future__ import annotations

from lib_zodiac.member_directory import MemberDirectory
from lib_zodiac.zodiac_types import Member, ZodiacSign


# ---------------------------------------------------------------------------
# 12 default members, one per sign, catalog order
# ---------------------------------------------------------------------------
_DEFAULT_MEMBERS: list[dict[str, str]] = [
    {"id": "m01", "name": "Ava Reyes", "sign": "Aries"},
    {"id": "m02", "name": "Tomas Berg", "sign": "Taurus"},
    {"id": "m03", "name": "Grace Lin", "sign": "Gemini"},
    {"id": "m04", "name": "Caleb Moore", "sign": "Cancer"},
    {"id": "m05", "name": "Leah Novak", "sign": "Leo"},
    {"id": "m06", "name": "Victor Hale", "sign": "Virgo"},
    {"id": "m07", "name": "Lina Park", "sign": "Libra"},
    {"id": "m08", "name": "Sam Ortiz", "sign": "Scorpio"},
    {"id": "m09", "name": "Sofia Grant", "sign": "Sagittarius"},
    {"id": "m10", "name": "Carlos Diaz", "sign": "Capricorn"},
    {"id": "m11", "name": "Aisha Khan", "sign": "Aquarius"},
    {"id": "m12", "name": "Pia Laurent", "sign": "Pisces"},
]

DEFAULT_ROSTER: list[Member] = [Member(**m) for m in _DEFAULT_MEMBERS]  # type: ignore[arg-type]


def create_default_directory() -> MemberDirectory:
    """A fresh directory holding the 12 default members."""
    return MemberDirectory(DEFAULT_ROSTER)


def get_all_signs() -> set[ZodiacSign]:
    """Return all signs covered by the default roster."""
    return {m.sign for m in DEFAULT_ROSTER}
