"""Zodiac sign catalog for the affinity engine.

Defines the 12 signs (in canonical matrix order), the 4 elements, the 3
modalities, the sign catalog metadata and the member record the engine reads.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ZodiacSign(str, Enum):
    """The 12 profile categories. Declaration order is the matrix order."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"

    def __str__(self) -> str:
        return self.value


class Element(str, Enum):
    FIRE = "Fire"
    EARTH = "Earth"
    AIR = "Air"
    WATER = "Water"

    def __str__(self) -> str:
        return self.value


class Modality(str, Enum):
    CARDINAL = "Cardinal"
    FIXED = "Fixed"
    MUTABLE = "Mutable"

    def __str__(self) -> str:
        return self.value


SIGN_ORDER: tuple[ZodiacSign, ...] = tuple(ZodiacSign)
ELEMENT_ORDER: tuple[Element, ...] = tuple(Element)

_SIGN_INDEX: dict[ZodiacSign, int] = {s: i for i, s in enumerate(SIGN_ORDER)}

_SIGN_TO_ELEMENT: dict[ZodiacSign, Element] = {
    ZodiacSign.ARIES: Element.FIRE,
    ZodiacSign.LEO: Element.FIRE,
    ZodiacSign.SAGITTARIUS: Element.FIRE,
    ZodiacSign.TAURUS: Element.EARTH,
    ZodiacSign.VIRGO: Element.EARTH,
    ZodiacSign.CAPRICORN: Element.EARTH,
    ZodiacSign.GEMINI: Element.AIR,
    ZodiacSign.LIBRA: Element.AIR,
    ZodiacSign.AQUARIUS: Element.AIR,
    ZodiacSign.CANCER: Element.WATER,
    ZodiacSign.SCORPIO: Element.WATER,
    ZodiacSign.PISCES: Element.WATER,
}

_SIGN_TO_MODALITY: dict[ZodiacSign, Modality] = {
    ZodiacSign.ARIES: Modality.CARDINAL,
    ZodiacSign.CANCER: Modality.CARDINAL,
    ZodiacSign.LIBRA: Modality.CARDINAL,
    ZodiacSign.CAPRICORN: Modality.CARDINAL,
    ZodiacSign.TAURUS: Modality.FIXED,
    ZodiacSign.LEO: Modality.FIXED,
    ZodiacSign.SCORPIO: Modality.FIXED,
    ZodiacSign.AQUARIUS: Modality.FIXED,
    ZodiacSign.GEMINI: Modality.MUTABLE,
    ZodiacSign.VIRGO: Modality.MUTABLE,
    ZodiacSign.SAGITTARIUS: Modality.MUTABLE,
    ZodiacSign.PISCES: Modality.MUTABLE,
}

_SIGN_TO_SYMBOL: dict[ZodiacSign, str] = {
    ZodiacSign.ARIES: "♈",
    ZodiacSign.TAURUS: "♉",
    ZodiacSign.GEMINI: "♊",
    ZodiacSign.CANCER: "♋",
    ZodiacSign.LEO: "♌",
    ZodiacSign.VIRGO: "♍",
    ZodiacSign.LIBRA: "♎",
    ZodiacSign.SCORPIO: "♏",
    ZodiacSign.SAGITTARIUS: "♐",
    ZodiacSign.CAPRICORN: "♑",
    ZodiacSign.AQUARIUS: "♒",
    ZodiacSign.PISCES: "♓",
}

# (start_month, start_day, end_month, end_day)
_SIGN_DATE_RANGES: dict[ZodiacSign, tuple[int, int, int, int]] = {
    ZodiacSign.ARIES: (3, 21, 4, 19),
    ZodiacSign.TAURUS: (4, 20, 5, 20),
    ZodiacSign.GEMINI: (5, 21, 6, 20),
    ZodiacSign.CANCER: (6, 21, 7, 22),
    ZodiacSign.LEO: (7, 23, 8, 22),
    ZodiacSign.VIRGO: (8, 23, 9, 22),
    ZodiacSign.LIBRA: (9, 23, 10, 22),
    ZodiacSign.SCORPIO: (10, 23, 11, 21),
    ZodiacSign.SAGITTARIUS: (11, 22, 12, 21),
    ZodiacSign.CAPRICORN: (12, 22, 1, 19),
    ZodiacSign.AQUARIUS: (1, 20, 2, 18),
    ZodiacSign.PISCES: (2, 19, 3, 20),
}

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class DateRange(BaseModel, frozen=True):
    """Inclusive month/day span; may wrap the year boundary."""

    start_month: int = Field(ge=1, le=12)
    start_day: int = Field(ge=1, le=31)
    end_month: int = Field(ge=1, le=12)
    end_day: int = Field(ge=1, le=31)

    def contains(self, month: int, day: int) -> bool:
        start = (self.start_month, self.start_day)
        end = (self.end_month, self.end_day)
        if start <= end:
            return start <= (month, day) <= end
        # Capricorn: Dec 22 - Jan 19
        return (month, day) >= start or (month, day) <= end

    def __str__(self) -> str:
        return (
            f"{_MONTH_ABBR[self.start_month - 1]} {self.start_day} - "
            f"{_MONTH_ABBR[self.end_month - 1]} {self.end_day}"
        )


class SignProfile(BaseModel, frozen=True):
    """Static catalog record for one sign."""

    sign: ZodiacSign
    symbol: str = Field(..., min_length=1, max_length=2)
    element: Element
    modality: Modality
    date_range: DateRange


class Member(BaseModel, frozen=True):
    """An organization member as seen by the engine.

    ``element`` is derived from ``sign`` when omitted and must agree with it
    when given.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=100)
    sign: ZodiacSign
    element: Element | None = None
    active: bool = True

    @model_validator(mode="after")
    def _check_element(self) -> Member:
        expected = element_of(self.sign)
        if self.element is None:
            object.__setattr__(self, "element", expected)
        elif self.element != expected:
            raise ValueError(
                f"element {self.element} does not match sign {self.sign} (expected {expected})"
            )
        return self

    @property
    def display_name(self) -> str:
        return self.name or self.id


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
SIGN_PROFILES: dict[ZodiacSign, SignProfile] = {
    sign: SignProfile(
        sign=sign,
        symbol=_SIGN_TO_SYMBOL[sign],
        element=_SIGN_TO_ELEMENT[sign],
        modality=_SIGN_TO_MODALITY[sign],
        date_range=DateRange(
            start_month=_SIGN_DATE_RANGES[sign][0],
            start_day=_SIGN_DATE_RANGES[sign][1],
            end_month=_SIGN_DATE_RANGES[sign][2],
            end_day=_SIGN_DATE_RANGES[sign][3],
        ),
    )
    for sign in SIGN_ORDER
}


def element_of(sign: ZodiacSign) -> Element:
    """Return the element of *sign*."""
    return _SIGN_TO_ELEMENT[sign]


def modality_of(sign: ZodiacSign) -> Modality:
    return _SIGN_TO_MODALITY[sign]


def symbol_of(sign: ZodiacSign) -> str:
    return _SIGN_TO_SYMBOL[sign]


def sign_index(sign: ZodiacSign) -> int:
    """Position of *sign* in the canonical matrix order."""
    return _SIGN_INDEX[sign]


def signs_of_element(element: Element) -> list[ZodiacSign]:
    return [s for s in SIGN_ORDER if _SIGN_TO_ELEMENT[s] == element]


def sign_from_birth_date(birth_date: date) -> ZodiacSign:
    """Calculate the zodiac sign for a date of birth.

    Raises:
        ValueError: If *birth_date* is None.
    """
    if birth_date is None:
        raise ValueError("Date of birth cannot be None")
    for sign, profile in SIGN_PROFILES.items():
        if profile.date_range.contains(birth_date.month, birth_date.day):
            return sign
    # the 12 ranges cover the whole calendar
    raise ValueError(f"Unable to determine zodiac sign for date: {birth_date}")


def parse_sign(value: str | ZodiacSign) -> ZodiacSign:
    """Resolve a sign from its name, case-insensitively.

    Raises:
        ValueError: If *value* is not a zodiac sign name.
    """
    if isinstance(value, ZodiacSign):
        return value
    for sign in SIGN_ORDER:
        if sign.value.lower() == str(value).strip().lower():
            return sign
    raise ValueError(f"Unknown zodiac sign: {value!r}")
