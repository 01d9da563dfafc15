"""Zodiac affinity matrix and team optimization library."""

from .affinity_service import AffinityService
from .errors import AffinityError, InvalidArgumentError, NotFoundError
from .member_directory import MemberDirectory
from .zodiac_types import Element, Member, ZodiacSign

__all__ = [
    "AffinityError",
    "AffinityService",
    "Element",
    "InvalidArgumentError",
    "Member",
    "MemberDirectory",
    "NotFoundError",
    "ZodiacSign",
]
