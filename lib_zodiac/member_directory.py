"""In-memory member directory consumed by the affinity engine."""

from __future__ import annotations

from collections.abc import Iterable
import logging
import threading

from lib_zodiac.errors import NotFoundError
from lib_zodiac.zodiac_types import Member


logger = logging.getLogger(__name__)


class MemberDirectory:
    """Thread-safe member lookup keyed by member id."""

    def __init__(self, members: Iterable[Member] = ()) -> None:
        self._members: dict[str, Member] = {}
        self._lock = threading.Lock()
        for member in members:
            self.add(member)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add(self, member: Member) -> None:
        """Insert or replace *member*."""
        with self._lock:
            if member.id in self._members:
                logger.debug("Replacing member %s", member.id)
            self._members[member.id] = member

    def remove(self, member_id: str) -> None:
        """Remove a member.

        Raises:
            NotFoundError: If *member_id* is unknown.
        """
        with self._lock:
            if member_id not in self._members:
                raise NotFoundError(f"Member not found with id: {member_id}")
            del self._members[member_id]

    def get_member(self, member_id: str) -> Member:
        """Return the member with *member_id*.

        Raises:
            NotFoundError: If *member_id* is unknown.
        """
        with self._lock:
            member = self._members.get(member_id)
        if member is None:
            raise NotFoundError(f"Member not found with id: {member_id}")
        return member

    def get_members(self, member_ids: Iterable[str]) -> list[Member]:
        """Return members in the order of *member_ids*.

        Raises:
            NotFoundError: If any id is unknown; lists every missing id.
        """
        ids = list(member_ids)
        with self._lock:
            found = [self._members.get(mid) for mid in ids]
        missing = [mid for mid, m in zip(ids, found) if m is None]
        if missing:
            raise NotFoundError(f"Members not found: {', '.join(missing)}")
        return [m for m in found if m is not None]

    def get_active_members(self) -> list[Member]:
        """Active members in insertion order."""
        with self._lock:
            return [m for m in self._members.values() if m.active]

    def all_members(self) -> list[Member]:
        with self._lock:
            return list(self._members.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._members)

    def __contains__(self, member_id: object) -> bool:
        with self._lock:
            return member_id in self._members
