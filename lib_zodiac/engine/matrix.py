"""Symmetric 12×12 affinity matrix over zodiac signs.

Only the 78 canonical pairs (index(sign_1) <= index(sign_2)) are stored;
lookups normalize pair order, so symmetry holds by construction.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import threading

from lib_zodiac.engine.scorer import AffinityEntry, CompatibilityLevel, score_pair
from lib_zodiac.errors import NotFoundError
from lib_zodiac.zodiac_types import SIGN_ORDER, ZodiacSign, sign_index


logger = logging.getLogger(__name__)

_PairKey = tuple[ZodiacSign, ZodiacSign]


def canonical_pair(c1: ZodiacSign, c2: ZodiacSign) -> _PairKey:
    """Return (*c1*, *c2*) ordered by the catalog index."""
    if sign_index(c1) <= sign_index(c2):
        return (c1, c2)
    return (c2, c1)


class AffinityMatrix:
    """Read-only lookup table of affinity entries.

    Create with :meth:`build`; an instance created without entries is
    considered unbuilt and every lookup raises :class:`NotFoundError`.
    """

    def __init__(self, entries: dict[_PairKey, AffinityEntry] | None = None) -> None:
        self._entries: dict[_PairKey, AffinityEntry] = dict(entries or {})

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def build(cls) -> AffinityMatrix:
        """Score every unordered sign pair once, self-pairs included."""
        entries: dict[_PairKey, AffinityEntry] = {}
        for i, c1 in enumerate(SIGN_ORDER):
            for c2 in SIGN_ORDER[i:]:
                entries[(c1, c2)] = score_pair(c1, c2)
        logger.info("Built affinity matrix with %d sign pairs", len(entries))
        return cls(entries)

    @property
    def is_built(self) -> bool:
        return bool(self._entries)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def lookup(self, c1: ZodiacSign, c2: ZodiacSign) -> AffinityEntry:
        """Return the entry for the unordered pair {*c1*, *c2*}.

        Raises:
            NotFoundError: If the matrix is unbuilt or a sign is invalid.
        """
        try:
            key = canonical_pair(c1, c2)
        except KeyError:
            raise NotFoundError(f"Compatibility not found for pair: {c1} - {c2}") from None
        entry = self._entries.get(key)
        if entry is None:
            raise NotFoundError(f"Compatibility not found for pair: {c1} - {c2}")
        return entry

    def score(self, c1: ZodiacSign, c2: ZodiacSign) -> int:
        return self.lookup(c1, c2).overall_score

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AffinityEntry]:
        return iter(self._entries.values())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def entries_for_sign(self, sign: ZodiacSign) -> list[AffinityEntry]:
        """All 12 entries involving *sign*, in catalog order of the partner."""
        return [self.lookup(sign, other) for other in SIGN_ORDER]

    def best_matches_for_sign(self, sign: ZodiacSign, limit: int = 5) -> list[AffinityEntry]:
        entries = sorted(self.entries_for_sign(sign), key=lambda e: e.overall_score, reverse=True)
        return entries[:limit]

    def high_compatibility_pairs(self, min_score: int = 80) -> list[AffinityEntry]:
        """Entries scoring at least *min_score*, best first."""
        hits = [e for e in self._entries.values() if e.overall_score >= min_score]
        return sorted(hits, key=lambda e: e.overall_score, reverse=True)

    def low_compatibility_pairs(self, max_score: int = 50) -> list[AffinityEntry]:
        """Entries scoring below *max_score*, worst first."""
        hits = [e for e in self._entries.values() if e.overall_score < max_score]
        return sorted(hits, key=lambda e: e.overall_score)

    def pairs_by_level(self, level: CompatibilityLevel) -> list[AffinityEntry]:
        hits = [e for e in self._entries.values() if e.level == level]
        return sorted(hits, key=lambda e: e.overall_score, reverse=True)


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------
_matrix: AffinityMatrix | None = None
_matrix_lock = threading.Lock()


def get_matrix() -> AffinityMatrix:
    """Return the shared matrix, building it once on first use."""
    global _matrix
    if _matrix is not None:
        return _matrix
    with _matrix_lock:
        if _matrix is None:
            _matrix = AffinityMatrix.build()
        return _matrix


def reset_matrix() -> None:
    """Drop the shared matrix so the next :func:`get_matrix` rebuilds it."""
    global _matrix
    with _matrix_lock:
        _matrix = None
