"""Exceptions raised by the affinity engine."""

from __future__ import annotations


class AffinityError(Exception):
    """Base class for engine errors."""


class NotFoundError(AffinityError, LookupError):
    """A member id or sign pair does not resolve."""


class InvalidArgumentError(AffinityError, ValueError):
    """A precondition on the caller's input failed (team or pool too small)."""
