"""Lookup service interfaces and read results.

A lookup service resolves a key to a value and may fail. Every failure is
reported as a :class:`NotFound` result rather than an exception, so callers
only ever branch on the result variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, Protocol, TypeVar, Union

from ..domain.models import Thing

K = TypeVar("K", contravariant=True)
V = TypeVar("V")
V_co = TypeVar("V_co", covariant=True)


@dataclass(frozen=True)
class Found(Generic[V]):
    """Successful read carrying the resolved value."""

    value: V


@dataclass(frozen=True)
class NotFound:
    """Failed read.

    Attributes
    ----------
    reason: Optional[str]
        Diagnostic tag for logs (e.g., "not_found", "unavailable"). Callers
        must not branch on it.
    """

    reason: Optional[str] = None


ReadResult = Union[Found[V], NotFound]


class LookupService(Protocol[K, V_co]):
    """Protocol for authoritative key to value resolution."""

    def try_read(self, key: K) -> Union[Found[V_co], NotFound]:
        """Resolve `key`, returning ``Found(value)`` or ``NotFound``."""
        raise NotImplementedError


class ThingService(Protocol):
    """Lookup service resolving thing identifiers to :class:`Thing` records."""

    def try_read(self, thing_id: str) -> Union[Found[Thing], NotFound]:
        """Resolve `thing_id`, returning ``Found(thing)`` or ``NotFound``."""
        raise NotImplementedError


__all__ = [
    "Found",
    "LookupService",
    "NotFound",
    "ReadResult",
    "ThingService",
]
