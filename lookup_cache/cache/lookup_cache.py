"""Read-through lookup cache.

:class:`LookupCache` sits in front of a lookup service and remembers every
successful read forever. Failed reads are never remembered, so the next
request for the same key goes back to the service.

Per key there are two states, unknown and cached. A key becomes cached on
its first successful service read and never leaves that state: there is no
invalidation, update or eviction.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from ..domain.models import Thing
from ..services import Found, LookupService
from ..utils.cache import Store

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheStats(BaseModel):
    """Counters describing how a cache has been used.

    Attributes
    ----------
    hits: int
        Requests answered from the store.
    misses: int
        Requests that had to consult the service.
    service_calls: int
        Calls made to the service (equals ``misses``).
    failures: int
        Service calls that returned ``NotFound``.
    size: int
        Number of cached keys.
    """

    hits: int = 0
    misses: int = 0
    service_calls: int = 0
    failures: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Share of requests answered from the store."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class LookupCache(Generic[K, V]):
    """Read-through cache over a lookup service.

    Parameters
    ----------
    service: LookupService
        Collaborator that resolves keys; its ``try_read`` returns ``Found``
        or ``NotFound``.
    store: Optional[Store]
        Backing store, created empty when omitted. May be shared or
        pre-populated; it is insert-only, so a cached entry cannot be
        replaced through it.
    """

    def __init__(
        self, service: LookupService[K, V], store: Optional[Store[K, V]] = None
    ) -> None:
        self._service = service
        self._store: Store[K, V] = store if store is not None else Store()
        self._hits = 0
        self._misses = 0
        self._failures = 0

    def get(self, key: K) -> Optional[V]:
        """Return the value for `key`, consulting the service on a miss.

        A cached key is answered without calling the service. On a miss the
        service is called exactly once; a ``Found`` value is stored and
        returned, a ``NotFound`` returns ``None`` and stores nothing.
        Exceptions raised by the service propagate and store nothing.
        """
        if key in self._store:
            self._hits += 1
            logger.debug("lookup_cache.hit", extra={"key": key})
            return self._store.get(key)

        self._misses += 1
        logger.debug("lookup_cache.miss", extra={"key": key})
        result = self._service.try_read(key)
        if isinstance(result, Found):
            if key not in self._store:
                logger.debug("lookup_cache.stored", extra={"key": key})
            return self._store.setdefault(key, result.value)

        self._failures += 1
        logger.info(
            "lookup_cache.not_found",
            extra={"key": key, "reason": getattr(result, "reason", None)},
        )
        return None

    @property
    def stats(self) -> CacheStats:
        """Snapshot of the usage counters."""
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            service_calls=self._misses,
            failures=self._failures,
            size=len(self._store),
        )

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


class ThingCache(LookupCache[str, Thing]):
    """Cache of :class:`Thing` records keyed by ``thing_id``."""


class SynchronizedLookupCache(LookupCache[K, V]):
    """Thread-safe variant of :class:`LookupCache`.

    A single lock guards the store and the counters. It is never held while
    the service runs, so concurrent misses on the same key each call the
    service. When several of those calls succeed, the first stored value
    wins and every caller receives it.
    """

    def __init__(
        self, service: LookupService[K, V], store: Optional[Store[K, V]] = None
    ) -> None:
        super().__init__(service, store)
        self._lock = threading.Lock()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            if key in self._store:
                self._hits += 1
                logger.debug("lookup_cache.hit", extra={"key": key})
                return self._store.get(key)
            self._misses += 1

        logger.debug("lookup_cache.miss", extra={"key": key})
        result = self._service.try_read(key)

        with self._lock:
            if isinstance(result, Found):
                if key not in self._store:
                    logger.debug("lookup_cache.stored", extra={"key": key})
                return self._store.setdefault(key, result.value)
            self._failures += 1

        logger.info(
            "lookup_cache.not_found",
            extra={"key": key, "reason": getattr(result, "reason", None)},
        )
        return None

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return super().stats
