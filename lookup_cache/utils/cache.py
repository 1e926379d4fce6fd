"""Unbounded key/value store utility.

This module provides a thin, typed wrapper over :class:`cachetools.Cache`
with a minimal API for `get`/`setdefault`/membership. The wrapper isolates
the dependency and offers no way to update or remove an entry once stored.

The store is created with an infinite ``maxsize``: entries are never evicted
and live for as long as the store does.
"""

from __future__ import annotations

import math
from collections.abc import Hashable
from typing import Generic, Iterator, Optional, TypeVar

from cachetools import Cache  # type: ignore[import-untyped]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Store(Generic[K, V]):
    """Simple unbounded, insert-only store.

    There is no update or delete operation; the first value stored for a key
    stays for the lifetime of the store.
    """

    def __init__(self) -> None:
        self._cache: Cache[K, V] = Cache(maxsize=math.inf)

    def get(self, key: K) -> Optional[V]:
        """Return value for `key` or None if missing."""
        return self._cache.get(key)

    def setdefault(self, key: K, value: V) -> V:
        """Insert `value` unless `key` is present; return the stored value."""
        if key in self._cache:
            return self._cache[key]
        self._cache[key] = value
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __iter__(self) -> Iterator[K]:
        return iter(self._cache)
