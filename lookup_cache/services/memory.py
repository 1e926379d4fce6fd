"""In-memory thing service.

Resolves things from a dictionary held by the service. Useful for local runs
and as a seedable backend configured from a JSON file.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Union

from ..domain.models import Thing
from . import Found, NotFound

logger = logging.getLogger(__name__)


class InMemoryThingService:
    """Dictionary-backed :class:`~lookup_cache.services.ThingService`.

    Parameters
    ----------
    things: Optional[Iterable[Thing]]
        Initial things, indexed by ``thing_id``.
    """

    def __init__(self, things: Optional[Iterable[Thing]] = None) -> None:
        self._things: Dict[str, Thing] = {}
        for thing in things or ():
            self.add(thing)

    def add(self, thing: Thing) -> None:
        """Register or replace a thing under its ``thing_id``."""
        self._things[thing.thing_id] = thing

    def try_read(self, thing_id: str) -> Union[Found[Thing], NotFound]:
        thing = self._things.get(thing_id)
        if thing is None:
            logger.debug("thing_service.memory.not_found", extra={"thing_id": thing_id})
            return NotFound("not_found")
        return Found(thing)

    def __len__(self) -> int:
        return len(self._things)
