"""Pytest configuration for test suite.

Ensures the project root is on ``sys.path`` so imports like
``import lookup_cache`` resolve correctly regardless of the working directory
pytest chooses, and provides the thing service test double shared by the
cache tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict
from unittest.mock import MagicMock

import pytest


def _ensure_project_root_on_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        # Prepend to prefer local sources over site-packages
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_syspath()

from lookup_cache.domain.models import Thing  # noqa: E402
from lookup_cache.services import Found, NotFound  # noqa: E402

THING_ID_1 = "TheDress"
THING_ID_2 = "CoolBoots"


@pytest.fixture
def things() -> Dict[str, Thing]:
    """Things known to the fake service."""
    return {
        THING_ID_1: Thing(thing_id=THING_ID_1, name="The Dress"),
        THING_ID_2: Thing(thing_id=THING_ID_2, name="Cool Boots"),
    }


@pytest.fixture
def thing_service(things: Dict[str, Thing]) -> MagicMock:
    """Fake thing service answering from ``things``.

    Tests may reassign ``try_read.side_effect`` to script other outcomes.
    """
    service = MagicMock()
    service.try_read.side_effect = lambda thing_id: (
        Found(things[thing_id]) if thing_id in things else NotFound("not_found")
    )
    return service

