"""Domain data model shared by the cache and the file sender.

These Pydantic models are the values that flow through the lookup services
and the file sending pipeline. They carry no behavior; collaborators decide
what a thing or document means.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Thing(BaseModel):
    """Opaque record resolved by a lookup service.

    Attributes
    ----------
    thing_id: str
        Identifier the thing is looked up by.
    name: Optional[str]
        Optional human-readable name.
    attributes: Dict[str, str]
        Optional free-form attributes reported by the service.
    """

    model_config = ConfigDict(frozen=True)

    thing_id: str = Field(..., description="Identifier used as cache key")
    name: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)


class File(BaseModel):
    """A named blob submitted for sending.

    Attributes
    ----------
    name: str
        File name.
    content: bytes
        Raw file content.
    """

    name: str
    content: bytes


class Document(BaseModel):
    """A file after recognition.

    Attributes
    ----------
    name: str
        Name of the source file.
    content: bytes
        Payload to be signed and sent.
    created: datetime
        Creation timestamp; naive values are treated as UTC.
    format: str
        Document format version (e.g., "4.0").
    """

    name: str
    content: bytes
    created: datetime
    format: str
