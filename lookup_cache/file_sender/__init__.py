"""File sending pipeline and its collaborator interfaces.

Collaborators are protocols only: recognition, signing and transport are
supplied by the caller.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ..domain.models import Document, File
from .sender import ACCEPTED_FORMATS, FileSender, SendResult


class Recognizer(Protocol):
    """Turns a raw file into a document."""

    def try_recognize(self, file: File) -> Optional[Document]:
        """Return the recognized document, or None if the file is unknown."""
        raise NotImplementedError


class Cryptographer(Protocol):
    """Signs document content."""

    def sign(self, content: bytes, certificate: Any) -> bytes:
        """Return `content` signed with `certificate`."""
        raise NotImplementedError


class Sender(Protocol):
    """Delivers signed payloads."""

    def try_send(self, content: bytes) -> bool:
        """Send `content`; return False if delivery failed."""
        raise NotImplementedError


__all__ = [
    "ACCEPTED_FORMATS",
    "Cryptographer",
    "FileSender",
    "Recognizer",
    "SendResult",
    "Sender",
]
