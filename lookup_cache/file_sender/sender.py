"""File sender.

Recognizes, validates, signs and sends each file in turn, collecting the
files that fail any stage.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..domain.models import Document, File
from ..domain.utils.timestamps import add_months, ensure_utc

if TYPE_CHECKING:
    from . import Cryptographer, Recognizer, Sender

logger = logging.getLogger(__name__)

ACCEPTED_FORMATS: FrozenSet[str] = frozenset({"4.0", "3.1"})
MAX_DOCUMENT_AGE_MONTHS = 1


class SendResult(BaseModel):
    """Outcome of :meth:`FileSender.send_files`.

    Attributes
    ----------
    skipped_files: List[File]
        Files that were not sent, in input order.
    """

    skipped_files: List[File] = Field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FileSender:
    """Sends files that are recognized, in an accepted format and recent.

    Parameters
    ----------
    cryptographer: Cryptographer
        Signs document content with the caller's certificate.
    sender: Sender
        Delivers signed content.
    recognizer: Recognizer
        Turns files into documents.
    clock: Optional[Callable[[], datetime]]
        Source of the current time; defaults to UTC now.
    """

    def __init__(
        self,
        cryptographer: Cryptographer,
        sender: Sender,
        recognizer: Recognizer,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._cryptographer = cryptographer
        self._sender = sender
        self._recognizer = recognizer
        self._clock = clock or _utcnow

    def send_files(self, files: Sequence[File], certificate: Any) -> SendResult:
        """Send every file independently and report the skipped ones.

        Parameters
        ----------
        files: Sequence[File]
            Files to send, processed in order.
        certificate: Any
            Passed through unchanged to the cryptographer.

        Returns
        -------
        SendResult
            Files that failed recognition, validation or sending.
        """
        skipped = [file for file in files if not self._try_send_file(file, certificate)]
        logger.info(
            "file_sender.done",
            extra={"total": len(files), "skipped": len(skipped)},
        )
        return SendResult(skipped_files=skipped)

    def _try_send_file(self, file: File, certificate: Any) -> bool:
        document = self._recognizer.try_recognize(file)
        if document is None:
            return self._skip(file, "not_recognized")
        if not self._check_format(document):
            return self._skip(file, "bad_format")
        if not self._check_actual(document):
            return self._skip(file, "outdated")
        signed = self._cryptographer.sign(document.content, certificate)
        if not self._sender.try_send(signed):
            return self._skip(file, "send_failed")
        return True

    @staticmethod
    def _check_format(document: Document) -> bool:
        return document.format in ACCEPTED_FORMATS

    def _check_actual(self, document: Document) -> bool:
        expires = add_months(ensure_utc(document.created), MAX_DOCUMENT_AGE_MONTHS)
        return expires > ensure_utc(self._clock())

    @staticmethod
    def _skip(file: File, reason: str) -> bool:
        logger.info("file_sender.skipped", extra={"file": file.name, "reason": reason})
        return False
