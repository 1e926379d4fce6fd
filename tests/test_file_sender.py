"""Tests for the file sender pipeline with mocked collaborators."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from lookup_cache.domain.models import Document, File
from lookup_cache.domain.utils.timestamps import add_months
from lookup_cache.file_sender import FileSender

NOW = datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)
SIGNED_CONTENT = b"\x01\x07"
CERTIFICATE = object()


@pytest.fixture
def file() -> File:
    return File(name="someFile", content=b"\x01\x02\x03")


@pytest.fixture
def cryptographer() -> MagicMock:
    mock = MagicMock()
    mock.sign.return_value = SIGNED_CONTENT
    return mock


@pytest.fixture
def sender() -> MagicMock:
    mock = MagicMock()
    mock.try_send.return_value = True
    return mock


@pytest.fixture
def recognizer() -> MagicMock:
    return MagicMock()


@pytest.fixture
def file_sender(cryptographer, sender, recognizer) -> FileSender:
    return FileSender(cryptographer, sender, recognizer, clock=lambda: NOW)


def _document(file: File, created: datetime = NOW, fmt: str = "4.0") -> Document:
    return Document(name=file.name, content=file.content, created=created, format=fmt)


@pytest.mark.parametrize("fmt", ["4.0", "3.1"])
def test_sends_when_good_format(file_sender, recognizer, sender, file, fmt):
    """Accepted formats are signed and sent."""
    recognizer.try_recognize.return_value = _document(file, fmt=fmt)

    result = file_sender.send_files([file], CERTIFICATE)

    assert result.skipped_files == []
    sender.try_send.assert_called_once_with(SIGNED_CONTENT)


@pytest.mark.parametrize("fmt", ["abracadabra", "3.0"])
def test_skips_when_bad_format(file_sender, recognizer, cryptographer, file, fmt):
    """Other formats are skipped without signing."""
    recognizer.try_recognize.return_value = _document(file, fmt=fmt)

    result = file_sender.send_files([file], CERTIFICATE)

    assert result.skipped_files == [file]
    cryptographer.sign.assert_not_called()


def test_skips_when_older_than_a_month(file_sender, recognizer, file):
    """A document created a month ago or earlier is outdated."""
    recognizer.try_recognize.return_value = _document(file, add_months(NOW, -1))

    assert file_sender.send_files([file], CERTIFICATE).skipped_files == [file]


@pytest.mark.parametrize("seconds_younger", [1, 3600, 86400, 2591999])
def test_sends_when_younger_than_a_month(
    file_sender, recognizer, file, seconds_younger
):
    """Documents inside the one-month window are sent."""
    created = add_months(NOW, -1) + timedelta(seconds=seconds_younger)
    recognizer.try_recognize.return_value = _document(file, created)

    assert file_sender.send_files([file], CERTIFICATE).skipped_files == []


def test_naive_creation_time_is_treated_as_utc(file_sender, recognizer, file):
    """Naive timestamps compare against the UTC clock."""
    created = NOW.replace(tzinfo=None) - timedelta(days=1)
    recognizer.try_recognize.return_value = _document(file, created)

    assert file_sender.send_files([file], CERTIFICATE).skipped_files == []


def test_signs_document_content_with_certificate(
    file_sender, recognizer, cryptographer, file
):
    """The recognized content and caller's certificate go to the cryptographer."""
    recognizer.try_recognize.return_value = _document(file)

    file_sender.send_files([file], CERTIFICATE)

    cryptographer.sign.assert_called_once_with(file.content, CERTIFICATE)


def test_skips_when_send_fails(file_sender, recognizer, sender, file):
    """A failed delivery skips the file."""
    recognizer.try_recognize.return_value = _document(file)
    sender.try_send.return_value = False

    assert file_sender.send_files([file], CERTIFICATE).skipped_files == [file]


def test_skips_when_not_recognized(file_sender, recognizer, sender, file, caplog):
    """Unrecognized files are skipped and logged."""
    recognizer.try_recognize.return_value = None

    with caplog.at_level(logging.INFO):
        result = file_sender.send_files([file], CERTIFICATE)

    assert result.skipped_files == [file]
    sender.try_send.assert_not_called()
    skipped = [r for r in caplog.records if r.message == "file_sender.skipped"]
    assert [r.reason for r in skipped] == ["not_recognized"]


def test_independently_sends_when_some_files_are_invalid(
    file_sender, recognizer, file
):
    """Each file is judged on its own document."""
    recognizer.try_recognize.side_effect = [
        _document(file, fmt="4.0"),
        _document(file, add_months(NOW, -1)),
        _document(file, fmt="3.0"),
    ]

    result = file_sender.send_files([file, file, file], CERTIFICATE)

    assert len(result.skipped_files) == 2


def test_independently_sends_when_some_could_not_send(
    file_sender, recognizer, sender
):
    """Only the file whose delivery failed is skipped."""
    files = [File(name=f"f{i}", content=bytes([i])) for i in range(3)]
    recognizer.try_recognize.side_effect = lambda f: _document(f)
    sender.try_send.side_effect = [True, False, True]

    result = file_sender.send_files(files, CERTIFICATE)

    assert result.skipped_files == [files[1]]


def test_empty_input(file_sender, recognizer):
    """No files means nothing skipped and no collaborator calls."""
    assert file_sender.send_files([], CERTIFICATE).skipped_files == []
    recognizer.try_recognize.assert_not_called()


def test_collaborator_errors_propagate(file_sender, recognizer, file):
    """Exceptions from collaborators are not swallowed."""
    recognizer.try_recognize.side_effect = OSError("disk gone")

    with pytest.raises(OSError):
        file_sender.send_files([file], CERTIFICATE)
