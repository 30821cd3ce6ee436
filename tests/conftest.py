from __future__ import annotations

import io

import pytest

from tests._fixtures.archive_builder import FakeArchive, healthy_archive
from zimcheck.report import ErrorLogger


@pytest.fixture
def archive() -> FakeArchive:
    """Provide an empty in-memory archive."""
    return FakeArchive()


@pytest.fixture
def healthy() -> FakeArchive:
    """Provide an archive that passes every check."""
    return healthy_archive()


@pytest.fixture
def reporter() -> ErrorLogger:
    """Provide a text-mode report writing to an in-memory stream."""
    return ErrorLogger(stream=io.StringIO())
