"""Tests for redundant content detection."""

from __future__ import annotations

import io
import zlib
from typing import Dict, List

import pytest

from zimcheck.redundancy import RedundancyDetector, ResolvedEntry, content_hash, resolver_for
from zimcheck.report import CheckCategory, ErrorLogger, MessageId
from tests._fixtures.archive_builder import FakeArchive


class _Store:
    """Index resolver over a dict, counting content fetches."""

    def __init__(self, contents: Dict[int, bytes]) -> None:
        self.contents = contents
        self.fetches: List[int] = []

    def __call__(self, index: int) -> ResolvedEntry:
        self.fetches.append(index)
        return ResolvedEntry(f"A/{index}", self.contents[index])


def _record_all(detector: RedundancyDetector, contents: Dict[int, bytes]) -> None:
    for index, data in contents.items():
        detector.record(index, data)


def test_content_hash_is_adler32() -> None:
    assert content_hash(b"hello") == zlib.adler32(b"hello")


def test_identical_content_is_reported() -> None:
    contents = {0: b"same", 1: b"other", 2: b"same"}
    detector = RedundancyDetector()
    _record_all(detector, contents)

    pairs = [(p.first.path, p.second.path) for p in detector.detect(_Store(contents))]

    assert pairs == [("A/0", "A/2")]


def test_three_identical_entries_pair_with_first_only() -> None:
    contents = {0: b"dup", 1: b"dup", 2: b"dup"}
    detector = RedundancyDetector()
    _record_all(detector, contents)

    pairs = [(p.first.path, p.second.path) for p in detector.detect(_Store(contents))]

    assert pairs == [("A/0", "A/1"), ("A/0", "A/2")]


def test_hash_collision_without_equal_bytes_is_not_reported() -> None:
    contents = {0: b"left", 1: b"right"}
    detector = RedundancyDetector(hash_fn=lambda data: 42)
    _record_all(detector, contents)

    assert list(detector.detect(_Store(contents))) == []


def test_equal_bytes_in_different_buckets_are_never_compared() -> None:
    contents = {0: b"same", 1: b"same"}
    hashes = iter([1, 2])
    detector = RedundancyDetector(hash_fn=lambda data: next(hashes))
    _record_all(detector, contents)
    store = _Store(contents)

    assert list(detector.detect(store)) == []
    assert store.fetches == []


def test_non_matching_members_get_their_own_pivot_round() -> None:
    contents = {0: b"a", 1: b"b", 2: b"a", 3: b"b"}
    detector = RedundancyDetector(hash_fn=lambda data: 7)
    _record_all(detector, contents)
    store = _Store(contents)

    pairs = [(p.first.path, p.second.path) for p in detector.detect(store)]

    assert pairs == [("A/0", "A/2"), ("A/1", "A/3")]
    # pivot 0, others 1, 2, 3, then pivot 1, other 3
    assert store.fetches == [0, 1, 2, 3, 1, 3]


def test_singleton_buckets_fetch_nothing() -> None:
    contents = {0: b"a", 1: b"b"}
    detector = RedundancyDetector()
    _record_all(detector, contents)
    store = _Store(contents)

    assert list(detector.detect(store)) == []
    assert store.fetches == []


def test_recording_after_detection_is_rejected() -> None:
    detector = RedundancyDetector()
    list(detector.detect(_Store({})))

    with pytest.raises(RuntimeError):
        detector.record(0, b"late")


def test_report_records_warning_messages() -> None:
    archive = FakeArchive()
    archive.add("A/first", b"<p>copy</p>")
    archive.add("A/second", b"<p>copy</p>")
    detector = RedundancyDetector()
    for entry in archive.entries:
        detector.record(entry.get_item().index(), entry.get_item().data())
    reporter = ErrorLogger(stream=io.StringIO())

    found = detector.report(resolver_for(archive), reporter)

    assert found == 1
    [message] = reporter.messages(CheckCategory.REDUNDANT)
    assert message.message_id is MessageId.REDUNDANT_ITEMS
    assert message.expand() == "A/first and A/second"
    assert reporter.overall_status() is True
