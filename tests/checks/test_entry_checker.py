"""Tests for per-entry check dispatch."""

from __future__ import annotations

from typing import List

from zimcheck.checks import EntryChecker
from zimcheck.models import EnabledChecks, LinkOccurrence
from zimcheck.redundancy import RedundancyDetector, content_hash
from zimcheck.report import CheckCategory, ErrorLogger, MessageId
from tests._fixtures.archive_builder import FakeArchive


def _walk(archive: FakeArchive, reporter: ErrorLogger, checker: EntryChecker) -> None:
    for entry in archive.iter_entries_efficiently():
        checker.check(entry)


def test_empty_content_entry_is_reported(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("A/blank", b"")
    archive.add("I/blank.png", b"", mimetype="image/png")

    _walk(archive, reporter, EntryChecker(archive, reporter, EnabledChecks.of([CheckCategory.EMPTY])))

    paths = [m.params["path"] for m in reporter.messages(CheckCategory.EMPTY)]
    assert paths == ["A/blank", "I/blank.png"]


def test_empty_check_disabled_reports_nothing(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("A/blank", b"")

    _walk(archive, reporter, EntryChecker(archive, reporter, EnabledChecks.of([])))

    assert reporter.passed(CheckCategory.EMPTY)


def test_empty_entry_outside_content_namespaces_is_ignored(
    archive: FakeArchive, reporter: ErrorLogger
) -> None:
    archive.add("-/blank.css", b"", mimetype="text/css")

    _walk(archive, reporter, EntryChecker(archive, reporter, EnabledChecks.all()))

    assert reporter.passed(CheckCategory.EMPTY)


def test_new_namespace_scheme_treats_every_entry_as_content(
    archive: FakeArchive, reporter: ErrorLogger
) -> None:
    archive.new_namespace_scheme = True
    archive.add("blank.html", b"")

    _walk(archive, reporter, EntryChecker(archive, reporter, EnabledChecks.of([CheckCategory.EMPTY])))

    assert [m.params["path"] for m in reporter.messages(CheckCategory.EMPTY)] == ["blank.html"]


def test_redirects_and_metadata_are_skipped(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add_redirect("A/alias", "A/target")
    archive.add("M/Title", b"", mimetype="text/plain")
    checker = EntryChecker(archive, reporter, EnabledChecks.all())

    _walk(archive, reporter, checker)

    assert reporter.overall_status() is True
    assert checker.stats.skipped == 2


def test_non_html_payload_is_not_fetched_without_redundancy(
    archive: FakeArchive, reporter: ErrorLogger
) -> None:
    image = archive.add("I/logo.png", b"png", mimetype="image/png")
    enabled = EnabledChecks.of([CheckCategory.EMPTY, CheckCategory.URL_INTERNAL])

    _walk(archive, reporter, EntryChecker(archive, reporter, enabled))

    assert image.item is not None and image.item.fetches == 0


def test_redundancy_records_every_non_empty_item(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("I/a.png", b"png", mimetype="image/png")
    archive.add("I/b.png", b"png", mimetype="image/png")
    archive.add("A/empty", b"")
    detector = RedundancyDetector()
    enabled = EnabledChecks.of([CheckCategory.REDUNDANT])

    _walk(archive, reporter, EntryChecker(archive, reporter, enabled, redundancy=detector))

    assert detector.bucket_count == 1
    assert detector.bucket(content_hash(b"png")) == [0, 1]


def test_html_links_are_validated(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add(
        "A/page",
        '<a href="exists">ok</a><a href="gone">bad</a><script src="https://cdn.example.org/x.js"></script>',
    )
    archive.add("A/exists", "<p>here</p>")

    _walk(archive, reporter, EntryChecker(archive, reporter, EnabledChecks.all()))

    [dangling] = reporter.messages(CheckCategory.URL_INTERNAL)
    assert dangling.message_id is MessageId.DANGLING_LINKS
    assert dangling.params["normalized_link"] == "A/gone"
    [external] = reporter.messages(CheckCategory.URL_EXTERNAL)
    assert external.params == {"link": "https://cdn.example.org/x.js", "path": "A/page"}


def test_link_checks_disabled_skip_extraction(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("A/page", '<a href="gone">bad</a>')
    calls: List[bytes] = []

    def extractor(data: bytes) -> List[LinkOccurrence]:
        calls.append(data)
        return []

    enabled = EnabledChecks.of([CheckCategory.EMPTY])
    _walk(archive, reporter, EntryChecker(archive, reporter, enabled, extractor=extractor))

    assert calls == []
    assert reporter.overall_status() is True


def test_custom_html_mimetypes(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("A/page", '<a href="gone">bad</a>', mimetype="application/xhtml+xml")
    enabled = EnabledChecks.of([CheckCategory.URL_INTERNAL])

    _walk(
        archive,
        reporter,
        EntryChecker(archive, reporter, enabled, html_mimetypes=["application/xhtml+xml"]),
    )

    assert reporter.passed(CheckCategory.URL_INTERNAL) is False


def test_dangling_header_tracks_entry_index(archive: FakeArchive, reporter: ErrorLogger) -> None:
    archive.add("A/one", '<a href="x">1</a><a href="y">2</a>')
    archive.add("A/two", '<a href="x">1</a>')
    enabled = EnabledChecks.of([CheckCategory.URL_INTERNAL])

    _walk(archive, reporter, EntryChecker(archive, reporter, enabled))

    assert [(m.message_id, m.params["path"]) for m in reporter.messages(CheckCategory.URL_INTERNAL)] == [
        (MessageId.DANGLING_LINKS, "A/one"),
        (MessageId.MORE_DANGLING_LINKS, "A/one"),
        (MessageId.DANGLING_LINKS, "A/two"),
    ]
