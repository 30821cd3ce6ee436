"""Per-entry dispatch of the content checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from ..archive import Archive, Entry
from ..config import DEFAULT_HTML_MIMETYPES
from ..links import LinkValidator, check_external_links, extract_links
from ..logging import get_logger
from ..models import CONTENT_NAMESPACES, METADATA_NAMESPACE, EnabledChecks, LinkOccurrence, entry_namespace
from ..redundancy import RedundancyDetector
from ..report import CheckCategory, ErrorLogger, MessageId

LinkExtractor = Callable[[bytes], List[LinkOccurrence]]


@dataclass
class EntryStats:
    """Counters kept across the walk, logged once it finishes."""

    walked: int = 0
    skipped: int = 0
    empty: int = 0
    html: int = 0


class EntryChecker:
    """Runs the enabled content checks on one walked entry at a time."""

    def __init__(
        self,
        archive: Archive,
        reporter: ErrorLogger,
        enabled: EnabledChecks,
        *,
        redundancy: Optional[RedundancyDetector] = None,
        link_validator: Optional[LinkValidator] = None,
        html_mimetypes: Iterable[str] = DEFAULT_HTML_MIMETYPES,
        extractor: LinkExtractor = extract_links,
    ) -> None:
        self.archive = archive
        self.reporter = reporter
        self.enabled = enabled
        self.redundancy = redundancy
        if self.redundancy is None and enabled.is_enabled(CheckCategory.REDUNDANT):
            self.redundancy = RedundancyDetector()
        self.link_validator = link_validator or LinkValidator(reporter)
        self.html_mimetypes = frozenset(html_mimetypes)
        self.extractor = extractor
        self.stats = EntryStats()
        self._new_namespace_scheme = archive.uses_new_namespace_scheme()
        self.logger = get_logger("entries")

    def check(self, entry: Entry) -> None:
        self.stats.walked += 1
        path = entry.path
        namespace = entry_namespace(path, new_namespace_scheme=self._new_namespace_scheme)
        if entry.is_redirect() or namespace == METADATA_NAMESPACE:
            self.stats.skipped += 1
            return

        item = entry.get_item()
        size = item.size()
        if (
            self.enabled.is_enabled(CheckCategory.EMPTY)
            and namespace in CONTENT_NAMESPACES
            and size == 0
        ):
            self.stats.empty += 1
            self.reporter.record_failure(MessageId.EMPTY_ENTRY, {"path": path})

        if size == 0:
            return

        is_html = item.mimetype() in self.html_mimetypes
        detector = self.redundancy if self.enabled.is_enabled(CheckCategory.REDUNDANT) else None
        data = b""
        if detector is not None or is_html:
            data = item.data()

        if detector is not None:
            detector.record(item.index(), data)

        if not is_html:
            return
        self.stats.html += 1

        links: Sequence[LinkOccurrence] = []
        if self.enabled.any_enabled(CheckCategory.URL_INTERNAL, CheckCategory.URL_EXTERNAL):
            links = self.extractor(data)

        if self.enabled.is_enabled(CheckCategory.URL_INTERNAL):
            self.link_validator.validate(path, item.index(), links, self.archive.has_entry_by_path)

        if self.enabled.is_enabled(CheckCategory.URL_EXTERNAL):
            check_external_links(path, links, self.reporter)


__all__ = ["EntryChecker", "EntryStats"]
