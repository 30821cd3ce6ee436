"""Internal and external link validation for a single HTML entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..models import LinkOccurrence
from ..report import CheckCategory, ErrorLogger, MessageId
from .normalizer import OutOfBounds, normalize

ExistsFn = Callable[[str], bool]


@dataclass
class DanglingGroup:
    """Original link strings that all resolve to one missing target."""

    normalized: str
    links: List[str] = field(default_factory=list)

    def formatted_links(self) -> str:
        return "".join(f"- {link}\n" for link in self.links)


@dataclass
class ValidationOutcome:
    """What the internal link check found in one entry."""

    empty_links: int = 0
    out_of_bounds: List[OutOfBounds] = field(default_factory=list)
    groups: Dict[str, List[str]] = field(default_factory=dict)
    dangling: List[DanglingGroup] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.empty_links or self.out_of_bounds or self.dangling)


def _is_same_page(link: str) -> bool:
    return link.startswith(("#", "?"))


class LinkValidator:
    """Checks internal links against the archive path namespace.

    The validator lives for a whole walk: it remembers the index of the last
    entry that produced a dangling-link report. A ``DANGLING_LINKS`` header
    message starts only when that index changes; further missing targets of
    the same entry are reported as ``MORE_DANGLING_LINKS``, one per target.
    Coalescing depends on walk order and never merges two entries that share
    a missing target.
    """

    def __init__(self, reporter: ErrorLogger) -> None:
        self.reporter = reporter
        self._previous_index: Optional[int] = None

    def validate(
        self,
        entry_path: str,
        entry_index: int,
        links: Iterable[LinkOccurrence],
        exists: ExistsFn,
    ) -> ValidationOutcome:
        outcome = ValidationOutcome()
        for occurrence in links:
            if not occurrence.is_internal or _is_same_page(occurrence.link):
                continue
            if not occurrence.link:
                outcome.empty_links += 1
                continue
            resolved = normalize(occurrence.link, entry_path)
            if isinstance(resolved, OutOfBounds):
                outcome.out_of_bounds.append(resolved)
                self.reporter.record_failure(
                    MessageId.OUTOFBOUNDS_LINK, {"link": occurrence.link, "path": entry_path}
                )
                continue
            outcome.groups.setdefault(resolved, []).append(occurrence.link)

        if outcome.empty_links:
            self.reporter.record_failure(
                MessageId.EMPTY_LINKS, {"count": outcome.empty_links, "path": entry_path}
            )

        for target, originals in outcome.groups.items():
            if exists(target):
                continue
            group = DanglingGroup(normalized=target, links=list(originals))
            outcome.dangling.append(group)
            self._report_dangling(entry_path, entry_index, group)
        return outcome

    def _report_dangling(self, entry_path: str, entry_index: int, group: DanglingGroup) -> None:
        message_id = MessageId.DANGLING_LINKS
        if self._previous_index == entry_index:
            message_id = MessageId.MORE_DANGLING_LINKS
        self._previous_index = entry_index
        self.reporter.record_failure(
            message_id,
            {
                "path": entry_path,
                "normalized_link": group.normalized,
                "links": group.formatted_links(),
            },
        )
        self.reporter.force_fail(CheckCategory.URL_INTERNAL)


def find_external_dependency(links: Sequence[LinkOccurrence]) -> Optional[LinkOccurrence]:
    """Return the first external link loaded through a ``src`` attribute."""
    for occurrence in links:
        if occurrence.attribute == "src" and occurrence.is_external:
            return occurrence
    return None


def check_external_links(
    entry_path: str, links: Sequence[LinkOccurrence], reporter: ErrorLogger
) -> Optional[LinkOccurrence]:
    """Report at most one external dependency for an entry."""
    occurrence = find_external_dependency(links)
    if occurrence is not None:
        reporter.record_failure(
            MessageId.EXTERNAL_LINK, {"link": occurrence.link, "path": entry_path}
        )
    return occurrence


__all__ = [
    "DanglingGroup",
    "LinkValidator",
    "ValidationOutcome",
    "check_external_links",
    "find_external_dependency",
]
