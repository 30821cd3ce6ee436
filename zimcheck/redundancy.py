"""Detection of entries with byte-identical content."""

from __future__ import annotations

import zlib
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterator, List, NamedTuple

from .archive import Archive
from .logging import get_logger
from .report import ErrorLogger, MessageId

HashFn = Callable[[bytes], int]


class ResolvedEntry(NamedTuple):
    """What the comparison phase needs to know about an entry index."""

    path: str
    content: bytes


ResolveFn = Callable[[int], ResolvedEntry]


@dataclass(frozen=True)
class RedundantPair:
    first: ResolvedEntry
    second: ResolvedEntry


def content_hash(data: bytes) -> int:
    """Adler-32 checksum used to bucket entries before comparing bytes."""
    return zlib.adler32(data) & 0xFFFFFFFF


class RedundancyDetector:
    """Two-phase duplicate finder.

    :meth:`record` buckets entry indices by content hash during the main walk.
    :meth:`detect` runs once the walk is complete and compares bytes only
    inside a bucket, so equal content under different hashes is never
    compared. The hash is trusted to put equal content in the same bucket.
    """

    def __init__(self, hash_fn: HashFn = content_hash) -> None:
        self._hash_fn = hash_fn
        self._buckets: Dict[int, List[int]] = {}
        self._detected = False
        self.logger = get_logger("redundancy")

    def record(self, entry_index: int, data: bytes) -> int:
        digest = self._hash_fn(data)
        self.record_hash(entry_index, digest)
        return digest

    def record_hash(self, entry_index: int, digest: int) -> None:
        if self._detected:
            raise RuntimeError("Cannot record entries after detection has run")
        self._buckets.setdefault(digest, []).append(entry_index)

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def bucket(self, digest: int) -> List[int]:
        return list(self._buckets.get(digest, []))

    def detect(self, resolve: ResolveFn) -> Iterator[RedundantPair]:
        """Yield ``(pivot, other)`` pairs of byte-identical entries."""
        self._detected = True
        buckets, self._buckets = self._buckets, {}
        for digest in sorted(buckets):
            remaining: Deque[int] = deque(buckets[digest])
            if len(remaining) > 1:
                self.logger.debug("Comparing %d entries sharing hash %08x", len(remaining), digest)
            while remaining:
                pivot_index = remaining.popleft()
                if not remaining:
                    break
                pivot = resolve(pivot_index)
                different: Deque[int] = deque()
                for other_index in remaining:
                    other = resolve(other_index)
                    if other.content != pivot.content:
                        different.append(other_index)
                        continue
                    yield RedundantPair(pivot, other)
                remaining = different

    def report(self, resolve: ResolveFn, reporter: ErrorLogger) -> int:
        """Record a message for every redundant pair; return the pair count."""
        found = 0
        for pair in self.detect(resolve):
            found += 1
            reporter.record_failure(
                MessageId.REDUNDANT_ITEMS,
                {"path1": pair.first.path, "path2": pair.second.path},
            )
        return found


def resolver_for(archive: Archive) -> ResolveFn:
    """Build an index resolver backed by ``archive.get_entry_by_index``."""

    def _resolve(index: int) -> ResolvedEntry:
        entry = archive.get_entry_by_index(index)
        return ResolvedEntry(entry.path, entry.get_item().data())

    return _resolve


__all__ = [
    "RedundancyDetector",
    "RedundantPair",
    "ResolvedEntry",
    "content_hash",
    "resolver_for",
]
