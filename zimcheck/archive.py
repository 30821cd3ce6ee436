"""Read-only archive access boundary and the python-libzim adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Optional, Protocol, Sequence, Set

try:  # pragma: no cover - optional dependency
    from libzim.reader import Archive as _LibzimReader  # type: ignore

    _LIBZIM_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    _LibzimReader = None  # type: ignore[assignment]
    _LIBZIM_AVAILABLE = False

from .logging import get_logger


class ArchiveOpenError(RuntimeError):
    """Raised when an archive cannot be opened for checking."""


class Item(Protocol):
    """Content payload of a non-redirect entry."""

    def size(self) -> int: ...

    def mimetype(self) -> str: ...

    def index(self) -> int: ...

    def data(self) -> bytes: ...


class Entry(Protocol):
    """A named node of the archive."""

    path: str
    title: str

    def is_redirect(self) -> bool: ...

    def get_item(self) -> Item: ...


class Archive(Protocol):
    """Operations the checker needs from the archive-access layer."""

    def has_checksum(self) -> bool: ...

    def get_checksum(self) -> str: ...

    def verify_checksum(self) -> bool: ...

    def validate_structure(self, path: Optional[Path], which_checks: Sequence[str] | None = None) -> bool: ...

    def get_metadata_keys(self) -> Set[str]: ...

    def has_entry_by_path(self, path: str) -> bool: ...

    def get_entry_by_path(self, path: str) -> Entry: ...

    def get_entry_by_index(self, index: int) -> Entry: ...

    def get_main_entry(self) -> Entry: ...

    def get_main_entry_index(self) -> int: ...

    def iter_entries_efficiently(self) -> Iterator[Entry]: ...

    def entry_count(self) -> int: ...

    def uses_new_namespace_scheme(self) -> bool: ...


class _LibzimItem:
    def __init__(self, item: Any) -> None:
        self._item = item

    def size(self) -> int:
        return int(self._item.size)

    def mimetype(self) -> str:
        return str(self._item.mimetype)

    def index(self) -> int:
        return int(self._item._index)

    def data(self) -> bytes:
        return bytes(self._item.content)


class _LibzimEntry:
    def __init__(self, entry: Any) -> None:
        self._entry = entry
        self.path: str = entry.path
        self.title: str = entry.title

    def is_redirect(self) -> bool:
        return bool(self._entry.is_redirect)

    def get_item(self) -> _LibzimItem:
        return _LibzimItem(self._entry.get_item())


class LibzimArchive:
    """Adapts ``libzim.reader.Archive`` to the :class:`Archive` protocol."""

    def __init__(self, reader: Any, path: Optional[Path] = None) -> None:
        self._reader = reader
        self.path = path
        self.logger = get_logger("archive")

    @classmethod
    def open(cls, path: str | Path) -> "LibzimArchive":
        if not _LIBZIM_AVAILABLE:
            raise ArchiveOpenError(
                "libzim is required to read ZIM archives. Install it with `pip install libzim`."
            )
        archive_path = Path(path).expanduser()
        if not archive_path.exists():
            raise FileNotFoundError(f"Archive not found: {archive_path}")
        try:
            reader = _LibzimReader(archive_path)
        except RuntimeError as exc:
            raise ArchiveOpenError(f"Unable to open {archive_path}: {exc}") from exc
        return cls(reader, archive_path)

    def has_checksum(self) -> bool:
        return bool(self._reader.has_checksum)

    def get_checksum(self) -> str:
        return str(self._reader.checksum)

    def verify_checksum(self) -> bool:
        return bool(self._reader.check())

    def validate_structure(self, path: Optional[Path], which_checks: Sequence[str] | None = None) -> bool:
        # python-libzim only exposes the checksum verification of the archive.
        self.logger.debug("Structure validation of %s delegated to checksum verification", path)
        return self.verify_checksum()

    def get_metadata_keys(self) -> Set[str]:
        return set(self._reader.metadata_keys)

    def has_entry_by_path(self, path: str) -> bool:
        return bool(self._reader.has_entry_by_path(path))

    def get_entry_by_path(self, path: str) -> _LibzimEntry:
        return _LibzimEntry(self._reader.get_entry_by_path(path))

    def get_entry_by_index(self, index: int) -> _LibzimEntry:
        return _LibzimEntry(self._reader._get_entry_by_id(index))

    def get_main_entry(self) -> _LibzimEntry:
        return _LibzimEntry(self._reader.main_entry)

    def get_main_entry_index(self) -> int:
        try:
            return int(self._reader.main_entry._index)
        except RuntimeError:
            return -1

    def iter_entries_efficiently(self) -> Iterator[_LibzimEntry]:
        # No cluster-ordered iterator is exposed; walk in path order.
        for index in range(self.entry_count()):
            yield self.get_entry_by_index(index)

    def entry_count(self) -> int:
        return int(self._reader.entry_count)

    def uses_new_namespace_scheme(self) -> bool:
        return bool(self._reader.has_new_namespace_scheme)


def open_archive(path: str | Path) -> LibzimArchive:
    """Open a ZIM archive from disk."""
    return LibzimArchive.open(path)


__all__ = [
    "Archive",
    "ArchiveOpenError",
    "Entry",
    "Item",
    "LibzimArchive",
    "open_archive",
]
