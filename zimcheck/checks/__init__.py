"""Archive-level and per-entry checks."""

from .archive import (
    check_checksum,
    check_favicon,
    check_integrity,
    check_main_page,
    check_metadata,
)
from .entries import EntryChecker, EntryStats

__all__ = [
    "EntryChecker",
    "EntryStats",
    "check_checksum",
    "check_favicon",
    "check_integrity",
    "check_main_page",
    "check_metadata",
]
