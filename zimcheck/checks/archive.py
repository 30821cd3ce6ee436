"""Archive-level checks that do not walk the entries."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..archive import Archive
from ..config import DEFAULT_FAVICON_PATHS, DEFAULT_REQUIRED_METADATA
from ..logging import get_logger
from ..report import CheckCategory, ErrorLogger, MessageId

logger = get_logger("checks")

# Unified-namespace archives store their illustration as metadata.
ILLUSTRATION_METADATA = "Illustration_48x48@1"


def check_checksum(archive: Archive, reporter: ErrorLogger) -> bool:
    logger.info("Verifying Internal Checksum...")
    if not archive.has_checksum():
        logger.info("  No checksum stored in archive; skipping")
        return True
    if archive.verify_checksum():
        return True
    logger.error("  Wrong Checksum in ZIM archive")
    reporter.record_failure(MessageId.CHECKSUM, {"archive_checksum": archive.get_checksum()})
    return False


def check_integrity(
    archive: Archive,
    reporter: ErrorLogger,
    path: Optional[Path] = None,
    which_checks: Sequence[str] | None = None,
) -> bool:
    logger.info("Verifying ZIM-archive structure integrity...")
    if archive.validate_structure(path, which_checks):
        return True
    logger.error("  ZIM file's low level structure is invalid")
    reporter.force_fail(CheckCategory.INTEGRITY)
    return False


def check_metadata(
    archive: Archive,
    reporter: ErrorLogger,
    required: Iterable[str] = DEFAULT_REQUIRED_METADATA,
) -> List[str]:
    """Report every required metadata key absent from the archive."""
    logger.info("Searching for metadata entries...")
    existing = archive.get_metadata_keys()
    missing = [key for key in required if key not in existing]
    for key in missing:
        reporter.record_failure(MessageId.MISSING_METADATA, {"metadata_type": key})
    return missing


def check_favicon(
    archive: Archive,
    reporter: ErrorLogger,
    paths: Iterable[str] = DEFAULT_FAVICON_PATHS,
) -> bool:
    logger.info("Searching for Favicon...")
    for path in paths:
        if archive.has_entry_by_path(path):
            return True
    if archive.uses_new_namespace_scheme() and ILLUSTRATION_METADATA in archive.get_metadata_keys():
        return True
    reporter.force_fail(CheckCategory.FAVICON)
    return False


def check_main_page(archive: Archive, reporter: ErrorLogger) -> bool:
    logger.info("Searching for main page...")
    try:
        archive.get_main_entry()
    except Exception as exc:  # any lookup failure means the main page is missing
        logger.debug("Main entry lookup failed: %s", exc)
        reporter.record_failure(
            MessageId.MAIN_PAGE, {"main_page_index": archive.get_main_entry_index()}
        )
        return False
    return True


__all__ = [
    "ILLUSTRATION_METADATA",
    "check_checksum",
    "check_favicon",
    "check_integrity",
    "check_main_page",
    "check_metadata",
]
