"""Pipeline orchestration for a full archive check."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

from .archive import Archive, open_archive
from .checks import (
    EntryChecker,
    EntryStats,
    check_checksum,
    check_favicon,
    check_integrity,
    check_main_page,
    check_metadata,
)
from .config import CheckConfig
from .links import LinkValidator
from .logging import get_logger
from .models import EnabledChecks
from .redundancy import RedundancyDetector, resolver_for
from .report import CheckCategory, ErrorLogger

ArchiveOpener = Callable[[Path], Archive]

_WALK_CHECKS = (
    CheckCategory.EMPTY,
    CheckCategory.REDUNDANT,
    CheckCategory.URL_INTERNAL,
    CheckCategory.URL_EXTERNAL,
)


@dataclass
class CheckOutcome:
    """Result of checking one archive."""

    path: Optional[Path]
    status: bool
    report: ErrorLogger
    stats: EntryStats
    redundant_pairs: int = 0


class Orchestrator:
    """Runs the enabled checks over an archive and fills one report."""

    def __init__(
        self,
        config: CheckConfig | None = None,
        archive_opener: ArchiveOpener = open_archive,
    ) -> None:
        self.config = config or CheckConfig()
        self.archive_opener = archive_opener
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path,
        *,
        enabled: EnabledChecks | None = None,
        json_output: bool = False,
        stream: Optional[TextIO] = None,
    ) -> CheckOutcome:
        """Open ``path`` and check it, writing the report to ``stream``."""
        archive_path = Path(path).expanduser()
        archive = self.archive_opener(archive_path)
        with ErrorLogger(json_output=json_output, stream=stream) as reporter:
            return self.check_archive(archive, reporter, enabled=enabled, archive_path=archive_path)

    def check_archive(
        self,
        archive: Archive,
        reporter: ErrorLogger,
        *,
        enabled: EnabledChecks | None = None,
        archive_path: Optional[Path] = None,
    ) -> CheckOutcome:
        if enabled is None:
            enabled = self.config.enabled
        self.logger.info("Checking %s", archive_path or "archive")
        self.logger.debug("Enabled checks: %s", ", ".join(enabled.names()) or "(none)")

        if enabled.is_enabled(CheckCategory.CHECKSUM):
            check_checksum(archive, reporter)
        if enabled.is_enabled(CheckCategory.INTEGRITY):
            check_integrity(archive, reporter, archive_path)
        if enabled.is_enabled(CheckCategory.METADATA):
            check_metadata(archive, reporter, self.config.required_metadata)
        if enabled.is_enabled(CheckCategory.FAVICON):
            check_favicon(archive, reporter, self.config.favicon_paths)
        if enabled.is_enabled(CheckCategory.MAIN_PAGE):
            check_main_page(archive, reporter)

        stats = EntryStats()
        redundant_pairs = 0
        if enabled.any_enabled(*_WALK_CHECKS):
            detector = RedundancyDetector() if enabled.is_enabled(CheckCategory.REDUNDANT) else None
            checker = EntryChecker(
                archive,
                reporter,
                enabled,
                redundancy=detector,
                link_validator=LinkValidator(reporter),
                html_mimetypes=self.config.html_mimetypes,
            )
            self.logger.info("Verifying Articles' content...")
            self.logger.debug("Walking %d entries", archive.entry_count())
            for entry in archive.iter_entries_efficiently():
                checker.check(entry)
            stats = checker.stats
            self.logger.debug(
                "Walked %d entries (%d skipped, %d empty, %d html)",
                stats.walked,
                stats.skipped,
                stats.empty,
                stats.html,
            )
            if detector is not None:
                self.logger.info("Searching for redundant articles...")
                self.logger.debug("Comparing %d hash buckets", detector.bucket_count)
                redundant_pairs = detector.report(resolver_for(archive), reporter)

        status = reporter.overall_status()
        self.logger.info("Overall Test Status: %s", "Pass" if status else "Fail")
        return CheckOutcome(
            path=archive_path,
            status=status,
            report=reporter,
            stats=stats,
            redundant_pairs=redundant_pairs,
        )


__all__ = ["CheckOutcome", "Orchestrator"]
