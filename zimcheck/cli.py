"""CLI entrypoint for zimcheck."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from . import __version__
from .archive import ArchiveOpenError, open_archive
from .config import ConfigError, load_config
from .logging import configure_logging
from .models import EnabledChecks
from .orchestrator import Orchestrator
from .report import CheckCategory

# (short flag, long flag, category, help)
_CHECK_FLAGS = (
    ("-C", "--checksum", CheckCategory.CHECKSUM, "Verify the internal checksum."),
    ("-I", "--integrity", CheckCategory.INTEGRITY, "Validate the low-level archive structure."),
    ("-0", "--empty", CheckCategory.EMPTY, "Report empty content entries."),
    ("-M", "--metadata", CheckCategory.METADATA, "Report missing metadata entries."),
    ("-F", "--favicon", CheckCategory.FAVICON, "Report a missing favicon."),
    ("-P", "--main", CheckCategory.MAIN_PAGE, "Report a missing main page."),
    ("-R", "--redundant", CheckCategory.REDUNDANT, "Report entries with identical content."),
    ("-U", "--url-internal", CheckCategory.URL_INTERNAL, "Report dangling internal links."),
    ("-X", "--url-external", CheckCategory.URL_EXTERNAL, "Report external dependencies."),
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zimcheck",
        description="Check the content integrity of a ZIM archive.",
    )
    parser.add_argument("archive", help="Path to the ZIM archive to check.")
    parser.add_argument(
        "-A",
        "--all",
        action="store_true",
        help="Run every check (the default when no check is selected).",
    )
    for short, long, category, help_text in _CHECK_FLAGS:
        parser.add_argument(
            short,
            long,
            dest="checks",
            action="append_const",
            const=category,
            help=help_text,
        )
    parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Write the report as a JSON document.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .zimcheck.yml file (defaults to the current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _selected_checks(args: argparse.Namespace, default: EnabledChecks) -> EnabledChecks:
    chosen: List[CheckCategory] = list(args.checks or [])
    if args.all:
        return EnabledChecks.all()
    if chosen:
        return EnabledChecks.of(chosen)
    return default


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint; exits 0 when no error-level check failed."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        config = load_config(args.config if args.config is not None else Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"zimcheck: invalid configuration: {exc}\n")

    enabled = _selected_checks(args, config.checks.enabled)
    json_output = config.json_output if args.json is None else bool(args.json)

    orchestrator = Orchestrator(config.checks, archive_opener=open_archive)
    try:
        outcome = orchestrator.run(args.archive, enabled=enabled, json_output=json_output)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except ArchiveOpenError as exc:
        parser.exit(1, f"zimcheck: {exc}\n")

    sys.exit(0 if outcome.status else 1)


if __name__ == "__main__":
    main(sys.argv[1:])
