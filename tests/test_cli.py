"""CLI parser and exit status tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import zimcheck.cli as cli
from zimcheck.archive import ArchiveOpenError
from zimcheck.cli import _build_parser, _selected_checks, main
from zimcheck.models import EnabledChecks
from zimcheck.report import CheckCategory
from tests._fixtures.archive_builder import FakeArchive, healthy_archive


def test_cli_collects_check_flags() -> None:
    args = _build_parser().parse_args(["-0", "-U", "archive.zim"])

    assert args.checks == [CheckCategory.EMPTY, CheckCategory.URL_INTERNAL]
    assert args.archive == "archive.zim"
    assert _selected_checks(args, EnabledChecks.all()).names() == ["empty", "url_internal"]


def test_cli_defaults_to_configured_checks() -> None:
    args = _build_parser().parse_args(["archive.zim"])
    default = EnabledChecks.of([CheckCategory.FAVICON])

    assert _selected_checks(args, default) is default


def test_cli_all_flag_wins() -> None:
    args = _build_parser().parse_args(["-A", "-R", "archive.zim"])

    assert _selected_checks(args, EnabledChecks.of([])) == EnabledChecks.all()


def test_cli_accepts_json_and_verbose() -> None:
    args = _build_parser().parse_args(["--json", "-v", "archive.zim"])

    assert args.json is True
    assert args.verbose is True


def _patch_opener(monkeypatch: pytest.MonkeyPatch, archive: FakeArchive) -> None:
    monkeypatch.setattr(cli, "open_archive", lambda path: archive)


def test_main_exits_zero_for_healthy_archive(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _patch_opener(monkeypatch, healthy_archive())

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "--json", "ok.zim"])

    assert excinfo.value.code == 0
    assert json.loads(capsys.readouterr().out) == {"logs": []}


def test_main_exits_one_on_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    archive = healthy_archive()
    archive.add("A/blank", b"")
    _patch_opener(monkeypatch, archive)

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "-0", "bad.zim"])

    assert excinfo.value.code == 1
    assert "Entry A/blank is empty" in capsys.readouterr().out


def test_main_warning_only_exits_zero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    archive = FakeArchive()
    archive.add("I/a.png", b"png", mimetype="image/png")
    archive.add("I/b.png", b"png", mimetype="image/png")
    _patch_opener(monkeypatch, archive)

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "-R", "dup.zim"])

    assert excinfo.value.code == 0


def test_main_reports_open_failure(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _fail(path: Path) -> FakeArchive:
        raise ArchiveOpenError("libzim is required")

    monkeypatch.setattr(cli, "open_archive", _fail)

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "missing.zim"])

    assert excinfo.value.code == 1


def test_main_rejects_bad_config(tmp_path: Path) -> None:
    (tmp_path / ".zimcheck.yml").write_text("checks:\n  enabled: [bogus]\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "a.zim"])

    assert excinfo.value.code == 1
