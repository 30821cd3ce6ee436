"""Configuration loading for zimcheck (.zimcheck.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import EnabledChecks
from .report import CheckCategory

CONFIG_FILENAME = ".zimcheck.yml"

DEFAULT_REQUIRED_METADATA = ("Title", "Creator", "Publisher", "Date", "Description", "Language")
DEFAULT_FAVICON_PATHS = ("-/favicon.png", "I/favicon.png", "I/favicon", "-/favicon")
DEFAULT_HTML_MIMETYPES = ("text/html",)
OUTPUT_FORMATS = ("text", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CheckConfig:
    """Which checks run and how the archive-level ones behave."""

    enabled: EnabledChecks = field(default_factory=EnabledChecks.all)
    required_metadata: List[str] = field(default_factory=lambda: list(DEFAULT_REQUIRED_METADATA))
    favicon_paths: List[str] = field(default_factory=lambda: list(DEFAULT_FAVICON_PATHS))
    html_mimetypes: List[str] = field(default_factory=lambda: list(DEFAULT_HTML_MIMETYPES))


@dataclass
class ZimCheckConfig:
    """Represents the settings defined in .zimcheck.yml."""

    root: Path
    checks: CheckConfig = field(default_factory=CheckConfig)
    output_format: str = "text"

    @property
    def json_output(self) -> bool:
        return self.output_format == "json"


def load_config(config_path: Path) -> ZimCheckConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ZimCheckConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    checks = CheckConfig()
    checks_data = _as_dict(data.get("checks"))
    if checks_data:
        enabled_names = _as_str_list(checks_data.get("enabled")) or ["all"]
        disabled_names = _as_str_list(checks_data.get("disabled"))
        checks.enabled = _resolve_enabled(enabled_names, disabled_names)

    metadata_data = _as_dict(data.get("metadata"))
    if "required" in metadata_data:
        checks.required_metadata = _as_str_list(metadata_data.get("required"))

    favicon_data = _as_dict(data.get("favicon"))
    if favicon_data.get("paths") is not None:
        checks.favicon_paths = _as_str_list(favicon_data.get("paths"))

    html_data = _as_dict(data.get("html"))
    mimetypes = _as_str_list(html_data.get("mimetypes"))
    if mimetypes:
        checks.html_mimetypes = mimetypes

    output_data = _as_dict(data.get("output"))
    output_format = (_as_str(output_data.get("format")) or "text").lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unsupported output format: {output_format}")

    return ZimCheckConfig(root=root, checks=checks, output_format=output_format)


def _resolve_enabled(enabled: Sequence[str], disabled: Sequence[str]) -> EnabledChecks:
    try:
        selected = set(EnabledChecks.from_names(enabled).categories)
        removed = EnabledChecks.from_names(disabled).categories
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    return EnabledChecks.of(category for category in CheckCategory if category in selected - removed)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CheckConfig",
    "ConfigError",
    "DEFAULT_FAVICON_PATHS",
    "DEFAULT_REQUIRED_METADATA",
    "ZimCheckConfig",
    "load_config",
]
