"""Static tables describing check categories and report messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class Severity(str, Enum):
    """Reporting level of a check category."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class CheckCategory(Enum):
    """Kinds of integrity check, in reporting order."""

    CHECKSUM = "checksum"
    INTEGRITY = "integrity"
    EMPTY = "empty"
    METADATA = "metadata"
    FAVICON = "favicon"
    MAIN_PAGE = "main_page"
    REDUNDANT = "redundant"
    URL_INTERNAL = "url_internal"
    URL_EXTERNAL = "url_external"

    @property
    def severity(self) -> Severity:
        return CATEGORY_INFO[self].severity

    @property
    def description(self) -> str:
        return CATEGORY_INFO[self].description

    @classmethod
    def from_name(cls, name: str) -> "CheckCategory":
        """Look up a category by its identifier (case-insensitive)."""
        key = name.strip().lower().replace("-", "_")
        for category in cls:
            if category.value == key:
                return category
        raise ValueError(f"Unknown check: {name}")


class MessageId(IntEnum):
    """Report message templates; the integer value is the JSON ``code``."""

    CHECKSUM = 0
    MAIN_PAGE = 1
    EMPTY_ENTRY = 2
    OUTOFBOUNDS_LINK = 3
    EMPTY_LINKS = 4
    DANGLING_LINKS = 5
    EXTERNAL_LINK = 6
    REDUNDANT_ITEMS = 7
    MISSING_METADATA = 8
    MORE_DANGLING_LINKS = 9


@dataclass(frozen=True)
class CategoryInfo:
    severity: Severity
    description: str


@dataclass(frozen=True)
class MessageInfo:
    category: CheckCategory
    template: str


CATEGORY_INFO: Mapping[CheckCategory, CategoryInfo] = MappingProxyType(
    {
        CheckCategory.CHECKSUM: CategoryInfo(Severity.ERROR, "Invalid checksum"),
        CheckCategory.INTEGRITY: CategoryInfo(Severity.ERROR, "Invalid low-level structure"),
        CheckCategory.EMPTY: CategoryInfo(Severity.ERROR, "Empty articles"),
        CheckCategory.METADATA: CategoryInfo(Severity.ERROR, "Missing metadata entries"),
        CheckCategory.FAVICON: CategoryInfo(Severity.ERROR, "Missing favicon"),
        CheckCategory.MAIN_PAGE: CategoryInfo(Severity.ERROR, "Missing mainpage"),
        CheckCategory.REDUNDANT: CategoryInfo(Severity.WARNING, "Redundant data found"),
        CheckCategory.URL_INTERNAL: CategoryInfo(Severity.ERROR, "Invalid internal links found"),
        CheckCategory.URL_EXTERNAL: CategoryInfo(Severity.ERROR, "Invalid external links found"),
    }
)

MESSAGE_INFO: Mapping[MessageId, MessageInfo] = MappingProxyType(
    {
        MessageId.CHECKSUM: MessageInfo(
            CheckCategory.CHECKSUM, "ZIM Archive Checksum in archive: {{archive_checksum}}"
        ),
        MessageId.MAIN_PAGE: MessageInfo(
            CheckCategory.MAIN_PAGE,
            "Main Page Index stored in Archive Header: {{main_page_index}}",
        ),
        MessageId.EMPTY_ENTRY: MessageInfo(CheckCategory.EMPTY, "Entry {{path}} is empty"),
        MessageId.OUTOFBOUNDS_LINK: MessageInfo(
            CheckCategory.URL_INTERNAL, "{{link}} is out of bounds. Article: {{path}}"
        ),
        MessageId.EMPTY_LINKS: MessageInfo(
            CheckCategory.URL_INTERNAL, "Found {{count}} empty links in article: {{path}}"
        ),
        MessageId.DANGLING_LINKS: MessageInfo(
            CheckCategory.URL_INTERNAL,
            "The following links:\n{{links}}({{normalized_link}}) were not found in article {{path}}",
        ),
        MessageId.EXTERNAL_LINK: MessageInfo(
            CheckCategory.URL_EXTERNAL, "{{link}} is an external dependence in article {{path}}"
        ),
        MessageId.REDUNDANT_ITEMS: MessageInfo(CheckCategory.REDUNDANT, "{{path1}} and {{path2}}"),
        MessageId.MISSING_METADATA: MessageInfo(CheckCategory.METADATA, "{{metadata_type}}"),
        MessageId.MORE_DANGLING_LINKS: MessageInfo(
            CheckCategory.URL_INTERNAL,
            "{{links}}({{normalized_link}}) were also not found in article {{path}}",
        ),
    }
)


def category_for(message_id: MessageId) -> CheckCategory:
    """Return the category a message template reports against."""
    return MESSAGE_INFO[message_id].category


__all__ = [
    "CATEGORY_INFO",
    "CategoryInfo",
    "CheckCategory",
    "MESSAGE_INFO",
    "MessageId",
    "MessageInfo",
    "Severity",
    "category_for",
]
