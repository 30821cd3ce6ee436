"""Core data models shared across zimcheck components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .report.catalog import CheckCategory

METADATA_NAMESPACE = "M"
CONTENT_NAMESPACES = frozenset({"C", "A", "I"})


@dataclass(frozen=True)
class LinkOccurrence:
    """A link as found in markup, with the attribute it came from."""

    link: str
    attribute: str
    is_internal: bool
    is_external: bool


@dataclass(frozen=True)
class EnabledChecks:
    """Set of check categories switched on for a run."""

    categories: FrozenSet[CheckCategory] = field(default_factory=lambda: frozenset(CheckCategory))

    @classmethod
    def all(cls) -> "EnabledChecks":
        return cls(frozenset(CheckCategory))

    @classmethod
    def of(cls, categories: Iterable[CheckCategory]) -> "EnabledChecks":
        return cls(frozenset(categories))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "EnabledChecks":
        """Build from check identifiers; ``all`` enables every check."""
        selected = set()
        for name in names:
            if name.strip().lower() == "all":
                selected.update(CheckCategory)
            else:
                selected.add(CheckCategory.from_name(name))
        return cls(frozenset(selected))

    def is_enabled(self, category: CheckCategory) -> bool:
        return category in self.categories

    def any_enabled(self, *categories: CheckCategory) -> bool:
        return any(category in self.categories for category in categories)

    def names(self) -> list[str]:
        return [category.value for category in CheckCategory if category in self.categories]


def entry_namespace(path: str, *, new_namespace_scheme: bool) -> str:
    """Return the namespace character an entry path belongs to."""
    if new_namespace_scheme:
        return "C"
    return path[:1]


__all__ = [
    "CONTENT_NAMESPACES",
    "EnabledChecks",
    "LinkOccurrence",
    "METADATA_NAMESPACE",
    "entry_namespace",
]
