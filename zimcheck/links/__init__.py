"""Link extraction, normalization and validation."""

from .extractor import LINK_ATTRIBUTES, classify_link, extract_links
from .normalizer import OutOfBounds, base_directory, normalize, strip_fragment_and_query
from .validator import (
    DanglingGroup,
    LinkValidator,
    ValidationOutcome,
    check_external_links,
    find_external_dependency,
)

__all__ = [
    "DanglingGroup",
    "LINK_ATTRIBUTES",
    "LinkValidator",
    "OutOfBounds",
    "ValidationOutcome",
    "base_directory",
    "check_external_links",
    "classify_link",
    "extract_links",
    "find_external_dependency",
    "normalize",
    "strip_fragment_and_query",
]
