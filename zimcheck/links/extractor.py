"""Link extraction from HTML payloads using stdlib html.parser."""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from ..models import LinkOccurrence

LINK_ATTRIBUTES = ("href", "src", "poster")

_SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")


def classify_link(link: str) -> Tuple[bool, bool]:
    """Return ``(is_internal, is_external)`` for a raw link."""
    if link.startswith("//"):
        return False, True
    match = _SCHEME_PATTERN.match(link)
    if match is None:
        return True, False
    if match.group(1).lower() == "data":
        return False, False
    return False, True


class _LinkExtractor(HTMLParser):
    """Collect link-bearing attributes in document order."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.links: List[LinkOccurrence] = []

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        for name, value in attrs:
            if name not in LINK_ATTRIBUTES or value is None:
                continue
            is_internal, is_external = classify_link(value)
            self.links.append(
                LinkOccurrence(
                    link=value,
                    attribute=name,
                    is_internal=is_internal,
                    is_external=is_external,
                )
            )


def extract_links(html: bytes | str) -> List[LinkOccurrence]:
    """Return every link occurrence of an HTML document."""
    text = html.decode("utf-8", errors="replace") if isinstance(html, bytes) else html
    parser = _LinkExtractor()
    parser.feed(text)
    parser.close()
    return parser.links


__all__ = ["LINK_ATTRIBUTES", "classify_link", "extract_links"]
