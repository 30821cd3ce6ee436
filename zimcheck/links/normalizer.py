"""Resolution of relative links against an entry path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union
from urllib.parse import unquote


@dataclass(frozen=True)
class OutOfBounds:
    """A link whose ``..`` segments climb above the archive root."""

    link: str
    path: str


def base_directory(path: str) -> str:
    """Return the directory part of an entry path (empty at the root)."""
    position = path.rfind("/")
    return path[:position] if position >= 0 else ""


def strip_fragment_and_query(link: str) -> str:
    """Drop everything from the first ``#`` or ``?`` onwards."""
    cut = len(link)
    for marker in ("#", "?"):
        position = link.find(marker)
        if 0 <= position < cut:
            cut = position
    return link[:cut]


def normalize(link: str, base_path: str) -> Union[str, OutOfBounds]:
    """Resolve ``link`` relative to the directory of ``base_path``.

    Absolute links (leading ``/``) resolve from the archive root. Segments are
    percent-decoded before ``.``/``..`` handling. Returns :class:`OutOfBounds`
    when the link ascends above the root.
    """
    target = strip_fragment_and_query(link)
    segments: List[str]
    if target.startswith("/"):
        segments = []
        target = target.lstrip("/")
    else:
        segments = [part for part in base_directory(base_path).split("/") if part]

    for part in target.split("/"):
        segment = unquote(part)
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                return OutOfBounds(link=link, path=base_path)
            segments.pop()
            continue
        segments.append(segment)
    return "/".join(segments)


__all__ = ["OutOfBounds", "base_directory", "normalize", "strip_fragment_and_query"]
