"""Per-run report model with text and streamed JSON rendering."""

from __future__ import annotations

import json
import sys
import textwrap
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TextIO

from jinja2 import Environment, StrictUndefined, Template

from .catalog import MESSAGE_INFO, CheckCategory, MessageId, Severity, category_for

_ENVIRONMENT = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)
_TEMPLATES: Dict[MessageId, Template] = {}
_INDENT = "  "


@dataclass
class ReportMessage:
    """A recorded failure: template id plus its named parameters."""

    message_id: MessageId
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def category(self) -> CheckCategory:
        return category_for(self.message_id)

    def expand(self) -> str:
        """Render the message template with this message's parameters."""
        return _template(self.message_id).render(**self.params)

    def to_dict(self) -> Dict[str, Any]:
        category = self.category
        payload: Dict[str, Any] = {
            "check": category.value,
            "level": category.severity.value,
            "code": int(self.message_id),
            "message": self.expand(),
        }
        payload.update(self.params)
        return payload


def _template(message_id: MessageId) -> Template:
    template = _TEMPLATES.get(message_id)
    if template is None:
        template = _ENVIRONMENT.from_string(MESSAGE_INFO[message_id].template)
        _TEMPLATES[message_id] = template
    return template


class ErrorLogger:
    """Collects check results for one run and renders them.

    In JSON mode the document is streamed: the opening of the ``logs`` array
    is written by :meth:`open`, each message as soon as it is recorded, and
    the closing tokens by :meth:`close`. Use the logger as a context manager
    so the document is terminated on every exit path. In text mode the human
    summary is written on :meth:`close`.
    """

    def __init__(self, *, json_output: bool = False, stream: Optional[TextIO] = None) -> None:
        self.json_output = json_output
        self._stream = stream
        self._status: Dict[CheckCategory, bool] = {category: True for category in CheckCategory}
        self._messages: Dict[CheckCategory, List[ReportMessage]] = {
            category: [] for category in CheckCategory
        }
        self._log: List[ReportMessage] = []
        self._opened = False
        self._closed = False

    def __enter__(self) -> "ErrorLogger":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def open(self) -> None:
        if self._opened:
            return
        self._opened = True
        if self.json_output:
            self._write('{\n  "logs": [')

    def close(self) -> None:
        if self._closed:
            return
        self.open()
        self._closed = True
        if self.json_output:
            self._write(f"\n{_INDENT}]\n}}\n")
        else:
            self._write(self.render_text())

    def record_failure(self, message_id: MessageId, params: Mapping[str, object]) -> ReportMessage:
        """Append a message and mark its category failed."""
        message = ReportMessage(message_id, {key: str(value) for key, value in params.items()})
        category = message.category
        self._status[category] = False
        self._messages[category].append(message)
        self._log.append(message)
        if self.json_output and not self._closed:
            self.open()
            self._write(self._json_element(message, first=len(self._log) == 1))
        return message

    def force_fail(self, category: CheckCategory) -> None:
        """Mark a category failed without recording a message."""
        self._status[category] = False

    def passed(self, category: CheckCategory) -> bool:
        return self._status[category]

    def messages(self, category: CheckCategory) -> List[ReportMessage]:
        return list(self._messages[category])

    @property
    def log(self) -> List[ReportMessage]:
        """All messages in recording order."""
        return list(self._log)

    def failed_categories(self) -> List[CheckCategory]:
        return [category for category in CheckCategory if not self._status[category]]

    def overall_status(self) -> bool:
        """True unless an ERROR-severity category failed."""
        return all(
            self._status[category]
            for category in CheckCategory
            if category.severity is Severity.ERROR
        )

    def render_text(self) -> str:
        lines: List[str] = []
        for category in self.failed_categories():
            lines.append(f"[{category.severity.value}] {category.description}:")
            for message in self._messages[category]:
                lines.append(_INDENT + message.expand())
        return "".join(f"{line}\n" for line in lines)

    def render_json(self) -> str:
        parts = ['{\n  "logs": [']
        for position, message in enumerate(self._log):
            parts.append(self._json_element(message, first=position == 0))
        parts.append(f"\n{_INDENT}]\n}}\n")
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {"logs": [message.to_dict() for message in self._log]}

    def _json_element(self, message: ReportMessage, *, first: bool) -> str:
        body = textwrap.indent(json.dumps(message.to_dict(), indent=2), _INDENT * 2)
        return ("\n" if first else ",\n") + body

    def _write(self, text: str) -> None:
        if not text:
            return
        stream = self.stream
        stream.write(text)
        stream.flush()


__all__ = ["ErrorLogger", "ReportMessage"]
