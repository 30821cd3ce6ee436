"""Report model: check categories, message catalog and the error logger."""

from .catalog import CATEGORY_INFO, MESSAGE_INFO, CheckCategory, MessageId, Severity, category_for
from .logger import ErrorLogger, ReportMessage

__all__ = [
    "CATEGORY_INFO",
    "MESSAGE_INFO",
    "CheckCategory",
    "ErrorLogger",
    "MessageId",
    "ReportMessage",
    "Severity",
    "category_for",
]
