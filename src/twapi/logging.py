"""
logfmt output for the SDK and the MCP server.

Loggers attach context through ``extra=``; only the keys in ``fields`` are
rendered, in that order, and missing ones are left out of the line.
"""

import logging
import sys
from typing import Any, Iterable, Optional, TextIO

DEFAULT_FIELDS = (
    "operation",
    "method",
    "url",
    "status",
    "duration_ms",
    "page",
    "tool",
)

# httpx logs every request at INFO; the engine already does.
NOISY_LOGGERS = ("httpx", "httpcore")


def quote(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if text and not any(c in text for c in ' ="\n'):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class LogfmtFormatter(logging.Formatter):
    def __init__(self, fields: Iterable[str] = DEFAULT_FIELDS, with_time: bool = False):
        super().__init__()
        self.fields = tuple(fields)
        self.with_time = with_time

    def format(self, record: logging.LogRecord) -> str:
        pairs = []
        if self.with_time:
            pairs.append(("ts", self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z")))
        pairs.append(("level", record.levelname.lower()))
        pairs.append(("logger", record.name))

        message = record.getMessage()
        if message:
            pairs.append(("event", message))

        pairs.extend(
            (key, getattr(record, key))
            for key in self.fields
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            pairs.append(("exc_type", type(exc).__name__))
            pairs.append(("exc", str(exc)))

        return " ".join(f"{key}={quote(value)}" for key, value in pairs)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Route root logging to ``stream`` (stderr by default) in logfmt.

    Existing root handlers are replaced, so repeated calls do not duplicate
    output. stdout stays free for the stdio MCP transport.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "DEFAULT_FIELDS", "quote"]
