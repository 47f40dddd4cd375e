"""
utils/logger.py
---------------
Centralized logging configuration.

All modules use ``get_logger(__name__)``. ``configure_logging`` wires two
sinks onto the root logger:

* an append-only error file (``logs.txt``) with entries shaped like
  ``[2024-01-10 09:15:02] InvalidArgument: Amount must be greater than 0``
  followed by the traceback and a blank line;
* an in-memory ``ActivityLogHandler`` feeding the Activity Log tab with
  ``[09:15:02] message`` lines.
"""

import logging
import os
import traceback
from collections import deque
from datetime import datetime
from typing import Callable

_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ACTIVITY_TIME_FORMAT = "%H:%M:%S"


class ErrorFileFormatter(logging.Formatter):
    """Formats records as ``[timestamp] Kind: message\\ntrace\\n\\n``."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime(_FILE_DATE_FORMAT)
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            kind = exc_type.__name__
            message = str(exc) or record.getMessage()
            trace = "".join(traceback.format_tb(tb)).rstrip("\n")
        else:
            kind = record.levelname.title()
            message = record.getMessage()
            trace = record.stack_info or ""
        return f"[{stamp}] {kind}: {message}\n{trace}\n"


class ErrorFileHandler(logging.FileHandler):
    """Append-only error sink; the stream terminator closes each entry with a blank line."""

    def __init__(self, filename: str):
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        self.setLevel(logging.ERROR)
        self.setFormatter(ErrorFileFormatter())


class ActivityLogHandler(logging.Handler):
    """Keeps the most recent activity lines in memory and notifies listeners."""

    def __init__(self, capacity: int = 500, level: int = logging.INFO):
        super().__init__(level)
        self._lines: deque[str] = deque(maxlen=capacity)
        self._listeners: list[Callable[[str], None]] = []

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[str], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._lines.clear()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stamp = datetime.fromtimestamp(record.created).strftime(_ACTIVITY_TIME_FORMAT)
            line = f"[{stamp}] {record.getMessage()}"
            self._lines.append(line)
            for listener in list(self._listeners):
                listener(line)
        except Exception:
            self.handleError(record)


_activity_handler: ActivityLogHandler | None = None
_file_handler: ErrorFileHandler | None = None


def configure_logging(log_path: str | None = None, capacity: int = 500) -> ActivityLogHandler:
    """Configure the root logger once; returns the shared activity handler."""
    global _activity_handler, _file_handler
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    if _activity_handler is None:
        _activity_handler = ActivityLogHandler(capacity)
        root.addHandler(_activity_handler)

    if log_path and (_file_handler is None or _file_handler.baseFilename != os.path.abspath(log_path)):
        if _file_handler is not None:
            root.removeHandler(_file_handler)
            _file_handler.close()
        _file_handler = ErrorFileHandler(log_path)
        root.addHandler(_file_handler)

    return _activity_handler


def reset_logging() -> None:
    """Detach the handlers installed by configure_logging."""
    global _activity_handler, _file_handler
    root = logging.getLogger()
    for handler in (_activity_handler, _file_handler):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()
    _activity_handler = None
    _file_handler = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger; handlers are attached to the root by configure_logging.
    """
    return logging.getLogger(name)

