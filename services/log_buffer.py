"""Ring buffer of kernel log entries with live subscribers."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

LogListener = Callable[["LogEntry"], None]


@dataclass(frozen=True)
class LogEntry:
    """One buffered log line."""

    type: str
    content: str
    logger_name: str = ""


class LogBuffer(logging.Handler):
    """Keeps the most recent log records and forwards new ones to listeners."""

    def __init__(self, capacity: int = 500, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self._buffer: deque[LogEntry] = deque(maxlen=capacity)
        self._listeners: list[LogListener] = []

    @staticmethod
    def _type_for(record: logging.LogRecord) -> str:
        return "error" if record.levelno >= logging.ERROR else "log"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                type=self._type_for(record),
                content=f"{record.name}: {record.getMessage()}",
                logger_name=record.name,
            )
        except Exception:
            self.handleError(record)
            return
        self._buffer.append(entry)
        for listener in list(self._listeners):
            listener(entry)

    def connect(self, listener: LogListener) -> None:
        """Replay buffered entries to ``listener``, then subscribe it to new ones."""
        for entry in list(self._buffer):
            listener(entry)
        self._listeners.append(listener)

    def disconnect(self, listener: LogListener) -> None:
        self._listeners = [item for item in self._listeners if item != listener]

    def items(self, type_: str | None = None) -> list[LogEntry]:
        if type_ is None:
            return list(self._buffer)
        return [entry for entry in self._buffer if entry.type == type_]
