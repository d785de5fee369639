"""
Diagnostic sinks - observational trace of an extraction run

The pipeline reports ``(level, message)`` events to whatever sink it was given.
Nothing downstream depends on them; a NullSink gives silent operation.
"""
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, List, Protocol

logger = logging.getLogger(__name__)

INFO = 'info'
OK = 'ok'
WARN = 'warn'
ERR = 'err'

LEVELS = (INFO, OK, WARN, ERR)

_LOGGING_LEVELS = {
    INFO: logging.INFO,
    OK: logging.INFO,
    WARN: logging.WARNING,
    ERR: logging.ERROR,
}


class DiagnosticSink(Protocol):
    def record(self, level: str, message: str) -> None:
        ...


@dataclass(frozen=True)
class DiagnosticEvent:
    timestamp: str
    level: str
    message: str

    def __str__(self):
        return f"[{self.timestamp}] {self.message}"


class NullSink:
    """Discards every event."""

    def record(self, level: str, message: str) -> None:
        pass


class LoggingSink:
    """Forwards events to the logging module."""

    def __init__(self, target: logging.Logger = None):
        self.target = target or logger

    def record(self, level: str, message: str) -> None:
        self.target.log(_LOGGING_LEVELS.get(level, logging.INFO), message)


class MemorySink:
    """Keeps the most recent events in memory, oldest dropped first."""

    def __init__(self, max_events: int = 500):
        self.max_events = max_events
        self._events: Deque[DiagnosticEvent] = deque(maxlen=max_events)

    def record(self, level: str, message: str) -> None:
        if level not in LEVELS:
            level = INFO
        timestamp = datetime.now(timezone.utc).isoformat()
        self._events.append(DiagnosticEvent(timestamp, level, message))

    @property
    def events(self) -> List[DiagnosticEvent]:
        return list(self._events)

    def messages(self, level: str = None) -> List[str]:
        return [event.message for event in self._events if level is None or event.level == level]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self):
        return len(self._events)
