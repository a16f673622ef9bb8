"""Custom exception hierarchy for the event log."""

from __future__ import annotations

from pathlib import Path


class EventLogError(Exception):
    """Base exception for all event_log errors."""


class EventLogWriteError(EventLogError):
    """Appending a line to a log file failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path
