"""Structured event log — all log file I/O lives here."""

from event_log.events_log import EventsLog
from event_log.exceptions import EventLogError, EventLogWriteError
from event_log.files import LogFilesManager
from event_log.models import (
    AppEventData,
    EventLogEntry,
    EventSource,
    EventType,
    SessionEventData,
    to_json_line,
)
from event_log.writer import JsonlFileWriter, StateLogStorage

__all__ = [
    "AppEventData",
    "EventLogEntry",
    "EventLogError",
    "EventLogWriteError",
    "EventSource",
    "EventType",
    "EventsLog",
    "JsonlFileWriter",
    "LogFilesManager",
    "SessionEventData",
    "StateLogStorage",
    "to_json_line",
]
