"""EventsLog — builds entries and hands them to storage."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from event_log.files import LogFilesManager
from event_log.models import (
    EventLogEntry,
    EventPayload,
    EventSource,
    EventType,
    to_json_line,
)
from event_log.writer import StateLogStorage

logger = logging.getLogger(__name__)


class EventsLog:
    """Structured lifecycle event log, one JSON line per event.

    Writes are synchronous; callers that must not block (the session
    controller) run them on their own worker.
    """

    def __init__(self, storage: StateLogStorage) -> None:
        self.storage = storage

    @classmethod
    def in_directory(
        cls,
        base_dir: Path | str,
        app_ttl_days: int = 2,
        session_ttl_days: int = 2,
    ) -> "EventsLog":
        """Build a log writing under *base_dir* with the default file layout."""
        files = LogFilesManager(base_dir, app_ttl_days, session_ttl_days)
        files.ensure_dirs()
        return cls(StateLogStorage(files))

    def log(
        self,
        type: EventType,
        source: EventSource,
        origin: str | None = None,
        session_id: str | None = None,
        data: EventPayload | None = None,
        t_ns: int | None = None,
    ) -> EventLogEntry:
        """Record one event and return the entry that was written."""
        entry = EventLogEntry(
            type=type,
            source=source,
            origin=origin,
            t_ns=time.monotonic_ns() if t_ns is None else t_ns,
            session_id=session_id,
            data=data,
        )
        path = self.storage.append_event(to_json_line(entry), session_id)
        logger.debug("Logged %s to %s", type.value, path.name)
        return entry
