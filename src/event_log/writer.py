"""Append-only JSON Lines writer and the storage router built on it."""

from __future__ import annotations

import threading
from pathlib import Path

from event_log.exceptions import EventLogWriteError
from event_log.files import LogFilesManager


class JsonlFileWriter:
    """Appends whole lines to files; concurrent appends never interleave."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def append_line(self, path: Path, line: str) -> None:
        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "a", encoding="utf-8") as f:
                    f.write(line)
                    f.write("\n")
            except OSError as exc:
                raise EventLogWriteError(
                    f"Could not append to {path}: {exc}", path=path
                ) from exc


class StateLogStorage:
    """Routes each encoded event to the app log or its session log."""

    def __init__(self, files: LogFilesManager, writer: JsonlFileWriter | None = None) -> None:
        self.files = files
        self.writer = writer or JsonlFileWriter()

    def append_event(self, json_line: str, session_id: str | None) -> Path:
        """Append *json_line* and return the file it went to."""
        if session_id:
            path = self.files.session_log_file(session_id)
        else:
            path = self.files.app_log_file()
        self.writer.append_line(path, json_line)
        return path
