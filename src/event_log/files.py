"""Log file naming and retention.

Layout under the base directory:
    app-YYYY-MM-DD.jsonl     one file per UTC day for events outside a session
    session-<id>.jsonl       one file per workout session
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

_MS_PER_DAY = 24 * 60 * 60 * 1000
_LOG_SUFFIX = ".jsonl"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class LogFilesManager:
    """Resolves log file paths and prunes expired ones."""

    def __init__(
        self,
        base_dir: Path | str,
        app_ttl_days: int = 2,
        session_ttl_days: int = 2,
    ) -> None:
        self.logs_dir = Path(base_dir)
        self.app_ttl_days = app_ttl_days
        self.session_ttl_days = session_ttl_days

    def ensure_dirs(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def app_log_file(self, now_ms: int | None = None) -> Path:
        if now_ms is None:
            now_ms = _now_ms()
        day = datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")
        return self.logs_dir / f"app-{day}{_LOG_SUFFIX}"

    def session_log_file(self, session_id: str) -> Path:
        return self.logs_dir / f"session-{session_id}{_LOG_SUFFIX}"

    def cleanup_old_logs(self, now_ms: int | None = None) -> list[Path]:
        """Delete app/session logs last modified before their TTL cutoff.

        Returns the paths that were removed. Files that cannot be deleted are
        logged and skipped.
        """
        if now_ms is None:
            now_ms = _now_ms()
        if not self.logs_dir.is_dir():
            return []

        removed: list[Path] = []
        for prefix, ttl_days in (
            ("app-", self.app_ttl_days),
            ("session-", self.session_ttl_days),
        ):
            cutoff_ms = now_ms - ttl_days * _MS_PER_DAY
            for path in self.logs_dir.iterdir():
                if not (
                    path.is_file()
                    and path.name.startswith(prefix)
                    and path.name.endswith(_LOG_SUFFIX)
                ):
                    continue
                if path.stat().st_mtime * 1000 >= cutoff_ms:
                    continue
                try:
                    path.unlink()
                    removed.append(path)
                except OSError:
                    logger.warning("Failed to delete expired log %s", path)
        if removed:
            logger.info("Removed %d expired log file(s)", len(removed))
        return removed
