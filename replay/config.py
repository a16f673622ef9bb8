"""Environment-variable-based configuration for the track replay tool."""

from __future__ import annotations

import os
from pathlib import Path

LOG_DIR: Path = Path(os.environ.get("PACE_LOG_DIR", "logs")).expanduser()
APP_LOG_TTL_DAYS: int = int(os.environ.get("PACE_APP_LOG_TTL_DAYS", "2"))
SESSION_LOG_TTL_DAYS: int = int(os.environ.get("PACE_SESSION_LOG_TTL_DAYS", "2"))
ACTIVITY_MODE: str = os.environ.get("PACE_ACTIVITY_MODE", "RUNNING").upper()
LOG_LEVEL: str = os.environ.get("PACE_LOG_LEVEL", "INFO").upper()
