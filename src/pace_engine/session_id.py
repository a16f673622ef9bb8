"""Workout session identifiers: ``YYYYMMDD-HHMMSS-mmm-xxxx`` (UTC)."""

from __future__ import annotations

import random
from datetime import datetime, timezone


def new_session_id(now: datetime | None = None) -> str:
    """Timestamp to the millisecond plus a 4-hex-digit random tail."""
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    stamp = now.strftime("%Y%m%d-%H%M%S")
    millis = now.microsecond // 1000
    tail = random.randrange(0x10000)
    return f"{stamp}-{millis:03d}-{tail:04x}"
