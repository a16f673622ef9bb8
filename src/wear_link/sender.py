"""Phone side: push the current pace text to the paired wearable.

The data item mirrors the Wear OS data layer: a path plus a small data map.
Delivery is left to an injected transport callable.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

PACE_PATH = "/pace_updates"
PACE_KEY = "pace_key"
TIMESTAMP_KEY = "timestamp"

Transport = Callable[[dict[str, Any]], Any]


def _wall_ms() -> int:
    return time.time_ns() // 1_000_000


def build_pace_item(pace_text: str, timestamp_ms: int) -> dict[str, Any]:
    """Data item carrying one pace update."""
    return {
        "path": PACE_PATH,
        "data": {PACE_KEY: pace_text, TIMESTAMP_KEY: timestamp_ms},
    }


class WearPaceSender:
    """Best-effort, fire-and-forget pace pushes.

    Without a transport every push is a no-op, matching a phone with no
    watch paired. Transport failures are logged and swallowed.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        clock: Callable[[], int] = _wall_ms,
    ) -> None:
        self._transport = transport
        self._clock = clock

    def attach(self, transport: Transport) -> None:
        self._transport = transport

    def send_pace(self, pace_text: str) -> None:
        if self._transport is None:
            return
        item = build_pace_item(pace_text, self._clock())
        try:
            self._transport(item)
        except Exception:
            logger.warning("Failed to push pace %s to wearable", pace_text, exc_info=True)
