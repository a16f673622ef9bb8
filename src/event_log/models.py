"""Event log entries and their JSON Lines encoding.

One entry per line, compact JSON with camelCase keys. Fields that are None
are left out. The payload carries a ``kind`` discriminator: ``"session"``
while a workout session exists, ``"app"`` otherwise.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Union


class EventType(str, Enum):
    APP_STARTED = "APP_STARTED"
    SERVICE_STARTED = "SERVICE_STARTED"
    SERVICE_STOPPED = "SERVICE_STOPPED"
    WORKOUT_STARTED = "WORKOUT_STARTED"
    WORKOUT_STOPPED = "WORKOUT_STOPPED"
    MODE_CHANGED = "MODE_CHANGED"
    FILTER_SELECTED = "FILTER_SELECTED"
    PERMISSION_RESULT = "PERMISSION_RESULT"
    GPS_SIGNAL_CHANGED = "GPS_SIGNAL_CHANGED"
    ERROR = "ERROR"


class EventSource(str, Enum):
    UI = "UI"
    NOTIFICATION = "NOTIFICATION"
    SERVICE = "SERVICE"
    SYSTEM = "SYSTEM"
    WEAR = "WEAR"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class AppEventData:
    """Payload recorded when no workout session exists."""

    screen: str | None = None
    workout_state: str | None = None
    permission: str | None = None
    granted: bool | None = None
    error_message: str | None = None
    error_stack: str | None = None
    note: str | None = None

    kind = "app"


@dataclass(frozen=True)
class SessionEventData:
    """Snapshot of the session recorded alongside a lifecycle event."""

    workout_state: str
    is_tracking: bool
    activity_mode: str
    pace_text: str | None = None
    training_time_ms: int | None = None
    gps_accuracy_m: float | None = None
    note: str | None = None

    kind = "session"


EventPayload = Union[AppEventData, SessionEventData]


@dataclass(frozen=True, kw_only=True)
class EventLogEntry:
    """One log line. Field order is the key order of the encoded JSON."""

    type: EventType
    source: EventSource
    origin: str | None = None
    t_ns: int
    session_id: str | None = None
    data: EventPayload | None = None


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_dict(obj: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if isinstance(obj, (AppEventData, SessionEventData)):
        out["kind"] = obj.kind
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (AppEventData, SessionEventData)):
            value = _to_dict(value)
        out[_camel(f.name)] = value
    return out


def to_json_line(entry: EventLogEntry) -> str:
    """Encode *entry* as a single JSON line (no trailing newline)."""
    return json.dumps(_to_dict(entry), separators=(",", ":"), ensure_ascii=False)
