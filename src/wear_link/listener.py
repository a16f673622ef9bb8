"""Watch side: receive pace data items and hold the latest value."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pace_engine.models.enums import PACE_DEFAULT
from pace_engine.observable import Observable
from wear_link.sender import PACE_KEY, PACE_PATH

# Data event types as reported by the data layer
TYPE_CHANGED = 1
TYPE_DELETED = 2


class WearPaceRepository:
    """Latest pace shown on the watch face complication."""

    def __init__(self, initial: str = PACE_DEFAULT) -> None:
        self.current_pace: Observable[str] = Observable(initial, name="wear_pace")

    def update_pace(self, pace_text: str) -> None:
        self.current_pace.set(pace_text)


class PaceDataListener:
    """Applies changed pace items from a batch of data events.

    Each event is a mapping with ``type``, ``path`` and ``data`` keys.
    Events on other paths, and deletions, are ignored.
    """

    def __init__(self, repository: WearPaceRepository) -> None:
        self.repository = repository

    def on_data_changed(self, events: Iterable[Mapping[str, Any]]) -> int:
        """Returns the number of pace updates applied."""
        applied = 0
        for event in events:
            if event.get("type") != TYPE_CHANGED or event.get("path") != PACE_PATH:
                continue
            data = event.get("data") or {}
            self.repository.update_pace(data.get(PACE_KEY, PACE_DEFAULT))
            applied += 1
        return applied
