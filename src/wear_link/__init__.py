"""Phone → wearable pace relay."""

from wear_link.listener import PaceDataListener, WearPaceRepository
from wear_link.sender import PACE_KEY, PACE_PATH, WearPaceSender, build_pace_item

__all__ = [
    "PACE_KEY",
    "PACE_PATH",
    "PaceDataListener",
    "WearPaceRepository",
    "WearPaceSender",
    "build_pace_item",
]
