"""Data models for the pace engine."""

from pace_engine.models.enums import ActivityMode, WorkoutState
from pace_engine.models.pace import PaceSample, PaceUpdate

__all__ = [
    "ActivityMode",
    "PaceSample",
    "PaceUpdate",
    "WorkoutState",
]
