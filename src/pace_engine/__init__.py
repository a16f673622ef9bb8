"""Pace engine — GPS pace estimation and workout session control."""

from pace_engine.calculator import PaceCalculator
from pace_engine.math.pace_filter import PaceFilter
from pace_engine.models.enums import ActivityMode, WorkoutState
from pace_engine.models.pace import PaceSample, PaceUpdate
from pace_engine.registry import ModeRegistry, next_mode
from pace_engine.session import SessionController

__all__ = [
    "ActivityMode",
    "ModeRegistry",
    "PaceCalculator",
    "PaceFilter",
    "PaceSample",
    "PaceUpdate",
    "SessionController",
    "WorkoutState",
    "next_mode",
]
