"""Display formatting for pace and elapsed time. All functions are pure."""

from __future__ import annotations

import math

from pace_engine.models.enums import PACE_DEFAULT


def format_pace(seconds_per_km: float) -> str:
    """Format a pace in s/km as ``"M:SS"``.

    Non-positive values (stationary / no signal) map to ``"0:00"``.
    Fractional seconds are truncated, so 59.999 renders as ``"0:59"``.
    """
    if seconds_per_km <= 0:
        return PACE_DEFAULT
    total_seconds = math.floor(seconds_per_km)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def format_elapsed(total_ms: int) -> str:
    """Format elapsed milliseconds as ``"MM:SS"``, or ``"H:MM:SS"`` past an hour."""
    total_seconds = max(0, int(total_ms)) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
