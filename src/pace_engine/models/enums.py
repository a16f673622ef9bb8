"""Enumerations and filter constants for the pace engine.

Activity modes carry their own speed ceiling and smoothing table so the
filter never needs to know which mode is active.
"""

from enum import Enum, IntEnum, auto


class WorkoutState(IntEnum):
    """Session lifecycle. ACTIVE covers both running and paused sessions."""

    IDLE = auto()
    ACTIVE = auto()


class ActivityMode(Enum):
    """Training modes with their plausibility and smoothing parameters.

    Each value is ``(label, max_speed_m_per_s, alpha_tiers)`` where
    ``alpha_tiers`` is a sequence of ``(accuracy_above_m, alpha)`` pairs
    checked in order, ending with a catch-all tier.
    """

    RUNNING = ("RUNNING", 8.5, ((25.0, 0.10), (10.0, 0.30), (0.0, 0.65)))
    WALKING = ("WALKING", 3.5, ((25.0, 0.05), (10.0, 0.15), (0.0, 0.40)))

    def __init__(
        self,
        label: str,
        max_speed: float,
        alpha_tiers: tuple[tuple[float, float], ...],
    ) -> None:
        self.label = label
        self.max_speed = max_speed
        self.alpha_tiers = alpha_tiers

    def alpha_for_accuracy(self, accuracy: float) -> float:
        """EMA weight for a fix of the given accuracy (metres, lower is better).

        Worse accuracy gives a lower weight, i.e. heavier smoothing.
        """
        for threshold, alpha in self.alpha_tiers[:-1]:
            if accuracy > threshold:
                return alpha
        return self.alpha_tiers[-1][1]


# ---------------------------------------------------------------------------
# Filter constants
# ---------------------------------------------------------------------------

# Below this speed (m/s) the athlete is treated as standing still
STOP_THRESHOLD = 0.5

# Fixes with an accuracy radius above this (metres) are discarded outright
ACC_BAD_THRESHOLD = 35.0

# Metres in the distance unit pace is expressed against
METERS_PER_KM = 1000.0

# Display text when there is no valid pace
PACE_DEFAULT = "0:00"

# Elapsed-clock publish interval while running (seconds)
TIMER_TICK_INTERVAL_S = 1.0
