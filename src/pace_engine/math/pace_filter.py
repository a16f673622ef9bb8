"""Pace filter: GPS speed/accuracy gating plus exponential smoothing.

Pipeline for one fix:
    1. accuracy gate:   fixes worse than ``acc_bad_threshold`` are dropped
    2. stationary gate: speeds under ``stop_threshold`` report pace 0
    3. ceiling gate:    speeds over the mode's ``max_speed`` are dropped
    4. instantaneous pace = 1000 / speed  (s/km)
    5. EMA with an accuracy-dependent alpha supplied by the active mode
"""

from __future__ import annotations

from typing import Callable

from pace_engine.exceptions import ModeConfigurationError
from pace_engine.models.enums import ACC_BAD_THRESHOLD, METERS_PER_KM, STOP_THRESHOLD

AlphaProvider = Callable[[float], float]


class PaceFilter:
    """Stateful smoother turning noisy fixes into a stable pace in s/km.

    A stored pace of 0 and "no pace yet" are tracked separately: stopping
    reports 0 without touching the running average, so resuming blends
    from the pre-stop value instead of reseeding.
    """

    def __init__(
        self,
        stop_threshold: float = STOP_THRESHOLD,
        acc_bad_threshold: float = ACC_BAD_THRESHOLD,
    ) -> None:
        if stop_threshold <= 0:
            raise ModeConfigurationError(
                f"stop_threshold must be positive, got {stop_threshold}"
            )
        if acc_bad_threshold <= 0:
            raise ModeConfigurationError(
                f"acc_bad_threshold must be positive, got {acc_bad_threshold}"
            )
        self.stop_threshold = stop_threshold
        self.acc_bad_threshold = acc_bad_threshold
        self._ema_pace = 0.0
        self._has_value = False

    @property
    def has_value(self) -> bool:
        """Whether a smoothed pace has been seeded since the last reset."""
        return self._has_value

    @property
    def smoothed_pace(self) -> float | None:
        """Current running average in s/km, or None before the first fix."""
        return self._ema_pace if self._has_value else None

    def reset(self) -> None:
        """Forget the running average; the next moving fix seeds it afresh."""
        self._ema_pace = 0.0
        self._has_value = False

    def apply(
        self,
        speed: float,
        accuracy: float,
        max_speed: float,
        alpha_provider: AlphaProvider,
    ) -> float | None:
        """Filter one fix.

        Args:
            speed: Ground speed in m/s.
            accuracy: Horizontal accuracy radius in metres.
            max_speed: Plausibility ceiling of the active mode (m/s).
            alpha_provider: Maps accuracy to an EMA weight in (0, 1].

        Returns:
            Smoothed pace in s/km (0 while stationary), or None when the
            fix is discarded. Discarded fixes never change filter state.
        """
        instant_pace = self._instant_pace(speed, accuracy, max_speed)
        if instant_pace is None:
            return None
        return self._smooth(instant_pace, accuracy, alpha_provider)

    def _instant_pace(
        self, speed: float, accuracy: float, max_speed: float
    ) -> float | None:
        if accuracy > self.acc_bad_threshold:
            return None
        if speed < self.stop_threshold:
            return 0.0
        if speed > max_speed:
            return None
        return METERS_PER_KM / speed

    def _smooth(
        self, instant_pace: float, accuracy: float, alpha_provider: AlphaProvider
    ) -> float:
        if instant_pace <= 0.0:
            return 0.0
        if not self._has_value:
            self._ema_pace = instant_pace
            self._has_value = True
            return instant_pace
        alpha = alpha_provider(accuracy)
        self._ema_pace = alpha * instant_pace + (1.0 - alpha) * self._ema_pace
        return self._ema_pace
