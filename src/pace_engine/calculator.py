"""PaceCalculator — runs the filter and formats its output for display."""

from __future__ import annotations

from pace_engine.math.formatting import format_pace
from pace_engine.math.pace_filter import AlphaProvider, PaceFilter
from pace_engine.models.enums import ACC_BAD_THRESHOLD, STOP_THRESHOLD
from pace_engine.models.pace import PaceUpdate


class PaceCalculator:
    """Wraps a PaceFilter and turns accepted fixes into PaceUpdates."""

    def __init__(
        self,
        stop_threshold: float = STOP_THRESHOLD,
        acc_bad_threshold: float = ACC_BAD_THRESHOLD,
        pace_filter: PaceFilter | None = None,
    ) -> None:
        self.pace_filter = pace_filter or PaceFilter(
            stop_threshold=stop_threshold,
            acc_bad_threshold=acc_bad_threshold,
        )

    def reset(self) -> None:
        self.pace_filter.reset()

    def calculate(
        self,
        speed: float,
        accuracy: float,
        max_speed: float,
        alpha_provider: AlphaProvider,
    ) -> PaceUpdate | None:
        """Return the formatted pace for one fix, or None if it was discarded."""
        filtered = self.pace_filter.apply(
            speed=speed,
            accuracy=accuracy,
            max_speed=max_speed,
            alpha_provider=alpha_provider,
        )
        if filtered is None:
            return None
        return PaceUpdate(value=filtered, text=format_pace(filtered))
