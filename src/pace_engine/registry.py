"""Activity mode registry — the fixed, ordered cycle of training modes."""

from __future__ import annotations

from collections.abc import Sequence

from pace_engine.exceptions import ModeConfigurationError
from pace_engine.models.enums import ActivityMode


class ModeRegistry:
    """Holds the ordered list of selectable modes and cycles through it.

    Every mode is validated on construction so a malformed table fails
    before the first sample arrives rather than in the middle of a run.
    """

    def __init__(self, modes: Sequence[ActivityMode] | None = None) -> None:
        self._modes: tuple[ActivityMode, ...] = tuple(
            ActivityMode if modes is None else modes
        )
        if not self._modes:
            raise ModeConfigurationError("Mode registry needs at least one mode")
        for mode in self._modes:
            _validate_mode(mode)

    @property
    def modes(self) -> tuple[ActivityMode, ...]:
        """Registered modes in cycle order."""
        return self._modes

    @property
    def default(self) -> ActivityMode:
        """The mode a fresh session starts in."""
        return self._modes[0]

    def next(self, current: ActivityMode) -> ActivityMode:
        """Return the mode after *current*, wrapping around.

        An unregistered *current* is treated as sitting at index 0.
        """
        try:
            index = self._modes.index(current)
        except ValueError:
            index = 0
        return self._modes[(index + 1) % len(self._modes)]


def _validate_mode(mode: ActivityMode) -> None:
    """Fail fast on a mode whose ceiling or smoothing table is unusable."""
    if not callable(getattr(mode, "alpha_for_accuracy", None)):
        raise ModeConfigurationError(f"{mode!r} has no alpha provider")
    if mode.max_speed <= 0:
        raise ModeConfigurationError(
            f"{mode.label}: max_speed must be positive, got {mode.max_speed}"
        )
    if not mode.alpha_tiers:
        raise ModeConfigurationError(f"{mode.label}: empty alpha table")
    for _, alpha in mode.alpha_tiers:
        if not 0.0 < alpha <= 1.0:
            raise ModeConfigurationError(
                f"{mode.label}: alpha {alpha} outside (0, 1]"
            )


_DEFAULT_REGISTRY = ModeRegistry()


def next_mode(current: ActivityMode) -> ActivityMode:
    """Cycle RUNNING → WALKING → RUNNING … over the default registry."""
    return _DEFAULT_REGISTRY.next(current)
