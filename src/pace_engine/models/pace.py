"""Pace samples and filter outputs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaceSample:
    """One location fix as delivered by the platform location provider.

    Never persisted; consumed by SessionController.on_sample().
    """

    speed: float  # m/s, >= 0
    accuracy: float  # metres, >= 0, lower is better


@dataclass(frozen=True)
class PaceUpdate:
    """Result of one accepted sample."""

    value: float  # Smoothed pace in s/km, 0 = stationary
    text: str  # "M:SS" or the default placeholder
