"""Exception hierarchy for the pace engine."""

from __future__ import annotations


class PaceEngineError(Exception):
    """Base exception for all pace_engine errors."""


class ModeConfigurationError(PaceEngineError, ValueError):
    """A mode table or filter threshold is malformed.

    Raised at construction time, never while processing samples.
    """
