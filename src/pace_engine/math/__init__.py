"""Pure signal-processing and formatting helpers."""

from pace_engine.math.formatting import format_elapsed, format_pace
from pace_engine.math.pace_filter import PaceFilter

__all__ = ["PaceFilter", "format_elapsed", "format_pace"]
