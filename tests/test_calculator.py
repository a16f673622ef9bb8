"""Tests for PaceCalculator — filter delegation and display text."""

from __future__ import annotations

import pytest

from pace_engine.calculator import PaceCalculator
from pace_engine.math.pace_filter import PaceFilter
from pace_engine.models.enums import ActivityMode
from pace_engine.models.pace import PaceUpdate

RUN = ActivityMode.RUNNING


def _calc(c: PaceCalculator, speed: float, accuracy: float) -> PaceUpdate | None:
    return c.calculate(speed, accuracy, RUN.max_speed, RUN.alpha_for_accuracy)


class TestPaceCalculator:
    def test_first_update(self, calculator: PaceCalculator) -> None:
        update = _calc(calculator, 4.0, 5.0)
        assert update == PaceUpdate(value=250.0, text="4:10")

    def test_discard_returns_none(self, calculator: PaceCalculator) -> None:
        assert _calc(calculator, 3.0, 40.0) is None
        assert _calc(calculator, 9.0, 5.0) is None

    def test_stationary_placeholder(self, calculator: PaceCalculator) -> None:
        _calc(calculator, 3.0, 5.0)
        update = _calc(calculator, 0.1, 5.0)
        assert update == PaceUpdate(value=0.0, text="0:00")

    def test_blended_text(self, calculator: PaceCalculator) -> None:
        _calc(calculator, 2.5, 5.0)
        update = _calc(calculator, 4.0, 5.0)
        assert update is not None
        assert update.value == pytest.approx(302.5)
        assert update.text == "5:02"

    def test_reset_delegates(self, calculator: PaceCalculator) -> None:
        _calc(calculator, 2.5, 5.0)
        calculator.reset()
        assert not calculator.pace_filter.has_value
        assert _calc(calculator, 4.0, 5.0) == PaceUpdate(value=250.0, text="4:10")

    def test_thresholds_passed_to_filter(self) -> None:
        c = PaceCalculator(stop_threshold=1.0, acc_bad_threshold=20.0)
        assert c.pace_filter.stop_threshold == 1.0
        assert c.pace_filter.acc_bad_threshold == 20.0

    def test_injected_filter_used(self) -> None:
        f = PaceFilter()
        c = PaceCalculator(pace_filter=f)
        _calc(c, 2.5, 5.0)
        assert f.smoothed_pace == pytest.approx(400.0)
