"""Tests for PaceFilter — gating and exponential smoothing of GPS pace."""

from __future__ import annotations

import pytest

from pace_engine.exceptions import ModeConfigurationError
from pace_engine.math.pace_filter import PaceFilter
from pace_engine.models.enums import ActivityMode

RUN = ActivityMode.RUNNING
WALK = ActivityMode.WALKING


def _apply(f: PaceFilter, speed: float, accuracy: float, mode: ActivityMode = RUN):
    return f.apply(speed, accuracy, mode.max_speed, mode.alpha_for_accuracy)


class TestGates:
    def setup_method(self) -> None:
        self.filter = PaceFilter()

    def test_defaults(self) -> None:
        assert self.filter.stop_threshold == 0.5
        assert self.filter.acc_bad_threshold == 35.0

    def test_bad_accuracy_discarded(self) -> None:
        assert _apply(self.filter, 3.0, 40.0) is None

    def test_bad_accuracy_discarded_even_when_stationary(self) -> None:
        assert _apply(self.filter, 0.0, 50.0) is None

    def test_accuracy_at_threshold_accepted(self) -> None:
        # 35.0 is not "> 35.0"
        assert _apply(self.filter, 4.0, 35.0) == pytest.approx(250.0)

    def test_stationary_reports_zero(self) -> None:
        assert _apply(self.filter, 0.1, 5.0) == 0.0

    def test_speed_at_stop_threshold_is_moving(self) -> None:
        assert _apply(self.filter, 0.5, 5.0) == pytest.approx(2000.0)

    def test_running_ceiling_discards(self) -> None:
        assert _apply(self.filter, 9.0, 5.0, RUN) is None

    def test_walking_ceiling_discards(self) -> None:
        assert _apply(self.filter, 9.0, 5.0, WALK) is None
        assert _apply(self.filter, 4.0, 5.0, WALK) is None

    def test_speed_at_ceiling_accepted(self) -> None:
        assert _apply(self.filter, 8.5, 5.0, RUN) == pytest.approx(1000.0 / 8.5)

    def test_discard_does_not_mutate(self) -> None:
        _apply(self.filter, 2.5, 5.0)
        assert _apply(self.filter, 3.0, 40.0) is None
        assert _apply(self.filter, 9.0, 5.0) is None
        assert self.filter.smoothed_pace == pytest.approx(400.0)

    def test_custom_thresholds(self) -> None:
        f = PaceFilter(stop_threshold=1.0, acc_bad_threshold=20.0)
        assert _apply(f, 0.8, 5.0) == 0.0
        assert _apply(f, 3.0, 21.0) is None

    @pytest.mark.parametrize(
        "kwargs",
        [{"stop_threshold": 0.0}, {"stop_threshold": -1.0}, {"acc_bad_threshold": 0.0}],
    )
    def test_non_positive_thresholds_fail_fast(self, kwargs: dict) -> None:
        with pytest.raises(ModeConfigurationError):
            PaceFilter(**kwargs)


class TestSmoothing:
    def setup_method(self) -> None:
        self.filter = PaceFilter()

    def test_first_sample_seeds_exactly(self) -> None:
        assert _apply(self.filter, 4.0, 5.0) == 250.0
        assert self.filter.has_value

    def test_good_accuracy_blend(self) -> None:
        _apply(self.filter, 2.5, 5.0)  # 400 s/km
        # alpha 0.65: 0.65 * 250 + 0.35 * 400
        assert _apply(self.filter, 4.0, 5.0) == pytest.approx(302.5)

    def test_poor_accuracy_damps_more(self) -> None:
        _apply(self.filter, 2.5, 5.0)
        # 20 m accuracy → alpha 0.30: 0.30 * 250 + 0.70 * 400
        assert _apply(self.filter, 4.0, 20.0) == pytest.approx(355.0)

    def test_walking_alpha_used(self) -> None:
        _apply(self.filter, 2.5, 5.0, WALK)
        # alpha 0.40: 0.40 * 333.33 + 0.60 * 400
        assert _apply(self.filter, 3.0, 5.0, WALK) == pytest.approx(
            0.40 * (1000.0 / 3.0) + 0.60 * 400.0
        )

    def test_stop_keeps_running_average(self) -> None:
        _apply(self.filter, 2.5, 5.0)
        assert _apply(self.filter, 0.1, 5.0) == 0.0
        assert self.filter.smoothed_pace == pytest.approx(400.0)
        # Resumes by blending with 400, not by reseeding at 250
        assert _apply(self.filter, 4.0, 5.0) == pytest.approx(302.5)

    def test_repeated_stationary_samples(self) -> None:
        _apply(self.filter, 2.5, 5.0)
        for _ in range(5):
            assert _apply(self.filter, 0.2, 8.0) == 0.0
        assert self.filter.smoothed_pace == pytest.approx(400.0)

    def test_stationary_first_sample_does_not_seed(self) -> None:
        assert _apply(self.filter, 0.0, 5.0) == 0.0
        assert not self.filter.has_value
        assert self.filter.smoothed_pace is None
        assert _apply(self.filter, 4.0, 5.0) == 250.0

    def test_reset_reseeds(self) -> None:
        _apply(self.filter, 2.5, 5.0)
        self.filter.reset()
        assert self.filter.smoothed_pace is None
        assert _apply(self.filter, 4.0, 5.0) == 250.0

    def test_alpha_provider_receives_accuracy(self) -> None:
        seen: list[float] = []

        def provider(acc: float) -> float:
            seen.append(acc)
            return 0.5

        self.filter.apply(2.5, 5.0, 8.5, provider)  # seed, provider not consulted
        result = self.filter.apply(4.0, 12.0, 8.5, provider)
        assert seen == [12.0]
        assert result == pytest.approx(325.0)
