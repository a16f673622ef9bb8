"""Workout elapsed-time clock.

WorkoutTimer does the bookkeeping with explicit timestamps; PaceTimer wraps
it with a monotonic clock, an observable, and an APScheduler tick that
republishes the elapsed time once per second while running.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from pace_engine.models.enums import TIMER_TICK_INTERVAL_S
from pace_engine.observable import Observable

logger = logging.getLogger(__name__)

_TICK_JOB_ID = "pace_timer_tick"


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class WorkoutTimer:
    """Accumulates running time across start/stop cycles."""

    def __init__(self) -> None:
        self._accumulated_ms = 0
        self._started_at_ms: int | None = None

    @property
    def is_running(self) -> bool:
        return self._started_at_ms is not None

    def start_timer(self, now_ms: int) -> None:
        """Start counting from *now_ms*. No-op when already running."""
        if self._started_at_ms is not None:
            return
        self._started_at_ms = now_ms

    def on_stop(self, now_ms: int) -> int:
        """Stop counting and return the accumulated total."""
        if self._started_at_ms is None:
            return self._accumulated_ms
        self._accumulated_ms += now_ms - self._started_at_ms
        self._started_at_ms = None
        return self._accumulated_ms

    def current_ms(self, now_ms: int) -> int:
        if self._started_at_ms is None:
            return self._accumulated_ms
        return self._accumulated_ms + (now_ms - self._started_at_ms)

    def reset(self) -> None:
        self._accumulated_ms = 0
        self._started_at_ms = None


class PaceTimer:
    """Elapsed-time clock exposing ``training_time_ms`` as an Observable.

    Usage:
        timer = PaceTimer()
        timer.start()
        timer.training_time_ms.subscribe(print)
        timer.stop()

    Args:
        clock: Returns the current time in milliseconds (monotonic).
        scheduler: An APScheduler scheduler used for the per-second tick.
                   Created lazily as a BackgroundScheduler when omitted.
        tick_interval_s: Seconds between republishes while running.
    """

    def __init__(
        self,
        clock: Callable[[], int] = _monotonic_ms,
        scheduler: Any = None,
        tick_interval_s: float = TIMER_TICK_INTERVAL_S,
    ) -> None:
        self._clock = clock
        self._scheduler = scheduler
        self._tick_interval_s = tick_interval_s
        self._tick_job: Any = None
        self._lock = threading.RLock()
        self.timer = WorkoutTimer()
        self.training_time_ms: Observable[int] = Observable(0, name="training_time_ms")

    @property
    def is_running(self) -> bool:
        return self.timer.is_running

    def start(self) -> None:
        """Start the clock and publish immediately. No-op when running."""
        with self._lock:
            if self.timer.is_running:
                return
            now = self._clock()
            self.timer.start_timer(now)
            self._publish(now)
            self._start_ticking()

    def stop(self) -> None:
        """Freeze the clock, keeping the accumulated time."""
        with self._lock:
            now = self._clock()
            self.timer.on_stop(now)
            self._publish(now)
            self._stop_ticking()

    def reset(self) -> None:
        """Stop the clock and zero it."""
        with self._lock:
            self.stop()
            self.timer.reset()
            self.training_time_ms.set(0)

    def shutdown(self) -> None:
        """Release the scheduler thread, if one was started."""
        with self._lock:
            self._stop_ticking()
        if self._scheduler is not None and getattr(self._scheduler, "running", False):
            self._scheduler.shutdown(wait=False)
            logger.debug("Timer scheduler shut down")

    def publish_now(self) -> None:
        """Republish the elapsed time. Skipped while the clock is stopped."""
        with self._lock:
            if not self.timer.is_running:
                return
            self._publish(self._clock())

    def _publish(self, now_ms: int) -> None:
        self.training_time_ms.set(self.timer.current_ms(now_ms))

    def _start_ticking(self) -> None:
        scheduler = self._ensure_scheduler()
        self._tick_job = scheduler.add_job(
            self.publish_now,
            "interval",
            seconds=self._tick_interval_s,
            id=_TICK_JOB_ID,
            replace_existing=True,
        )

    def _stop_ticking(self) -> None:
        if self._tick_job is None:
            return
        try:
            self._tick_job.remove()
        except Exception:
            logger.debug("Tick job already gone", exc_info=True)
        self._tick_job = None

    def _ensure_scheduler(self) -> Any:
        if self._scheduler is None:
            from apscheduler.schedulers.background import BackgroundScheduler

            self._scheduler = BackgroundScheduler(daemon=True)
        if not getattr(self._scheduler, "running", False):
            self._scheduler.start()
        return self._scheduler
