"""SessionController — workout lifecycle and the live pace pipeline.

State machine:

    state   | start()          | stop()          | save()        | change_mode() | on_sample()
    --------+------------------+-----------------+---------------+---------------+-----------
    IDLE    | → ACTIVE, reset  | tracking off    | clear session | advance, reset| dropped
    ACTIVE  | re-assert only   | pause (ACTIVE)  | → IDLE        | ignored       | processed

Only ``save()`` tears a session down; ``stop()`` is a pause that keeps the
session id, the elapsed time and the running pace average. Neither touches
the published pace, which changes only on accepted fixes.

``current_pace`` and ``current_pace_value`` are set one after the other, so a
subscriber to one may briefly see the previous value of the other. Subscribe
to ``pace_update`` when the pair has to be read together.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Protocol

from event_log.models import (
    AppEventData,
    EventPayload,
    EventSource,
    EventType,
    SessionEventData,
)
from pace_engine.calculator import PaceCalculator
from pace_engine.models.enums import PACE_DEFAULT, ActivityMode, WorkoutState
from pace_engine.models.pace import PaceSample, PaceUpdate
from pace_engine.observable import Observable
from pace_engine.registry import ModeRegistry
from pace_engine.session_id import new_session_id
from pace_engine.timer import PaceTimer

logger = logging.getLogger(__name__)


class WearSink(Protocol):
    def send_pace(self, pace_text: str) -> None: ...


class EventSink(Protocol):
    def log(
        self,
        type: EventType,
        source: EventSource,
        origin: str | None = None,
        session_id: str | None = None,
        data: EventPayload | None = None,
        t_ns: int | None = None,
    ) -> Any: ...


class SessionController:
    """Owns tracking/workout state and feeds location fixes to the calculator.

    Usage:
        controller = SessionController(events_log=EventsLog.in_directory("logs"))
        controller.start()
        controller.on_sample(speed=3.0, accuracy=5.0)
        controller.current_pace.value   # "5:33"
        controller.save()
        controller.close()

    All operations are serialized on one lock, so fixes arriving from several
    threads are applied to the running average one at a time and reach the
    wearable in the order they were published. Event logging runs on a
    single background worker and never blocks sample processing.
    """

    def __init__(
        self,
        calculator: PaceCalculator | None = None,
        timer: PaceTimer | None = None,
        wear_sender: WearSink | None = None,
        events_log: EventSink | None = None,
        registry: ModeRegistry | None = None,
        session_id_factory: Callable[[], str] = new_session_id,
        initial_mode: ActivityMode | None = None,
    ) -> None:
        self.calculator = calculator or PaceCalculator()
        self.timer = timer or PaceTimer()
        self.wear_sender = wear_sender
        self.events_log = events_log
        self.registry = registry or ModeRegistry()
        self._session_id_factory = session_id_factory

        self._lock = threading.RLock()
        self._log_executor: ThreadPoolExecutor | None = None
        self._last_log: Future | None = None

        mode = initial_mode or self.registry.default
        if mode not in self.registry.modes:
            raise ValueError(f"{mode!r} is not a registered mode")

        self.pace_update: Observable[PaceUpdate | None] = Observable(None, name="pace_update")
        self.current_pace: Observable[str] = Observable(PACE_DEFAULT, name="current_pace")
        self.current_pace_value: Observable[float] = Observable(0.0, name="current_pace_value")
        self.activity_mode: Observable[ActivityMode] = Observable(mode, name="activity_mode")
        self.is_tracking: Observable[bool] = Observable(False, name="is_tracking")
        self.workout_state: Observable[WorkoutState] = Observable(
            WorkoutState.IDLE, name="workout_state"
        )
        self.current_gps_accuracy: Observable[float] = Observable(
            0.0, name="current_gps_accuracy"
        )
        self.current_session_id: Observable[str | None] = Observable(
            None, name="current_session_id"
        )

    @property
    def training_time_ms(self) -> Observable[int]:
        return self.timer.training_time_ms

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin or resume tracking.

        A fresh session gets an id and an unsmoothed filter; resuming a
        paused session keeps both.
        """
        with self._lock:
            was_idle = self.workout_state.value == WorkoutState.IDLE
            if not self.current_session_id.value:
                self.current_session_id.set(self._session_id_factory())

            if was_idle:
                self.calculator.reset()
            self.is_tracking.set(True)
            self.workout_state.set(WorkoutState.ACTIVE)
            self.timer.start()
            logger.info(
                "Tracking started (session=%s, mode=%s, fresh=%s)",
                self.current_session_id.value,
                self.activity_mode.value.label,
                was_idle,
            )
            self._record(EventType.WORKOUT_STARTED, EventSource.SERVICE, "SessionController.start")

    def stop(self) -> None:
        """Pause: stop accepting fixes and freeze the clock."""
        with self._lock:
            self.is_tracking.set(False)
            self.current_gps_accuracy.set(0.0)
            self.timer.stop()
            logger.info("Tracking paused (session=%s)", self.current_session_id.value)
            self._record(EventType.WORKOUT_STOPPED, EventSource.SERVICE, "SessionController.stop")

    def save(self) -> None:
        """Finalize the session and return to IDLE."""
        with self._lock:
            self.timer.stop()
            self.is_tracking.set(False)

            self.calculator.reset()
            self.timer.reset()
            self.current_gps_accuracy.set(0.0)

            self.workout_state.set(WorkoutState.IDLE)
            ended = self.current_session_id.value
            self.current_session_id.set(None)
            logger.info("Session %s saved", ended)
            self._record(
                EventType.SERVICE_STOPPED,
                EventSource.UI,
                "SessionController.save",
                note="Tracking saved and repository reset",
            )

    def change_mode(self) -> ActivityMode:
        """Advance to the next activity mode. Ignored while a session is active.

        Returns the mode in effect afterwards.
        """
        with self._lock:
            note = None
            if self.workout_state.value == WorkoutState.IDLE:
                self.activity_mode.set(self.registry.next(self.activity_mode.value))
                self.calculator.reset()
                logger.info("Activity mode changed to %s", self.activity_mode.value.label)
            else:
                note = "ignored: workout active"
                logger.debug("Mode change ignored while workout is active")
            self._record(
                EventType.MODE_CHANGED, EventSource.UI, "SessionController.change_mode", note=note
            )
            return self.activity_mode.value

    # ------------------------------------------------------------------
    # Samples
    # ------------------------------------------------------------------

    def on_sample(self, speed: float, accuracy: float) -> PaceUpdate | None:
        """Process one location fix.

        Accuracy is published before any gating; pace is published only
        when the calculator accepts the fix.

        Returns:
            The PaceUpdate, or None if tracking is off or the fix was discarded.
        """
        with self._lock:
            if not self.is_tracking.value:
                return None

            self.current_gps_accuracy.set(accuracy)

            mode = self.activity_mode.value
            update = self.calculator.calculate(
                speed=speed,
                accuracy=accuracy,
                max_speed=mode.max_speed,
                alpha_provider=mode.alpha_for_accuracy,
            )
            if update is None:
                logger.debug("Discarded fix speed=%.2f acc=%.1f", speed, accuracy)
                return None

            self.pace_update.set(update)
            self.current_pace_value.set(update.value)
            self.current_pace.set(update.text)
            logger.debug("SPD: %.2f | PACE: %s", speed, update.text)
            self._push_to_wear(update.text)
        return update

    def submit(self, sample: PaceSample) -> PaceUpdate | None:
        return self.on_sample(sample.speed, sample.accuracy)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def flush(self, timeout: float | None = None) -> None:
        """Block until every event submitted so far has been recorded."""
        pending = self._last_log
        if pending is not None:
            pending.exception(timeout=timeout)

    def close(self) -> None:
        """Drain the event log worker and release the clock's scheduler."""
        if self._log_executor is not None:
            self._log_executor.shutdown(wait=True)
            self._log_executor = None
        self.timer.shutdown()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _push_to_wear(self, pace_text: str) -> None:
        if self.wear_sender is None:
            return
        try:
            self.wear_sender.send_pace(pace_text)
        except Exception:
            logger.warning("Wearable push failed", exc_info=True)

    def _snapshot(self, note: str | None) -> EventPayload:
        session_id = self.current_session_id.value
        if session_id:
            return SessionEventData(
                workout_state=self.workout_state.value.name,
                is_tracking=self.is_tracking.value,
                activity_mode=self.activity_mode.value.label,
                pace_text=self.current_pace.value,
                training_time_ms=self.training_time_ms.value,
                gps_accuracy_m=self.current_gps_accuracy.value,
                note=note,
            )
        return AppEventData(workout_state=self.workout_state.value.name, note=note)

    def _record(
        self,
        type: EventType,
        source: EventSource,
        origin: str,
        note: str | None = None,
    ) -> None:
        """Snapshot state now, write it in the background."""
        if self.events_log is None:
            return
        session_id = self.current_session_id.value
        data = self._snapshot(note)

        if self._log_executor is None:
            self._log_executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="event-log"
            )
        future = self._log_executor.submit(
            self.events_log.log,
            type=type,
            source=source,
            origin=origin,
            session_id=session_id,
            data=data,
        )
        future.add_done_callback(_report_log_failure)
        self._last_log = future


def _report_log_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.warning("Failed to record event: %s", exc)
