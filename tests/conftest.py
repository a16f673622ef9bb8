"""Shared test fixtures: fake clocks, recording sinks, wired controllers."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from event_log.models import EventSource, EventType
from pace_engine.calculator import PaceCalculator
from pace_engine.models.enums import ActivityMode
from pace_engine.session import SessionController
from pace_engine.timer import PaceTimer


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class RecordingEventsLog:
    """Stands in for EventsLog; keeps every call in memory."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def log(
        self,
        type: EventType,
        source: EventSource,
        origin: str | None = None,
        session_id: str | None = None,
        data: Any = None,
        t_ns: int | None = None,
    ) -> None:
        self.calls.append(
            {
                "type": type,
                "source": source,
                "origin": origin,
                "session_id": session_id,
                "data": data,
            }
        )

    @property
    def types(self) -> list[EventType]:
        return [c["type"] for c in self.calls]


class RecordingWearSender:
    def __init__(self) -> None:
        self.sent: list[str] = []

    def send_pace(self, pace_text: str) -> None:
        self.sent.append(pace_text)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_scheduler() -> MagicMock:
    """APScheduler stand-in; add_job returns a removable mock job."""
    scheduler = MagicMock()
    scheduler.running = True
    return scheduler


@pytest.fixture
def pace_timer(fake_clock: FakeClock, mock_scheduler: MagicMock) -> PaceTimer:
    return PaceTimer(clock=fake_clock, scheduler=mock_scheduler)


@pytest.fixture
def events_sink() -> RecordingEventsLog:
    return RecordingEventsLog()


@pytest.fixture
def wear_sink() -> RecordingWearSender:
    return RecordingWearSender()


@pytest.fixture
def calculator() -> PaceCalculator:
    return PaceCalculator()


@pytest.fixture
def controller(
    calculator: PaceCalculator,
    pace_timer: PaceTimer,
    wear_sink: RecordingWearSender,
    events_sink: RecordingEventsLog,
):
    """Fresh IDLE controller in RUNNING mode with in-memory collaborators."""
    ids = iter(f"session-{n}" for n in range(1, 100))
    ctrl = SessionController(
        calculator=calculator,
        timer=pace_timer,
        wear_sender=wear_sink,
        events_log=events_sink,
        session_id_factory=lambda: next(ids),
        initial_mode=ActivityMode.RUNNING,
    )
    yield ctrl
    ctrl.close()

