"""Tests for workout session id generation."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from pace_engine.session_id import new_session_id

_ID_PATTERN = re.compile(r"^\d{8}-\d{6}-\d{3}-[0-9a-f]{4}$")


class TestNewSessionId:
    def test_format(self) -> None:
        assert _ID_PATTERN.match(new_session_id())

    def test_timestamp_part(self) -> None:
        now = datetime(2025, 1, 15, 8, 0, 0, 123_456, tzinfo=timezone.utc)
        assert new_session_id(now).startswith("20250115-080000-123-")

    def test_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        now = datetime(2025, 1, 15, 10, 30, 0, tzinfo=plus_two)
        assert new_session_id(now).startswith("20250115-083000-000-")

    def test_same_instant_ids_differ_in_tail(self) -> None:
        now = datetime(2025, 1, 15, 8, 0, 0, tzinfo=timezone.utc)
        ids = {new_session_id(now) for _ in range(50)}
        assert len(ids) > 1
