"""Track replay — run a recorded GPS track through the live pace pipeline.

The track is a CSV with ``speed`` (m/s) and ``accuracy`` (m) columns, one
row per fix in arrival order. Rows are fed to a real SessionController
between start() and save(), so the event log is written exactly as on a
device.

Usage:
    python -m replay.cli track.csv
    python -m replay.cli track.csv --mode WALKING --log-dir /tmp/pace-logs
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from event_log import EventsLog, EventSource, EventType
from pace_engine.math.formatting import format_elapsed, format_pace
from pace_engine.models.enums import ActivityMode
from pace_engine.session import SessionController
from wear_link import WearPaceSender

from replay.config import (
    ACTIVITY_MODE,
    APP_LOG_TTL_DAYS,
    LOG_DIR,
    LOG_LEVEL,
    SESSION_LOG_TTL_DAYS,
)

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ("speed", "accuracy")


@dataclass
class ReplayResult:
    """Per-fix outcomes of one replay."""

    session_id: str | None = None
    paces: list[float | None] = field(default_factory=list)
    texts: list[str | None] = field(default_factory=list)
    elapsed_ms: int = 0

    @property
    def accepted(self) -> int:
        return sum(1 for p in self.paces if p is not None)

    @property
    def discarded(self) -> int:
        return len(self.paces) - self.accepted

    def mean_moving_pace(self) -> float:
        """Mean of accepted non-zero paces in s/km, 0 when there are none."""
        moving = np.array([p for p in self.paces if p], dtype=np.float64)
        if moving.size == 0:
            return 0.0
        return float(np.mean(moving))


def load_track(path: Path | str) -> pd.DataFrame:
    """Read a track CSV and validate its columns.

    Raises:
        ValueError: If a required column is missing or holds negative values.
    """
    df = pd.read_csv(path)
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Track {path} is missing column(s): {', '.join(missing)}")
    df = df.dropna(subset=list(_REQUIRED_COLUMNS)).astype(
        {"speed": "float64", "accuracy": "float64"}
    )
    if (df[list(_REQUIRED_COLUMNS)] < 0).any().any():
        raise ValueError(f"Track {path} contains negative speed or accuracy")
    return df.reset_index(drop=True)


def replay_track(
    track: pd.DataFrame,
    controller: SessionController,
) -> ReplayResult:
    """Feed every fix in *track* through *controller* inside one session."""
    result = ReplayResult()
    controller.start()
    result.session_id = controller.current_session_id.value

    for row in track.itertuples(index=False):
        update = controller.on_sample(float(row.speed), float(row.accuracy))
        result.paces.append(update.value if update else None)
        result.texts.append(update.text if update else None)

    result.elapsed_ms = controller.training_time_ms.value
    controller.save()
    return result


def _print_report(track: pd.DataFrame, result: ReplayResult, wear_pushes: int) -> None:
    report = track.assign(
        pace_s_per_km=[round(p, 1) if p is not None else None for p in result.paces],
        pace=[t or "-" for t in result.texts],
    )
    print(report.to_string(index=False))
    print()
    print(f"Session:   {result.session_id}")
    print(f"Accepted:  {result.accepted}   Discarded: {result.discarded}")
    print(f"Mean pace: {format_pace(result.mean_moving_pace())} /km")
    print(f"Elapsed:   {format_elapsed(result.elapsed_ms)}")
    print(f"Wear pushes: {wear_pushes}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a GPS track through the pace engine")
    parser.add_argument("track", type=Path, help="CSV file with speed,accuracy columns")
    parser.add_argument(
        "--mode",
        choices=[m.name for m in ActivityMode],
        default=ACTIVITY_MODE,
        help="Activity mode for the session (default: %(default)s)",
    )
    parser.add_argument("--log-dir", type=Path, default=LOG_DIR, help="Event log directory")
    parser.add_argument("--no-event-log", action="store_true", help="Skip writing the event log")
    args = parser.parse_args(argv)
    if args.mode not in ActivityMode.__members__:
        parser.error(f"unknown activity mode {args.mode!r}")

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        track = load_track(args.track)
    except FileNotFoundError:
        logger.error("Track not found at %s", args.track)
        return 1
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    events_log = None
    if not args.no_event_log:
        events_log = EventsLog.in_directory(
            args.log_dir,
            app_ttl_days=APP_LOG_TTL_DAYS,
            session_ttl_days=SESSION_LOG_TTL_DAYS,
        )
        events_log.storage.files.cleanup_old_logs()
        events_log.log(EventType.APP_STARTED, EventSource.SYSTEM, origin="replay.cli.main")

    wear_items: list[dict] = []
    controller = SessionController(
        wear_sender=WearPaceSender(transport=wear_items.append),
        events_log=events_log,
        initial_mode=ActivityMode[args.mode],
    )
    try:
        replayed = replay_track(track, controller)
    finally:
        controller.close()

    logger.info(
        "Replayed %d fixes (%d accepted) in %s mode",
        len(replayed.paces),
        replayed.accepted,
        args.mode,
    )
    _print_report(track, replayed, len(wear_items))
    return 0


if __name__ == "__main__":
    sys.exit(main())
