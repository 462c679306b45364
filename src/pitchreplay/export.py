"""Snapshot documents of playback state, for headless use and tooling."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from .clock import format_clock
from .parser.types import Period
from .sync import SyncManager
from .timeline import EntityFrame
from .version import get_schema_version


def _position(frame: EntityFrame) -> list[float]:
    return [round(frame.position.x, 4), round(frame.position.y, 4), round(frame.position.z, 4)]


def snapshot(
    manager: SyncManager,
    frames: list[EntityFrame] | None = None,
    event_frames: dict[tuple[int, int], EntityFrame] | None = None,
) -> dict[str, Any]:
    """Serialize the current primary and set piece frames of ``manager``."""
    timeline = manager.timeline
    if frames is None:
        frames = timeline.sample()
    if event_frames is None:
        event_frames = {et.key: et.frame() for et in manager.event_timelines}

    entities = []
    for frame in frames:
        tracked = timeline.get(frame.entity_id)
        entities.append(
            {
                "entity_id": frame.entity_id,
                "role": tracked.entity.role.value,
                "position": _position(frame),
                "visible": frame.visible,
                "extrapolated": frame.extrapolated,
            }
        )

    events = []
    for key, frame in event_frames.items():
        event_timeline = manager.get_event_timeline(key)
        events.append(
            {
                "match_id": key[0],
                "second": key[1],
                "type": event_timeline.event.type,
                "team": event_timeline.event.team,
                "active": event_timeline.active,
                "position": _position(frame),
                "visible": frame.visible,
                "extrapolated": frame.extrapolated,
            }
        )

    return {
        "time": round(timeline.time, 4),
        "clock": format_clock(timeline.time),
        "entities": entities,
        "events": events,
    }


def build_document(manager: SyncManager, snapshots: list[dict[str, Any]]) -> dict[str, Any]:
    metadata = manager.metadata
    range_min, range_max = manager.playback_range
    return {
        "schema_version": get_schema_version(),
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "match": {
            "match_id": metadata.match_id,
            "home_team": metadata.home_team,
            "away_team": metadata.away_team,
            "pitch_length": metadata.pitch_length,
            "pitch_width": metadata.pitch_width,
            "normalized": manager.config.normalize_pitch_size and metadata.has_pitch_size,
        },
        "period": manager.period.value,
        "range": {"min": range_min, "max": range_max},
        "snapshots": snapshots,
        "warnings": manager.warnings,
    }


def export_snapshots(
    manager: SyncManager,
    times: Iterable[float],
    period: Period | None = None,
) -> dict[str, Any]:
    """Scrub to each time in turn and capture the primary timeline.

    Switching period first resets the clock and every cursor.
    """
    if period is not None and period != manager.period:
        manager.switch_period(period)

    snapshots = []
    for time in times:
        manager.scrub_to(time)
        snapshots.append(snapshot(manager, event_frames={}))
    return build_document(manager, snapshots)


def record_playback(
    manager: SyncManager,
    seconds: float,
    fps: float = 25.0,
    every: int = 1,
) -> dict[str, Any]:
    """Tick the manager like a frame loop and capture every ``every``-th tick."""
    if fps <= 0:
        raise ValueError("fps must be positive")
    if every < 1:
        raise ValueError("every must be at least 1")

    dt = 1.0 / fps
    ticks = int(round(seconds * fps))
    snapshots = []
    for index in range(ticks):
        result = manager.tick(dt)
        if index % every == 0:
            snapshots.append(snapshot(manager, result.frames, result.event_frames))
    return build_document(manager, snapshots)


def write_snapshot_atomically(
    document: dict[str, Any], out_path: Path, pretty: bool = False
) -> None:
    """Write JSON file atomically to avoid partial writes."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = out_path.with_suffix(out_path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2 if pretty else None)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, out_path)
    finally:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
