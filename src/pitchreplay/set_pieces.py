"""Discrete match events (set pieces) aligned onto the tracking clock."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .alignment import AlignmentTable
from .parser.types import Period, SetPieceRecord
from .pitch_constants import (
    ACCURATE_TRAIL_COLOR,
    INACCURATE_TRAIL_COLOR,
    SECOND_HALF_OFFSET_S,
)


@dataclass(frozen=True)
class DiscreteEvent:
    """A set piece whose timestamp is already on the tracking clock."""

    match_id: int
    timestamp: float
    type: str
    team: str
    player: str
    accurate: bool
    period: Period
    attacking_team_is_home: bool
    duration: float

    @property
    def key(self) -> tuple[int, int]:
        """Identity of the event's timeline: (match id, whole seconds)."""
        return self.match_id, math.floor(self.timestamp)

    @property
    def local_start(self) -> float:
        """Start time on the period-relative tracking clock."""
        if self.period is Period.SECOND:
            return self.timestamp - SECOND_HALF_OFFSET_S
        return self.timestamp

    @property
    def trail_color(self) -> str:
        return ACCURATE_TRAIL_COLOR if self.accurate else INACCURATE_TRAIL_COLOR

    @property
    def label(self) -> str:
        return f"{self.match_id}_{self.player}_{self.type}_{self.team}_{self.period.value}"


def load_events(
    match_id: int,
    records: Iterable[SetPieceRecord],
    alignment: AlignmentTable,
    attacking_team_is_home: bool,
) -> list[DiscreteEvent]:
    """Align raw set piece records of one match onto the tracking clock."""
    events = []
    for record in records:
        events.append(
            DiscreteEvent(
                match_id=match_id,
                timestamp=alignment.align_timestamp(match_id, record.timestamp, record.period),
                type=record.type,
                team=record.team,
                player=record.player,
                accurate=record.accurate,
                period=record.period,
                attacking_team_is_home=attacking_team_is_home,
                duration=record.duration,
            )
        )
    return events


def filter_events(
    events: Iterable[DiscreteEvent], event_type: str, team: str | None = None
) -> list[DiscreteEvent]:
    """Events of one type (and team), first occurrence per timeline key."""
    seen: set[tuple[int, int]] = set()
    selected = []
    for event in events:
        if event.type != event_type:
            continue
        if team is not None and event.team != team:
            continue
        if event.key in seen:
            continue
        seen.add(event.key)
        selected.append(event)
    return selected


def event_types(events: Iterable[DiscreteEvent]) -> list[str]:
    return sorted({event.type for event in events})
