"""Keyframe model and builder.

Turns a stream of raw position samples into, for every entity, one
time-sorted ``KeyframeSequence`` per match period. Sequences are rebuilt
wholesale whenever a match is loaded and never mutated afterwards.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

from .parser.csv_adapter import parse_tracking_row
from .parser.errors import MalformedRecordError
from .parser.types import LineupEntry, MatchMetadata, Period, RawTrackingRecord
from .pitch_constants import BALL_ENTITY_ID, PITCH, PLAYER_HALF_HEIGHT, Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keyframe:
    """A timestamped sample of one entity's position plus provenance flags."""

    time: float  # seconds
    position: Vec3
    extrapolated: bool = False
    first_half: bool = True

    @property
    def half(self) -> Period:
        return Period.FIRST if self.first_half else Period.SECOND


class KeyframeSequence:
    """Immutable, time-ordered keyframes of one entity in one period."""

    __slots__ = ("entity_id", "period", "_frames")

    def __init__(self, entity_id: int, period: Period, frames: Iterable[Keyframe]):
        self.entity_id = entity_id
        self.period = period
        self._frames: tuple[Keyframe, ...] = tuple(frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __getitem__(self, index: int) -> Keyframe:
        return self._frames[index]

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(self._frames)

    def __repr__(self) -> str:
        return (
            f"KeyframeSequence(entity_id={self.entity_id}, "
            f"period={self.period.value}, len={len(self._frames)})"
        )

    @property
    def start_time(self) -> float | None:
        return self._frames[0].time if self._frames else None

    @property
    def end_time(self) -> float | None:
        return self._frames[-1].time if self._frames else None

    def is_sorted(self) -> bool:
        return all(
            a.time <= b.time for a, b in zip(self._frames, self._frames[1:])
        )


class EntityRole(str, Enum):
    BALL = "ball"
    PLAYER = "player"


@dataclass(frozen=True)
class Entity:
    """Identity of a tracked object. Display fields are for presentation only."""

    entity_id: int
    role: EntityRole
    team: str | None = None
    name: str | None = None
    number: int | None = None
    position_label: str | None = None

    @classmethod
    def ball(cls) -> Entity:
        return cls(entity_id=BALL_ENTITY_ID, role=EntityRole.BALL, name="Ball")

    @classmethod
    def from_lineup(cls, entry: LineupEntry) -> Entity:
        return cls(
            entity_id=entry.player_id,
            role=EntityRole.PLAYER,
            team=entry.team,
            name=entry.display_name,
            number=entry.shirt_number,
            position_label=entry.position,
        )

    @property
    def is_ball(self) -> bool:
        return self.role is EntityRole.BALL


@dataclass
class KeyframeStore:
    """All keyframe sequences of one match: entity id -> period -> sequence."""

    sequences: dict[int, dict[Period, KeyframeSequence]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    skipped_records: int = 0

    def entity_ids(self) -> list[int]:
        return list(self.sequences.keys())

    def get(self, entity_id: int, period: Period) -> KeyframeSequence | None:
        return self.sequences.get(entity_id, {}).get(period)

    def __len__(self) -> int:
        return len(self.sequences)


def normalize_point(
    x: float, z: float, pitch_length: float, pitch_width: float
) -> tuple[float, float]:
    """Rescale x/z from the recorded pitch to the 105 x 68 reference pitch."""
    return (
        x / pitch_length * PITCH.REFERENCE_LENGTH,
        z / pitch_width * PITCH.REFERENCE_WIDTH,
    )


def _coerce_record(raw: Any) -> RawTrackingRecord:
    if isinstance(raw, RawTrackingRecord):
        for value in (raw.timestamp_ms, raw.x, raw.y, raw.z):
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise MalformedRecordError(f"non-finite or non-numeric field: {value!r}")
        return raw
    if isinstance(raw, (list, tuple)):
        return parse_tracking_row([str(token) for token in raw])
    raise MalformedRecordError(f"unsupported record type {type(raw).__name__}")


def build_keyframes(
    records: Iterable[RawTrackingRecord | Sequence[str]],
    *,
    pitch: MatchMetadata | None = None,
    normalize_pitch_size: bool = False,
    player_height_offset: float = PLAYER_HALF_HEIGHT,
    entity_filter: set[int] | None = None,
) -> KeyframeStore:
    """Group raw samples into sorted per-entity, per-period keyframe sequences.

    Args:
        records: Parsed records or raw token rows
        pitch: Match metadata supplying the recorded pitch length/width
        normalize_pitch_size: Rescale x/z to the reference pitch
        player_height_offset: Added to ``y`` of every non-ball entity
        entity_filter: If given, only these entity ids are kept

    Returns:
        KeyframeStore; malformed records are skipped and listed in ``warnings``
    """
    store = KeyframeStore()

    normalize = normalize_pitch_size
    if normalize and (pitch is None or not pitch.has_pitch_size):
        message = "Pitch size unavailable, coordinates are not normalized"
        logger.warning(message)
        store.warnings.append(message)
        normalize = False

    buckets: dict[int, dict[Period, list[Keyframe]]] = {}

    for raw in records:
        try:
            record = _coerce_record(raw)
        except MalformedRecordError as e:
            store.skipped_records += 1
            store.warnings.append(str(e))
            continue

        if entity_filter is not None and record.entity_id not in entity_filter:
            continue

        x, y, z = record.x, record.y, record.z
        if normalize:
            x, z = normalize_point(x, z, pitch.pitch_length, pitch.pitch_width)
        if record.entity_id != BALL_ENTITY_ID:
            y += player_height_offset

        first_half = record.period == 1
        period = Period.FIRST if first_half else Period.SECOND
        keyframe = Keyframe(
            time=record.timestamp_ms / 1000.0,
            position=Vec3(x, y, z),
            extrapolated=record.extrapolated,
            first_half=first_half,
        )
        buckets.setdefault(record.entity_id, {}).setdefault(period, []).append(keyframe)

    if store.skipped_records:
        logger.warning(f"Skipped {store.skipped_records} malformed tracking record(s)")

    for entity_id, periods in buckets.items():
        store.sequences[entity_id] = {
            # sorted() is stable, ties keep input order
            period: KeyframeSequence(
                entity_id, period, sorted(frames, key=lambda kf: kf.time)
            )
            for period, frames in periods.items()
        }

    return store


def ball_keyframes(
    records: Iterable[RawTrackingRecord | Sequence[str]],
    pitch: MatchMetadata | None,
) -> dict[Period, KeyframeSequence]:
    """Ball-only sequences for set piece timelines, always normalized when possible."""
    store = build_keyframes(
        records,
        pitch=pitch,
        normalize_pitch_size=pitch is not None and pitch.has_pitch_size,
        entity_filter={BALL_ENTITY_ID},
    )
    sequences = store.sequences.get(BALL_ENTITY_ID, {})
    return {
        period: sequences.get(period, KeyframeSequence(BALL_ENTITY_ID, period, ()))
        for period in Period
    }


def playback_range(
    sequences: Iterable[KeyframeSequence | None],
) -> tuple[float, float]:
    """Min first-keyframe time and max last-keyframe time over sequences.

    Returns (0.0, 0.0) when no sequence has data.
    """
    t_min = math.inf
    t_max = 0.0
    for sequence in sequences:
        if sequence is None or len(sequence) == 0:
            continue
        t_min = min(t_min, sequence.start_time)
        t_max = max(t_max, sequence.end_time)
    return (0.0 if t_min == math.inf else t_min), t_max
