"""Playback timelines.

A ``Timeline`` owns one clock and an arena of tracked entities, each bundling
its per-period keyframe sequences with its cursor. The primary match
timeline tracks the ball and every lined-up player; a set piece timeline is
the same structure with the ball alone and an unbounded real-time clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterable, Mapping

from .alignment import AlignmentTable, mirror
from .clock import PlaybackClock
from .errors import TimelineInvariantError
from .interpolate import OUT_OF_RANGE, PlaybackCursor, seek
from .keyframes import Entity, KeyframeSequence, playback_range
from .parser.types import Period
from .pitch_constants import BALL_ENTITY_ID, EXTRAPOLATED_ALPHA, HIDDEN_POSITION, Vec3
from .set_pieces import DiscreteEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityFrame:
    """Per-tick output for one entity, handed to presentation."""

    entity_id: int
    position: Vec3
    visible: bool
    extrapolated: bool = False

    @classmethod
    def hidden(cls, entity_id: int) -> EntityFrame:
        return cls(entity_id=entity_id, position=HIDDEN_POSITION, visible=False)

    @property
    def opacity(self) -> float:
        if not self.visible:
            return 0.0
        return EXTRAPOLATED_ALPHA if self.extrapolated else 1.0


@dataclass
class TrackedEntity:
    """Arena entry: an entity, its sequences and its cursor."""

    entity: Entity
    sequences: Mapping[Period, KeyframeSequence]
    cursor: PlaybackCursor = None
    failed: bool = False
    failure_reason: str | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.cursor is None:
            self.cursor = PlaybackCursor(entity_id=self.entity.entity_id)

    @property
    def entity_id(self) -> int:
        return self.entity.entity_id

    def mark_failed(self, reason: str) -> None:
        if not self.failed:
            logger.error(f"Hiding entity {self.entity_id} for the rest of the session: {reason}")
        self.failed = True
        self.failure_reason = reason


class Timeline:
    """One independent playback timeline over a set of entities.

    Args:
        entities: Tracked entities; ids must be unique
        clock: Clock driving this timeline
        mirror_policy: Called with the left keyframe's first-half flag;
            returning True negates x and z of the sampled position
    """

    def __init__(
        self,
        entities: Iterable[TrackedEntity],
        clock: PlaybackClock,
        mirror_policy: Callable[[bool], bool] | None = None,
    ):
        self.clock = clock
        self.mirror_policy = mirror_policy
        self._entities: dict[int, TrackedEntity] = {}
        for tracked in entities:
            if tracked.entity_id in self._entities:
                raise ValueError(f"Duplicate entity id {tracked.entity_id} in timeline")
            tracked.cursor.reset(clock.active_period)
            for period, sequence in tracked.sequences.items():
                if not sequence.is_sorted():
                    tracked.mark_failed(f"{period.value} keyframes are not sorted by time")
            self._entities[tracked.entity_id] = tracked

    def __len__(self) -> int:
        return len(self._entities)

    @property
    def entities(self) -> list[TrackedEntity]:
        return list(self._entities.values())

    def get(self, entity_id: int) -> TrackedEntity | None:
        return self._entities.get(entity_id)

    @property
    def time(self) -> float:
        return self.clock.simulation_time

    @property
    def period(self) -> Period:
        return self.clock.active_period

    def compute_range(self, period: Period | None = None) -> tuple[float, float]:
        period = period or self.period
        return playback_range(
            tracked.sequences.get(period) for tracked in self._entities.values()
        )

    def refresh_range(self) -> tuple[float, float]:
        """Recompute the clock's valid range for the active period."""
        range_min, range_max = self.compute_range()
        self.clock.set_range(range_min, range_max)
        return range_min, range_max

    def tick(self, elapsed_real_seconds: float) -> float:
        return self.clock.tick(elapsed_real_seconds)

    def scrub_to(self, time: float) -> float:
        # Cursors are kept; the next seek walks them to the new time
        return self.clock.scrub_to(time)

    def switch_period(self, period: Period) -> None:
        self.clock.switch_period(period)
        for tracked in self._entities.values():
            tracked.cursor.reset(period)
        if self.clock.bounded:
            self.refresh_range()

    def sample_entity(self, tracked: TrackedEntity) -> EntityFrame:
        if tracked.failed:
            return EntityFrame.hidden(tracked.entity_id)

        sequence = tracked.sequences.get(self.period)
        if sequence is None:
            return EntityFrame.hidden(tracked.entity_id)

        try:
            result = seek(sequence, tracked.cursor, self.clock.simulation_time)
        except TimelineInvariantError as e:
            tracked.mark_failed(str(e))
            return EntityFrame.hidden(tracked.entity_id)

        if result is OUT_OF_RANGE:
            return EntityFrame.hidden(tracked.entity_id)

        position = result.position
        if self.mirror_policy is not None and self.mirror_policy(result.first_half):
            position = mirror(position)

        return EntityFrame(
            entity_id=tracked.entity_id,
            position=position,
            visible=True,
            extrapolated=result.extrapolated,
        )

    def sample(self) -> list[EntityFrame]:
        """Interpolate every entity at the current simulation time."""
        return [self.sample_entity(tracked) for tracked in self._entities.values()]


class EventTimeline:
    """Ball-only timeline replaying one set piece.

    The local clock starts at the event's period-relative time and runs at
    real-time rate regardless of the primary playback speed. Once more than
    ``duration`` seconds have elapsed the timeline goes inactive; its clock
    and cursor are kept so it can be shown again.
    """

    def __init__(
        self,
        event: DiscreteEvent,
        ball_sequences: Mapping[Period, KeyframeSequence],
        alignment: AlignmentTable,
    ):
        self.event = event
        sequence = ball_sequences.get(event.period)
        if sequence is None:
            sequence = KeyframeSequence(BALL_ENTITY_ID, event.period, ())
        ball = TrackedEntity(Entity.ball(), {event.period: sequence})
        clock = PlaybackClock(
            range_max=None, period=event.period, start_time=event.local_start
        )
        self.timeline = Timeline(
            [ball],
            clock,
            mirror_policy=partial(alignment.resolve_mirroring, event.match_id),
        )
        self.active = True

    @property
    def key(self) -> tuple[int, int]:
        return self.event.key

    @property
    def start_time(self) -> float:
        return self.event.local_start

    @property
    def local_time(self) -> float:
        return self.timeline.time

    @property
    def elapsed(self) -> float:
        return self.local_time - self.start_time

    @property
    def expired(self) -> bool:
        return self.elapsed > self.event.duration

    def _ball_frame(self) -> EntityFrame:
        return self.timeline.sample()[0]

    def frame(self) -> EntityFrame:
        """Current output without advancing the clock."""
        if not self.active:
            return EntityFrame.hidden(BALL_ENTITY_ID)
        return self._ball_frame()

    def tick(self, elapsed_real_seconds: float) -> EntityFrame:
        if not self.active:
            return EntityFrame.hidden(BALL_ENTITY_ID)

        self.timeline.tick(elapsed_real_seconds)
        if self.expired:
            self.active = False
            return EntityFrame.hidden(BALL_ENTITY_ID)
        return self._ball_frame()

    def hide(self) -> None:
        self.active = False

    def show(self, restart: bool = False) -> None:
        """Re-activate the timeline, optionally rewinding to the event start."""
        if restart:
            self.timeline.scrub_to(self.start_time)
            for tracked in self.timeline.entities:
                tracked.cursor.reset()
        self.active = True
