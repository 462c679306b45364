"""Synchronization manager for the primary match timeline and set pieces.

All state is mutated from two entry points only: ``load_match`` (and its
set piece helpers) and ``tick``. The host drives ``tick`` once per frame
from a single thread and never interleaves it with a load.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .alignment import AlignmentTable, is_reference_home
from .clock import PlaybackClock
from .config import PlaybackConfig
from .errors import NoMatchLoadedError
from .keyframes import (
    Entity,
    KeyframeSequence,
    KeyframeStore,
    ball_keyframes,
    build_keyframes,
)
from .parser.interface import TrackingAdapter
from .parser.types import MatchData, MatchMetadata, Period
from .pitch_constants import BALL_ENTITY_ID
from .set_pieces import DiscreteEvent, filter_events, load_events
from .timeline import EntityFrame, EventTimeline, Timeline, TrackedEntity

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Everything presentation needs after one tick."""

    time: float
    period: Period
    clock: str
    frames: list[EntityFrame]
    event_frames: dict[tuple[int, int], EntityFrame] = field(default_factory=dict)

    def visible_frames(self) -> list[EntityFrame]:
        return [frame for frame in self.frames if frame.visible]


@dataclass
class _EventSource:
    ball: dict[Period, KeyframeSequence]
    events: list[DiscreteEvent]


@dataclass
class _MatchState:
    data: MatchData
    store: KeyframeStore
    timeline: Timeline


class SyncManager:
    """Owns the primary timeline and every set piece timeline.

    Args:
        adapter: Source of match data
        config: Playback options (normalization, speed, period, reference team)
        alignment: Per-match offsets and mirroring policy for set pieces
    """

    def __init__(
        self,
        adapter: TrackingAdapter,
        config: PlaybackConfig | None = None,
        alignment: AlignmentTable | None = None,
    ):
        self.adapter = adapter
        self.config = config or PlaybackConfig()
        self.alignment = alignment or AlignmentTable()
        self._state: _MatchState | None = None
        self._event_sources: dict[int, _EventSource] = {}
        self._event_timelines: dict[tuple[int, int], EventTimeline] = {}

    # -- loading -----------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._state is not None

    def _require_state(self) -> _MatchState:
        if self._state is None:
            raise NoMatchLoadedError()
        return self._state

    @property
    def match_id(self) -> int | None:
        return self._state.data.match_id if self._state else None

    @property
    def metadata(self) -> MatchMetadata:
        return self._require_state().data.metadata

    @property
    def timeline(self) -> Timeline:
        return self._require_state().timeline

    def _build_entities(self, data: MatchData, store: KeyframeStore) -> list[TrackedEntity]:
        lineup = data.lineup_by_id()
        tracked = []
        for entity_id in sorted(store.entity_ids()):
            if entity_id == BALL_ENTITY_ID:
                entity = Entity.ball()
            elif entity_id in lineup:
                entity = Entity.from_lineup(lineup[entity_id])
            else:
                logger.info(f"Player with ID {entity_id} not found in lineup, not tracked")
                continue
            tracked.append(TrackedEntity(entity, store.sequences[entity_id]))
        return tracked

    def _build_event_source(self, data: MatchData) -> _EventSource:
        home = is_reference_home(
            data.metadata.home_team, self.config.attack_reference_team
        )
        return _EventSource(
            ball=ball_keyframes(data.tracking, data.metadata),
            events=load_events(data.match_id, data.set_pieces, self.alignment, home),
        )

    def load_match(self, match_id: int) -> None:
        """Replace the loaded match.

        The new state is built completely before it is swapped in; if loading
        fails the previous match stays loaded and the error propagates.
        Set piece timelines never survive a match switch.
        """
        logger.info(f"Loading match with ID: {match_id}")

        data = self.adapter.load_match(match_id)
        store = build_keyframes(
            data.tracking,
            pitch=data.metadata,
            normalize_pitch_size=self.config.normalize_pitch_size,
        )
        entities = self._build_entities(data, store)

        if self._state is not None:
            speed = self._state.timeline.clock.speed
            period = self._state.timeline.period
        else:
            speed = self.config.speed
            period = self.config.period

        timeline = Timeline(entities, PlaybackClock(speed=speed, period=period))
        timeline.refresh_range()
        source = self._build_event_source(data)

        self._state = _MatchState(data=data, store=store, timeline=timeline)
        self._event_sources = {match_id: source}
        self._event_timelines = {}

        logger.info(
            f"Match {match_id} ready: {len(timeline)} tracked entities, "
            f"{len(source.events)} set pieces"
        )

    @property
    def warnings(self) -> list[str]:
        """Recoverable problems from loading and alignment, in order seen."""
        if self._state is None:
            return list(self.alignment.warnings)
        return (
            list(self._state.data.warnings)
            + list(self._state.store.warnings)
            + list(self.alignment.warnings)
        )

    # -- primary playback --------------------------------------------------

    @property
    def time(self) -> float:
        return self.timeline.time

    @property
    def period(self) -> Period:
        return self.timeline.period

    @property
    def playback_range(self) -> tuple[float, float]:
        clock = self.timeline.clock
        return clock.range_min, clock.range_max

    def set_speed(self, multiplier: float) -> None:
        self.timeline.clock.set_speed(multiplier)

    def scrub_to(self, time: float) -> float:
        return self.timeline.scrub_to(time)

    def switch_period(self, period: Period) -> None:
        self.timeline.switch_period(Period.from_indicator(period))

    def frames(self) -> list[EntityFrame]:
        """Sample the primary timeline without advancing it."""
        return self.timeline.sample()

    def tick(self, elapsed_real_seconds: float) -> TickResult:
        """Advance every timeline by the same wall-elapsed time and sample it.

        Set piece clocks are not scaled by the primary speed multiplier.
        """
        timeline = self.timeline
        timeline.tick(elapsed_real_seconds)
        frames = timeline.sample()

        event_frames = {
            key: event_timeline.tick(elapsed_real_seconds)
            for key, event_timeline in self._event_timelines.items()
        }

        return TickResult(
            time=timeline.time,
            period=timeline.period,
            clock=timeline.clock.format_clock(),
            frames=frames,
            event_frames=event_frames,
        )

    # -- set pieces --------------------------------------------------------

    def add_match_set_pieces(self, match_id: int) -> None:
        """Make another match's set pieces available for visualization."""
        if match_id in self._event_sources:
            return
        data = self.adapter.load_match(match_id)
        self._event_sources[match_id] = self._build_event_source(data)

    @property
    def events(self) -> list[DiscreteEvent]:
        return [
            event
            for source in self._event_sources.values()
            for event in source.events
        ]

    @property
    def event_timelines(self) -> list[EventTimeline]:
        return list(self._event_timelines.values())

    def get_event_timeline(self, key: tuple[int, int]) -> EventTimeline | None:
        return self._event_timelines.get(key)

    def clear_set_pieces(self) -> None:
        self._event_timelines = {}

    def visualize_set_pieces(
        self, event_type: str, team: str | None = None
    ) -> list[EventTimeline]:
        """Replace the current set piece timelines with one per matching event.

        Args:
            event_type: Set piece type, e.g. "corner"
            team: Team filter; defaults to the attack reference team
        """
        team = team if team is not None else self.config.attack_reference_team
        selected = filter_events(self.events, event_type, team)

        timelines: dict[tuple[int, int], EventTimeline] = {}
        for event in selected:
            source = self._event_sources[event.match_id]
            timelines[event.key] = EventTimeline(event, source.ball, self.alignment)
        self._event_timelines = timelines

        logger.info(f"Visualising {len(timelines)} '{event_type}' set pieces")
        return list(timelines.values())
