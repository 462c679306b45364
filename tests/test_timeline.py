"""Tests for primary and set piece timelines."""

import pytest

from pitchreplay.alignment import AlignmentTable
from pitchreplay.clock import PlaybackClock
from pitchreplay.keyframes import Entity
from pitchreplay.parser.types import LineupEntry, Period
from pitchreplay.pitch_constants import BALL_ENTITY_ID, HIDDEN_POSITION, Vec3
from pitchreplay.set_pieces import DiscreteEvent
from pitchreplay.timeline import EntityFrame, EventTimeline, Timeline, TrackedEntity
from tests.fixtures import create_test_sequence


def _player(entity_id=7):
    return Entity.from_lineup(LineupEntry(player_id=entity_id, team="Denmark", last_name="Test"))


def _tracked(entity_id=7, first=None, second=None):
    sequences = {}
    if first is not None:
        sequences[Period.FIRST] = create_test_sequence(first, entity_id=entity_id)
    if second is not None:
        sequences[Period.SECOND] = create_test_sequence(
            second, entity_id=entity_id, period=Period.SECOND
        )
    return TrackedEntity(_player(entity_id), sequences)


LINEAR = [(0.0, (0, 0, 0)), (10.0, (10, 0, 0)), (20.0, (20, 0, 0))]


def _event(timestamp=2700.0, period=Period.SECOND, duration=5.0, match_id=1):
    return DiscreteEvent(
        match_id=match_id,
        timestamp=timestamp,
        type="corner",
        team="Denmark",
        player="Test Player",
        accurate=True,
        period=period,
        attacking_team_is_home=True,
        duration=duration,
    )


class TestTimeline:
    def test_tick_then_sample(self):
        timeline = Timeline([_tracked(first=LINEAR)], PlaybackClock())
        assert timeline.refresh_range() == (0.0, 20.0)

        timeline.tick(5.0)
        frames = timeline.sample()

        assert frames == [EntityFrame(7, Vec3(5.0, 0.0, 0.0), True, False)]

    def test_out_of_range_entities_are_hidden(self):
        timeline = Timeline([_tracked(first=LINEAR)], PlaybackClock())
        timeline.refresh_range()

        frame = timeline.sample()[0]

        assert frame.visible is False
        assert frame.position == HIDDEN_POSITION

    def test_entity_without_period_data_is_hidden(self):
        timeline = Timeline([_tracked(first=LINEAR)], PlaybackClock(period=Period.SECOND))

        timeline.scrub_to(5.0)

        assert timeline.sample()[0].visible is False

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            Timeline([_tracked(first=LINEAR), _tracked(first=LINEAR)], PlaybackClock())

    def test_unsorted_sequence_marks_entity_failed(self):
        unsorted = _tracked(first=[(0.0, (0, 0, 0)), (10.0, (1, 0, 0)), (5.0, (2, 0, 0))])
        healthy = _tracked(entity_id=8, first=LINEAR)

        timeline = Timeline([unsorted, healthy], PlaybackClock(range_max=20.0))
        timeline.scrub_to(2.0)
        frames = {frame.entity_id: frame for frame in timeline.sample()}

        assert unsorted.failed
        assert frames[7].visible is False
        assert frames[8].visible is True

    def test_invariant_violation_hides_entity_for_good(self):
        tracked = _tracked(first=LINEAR)
        timeline = Timeline([tracked], PlaybackClock(range_max=20.0))
        timeline.scrub_to(5.0)
        tracked.cursor.pointer_index = 42

        assert timeline.sample()[0].visible is False
        assert tracked.failed

        tracked.cursor.reset()
        assert timeline.sample()[0].visible is False

    def test_switch_period_resets_cursors_and_range(self):
        tracked = _tracked(first=LINEAR, second=[(1.0, (0, 0, 0)), (4.0, (3, 0, 0))])
        timeline = Timeline([tracked], PlaybackClock())
        timeline.refresh_range()
        timeline.scrub_to(15.0)
        timeline.sample()
        assert tracked.cursor.pointer_index == 1

        timeline.switch_period(Period.SECOND)

        assert tracked.cursor.pointer_index == 0
        assert tracked.cursor.period is Period.SECOND
        assert timeline.time == 0.0
        assert timeline.clock.range_max == 4.0
        timeline.scrub_to(2.0)
        assert timeline.sample()[0].position == pytest.approx(Vec3(1.0, 0.0, 0.0))

    def test_mirror_policy_applied(self):
        tracked = _tracked(first=[(0.0, (0, 0, 0)), (10.0, (10, 0, 4))])
        timeline = Timeline([tracked], PlaybackClock(range_max=10.0), mirror_policy=lambda first: first)
        timeline.scrub_to(5.0)

        assert timeline.sample()[0].position == Vec3(-5.0, 0.0, -2.0)


class TestEventTimeline:
    def test_second_half_event_expires_after_duration(self):
        event_timeline = EventTimeline(_event(), {}, AlignmentTable(flip_policy={1: True}))

        assert event_timeline.start_time == 0.0
        event_timeline.tick(3.0)
        assert event_timeline.active

        frame = event_timeline.tick(3.0)

        assert event_timeline.active is False
        assert frame.visible is False
        assert event_timeline.elapsed == pytest.approx(6.0)

    def test_follows_ball_and_applies_mirroring(self):
        ball = {
            Period.SECOND: create_test_sequence(
                [(0.0, (0, 0, 0)), (10.0, (10, 0, 2))],
                entity_id=BALL_ENTITY_ID,
                period=Period.SECOND,
            )
        }
        mirrored = EventTimeline(_event(timestamp=2702.0), ball, AlignmentTable(flip_policy={1: True}))
        plain = EventTimeline(_event(timestamp=2702.0), ball, AlignmentTable(flip_policy={1: False}))

        assert mirrored.tick(1.0).position == pytest.approx(Vec3(-3.0, 0.0, -0.6))
        assert plain.tick(1.0).position == pytest.approx(Vec3(3.0, 0.0, 0.6))

    def test_hidden_timeline_keeps_state_and_can_restart(self):
        event_timeline = EventTimeline(_event(period=Period.FIRST, timestamp=10.0), {}, AlignmentTable())
        event_timeline.tick(2.0)

        event_timeline.hide()
        assert event_timeline.tick(1.0).visible is False
        assert event_timeline.local_time == pytest.approx(12.0)

        event_timeline.show()
        assert event_timeline.local_time == pytest.approx(12.0)

        event_timeline.show(restart=True)
        assert event_timeline.active
        assert event_timeline.local_time == pytest.approx(10.0)

    def test_key_uses_whole_seconds(self):
        event_timeline = EventTimeline(_event(timestamp=2703.7), {}, AlignmentTable())

        assert event_timeline.key == (1, 2703)
