"""Tests for pointer-seek interpolation."""

import pytest

from pitchreplay.errors import TimelineInvariantError
from pitchreplay.interpolate import OUT_OF_RANGE, Interpolated, PlaybackCursor, seek
from pitchreplay.keyframes import KeyframeSequence
from pitchreplay.parser.types import Period
from pitchreplay.pitch_constants import Vec3
from tests.fixtures import create_test_sequence


@pytest.fixture
def linear_sequence():
    return create_test_sequence(
        [(0.0, (0, 0, 0)), (10.0, (10, 0, 0)), (20.0, (20, 0, 0))]
    )


@pytest.fixture
def cursor():
    return PlaybackCursor(entity_id=7)


class TestSeekInRange:
    def test_midpoint_interpolates_linearly(self, linear_sequence, cursor):
        result = seek(linear_sequence, cursor, 5.0)

        assert isinstance(result, Interpolated)
        assert result.position == Vec3(5.0, 0.0, 0.0)
        assert result.extrapolated is False
        assert result.pointer_index == 0
        assert cursor.pointer_index == 0

    def test_extrapolated_flag_comes_from_left_keyframe(self, cursor):
        sequence = create_test_sequence(
            [(0.0, (0, 0, 0)), (10.0, (10, 0, 0)), (20.0, (20, 0, 0))],
            extrapolated=[True, False, True],
        )

        assert seek(sequence, cursor, 5.0).extrapolated is True
        assert seek(sequence, cursor, 15.0).extrapolated is False
        assert cursor.last_known_extrapolated is False

    def test_all_components_interpolated(self, cursor):
        sequence = create_test_sequence([(1.0, (0, 2, -4)), (3.0, (4, 0, 4))])

        result = seek(sequence, cursor, 1.5)

        assert result.position == pytest.approx(Vec3(1.0, 1.5, -2.0))

    def test_cursor_advances_forward(self, linear_sequence, cursor):
        seek(linear_sequence, cursor, 5.0)
        result = seek(linear_sequence, cursor, 15.0)

        assert result.pointer_index == 1
        assert result.position == Vec3(15.0, 0.0, 0.0)

    def test_cursor_walks_back_when_scrubbed(self, linear_sequence, cursor):
        seek(linear_sequence, cursor, 19.0)
        assert cursor.pointer_index == 1

        result = seek(linear_sequence, cursor, 2.0)

        assert cursor.pointer_index == 0
        assert result.position == pytest.approx(Vec3(2.0, 0.0, 0.0))

    def test_exact_interior_keyframe_is_independent_of_direction(self, linear_sequence):
        from_left = PlaybackCursor(entity_id=7, pointer_index=0)
        from_right = PlaybackCursor(entity_id=7, pointer_index=1)

        a = seek(linear_sequence, from_left, 10.0)
        b = seek(linear_sequence, from_right, 10.0)

        assert a.position == b.position == Vec3(10.0, 0.0, 0.0)
        assert a.pointer_index == b.pointer_index == 1

    def test_zero_span_interval_uses_left_keyframe(self, cursor):
        sequence = create_test_sequence(
            [(0.0, (0, 0, 0)), (5.0, (1, 0, 0)), (5.0, (9, 0, 0)), (10.0, (10, 0, 0))]
        )

        result = seek(sequence, cursor, 5.0)

        assert result.position.x in (1.0, 9.0)
        assert result.position.x == pytest.approx(sequence[result.pointer_index].position.x)

    def test_first_half_flag_reported(self, cursor):
        sequence = create_test_sequence(
            [(0.0, (0, 0, 0)), (10.0, (10, 0, 0))], period=Period.SECOND
        )

        assert seek(sequence, cursor, 3.0).first_half is False


class TestSeekOutOfRange:
    def test_query_at_last_keyframe(self, linear_sequence, cursor):
        assert seek(linear_sequence, cursor, 20.0) is OUT_OF_RANGE

    def test_query_at_first_keyframe(self, linear_sequence, cursor):
        assert seek(linear_sequence, cursor, 0.0) is OUT_OF_RANGE

    @pytest.mark.parametrize("query", [-1.0, 25.0])
    def test_query_outside_sequence(self, linear_sequence, cursor, query):
        assert seek(linear_sequence, cursor, query) is OUT_OF_RANGE

    def test_short_sequences(self, cursor):
        empty = KeyframeSequence(7, Period.FIRST, ())
        single = create_test_sequence([(1.0, (1, 1, 1))])

        assert seek(empty, cursor, 1.0) is OUT_OF_RANGE
        assert seek(single, cursor, 1.0) is OUT_OF_RANGE

    def test_cursor_untouched(self, linear_sequence, cursor):
        seek(linear_sequence, cursor, 15.0)

        seek(linear_sequence, cursor, 30.0)

        assert cursor.pointer_index == 1

    def test_out_of_range_is_falsy(self):
        assert not OUT_OF_RANGE
        assert repr(OUT_OF_RANGE) == "OUT_OF_RANGE"


class TestSeekInvariants:
    def test_cursor_outside_valid_indices(self, linear_sequence):
        cursor = PlaybackCursor(entity_id=7, pointer_index=5)

        with pytest.raises(TimelineInvariantError) as exc_info:
            seek(linear_sequence, cursor, 5.0)

        assert exc_info.value.details["entity_id"] == 7

    def test_nan_query_is_out_of_range(self, linear_sequence, cursor):
        assert seek(linear_sequence, cursor, float("nan")) is OUT_OF_RANGE


class TestMonotonicPlayback:
    def test_small_steps_match_fresh_seek(self):
        sequence = create_test_sequence(
            [(float(t), (t * 2.0, 0.0, -t)) for t in range(0, 31, 3)]
        )
        cursor = PlaybackCursor(entity_id=7)

        t = 0.05
        while t < 30.0:
            walked = seek(sequence, cursor, t)
            fresh = seek(sequence, PlaybackCursor(entity_id=7), t)
            assert walked.position == pytest.approx(fresh.position)
            t += 0.4

    def test_scrub_back_matches_fresh_seek(self):
        sequence = create_test_sequence(
            [(float(t), (t * 2.0, 0.0, -t)) for t in range(0, 31, 3)]
        )
        cursor = PlaybackCursor(entity_id=7)
        seek(sequence, cursor, 29.9)
        assert cursor.pointer_index == len(sequence) - 2

        t = 29.5
        while t > -1.0:
            walked = seek(sequence, cursor, t)
            fresh = seek(sequence, PlaybackCursor(entity_id=7), t)
            if fresh is OUT_OF_RANGE:
                assert walked is OUT_OF_RANGE
            else:
                assert walked.position == pytest.approx(fresh.position)
                assert walked.pointer_index == fresh.pointer_index
            t -= 0.7

    def test_cursor_never_moves_backwards_for_increasing_queries(self, linear_sequence):
        cursor = PlaybackCursor(entity_id=7)
        previous = 0
        for query in (0.5, 3.0, 9.9, 10.0, 10.1, 17.0, 19.9):
            seek(linear_sequence, cursor, query)
            assert cursor.pointer_index >= previous
            previous = cursor.pointer_index

    def test_reset_returns_to_start(self, linear_sequence, cursor):
        seek(linear_sequence, cursor, 15.0)

        cursor.reset(Period.SECOND)

        assert cursor.pointer_index == 0
        assert cursor.period is Period.SECOND
