"""Tests for the playback clock."""

import pytest

from pitchreplay.clock import (
    SPEED_STEPS,
    PlaybackClock,
    format_clock,
    speed_from_index,
)
from pitchreplay.errors import InvalidSpeedError
from pitchreplay.parser.types import Period


class TestTick:
    def test_tick_scales_by_speed(self):
        clock = PlaybackClock(range_max=100.0, speed=2.0)

        clock.tick(1.5)

        assert clock.simulation_time == pytest.approx(3.0)

    def test_paused_clock_does_not_move(self):
        clock = PlaybackClock(range_max=100.0, speed=0.0)

        clock.tick(10.0)

        assert clock.paused
        assert clock.simulation_time == 0.0

    def test_tick_clamps_to_range_max(self):
        clock = PlaybackClock(range_max=10.0, speed=4.0)

        clock.tick(5.0)

        assert clock.simulation_time == 10.0

    def test_tick_clamps_at_zero(self):
        clock = PlaybackClock(range_max=10.0)

        clock.tick(-3.0)

        assert clock.simulation_time == 0.0

    def test_unbounded_clock_runs_past_data(self):
        clock = PlaybackClock(range_max=None, start_time=2.0)

        clock.tick(100.0)

        assert not clock.bounded
        assert clock.simulation_time == pytest.approx(102.0)


class TestSpeed:
    @pytest.mark.parametrize("speed", SPEED_STEPS)
    def test_supported_speeds(self, speed):
        clock = PlaybackClock()

        clock.set_speed(speed)

        assert clock.speed == speed

    def test_unsupported_speed_rejected(self):
        clock = PlaybackClock(speed=2.0)

        with pytest.raises(InvalidSpeedError) as exc_info:
            clock.set_speed(3.0)

        assert clock.speed == 2.0
        assert "suggested_action" in exc_info.value.details

    def test_speed_from_index(self):
        assert [speed_from_index(i) for i in range(5)] == list(SPEED_STEPS)
        assert speed_from_index(9) == 1.0


class TestScrubAndPeriod:
    def test_scrub_clamps_to_range(self):
        clock = PlaybackClock(range_min=2.0, range_max=10.0)

        assert clock.scrub_to(1.0) == 2.0
        assert clock.scrub_to(50.0) == 10.0
        assert clock.scrub_to(5.5) == 5.5

    def test_switch_period_restarts_at_zero(self):
        clock = PlaybackClock(range_max=10.0)
        clock.tick(4.0)

        clock.switch_period(Period.SECOND)

        assert clock.active_period is Period.SECOND
        assert clock.simulation_time == 0.0

    def test_set_range_clamps_current_time(self):
        clock = PlaybackClock(range_max=100.0)
        clock.scrub_to(80.0)

        clock.set_range(0.0, 50.0)

        assert clock.simulation_time == 50.0


@pytest.mark.parametrize(
    "seconds,expected",
    [(0.0, "00:00"), (59.9, "00:59"), (61.0, "01:01"), (2700.0, "45:00"), (-3.0, "00:00")],
)
def test_format_clock(seconds, expected):
    assert format_clock(seconds) == expected
