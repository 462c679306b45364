"""Tests for pitch constants and presentation conventions."""

import pytest

from pitchreplay.pitch_constants import (
    EXTRAPOLATED_ALPHA,
    HIDDEN_POSITION,
    PITCH,
    Vec3,
)
from pitchreplay.timeline import EntityFrame


def test_vec3_arithmetic():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(3.0, 2.0, 1.0)

    assert a + b == Vec3(4.0, 4.0, 4.0)
    assert a - b == Vec3(-2.0, 0.0, 2.0)
    assert a * 2 == Vec3(2.0, 4.0, 6.0)
    assert a.lerp(b, 0.25) == pytest.approx(Vec3(1.5, 2.0, 2.5))


def test_goal_positions_on_length_axis():
    home, away = PITCH.goal_positions(105.0)

    assert home == Vec3(-52.5, 0.0, 0.0)
    assert away == Vec3(52.5, 0.0, 0.0)


def test_is_on_pitch():
    assert PITCH.is_on_pitch(Vec3(52.5, 0.0, -34.0), 105.0, 68.0)
    assert not PITCH.is_on_pitch(Vec3(53.0, 0.0, 0.0), 105.0, 68.0)


def test_hidden_frame_is_parked_below_pitch():
    frame = EntityFrame.hidden(7)

    assert frame.position == HIDDEN_POSITION
    assert frame.position.y < 0
    assert frame.opacity == 0.0


def test_extrapolated_frames_are_translucent():
    assert EntityFrame(7, Vec3(0, 0, 0), True, True).opacity == EXTRAPOLATED_ALPHA
    assert EntityFrame(7, Vec3(0, 0, 0), True, False).opacity == 1.0
