"""Pitch constants and coordinate system for football tracking playback.

Coordinate system used by the engine:
- X-axis: along the pitch length, goals at -length/2 and +length/2
- Z-axis: along the pitch width (source data calls this axis y)
- Y-axis: height above the ground
- Origin (0,0,0) is the centre spot at ground level
"""

from __future__ import annotations

from typing import NamedTuple


class Vec3(NamedTuple):
    """3D vector with x, y, z components."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linear interpolation towards ``other``; t is not clamped."""
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )


class PitchConstants:
    """Reference pitch dimensions and marking sizes (metres).

    The penalty and goal area widths are empirically tuned values carried
    over from the renderer; they are not the FIFA figures.
    """

    # Reference pitch used when normalizing provider coordinates
    REFERENCE_LENGTH: float = 105.0
    REFERENCE_WIDTH: float = 68.0

    PENALTY_AREA_DEPTH: float = 16.5
    PENALTY_AREA_WIDTH: float = 40.32
    GOAL_AREA_DEPTH: float = 5.5
    GOAL_AREA_WIDTH: float = 18.32
    CENTER_CIRCLE_RADIUS: float = 9.15
    PENALTY_MARK_DISTANCE: float = 11.0
    CORNER_ARC_RADIUS: float = 0.91

    @classmethod
    def goal_positions(cls, pitch_length: float) -> tuple[Vec3, Vec3]:
        """Home and away goal-line centres for a pitch of the given length."""
        half = pitch_length / 2
        return Vec3(-half, 0.0, 0.0), Vec3(half, 0.0, 0.0)

    @classmethod
    def is_on_pitch(cls, pos: Vec3, pitch_length: float, pitch_width: float) -> bool:
        """Check if a position lies within the touchlines and goal lines."""
        return abs(pos.x) <= pitch_length / 2 and abs(pos.z) <= pitch_width / 2


PITCH = PitchConstants()

# Tracking object id reserved for the ball; every other id is a player
BALL_ENTITY_ID = -1

# Half of a typical player height, lifts player origins to ground level
PLAYER_HALF_HEIGHT = 0.8125

# Where hidden entities are parked, below the pitch
HIDDEN_POSITION = Vec3(0.0, -10.0, 0.0)

# Presentation opacity for extrapolated keyframes
EXTRAPOLATED_ALPHA = 0.42

# Second-half event timestamps are counted from kickoff of the first half
SECOND_HALF_OFFSET_S = 45 * 60

# Set piece trail colours
ACCURATE_TRAIL_COLOR = "#627313"
INACCURATE_TRAIL_COLOR = "#B7352D"
