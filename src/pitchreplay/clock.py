"""Playback clock driving simulation time from wall-clock ticks."""

from __future__ import annotations

from .errors import InvalidSpeedError
from .parser.types import Period

# Pause plus four forward rates; there is no reverse playback
SPEED_STEPS: tuple[float, ...] = (0.0, 0.5, 1.0, 2.0, 4.0)
DEFAULT_SPEED = 1.0


def speed_from_index(index: int) -> float:
    """Map a speed selector index (0..4) to a multiplier; unknown -> 1x."""
    if 0 <= index < len(SPEED_STEPS):
        return SPEED_STEPS[index]
    return DEFAULT_SPEED


def format_clock(seconds: float) -> str:
    """Format simulation time as MM:SS."""
    total = max(0.0, seconds)
    minutes = int(total // 60)
    secs = int(total % 60)
    return f"{minutes:02d}:{secs:02d}"


class PlaybackClock:
    """Simulation time for one timeline.

    ``tick`` accumulates ``elapsed * speed`` and clamps to
    ``[0, range_max]``. A clock built with ``range_max=None`` is unbounded
    and never clamps; set piece timelines use that to run past the end of
    their data.
    """

    def __init__(
        self,
        range_min: float = 0.0,
        range_max: float | None = None,
        speed: float = DEFAULT_SPEED,
        period: Period = Period.FIRST,
        start_time: float = 0.0,
    ):
        self.range_min = range_min
        self.range_max = range_max
        self.active_period = period
        self._speed = DEFAULT_SPEED
        self.set_speed(speed)
        self.simulation_time = start_time

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def paused(self) -> bool:
        return self._speed == 0.0

    @property
    def bounded(self) -> bool:
        return self.range_max is not None

    def set_speed(self, multiplier: float) -> None:
        if multiplier not in SPEED_STEPS:
            raise InvalidSpeedError(multiplier, SPEED_STEPS)
        self._speed = float(multiplier)

    def set_range(self, range_min: float, range_max: float) -> None:
        """Replace the valid range after the loaded dataset changed."""
        self.range_min = range_min
        self.range_max = range_max
        self.simulation_time = self._clamp(self.simulation_time, 0.0)

    def _clamp(self, value: float, lower: float) -> float:
        if self.range_max is None:
            return value
        return min(max(value, lower), self.range_max)

    def tick(self, elapsed_real_seconds: float) -> float:
        """Advance by wall-elapsed time scaled by the speed multiplier."""
        advanced = self.simulation_time + elapsed_real_seconds * self._speed
        self.simulation_time = self._clamp(advanced, 0.0)
        return self.simulation_time

    def scrub_to(self, time: float) -> float:
        """Jump straight to ``time``; cursors re-seek from where they are."""
        self.simulation_time = self._clamp(time, self.range_min)
        return self.simulation_time

    def switch_period(self, period: Period) -> Period:
        """Make ``period`` active and restart from 0.

        The owning timeline must reset its cursors; sequences of the two
        periods are not comparable in time.
        """
        self.active_period = period
        self.simulation_time = 0.0
        return period

    def format_clock(self) -> str:
        return format_clock(self.simulation_time)
