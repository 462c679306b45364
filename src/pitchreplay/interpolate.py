"""Pointer-seek interpolation over keyframe sequences.

Each tracked entity keeps a cursor pointing at the left keyframe of the
interval used on the previous query. Playback time is monotonic in the
common case, so the cursor only moves a step or two per tick; scrubbing
backwards walks it back by the scrubbed distance.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import TimelineInvariantError
from .keyframes import KeyframeSequence
from .parser.types import Period
from .pitch_constants import Vec3


@dataclass
class PlaybackCursor:
    """Search state carried between ticks for one entity on one timeline."""

    entity_id: int
    period: Period = Period.FIRST
    pointer_index: int = 0
    last_known_extrapolated: bool = False

    def reset(self, period: Period | None = None) -> None:
        if period is not None:
            self.period = period
        self.pointer_index = 0


@dataclass(frozen=True)
class Interpolated:
    """In-range seek result."""

    position: Vec3
    extrapolated: bool
    first_half: bool
    pointer_index: int


class _OutOfRange:
    """Seek result for queries outside the open interval (first, last)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OUT_OF_RANGE"

    def __bool__(self) -> bool:
        return False


OUT_OF_RANGE = _OutOfRange()

InterpolationResult = Interpolated | _OutOfRange


def seek(
    sequence: KeyframeSequence,
    cursor: PlaybackCursor,
    query_time: float,
) -> InterpolationResult:
    """Interpolate the entity position at ``query_time``.

    Returns ``OUT_OF_RANGE`` when the sequence has fewer than two keyframes
    or ``query_time`` is at or before the first keyframe, or at or after the
    last one. The cursor is only updated for in-range queries.

    The reported ``extrapolated`` flag is the left keyframe's; it is a
    provenance tag and is never interpolated.

    Raises:
        TimelineInvariantError: If the cursor points outside ``[0, len-2]``
            or the sequence turns out not to be sorted around the cursor
    """
    n = len(sequence)
    if n < 2 or not sequence[0].time < query_time < sequence[n - 1].time:
        return OUT_OF_RANGE

    p = cursor.pointer_index
    if not 0 <= p <= n - 2:
        raise TimelineInvariantError(
            cursor.entity_id, f"cursor index {p} outside [0, {n - 2}]"
        )

    while p < n - 2 and query_time > sequence[p + 1].time:
        p += 1
    while p > 0 and query_time < sequence[p].time:
        p -= 1
    # Land on the keyframe itself when the query hits its timestamp exactly,
    # so the result does not depend on the direction the cursor came from
    while p < n - 2 and query_time >= sequence[p + 1].time:
        p += 1

    left = sequence[p]
    right = sequence[p + 1]
    if not left.time <= query_time <= right.time:
        raise TimelineInvariantError(
            cursor.entity_id,
            f"keyframes not sorted around index {p} "
            f"({left.time} .. {right.time} for query {query_time})",
        )

    span = right.time - left.time
    t = 0.0 if span == 0 else (query_time - left.time) / span

    cursor.pointer_index = p
    cursor.last_known_extrapolated = left.extrapolated

    return Interpolated(
        position=left.position.lerp(right.position, t),
        extrapolated=left.extrapolated,
        first_half=left.first_half,
        pointer_index=p,
    )
