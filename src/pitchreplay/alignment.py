"""Temporal alignment between tracking and event providers.

Event timestamps come from a different provider than the tracking data and
are shifted by a per-match, per-period offset before being played against
the tracking clock. Per-match tables are filled in by hand for each new
match; gaps are not fatal, they fall back to a default and warn once.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .parser.types import Period
from .pitch_constants import Vec3

logger = logging.getLogger(__name__)


class AlignmentTable:
    """Per-match alignment offsets and mirroring policy.

    Args:
        offsets: match id -> (first half offset, second half offset), seconds
        flip_policy: match id -> base mirroring flag (defaults to True)
    """

    def __init__(
        self,
        offsets: Mapping[int, tuple[float, float]] | None = None,
        flip_policy: Mapping[int, bool] | None = None,
    ):
        self.offsets: dict[int, tuple[float, float]] = dict(offsets or {})
        self.flip_policy: dict[int, bool] = dict(flip_policy or {})
        self.warnings: list[str] = []
        self._warned: set[tuple[str, int]] = set()

    def _warn_once(self, kind: str, match_id: int, message: str) -> None:
        if (kind, match_id) in self._warned:
            return
        self._warned.add((kind, match_id))
        self.warnings.append(message)
        logger.warning(message)

    def align_timestamp(self, match_id: int, raw_timestamp: float, period: Period) -> float:
        """Translate an event timestamp onto the tracking provider's clock."""
        offset = self.offsets.get(match_id)
        if offset is None:
            self._warn_once(
                "offset",
                match_id,
                f"Match ID {match_id} has no alignment offset, "
                "event and tracking data may be unsynchronized",
            )
            return raw_timestamp

        first_half_offset, second_half_offset = offset
        if Period(period) is Period.FIRST:
            return raw_timestamp + first_half_offset
        return raw_timestamp + second_half_offset

    def base_mirror(self, match_id: int) -> bool:
        policy = self.flip_policy.get(match_id)
        if policy is None:
            self._warn_once(
                "flip",
                match_id,
                f"Match ID {match_id} has no flip policy, "
                "positions may be shown on the wrong side of the pitch",
            )
            return True
        return policy

    def resolve_mirroring(self, match_id: int, keyframe_is_first_half: bool) -> bool:
        """Decide whether x/z must be negated for a keyframe of this match.

        With the default policy second-half keyframes are mirrored and
        first-half ones are not; an inverted policy mirrors the first half.
        """
        match_flipped = self.base_mirror(match_id)
        return (not keyframe_is_first_half) if match_flipped else keyframe_is_first_half


def mirror(position: Vec3) -> Vec3:
    """Rotate a position 180 degrees about the pitch centre."""
    return Vec3(-position.x, position.y, -position.z)


def is_reference_home(home_team: str, reference_team: str) -> bool:
    """Whether the team whose attack direction is kept constant plays at home."""
    return home_team.strip().casefold() == reference_team.strip().casefold()
