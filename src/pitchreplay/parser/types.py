"""Core data types for the ingestion layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class Period(str, Enum):
    """Match half. Timelines carry no continuity across a period boundary."""

    FIRST = "1H"
    SECOND = "2H"

    @classmethod
    def from_indicator(cls, indicator: int | str) -> Period:
        """Map a raw period indicator (1|2, "1H"|"2H") to a Period.

        Anything that is not the first half is treated as the second half.
        """
        if isinstance(indicator, Period):
            return indicator
        text = str(indicator).strip().upper()
        if text in ("1", "1H"):
            return cls.FIRST
        if text in ("2", "2H"):
            return cls.SECOND
        # Raises ValueError for non-numeric garbage
        return cls.FIRST if int(text) == 1 else cls.SECOND

    @property
    def is_first_half(self) -> bool:
        return self is Period.FIRST


@dataclass(frozen=True)
class RawTrackingRecord:
    """One provider position sample, before keyframe building.

    Coordinates are in the engine's axis order: ``y`` is height and ``z``
    runs along the pitch width.
    """

    match_id: int
    period: int  # 1 or 2
    frame_id: int
    timestamp_ms: float
    entity_id: int  # -1 for the ball
    x: float
    y: float
    z: float
    extrapolated: bool = False


@dataclass(frozen=True)
class MatchMetadata:
    """Match-level metadata from the provider's metadata file."""

    match_id: int
    home_team: str
    away_team: str
    pitch_length: float = 0.0
    pitch_width: float = 0.0
    date: str | None = None
    competition: str | None = None
    home_jersey_color: str | None = None
    away_jersey_color: str | None = None
    home_number_color: str | None = None
    away_number_color: str | None = None
    provider: str | None = None
    fps: float | None = None

    def __post_init__(self):
        """Validate metadata after initialization."""
        if self.pitch_length < 0 or self.pitch_width < 0:
            raise ValueError("pitch dimensions cannot be negative")

    @property
    def has_pitch_size(self) -> bool:
        return self.pitch_length > 0 and self.pitch_width > 0


@dataclass(frozen=True)
class LineupEntry:
    """Entity id to team/role mapping for one player."""

    player_id: int
    team: str
    last_name: str
    first_name: str = ""
    shirt_number: int | None = None
    position: str | None = None

    @property
    def display_name(self) -> str:
        # Some players have no first name in the lineup files
        if self.first_name:
            return f"{self.first_name[0]}. {self.last_name}"
        return self.last_name

    @property
    def is_goalkeeper(self) -> bool:
        return (self.position or "").lower() == "goalkeeper"


@dataclass(frozen=True)
class SetPieceRecord:
    """A set piece as recorded by the event provider, before alignment."""

    timestamp: float  # seconds since first-half kickoff, event provider clock
    type: str
    team: str
    player: str
    accurate: bool
    period: Period
    duration: float = 0.0


@dataclass
class MatchData:
    """Everything an adapter yields for one match.

    ``tracking`` may hold parsed ``RawTrackingRecord`` objects or raw
    token rows; the keyframe builder accepts both.
    """

    metadata: MatchMetadata
    lineup: list[LineupEntry] = field(default_factory=list)
    tracking: list[RawTrackingRecord | Sequence[str]] = field(default_factory=list)
    set_pieces: list[SetPieceRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def match_id(self) -> int:
        return self.metadata.match_id

    def lineup_by_id(self) -> dict[int, LineupEntry]:
        return {entry.player_id: entry for entry in self.lineup}
