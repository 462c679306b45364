# src/pitchreplay/config.py
"""Configuration management for pitchreplay."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomllib

from .alignment import AlignmentTable
from .clock import DEFAULT_SPEED, SPEED_STEPS
from .errors import PitchReplayError
from .parser import list_adapters
from .parser.types import Period


class ConfigError(PitchReplayError):
    """Configuration error."""

    pass


DEFAULT_REFERENCE_TEAM = "Denmark"


@dataclass
class PathsConfig:
    data_dir: Path = field(default_factory=lambda: Path("."))


@dataclass
class PlaybackConfig:
    normalize_pitch_size: bool = False
    speed: float = DEFAULT_SPEED
    period: Period = Period.FIRST
    attack_reference_team: str = DEFAULT_REFERENCE_TEAM
    adapter: str = "csv"


@dataclass
class AlignmentConfig:
    # match id -> (first half offset, second half offset), seconds
    offsets: dict[int, tuple[float, float]] = field(default_factory=dict)
    # match id -> base mirroring flag
    flip: dict[int, bool] = field(default_factory=dict)

    def to_table(self) -> AlignmentTable:
        return AlignmentTable(offsets=self.offsets, flip_policy=self.flip)


@dataclass
class PitchReplayConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    alignment: AlignmentConfig = field(default_factory=AlignmentConfig)

    def validate(self) -> None:
        """Validate configuration, raising ConfigError if invalid."""
        if self.playback.speed not in SPEED_STEPS:
            raise ConfigError(
                f"Invalid speed '{self.playback.speed}'. "
                f"Must be one of: {', '.join(str(s) for s in SPEED_STEPS)}"
            )

        if not isinstance(self.playback.period, Period):
            raise ConfigError(
                f"Invalid period '{self.playback.period}'. Must be one of: 1H, 2H"
            )

        if not self.playback.attack_reference_team.strip():
            raise ConfigError("attack_reference_team cannot be empty")

        if self.playback.adapter not in list_adapters():
            raise ConfigError(
                f"Invalid adapter '{self.playback.adapter}'. "
                f"Must be one of: {', '.join(list_adapters())}"
            )

        for match_id, offset in self.alignment.offsets.items():
            if len(offset) != 2:
                raise ConfigError(
                    f"Alignment offset for match {match_id} must be "
                    "[first_half_offset, second_half_offset]"
                )


def _parse_match_key(key: str) -> int:
    try:
        return int(key)
    except ValueError as e:
        raise ConfigError(f"Match id keys must be integers, got '{key}'") from e


def _parse_period(value) -> Period:
    try:
        return Period.from_indicator(value)
    except ValueError as e:
        raise ConfigError(f"Invalid period '{value}'. Must be one of: 1H, 2H") from e


def _parse_number(value, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {what} '{value}'. Must be a number") from e


def load_config(config_path: Path) -> PitchReplayConfig:
    """Load configuration from TOML file."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    paths_data = data.get("paths", {})
    paths = PathsConfig(
        data_dir=Path(paths_data.get("data_dir", ".")).expanduser(),
    )

    playback_data = data.get("playback", {})
    playback = PlaybackConfig(
        normalize_pitch_size=bool(playback_data.get("normalize_pitch_size", False)),
        speed=_parse_number(playback_data.get("speed", DEFAULT_SPEED), "speed"),
        period=_parse_period(playback_data.get("period", "1H")),
        attack_reference_team=playback_data.get(
            "attack_reference_team", DEFAULT_REFERENCE_TEAM
        ),
        adapter=playback_data.get("adapter", "csv"),
    )

    alignment_data = data.get("alignment", {})
    offsets = {}
    for key, value in alignment_data.get("offsets", {}).items():
        if not isinstance(value, list) or len(value) != 2:
            raise ConfigError(
                f"Alignment offset for match {key} must be "
                "[first_half_offset, second_half_offset]"
            )
        offsets[_parse_match_key(key)] = (
            _parse_number(value[0], f"alignment offset for match {key}"),
            _parse_number(value[1], f"alignment offset for match {key}"),
        )
    flip = {
        _parse_match_key(key): bool(value)
        for key, value in alignment_data.get("flip", {}).items()
    }

    return PitchReplayConfig(
        paths=paths,
        playback=playback,
        alignment=AlignmentConfig(offsets=offsets, flip=flip),
    )


def get_default_config_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".pitchreplay" / "config.toml"
