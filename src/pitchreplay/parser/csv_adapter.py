"""CSV directory adapter for provider exports.

A data directory holds up to four files per match::

    <match_id>_metadata.csv
    <match_id>_lineup.csv
    <match_id>_tracking.csv
    <match_id>_set_pieces.csv

Only the metadata file is required. Every other problem (missing file,
header-only file, malformed row) becomes a warning on the returned
``MatchData``.
"""

from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import Sequence

from ..errors import MatchNotFoundError
from .errors import MalformedRecordError
from .interface import TrackingAdapter
from .types import (
    LineupEntry,
    MatchData,
    MatchMetadata,
    Period,
    RawTrackingRecord,
    SetPieceRecord,
)

logger = logging.getLogger(__name__)

METADATA_SUFFIX = "_metadata.csv"
LINEUP_SUFFIX = "_lineup.csv"
TRACKING_SUFFIX = "_tracking.csv"
SET_PIECES_SUFFIX = "_set_pieces.csv"

# match_id,half,frame_id,timestamp,object_id,x,y,z,extrapolated
TRACKING_FIELD_COUNT = 9
# timestamp,type,team,player,accurate,matchPeriod,duration
SET_PIECE_FIELD_COUNT = 7
# match_id,team_name,player_id,first_name,last_name,shirt_number,position,...
LINEUP_FIELD_COUNT = 7
# match_id,...,pitch_name,pitch_length,pitch_width,provider,fps
METADATA_FIELD_COUNT = 17

# Matches whose metadata reports a wrong pitch size: (home, away) -> (length, width)
PITCH_SIZE_CORRECTIONS: dict[tuple[str, str], tuple[float, float]] = {
    ("Spain", "Denmark"): (105.0, 68.0),
}

_TRUE_TOKENS = {"true", "1"}
_FALSE_TOKENS = {"false", "0"}


def collapse_team_name(value: str) -> str:
    """Reduce e.g. ``"Spain, Women"`` to ``"Spain"``."""
    return value.split(",")[0].strip()


def parse_bool(token: str) -> bool:
    text = token.strip().lower()
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    raise ValueError(f"not a boolean: {token!r}")


def _parse_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number: {token!r}")
    return value


def parse_tracking_row(tokens: Sequence[str]) -> RawTrackingRecord:
    """Parse one tracking row into a record.

    Source ``y`` runs along the pitch width and becomes engine ``z``; source
    ``z`` is height and becomes engine ``y``. An empty height is read as 0.

    Raises:
        MalformedRecordError: On wrong field count or unparseable numbers
    """
    if len(tokens) < TRACKING_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {TRACKING_FIELD_COUNT} fields, got {len(tokens)}",
            row=",".join(tokens),
        )

    try:
        height_token = tokens[7].strip()
        return RawTrackingRecord(
            match_id=int(tokens[0]),
            period=1 if int(tokens[1]) == 1 else 2,
            frame_id=int(tokens[2]),
            timestamp_ms=_parse_float(tokens[3]),
            entity_id=int(tokens[4]),
            x=_parse_float(tokens[5]),
            y=_parse_float(height_token) if height_token else 0.0,
            z=_parse_float(tokens[6]),
            extrapolated=parse_bool(tokens[8]),
        )
    except ValueError as e:
        raise MalformedRecordError(str(e), row=",".join(tokens)) from e


def parse_set_piece_row(tokens: Sequence[str]) -> SetPieceRecord:
    """Parse one set piece row. An unparseable duration reads as 0."""
    if len(tokens) < SET_PIECE_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {SET_PIECE_FIELD_COUNT} fields, got {len(tokens)}",
            row=",".join(tokens),
        )

    try:
        timestamp = _parse_float(tokens[0])
        period = Period.from_indicator(tokens[5])
    except ValueError as e:
        raise MalformedRecordError(str(e), row=",".join(tokens)) from e

    try:
        duration = _parse_float(tokens[6])
    except ValueError:
        duration = 0.0

    return SetPieceRecord(
        timestamp=timestamp,
        type=tokens[1].strip(),
        team=collapse_team_name(tokens[2]),
        player=tokens[3].strip(),
        accurate=tokens[4].strip().lower() == "true",
        period=period,
        duration=duration,
    )


def parse_lineup_row(tokens: Sequence[str]) -> LineupEntry:
    if len(tokens) < LINEUP_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {LINEUP_FIELD_COUNT} fields, got {len(tokens)}",
            row=",".join(tokens),
        )

    try:
        player_id = int(tokens[2])
        number_token = tokens[5].strip()
        shirt_number = int(number_token) if number_token else None
    except ValueError as e:
        raise MalformedRecordError(str(e), row=",".join(tokens)) from e

    return LineupEntry(
        player_id=player_id,
        team=collapse_team_name(tokens[1]),
        first_name=tokens[3].strip(),
        last_name=tokens[4].strip(),
        shirt_number=shirt_number,
        position=tokens[6].strip() or None,
    )


def parse_metadata_row(tokens: Sequence[str]) -> MatchMetadata:
    if len(tokens) < METADATA_FIELD_COUNT:
        raise MalformedRecordError(
            f"expected at least {METADATA_FIELD_COUNT} fields, got {len(tokens)}",
            row=",".join(tokens),
        )

    try:
        match_id = int(tokens[0])
        pitch_length = _parse_float(tokens[15]) if tokens[15].strip() else 0.0
        pitch_width = _parse_float(tokens[16]) if tokens[16].strip() else 0.0
    except ValueError as e:
        raise MalformedRecordError(str(e), row=",".join(tokens)) from e

    home_team = collapse_team_name(tokens[4])
    away_team = collapse_team_name(tokens[5])

    correction = PITCH_SIZE_CORRECTIONS.get((home_team, away_team))
    if correction is not None:
        pitch_length, pitch_width = correction
        logger.info(f"Corrected pitch size for {home_team} vs {away_team}")

    fps = None
    if len(tokens) > 18 and tokens[18].strip():
        try:
            fps = _parse_float(tokens[18])
        except ValueError:
            fps = None

    def _opt(index: int) -> str | None:
        if index < len(tokens) and tokens[index].strip():
            return tokens[index].strip()
        return None

    try:
        return MatchMetadata(
            match_id=match_id,
            date=_opt(1),
            competition=_opt(2),
            home_team=home_team,
            away_team=away_team,
            home_jersey_color=_opt(8),
            away_jersey_color=_opt(9),
            home_number_color=_opt(10),
            away_number_color=_opt(11),
            pitch_length=pitch_length,
            pitch_width=pitch_width,
            provider=_opt(17),
            fps=fps,
        )
    except ValueError as e:
        raise MalformedRecordError(str(e), row=",".join(tokens)) from e


class CsvDirectoryAdapter(TrackingAdapter):
    """Adapter reading per-match CSV exports from a single directory."""

    def __init__(self, data_dir: Path | str = "."):
        self.data_dir = Path(data_dir).expanduser()

    @property
    def name(self) -> str:
        return "csv"

    def _read_rows(self, file_name: str, warnings: list[str]) -> list[list[str]] | None:
        """Read the data rows of a CSV file, header excluded.

        Returns None (and records a warning) when the file is missing,
        cannot be decoded or holds no data rows.
        """
        path = self.data_dir / file_name
        if not path.is_file():
            message = f"CSV file not found: {path}"
            logger.warning(message)
            warnings.append(message)
            return None

        try:
            with open(path, encoding="utf-8", newline="") as f:
                rows = [row for row in csv.reader(f)]
        except (UnicodeDecodeError, csv.Error, OSError) as e:
            message = f"CSV file could not be read: {path} ({e})"
            logger.warning(message)
            warnings.append(message)
            return None

        data_rows = [row for row in rows[1:] if row and any(cell.strip() for cell in row)]
        if not data_rows:
            message = f"CSV file is empty or missing header: {path}"
            logger.warning(message)
            warnings.append(message)
            return None

        return data_rows

    def _parse_rows(self, file_name, rows, parse, warnings) -> list:
        parsed = []
        skipped = 0
        for row in rows:
            try:
                parsed.append(parse(row))
            except MalformedRecordError as e:
                skipped += 1
                warnings.append(f"{file_name}: {e}")
        if skipped:
            logger.warning(f"Skipped {skipped} malformed row(s) in {file_name}")
        return parsed

    def list_matches(self) -> list[int]:
        match_ids = []
        if not self.data_dir.is_dir():
            logger.error(f"Data directory not found: {self.data_dir}")
            return match_ids

        for path in sorted(self.data_dir.glob(f"*{METADATA_SUFFIX}")):
            prefix = path.name[: -len(METADATA_SUFFIX)]
            try:
                match_ids.append(int(prefix))
            except ValueError:
                logger.warning(f"Ignoring metadata file with non-numeric id: {path.name}")
        return match_ids

    def load_metadata(self, match_id: int) -> MatchMetadata:
        warnings: list[str] = []
        rows = self._read_rows(f"{match_id}{METADATA_SUFFIX}", warnings)
        if rows is None:
            raise MatchNotFoundError(match_id, warnings[-1] if warnings else None)
        try:
            return parse_metadata_row(rows[0])
        except MalformedRecordError as e:
            raise MatchNotFoundError(match_id, str(e)) from e

    def load_match(self, match_id: int) -> MatchData:
        metadata = self.load_metadata(match_id)
        warnings: list[str] = []

        lineup: list[LineupEntry] = []
        file_name = f"{match_id}{LINEUP_SUFFIX}"
        rows = self._read_rows(file_name, warnings)
        if rows is not None:
            lineup = self._parse_rows(file_name, rows, parse_lineup_row, warnings)

        tracking: list[RawTrackingRecord] = []
        file_name = f"{match_id}{TRACKING_SUFFIX}"
        rows = self._read_rows(file_name, warnings)
        if rows is not None:
            tracking = self._parse_rows(file_name, rows, parse_tracking_row, warnings)

        set_pieces: list[SetPieceRecord] = []
        file_name = f"{match_id}{SET_PIECES_SUFFIX}"
        rows = self._read_rows(file_name, warnings)
        if rows is not None:
            set_pieces = self._parse_rows(file_name, rows, parse_set_piece_row, warnings)

        logger.info(
            f"Loaded match {match_id}: {len(tracking)} tracking rows, "
            f"{len(lineup)} players, {len(set_pieces)} set pieces"
        )

        return MatchData(
            metadata=metadata,
            lineup=lineup,
            tracking=tracking,
            set_pieces=set_pieces,
            warnings=warnings,
        )
