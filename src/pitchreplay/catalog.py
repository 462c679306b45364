"""Catalog of the matches available to an adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import PitchReplayError
from .parser.interface import TrackingAdapter

logger = logging.getLogger(__name__)

TEAM_ACRONYMS: dict[str, str] = {
    "Juventus": "JUV",
    "Inter Milan": "INT",
    "Olympique de Marseille": "MAR",
    "Paris Saint-Germain": "PSG",
    "Borussia Dortmund": "BVB",
    "FC Bayern Munchen": "BMU",
    "Manchester City": "MCI",
    "Liverpool Football Club": "LFC",
    "Real Madrid CF": "RMA",
    "FC Barcelona": "BAR",
    "South Africa": "RSA",
}


def team_acronym(name: str) -> str:
    """Three-letter label for a team name."""
    name = name.strip()
    if name in TEAM_ACRONYMS:
        return TEAM_ACRONYMS[name]
    return name[:3].upper()


@dataclass(frozen=True)
class MatchSummary:
    match_id: int
    home_team: str
    away_team: str

    @property
    def label(self) -> str:
        return f"{team_acronym(self.home_team)} vs {team_acronym(self.away_team)}"


def discover_matches(adapter: TrackingAdapter) -> list[MatchSummary]:
    """Summaries of every match whose metadata can be read.

    Matches with unreadable metadata are logged and left out.
    """
    summaries = []
    for match_id in adapter.list_matches():
        try:
            metadata = adapter.load_metadata(match_id)
        except PitchReplayError as e:
            logger.warning(f"Skipping match {match_id}: {e}")
            continue
        summary = MatchSummary(match_id, metadata.home_team, metadata.away_team)
        logger.info(f"Detected match: {summary.label} (ID: {match_id})")
        summaries.append(summary)

    if not summaries:
        logger.error("No matches found in the selected data source.")
    return summaries
