"""In-process adapter holding already-parsed match data."""

from __future__ import annotations

from ..errors import MatchNotFoundError
from .interface import TrackingAdapter
from .types import MatchData, MatchMetadata


class InMemoryAdapter(TrackingAdapter):
    """Adapter serving ``MatchData`` registered at runtime.

    Used when a host application already owns the records, and in tests.
    """

    def __init__(self, matches: dict[int, MatchData] | None = None):
        self._matches: dict[int, MatchData] = dict(matches or {})

    @property
    def name(self) -> str:
        return "memory"

    def add_match(self, data: MatchData) -> None:
        self._matches[data.match_id] = data

    def list_matches(self) -> list[int]:
        return sorted(self._matches)

    def load_metadata(self, match_id: int) -> MatchMetadata:
        return self.load_match(match_id).metadata

    def load_match(self, match_id: int) -> MatchData:
        if match_id not in self._matches:
            raise MatchNotFoundError(match_id, "not registered with the adapter")
        return self._matches[match_id]
