"""Abstract interface for tracking data adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import MatchData, MatchMetadata


class TrackingAdapter(ABC):
    """Abstract base class for tracking data adapters.

    An adapter turns some storage format into ``MatchData``. The playback
    engine never reads files itself; it only consumes what an adapter yields.

    Adapters degrade gracefully: unusable rows and missing optional files
    become warnings on the returned ``MatchData`` instead of exceptions.
    """

    @abstractmethod
    def list_matches(self) -> list[int]:
        """List the ids of all matches this adapter can load.

        Returns:
            Match ids in a stable order
        """
        pass

    @abstractmethod
    def load_metadata(self, match_id: int) -> MatchMetadata:
        """Load only the metadata for a match.

        Raises:
            MatchNotFoundError: If the match metadata is unavailable
        """
        pass

    @abstractmethod
    def load_match(self, match_id: int) -> MatchData:
        """Load metadata, lineup, tracking records and set pieces for a match.

        Args:
            match_id: Id of the match to load

        Returns:
            MatchData with any ingestion warnings attached

        Raises:
            MatchNotFoundError: If the match metadata is unavailable
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name identifier for this adapter (e.g. "csv")."""
        pass
