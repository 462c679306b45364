"""Custom exceptions for pitchreplay with structured error information."""


class PitchReplayError(Exception):
    """Base exception for all pitchreplay errors.

    Provides structured error information with actionable messages.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class MatchNotFoundError(PitchReplayError):
    """Raised when a match cannot be loaded because its metadata is missing."""

    def __init__(self, match_id: int, reason: str = None):
        base_message = f"Match {match_id} could not be loaded"
        if reason:
            message = f"{base_message} ({reason})"
        else:
            message = base_message

        details = {
            "match_id": match_id,
            "reason": reason,
            "suggested_action": (
                f"Check that {match_id}_metadata.csv exists and has a data row"
            ),
        }
        super().__init__(message, details)


class InvalidSpeedError(PitchReplayError):
    """Raised when a playback speed outside the supported steps is requested."""

    def __init__(self, speed: float, allowed: tuple[float, ...]):
        message = f"Unsupported playback speed: {speed}"
        details = {
            "speed": speed,
            "allowed": list(allowed),
            "suggested_action": f"Use one of: {', '.join(str(s) for s in allowed)}",
        }
        super().__init__(message, details)


class TimelineInvariantError(PitchReplayError):
    """Raised when a keyframe sequence or cursor violates its invariants.

    Fatal to the affected entity's timeline only.
    """

    def __init__(self, entity_id: int, reason: str):
        message = f"Timeline invariant violated for entity {entity_id}: {reason}"
        details = {
            "entity_id": entity_id,
            "reason": reason,
            "suggested_action": "The entity is hidden for the rest of the session",
        }
        super().__init__(message, details)


class NoMatchLoadedError(PitchReplayError):
    """Raised when playback is controlled before any match was loaded."""

    def __init__(self):
        message = "No match loaded"
        details = {"suggested_action": "Load a match before controlling playback"}
        super().__init__(message, details)
