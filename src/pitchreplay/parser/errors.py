"""Custom exceptions for the ingestion layer."""

from ..errors import PitchReplayError


class ParserError(PitchReplayError):
    """Base exception for all ingestion-related errors."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        base_details = {"path": path} if path else {}
        if details:
            base_details.update(details)
        super().__init__(message, base_details)


class MalformedRecordError(ParserError):
    """Raised for a single unusable row; callers skip the row and warn."""

    def __init__(self, reason: str, row: str = None, path: str = None):
        message = f"Malformed record: {reason}"
        details = {
            "reason": reason,
            "row": row,
            "suggested_action": "The row is skipped; check the exporter output",
        }
        super().__init__(message, path, details)


class AdapterNotFoundError(ParserError):
    """Raised when a requested tracking adapter is not found."""

    def __init__(self, adapter_name: str, available_adapters: list = None):
        available = available_adapters or []
        if available:
            available_list = ", ".join(available)
            message = (
                f"Tracking adapter not found: {adapter_name}. "
                f"Available: {available_list}"
            )
        else:
            message = f"Tracking adapter not found: {adapter_name}"

        details = {
            "adapter_name": adapter_name,
            "available_adapters": available,
            "suggested_action": f"Use one of the available adapters: {available}",
        }
        super().__init__(message, details=details)
