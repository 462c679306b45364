"""Ingestion layer for football tracking exports.

This module provides a pluggable interface for loading match data with
support for different storage backends. The default implementation reads
a directory of per-match CSV exports.

Example usage:
    from pitchreplay.parser import get_adapter

    adapter = get_adapter("csv", data_dir=Path("data"))
    for match_id in adapter.list_matches():
        data = adapter.load_match(match_id)
"""

from __future__ import annotations

from typing import Any

from .csv_adapter import CsvDirectoryAdapter, parse_tracking_row
from .errors import AdapterNotFoundError, MalformedRecordError, ParserError
from .interface import TrackingAdapter
from .memory_adapter import InMemoryAdapter
from .types import (
    LineupEntry,
    MatchData,
    MatchMetadata,
    Period,
    RawTrackingRecord,
    SetPieceRecord,
)

# Registry of available tracking adapters
_ADAPTER_REGISTRY: dict[str, type[TrackingAdapter]] = {
    "csv": CsvDirectoryAdapter,
    "memory": InMemoryAdapter,
}

# Default adapter name
_DEFAULT_ADAPTER = "csv"


def get_adapter(name: str = _DEFAULT_ADAPTER, **adapter_kwargs: Any) -> TrackingAdapter:
    """Get a tracking adapter by name.

    Args:
        name: Name of the adapter to retrieve. Defaults to "csv".
        **adapter_kwargs: Optional adapter-specific constructor arguments.

    Returns:
        Instance of the requested adapter

    Raises:
        AdapterNotFoundError: If the requested adapter is not found
    """
    if name not in _ADAPTER_REGISTRY:
        available = list(_ADAPTER_REGISTRY.keys())
        raise AdapterNotFoundError(name, available)

    adapter_class = _ADAPTER_REGISTRY[name]
    return adapter_class(**adapter_kwargs)


def list_adapters() -> list[str]:
    """List all available tracking adapter names."""
    return list(_ADAPTER_REGISTRY.keys())


def register_adapter(name: str, adapter_class: type[TrackingAdapter]) -> None:
    """Register a new tracking adapter.

    Args:
        name: Name to register the adapter under
        adapter_class: Class that implements the TrackingAdapter interface

    Raises:
        TypeError: If adapter_class doesn't implement TrackingAdapter
        ValueError: If name is already registered
    """
    if name in _ADAPTER_REGISTRY:
        raise ValueError(f"Adapter '{name}' is already registered")

    if not issubclass(adapter_class, TrackingAdapter):
        raise TypeError(
            f"Adapter class must inherit from TrackingAdapter, got {adapter_class}"
        )

    _ADAPTER_REGISTRY[name] = adapter_class


__all__ = [
    # Core types
    "LineupEntry",
    "MatchData",
    "MatchMetadata",
    "Period",
    "RawTrackingRecord",
    "SetPieceRecord",
    # Interface and adapters
    "TrackingAdapter",
    "CsvDirectoryAdapter",
    "InMemoryAdapter",
    "parse_tracking_row",
    # Functions
    "get_adapter",
    "list_adapters",
    "register_adapter",
    # Exceptions
    "ParserError",
    "MalformedRecordError",
    "AdapterNotFoundError",
]
