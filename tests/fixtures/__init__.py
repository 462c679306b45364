"""Shared test fixtures and builders for pitchreplay tests."""

from .builders import (
    create_test_lineup,
    create_test_match,
    create_test_record,
    create_test_sequence,
    create_test_set_piece,
    write_csv,
    write_test_match_dir,
)

__all__ = [
    "create_test_lineup",
    "create_test_match",
    "create_test_record",
    "create_test_sequence",
    "create_test_set_piece",
    "write_csv",
    "write_test_match_dir",
]
