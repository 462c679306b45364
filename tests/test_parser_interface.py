"""Tests for the adapter registry and in-memory adapter."""

import pytest

from pitchreplay.errors import MatchNotFoundError
from pitchreplay.parser import (
    AdapterNotFoundError,
    CsvDirectoryAdapter,
    InMemoryAdapter,
    TrackingAdapter,
    get_adapter,
    list_adapters,
    register_adapter,
)
from pitchreplay.parser.types import MatchMetadata, Period
from tests.fixtures import create_test_match


class TestRegistry:
    def test_default_adapter_is_csv(self, tmp_path):
        adapter = get_adapter(data_dir=tmp_path)

        assert isinstance(adapter, CsvDirectoryAdapter)
        assert adapter.name == "csv"

    def test_unknown_adapter(self):
        with pytest.raises(AdapterNotFoundError) as exc_info:
            get_adapter("parquet")

        assert "csv" in exc_info.value.details["available_adapters"]

    def test_list_adapters(self):
        assert {"csv", "memory"} <= set(list_adapters())

    def test_register_rejects_duplicates_and_non_adapters(self):
        with pytest.raises(ValueError):
            register_adapter("csv", CsvDirectoryAdapter)
        with pytest.raises(TypeError):
            register_adapter("bogus", object)

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            TrackingAdapter()


class TestInMemoryAdapter:
    def test_serves_registered_matches(self):
        adapter = InMemoryAdapter()
        adapter.add_match(create_test_match(match_id=9))
        adapter.add_match(create_test_match(match_id=3))

        assert adapter.list_matches() == [3, 9]
        assert adapter.load_metadata(9).match_id == 9

    def test_unknown_match(self):
        with pytest.raises(MatchNotFoundError):
            InMemoryAdapter().load_match(1)


class TestTypes:
    def test_period_from_indicator(self):
        assert Period.from_indicator(1) is Period.FIRST
        assert Period.from_indicator("2H") is Period.SECOND
        assert Period.from_indicator("3") is Period.SECOND
        with pytest.raises(ValueError):
            Period.from_indicator("half")

    def test_metadata_rejects_negative_pitch(self):
        with pytest.raises(ValueError):
            MatchMetadata(match_id=1, home_team="A", away_team="B", pitch_length=-1.0)

    def test_metadata_is_immutable(self):
        metadata = MatchMetadata(match_id=1, home_team="A", away_team="B")

        with pytest.raises(AttributeError):
            metadata.home_team = "C"
        assert not metadata.has_pitch_size
