"""Tests for records and configuration."""

from dataclasses import FrozenInstanceError

import pytest

from gmaps_list_extractor.config_manager import ExtractorConfig
from gmaps_list_extractor.exceptions import ConfigurationError
from gmaps_list_extractor.models import ListExtractionResult, ListMetadata, PlaceRecord, clean_text


class TestRecords:
    def test_blank_place_name_rejected(self):
        with pytest.raises(ValueError):
            PlaceRecord(name="  ")

    def test_blank_list_name_rejected(self):
        with pytest.raises(ValueError):
            ListMetadata(name="")

    def test_names_are_trimmed(self):
        assert PlaceRecord(name="  Cafe ").name == "Cafe"

    def test_records_are_frozen(self):
        record = PlaceRecord(name="Cafe")
        with pytest.raises(FrozenInstanceError):
            record.name = "Other"

    def test_clean_text(self):
        assert clean_text("  x ") == "x"
        assert clean_text("   ") is None
        assert clean_text(5) is None


class TestListExtractionResult:
    def test_sequence_behaviour(self):
        result = ListExtractionResult(ListMetadata(name="L"), [PlaceRecord(name="A"), PlaceRecord(name="B")])
        assert len(result) == 2
        assert result[1].name == "B"
        assert [p.name for p in result] == ["A", "B"]
        assert "2 places" in repr(result)

    def test_to_dict(self):
        result = ListExtractionResult(ListMetadata(name="L", creator="Sam"), [PlaceRecord(name="A")], {"x": 1})
        data = result.to_dict()
        assert data["metadata"] == {"name": "L", "description": None, "creator": "Sam", "share_url": None}
        assert data["statistics"] == {"x": 1}
        assert data["places"][0]["name"] == "A"


class TestExtractorConfig:
    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "env-key")
        assert ExtractorConfig().api_key == "env-key"

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "env-key")
        assert ExtractorConfig(api_key="explicit").api_key == "explicit"

    def test_require_api_key(self):
        with pytest.raises(ConfigurationError):
            ExtractorConfig().require_api_key()
        assert ExtractorConfig(api_key=" k ").require_api_key() == "k"

    @pytest.mark.parametrize("field, value", [
        ("navigation_timeout", 0),
        ("scroll_delay", 0),
        ("stable_readings", 0),
        ("max_scroll_ticks", 0),
        ("lookup_delay", -1),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ConfigurationError):
            ExtractorConfig(**{field: value})

    def test_selector_lists_are_copies(self):
        first, second = ExtractorConfig(), ExtractorConfig()
        first.item_selectors.append("x")
        assert "x" not in second.item_selectors
