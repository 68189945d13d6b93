"""Tests for the sequential Places enrichment pipeline."""

import threading

import pytest

from gmaps_list_extractor.exceptions import EnrichmentLookupFailed, ExtractionCancelled
from gmaps_list_extractor.extraction.enrichment import (
    EnrichmentPipeline,
    build_query,
    merge_details,
    merge_fields,
)
from gmaps_list_extractor.models import PlaceRecord

from conftest import FakeLookup, make_candidate, make_details


def no_sleep(seconds):
    pass


class TestBuildQuery:
    def test_name_and_address(self):
        record = PlaceRecord(name="Cafe", address="1 Main St")
        assert build_query(record) == "Cafe 1 Main St"

    def test_name_only_when_address_blank(self):
        assert build_query(PlaceRecord(name="Cafe", address="  ")) == "Cafe"
        assert build_query(PlaceRecord(name="Cafe")) == "Cafe"


class TestMergePolicy:
    def test_local_address_is_kept(self):
        record = PlaceRecord(name="Cafe", address="123 Main St")
        merged = merge_details(record, make_details())
        assert merged.address == "123 Main St"

    def test_missing_address_is_filled(self):
        record = PlaceRecord(name="Cafe", address=None)
        merged = merge_details(record, make_details())
        assert merged.address == "123 Main Street, Springfield"

    def test_blank_local_value_is_filled(self):
        record = PlaceRecord(name="Cafe", phone="  ")
        merged = merge_fields(record, {"phone": "+1 555 0100"})
        assert merged.phone == "+1 555 0100"

    def test_input_record_is_not_mutated(self):
        record = PlaceRecord(name="Cafe")
        merged = merge_details(record, make_details())
        assert record.latitude is None
        assert merged is not record
        assert merged.latitude == 40.0

    def test_details_field_mapping(self):
        details = make_details(
            internationalPhoneNumber="+1 217-555-0100",
            nationalPhoneNumber="(217) 555-0100",
            websiteUri="https://cafe.example",
            regularOpeningHours={"weekdayDescriptions": ["Monday: 8-5", "Tuesday: 8-5"]},
            plusCode={"globalCode": "86GGXXXX+XX"},
        )
        merged = merge_details(PlaceRecord(name="Cafe"), details)

        assert merged.rating == 4.5
        assert merged.review_count == 120
        assert merged.phone == "+1 217-555-0100"
        assert merged.website == "https://cafe.example"
        assert merged.opening_hours == "Monday: 8-5; Tuesday: 8-5"
        assert merged.plus_code == "86GGXXXX+XX"
        assert merged.place_id == "ChIJ123"
        assert merged.resource_name == "places/ChIJ123"

    def test_national_phone_fallback(self):
        merged = merge_details(PlaceRecord(name="Cafe"), make_details(nationalPhoneNumber="(217) 555-0100"))
        assert merged.phone == "(217) 555-0100"

    def test_missing_details_still_merges_candidate_ids(self):
        merged = merge_details(PlaceRecord(name="Cafe"), None, make_candidate("ChIJabc"))
        assert merged.place_id == "ChIJabc"
        assert merged.resource_name == "places/ChIJabc"
        assert merged.address is None

    def test_existing_ids_are_kept(self):
        record = PlaceRecord(name="Cafe", place_id="local-id")
        merged = merge_details(record, None, make_candidate("ChIJabc"))
        assert merged.place_id == "local-id"


class TestEnrichmentPipeline:
    def test_failure_passes_record_through(self):
        records = [
            PlaceRecord(name="One", address="1 A St"),
            PlaceRecord(name="Two", address="2 B St"),
            PlaceRecord(name="Three"),
        ]
        lookup = FakeLookup(
            candidates={
                "One 1 A St": make_candidate("id1"),
                "Two 2 B St": EnrichmentLookupFailed("boom"),
                "Three": make_candidate("id3"),
            },
            details={"id1": make_details("id1"), "id3": make_details("id3")},
        )
        pipeline = EnrichmentPipeline(lookup, lookup_delay=0, sleep=no_sleep)

        result = pipeline.run(records)

        assert [r.name for r in result] == ["One", "Two", "Three"]
        assert result[1] is records[1]
        assert result[0].place_id == "id1"
        assert result[0].address == "1 A St"
        assert result[2].place_id == "id3"
        assert result[2].address == "123 Main Street, Springfield"
        assert lookup.search_calls == ["One 1 A St", "Two 2 B St", "Three"]
        assert pipeline.stats.to_dict() == {"matched": 2, "unmatched": 0, "failed": 1}

    def test_unexpected_errors_are_recovered(self):
        records = [PlaceRecord(name="One")]
        lookup = FakeLookup(candidates={"One": RuntimeError("bad")})

        result = EnrichmentPipeline(lookup, lookup_delay=0, sleep=no_sleep).run(records)

        assert result[0] is records[0]

    def test_no_match_passes_record_through(self):
        records = [PlaceRecord(name="Nowhere")]
        pipeline = EnrichmentPipeline(FakeLookup(candidates={}), lookup_delay=0, sleep=no_sleep)

        result = pipeline.run(records)

        assert result[0] is records[0]
        assert pipeline.stats.unmatched == 1

    def test_details_error_is_a_failed_lookup(self):
        records = [PlaceRecord(name="One")]
        lookup = FakeLookup(
            candidates={"One": make_candidate("id1")},
            details={"id1": EnrichmentLookupFailed("timeout")},
        )
        pipeline = EnrichmentPipeline(lookup, lookup_delay=0, sleep=no_sleep)

        result = pipeline.run(records)

        assert result[0] is records[0]
        assert pipeline.stats.failed == 1

    def test_details_none_merges_ids(self):
        lookup = FakeLookup(candidates={"One": make_candidate("id1")})
        result = EnrichmentPipeline(lookup, lookup_delay=0, sleep=no_sleep).run([PlaceRecord(name="One")])
        assert result[0].place_id == "id1"

    def test_cancellation_is_not_swallowed(self):
        event = threading.Event()
        event.set()
        lookup = FakeLookup(candidates={})

        with pytest.raises(ExtractionCancelled):
            EnrichmentPipeline(lookup, cancel_event=event, sleep=no_sleep).run([PlaceRecord(name="One")])

        assert lookup.search_calls == []

    def test_cancellation_raised_by_lookup_propagates(self):
        lookup = FakeLookup(candidates={"One": ExtractionCancelled("enrichment")})
        with pytest.raises(ExtractionCancelled):
            EnrichmentPipeline(lookup, lookup_delay=0, sleep=no_sleep).run([PlaceRecord(name="One")])

    def test_cancellation_after_first_record(self):
        event = threading.Event()

        class CancellingLookup(FakeLookup):
            def search(self, text):
                event.set()
                return super().search(text)

        lookup = CancellingLookup(candidates={})
        records = [PlaceRecord(name=n) for n in ("A", "B", "C")]

        with pytest.raises(ExtractionCancelled):
            EnrichmentPipeline(lookup, lookup_delay=0, cancel_event=event, sleep=no_sleep).run(records)

        assert lookup.search_calls == ["A"]

    def test_cancellation_during_throttle_wait(self):
        event = threading.Event()

        def cancelling_sleep(seconds):
            event.set()

        lookup = FakeLookup(candidates={})
        records = [PlaceRecord(name=n) for n in ("A", "B")]

        with pytest.raises(ExtractionCancelled):
            EnrichmentPipeline(lookup, lookup_delay=0.2, cancel_event=event, sleep=cancelling_sleep).run(records)

        assert lookup.search_calls == ["A"]

    def test_delay_between_lookups(self):
        sleeps = []
        lookup = FakeLookup(candidates={})
        records = [PlaceRecord(name=n) for n in ("A", "B", "C")]

        EnrichmentPipeline(lookup, lookup_delay=0.2, sleep=sleeps.append).run(records)

        assert sleeps == [0.2, 0.2]

    def test_empty_input(self):
        assert EnrichmentPipeline(FakeLookup(candidates={}), sleep=no_sleep).run([]) == []
