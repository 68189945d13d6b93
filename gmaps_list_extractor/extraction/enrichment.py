"""
Place Enrichment

Looks up every extracted record in the Places API and fills the fields the
list itself does not carry (coordinates, rating, phone, ...).

Records are processed one at a time, in order. A failed or empty lookup
never aborts the batch: the record is passed through unchanged.
"""

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from ..config import DELAY_BETWEEN_LOOKUPS
from ..exceptions import ExtractionCancelled
from ..models import PlaceRecord, clean_text, is_blank
from ..places.models import PlaceCandidate, PlaceDetails

logger = logging.getLogger(__name__)


class PlaceLookup(Protocol):
    """What the pipeline needs from a place lookup service."""

    def search(self, text: str) -> Optional[PlaceCandidate]:
        ...

    def details(self, place_id: str) -> Optional[PlaceDetails]:
        ...


# PlaceRecord field -> value taken from the details response
DETAIL_FIELDS: Dict[str, Callable[[PlaceDetails], Any]] = {
    "address": lambda d: clean_text(d.formatted_address),
    "latitude": lambda d: d.latitude,
    "longitude": lambda d: d.longitude,
    "rating": lambda d: d.rating,
    "review_count": lambda d: d.user_rating_count,
    "phone": lambda d: clean_text(d.phone),
    "website": lambda d: clean_text(d.website_uri),
    "opening_hours": lambda d: d.opening_hours,
    "plus_code": lambda d: clean_text(d.global_plus_code),
    "place_id": lambda d: clean_text(d.id),
    "resource_name": lambda d: clean_text(d.resource_name),
}


@dataclass
class EnrichmentStats:
    """Counters for one enrichment run."""
    matched: int = 0
    unmatched: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.matched + self.unmatched + self.failed

    def to_dict(self) -> Dict[str, int]:
        return {"matched": self.matched, "unmatched": self.unmatched, "failed": self.failed}


def build_query(record: PlaceRecord) -> str:
    """Search text for a record: "name address", or the name alone."""
    parts = [record.name]
    if not is_blank(record.address):
        parts.append(record.address.strip())
    return " ".join(parts)


def merge_fields(record: PlaceRecord, values: Dict[str, Any]) -> PlaceRecord:
    """
    Fill the record's empty fields from values.

    A value only lands where the record has None or a blank string; locally
    authored values are kept. Returns the same object when nothing changed.
    """
    updates = {
        name: value
        for name, value in values.items()
        if value is not None and is_blank(getattr(record, name))
    }
    if not updates:
        return record
    return replace(record, **updates)


def merge_details(
    record: PlaceRecord,
    details: Optional[PlaceDetails],
    candidate: Optional[PlaceCandidate] = None,
) -> PlaceRecord:
    """Merge a details response (and the search candidate's ids) into a record."""
    values: Dict[str, Any] = {}
    if candidate is not None:
        values["place_id"] = clean_text(candidate.id)
        values["resource_name"] = clean_text(candidate.resource_name)
    if details is not None:
        for name, getter in DETAIL_FIELDS.items():
            value = getter(details)
            if value is not None:
                values[name] = value
    return merge_fields(record, values)


class EnrichmentPipeline:
    """Sequential enrichment of place records.

    Args:
        lookup: Place lookup service (search + details).
        lookup_delay: Pause between two records (seconds).
        cancel_event: Checked before each record.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        lookup: PlaceLookup,
        lookup_delay: float = DELAY_BETWEEN_LOOKUPS,
        cancel_event: Optional[threading.Event] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.lookup = lookup
        self.lookup_delay = lookup_delay
        self.cancel_event = cancel_event
        self.sleep = sleep
        self.stats = EnrichmentStats()

    def enrich_record(self, record: PlaceRecord) -> PlaceRecord:
        """Enrich one record; lookup errors return the record unchanged."""
        query = build_query(record)
        try:
            candidate = self.lookup.search(query)
            if candidate is None:
                logger.warning(f"No match for '{record.name}', keeping list data only")
                self.stats.unmatched += 1
                return record

            details = self.lookup.details(candidate.id)
        except ExtractionCancelled:
            raise
        except Exception as e:
            logger.warning(f"Lookup failed for '{record.name}': {e}")
            self.stats.failed += 1
            return record

        self.stats.matched += 1
        return merge_details(record, details, candidate)

    def run(self, records: Sequence[PlaceRecord]) -> List[PlaceRecord]:
        """
        Enrich all records in order.

        Returns:
            A new list with the same length and order as records

        Raises:
            ExtractionCancelled: If the cancel event is set between records
        """
        self.stats = EnrichmentStats()
        enriched: List[PlaceRecord] = []

        for i, record in enumerate(records):
            if i > 0 and self.lookup_delay > 0:
                self.sleep(self.lookup_delay)

            # After the throttle wait, right before the lookup
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise ExtractionCancelled("enrichment")

            logger.info(f"[{i + 1}/{len(records)}] Looking up {record.name}")
            enriched.append(self.enrich_record(record))

        logger.info(
            f"Enrichment finished: {self.stats.matched} matched, "
            f"{self.stats.unmatched} unmatched, {self.stats.failed} failed"
        )
        return enriched


def enrich_places(
    records: Sequence[PlaceRecord],
    lookup: PlaceLookup,
    lookup_delay: float = DELAY_BETWEEN_LOOKUPS,
    cancel_event: Optional[threading.Event] = None,
) -> List[PlaceRecord]:
    """Convenience wrapper around EnrichmentPipeline.run()."""
    return EnrichmentPipeline(lookup, lookup_delay, cancel_event).run(records)
