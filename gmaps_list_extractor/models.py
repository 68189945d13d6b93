"""
List and place records.

Records are frozen: every stage that changes a record builds a new one with
dataclasses.replace() so earlier stages never observe a mutation.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional


def clean_text(value: Any) -> Optional[str]:
    """Trim a string value; blank or non-string values become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


@dataclass(frozen=True)
class ListMetadata:
    """Saved list header: name, description and creator."""

    name: str
    description: Optional[str] = None
    creator: Optional[str] = None
    share_url: Optional[str] = None

    def __post_init__(self):
        name = clean_text(self.name)
        if name is None:
            raise ValueError("A list name is required")
        object.__setattr__(self, "name", name)


@dataclass(frozen=True)
class PlaceRecord:
    """One entry of a saved list.

    Only name is required. place_id and resource_name are filled by
    enrichment from the Places API.
    """

    name: str
    address: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    opening_hours: Optional[str] = None
    plus_code: Optional[str] = None
    place_id: Optional[str] = None
    resource_name: Optional[str] = None

    def __post_init__(self):
        name = clean_text(self.name)
        if name is None:
            raise ValueError("A place name is required")
        object.__setattr__(self, "name", name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ListExtractionResult:
    """Result object returned by collect_list() and ListExtractor.extract().

    Attributes:
        metadata: The list header.
        places: Ordered place records, in source display order.
        statistics: Dictionary with load state, counts and timing.
    """

    def __init__(
        self,
        metadata: ListMetadata,
        places: List[PlaceRecord],
        statistics: Optional[Dict[str, Any]] = None,
    ):
        self.metadata = metadata
        self.places = list(places)
        self.statistics: Dict[str, Any] = dict(statistics or {})

    def __len__(self):
        return len(self.places)

    def __iter__(self) -> Iterator[PlaceRecord]:
        return iter(self.places)

    def __getitem__(self, index):
        return self.places[index]

    def to_dict(self) -> Dict[str, Any]:
        """Return the full result as a plain, JSON-ready dictionary."""
        return {
            "metadata": asdict(self.metadata),
            "statistics": dict(self.statistics),
            "places": [place.to_dict() for place in self.places],
        }

    def __repr__(self):
        return f"<ListExtractionResult: {len(self.places)} places in '{self.metadata.name}'>"
