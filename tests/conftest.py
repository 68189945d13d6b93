"""Shared fixtures and builders for the extractor tests."""

import json
from typing import Dict, Iterable, List, Optional

import pytest

from gmaps_list_extractor import config
from gmaps_list_extractor.places.models import PlaceCandidate, PlaceDetails


def make_place_node(name, address=None, notes=None, lat=None, lng=None) -> list:
    """A place node laid out the way the list payload stores it."""
    return [None, [None, None, None, None, address, [None, None, lat, lng]], name, notes]


def make_list_node(
    name,
    places: Iterable[list] = (),
    description=None,
    creator=None,
    share_url=None,
) -> list:
    inner = [
        "list-id",
        1,
        [None, None, share_url],
        [creator],
        name,
        description,
        None,
        None,
        list(places),
    ]
    return [inner]


def make_markup(payload) -> str:
    """Wrap a payload the way the list page embeds it."""
    return (
        "<!DOCTYPE html><html><head><script nonce=\"x\">"
        f"window.APP_INITIALIZATION_STATE={json.dumps(payload)};window.APP_FLAGS=[1,2];"
        "</script></head><body></body></html>"
    )


def make_candidate(place_id="ChIJ123", display_name="Cafe") -> PlaceCandidate:
    return PlaceCandidate.model_validate(
        {"id": place_id, "name": f"places/{place_id}", "displayName": {"text": display_name}}
    )


def make_details(place_id="ChIJ123", **fields) -> PlaceDetails:
    data = {
        "id": place_id,
        "name": f"places/{place_id}",
        "formattedAddress": "123 Main Street, Springfield",
        "location": {"latitude": 40.0, "longitude": -89.0},
        "rating": 4.5,
        "userRatingCount": 120,
    }
    data.update(fields)
    return PlaceDetails.model_validate(data)


class FakePage:
    """In-memory ListPage.

    item_counts is consumed one reading at a time for the item selector; the
    last value repeats. Selectors in present count as one element.
    """

    def __init__(
        self,
        item_selector: str = "div.item",
        item_counts: Iterable[int] = (0,),
        present: Iterable[str] = (),
        markup: str = "",
    ):
        self.item_selector = item_selector
        self.item_counts: List[int] = list(item_counts)
        self.present = set(present)
        self.markup = markup
        self.actions: List[tuple] = []
        self.readings = 0

    def navigate(self, url, wait_until="networkidle"):
        self.actions.append(("navigate", url))

    def read_markup(self):
        self.actions.append(("read_markup",))
        return self.markup

    def element_count(self, selector):
        if selector == self.item_selector:
            self.readings += 1
            if len(self.item_counts) > 1:
                return self.item_counts.pop(0)
            return self.item_counts[0]
        return 1 if selector in self.present else 0

    def scroll_to_bottom(self, container_selector):
        self.actions.append(("scroll", container_selector))

    def click(self, selector):
        self.actions.append(("click", selector))
        self.present.discard(selector)

    def wait(self, seconds):
        self.actions.append(("wait", seconds))

    def count(self, action: str) -> int:
        return sum(1 for entry in self.actions if entry[0] == action)


class FakeLookup:
    """Place lookup returning canned answers keyed by search text.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, candidates: Dict[str, object], details: Optional[Dict[str, object]] = None):
        self.candidates = candidates
        self.details_by_id = details or {}
        self.search_calls: List[str] = []
        self.details_calls: List[str] = []

    def search(self, text):
        self.search_calls.append(text)
        answer = self.candidates.get(text)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def details(self, place_id):
        self.details_calls.append(place_id)
        answer = self.details_by_id.get(place_id)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture(autouse=True)
def no_ambient_api_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)
    monkeypatch.setattr(config, "PLACES_API_KEY", "")


@pytest.fixture
def sample_payload():
    places = [
        make_place_node("Ichiran Shibuya", "1-22-7 Jinnan, Shibuya", "Go late [after 10pm]", 35.661, 139.699),
        make_place_node("Tsukiji Outer Market", None, None, 35.665, 139.770),
        make_place_node("Blue Bottle Kiyosumi", "1-4-8 Hirano", None),
    ]
    list_node = make_list_node(
        "Tokyo Eats",
        places,
        description="Food to try",
        creator="Alex",
        share_url="https://www.google.com/maps/placelists/list/abc123",
    )
    return [["header", None], list_node, "trailer"]


@pytest.fixture
def sample_markup(sample_payload):
    return make_markup(sample_payload)
