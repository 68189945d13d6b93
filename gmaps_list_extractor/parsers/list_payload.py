"""
Saved List Payload Extractor

Decodes the initialization state of a shared Google Maps list page into a
ListMetadata and an ordered list of PlaceRecord.

The list node is found by shape, not by path: the surrounding state changes
between page versions. A list node is an array whose [0] is the inner array:

    inner[2][2] = share URL
    inner[3][0] = creator display name
    inner[4]    = list name (required)
    inner[5]    = list description
    inner[8]    = array of place nodes

Each place node contains:
    [2]       = place name (blank => entry is dropped)
    [3]       = note authored by the list owner
    [1][4]    = address
    [1][5][2] = latitude
    [1][5][3] = longitude

Sometimes the list node is only reachable as a re-encoded JSON string that
contains the share URL prefix; such strings are parsed and searched too.
"""

import json
import logging
from typing import Any, List, Optional, Tuple

from ..config import EMBEDDED_ARRAY_START, SHARE_URL_PREFIX
from ..exceptions import PayloadMalformed, PayloadNotFound
from ..models import ListMetadata, PlaceRecord, clean_text
from .payload import locate_payload

logger = logging.getLogger(__name__)

# Index map
LIST_INNER = (0,)
INNER_SHARE_URL = (2, 2)
INNER_CREATOR = (3, 0)
INNER_NAME = (4,)
INNER_DESCRIPTION = (5,)
INNER_PLACES = (8,)
MIN_INNER_SLOTS = 9

PLACE_NAME = (2,)
PLACE_NOTES = (3,)
PLACE_ADDRESS = (1, 4)
PLACE_LATITUDE = (1, 5, 2)
PLACE_LONGITUDE = (1, 5, 3)

MAX_SEARCH_DEPTH = 200


def safe_get(obj: Any, *indices, default=None) -> Any:
    """Safely traverse nested lists by position"""
    current = obj
    for idx in indices:
        if isinstance(current, list) and 0 <= idx < len(current):
            current = current[idx]
        else:
            return default
    return current


def get_string(node: Any, path: Tuple[int, ...]) -> Optional[str]:
    value = safe_get(node, *path)
    return value if isinstance(value, str) else None


def get_number(node: Any, path: Tuple[int, ...]) -> Optional[float]:
    value = safe_get(node, *path)
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def get_array(node: Any, path: Tuple[int, ...]) -> Optional[list]:
    value = safe_get(node, *path)
    return value if isinstance(value, list) else None


def is_list_node(node: Any) -> bool:
    """Check the structural fingerprint of a list node."""
    inner = get_array(node, LIST_INNER)
    if inner is None or len(inner) < MIN_INNER_SLOTS:
        return False
    if clean_text(get_string(inner, INNER_NAME)) is None:
        return False
    return get_array(inner, INNER_PLACES) is not None


def parse_embedded_fragment(text: str) -> Optional[Any]:
    """Parse the JSON array re-encoded inside a string value."""
    start = text.find(EMBEDDED_ARRAY_START)
    fragment = text[start:] if start >= 0 else text
    if fragment.endswith('"'):
        fragment = fragment[:-1]

    try:
        return json.loads(fragment)
    except json.JSONDecodeError as e:
        logger.debug(f"Skipping unparseable embedded fragment ({e.msg} at {e.pos})")
        return None


def find_list_node(node: Any, depth: int = 0) -> Optional[list]:
    """
    Depth-first search for the first node matching the list fingerprint.

    Args:
        node: Any decoded JSON value
        depth: Current recursion depth

    Returns:
        The list node, or None if nothing matches
    """
    if depth > MAX_SEARCH_DEPTH:
        return None

    if isinstance(node, list):
        if is_list_node(node):
            return node
        for child in node:
            found = find_list_node(child, depth + 1)
            if found is not None:
                return found

    elif isinstance(node, dict):
        for child in node.values():
            found = find_list_node(child, depth + 1)
            if found is not None:
                return found

    elif isinstance(node, str) and SHARE_URL_PREFIX in node:
        logger.debug("Found share URL string, searching its embedded payload")
        fragment = parse_embedded_fragment(node)
        if fragment is not None:
            return find_list_node(fragment, depth + 1)

    return None


def parse_place_node(place_node: Any) -> Optional[PlaceRecord]:
    """Decode one place node. Returns None for entries without a name."""
    name = clean_text(get_string(place_node, PLACE_NAME))
    if name is None:
        logger.debug("Skipping place entry without a name")
        return None

    return PlaceRecord(
        name=name,
        address=clean_text(get_string(place_node, PLACE_ADDRESS)),
        notes=clean_text(get_string(place_node, PLACE_NOTES)),
        latitude=get_number(place_node, PLACE_LATITUDE),
        longitude=get_number(place_node, PLACE_LONGITUDE),
    )


def parse_list_node(list_node: list) -> Tuple[ListMetadata, List[PlaceRecord]]:
    """Decode the metadata and places of a list node."""
    inner = get_array(list_node, LIST_INNER)
    name = clean_text(get_string(inner, INNER_NAME))
    if name is None:
        raise PayloadNotFound("Unable to determine the list name")

    metadata = ListMetadata(
        name=name,
        description=clean_text(get_string(inner, INNER_DESCRIPTION)),
        creator=clean_text(get_string(inner, INNER_CREATOR)),
        share_url=clean_text(get_string(inner, INNER_SHARE_URL)),
    )

    places = []
    for place_node in get_array(inner, INNER_PLACES) or []:
        place = parse_place_node(place_node)
        if place is not None:
            places.append(place)

    logger.debug(f"Parsed {len(places)} places for list '{metadata.name}'")
    return metadata, places


def extract_list(payload: str) -> Tuple[ListMetadata, List[PlaceRecord]]:
    """
    Decode a located initialization payload.

    Args:
        payload: JSON text returned by locate_payload()

    Returns:
        Tuple of (metadata, places) with places in display order

    Raises:
        PayloadMalformed: If the payload is not valid JSON
        PayloadNotFound: If no node in the payload looks like a saved list
    """
    try:
        root = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PayloadMalformed(f"Initialization payload is not valid JSON: {e}") from e

    list_node = find_list_node(root)
    if list_node is None:
        raise PayloadNotFound("Could not locate the list details within the initialization payload")

    return parse_list_node(list_node)


def parse_list_markup(markup: str) -> Tuple[ListMetadata, List[PlaceRecord]]:
    """Locate and decode the saved list embedded in page markup."""
    return extract_list(locate_payload(markup))
