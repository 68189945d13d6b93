"""
KML export.

Writes a KML 2.2 document that Google My Maps and Google Earth can import:
one Placemark per place, with a Point when coordinates are known.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Sequence, Union

from ..models import ListMetadata, PlaceRecord

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"

ET.register_namespace("", KML_NAMESPACE)

# Control characters XML 1.0 does not allow; tab, newline and CR are kept
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _tag(name: str) -> str:
    return f"{{{KML_NAMESPACE}}}{name}"


def _xml_text(value: str) -> str:
    return INVALID_XML_CHARS.sub("", value)


def _format_number(value: float) -> str:
    return f"{value:.7f}".rstrip("0").rstrip(".")


def describe_list(metadata: ListMetadata) -> str:
    lines = []
    if metadata.description:
        lines.append(metadata.description)
    if metadata.creator:
        lines.append(f"Created by {metadata.creator}")
    return "\n".join(lines)


def describe_place(place: PlaceRecord) -> str:
    """Human-readable Placemark description, one fact per line."""
    lines: List[str] = []
    if place.address:
        lines.append(place.address)
    if place.notes:
        lines.append(place.notes)
    if place.rating is not None:
        lines.append(f"Rating: {place.rating:.1f}")
    if place.review_count is not None:
        lines.append(f"Reviews: {place.review_count}")
    if place.phone:
        lines.append(f"Phone: {place.phone}")
    if place.website:
        lines.append(f"Website: {place.website}")
    if place.opening_hours:
        lines.append(f"Hours: {place.opening_hours}")
    if place.plus_code:
        lines.append(f"Plus code: {place.plus_code}")
    if place.place_id:
        lines.append(f"Place ID: {place.place_id}")
    return "\n".join(lines)


def build_placemark(place: PlaceRecord) -> ET.Element:
    placemark = ET.Element(_tag("Placemark"))
    ET.SubElement(placemark, _tag("name")).text = _xml_text(place.name)

    description = describe_place(place)
    if description:
        ET.SubElement(placemark, _tag("description")).text = _xml_text(description)
    if place.address:
        ET.SubElement(placemark, _tag("address")).text = _xml_text(place.address)

    if place.latitude is not None and place.longitude is not None:
        point = ET.SubElement(placemark, _tag("Point"))
        ET.SubElement(point, _tag("coordinates")).text = (
            f"{_format_number(place.longitude)},{_format_number(place.latitude)},0"
        )
    return placemark


def build_kml(metadata: ListMetadata, places: Sequence[PlaceRecord]) -> ET.ElementTree:
    """Build the KML tree for a list, keeping the place order."""
    root = ET.Element(_tag("kml"))
    document = ET.SubElement(root, _tag("Document"))
    ET.SubElement(document, _tag("name")).text = _xml_text(metadata.name)
    ET.SubElement(document, _tag("description")).text = _xml_text(describe_list(metadata))

    for place in places:
        document.append(build_placemark(place))

    ET.indent(root, space="  ")
    return ET.ElementTree(root)


def write_kml(
    metadata: ListMetadata,
    places: Sequence[PlaceRecord],
    path: Union[str, Path],
) -> Path:
    """
    Write the list as a KML file.

    Args:
        metadata: List header (document name and description)
        places: Ordered places
        path: Output file path; parent directories are created

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_kml(metadata, places).write(path, encoding="utf-8", xml_declaration=True)
    logger.info(f"Wrote {len(places)} placemarks to {path}")
    return path
