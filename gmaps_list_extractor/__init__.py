"""
Google Maps Saved List Extractor

A Python library for extracting publicly shared Google Maps lists, enriching
the places through the Places API and exporting them to KML and CSV.

Quick start (library usage):
    from gmaps_list_extractor import ListExtractor

    with ListExtractor(api_key="...") as extractor:
        result = extractor.extract("https://maps.app.goo.gl/...")
        extractor.save(result)

Or use the lower-level functions directly:
    from gmaps_list_extractor import parse_list_markup
    metadata, places = parse_list_markup(html)
"""

from .config_manager import ExtractorConfig
from .exceptions import (
    CompletenessExhausted,
    ConfigurationError,
    EnrichmentLookupFailed,
    ExtractionCancelled,
    ListExtractorError,
    NavigationError,
    NavigationTimeout,
    PayloadMalformed,
    PayloadNotFound,
)
from .extraction import collect_list
from .extractor import ListExtractor
from .models import ListExtractionResult, ListMetadata, PlaceRecord
from .parsers import parse_list_markup

__version__ = "1.0.0"
__all__ = [
    "ListExtractor",
    "ExtractorConfig",
    "ListExtractionResult",
    "ListMetadata",
    "PlaceRecord",
    "collect_list",
    "parse_list_markup",
    "ListExtractorError",
    "PayloadNotFound",
    "PayloadMalformed",
    "NavigationError",
    "NavigationTimeout",
    "CompletenessExhausted",
    "EnrichmentLookupFailed",
    "ConfigurationError",
    "ExtractionCancelled",
]
