"""
ListExtractor - High-level API for Google Maps saved list extraction.

Owns the configuration and the Places API client, and exposes methods for
extracting a list and writing it out.

Usage:
    from gmaps_list_extractor import ListExtractor

    with ListExtractor(api_key="...") as extractor:
        result = extractor.extract("https://maps.app.goo.gl/...")
        for place in result:
            print(place.name, place.address)
        extractor.save(result)
"""

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional, Union

from .config_manager import ExtractorConfig
from .export import write_outputs
from .extraction.collector import collect_list
from .models import ListExtractionResult
from .places import GooglePlacesClient

logger = logging.getLogger(__name__)


class ListExtractor:
    """High-level interface for saved list extraction.

    The Places client is created on first use and closed with the extractor.
    A single cancel event is shared by every extraction; call cancel() from
    another thread to stop the running one. A cancel() issued before extract()
    or parse() stops that call; the event is cleared once the call returns.

    Args:
        api_key: Google Places API key. Falls back to GOOGLE_PLACES_API_KEY.
        config: Full configuration; api_key overrides its key when given.
        **overrides: ExtractorConfig fields, used when config is omitted.

    Example:
        with ListExtractor(headless=False) as ext:
            result = ext.extract(url, enrich=False)
            print(f"Found {len(result)} places")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[ExtractorConfig] = None,
        **overrides,
    ):
        if config is None:
            config = ExtractorConfig(api_key=api_key, **overrides)
        elif api_key:
            config = replace(config, api_key=api_key)
        self.config = config
        self.cancel_event = threading.Event()
        self._places_client: Optional[GooglePlacesClient] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def places_client(self) -> GooglePlacesClient:
        """Places client, created on first access (requires an API key)."""
        if self._places_client is None:
            self._places_client = GooglePlacesClient(
                self.config.require_api_key(),
                timeout=self.config.lookup_timeout,
                base_url=self.config.places_base_url,
            )
        return self._places_client

    def extract(
        self,
        url: str,
        enrich: bool = True,
        use_browser: Optional[bool] = None,
    ) -> ListExtractionResult:
        """
        Extract a shared list.

        Args:
            url: Shared list URL
            enrich: Look every place up in the Places API
            use_browser: Override config.use_browser for this call

        Returns:
            ListExtractionResult

        Raises:
            ConfigurationError: If enrich is requested without an API key
            ListExtractorError subclasses: On fatal extraction errors
            ExtractionCancelled: If cancel() was called
        """
        config = self.config
        if use_browser is not None and use_browser != config.use_browser:
            config = replace(config, use_browser=use_browser)

        lookup = self.places_client if enrich else None
        try:
            return collect_list(url, config=config, lookup=lookup, cancel_event=self.cancel_event)
        finally:
            self.cancel_event.clear()

    def parse(self, markup: str, enrich: bool = False) -> ListExtractionResult:
        """Decode already downloaded page markup, optionally enriching it."""
        lookup = self.places_client if enrich else None
        try:
            return collect_list(markup=markup, config=self.config, lookup=lookup, cancel_event=self.cancel_event)
        finally:
            self.cancel_event.clear()

    def save(
        self,
        result: ListExtractionResult,
        kml_path: Union[str, Path, None] = None,
        csv: bool = True,
        json_path: Union[str, Path, None] = None,
    ) -> Dict[str, Optional[Path]]:
        """Write KML (and CSV/JSON) files for a result."""
        return write_outputs(result, kml_path=kml_path, write_csv_file=csv, json_path=json_path)

    def cancel(self) -> None:
        """Ask the running extraction to stop at its next checkpoint."""
        self.cancel_event.set()

    def close(self) -> None:
        if self._places_client is not None:
            self._places_client.close()
            self._places_client = None

    def __repr__(self):
        return (
            f"<ListExtractor(browser={self.config.use_browser}, "
            f"headless={self.config.headless}, api_key={'set' if self.config.api_key else 'missing'})>"
        )
