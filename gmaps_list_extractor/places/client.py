"""
Google Places API (New) client.

Two calls are used:
    POST {base}/places:searchText   - resolve "name address" to a place id
    GET  {base}/places/{id}         - fetch the authoritative details

Usage:
    with GooglePlacesClient(api_key) as client:
        candidate = client.search("Blue Bottle Coffee 1 Ferry Building")
        details = client.details(candidate.id)
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..config import (
    LOOKUP_TIMEOUT,
    PLACES_BASE_URL,
    PLACES_DETAILS_FIELD_MASK,
    PLACES_SEARCH_FIELD_MASK,
)
from ..exceptions import ConfigurationError, EnrichmentLookupFailed
from .models import PlaceCandidate, PlaceDetails, SearchTextResponse

logger = logging.getLogger(__name__)


class GooglePlacesClient:
    """Place lookup against the Places API (New).

    Args:
        api_key: Places API key. Must be non-blank.
        timeout: Per-request timeout in seconds.
        base_url: API root, without trailing slash.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = LOOKUP_TIMEOUT,
        base_url: str = PLACES_BASE_URL,
        transport: httpx.BaseTransport = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("A Google Places API key is required for enrichment")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"X-Goog-Api-Key": api_key.strip()},
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def search(self, text: str) -> Optional[PlaceCandidate]:
        """
        Text search for a single place.

        Returns:
            First candidate with a non-blank id, or None when nothing matched

        Raises:
            EnrichmentLookupFailed: On timeout, transport error, error status
                or an unreadable body
        """
        response = self._send(
            "POST",
            f"{self.base_url}/places:searchText",
            field_mask=PLACES_SEARCH_FIELD_MASK,
            json={"textQuery": text},
        )
        data = self._parse(response, SearchTextResponse, text)

        for candidate in data.places:
            if candidate.id and candidate.id.strip():
                return candidate

        logger.warning(f"No place found for '{text}'")
        return None

    def details(self, place_id: str) -> Optional[PlaceDetails]:
        """
        Fetch details for a place id.

        Returns:
            PlaceDetails, or None if the id is unknown (404)

        Raises:
            EnrichmentLookupFailed: On timeout, transport error, error status
                or an unreadable body
        """
        response = self._send(
            "GET",
            f"{self.base_url}/places/{quote(place_id, safe='')}",
            field_mask=PLACES_DETAILS_FIELD_MASK,
            allow_not_found=True,
        )
        if response is None:
            logger.warning(f"Place {place_id} not found")
            return None
        return self._parse(response, PlaceDetails, place_id)

    def _send(self, method: str, url: str, field_mask: str, allow_not_found: bool = False, **kwargs):
        try:
            response = self._client.request(
                method, url, headers={"X-Goog-FieldMask": field_mask}, **kwargs
            )
        except httpx.TimeoutException as e:
            raise EnrichmentLookupFailed(f"Places API request timed out after {self.timeout:.0f}s") from e
        except httpx.HTTPError as e:
            raise EnrichmentLookupFailed(f"Places API request failed: {e}") from e

        if allow_not_found and response.status_code == 404:
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EnrichmentLookupFailed(
                f"Places API error: {response.status_code} - {response.text[:200]}"
            ) from e
        return response

    @staticmethod
    def _parse(response: httpx.Response, model, subject: str):
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise EnrichmentLookupFailed(f"Unreadable Places API response for '{subject}'") from e
