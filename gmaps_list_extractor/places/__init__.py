"""
Google Places API (New) lookup: httpx client and pydantic response models.
"""

from .client import GooglePlacesClient
from .models import PlaceCandidate, PlaceDetails
