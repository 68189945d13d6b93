"""
Places API (New) response models.

Only the fields requested through the field masks are modelled; anything
else in a response is ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LocalizedText(_ApiModel):
    text: Optional[str] = None
    language_code: Optional[str] = Field(default=None, alias="languageCode")


class LatLng(_ApiModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OpeningHours(_ApiModel):
    weekday_descriptions: List[str] = Field(default_factory=list, alias="weekdayDescriptions")


class PlusCode(_ApiModel):
    global_code: Optional[str] = Field(default=None, alias="globalCode")
    compound_code: Optional[str] = Field(default=None, alias="compoundCode")


class PlaceCandidate(_ApiModel):
    """A text search hit."""
    id: Optional[str] = None
    resource_name: Optional[str] = Field(default=None, alias="name")
    display_name: Optional[LocalizedText] = Field(default=None, alias="displayName")

    @property
    def title(self) -> Optional[str]:
        return self.display_name.text if self.display_name else None


class SearchTextResponse(_ApiModel):
    places: List[PlaceCandidate] = Field(default_factory=list)


class PlaceDetails(_ApiModel):
    """Authoritative details of one place."""
    id: Optional[str] = None
    resource_name: Optional[str] = Field(default=None, alias="name")
    display_name: Optional[LocalizedText] = Field(default=None, alias="displayName")
    formatted_address: Optional[str] = Field(default=None, alias="formattedAddress")
    location: Optional[LatLng] = None
    rating: Optional[float] = None
    user_rating_count: Optional[int] = Field(default=None, alias="userRatingCount")
    national_phone_number: Optional[str] = Field(default=None, alias="nationalPhoneNumber")
    international_phone_number: Optional[str] = Field(default=None, alias="internationalPhoneNumber")
    website_uri: Optional[str] = Field(default=None, alias="websiteUri")
    regular_opening_hours: Optional[OpeningHours] = Field(default=None, alias="regularOpeningHours")
    plus_code: Optional[PlusCode] = Field(default=None, alias="plusCode")

    @property
    def latitude(self) -> Optional[float]:
        return self.location.latitude if self.location else None

    @property
    def longitude(self) -> Optional[float]:
        return self.location.longitude if self.location else None

    @property
    def phone(self) -> Optional[str]:
        return self.international_phone_number or self.national_phone_number

    @property
    def opening_hours(self) -> Optional[str]:
        if not self.regular_opening_hours:
            return None
        lines = [line.strip() for line in self.regular_opening_hours.weekday_descriptions if line and line.strip()]
        return "; ".join(lines) if lines else None

    @property
    def global_plus_code(self) -> Optional[str]:
        return self.plus_code.global_code if self.plus_code else None
