"""
Default configuration for the Google Maps List Extractor.

Module-level defaults used when no explicit ExtractorConfig is supplied.
Credentials and timeouts can be overridden with environment variables:

    GOOGLE_PLACES_API_KEY       Places API (New) key used for enrichment
    GMAPS_LIST_NAV_TIMEOUT      Page navigation timeout in seconds
    GMAPS_LIST_LOOKUP_TIMEOUT   Per-request Places API timeout in seconds
    GMAPS_LIST_HEADLESS         "0"/"false" to show the browser window
"""

import os


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Google Places API
PLACES_API_KEY = os.environ.get("GOOGLE_PLACES_API_KEY", "")
PLACES_BASE_URL = "https://places.googleapis.com/v1"
PLACES_SEARCH_FIELD_MASK = "places.id,places.name,places.displayName"
PLACES_DETAILS_FIELD_MASK = ",".join([
    "id",
    "name",
    "displayName",
    "formattedAddress",
    "location",
    "rating",
    "userRatingCount",
    "nationalPhoneNumber",
    "internationalPhoneNumber",
    "websiteUri",
    "regularOpeningHours.weekdayDescriptions",
    "plusCode",
])

# Embedded payload markers
INITIALIZATION_STATE_MARKER = "window.APP_INITIALIZATION_STATE="
SHARE_URL_PREFIX = "https://www.google.com/maps/placelists/list/"
EMBEDDED_ARRAY_START = '[[["'

# Timeouts (seconds)
NAVIGATION_TIMEOUT = _env_float("GMAPS_LIST_NAV_TIMEOUT", 60.0)
LOOKUP_TIMEOUT = _env_float("GMAPS_LIST_LOOKUP_TIMEOUT", 15.0)
FEED_WAIT_TIMEOUT = 10.0
CLICK_TIMEOUT = 5.0

# Completeness detection
SCROLL_DELAY = 0.5
STABLE_READINGS = 3
MAX_SCROLL_TICKS = 100

# Rate limiting (seconds)
DELAY_BETWEEN_LOOKUPS = 0.2

# Browser
HEADLESS = _env_bool("GMAPS_LIST_HEADLESS", True)
BROWSER_LOCALE = "en-US"
NAVIGATION_WAIT_UNTIL = "networkidle"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)
REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Best-effort selector lists, first match wins
FEED_SELECTORS = [
    "div[role='feed']",
    "div[aria-label*='Results' i]",
    "div[aria-label*='Places' i]",
]
ITEM_SELECTORS = [
    "div[role='article']",
    "div[jsaction*='mouseover:pane']",
]
LOAD_MORE_SELECTORS = [
    "button[aria-label*='more places' i]",
    "button[jsaction*='loadMore']",
    "button:has-text('Show more')",
]

# API Server
API_HOST = "0.0.0.0"
API_PORT = 8000

# Output
DEFAULT_LIST_FILE_NAME = "GoogleMapsList"

# CSV Output Columns
CSV_COLUMNS = [
    "name",
    "address",
    "notes",
    "latitude",
    "longitude",
    "rating",
    "review_count",
    "phone",
    "website",
    "opening_hours",
    "plus_code",
    "place_id",
    "resource_name",
]
