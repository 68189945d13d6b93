"""
Configuration manager for library usage.

Provides a single configuration object that is passed explicitly to the
collector, the browser collaborator and the places client. Defaults come
from the config module, which itself reads environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from . import config
from .exceptions import ConfigurationError


@dataclass
class ExtractorConfig:
    """Configuration for ListExtractor and collect_list().

    For the API key: explicit arg > GOOGLE_PLACES_API_KEY env var > config.py default.

    Args:
        api_key: Google Places API (New) key. Only required when enriching.
        places_base_url: Base URL of the Places API.
        navigation_timeout: Page navigation timeout (seconds). Fatal when exceeded.
        lookup_timeout: Timeout for each Places API request (seconds).
        scroll_delay: Pause after each scroll tick (seconds).
        stable_readings: Unchanged item counts required before the list is considered loaded.
        max_scroll_ticks: Hard ceiling on scroll ticks.
        fail_on_incomplete: Raise CompletenessExhausted instead of continuing with a partial list.
        lookup_delay: Pause between consecutive Places lookups (seconds).
        headless: Run the browser without a window.
        use_browser: Drive a real browser; False downloads the page with httpx only.
        locale: Browser locale.
        user_agent: User agent for the browser context and plain HTTP fetches.
        feed_selectors: Candidate selectors for the scrolling list container.
        item_selectors: Candidate selectors for a rendered list entry.
        load_more_selectors: Candidate selectors for a "load more" affordance.
    """

    api_key: Optional[str] = None
    places_base_url: str = config.PLACES_BASE_URL
    navigation_timeout: float = config.NAVIGATION_TIMEOUT
    lookup_timeout: float = config.LOOKUP_TIMEOUT
    scroll_delay: float = config.SCROLL_DELAY
    stable_readings: int = config.STABLE_READINGS
    max_scroll_ticks: int = config.MAX_SCROLL_TICKS
    fail_on_incomplete: bool = False
    lookup_delay: float = config.DELAY_BETWEEN_LOOKUPS
    headless: bool = config.HEADLESS
    use_browser: bool = True
    locale: str = config.BROWSER_LOCALE
    user_agent: str = config.USER_AGENT
    feed_selectors: List[str] = field(default_factory=lambda: list(config.FEED_SELECTORS))
    item_selectors: List[str] = field(default_factory=lambda: list(config.ITEM_SELECTORS))
    load_more_selectors: List[str] = field(default_factory=lambda: list(config.LOAD_MORE_SELECTORS))

    def __post_init__(self):
        """Resolve the API key from env vars if not explicitly set, then validate."""
        if not self.api_key:
            self.api_key = os.environ.get("GOOGLE_PLACES_API_KEY") or config.PLACES_API_KEY or None

        if self.navigation_timeout <= 0:
            raise ConfigurationError("navigation_timeout must be positive")
        if self.lookup_timeout <= 0:
            raise ConfigurationError("lookup_timeout must be positive")
        if self.scroll_delay <= 0:
            raise ConfigurationError("scroll_delay must be positive")
        if self.stable_readings < 1:
            raise ConfigurationError("stable_readings must be at least 1")
        if self.max_scroll_ticks < 1:
            raise ConfigurationError("max_scroll_ticks must be at least 1")
        if self.lookup_delay < 0:
            raise ConfigurationError("lookup_delay cannot be negative")

    def require_api_key(self) -> str:
        """Return the API key or fail when enrichment cannot run."""
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(
                "A Google Places API key is required for enrichment. "
                "Pass --api-key or set GOOGLE_PLACES_API_KEY."
            )
        return self.api_key.strip()
