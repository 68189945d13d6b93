"""Custom exceptions for the gmaps-list-extractor library."""


class ListExtractorError(Exception):
    """Base exception for all gmaps-list-extractor errors."""
    pass


class PayloadNotFound(ListExtractorError):
    """Raised when the embedded list payload cannot be located in the page."""
    pass


class PayloadMalformed(ListExtractorError):
    """Raised when the embedded payload is truncated or is not valid JSON."""
    pass


class NavigationError(ListExtractorError):
    """Raised when the list page cannot be loaded."""
    pass


class NavigationTimeout(NavigationError):
    """Raised when loading the list page exceeds the navigation timeout."""
    pass


class CompletenessExhausted(ListExtractorError):
    """Raised when the list never stabilized within the scroll tick ceiling.

    Only raised when the caller asked for a complete list; otherwise the
    detector reports an exhausted outcome and extraction carries on.
    """

    def __init__(self, ticks: int, item_count: int):
        super().__init__(
            f"List did not finish loading after {ticks} scroll ticks "
            f"({item_count} items rendered)"
        )
        self.ticks = ticks
        self.item_count = item_count


class EnrichmentLookupFailed(ListExtractorError):
    """Raised by the places client on timeouts, transport or HTTP errors."""
    pass


class ConfigurationError(ListExtractorError):
    """Raised when configuration is invalid or incomplete."""
    pass


class ExtractionCancelled(Exception):
    """Raised when a cancellation request is observed.

    Not a ListExtractorError: handlers that recover from extraction errors
    must let it through.
    """

    def __init__(self, stage: str):
        super().__init__(f"Extraction cancelled during {stage}")
        self.stage = stage
