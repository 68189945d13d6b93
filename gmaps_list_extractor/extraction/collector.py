"""
List Collector

Main orchestration module: load the shared list page, wait until the list
is fully rendered, decode the embedded payload and enrich the records.

Stages run strictly one after another:
    load page -> completeness -> payload decoding -> enrichment
"""

import logging
import threading
import time
from typing import Any, Dict, Optional, Tuple

from ..config import FEED_WAIT_TIMEOUT
from ..config_manager import ExtractorConfig
from ..exceptions import ExtractionCancelled
from ..models import ListExtractionResult
from ..parsers import parse_list_markup
from ..scraping import (
    CompletenessDetector,
    CompletenessOutcome,
    ListPage,
    fetch_list_markup,
    first_matching_selector,
    wait_for_first_selector,
)
from .enrichment import EnrichmentPipeline, PlaceLookup

logger = logging.getLogger(__name__)


def _check_cancelled(cancel_event: Optional[threading.Event], stage: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ExtractionCancelled(stage)


def load_rendered_markup(
    page: ListPage,
    url: str,
    config: ExtractorConfig,
    cancel_event: Optional[threading.Event] = None,
) -> Tuple[str, Optional[CompletenessOutcome]]:
    """
    Navigate to the list, scroll it until complete and return the markup.

    Returns:
        (markup, outcome); outcome is None when no list container was found
        and the page was read as-is

    Raises:
        NavigationError / NavigationTimeout: From the page collaborator
        CompletenessExhausted: When config.fail_on_incomplete is set
        ExtractionCancelled: If cancel_event is set
    """
    page.navigate(url)
    _check_cancelled(cancel_event, "page load")

    feed = wait_for_first_selector(page, config.feed_selectors, FEED_WAIT_TIMEOUT)
    if feed is None:
        logger.warning("List container not found; decoding the initial payload only")
        return page.read_markup(), None

    item_selector = first_matching_selector(page, config.item_selectors) or config.item_selectors[0]
    logger.debug(f"List container '{feed}', entries '{item_selector}'")

    detector = CompletenessDetector(
        container_selector=feed,
        item_selector=item_selector,
        load_more_selectors=config.load_more_selectors,
        stable_readings=config.stable_readings,
        max_ticks=config.max_scroll_ticks,
        delay=config.scroll_delay,
        fail_on_incomplete=config.fail_on_incomplete,
    )
    outcome = detector.run(page, cancel_event)
    return page.read_markup(), outcome


def fetch_markup(
    url: str,
    config: ExtractorConfig,
    cancel_event: Optional[threading.Event] = None,
) -> Tuple[str, Optional[CompletenessOutcome]]:
    """Get the list markup with a browser or, if disabled, a plain download."""
    if not config.use_browser:
        return fetch_list_markup(url, timeout=config.navigation_timeout, user_agent=config.user_agent), None

    from ..scraping.browser import open_list_page

    with open_list_page(config) as page:
        return load_rendered_markup(page, url, config, cancel_event)


def collect_list(
    url: str = None,
    config: Optional[ExtractorConfig] = None,
    lookup: Optional[PlaceLookup] = None,
    cancel_event: Optional[threading.Event] = None,
    page: Optional[ListPage] = None,
    markup: Optional[str] = None,
) -> ListExtractionResult:
    """
    Extract a shared list.

    Args:
        url: Shared list URL
        config: Extractor configuration (defaults are used when omitted)
        lookup: Place lookup service; enrichment is skipped when None
        cancel_event: Cooperative cancellation; checked between every step
        page: Already-open page collaborator to drive instead of launching one
        markup: Page markup to decode directly, skipping page loading

    Returns:
        ListExtractionResult with metadata, ordered places and statistics

    Raises:
        PayloadNotFound / PayloadMalformed: If the list cannot be decoded
        NavigationError / NavigationTimeout: If the page cannot be loaded
        CompletenessExhausted: When config.fail_on_incomplete is set
        ExtractionCancelled: If cancel_event is set
    """
    if config is None:
        config = ExtractorConfig()
    if url is None and markup is None:
        raise ValueError("Either url or markup is required")

    start_time = time.time()
    outcome = None

    _check_cancelled(cancel_event, "page load")
    if markup is None:
        if page is not None:
            markup, outcome = load_rendered_markup(page, url, config, cancel_event)
        else:
            markup, outcome = fetch_markup(url, config, cancel_event)

    _check_cancelled(cancel_event, "decoding")
    metadata, places = parse_list_markup(markup)
    logger.info(f"Decoded list '{metadata.name}' with {len(places)} places")

    if outcome is not None and outcome.item_count > len(places):
        logger.warning(
            f"{outcome.item_count} entries rendered but only {len(places)} found in the payload"
        )

    enrichment_stats = None
    if lookup is not None and places:
        pipeline = EnrichmentPipeline(lookup, config.lookup_delay, cancel_event)
        places = pipeline.run(places)
        enrichment_stats = pipeline.stats.to_dict()

    statistics: Dict[str, Any] = {
        "load_state": outcome.state.value if outcome else None,
        "scroll_ticks": outcome.ticks if outcome else 0,
        "load_more_clicks": outcome.load_more_clicks if outcome else 0,
        "rendered_items": outcome.item_count if outcome else None,
        "extracted_places": len(places),
        "enrichment": enrichment_stats,
        "elapsed_seconds": round(time.time() - start_time, 1),
    }
    return ListExtractionResult(metadata, places, statistics)
