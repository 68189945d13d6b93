"""
List Completeness Detection

Scrolls the list container until the number of rendered entries stops
changing, clicking a "load more" control whenever one shows up.

Per tick:
    1. read the rendered entry count
    2. unchanged => stability counter + 1, changed => counter reset
    3. counter reached the threshold => click "load more" if present,
       otherwise the list is done (no further scrolling)
    4. scroll the container to the bottom and wait before the next reading
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..config import MAX_SCROLL_TICKS, SCROLL_DELAY, STABLE_READINGS
from ..exceptions import CompletenessExhausted, ExtractionCancelled
from .page import ListPage, first_matching_selector

logger = logging.getLogger(__name__)


class LoadState(Enum):
    """States of the scroll-and-stabilize loop"""
    SCROLLING = "scrolling"
    STABILIZING = "stabilizing"
    DONE = "done"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (LoadState.DONE, LoadState.EXHAUSTED)


@dataclass
class CompletenessOutcome:
    """Final state of a completeness run."""
    state: LoadState
    ticks: int
    item_count: int
    load_more_clicks: int = 0

    @property
    def complete(self) -> bool:
        return self.state is LoadState.DONE


class CompletenessDetector:
    """Drives a ListPage until its list is fully rendered.

    Args:
        container_selector: Scrolling container of the list.
        item_selector: Selector matching one rendered entry.
        load_more_selectors: Candidate "load more" controls, first match wins.
        stable_readings: Consecutive unchanged readings that end the loop.
        max_ticks: Hard ceiling on scroll ticks.
        delay: Wait after each scroll (seconds). Must be positive.
        fail_on_incomplete: Raise CompletenessExhausted at the ceiling
            instead of returning an EXHAUSTED outcome.
    """

    def __init__(
        self,
        container_selector: str,
        item_selector: str,
        load_more_selectors: Sequence[str] = (),
        stable_readings: int = STABLE_READINGS,
        max_ticks: int = MAX_SCROLL_TICKS,
        delay: float = SCROLL_DELAY,
        fail_on_incomplete: bool = False,
    ):
        if delay <= 0:
            raise ValueError("delay must be positive")
        if stable_readings < 1:
            raise ValueError("stable_readings must be at least 1")
        self.container_selector = container_selector
        self.item_selector = item_selector
        self.load_more_selectors = list(load_more_selectors)
        self.stable_readings = stable_readings
        self.max_ticks = max_ticks
        self.delay = delay
        self.fail_on_incomplete = fail_on_incomplete
        self.state = LoadState.SCROLLING

    def find_load_more(self, page: ListPage) -> Optional[str]:
        """Return the first "load more" selector present on the page."""
        return first_matching_selector(page, self.load_more_selectors)

    def run(self, page: ListPage, cancel_event: Optional[threading.Event] = None) -> CompletenessOutcome:
        """
        Scroll until the list is stable or the tick ceiling is hit.

        Args:
            page: The page collaborator
            cancel_event: Set it to stop at the start of the next tick

        Returns:
            CompletenessOutcome with state DONE or EXHAUSTED

        Raises:
            ExtractionCancelled: If cancel_event is set
            CompletenessExhausted: At the ceiling when fail_on_incomplete is set
        """
        self.state = LoadState.SCROLLING
        previous_count = None
        stable = 0
        ticks = 0
        clicks = 0
        count = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise ExtractionCancelled("scrolling")

            if ticks >= self.max_ticks:
                self.state = LoadState.EXHAUSTED
                if self.fail_on_incomplete:
                    raise CompletenessExhausted(ticks, count)
                logger.warning(
                    f"List still loading after {ticks} scroll ticks; "
                    f"continuing with {count} rendered entries"
                )
                return CompletenessOutcome(self.state, ticks, count, clicks)

            count = page.element_count(self.item_selector)
            if count == previous_count:
                stable += 1
                self.state = LoadState.STABILIZING
            else:
                stable = 0
                previous_count = count
                self.state = LoadState.SCROLLING
                logger.debug(f"Rendered entries: {count}")

            if stable >= self.stable_readings:
                load_more = self.find_load_more(page)
                if load_more is None:
                    self.state = LoadState.DONE
                    logger.info(f"List fully loaded: {count} entries after {ticks} scroll ticks")
                    return CompletenessOutcome(self.state, ticks, count, clicks)

                logger.debug(f"Activating load-more control '{load_more}'")
                page.click(load_more)
                clicks += 1
                stable = 0
                self.state = LoadState.SCROLLING

            page.scroll_to_bottom(self.container_selector)
            page.wait(self.delay)
            ticks += 1
