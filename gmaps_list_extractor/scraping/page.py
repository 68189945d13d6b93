"""
Page collaborator interface.

The scraping core only talks to the page through these methods, so the
browser can be swapped for a fake in tests or another automation layer.
Selector strings are plain CSS and come from configuration.
"""

import time
from typing import Optional, Protocol, Sequence


class ListPage(Protocol):
    """Capabilities the extractor needs from a loaded list page."""

    def navigate(self, url: str, wait_until: str = "networkidle") -> None:
        ...

    def read_markup(self) -> str:
        ...

    def element_count(self, selector: str) -> int:
        ...

    def scroll_to_bottom(self, container_selector: str) -> None:
        ...

    def click(self, selector: str) -> None:
        ...

    def wait(self, seconds: float) -> None:
        ...


def first_matching_selector(page: ListPage, candidates: Sequence[str]) -> Optional[str]:
    """Return the first candidate selector that matches at least one element."""
    for selector in candidates:
        if page.element_count(selector) > 0:
            return selector
    return None


def wait_for_first_selector(
    page: ListPage,
    candidates: Sequence[str],
    timeout: float,
    poll_interval: float = 0.5,
) -> Optional[str]:
    """Poll until one of the candidate selectors matches or timeout elapses."""
    deadline = time.monotonic() + timeout
    while True:
        selector = first_matching_selector(page, candidates)
        if selector is not None or time.monotonic() >= deadline:
            return selector
        page.wait(poll_interval)
