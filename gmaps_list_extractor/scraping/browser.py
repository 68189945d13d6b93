"""
Playwright Page Collaborator

Implements the ListPage interface on top of Playwright's sync API.

Usage:
    with open_list_page(config) as page:
        page.navigate("https://maps.app.goo.gl/...")
        markup = page.read_markup()
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..config import CLICK_TIMEOUT, NAVIGATION_TIMEOUT, NAVIGATION_WAIT_UNTIL
from ..config_manager import ExtractorConfig
from ..exceptions import NavigationError, NavigationTimeout

logger = logging.getLogger(__name__)

SCROLL_TO_BOTTOM_SCRIPT = """
selector => {
    const container = document.querySelector(selector);
    if (container) {
        container.scrollTo(0, container.scrollHeight);
    }
}
"""


class PlaywrightListPage:
    """ListPage backed by a Playwright Page.

    Args:
        page: An open Playwright page.
        navigation_timeout: Navigation timeout in seconds.
        click_timeout: Timeout for a single click in seconds.
    """

    def __init__(
        self,
        page: Page,
        navigation_timeout: float = NAVIGATION_TIMEOUT,
        click_timeout: float = CLICK_TIMEOUT,
    ):
        self._page = page
        self.navigation_timeout = navigation_timeout
        self.click_timeout = click_timeout

    def navigate(self, url: str, wait_until: str = NAVIGATION_WAIT_UNTIL) -> None:
        logger.info(f"Opening {url}")
        try:
            self._page.goto(url, wait_until=wait_until, timeout=self.navigation_timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(
                f"Loading {url} took longer than {self.navigation_timeout:.0f}s"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e.message}") from e

    def read_markup(self) -> str:
        return self._page.content()

    def element_count(self, selector: str) -> int:
        return self._page.locator(selector).count()

    def scroll_to_bottom(self, container_selector: str) -> None:
        self._page.evaluate(SCROLL_TO_BOTTOM_SCRIPT, container_selector)

    def click(self, selector: str) -> None:
        try:
            self._page.locator(selector).first.click(timeout=self.click_timeout * 1000)
        except PlaywrightError as e:
            # The completeness loop keeps going; a stuck control ends at the tick ceiling
            logger.warning(f"Could not click '{selector}': {e.message}")

    def wait(self, seconds: float) -> None:
        self._page.wait_for_timeout(seconds * 1000)


@contextmanager
def open_list_page(config: ExtractorConfig) -> Iterator[PlaywrightListPage]:
    """Launch Chromium and yield a PlaywrightListPage; the browser closes on exit."""
    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=config.headless)
            try:
                context = browser.new_context(locale=config.locale, user_agent=config.user_agent)
                page = context.new_page()
                yield PlaywrightListPage(page, navigation_timeout=config.navigation_timeout)
            finally:
                browser.close()
    except PlaywrightTimeoutError as e:
        raise NavigationTimeout(f"Browser operation timed out: {e.message}") from e
    except PlaywrightError as e:
        raise NavigationError(
            f"Browser automation failed: {e.message}. "
            "If Chromium is missing, run 'playwright install chromium'."
        ) from e
