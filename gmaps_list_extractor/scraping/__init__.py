"""
Scraping module for loading shared list pages.

- page.py: Page collaborator interface and selector helpers
- completeness.py: Scroll-and-stabilize loop for the dynamic list
- browser.py: Playwright implementation of the page collaborator
- http.py: Browserless page download

browser.py is not imported here so that Playwright is only loaded when a
browser is actually used.
"""

from .page import ListPage, first_matching_selector, wait_for_first_selector
from .completeness import CompletenessDetector, CompletenessOutcome, LoadState
from .http import fetch_list_markup
