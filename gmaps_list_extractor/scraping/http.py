"""
Plain HTTP list fetch.

Downloads the list page without a browser. The initialization payload is
part of the first HTML response, so this is enough for the embedded
entries; nothing is scrolled.
"""

import logging

import httpx

from ..config import NAVIGATION_TIMEOUT, REQUEST_HEADERS
from ..exceptions import NavigationError, NavigationTimeout

logger = logging.getLogger(__name__)


def fetch_list_markup(
    url: str,
    timeout: float = NAVIGATION_TIMEOUT,
    user_agent: str = None,
    client: httpx.Client = None,
) -> str:
    """
    Download the raw markup of a shared list page.

    Args:
        url: List URL (short maps.app.goo.gl links are followed)
        timeout: Request timeout in seconds
        user_agent: Override for the User-Agent header
        client: Optional pre-configured client (used by tests)

    Returns:
        Page HTML

    Raises:
        NavigationTimeout: If the request times out
        NavigationError: On transport errors or non-2xx responses
    """
    headers = dict(REQUEST_HEADERS)
    if user_agent:
        headers["User-Agent"] = user_agent

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    logger.info(f"Downloading {url}")
    try:
        response = client.get(url, headers=headers)
        response.raise_for_status()
        return response.text
    except httpx.TimeoutException as e:
        raise NavigationTimeout(f"Loading {url} took longer than {timeout:.0f}s") from e
    except httpx.HTTPStatusError as e:
        raise NavigationError(f"Loading {url} failed with HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise NavigationError(f"Failed to load {url}: {e}") from e
    finally:
        if owns_client:
            client.close()
