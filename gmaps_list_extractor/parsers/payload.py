"""
Initialization Payload Locator

Finds the JSON array assigned to window.APP_INITIALIZATION_STATE in the raw
page markup and returns it verbatim.

The markup looks like:
    <script>...;window.APP_INITIALIZATION_STATE=[[[...]],"...",...];window.APP_FLAGS=...</script>

A plain bracket count is not enough: place notes and names are user text and
may contain '[' or ']' inside quoted strings.
"""

from ..config import INITIALIZATION_STATE_MARKER
from ..exceptions import PayloadMalformed, PayloadNotFound


def find_array_end(text: str, start: int) -> int:
    """
    Walk from the '[' at text[start] to its matching ']'.

    Brackets inside double-quoted strings are ignored; backslash escapes
    inside strings are honoured.

    Returns:
        Index of the matching closing bracket, or -1 if the input ends first.
    """
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        char = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '[':
            depth += 1
        elif char == ']':
            depth -= 1
            if depth == 0:
                return i

    return -1


def locate_payload(markup: str, marker: str = INITIALIZATION_STATE_MARKER) -> str:
    """
    Extract the initialization state array from page markup.

    Args:
        markup: Raw HTML of the list page
        marker: Assignment token preceding the array

    Returns:
        The exact substring from the opening '[' to its matching ']'

    Raises:
        PayloadNotFound: If the marker (or an array after it) is absent
        PayloadMalformed: If the array is never closed
    """
    if not markup:
        raise PayloadNotFound("Page markup is empty")

    marker_index = markup.find(marker)
    if marker_index < 0:
        raise PayloadNotFound(f"Marker '{marker}' not found in page markup")

    start = markup.find('[', marker_index + len(marker))
    if start < 0:
        raise PayloadNotFound(f"No array follows marker '{marker}'")

    end = find_array_end(markup, start)
    if end < 0:
        raise PayloadMalformed(
            f"Initialization payload starting at offset {start} is never closed"
        )

    return markup[start:end + 1]
