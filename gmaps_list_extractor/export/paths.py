"""
Output path resolution.

Without an explicit path, output files are named after the list, in the
current directory.
"""

import re
from pathlib import Path
from typing import Optional, Union

from ..config import DEFAULT_LIST_FILE_NAME

# Characters rejected by Windows or POSIX file systems, plus control characters
INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')


def sanitize_file_name(name: Optional[str], fallback: str = DEFAULT_LIST_FILE_NAME) -> str:
    """Turn a list name into a safe file name stem."""
    if not name:
        return fallback
    cleaned = INVALID_FILE_NAME_CHARS.sub("_", name).strip().strip(".")
    if not cleaned or not cleaned.strip("_"):
        return fallback
    return cleaned


def resolve_kml_path(list_name: Optional[str], explicit: Union[str, Path, None] = None) -> Path:
    """Absolute KML path: the explicit one, or '<sanitized list name>.kml'.

    An explicit path always ends in '.kml' ('out.csv' becomes 'out.kml'), so
    the companion CSV never lands on the KML file.
    """
    if explicit:
        path = Path(explicit).expanduser()
        if path.suffix.lower() != ".kml":
            path = path.with_suffix(".kml")
        return path.resolve()
    return (Path.cwd() / f"{sanitize_file_name(list_name)}.kml").resolve()


def companion_path(path: Union[str, Path], suffix: str) -> Path:
    """Same location and stem as path, different extension (e.g. '.csv')."""
    return Path(path).with_suffix(suffix)
