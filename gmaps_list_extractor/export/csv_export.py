"""
CSV export.
"""

import csv
import logging
from pathlib import Path
from typing import Any, List, Sequence, Union

from ..config import CSV_COLUMNS
from ..models import PlaceRecord

logger = logging.getLogger(__name__)


def place_to_row(place: PlaceRecord, columns: Sequence[str] = CSV_COLUMNS) -> List[Any]:
    """One CSV row in column order; missing values become empty cells."""
    row = []
    for column in columns:
        value = getattr(place, column, None)
        row.append("" if value is None else value)
    return row


def write_csv(
    places: Sequence[PlaceRecord],
    path: Union[str, Path],
    columns: Sequence[str] = CSV_COLUMNS,
) -> Path:
    """Write places to a CSV file with a header row."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for place in places:
            writer.writerow(place_to_row(place, columns))
    logger.info(f"Wrote {len(places)} rows to {path}")
    return path
