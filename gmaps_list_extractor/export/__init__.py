"""
Export module for writing extracted lists.

- kml.py: KML 2.2 document for My Maps / Google Earth
- csv_export.py: Flat CSV, one row per place
- paths.py: Output file naming
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..models import ListExtractionResult
from .csv_export import place_to_row, write_csv
from .kml import build_kml, write_kml
from .paths import companion_path, resolve_kml_path, sanitize_file_name

logger = logging.getLogger(__name__)


def write_json(result: ListExtractionResult, path: Union[str, Path]) -> Path:
    """Dump the full result (metadata, statistics, places) as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote JSON to {path}")
    return path


def write_outputs(
    result: ListExtractionResult,
    kml_path: Union[str, Path, None] = None,
    write_csv_file: bool = True,
    json_path: Union[str, Path, None] = None,
) -> Dict[str, Optional[Path]]:
    """
    Write the KML file and, optionally, the companion CSV and a JSON dump.

    Returns:
        Dictionary with the 'kml', 'csv' and 'json' paths (None when skipped)
    """
    kml_file = resolve_kml_path(result.metadata.name, kml_path)
    written: Dict[str, Optional[Path]] = {"kml": write_kml(result.metadata, result.places, kml_file)}
    written["csv"] = write_csv(result.places, companion_path(kml_file, ".csv")) if write_csv_file else None
    written["json"] = write_json(result, json_path) if json_path else None
    return written
