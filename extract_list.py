#!/usr/bin/env python
"""
Google Maps Saved List Extractor - CLI

Extract a publicly shared list to KML and CSV.

Usage:
    python extract_list.py "https://maps.app.goo.gl/abc123"
    python extract_list.py "https://maps.app.goo.gl/abc123" --kml tokyo.kml --json tokyo.json
    python extract_list.py "https://maps.app.goo.gl/abc123" --no-enrich --no-browser

Enrichment needs a Places API key in GOOGLE_PLACES_API_KEY (or --api-key).
"""

import sys
from gmaps_list_extractor.cli import main

if __name__ == "__main__":
    sys.exit(main())
