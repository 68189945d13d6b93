"""
Package entry point.

Allows running: python -m gmaps_list_extractor "https://maps.app.goo.gl/..."
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
