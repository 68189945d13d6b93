"""
Parsers module for extracting saved lists from Google Maps pages.

- payload.py: Locate the initialization state array in page markup
- list_payload.py: Decode the list metadata and places from that array
"""

from .payload import locate_payload, find_array_end
from .list_payload import extract_list, find_list_node, parse_list_markup
