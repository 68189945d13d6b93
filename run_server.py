#!/usr/bin/env python
"""
Run the API Server

Starts the FastAPI server for saved list extraction.

Usage:
    python run_server.py

The server runs on http://localhost:8000

Endpoints:
    GET  /api/health        - Health check
    POST /api/parse-list    - Decode a list from page markup
    POST /api/extract-list  - Extract a list from its shared URL
"""

import uvicorn

from gmaps_list_extractor.config import API_HOST, API_PORT

uvicorn.run("gmaps_list_extractor.server:app", host=API_HOST, port=API_PORT, reload=False)
