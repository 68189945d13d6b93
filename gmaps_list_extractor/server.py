"""
FastAPI Server for Google Maps Saved List Extractor

Provides API endpoints for:
- Decoding list markup that was downloaded elsewhere
- Running the full extraction for a shared list URL
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .config import API_HOST, API_PORT
from .config_manager import ExtractorConfig
from .exceptions import (
    ConfigurationError,
    ListExtractorError,
    NavigationError,
    NavigationTimeout,
    PayloadMalformed,
    PayloadNotFound,
)
from .extraction.collector import collect_list
from .extractor import ListExtractor

logger = logging.getLogger(__name__)


# FastAPI app
app = FastAPI(title="Google Maps Saved List Extractor API", version=__version__)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request Models
class ParseListRequest(BaseModel):
    markup: str


class ExtractListRequest(BaseModel):
    url: str
    enrich: bool = False
    use_browser: bool = True


def to_http_error(error: ListExtractorError) -> HTTPException:
    """Map an extraction error to its HTTP status."""
    if isinstance(error, (PayloadNotFound, PayloadMalformed)):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, NavigationTimeout):
        return HTTPException(status_code=504, detail=str(error))
    if isinstance(error, NavigationError):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/api/parse-list")
def parse_list(request: ParseListRequest) -> Dict[str, Any]:
    """Decode a list from page markup. No network access."""
    try:
        result = collect_list(markup=request.markup, config=ExtractorConfig())
    except ListExtractorError as e:
        raise to_http_error(e)
    return {"success": True, **result.to_dict()}


@app.post("/api/extract-list")
def extract_list(request: ExtractListRequest) -> Dict[str, Any]:
    """Load a shared list URL and extract it, optionally enriching the places."""
    logger.info(f"Extract request for {request.url} (enrich={request.enrich}, browser={request.use_browser})")
    try:
        with ListExtractor(use_browser=request.use_browser) as extractor:
            result = extractor.extract(request.url, enrich=request.enrich)
    except ListExtractorError as e:
        raise to_http_error(e)
    return {"success": True, **result.to_dict()}


def run_server(host: str = API_HOST, port: int = API_PORT):
    """Run the API server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
